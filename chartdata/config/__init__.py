"""Engine configuration and input file loading."""
