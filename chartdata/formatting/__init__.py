"""Display formatting of cell values and field labels."""
