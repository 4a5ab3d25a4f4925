"""Logging setup for the chartdata CLI."""
