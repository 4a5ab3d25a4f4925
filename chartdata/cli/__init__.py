"""Command line interface for rendering query result files."""

from .__main__ import main

__all__ = ["main"]
