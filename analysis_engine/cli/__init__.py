"""Command line front end for the analysis engine."""

from .app import main

__all__ = ["main"]
