"""
Command-line interface module for doclisting.

Typer CLI with Rich formatting.
"""

from .main import app

__all__ = ["app"]
