"""
Utility functions for doclisting.

Structured logging and exception handling.
"""

from . import exceptions, logging

__all__ = ["exceptions", "logging"]
