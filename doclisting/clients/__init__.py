"""
Record source clients.

Functional approach to client implementations with async functions.
"""

from . import directory

__all__ = ["directory"]
