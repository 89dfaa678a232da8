"""
doclisting - Doctor directory browser

Fetches a doctor directory and narrows and orders it by name search,
consultation mode, specialty and sort key.
"""

from . import cli, clients, config, core, utils

__version__ = "0.1.0"
__all__ = ["cli", "clients", "config", "core", "utils"]
