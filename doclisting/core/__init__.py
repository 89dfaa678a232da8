"""
Core logic for doclisting.

Pure functional implementations of record mapping, facet extraction,
filtering and sorting, plus the browsing session built on them.
"""

from . import criteria, facets, filters, mappers, models, query, session

__all__ = ["criteria", "facets", "filters", "mappers", "models", "query", "session"]
