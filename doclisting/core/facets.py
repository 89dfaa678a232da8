"""
Facet extraction for doclisting.

The specialty facet is always derived from the current record collection.
"""

from collections import Counter
from collections.abc import Iterable

from .models import Record


def extract_specialties(records: Iterable[Record]) -> list[str]:
    """Return the distinct specialty names across records, sorted ascending."""
    return sorted({name for record in records for name in record.specialties})


def count_specialties(records: Iterable[Record]) -> dict[str, int]:
    """Count records per specialty, keyed in facet order."""
    counts = Counter(
        name for record in records for name in set(record.specialties)
    )
    return {name: counts[name] for name in sorted(counts)}


def filter_facets(facets: list[str], search: str) -> list[str]:
    """Narrow an already-derived facet list by case-insensitive substring."""
    if not search:
        return facets

    search_folded = search.casefold()
    return [facet for facet in facets if search_folded in facet.casefold()]
