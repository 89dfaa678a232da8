"""
Filtering functions for doclisting.

Pure functions for narrowing a record collection. Each stage preserves the
relative order of the records it keeps, and the stages commute.
"""

from collections.abc import Callable, Collection, Sequence

from .models import ConsultationMode, Criteria, Record

RecordFilter = Callable[[list[Record]], list[Record]]


def filter_by_name(records: list[Record], query: str) -> list[Record]:
    """Keep records whose name contains the query, ignoring case."""
    if not query:
        return records

    query_folded = query.casefold()

    return [record for record in records if query_folded in record.name.casefold()]


def filter_by_consultation_mode(
    records: list[Record], mode: ConsultationMode
) -> list[Record]:
    """Keep records offering the selected consultation mode."""
    if mode == ConsultationMode.VIDEO:
        return [record for record in records if record.video_consult]
    if mode == ConsultationMode.CLINIC:
        return [record for record in records if record.in_clinic]

    return records


def filter_by_specialties(
    records: list[Record], selected: Collection[str]
) -> list[Record]:
    """Keep records carrying at least one of the selected specialties."""
    if not selected:
        return records

    selected_set = frozenset(selected)

    return [
        record
        for record in records
        if any(name in selected_set for name in record.specialties)
    ]


def apply_filters(
    records: list[Record], filters: Sequence[RecordFilter]
) -> list[Record]:
    """Apply a series of filter functions to records."""
    result = records
    for filter_func in filters:
        result = filter_func(result)
    return result


def create_name_filter(query: str) -> RecordFilter:
    """Create a name filter function."""
    return lambda records: filter_by_name(records, query)


def create_mode_filter(mode: ConsultationMode) -> RecordFilter:
    """Create a consultation-mode filter function."""
    return lambda records: filter_by_consultation_mode(records, mode)


def create_specialty_filter(selected: Collection[str]) -> RecordFilter:
    """Create a specialty filter function."""
    return lambda records: filter_by_specialties(records, selected)


def build_filters(criteria: Criteria) -> list[RecordFilter]:
    """Build the three filter stages for a criteria value."""
    return [
        create_name_filter(criteria.query),
        create_mode_filter(criteria.mode),
        create_specialty_filter(criteria.specialties),
    ]
