"""
Query engine for doclisting.

Turns a record collection and a Criteria value into the ordered result list:
name filter, consultation-mode filter, specialty filter, then sort.
"""

import math
from collections.abc import Sequence

from .filters import apply_filters, build_filters
from .mappers import extract_number
from .models import Criteria, Record, SortKey

# Records without a parseable fee sort after every real fee.
FEE_SENTINEL = math.inf


def fee_sort_key(record: Record) -> float:
    """Numeric fee of a record, or the sentinel when absent."""
    fee = extract_number(record.fees)
    return FEE_SENTINEL if fee is None else fee


def experience_years(record: Record) -> int:
    """Years of experience of a record, 0 when absent."""
    return extract_number(record.experience) or 0


def sort_records(records: Sequence[Record], sort_key: SortKey) -> list[Record]:
    """Order records by the sort key. Ties keep their input order."""
    if sort_key == SortKey.FEES:
        return sorted(records, key=fee_sort_key)
    if sort_key == SortKey.EXPERIENCE:
        return sorted(records, key=lambda record: -experience_years(record))

    return list(records)


def run_query(records: Sequence[Record], criteria: Criteria) -> list[Record]:
    """Filter and order records according to criteria."""
    filtered = apply_filters(list(records), build_filters(criteria))
    return sort_records(filtered, criteria.sort)
