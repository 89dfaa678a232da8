"""
Criteria mutations for doclisting.

Each user action maps to exactly one function here; every function returns a
new Criteria and leaves its input untouched.
"""

from enum import Enum

from ..utils.exceptions import ValidationError
from .models import ConsultationMode, Criteria, SortKey


def _coerce(enum_type: type[Enum], value: Enum | str, field_name: str) -> Enum:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        raise ValidationError(
            f"Invalid {field_name}: {value!r}",
            field_name=field_name,
            field_value=value,
            allowed_values=[member.value for member in enum_type],
        ) from None


def set_query(criteria: Criteria, query: str) -> Criteria:
    """Replace the free-text name query."""
    return criteria.model_copy(update={"query": query})


def set_mode(criteria: Criteria, mode: ConsultationMode | str) -> Criteria:
    """Replace the consultation-mode selector."""
    mode = _coerce(ConsultationMode, mode, "mode")
    return criteria.model_copy(update={"mode": mode})


def toggle_specialty(criteria: Criteria, specialty: str) -> Criteria:
    """Add the specialty to the selection, or remove it if already selected."""
    selected = criteria.specialties ^ {specialty}
    return criteria.model_copy(update={"specialties": frozenset(selected)})


def set_sort(criteria: Criteria, sort: SortKey | str) -> Criteria:
    """Replace the sort key."""
    sort = _coerce(SortKey, sort, "sort")
    return criteria.model_copy(update={"sort": sort})


def reset_criteria() -> Criteria:
    """Criteria with every field at its default."""
    return Criteria()
