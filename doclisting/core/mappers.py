"""
Mapping functions for doclisting.

Pure functions for transforming raw directory payloads into Records. Malformed
fields never raise; they degrade to empty or absent values.
"""

import re
from collections.abc import Iterable
from typing import Any

from ..utils.logging import get_logger
from .models import Clinic, Record

logger = get_logger(__name__)

_DIGIT_RUN = re.compile(r"[0-9]+")


def extract_number(descriptor: Any) -> int | None:
    """
    Extract the first run of decimal digits from a free-text descriptor.

    ``"₹ 500"`` gives 500, ``"13 Years of experience"`` gives 13. Returns None
    when the descriptor is missing, not a string, or has no digits.
    """
    if not isinstance(descriptor, str):
        return None

    match = _DIGIT_RUN.search(descriptor)
    if match is None:
        return None

    try:
        return int(match.group())
    except ValueError:
        # Digit run past the interpreter's int conversion limit
        return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


def extract_specialty_names(raw_specialties: Any) -> tuple[str, ...]:
    """Map a raw ``specialities`` value to a tuple of names."""
    if not isinstance(raw_specialties, list | tuple):
        return ()

    names = []
    for entry in raw_specialties:
        if isinstance(entry, dict):
            name = _as_text(entry.get("name"))
        else:
            name = _as_text(entry)

        if name and name.strip():
            names.append(name)

    return tuple(names)


def map_raw_clinic(raw_clinic: Any) -> Clinic | None:
    """Map a raw clinic object, flattening its address."""
    if not isinstance(raw_clinic, dict):
        return None

    address = raw_clinic.get("address")
    if not isinstance(address, dict):
        address = {}

    return Clinic(
        name=_as_text(raw_clinic.get("name")),
        locality=_as_text(address.get("locality")),
        city=_as_text(address.get("city")),
        address_line1=_as_text(address.get("address_line1")),
    )


def map_raw_record(raw: dict[str, Any]) -> Record:
    """Map a raw directory entry to a Record."""
    languages = raw.get("languages")
    if isinstance(languages, list | tuple):
        languages = tuple(lang for lang in languages if isinstance(lang, str))
    else:
        languages = ()

    return Record(
        id=_as_text(raw.get("id")) or "",
        name=_as_text(raw.get("name")) or "",
        specialties=extract_specialty_names(raw.get("specialities")),
        experience=_as_text(raw.get("experience")),
        fees=_as_text(raw.get("fees")),
        video_consult=bool(raw.get("video_consult")),
        in_clinic=bool(raw.get("in_clinic")),
        clinic=map_raw_clinic(raw.get("clinic")),
        name_initials=_as_text(raw.get("name_initials")),
        photo=_as_text(raw.get("photo")),
        introduction=_as_text(raw.get("doctor_introduction")),
        languages=languages,
    )


def map_raw_records(raw_records: Iterable[Any]) -> list[Record]:
    """Map a raw directory payload, skipping entries that are not objects."""
    records = []
    for index, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            logger.warning(
                "Skipping non-object directory entry",
                index=index,
                entry_type=type(raw).__name__,
            )
            continue
        records.append(map_raw_record(raw))

    return records
