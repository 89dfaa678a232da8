"""
Value types for doclisting.

Records are immutable once loaded; Criteria is a frozen, hashable value so a
(collection, criteria) pair can key a result cache.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ConsultationMode(str, Enum):
    """Consultation-mode selector."""

    ALL = "all"
    VIDEO = "video"
    CLINIC = "clinic"


class SortKey(str, Enum):
    """Result ordering."""

    NONE = "none"
    FEES = "fees"  # fee ascending, fee-less records last
    EXPERIENCE = "experience"  # years descending, missing counts as 0


class Clinic(BaseModel):
    """Clinic descriptor, used for display only."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    locality: str | None = None
    city: str | None = None
    address_line1: str | None = None


class Record(BaseModel):
    """A single doctor listing entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    specialties: tuple[str, ...] = ()
    experience: str | None = None
    fees: str | None = None
    video_consult: bool = False
    in_clinic: bool = False
    clinic: Clinic | None = None

    # Display-only fields
    name_initials: str | None = None
    photo: str | None = None
    introduction: str | None = None
    languages: tuple[str, ...] = ()


class Criteria(BaseModel):
    """The user-controlled filter and sort state at a point in time."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    mode: ConsultationMode = ConsultationMode.ALL
    specialties: frozenset[str] = Field(default_factory=frozenset)
    sort: SortKey = SortKey.NONE
