"""Shared pytest fixtures for doclisting tests."""

import json

import pytest

from doclisting.config import Settings
from doclisting.core.mappers import map_raw_records


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        test_path = str(item.fspath)

        if "/tests/unit/" in test_path or "\\tests\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in test_path or "\\tests\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)


# ============================================================================
# Directory payloads
# ============================================================================

DR_A = {
    "id": "1",
    "name": "Dr. A",
    "specialities": [{"name": "Dentist"}],
    "fees": "₹500",
    "experience": "13 Years",
    "video_consult": True,
    "in_clinic": False,
}

DR_B = {
    "id": "2",
    "name": "Dr. B",
    "specialities": [{"name": "Dentist"}, {"name": "ENT"}],
    "fees": "₹300",
    "experience": "5 Years",
    "video_consult": False,
    "in_clinic": True,
}


@pytest.fixture
def pair_payload():
    """The two-doctor directory used in the worked examples."""
    return [dict(DR_A), dict(DR_B)]


@pytest.fixture
def pair_records(pair_payload):
    return map_raw_records(pair_payload)


@pytest.fixture
def directory_payload():
    """A larger directory including malformed entries."""
    return [
        {
            "id": "111418",
            "name": "Dr. Kshitija Jagdale",
            "name_initials": "KJ",
            "doctor_introduction": "Dr. Kshitija Jagdale, BDS",
            "specialities": [{"name": "Dentist"}],
            "fees": "₹ 500",
            "experience": "13 Years of experience",
            "languages": ["English", "मराठी"],
            "clinic": {
                "name": "The Dent Inn Advanced Dental Clinic",
                "address": {"locality": "Wanowrie", "city": "Pune"},
            },
            "video_consult": True,
            "in_clinic": True,
        },
        {
            "id": "200",
            "name": "Dr. Rahul Sharma",
            "specialities": [{"name": "General Physician"}, {"name": "Dermatologist"}],
            "fees": "₹ 700",
            "experience": "8 Years of experience",
            "video_consult": True,
            "in_clinic": False,
        },
        {
            "id": "201",
            "name": "Dr. Priya Sharma",
            "specialities": [{"name": "Dermatologist"}],
            "fees": "Free first visit",
            "experience": "21 Years of experience",
            "video_consult": False,
            "in_clinic": True,
        },
        {
            "id": "202",
            "name": "Dr. Anil Mehta",
            "specialities": [],
            "fees": "₹ 300",
            "experience": "Fresher",
            "video_consult": True,
            "in_clinic": True,
        },
        {
            "id": "203",
            "name": "Dr. Neha Rao",
            "fees": None,
            "video_consult": False,
            "in_clinic": True,
        },
        {
            "id": "204",
            "name": "Dr. Vikram Iyer",
            "specialities": [{"name": "ENT"}, {"name": "Dentist"}],
            "fees": "₹ 300",
            "experience": "8 Years of experience",
            "video_consult": True,
            "in_clinic": True,
        },
    ]


@pytest.fixture
def directory_records(directory_payload):
    return map_raw_records(directory_payload)


@pytest.fixture
def directory_file(tmp_path, directory_payload):
    """The larger directory written to a JSON file."""
    path = tmp_path / "doctors.json"
    path.write_text(json.dumps(directory_payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def pair_file(tmp_path, pair_payload):
    path = tmp_path / "pair.json"
    path.write_text(json.dumps(pair_payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def settings():
    return Settings(source_url="https://directory.test/doctors.json", http_timeout=5)
