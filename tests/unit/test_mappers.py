"""Tests for raw payload mapping and numeric extraction."""

import pytest

from doclisting.core.mappers import (
    extract_number,
    extract_specialty_names,
    map_raw_clinic,
    map_raw_record,
    map_raw_records,
)


class TestExtractNumber:
    """Tests for extract_number."""

    @pytest.mark.parametrize(
        "descriptor, expected",
        [
            ("₹ 500", 500),
            ("₹500", 500),
            ("13 Years of experience", 13),
            ("Rs.1200 per visit", 1200),
            ("0 Years", 0),
        ],
    )
    def test_extracts_leading_digits(self, descriptor, expected):
        assert extract_number(descriptor) == expected

    def test_only_first_digit_run_is_used(self):
        """Digits after the first run are ignored."""
        assert extract_number("10 to 15 years") == 10
        assert extract_number("₹1,500") == 1

    @pytest.mark.parametrize("descriptor", [None, "", "Fresher", "Free", 500, ["1"]])
    def test_absent_when_no_digits(self, descriptor):
        assert extract_number(descriptor) is None

    def test_overlong_digit_run_is_absent(self):
        assert extract_number("₹ " + "9" * 5000) is None


class TestExtractSpecialtyNames:
    """Tests for extract_specialty_names."""

    def test_objects_with_name(self):
        raw = [{"name": "Dentist"}, {"name": "ENT"}]
        assert extract_specialty_names(raw) == ("Dentist", "ENT")

    def test_bare_strings_are_accepted(self):
        assert extract_specialty_names(["Dentist"]) == ("Dentist",)

    def test_unusable_entries_are_dropped(self):
        raw = [{"name": ""}, {"title": "x"}, None, {"name": "  "}, {"name": "ENT"}]
        assert extract_specialty_names(raw) == ("ENT",)

    @pytest.mark.parametrize("raw", [None, "Dentist", {"name": "Dentist"}, 3])
    def test_non_list_gives_empty(self, raw):
        assert extract_specialty_names(raw) == ()


class TestMapRawRecord:
    """Tests for map_raw_record."""

    def test_full_record(self, directory_payload):
        record = map_raw_record(directory_payload[0])

        assert record.id == "111418"
        assert record.name == "Dr. Kshitija Jagdale"
        assert record.specialties == ("Dentist",)
        assert record.fees == "₹ 500"
        assert record.experience == "13 Years of experience"
        assert record.video_consult is True
        assert record.in_clinic is True
        assert record.name_initials == "KJ"
        assert record.introduction == "Dr. Kshitija Jagdale, BDS"
        assert record.languages == ("English", "मराठी")
        assert record.clinic.name == "The Dent Inn Advanced Dental Clinic"
        assert record.clinic.locality == "Wanowrie"
        assert record.clinic.city == "Pune"

    def test_missing_fields_degrade(self):
        record = map_raw_record({})

        assert record.id == ""
        assert record.name == ""
        assert record.specialties == ()
        assert record.fees is None
        assert record.experience is None
        assert record.video_consult is False
        assert record.in_clinic is False
        assert record.clinic is None

    def test_numeric_id_becomes_string(self):
        assert map_raw_record({"id": 42, "name": "Dr. X"}).id == "42"

    def test_clinic_without_address(self):
        clinic = map_raw_clinic({"name": "City Clinic", "address": "nowhere"})

        assert clinic.name == "City Clinic"
        assert clinic.locality is None

    def test_records_are_immutable(self):
        record = map_raw_record({"id": "1", "name": "Dr. X"})

        with pytest.raises(Exception):
            record.name = "Dr. Y"


class TestMapRawRecords:
    """Tests for map_raw_records."""

    def test_skips_non_objects(self):
        records = map_raw_records([{"id": "1", "name": "Dr. X"}, "junk", 3, None])

        assert [record.id for record in records] == ["1"]

    def test_preserves_order(self, directory_payload):
        records = map_raw_records(directory_payload)

        assert [record.id for record in records] == [
            raw["id"] for raw in directory_payload
        ]
