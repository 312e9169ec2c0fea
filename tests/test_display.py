"""Tests for display helpers that read either address representation."""

from donor_address.display import display_city, extract_city, format_full_address
from donor_address.models import EligibleRecord, StructuredAddress


class TestExtractCity:
    def test_second_to_last_segment(self):
        assert extract_city("Flat 4, Andheri, Mumbai, Maharashtra 400053") == "Mumbai"

    def test_last_segment_of_two(self):
        assert extract_city("12 MG Road, Pune") == "Pune"

    def test_state_name_removed(self):
        assert extract_city("12 MG Road, Pune Maharashtra - 411001") == "Pune"

    def test_state_only_falls_back_to_country(self):
        assert extract_city("12 MG Road, Maharashtra") == "India"

    def test_single_segment_falls_back(self):
        assert extract_city("Baner Pune Maharashtra") == "India"

    def test_empty(self):
        assert extract_city(None) == "India"
        assert extract_city("") == "India"


class TestDisplayCity:
    def test_prefers_structured_city(self):
        record = EligibleRecord(
            record_id=1,
            legacy_address="Flat 4, Andheri, Mumbai, Maharashtra 400053",
            structured_address=StructuredAddress(city="Andheri"),
        )
        assert display_city(record) == "Andheri"

    def test_falls_back_to_legacy(self):
        record = EligibleRecord(record_id=1, legacy_address="12 MG Road, Pune")
        assert display_city(record) == "Pune"


class TestFormatFullAddress:
    def test_structured(self):
        record = EligibleRecord(
            record_id=1,
            legacy_address="ignored",
            structured_address=StructuredAddress(line="12 MG Road", city="Pune", state="Maharashtra", pincode="411001"),
        )
        assert format_full_address(record) == "12 MG Road, Pune, Maharashtra, India, 411001"

    def test_skips_empty_parts(self):
        record = EligibleRecord(record_id=1, structured_address=StructuredAddress(city="Pune"))
        assert format_full_address(record) == "Pune, India"

    def test_structured_without_line_or_city_uses_legacy(self):
        record = EligibleRecord(
            record_id=1, legacy_address="Plot 4, 411038", structured_address=StructuredAddress(pincode="411038")
        )
        assert format_full_address(record) == "Plot 4, 411038"

    def test_nothing(self):
        assert format_full_address(EligibleRecord(record_id=1)) == ""
