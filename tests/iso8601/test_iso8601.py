"""
tests/iso8601/test_iso8601.py

Covers:
  - Date-only, date-time, fractional seconds
  - Offset forms (Z, ±HH:MM, ±HHMM, ±HH) reported but not applied
  - Compact and space-separated forms
  - Malformed and out-of-range input
  - Serialization with and without offsets
"""

from datetime import datetime, timedelta, timezone

import pytest

from datelib.iso8601 import (
    build_iso_string,
    format_day_string,
    format_time_string,
    parse,
)
from datelib.marker import Marker


# ── Helpers ───────────────────────────────────────────────────────────────────

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def marker(*args):
    return Marker((datetime(*args, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1))


# ── Parsing ───────────────────────────────────────────────────────────────────

class TestParse:

    def test_date_only(self):
        res = parse("2018-06-08")
        assert res.marker == marker(2018, 6, 8)
        assert res.is_time_unspecified is True
        assert res.time_zone_offset is None

    def test_date_time(self):
        res = parse("2018-06-08T00:00:00")
        assert res.marker == marker(2018, 6, 8)
        assert res.is_time_unspecified is False

    def test_without_seconds(self):
        assert parse("2018-06-08T13:45").marker == marker(2018, 6, 8, 13, 45)

    def test_fractional_seconds(self):
        assert parse("2018-06-08T13:45:10.5").marker == marker(2018, 6, 8, 13, 45, 10, 500_000)
        assert parse("2018-06-08T13:45:10.123456").marker == marker(2018, 6, 8, 13, 45, 10, 123_000)

    def test_year_and_month_only(self):
        res = parse("2018-06")
        assert res.marker == marker(2018, 6, 1)
        assert res.is_time_unspecified is True

    def test_space_separator(self):
        assert parse("2018-06-08 09:30:00").marker == marker(2018, 6, 8, 9, 30)

    def test_compact_form(self):
        assert parse("20180608T093000").marker == marker(2018, 6, 8, 9, 30)

    def test_leading_whitespace(self):
        assert parse("  2018-06-08").marker == marker(2018, 6, 8)

    def test_z_is_zero_offset(self):
        res = parse("2018-06-08T00:00:00Z")
        assert res.marker == marker(2018, 6, 8)
        assert res.time_zone_offset == 0

    def test_positive_offset_kept_separately(self):
        res = parse("2018-06-08T00:00:00+12:00")
        assert res.marker == marker(2018, 6, 8)
        assert res.time_zone_offset == 720
        assert res.is_time_unspecified is False

    def test_negative_offset(self):
        assert parse("2018-06-08T00:00:00-05:30").time_zone_offset == -330

    def test_offset_without_colon_or_minutes(self):
        assert parse("2018-06-08T00:00:00+0530").time_zone_offset == 330
        assert parse("2018-06-08T00:00:00-03").time_zone_offset == -180


class TestParseFailures:

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "nope",
            "18-06-08",
            "2018-06-08T",
            "2018-06-08T1",
            "2018-06-08T00:00:00+1",
            "2018-06-08 trailing",
        ],
    )
    def test_malformed_returns_none(self, text):
        assert parse(text) is None

    @pytest.mark.parametrize(
        "text",
        ["2018-13-01", "2018-00-10", "2018-02-30", "2018-06-00", "2018-06-08T24:00", "2018-06-08T12:60"],
    )
    def test_out_of_range_returns_none(self, text):
        assert parse(text) is None

    def test_non_string_returns_none(self):
        assert parse(20180608) is None


# ── Serialization ─────────────────────────────────────────────────────────────

class TestBuildIsoString:

    def test_utc(self):
        assert build_iso_string(marker(2018, 6, 8), 0) == "2018-06-08T00:00:00Z"

    def test_positive_offset(self):
        assert build_iso_string(marker(2018, 6, 8), 120) == "2018-06-08T00:00:00+02:00"

    def test_negative_offset(self):
        assert build_iso_string(marker(2018, 6, 8, 9, 5), -330) == "2018-06-08T09:05:00-05:30"

    def test_no_offset(self):
        assert build_iso_string(marker(2018, 6, 8)) == "2018-06-08T00:00:00"

    def test_milliseconds_only_when_present(self):
        assert build_iso_string(marker(2018, 6, 8, 1, 2, 3, 4_000), 0) == "2018-06-08T01:02:03.004Z"

    def test_omit_time(self):
        assert build_iso_string(marker(2018, 6, 8, 13), 0, omit_time=True) == "2018-06-08"

    def test_day_and_time_strings(self):
        m = marker(987, 1, 2, 3, 4, 5)
        assert format_day_string(m) == "0987-01-02"
        assert format_time_string(m) == "03:04:05"

    def test_parse_then_build(self):
        res = parse("2018-06-08T13:45:10.250+12:00")
        assert build_iso_string(res.marker, res.time_zone_offset) == "2018-06-08T13:45:10.250+12:00"
