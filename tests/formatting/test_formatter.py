"""
tests/formatting/test_formatter.py

Covers:
  - FormatterConfig validation and mapping input (camelCase keys accepted)
  - Single-marker rendering in "en", "en-gb" and "de"
  - 12/24-hour clocks and omitZeroMinute
  - Week number rendering
  - Range collapsing (day, month, year, numeric, weekday, time)
  - Separator precedence
  - Function formatters
  - Locale lookup and fallback
"""

from datetime import datetime, timedelta, timezone

import pytest

from datelib.env import DateEnv
from datelib.formatting import (
    FormatInfo,
    FormatterConfig,
    FuncFormatter,
    Locale,
    NativeFormatter,
    compute_marker_diff_severity,
    create_formatter,
    find_common_insertion,
    get_locale,
)
from datelib.marker import Marker


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def env():
    return DateEnv(time_zone="UTC", locale="en")


@pytest.fixture
def de_env():
    return DateEnv(time_zone="UTC", locale="de")


@pytest.fixture
def gb_env():
    return DateEnv(time_zone="UTC", locale="en-gb")


@pytest.fixture
def long_date():
    return create_formatter(day="numeric", month="long", year="numeric")


# ── Helpers ───────────────────────────────────────────────────────────────────

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def marker(*args):
    return Marker((datetime(*args, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1))


# ── FormatterConfig ───────────────────────────────────────────────────────────

class TestFormatterConfig:

    def test_invalid_style_raises(self):
        with pytest.raises(ValueError):
            FormatterConfig(month="enormous")

    def test_unknown_option_raises(self):
        with pytest.raises(ValueError):
            FormatterConfig.from_mapping({"colour": "red"})

    def test_camel_case_keys(self):
        cfg = FormatterConfig.from_mapping({"timeZoneName": "short", "omitZeroMinute": True})
        assert cfg.time_zone_name == "short"
        assert cfg.omit_zero_minute is True

    def test_date_fields(self):
        cfg = FormatterConfig(year="numeric", hour="numeric", separator=" to ")
        assert cfg.date_fields() == {"year": "numeric", "hour": "numeric"}

    def test_create_formatter_inputs(self):
        assert isinstance(create_formatter(FormatterConfig(year="numeric")), NativeFormatter)
        assert isinstance(create_formatter({"year": "numeric"}), NativeFormatter)
        assert isinstance(create_formatter(year="numeric"), NativeFormatter)
        assert isinstance(create_formatter(lambda info: "x"), FuncFormatter)

    def test_create_formatter_rejects_garbage(self):
        with pytest.raises(ValueError):
            create_formatter(42)


# ── Single markers ────────────────────────────────────────────────────────────

class TestFormatDate:

    def test_long_date(self, env, long_date):
        assert env.format(marker(2018, 6, 8), long_date) == "June 8, 2018"

    def test_pretty_with_weekday_and_zone(self, env):
        fmt = create_formatter(
            weekday="long", day="numeric", month="long", year="numeric", timeZoneName="short"
        )
        assert env.format(marker(2018, 6, 8), fmt) == "Friday, June 8, 2018, UTC"

    def test_month_and_year(self, env):
        assert env.format(marker(2018, 6, 8), {"month": "long", "year": "numeric"}) == "June 2018"

    def test_month_and_day(self, env):
        assert env.format(marker(2018, 6, 8), {"month": "short", "day": "numeric"}) == "Jun 8"

    def test_numeric(self, env):
        fmt = {"month": "numeric", "day": "numeric", "year": "numeric"}
        assert env.format(marker(2018, 6, 8), fmt) == "6/8/2018"

    def test_two_digit(self, env):
        fmt = {"month": "2-digit", "day": "2-digit", "year": "2-digit"}
        assert env.format(marker(2018, 6, 8), fmt) == "06/08/18"

    def test_narrow_weekday(self, env):
        assert env.format(marker(2018, 6, 8), {"weekday": "narrow"}) == "F"

    def test_zone_only(self, env):
        assert env.format(marker(2018, 6, 8), {"timeZoneName": "long"}) == (
            "Coordinated Universal Time"
        )


class TestFormatTime:

    def test_12_hour(self, env):
        fmt = {"hour": "numeric", "minute": "2-digit"}
        assert env.format(marker(2018, 6, 8, 9, 30), fmt) == "9:30 AM"
        assert env.format(marker(2018, 6, 8, 0, 5), fmt) == "12:05 AM"
        assert env.format(marker(2018, 6, 8, 12), fmt) == "12:00 PM"

    def test_omit_zero_minute(self, env):
        fmt = {"hour": "numeric", "minute": "2-digit", "omitZeroMinute": True}
        assert env.format(marker(2018, 6, 8, 15), fmt) == "3 PM"
        assert env.format(marker(2018, 6, 8, 15, 30), fmt) == "3:30 PM"

    def test_24_hour_override(self, env):
        fmt = {"hour": "numeric", "minute": "2-digit", "hour12": False}
        assert env.format(marker(2018, 6, 8, 14, 5), fmt) == "14:05"

    def test_with_seconds(self, env):
        fmt = {"hour": "numeric", "minute": "2-digit", "second": "2-digit"}
        assert env.format(marker(2018, 6, 8, 9, 3, 7), fmt) == "9:03:07 AM"

    def test_date_time_and_zone(self, env):
        fmt = {
            "month": "long",
            "day": "numeric",
            "hour": "numeric",
            "minute": "2-digit",
            "timeZoneName": "short",
        }
        assert env.format(marker(2018, 6, 8, 9, 30), fmt) == "June 8, 9:30 AM UTC"


class TestWeekNumbers:

    def test_styles(self, env):
        m = marker(2018, 6, 8)
        assert env.format(m, {"week": "numeric"}) == "23"
        assert env.format(m, {"week": "narrow"}) == "Wk23"
        assert env.format(m, {"week": "short"}) == "Wk 23"

    def test_german_week_text(self, de_env):
        assert de_env.format(marker(2018, 6, 8), {"week": "short"}) == "KW 23"


class TestOtherLocales:

    def test_german_long(self, de_env):
        fmt = {"weekday": "long", "day": "numeric", "month": "long", "year": "numeric"}
        assert de_env.format(marker(2018, 6, 8), fmt) == "Freitag, 8. Juni 2018"

    def test_german_numeric(self, de_env):
        fmt = {"day": "numeric", "month": "numeric", "year": "numeric"}
        assert de_env.format(marker(2018, 6, 8), fmt) == "8.6.2018"

    def test_british_long(self, gb_env, long_date):
        assert gb_env.format(marker(2018, 6, 8), long_date) == "8 June 2018"

    def test_british_24_hour(self, gb_env):
        fmt = {"hour": "numeric", "minute": "2-digit"}
        assert gb_env.format(marker(2018, 6, 8, 14, 5), fmt) == "14:05"


# ── Ranges ────────────────────────────────────────────────────────────────────

class TestFormatRange:

    def test_same_month(self, env, long_date):
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), long_date) == (
            "June 8 - 9, 2018"
        )

    def test_different_months(self, env, long_date):
        assert env.format_range(marker(2018, 6, 8), marker(2018, 7, 9), long_date) == (
            "June 8 - July 9, 2018"
        )

    def test_different_years(self, env, long_date):
        assert env.format_range(marker(2018, 6, 8), marker(2020, 7, 9), long_date) == (
            "June 8, 2018 - July 9, 2020"
        )

    def test_identical_renderings_collapse(self, env):
        fmt = {"month": "long", "year": "numeric"}
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), fmt) == "June 2018"

    def test_equal_markers(self, env, long_date):
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 8), long_date) == "June 8, 2018"

    def test_numeric_dates_never_collapse(self, env):
        fmt = {"month": "numeric", "day": "numeric", "year": "numeric"}
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), fmt) == (
            "6/8/2018 - 6/9/2018"
        )

    def test_weekday_prevents_collapse(self, env):
        fmt = {"weekday": "long", "month": "long", "day": "numeric", "year": "numeric"}
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), fmt) == (
            "Friday, June 8, 2018 - Saturday, June 9, 2018"
        )

    def test_times_on_same_day(self, env):
        fmt = {"hour": "numeric", "minute": "2-digit"}
        assert env.format_range(marker(2018, 6, 8, 9), marker(2018, 6, 8, 10, 30), fmt) == (
            "9:00 AM - 10:30 AM"
        )

    def test_german_same_month(self, de_env, long_date):
        assert de_env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), long_date) == (
            "8 - 9. Juni 2018"
        )

    def test_end_exclusive(self, env, long_date):
        assert env.format_range(
            marker(2018, 6, 8), marker(2018, 6, 10), long_date, is_end_exclusive=True
        ) == "June 8 - 9, 2018"


class TestSeparator:

    def test_argument_wins(self, long_date):
        env = DateEnv(time_zone="UTC", default_separator=" | ")
        assert env.format_range(
            marker(2018, 6, 8), marker(2018, 6, 9), long_date, separator=" to "
        ) == "June 8 to 9, 2018"

    def test_config_before_env_default(self):
        env = DateEnv(time_zone="UTC", default_separator=" | ")
        fmt = create_formatter(day="numeric", month="long", year="numeric", separator=" ~ ")
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), fmt) == "June 8 ~ 9, 2018"

    def test_env_default(self, long_date):
        env = DateEnv(time_zone="UTC", default_separator=" | ")
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), long_date) == (
            "June 8 | 9, 2018"
        )


# ── Building blocks ───────────────────────────────────────────────────────────

class TestRangeHelpers:

    def test_diff_severity(self, env):
        assert compute_marker_diff_severity(marker(2018, 6, 8), marker(2019, 6, 8), env) == 5
        assert compute_marker_diff_severity(marker(2018, 6, 8), marker(2018, 7, 8), env) == 4
        assert compute_marker_diff_severity(marker(2018, 6, 8), marker(2018, 6, 9), env) == 2
        assert compute_marker_diff_severity(marker(2018, 6, 8), marker(2018, 6, 8, 1), env) == 1
        assert compute_marker_diff_severity(marker(2018, 6, 8), marker(2018, 6, 8), env) == 0

    def test_common_insertion(self):
        assert find_common_insertion("June 8, 2018", "8", "June 9, 2018", "9") == (
            "June ",
            ", 2018",
        )

    def test_no_common_insertion(self):
        assert find_common_insertion("a 8 b", "8", "c 9 d", "9") is None
        assert find_common_insertion("a", "", "b", "") is None


# ── Function formatters ───────────────────────────────────────────────────────

class TestFuncFormatter:

    def test_receives_fields(self, env):
        seen = []

        def fmt(info: FormatInfo) -> str:
            seen.append(info)
            return f"{info.date.year}/{info.date.month}"

        assert env.format(marker(2018, 6, 8), create_formatter(fmt)) == "2018/6"
        info = seen[0]
        assert info.end is None
        assert info.time_zone == "UTC"
        assert info.locale_code == "en"
        assert info.date.time_zone_offset == 0

    def test_range(self, env):
        fmt = create_formatter(lambda info: f"{info.start.day}{info.separator}{info.end.day}")
        assert env.format_range(marker(2018, 6, 8), marker(2018, 6, 9), fmt) == "8 - 9"

    def test_forced_offset_visible(self, env):
        fmt = create_formatter(lambda info: str(info.date.time_zone_offset))
        assert env.format(marker(2018, 6, 8), fmt, forced_tzo=720) == "720"


# ── Locales ───────────────────────────────────────────────────────────────────

class TestLocales:

    def test_exact(self):
        assert get_locale("de").code == "de"

    def test_case_and_underscore(self):
        assert get_locale("EN_GB").code == "en-gb"

    def test_language_fallback(self):
        assert get_locale("de-AT").code == "de"

    def test_english_fallback(self):
        assert get_locale("xx").code == "en"

    def test_locale_instance_passthrough(self):
        loc = get_locale("en")
        assert get_locale(loc) is loc

    def test_bad_locale_raises(self):
        with pytest.raises(ValueError):
            Locale(
                code="bad",
                month_names=("x",),
                month_names_short=("x",),
                weekday_names=("y",) * 7,
                weekday_names_short=("y",) * 7,
            )
