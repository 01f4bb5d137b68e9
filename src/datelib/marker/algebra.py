from __future__ import annotations

from typing import Any

from datelib.duration import Duration

from .marker import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    MS_PER_WEEK,
    Marker,
)


def is_valid_marker(m: Any) -> bool:
    return isinstance(m, Marker)


def time_as_ms(m: Marker) -> int:
    """Milliseconds elapsed since the start of the marker's day."""
    return m.ms % MS_PER_DAY


# ── adding ───────────────────────────────────────────────────────────────────

def add_ms(m: Marker, n: int) -> Marker:
    return Marker(m.ms + n)


def add_days(m: Marker, n: int) -> Marker:
    return Marker(m.ms + n * MS_PER_DAY)


def add_weeks(m: Marker, n: int) -> Marker:
    return Marker(m.ms + n * MS_PER_WEEK)


# ── start-of ─────────────────────────────────────────────────────────────────

def _floor_to(m: Marker, unit_ms: int) -> Marker:
    return Marker(m.ms - m.ms % unit_ms)


def start_of_day(m: Marker) -> Marker:
    return _floor_to(m, MS_PER_DAY)


def start_of_hour(m: Marker) -> Marker:
    return _floor_to(m, MS_PER_HOUR)


def start_of_minute(m: Marker) -> Marker:
    return _floor_to(m, MS_PER_MINUTE)


def start_of_second(m: Marker) -> Marker:
    return _floor_to(m, MS_PER_SECOND)


# ── fractional diffs (sign follows b - a) ────────────────────────────────────

def diff_weeks(a: Marker, b: Marker) -> float:
    return (b.ms - a.ms) / MS_PER_WEEK


def diff_days(a: Marker, b: Marker) -> float:
    return (b.ms - a.ms) / MS_PER_DAY


def diff_hours(a: Marker, b: Marker) -> float:
    return (b.ms - a.ms) / MS_PER_HOUR


def diff_minutes(a: Marker, b: Marker) -> float:
    return (b.ms - a.ms) / MS_PER_MINUTE


def diff_seconds(a: Marker, b: Marker) -> float:
    return (b.ms - a.ms) / MS_PER_SECOND


# ── whole-unit diffs: None unless exact ──────────────────────────────────────

def diff_whole_days(a: Marker, b: Marker) -> int | None:
    if time_as_ms(a) != time_as_ms(b):
        return None
    return (b.ms - a.ms) // MS_PER_DAY


def diff_whole_weeks(a: Marker, b: Marker) -> int | None:
    days = diff_whole_days(a, b)
    if days is None or days % 7:
        return None
    return days // 7


def diff_day_and_time(a: Marker, b: Marker) -> Duration:
    """Whole calendar days between a and b plus the signed time-of-day delta."""
    a_day = start_of_day(a)
    b_day = start_of_day(b)
    return Duration(
        year=0,
        month=0,
        day=(b_day.ms - a_day.ms) // MS_PER_DAY,
        time=(b.ms - b_day.ms) - (a.ms - a_day.ms),
    )
