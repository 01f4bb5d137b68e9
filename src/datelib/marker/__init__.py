# src/datelib/marker/__init__.py
"""
datelib.marker
~~~~~~~~~~~~~~

Markers and calendar-independent marker arithmetic.

A Marker is a wall-clock instant stored as milliseconds with no UTC offset
attached.  Everything here works in plain millisecond space; operations that
need calendar fields (years, months, weeks) live on DateEnv.

Whole-unit diffs return None when the markers are not an exact number of
units apart::

    from datelib.marker import Marker, diff_whole_days

    diff_whole_days(a, b)     # 14, -14 or None
"""

from __future__ import annotations

from datelib.marker.marker import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    MS_PER_WEEK,
    Marker,
)
from datelib.marker.algebra import (
    add_days,
    add_ms,
    add_weeks,
    diff_day_and_time,
    diff_days,
    diff_hours,
    diff_minutes,
    diff_seconds,
    diff_weeks,
    diff_whole_days,
    diff_whole_weeks,
    is_valid_marker,
    start_of_day,
    start_of_hour,
    start_of_minute,
    start_of_second,
    time_as_ms,
)

__all__ = [
    "MS_PER_DAY",
    "MS_PER_HOUR",
    "MS_PER_MINUTE",
    "MS_PER_SECOND",
    "MS_PER_WEEK",
    "Marker",
    "add_days",
    "add_ms",
    "add_weeks",
    "diff_day_and_time",
    "diff_days",
    "diff_hours",
    "diff_minutes",
    "diff_seconds",
    "diff_weeks",
    "diff_whole_days",
    "diff_whole_weeks",
    "is_valid_marker",
    "start_of_day",
    "start_of_hour",
    "start_of_minute",
    "start_of_second",
    "time_as_ms",
]
