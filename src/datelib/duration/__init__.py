# src/datelib/duration/__init__.py
"""
datelib.duration
~~~~~~~~~~~~~~~~

Signed (year, month, day, time) quantities for calendar arithmetic.

Basic usage::

    from datelib.duration import create_duration

    create_duration("2.00:00:00")          # Duration(day=2)
    create_duration("01:02:03.500")        # Duration(time=3723500)
    create_duration({"month": 1, "hour": 4})
    create_duration(3, "week")             # Duration(day=21)

Unparseable input yields None rather than raising.
"""

from __future__ import annotations

from datelib.duration.duration import (
    Duration,
    add_durations,
    as_clean_days,
    as_roughly_days,
    as_roughly_months,
    as_roughly_ms,
    as_roughly_years,
    create_duration,
    duration_has_time,
    durations_equal,
    greatest_duration_denominator,
    multiply_duration,
    subtract_durations,
    whole_divide_durations,
)

__all__ = [
    "Duration",
    "add_durations",
    "as_clean_days",
    "as_roughly_days",
    "as_roughly_months",
    "as_roughly_ms",
    "as_roughly_years",
    "create_duration",
    "duration_has_time",
    "durations_equal",
    "greatest_duration_denominator",
    "multiply_duration",
    "subtract_durations",
    "whole_divide_durations",
]
