from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping

from datelib._units import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE, MS_PER_SECOND

logger = logging.getLogger(__name__)

# [-][D.]HH:MM[:SS[.fff]]
_TIME_STRING_RE = re.compile(r"(-?)(?:(\d+)\.)?(\d+):(\d\d)(?::(\d\d)(?:\.(\d\d\d))?)?")

# Accepted mapping keys → (internal field, multiplier).
_FIELD_ALIASES: dict[str, tuple[str, int]] = {
    "year": ("year", 1),
    "years": ("year", 1),
    "month": ("month", 1),
    "months": ("month", 1),
    "week": ("day", 7),
    "weeks": ("day", 7),
    "day": ("day", 1),
    "days": ("day", 1),
    "hour": ("time", MS_PER_HOUR),
    "hours": ("time", MS_PER_HOUR),
    "minute": ("time", MS_PER_MINUTE),
    "minutes": ("time", MS_PER_MINUTE),
    "second": ("time", MS_PER_SECOND),
    "seconds": ("time", MS_PER_SECOND),
    "millisecond": ("time", 1),
    "milliseconds": ("time", 1),
    "ms": ("time", 1),
}

_UNITS = ("year", "month", "day", "time")


@dataclass(frozen=True, slots=True)
class Duration:
    """
    Signed calendar quantity. `time` is in milliseconds.

    Fields are independent: Duration(month=1, day=-3) is valid and means
    "one month forward, then three days back".
    """

    year: int = 0
    month: int = 0
    day: int = 0
    time: int = 0

    @classmethod
    def parse(cls, input: str | Mapping[str, Any]) -> Duration | None:
        if isinstance(input, str):
            return _parse_string(input)
        if isinstance(input, Mapping):
            return _from_mapping(input)
        return None

    def __neg__(self) -> Duration:
        return multiply_duration(self, -1)

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return add_durations(self, other)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return subtract_durations(self, other)


# ── creation ─────────────────────────────────────────────────────────────────

def create_duration(input: Any, unit: str | None = None) -> Duration | None:
    """
    Build a Duration from a string, a mapping of fields, a number with a unit,
    or another Duration. Returns None when the input cannot be understood.
    """
    if isinstance(input, Duration):
        return input
    if isinstance(input, (int, float)) and not isinstance(input, bool):
        return _from_mapping({unit or "millisecond": input})
    return Duration.parse(input)


def _parse_string(s: str) -> Duration | None:
    m = _TIME_STRING_RE.fullmatch(s.strip())
    if m is None:
        logger.debug("Unparseable duration string %r", s)
        return None
    sign = -1 if m.group(1) else 1
    time = (
        int(m.group(3)) * MS_PER_HOUR
        + int(m.group(4)) * MS_PER_MINUTE
        + int(m.group(5) or 0) * MS_PER_SECOND
        + int(m.group(6) or 0)
    )
    return Duration(
        year=0,
        month=0,
        day=sign * int(m.group(2) or 0),
        time=sign * time,
    )


def _from_mapping(fields: Mapping[str, Any]) -> Duration | None:
    totals = dict.fromkeys(_UNITS, 0)
    for key, value in fields.items():
        if key not in _FIELD_ALIASES:
            logger.debug("Unknown duration field %r", key)
            return None
        if value is None:
            continue
        if (
            not isinstance(value, (int, float))
            or isinstance(value, bool)
            or not math.isfinite(value)
        ):
            logger.debug("Non-numeric value %r for duration field %r", value, key)
            return None
        target, factor = _FIELD_ALIASES[key]
        totals[target] += value * factor

    if totals["year"] % 1 or totals["month"] % 1:
        logger.debug("Fractional years or months in %r", fields)
        return None

    # a fractional day carries into time
    day_fraction, day = math.modf(totals["day"])
    time = totals["time"] + day_fraction * MS_PER_DAY
    return Duration(
        year=int(totals["year"]),
        month=int(totals["month"]),
        day=int(day),
        time=round(time) if isinstance(time, float) else int(time),
    )


# ── arithmetic ───────────────────────────────────────────────────────────────

def add_durations(d0: Duration, d1: Duration) -> Duration:
    return Duration(
        year=d0.year + d1.year,
        month=d0.month + d1.month,
        day=d0.day + d1.day,
        time=d0.time + d1.time,
    )


def subtract_durations(d0: Duration, d1: Duration) -> Duration:
    return Duration(
        year=d0.year - d1.year,
        month=d0.month - d1.month,
        day=d0.day - d1.day,
        time=d0.time - d1.time,
    )


def multiply_duration(d: Duration, n: int) -> Duration:
    return Duration(year=d.year * n, month=d.month * n, day=d.day * n, time=d.time * n)


def durations_equal(d0: Duration, d1: Duration) -> bool:
    return d0 == d1


def duration_has_time(d: Duration) -> bool:
    return bool(d.time)


# ── conversions ──────────────────────────────────────────────────────────────

def as_roughly_ms(d: Duration) -> float:
    return (
        d.year * 365 * MS_PER_DAY
        + d.month * 30 * MS_PER_DAY
        + d.day * MS_PER_DAY
        + d.time
    )


def as_roughly_days(d: Duration) -> float:
    return as_roughly_ms(d) / MS_PER_DAY


def as_roughly_months(d: Duration) -> float:
    return as_roughly_days(d) / 30


def as_roughly_years(d: Duration) -> float:
    return as_roughly_days(d) / 365


def as_clean_days(d: Duration) -> int:
    """Number of days if the duration is made of days only, else 0."""
    if not d.year and not d.month and not d.time:
        return d.day
    return 0


def whole_divide_durations(numerator: Duration, denominator: Duration) -> int | None:
    """
    How many times `denominator` fits exactly in `numerator`, or None when the
    two durations are not whole multiples of each other field by field.
    """
    result: int | None = None
    for unit in _UNITS:
        num = getattr(numerator, unit)
        den = getattr(denominator, unit)
        if den:
            if num % den:
                return None
            local = num // den
            if result is not None and result != local:
                return None
            result = local
        elif num:
            return None
    return result


def greatest_duration_denominator(d: Duration) -> tuple[str, int]:
    """Largest single unit that expresses `d` without a remainder."""
    ms = d.time
    if ms:
        if ms % MS_PER_SECOND:
            return "millisecond", ms
        if ms % MS_PER_MINUTE:
            return "second", ms // MS_PER_SECOND
        if ms % MS_PER_HOUR:
            return "minute", ms // MS_PER_MINUTE
        return "hour", ms // MS_PER_HOUR
    if d.day:
        return "day", d.day
    if d.month:
        return "month", d.month
    if d.year:
        return "year", d.year
    return "millisecond", 0
