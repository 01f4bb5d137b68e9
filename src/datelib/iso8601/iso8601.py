from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from datelib.calendar.gregorian import from_milliseconds, to_milliseconds
from datelib.marker.marker import Marker
from datelib.timezone.resolver import format_time_zone_offset

logger = logging.getLogger(__name__)

# YYYY[-MM[-DD[(T| )HH:MM[:SS[.f+]][Z|±HH[:MM]]]]], separators optional
_ISO_RE = re.compile(
    r"\s*(?P<year>\d{4})"
    r"(?:-?(?P<month>\d{2})"
    r"(?:-?(?P<day>\d{2})"
    r"(?:[T ](?P<hour>\d{2}):?(?P<minute>\d{2})"
    r"(?::?(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
    r"(?P<tz>Z|(?P<sign>[-+])(?P<tzh>\d{2})(?::?(?P<tzm>\d{2}))?)?"
    r")?)?)?"
)


@dataclass(frozen=True, slots=True)
class ParsedIso:
    marker: Marker
    is_time_unspecified: bool
    time_zone_offset: int | None  # minutes east of UTC, None when absent


def parse(s: str) -> ParsedIso | None:
    """
    Parse an ISO 8601 date/time string.

    The marker holds the literal wall-clock fields; any offset in the string
    is returned separately in time_zone_offset and is not applied.
    Malformed or out-of-range input yields None.
    """
    if not isinstance(s, str):
        return None
    m = _ISO_RE.fullmatch(s)
    if m is None:
        logger.debug("Unparseable ISO 8601 string %r", s)
        return None

    year = int(m["year"])
    month = int(m["month"] or 1)
    day = int(m["day"] or 1)
    hour = int(m["hour"] or 0)
    minute = int(m["minute"] or 0)
    second = int(m["second"] or 0)
    milli = int(m["fraction"][:3].ljust(3, "0")) if m["fraction"] else 0

    if hour > 23 or minute > 59 or second > 59:
        logger.debug("Time out of range in %r", s)
        return None

    ms = to_milliseconds(year, month, day, hour, minute, second, milli)
    if from_milliseconds(ms)[:3] != (year, month, day):
        logger.debug("Date out of range in %r", s)
        return None

    offset: int | None = None
    if m["sign"]:
        offset = int(m["tzh"]) * 60 + int(m["tzm"] or 0)
        if m["sign"] == "-":
            offset = -offset
    elif m["tz"]:
        offset = 0

    return ParsedIso(
        marker=Marker(ms),
        is_time_unspecified=m["hour"] is None,
        time_zone_offset=offset,
    )


def _format_year(year: int) -> str:
    if 0 <= year <= 9999:
        return f"{year:04d}"
    return f"{'-' if year < 0 else '+'}{abs(year):06d}"


def format_day_string(marker: Marker) -> str:
    year, month, day = from_milliseconds(marker.ms)[:3]
    return f"{_format_year(year)}-{month:02d}-{day:02d}"


def format_time_string(marker: Marker) -> str:
    _, _, _, hour, minute, second, milli = from_milliseconds(marker.ms)
    s = f"{hour:02d}:{minute:02d}:{second:02d}"
    if milli:
        s += f".{milli:03d}"
    return s


def build_iso_string(
    marker: Marker,
    time_zone_offset: int | None = None,
    omit_time: bool = False,
) -> str:
    """
    'YYYY-MM-DDTHH:MM:SS[.mmm]' followed by 'Z' for a zero offset, '±HH:MM'
    for any other offset, and nothing when the offset is None.
    """
    s = format_day_string(marker)
    if omit_time:
        return s
    s += "T" + format_time_string(marker)
    if time_zone_offset is None:
        return s
    if time_zone_offset == 0:
        return s + "Z"
    return s + format_time_zone_offset(time_zone_offset, iso=True)
