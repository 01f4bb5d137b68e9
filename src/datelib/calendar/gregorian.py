from __future__ import annotations

from typing import Protocol, Sequence, Union

import numpy as np

from datelib.marker.marker import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    Marker,
)

from ._exceptions import CalendarError

IntLike = Union[int, "np.ndarray"]

# 1970-01-01 was a Thursday; weekdays count from Sunday = 0.
_EPOCH_WEEKDAY = 4


# ── field <-> millisecond conversion ─────────────────────────────────────────

def to_milliseconds(
    year: IntLike,
    month: IntLike = 1,
    day: IntLike = 1,
    hour: IntLike = 0,
    minute: IntLike = 0,
    second: IntLike = 0,
    ms: IntLike = 0,
) -> IntLike:
    """
    Milliseconds since 1970-01-01T00:00 for the given Gregorian fields.

    Months are 1-based. Every field may overflow or underflow: month 13 is
    January of the following year, February 31 is March 3 (or 2 in a leap
    year), hour 25 is 01:00 of the next day.
    """
    fields = (year, month, day, hour, minute, second, ms)
    scalar = all(np.ndim(f) == 0 for f in fields)
    y, mo, d, h, mi, s, f = (np.asarray(v, dtype=np.int64) for v in fields)

    # datetime64[M] counts months from 1970-01; floor semantics take care of
    # month overflow in both directions.
    months = (y - 1970) * 12 + (mo - 1)
    first_of_month = months.astype("datetime64[M]").astype("datetime64[D]")
    days = first_of_month.astype(np.int64) + (d - 1)

    total = (
        days * MS_PER_DAY
        + h * MS_PER_HOUR
        + mi * MS_PER_MINUTE
        + s * MS_PER_SECOND
        + f
    )
    return int(total) if scalar else total


def from_milliseconds(ms: IntLike) -> tuple[IntLike, ...]:
    """Inverse of to_milliseconds: (year, month, day, hour, minute, second, ms)."""
    scalar = np.ndim(ms) == 0
    t = np.asarray(ms, dtype=np.int64)

    days = np.floor_divide(t, MS_PER_DAY)
    rem = t - days * MS_PER_DAY

    d64 = days.astype("datetime64[D]")
    m64 = d64.astype("datetime64[M]")
    year = d64.astype("datetime64[Y]").astype(np.int64) + 1970
    month = m64.astype(np.int64) - (year - 1970) * 12 + 1
    day = days - m64.astype("datetime64[D]").astype(np.int64) + 1

    hour, rem = np.divmod(rem, MS_PER_HOUR)
    minute, rem = np.divmod(rem, MS_PER_MINUTE)
    second, milli = np.divmod(rem, MS_PER_SECOND)

    out = (year, month, day, hour, minute, second, milli)
    if scalar:
        return tuple(int(v) for v in out)
    return out


def weekday(ms: IntLike) -> IntLike:
    """Day of week, 0 = Sunday .. 6 = Saturday."""
    scalar = np.ndim(ms) == 0
    w = (np.floor_divide(np.asarray(ms, dtype=np.int64), MS_PER_DAY) + _EPOCH_WEEKDAY) % 7
    return int(w) if scalar else w


# ── calendar system capability ───────────────────────────────────────────────

class CalendarSystem(Protocol):
    """Capability a DateEnv needs from a calendar system."""

    def get_marker_year(self, m: Marker) -> int: ...
    def get_marker_month(self, m: Marker) -> int: ...
    def get_marker_day(self, m: Marker) -> int: ...
    def array_to_marker(self, fields: Sequence[int]) -> Marker: ...
    def marker_to_array(self, m: Marker) -> list[int]: ...
    def weekday(self, m: Marker) -> int: ...
    def week_of_year(self, m: Marker, dow: int, doy: int) -> int: ...


class GregorianCalendarSystem:
    """
    Proleptic Gregorian calendar on top of NumPy datetime64.
    Months are 1-based throughout.
    """

    name = "gregory"

    def get_marker_year(self, m: Marker) -> int:
        return from_milliseconds(m.ms)[0]

    def get_marker_month(self, m: Marker) -> int:
        return from_milliseconds(m.ms)[1]

    def get_marker_day(self, m: Marker) -> int:
        return from_milliseconds(m.ms)[2]

    def array_to_marker(self, fields: Sequence[int]) -> Marker:
        if len(fields) == 0:
            raise CalendarError("Field array must contain at least a year.")
        return Marker(to_milliseconds(*fields[:7]))

    def marker_to_array(self, m: Marker) -> list[int]:
        return list(from_milliseconds(m.ms))

    def weekday(self, m: Marker) -> int:
        return weekday(m.ms)

    # ── week numbering ───────────────────────────────────────────────────

    def week_of_year(self, m: Marker, dow: int, doy: int) -> int:
        """
        Week of year for weeks starting on weekday `dow`, where week 1 is the
        week containing January `7 + dow - doy`.

        US rules are dow=0, doy=6 (week 1 contains Jan 1); ISO 8601 rules are
        dow=1, doy=4 (week 1 contains the first Thursday).
        """
        year = self.get_marker_year(m)
        w = self._week_of_given_year(m, year, dow, doy)
        if w < 1:
            return self._week_of_given_year(m, year - 1, dow, doy)
        next_w = self._week_of_given_year(m, year + 1, dow, doy)
        if next_w >= 1:
            return min(w, next_w)
        return w

    def _week_of_given_year(self, m: Marker, year: int, dow: int, doy: int) -> int:
        first_week_start = to_milliseconds(year, 1, 1 + self._first_week_offset(year, dow, doy))
        day_start = m.ms - m.ms % MS_PER_DAY
        days = (day_start - first_week_start) // MS_PER_DAY
        return days // 7 + 1

    @staticmethod
    def _first_week_offset(year: int, dow: int, doy: int) -> int:
        # first-week day: the January date that is always in week 1
        fwd = 7 + dow - doy
        fwd_weekday = weekday(to_milliseconds(year, 1, fwd))
        fwdlw = (7 + fwd_weekday - dow) % 7
        return -fwdlw + fwd - 1

    def __repr__(self) -> str:
        return f"GregorianCalendarSystem(name={self.name!r})"


# ── registry ─────────────────────────────────────────────────────────────────

calendar_systems: dict[str, CalendarSystem] = {
    "gregory": GregorianCalendarSystem(),
}


def register_calendar_system(name: str, system: CalendarSystem) -> None:
    calendar_systems[name] = system


def create_calendar_system(name: str) -> CalendarSystem:
    try:
        return calendar_systems[name]
    except KeyError:
        raise CalendarError(f"Unknown calendar system {name!r}.") from None
