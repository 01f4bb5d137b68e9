from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from numbers import Integral
from typing import Any, Callable, Mapping

import numpy as np

from datelib.calendar.gregorian import CalendarSystem, create_calendar_system
from datelib.duration.duration import (
    Duration,
    as_roughly_days,
    as_roughly_months,
    as_roughly_ms,
    as_roughly_years,
    multiply_duration,
)
from datelib.formatting.formatter import DateFormatter, create_formatter
from datelib.formatting.locale import Locale, get_locale
from datelib.iso8601.iso8601 import build_iso_string, format_day_string, parse
from datelib.marker.algebra import (
    add_ms,
    diff_hours,
    diff_minutes,
    diff_seconds,
    diff_whole_days,
    diff_whole_weeks,
    start_of_day,
    start_of_hour,
    start_of_minute,
    start_of_second,
    time_as_ms,
)
from datelib.marker.marker import MS_PER_DAY, MS_PER_MINUTE, Marker
from datelib.timezone.resolver import LOCAL, TimeZoneResolver, format_time_zone_offset
from datelib.timezone.zones import LocalZone, NamedTimeZoneProvider

logger = logging.getLogger(__name__)

_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


# ── week number calculation ──────────────────────────────────────────────────

class WeekNumberKind(Enum):
    LOCAL = "local"
    ISO = "ISO"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class WeekNumberCalculation:
    kind: WeekNumberKind
    func: Callable[[datetime], int] | None = None

    @classmethod
    def from_option(cls, value: Any) -> WeekNumberCalculation:
        if isinstance(value, cls):
            return value
        if value is None or value == "local":
            return cls(WeekNumberKind.LOCAL)
        if value == "ISO":
            return cls(WeekNumberKind.ISO)
        if callable(value):
            return cls(WeekNumberKind.CUSTOM, value)
        raise ValueError(
            f"week_number_calculation must be 'local', 'ISO' or a callable; got {value!r}."
        )


# ── settings / results ───────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class DateEnvSettings:
    time_zone: str = LOCAL
    calendar_system: str = "gregory"
    locale: Locale | str = "en"
    first_day: int | None = None
    week_number_calculation: Any = "local"
    local_zone: LocalZone | None = None
    named_time_zone_provider: NamedTimeZoneProvider | None = None
    default_separator: str | None = None


@dataclass(frozen=True, slots=True)
class MarkerMeta:
    marker: Marker
    is_time_unspecified: bool = False
    forced_time_zone_offset: int | None = None


# ── the environment ──────────────────────────────────────────────────────────

class DateEnv:
    """
    Binds a time zone, calendar system, locale and week rules, and routes all
    marker creation, arithmetic and formatting through them.

    Markers hold wall-clock time in the configured zone. Offsets are only
    looked up when parsing a string with an explicit offset and when
    producing output.
    """

    def __init__(self, settings: DateEnvSettings | None = None, **options: Any) -> None:
        if settings is None:
            settings = DateEnvSettings(**options)
        elif options:
            raise ValueError("Pass either a DateEnvSettings or keyword options, not both.")

        if settings.first_day is not None and settings.first_day not in range(7):
            raise ValueError(f"first_day must be in 0..6; got {settings.first_day!r}.")

        self._settings = settings
        self._calendar_system: CalendarSystem = create_calendar_system(settings.calendar_system)
        self._locale: Locale = get_locale(settings.locale)
        self._week_number_calculation = WeekNumberCalculation.from_option(
            settings.week_number_calculation
        )
        self._resolver = TimeZoneResolver(
            settings.time_zone,
            local_zone=settings.local_zone,
            named_provider=settings.named_time_zone_provider,
        )
        self._local_resolver = TimeZoneResolver(LOCAL, local_zone=settings.local_zone)

        # first_day moves the start of the week; ISO numbering stays Monday-based
        dow, doy = self._locale.week_dow, self._locale.week_doy
        if self._week_number_calculation.kind is WeekNumberKind.ISO:
            dow, doy = 1, 4
            self._numbering_dow = dow
        else:
            self._numbering_dow = dow if settings.first_day is None else settings.first_day
        self._week_dow = dow if settings.first_day is None else settings.first_day
        self._week_doy = doy

    # ── properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> DateEnvSettings:
        return self._settings

    @property
    def time_zone(self) -> str:
        return self._resolver.time_zone

    @property
    def calendar_system(self) -> CalendarSystem:
        return self._calendar_system

    @property
    def locale(self) -> Locale:
        return self._locale

    @property
    def week_dow(self) -> int:
        return self._week_dow

    @property
    def week_doy(self) -> int:
        return self._week_doy

    @property
    def week_number_calculation(self) -> WeekNumberCalculation:
        return self._week_number_calculation

    @property
    def default_separator(self) -> str | None:
        return self._settings.default_separator

    @property
    def can_compute_offset(self) -> bool:
        return self._resolver.can_compute_offset

    # ── creating markers ─────────────────────────────────────────────────

    def create_marker(self, input: Any) -> Marker | None:
        meta = self.create_marker_meta(input)
        if meta is None:
            return None
        return meta.marker

    def create_now_marker(self) -> Marker:
        return self.timestamp_to_marker(_to_timestamp(datetime.now(timezone.utc)))

    def create_marker_meta(self, input: Any) -> MarkerMeta | None:
        if isinstance(input, str):
            return self._parse(input)
        if isinstance(input, Marker):
            return MarkerMeta(input)

        marker: Marker | None = None
        if isinstance(input, (int, float)) and not isinstance(input, bool):
            if math.isfinite(input):
                marker = self.timestamp_to_marker(int(input))
        elif isinstance(input, datetime):
            if input.tzinfo is None or input.utcoffset() is None:
                # naive datetimes are local wall time, as in datetime.timestamp()
                wall = Marker(_to_timestamp(input.replace(tzinfo=timezone.utc)))
                ms = self._local_resolver.marker_to_timestamp(wall)
            else:
                ms = _to_timestamp(input)
            marker = self.timestamp_to_marker(ms)
        elif isinstance(input, date):
            marker = self._calendar_system.array_to_marker([input.year, input.month, input.day])
        elif isinstance(input, (list, tuple, np.ndarray)) and len(input) and all(
            isinstance(v, Integral) and not isinstance(v, bool) for v in input
        ):
            marker = self._calendar_system.array_to_marker(list(input))

        if marker is None:
            logger.debug("Cannot create a marker from %r", input)
            return None
        return MarkerMeta(marker)

    def _parse(self, s: str) -> MarkerMeta | None:
        parts = parse(s)
        if parts is None:
            return None

        marker = parts.marker
        forced_tzo: int | None = None
        if parts.time_zone_offset is not None:
            if self.can_compute_offset:
                marker = self.timestamp_to_marker(
                    marker.ms - parts.time_zone_offset * MS_PER_MINUTE
                )
            else:
                forced_tzo = parts.time_zone_offset

        return MarkerMeta(marker, parts.is_time_unspecified, forced_tzo)

    # ── zone conversion ──────────────────────────────────────────────────

    def timestamp_to_marker(self, ms: int) -> Marker:
        return self._resolver.timestamp_to_marker(ms)

    def offset_for_marker(self, m: Marker) -> int | None:
        return self._resolver.offset_for_marker(m)

    def to_date(self, m: Marker, forced_tzo: int | None = None) -> datetime:
        """
        The marker as an aware datetime. Without a computable offset (named
        zone, no provider) the wall clock is returned as UTC.
        """
        offset = forced_tzo if forced_tzo is not None else self.offset_for_marker(m)
        if not offset:
            return _from_timestamp(m.ms)
        tz = timezone(timedelta(minutes=offset))
        return _from_timestamp(m.ms - offset * MS_PER_MINUTE).astimezone(tz)

    def time_zone_name(
        self, m: Marker, style: str = "short", forced_tzo: int | None = None
    ) -> str | None:
        if forced_tzo is not None:
            if style == "long":
                return "GMT" + format_time_zone_offset(forced_tzo, iso=True)
            return format_time_zone_offset(forced_tzo)
        return self._resolver.time_zone_name(m, style)

    # ── calendar fields ──────────────────────────────────────────────────

    def get_marker_year(self, m: Marker) -> int:
        return self._calendar_system.get_marker_year(m)

    def get_marker_month(self, m: Marker) -> int:
        return self._calendar_system.get_marker_month(m)

    def get_marker_day(self, m: Marker) -> int:
        return self._calendar_system.get_marker_day(m)

    # ── adding ───────────────────────────────────────────────────────────

    def add(self, m: Marker, dur: Duration) -> Marker:
        """
        Years and months are added to the calendar fields first (overflow
        normalized by the calendar), then `day * 24h + time` is added.
        """
        a = self._calendar_system.marker_to_array(m)
        a[0] += dur.year
        a[1] += dur.month
        shifted = self._calendar_system.array_to_marker(a)
        return add_ms(shifted, dur.day * MS_PER_DAY + dur.time)

    def subtract(self, m: Marker, dur: Duration) -> Marker:
        return self.add(m, multiply_duration(dur, -1))

    def add_years(self, m: Marker, n: int) -> Marker:
        a = self._calendar_system.marker_to_array(m)
        a[0] += n
        return self._calendar_system.array_to_marker(a)

    def add_months(self, m: Marker, n: int) -> Marker:
        a = self._calendar_system.marker_to_array(m)
        a[1] += n
        return self._calendar_system.array_to_marker(a)

    # ── start-of ─────────────────────────────────────────────────────────

    def start_of_year(self, m: Marker) -> Marker:
        return self._calendar_system.array_to_marker([self.get_marker_year(m)])

    def start_of_month(self, m: Marker) -> Marker:
        a = self._calendar_system.marker_to_array(m)
        return self._calendar_system.array_to_marker(a[:2])

    def start_of_week(self, m: Marker) -> Marker:
        day = start_of_day(m)
        back = (self._calendar_system.weekday(day) - self._week_dow + 7) % 7
        return add_ms(day, -back * MS_PER_DAY)

    def start_of(self, m: Marker, unit: str) -> Marker:
        starts: Mapping[str, Callable[[Marker], Marker]] = {
            "year": self.start_of_year,
            "month": self.start_of_month,
            "week": self.start_of_week,
            "day": start_of_day,
            "hour": start_of_hour,
            "minute": start_of_minute,
            "second": start_of_second,
        }
        try:
            return starts[unit](m)
        except KeyError:
            raise ValueError(f"Unknown unit {unit!r}.") from None

    # ── diffing ──────────────────────────────────────────────────────────

    def diff_whole_years(self, m0: Marker, m1: Marker) -> int | None:
        a0 = self._calendar_system.marker_to_array(m0)
        a1 = self._calendar_system.marker_to_array(m1)
        if time_as_ms(m0) == time_as_ms(m1) and a0[1:3] == a1[1:3]:
            return a1[0] - a0[0]
        return None

    def diff_whole_months(self, m0: Marker, m1: Marker) -> int | None:
        a0 = self._calendar_system.marker_to_array(m0)
        a1 = self._calendar_system.marker_to_array(m1)
        if time_as_ms(m0) == time_as_ms(m1) and a0[2] == a1[2]:
            return (a1[0] - a0[0]) * 12 + (a1[1] - a0[1])
        return None

    def greatest_whole_unit(self, m0: Marker, m1: Marker) -> tuple[str, int]:
        """Coarsest unit in which m1 - m0 is a whole number, with that number."""
        for unit, diff in (
            ("year", self.diff_whole_years),
            ("month", self.diff_whole_months),
            ("week", diff_whole_weeks),
            ("day", diff_whole_days),
        ):
            n = diff(m0, m1)
            if n is not None:
                return unit, n
        for unit, fractional in (
            ("hour", diff_hours),
            ("minute", diff_minutes),
            ("second", diff_seconds),
        ):
            value = fractional(m0, m1)
            if value.is_integer():
                return unit, int(value)
        return "millisecond", m1.ms - m0.ms

    def count_durations_between(self, m0: Marker, m1: Marker, dur: Duration) -> float:
        if dur.year:
            diff = self.diff_whole_years(m0, m1)
            if diff is not None:
                return diff / as_roughly_years(dur)
        if dur.month:
            diff = self.diff_whole_months(m0, m1)
            if diff is not None:
                return diff / as_roughly_months(dur)
        if dur.day:
            diff = diff_whole_days(m0, m1)
            if diff is not None:
                return diff / as_roughly_days(dur)
        return (m1.ms - m0.ms) / as_roughly_ms(dur)

    # ── week numbers ─────────────────────────────────────────────────────

    def compute_week_number(self, m: Marker) -> int:
        calc = self._week_number_calculation
        if calc.kind is WeekNumberKind.CUSTOM:
            return calc.func(self.to_date(m))
        return self._calendar_system.week_of_year(m, self._numbering_dow, self._week_doy)

    # ── output ───────────────────────────────────────────────────────────

    def format(
        self,
        m: Marker,
        formatter: DateFormatter | Mapping[str, Any],
        forced_tzo: int | None = None,
    ) -> str:
        return _as_formatter(formatter).format(m, self, forced_tzo)

    def format_range(
        self,
        start: Marker,
        end: Marker,
        formatter: DateFormatter | Mapping[str, Any],
        separator: str | None = None,
        is_end_exclusive: bool = False,
    ) -> str:
        if is_end_exclusive:
            end = add_ms(end, -1)
        return _as_formatter(formatter).format_range(start, end, self, separator)

    def format_iso(
        self,
        m: Marker,
        forced_tzo: int | None = None,
        omit_time: bool = False,
        omit_time_zone_offset: bool = False,
    ) -> str:
        if omit_time:
            return format_day_string(m)
        offset: int | None = None
        if not omit_time_zone_offset:
            offset = forced_tzo if forced_tzo is not None else self.offset_for_marker(m)
        return build_iso_string(m, offset)

    def __repr__(self) -> str:
        return (
            f"DateEnv(time_zone={self.time_zone!r}, "
            f"calendar_system={self._settings.calendar_system!r}, "
            f"locale={self._locale.code!r}, "
            f"week_dow={self._week_dow}, "
            f"week_number_calculation={self._week_number_calculation.kind.value!r})"
        )


def _as_formatter(formatter: DateFormatter | Mapping[str, Any]) -> DateFormatter:
    if isinstance(formatter, Mapping):
        return create_formatter(formatter)
    return formatter


def _to_timestamp(dt: datetime) -> int:
    return (dt - _EPOCH_UTC) // _ONE_MS


def _from_timestamp(ms: int) -> datetime:
    return _EPOCH_UTC + timedelta(milliseconds=ms)
