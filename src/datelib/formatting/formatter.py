from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol

from datelib.marker.marker import Marker

if TYPE_CHECKING:
    from datelib.env.env import DateEnv

logger = logging.getLogger(__name__)

_TEXT_STYLES = frozenset({"long", "short", "narrow"})
_NUMBER_STYLES = frozenset({"numeric", "2-digit"})

_VALID_STYLES: dict[str, frozenset[str]] = {
    "weekday": _TEXT_STYLES,
    "year": _NUMBER_STYLES,
    "month": _TEXT_STYLES | _NUMBER_STYLES,
    "day": _NUMBER_STYLES,
    "hour": _NUMBER_STYLES,
    "minute": _NUMBER_STYLES,
    "second": _NUMBER_STYLES,
    "time_zone_name": frozenset({"short", "long"}),
    "week": frozenset({"numeric", "narrow", "short"}),
}

_CAMEL_KEYS = {
    "timeZoneName": "time_zone_name",
    "omitZeroMinute": "omit_zero_minute",
}

# How coarse a field is: when two markers differ at some level, fields with a
# severity at or below that level are repeated on each side of a range.
_FIELD_SEVERITIES = {
    "time_zone_name": 7,
    "year": 5,
    "month": 4,
    "day": 2,
    "weekday": 2,
    "hour": 1,
    "minute": 1,
    "second": 1,
}

DEFAULT_SEPARATOR = " - "


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Requested fields and their styles. Unset fields are not rendered."""

    weekday: str | None = None
    year: str | None = None
    month: str | None = None
    day: str | None = None
    hour: str | None = None
    minute: str | None = None
    second: str | None = None
    time_zone_name: str | None = None
    week: str | None = None
    separator: str | None = None
    hour12: bool | None = None
    omit_zero_minute: bool = False

    def __post_init__(self) -> None:
        for name, allowed in _VALID_STYLES.items():
            style = getattr(self, name)
            if style is not None and style not in allowed:
                raise ValueError(
                    f"Invalid style {style!r} for {name}; expected one of {sorted(allowed)}."
                )

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> FormatterConfig:
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in config.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown formatting option {key!r}.")
            kwargs[name] = value
        return cls(**kwargs)

    def date_fields(self) -> dict[str, str]:
        return {
            name: getattr(self, name)
            for name in _FIELD_SEVERITIES
            if getattr(self, name) is not None
        }


class DateFormatter(Protocol):
    def format(self, marker: Marker, env: DateEnv, forced_tzo: int | None = None) -> str: ...
    def format_range(
        self,
        start: Marker,
        end: Marker,
        env: DateEnv,
        separator: str | None = None,
    ) -> str: ...


# ── range severity ───────────────────────────────────────────────────────────

# Granularity levels, coarsest first, on the same scale as _FIELD_SEVERITIES.
_DIFF_LEVELS: tuple[tuple[int, Callable[[list[int]], Any]], ...] = (
    (5, lambda a: a[0]),   # year
    (4, lambda a: a[1]),   # month
    (2, lambda a: a[2]),   # day
    (1, lambda a: a[3:]),  # time of day
)


def compute_marker_diff_severity(m0: Marker, m1: Marker, env: DateEnv) -> int:
    """Severity of the coarsest level at which two markers differ; 0 if none."""
    a0 = env.calendar_system.marker_to_array(m0)
    a1 = env.calendar_system.marker_to_array(m1)
    for severity, key in _DIFF_LEVELS:
        if key(a0) != key(a1):
            return severity
    return 0


def find_common_insertion(
    full0: str, partial0: str, full1: str, partial1: str
) -> tuple[str, str] | None:
    """
    Find where each partial sits inside its full rendering such that the text
    before and after is identical on both sides.
    """
    if not partial0 or not partial1:
        return None

    i0 = 0
    while i0 < len(full0):
        found0 = full0.find(partial0, i0)
        if found0 == -1:
            break
        before0 = full0[:found0]
        i0 = found0 + len(partial0)
        after0 = full0[i0:]

        i1 = 0
        while i1 < len(full1):
            found1 = full1.find(partial1, i1)
            if found1 == -1:
                break
            before1 = full1[:found1]
            i1 = found1 + len(partial1)
            after1 = full1[i1:]
            if before0 == before1 and after0 == after1:
                return before0, after0
    return None


# ── native formatter ─────────────────────────────────────────────────────────

class NativeFormatter:
    """Renders markers from a FormatterConfig using the env's locale."""

    def __init__(self, config: FormatterConfig) -> None:
        self._config = config

    @property
    def config(self) -> FormatterConfig:
        return self._config

    def format(self, marker: Marker, env: DateEnv, forced_tzo: int | None = None) -> str:
        if self._config.week is not None:
            return format_week_number(env.compute_week_number(marker), self._config.week, env)
        return _render(marker, self._config, env, forced_tzo)

    def format_range(
        self,
        start: Marker,
        end: Marker,
        env: DateEnv,
        separator: str | None = None,
    ) -> str:
        diff_severity = compute_marker_diff_severity(start, end, env)
        if not diff_severity:
            return self.format(start, env)

        cfg = self._config
        biggest_unit = diff_severity
        if (
            biggest_unit > 1
            and cfg.year in _NUMBER_STYLES
            and cfg.month in _NUMBER_STYLES
            and cfg.day in _NUMBER_STYLES
        ):
            biggest_unit = 1

        full0 = self.format(start, env)
        full1 = self.format(end, env)
        if full0 == full1:
            return full0

        sep = (
            separator
            or cfg.separator
            or env.default_separator
            or env.locale.separator
            or DEFAULT_SEPARATOR
        )
        partial = NativeFormatter(_partial_config(cfg, biggest_unit))
        partial0 = partial.format(start, env)
        partial1 = partial.format(end, env)

        insertion = find_common_insertion(full0, partial0, full1, partial1)
        if insertion is not None:
            before, after = insertion
            return before + partial0 + sep + partial1 + after
        return full0 + sep + full1

    def __repr__(self) -> str:
        return f"NativeFormatter({self._config.date_fields()!r})"


def _partial_config(config: FormatterConfig, biggest_unit: int) -> FormatterConfig:
    dropped = {
        name: None
        for name, severity in _FIELD_SEVERITIES.items()
        if severity > biggest_unit
    }
    return replace(config, **dropped)


# ── function formatter ───────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class VerboseDate:
    marker: Marker
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int
    time_zone_offset: int | None


@dataclass(frozen=True, slots=True)
class FormatInfo:
    date: VerboseDate
    start: VerboseDate
    end: VerboseDate | None
    time_zone: str
    locale_code: str
    separator: str


def _verbose_date(marker: Marker, env: DateEnv, forced_tzo: int | None = None) -> VerboseDate:
    year, month, day, hour, minute, second, milli = env.calendar_system.marker_to_array(marker)
    offset = forced_tzo if forced_tzo is not None else env.offset_for_marker(marker)
    return VerboseDate(marker, year, month, day, hour, minute, second, milli, offset)


class FuncFormatter:
    """Delegates rendering to a user callable receiving a FormatInfo."""

    def __init__(self, func: Callable[[FormatInfo], str]) -> None:
        self._func = func

    def format(self, marker: Marker, env: DateEnv, forced_tzo: int | None = None) -> str:
        date = _verbose_date(marker, env, forced_tzo)
        return self._func(
            FormatInfo(
                date,
                date,
                None,
                env.time_zone,
                env.locale.code,
                env.default_separator or env.locale.separator,
            )
        )

    def format_range(
        self,
        start: Marker,
        end: Marker,
        env: DateEnv,
        separator: str | None = None,
    ) -> str:
        d0 = _verbose_date(start, env)
        d1 = _verbose_date(end, env)
        sep = separator or env.default_separator or env.locale.separator or DEFAULT_SEPARATOR
        return self._func(FormatInfo(d0, d0, d1, env.time_zone, env.locale.code, sep))


def create_formatter(
    input: FormatterConfig | Mapping[str, Any] | Callable[[FormatInfo], str] | None = None,
    **options: Any,
) -> DateFormatter:
    """
    Build a formatter from a FormatterConfig, a mapping of options, keyword
    options, or a callable.
    """
    if isinstance(input, FormatterConfig):
        return NativeFormatter(input)
    if isinstance(input, Mapping) or input is None:
        merged = {**(input or {}), **options}
        return NativeFormatter(FormatterConfig.from_mapping(merged))
    if callable(input):
        return FuncFormatter(input)
    raise ValueError(f"Cannot build a formatter from {input!r}.")


# ── rendering ────────────────────────────────────────────────────────────────

def format_week_number(num: int, style: str, env: DateEnv) -> str:
    if style == "numeric":
        return str(num)
    if style == "narrow":
        return f"{env.locale.week_text}{num}"
    return f"{env.locale.week_text} {num}"


def _number(value: int, style: str) -> str:
    if style == "2-digit":
        return f"{value % 100:02d}"
    return str(value)


def _render_date(a: list[int], wday: int, cfg: FormatterConfig, env: DateEnv) -> str:
    loc = env.locale
    year, month, day = a[0], a[1], a[2]

    year_s = _number(year, cfg.year) if cfg.year else None
    day_s = _number(day, cfg.day) if cfg.day else None

    if cfg.month in _TEXT_STYLES:
        month_s = loc.month_name(month, cfg.month)
        if loc.date_order == "mdy":
            s = month_s
            if day_s:
                s += f" {day_s}{loc.day_suffix}"
            if year_s:
                s += f", {year_s}" if day_s else f" {year_s}"
        else:
            s = f"{day_s}{loc.day_suffix} {month_s}" if day_s else month_s
            if year_s:
                s += f" {year_s}"
    elif cfg.month:
        month_s = _number(month, cfg.month)
        ordered = (
            (month_s, day_s, year_s) if loc.date_order == "mdy" else (day_s, month_s, year_s)
        )
        s = loc.numeric_date_separator.join(p for p in ordered if p)
    else:
        s = " ".join(p for p in (day_s, year_s) if p)

    if cfg.weekday:
        wday_s = loc.weekday_name(wday, cfg.weekday)
        s = f"{wday_s}, {s}" if s else wday_s
    return s


def _render_time(a: list[int], cfg: FormatterConfig, env: DateEnv) -> str:
    hour, minute, second = a[3], a[4], a[5]
    hour12 = env.locale.hour12 if cfg.hour12 is None else cfg.hour12

    parts: list[str] = []
    if cfg.hour:
        if hour12:
            parts.append(_number(hour % 12 or 12, cfg.hour))
        else:
            parts.append(f"{hour:02d}")
    if cfg.minute and not (cfg.omit_zero_minute and minute == 0 and not cfg.second):
        parts.append(f"{minute:02d}" if cfg.hour or cfg.minute == "2-digit" else str(minute))
    if cfg.second:
        parts.append(f"{second:02d}" if cfg.hour or cfg.minute else _number(second, cfg.second))

    s = ":".join(parts)
    if cfg.hour and hour12:
        s += " " + env.locale.meridiem[hour >= 12]
    return s


def _render(marker: Marker, cfg: FormatterConfig, env: DateEnv, forced_tzo: int | None) -> str:
    a = env.calendar_system.marker_to_array(marker)
    date_s = _render_date(a, env.calendar_system.weekday(marker), cfg, env)
    time_s = _render_time(a, cfg, env)

    s = ", ".join(p for p in (date_s, time_s) if p)
    if cfg.time_zone_name:
        tz_s = env.time_zone_name(marker, cfg.time_zone_name, forced_tzo)
        if tz_s is None:
            logger.debug("Omitting unresolvable zone name for %r", env.time_zone)
        elif not s:
            s = tz_s
        else:
            s += (" " if time_s else ", ") + tz_s
    return s
