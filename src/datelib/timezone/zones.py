from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ._exceptions import UnknownZoneError

_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPOCH_NAIVE = datetime(1970, 1, 1)


def _minutes(offset: timedelta | None) -> int:
    if offset is None:
        return 0
    return round(offset.total_seconds() / 60)


def _utc_datetime(ms: int) -> datetime:
    return _EPOCH_UTC + timedelta(milliseconds=ms)


def _naive_datetime(wall_ms: int) -> datetime:
    return _EPOCH_NAIVE + timedelta(milliseconds=wall_ms)


# ── local zone ───────────────────────────────────────────────────────────────

class LocalZone(Protocol):
    """Offsets (minutes east of UTC) of the zone behind the "local" tag."""

    def offset_for_timestamp(self, ms: int) -> int: ...
    def offset_for_wall(self, wall_ms: int) -> int: ...


class SystemLocalZone:
    """The operating system's zone, as seen by datetime.astimezone()."""

    def offset_for_timestamp(self, ms: int) -> int:
        return _minutes(_utc_datetime(ms).astimezone().utcoffset())

    def offset_for_wall(self, wall_ms: int) -> int:
        # naive datetimes are local time for astimezone()
        return _minutes(_naive_datetime(wall_ms).astimezone().utcoffset())

    def __repr__(self) -> str:
        return "SystemLocalZone()"


class FixedOffsetZone:
    """A zone with a constant offset; makes "local" deterministic in tests."""

    def __init__(self, minutes: int) -> None:
        self._minutes = int(minutes)

    @property
    def minutes(self) -> int:
        return self._minutes

    def offset_for_timestamp(self, ms: int) -> int:
        return self._minutes

    def offset_for_wall(self, wall_ms: int) -> int:
        return self._minutes

    def __repr__(self) -> str:
        return f"FixedOffsetZone(minutes={self._minutes})"


# ── named zones ──────────────────────────────────────────────────────────────

class NamedTimeZoneProvider(Protocol):
    """Zone database lookups for IANA-style zone names."""

    def offset_for_timestamp(self, zone: str, ms: int) -> int: ...
    def offset_for_wall(self, zone: str, wall_ms: int) -> int: ...
    def abbreviation(self, zone: str, ms: int) -> str | None: ...


def _load_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise UnknownZoneError(name) from exc


class ZoneInfoProvider:
    """NamedTimeZoneProvider backed by the zoneinfo database."""

    def offset_for_timestamp(self, zone: str, ms: int) -> int:
        tz = _load_zone(zone)
        return _minutes(_utc_datetime(ms).astimezone(tz).utcoffset())

    def offset_for_wall(self, zone: str, wall_ms: int) -> int:
        tz = _load_zone(zone)
        return _minutes(_naive_datetime(wall_ms).replace(tzinfo=tz).utcoffset())

    def abbreviation(self, zone: str, ms: int) -> str | None:
        tz = _load_zone(zone)
        return _utc_datetime(ms).astimezone(tz).tzname()

    def __repr__(self) -> str:
        return "ZoneInfoProvider()"

