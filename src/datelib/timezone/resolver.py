from __future__ import annotations

import logging

from datelib._units import MS_PER_MINUTE
from datelib.marker.marker import Marker

from .zones import LocalZone, NamedTimeZoneProvider, SystemLocalZone

logger = logging.getLogger(__name__)

UTC = "UTC"
LOCAL = "local"


def format_time_zone_offset(minutes: int, iso: bool = False) -> str:
    """'+12:00' / '-05:30' when iso, else 'GMT+12' / 'GMT-5:30'."""
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    if iso:
        return f"{sign}{hours:02d}:{mins:02d}"
    return f"GMT{sign}{hours}" + (f":{mins:02d}" if mins else "")


class TimeZoneResolver:
    """
    Resolves UTC offsets for one configured zone: "UTC", "local" or a named
    zone.

    A named zone without a provider is in coercion mode: markers carry the
    zone's wall clock but no offset can be computed for them, so
    offset_for_marker() returns None and no zone label is produced.
    """

    def __init__(
        self,
        time_zone: str = LOCAL,
        local_zone: LocalZone | None = None,
        named_provider: NamedTimeZoneProvider | None = None,
    ) -> None:
        if not isinstance(time_zone, str) or not time_zone:
            raise ValueError(f"time_zone must be a non-empty string; got {time_zone!r}.")
        self._time_zone = time_zone
        self._local_zone: LocalZone = local_zone if local_zone is not None else SystemLocalZone()
        self._named_provider = named_provider

    # ── properties ───────────────────────────────────────────────────────

    @property
    def time_zone(self) -> str:
        return self._time_zone

    @property
    def is_utc(self) -> bool:
        return self._time_zone == UTC

    @property
    def is_local(self) -> bool:
        return self._time_zone == LOCAL

    @property
    def is_named(self) -> bool:
        return not (self.is_utc or self.is_local)

    @property
    def can_compute_offset(self) -> bool:
        return not self.is_named or self._named_provider is not None

    # ── offsets ──────────────────────────────────────────────────────────

    def offset_for_marker(self, m: Marker) -> int | None:
        if self.is_utc:
            return 0
        if self.is_local:
            return self._local_zone.offset_for_wall(m.ms)
        if self._named_provider is not None:
            return self._named_provider.offset_for_wall(self._time_zone, m.ms)
        return None

    def offset_for_timestamp(self, ms: int) -> int | None:
        if self.is_utc:
            return 0
        if self.is_local:
            return self._local_zone.offset_for_timestamp(ms)
        if self._named_provider is not None:
            return self._named_provider.offset_for_timestamp(self._time_zone, ms)
        return None

    def timestamp_to_marker(self, ms: int) -> Marker:
        """Project an absolute UTC timestamp onto this zone's wall clock."""
        offset = self.offset_for_timestamp(ms)
        return Marker(ms + (offset or 0) * MS_PER_MINUTE)

    def marker_to_timestamp(self, m: Marker) -> int:
        """Absolute UTC timestamp of a marker; coercion mode reads it as UTC."""
        offset = self.offset_for_marker(m)
        return m.ms - (offset or 0) * MS_PER_MINUTE

    # ── labels ───────────────────────────────────────────────────────────

    def time_zone_name(self, m: Marker, style: str = "short") -> str | None:
        if self.is_utc:
            return "UTC" if style != "long" else "Coordinated Universal Time"

        offset = self.offset_for_marker(m)
        if offset is None:
            logger.debug("No offset available for zone %r; omitting zone name", self._time_zone)
            return None

        if style == "long":
            return "GMT" + format_time_zone_offset(offset, iso=True)

        if self.is_named and self._named_provider is not None:
            abbr = self._named_provider.abbreviation(
                self._time_zone, m.ms - offset * MS_PER_MINUTE
            )
            # numeric abbreviations such as "-03" carry no extra information
            if abbr and abbr[0] not in "+-":
                return abbr
        return format_time_zone_offset(offset)

    def __repr__(self) -> str:
        return (
            f"TimeZoneResolver(time_zone={self._time_zone!r}, "
            f"can_compute_offset={self.can_compute_offset})"
        )
