# src/datelib/timezone/__init__.py
"""
datelib.timezone
~~~~~~~~~~~~~~~~

UTC offset resolution for the zone a DateEnv is configured with.

Three kinds of zone are understood:

* ``"UTC"``   – offset is always 0.
* ``"local"`` – offsets come from a LocalZone (the OS zone by default, or a
  FixedOffsetZone for deterministic behaviour).
* anything else is a named zone whose offsets come from a
  NamedTimeZoneProvider such as ZoneInfoProvider.  Without a provider the
  zone runs in coercion mode and no offsets are available.

Basic usage::

    from datelib.timezone import TimeZoneResolver, ZoneInfoProvider

    tz = TimeZoneResolver("America/Chicago", named_provider=ZoneInfoProvider())
    tz.offset_for_marker(marker)         # → -300 in summer

Public API
----------
TimeZoneResolver          Offset lookups for one zone.
SystemLocalZone           The OS zone.
FixedOffsetZone           A constant-offset zone.
ZoneInfoProvider          Named zones via zoneinfo.
UnknownZoneError          Raised for unknown named zones.
"""

from __future__ import annotations

from datelib.timezone._exceptions import UnknownZoneError
from datelib.timezone.resolver import LOCAL, UTC, TimeZoneResolver, format_time_zone_offset
from datelib.timezone.zones import (
    FixedOffsetZone,
    LocalZone,
    NamedTimeZoneProvider,
    SystemLocalZone,
    ZoneInfoProvider,
)

__all__ = [
    "LOCAL",
    "UTC",
    "FixedOffsetZone",
    "LocalZone",
    "NamedTimeZoneProvider",
    "SystemLocalZone",
    "TimeZoneResolver",
    "UnknownZoneError",
    "ZoneInfoProvider",
    "format_time_zone_offset",
]
