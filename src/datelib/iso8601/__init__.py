# src/datelib/iso8601/__init__.py
"""
datelib.iso8601
~~~~~~~~~~~~~~~

ISO 8601 parsing and serialization of markers.

    from datelib.iso8601 import build_iso_string, parse

    res = parse("2018-06-08T00:00:00+12:00")
    res.time_zone_offset        # → 720
    build_iso_string(res.marker, 0)   # → '2018-06-08T00:00:00Z'

Offsets found in a string are reported, never applied; DateEnv decides how
to reconcile them with its zone.
"""

from __future__ import annotations

from datelib.iso8601.iso8601 import (
    ParsedIso,
    build_iso_string,
    format_day_string,
    format_time_string,
    parse,
)

__all__ = [
    "ParsedIso",
    "build_iso_string",
    "format_day_string",
    "format_time_string",
    "parse",
]
