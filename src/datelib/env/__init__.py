# src/datelib/env/__init__.py
"""
datelib.env
~~~~~~~~~~~

DateEnv binds one configuration (time zone, calendar system, locale, first
day of week, week numbering) and is the entry point for creating markers,
doing calendar arithmetic and formatting.

Basic usage::

    from datelib.env import DateEnv
    from datelib.duration import create_duration

    env = DateEnv(time_zone="UTC", locale="en")
    m = env.create_marker("2018-06-05T12:00:00")
    env.add(m, create_duration({"month": 1}))
    env.format_iso(m)                        # → '2018-06-05T12:00:00Z'
    env.format(m, {"month": "long", "day": "numeric"})   # → 'June 5'

Named zones need a provider to compute offsets::

    from datelib.timezone import ZoneInfoProvider

    env = DateEnv(time_zone="America/Chicago",
                  named_time_zone_provider=ZoneInfoProvider())

Public API
----------
DateEnv                  The façade.
DateEnvSettings          Its frozen configuration.
MarkerMeta               Result of create_marker_meta().
WeekNumberCalculation    Local / ISO / custom week numbering.
"""

from __future__ import annotations

from datelib.env.env import (
    DateEnv,
    DateEnvSettings,
    MarkerMeta,
    WeekNumberCalculation,
    WeekNumberKind,
)

__all__ = [
    "DateEnv",
    "DateEnvSettings",
    "MarkerMeta",
    "WeekNumberCalculation",
    "WeekNumberKind",
]
