# src/datelib/calendar/__init__.py
"""
datelib.calendar
~~~~~~~~~~~~~~~~

Calendar systems.  A calendar system maps calendar fields
(year, month, day, hour, minute, second, ms) to a zone-independent
millisecond count and back, and defines week numbering.

Only the proleptic Gregorian calendar ships; others can be registered::

    from datelib.calendar import create_calendar_system, to_milliseconds

    cal = create_calendar_system("gregory")
    ms = to_milliseconds(2018, 13, 1)              # → 2019-01-01T00:00
    cal.marker_to_array(cal.array_to_marker([2018, 6, 5, 12]))

NumPy arrays are accepted everywhere a scalar is::

    import numpy as np
    ms = to_milliseconds(np.array([2018, 2019]), 6, 5)

Public API
----------
CalendarSystem            Capability protocol.
GregorianCalendarSystem   The "gregory" implementation.
CalendarError             Raised for unknown calendar systems.
"""

from __future__ import annotations

from datelib.calendar._exceptions import CalendarError
from datelib.calendar.gregorian import (
    CalendarSystem,
    GregorianCalendarSystem,
    calendar_systems,
    create_calendar_system,
    from_milliseconds,
    register_calendar_system,
    to_milliseconds,
    weekday,
)

__all__ = [
    "CalendarError",
    "CalendarSystem",
    "GregorianCalendarSystem",
    "calendar_systems",
    "create_calendar_system",
    "from_milliseconds",
    "register_calendar_system",
    "to_milliseconds",
    "weekday",
]
