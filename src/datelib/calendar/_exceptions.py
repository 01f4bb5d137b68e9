from datelib._errors import DateLibError


class CalendarError(DateLibError):
    """Raised for unknown or misconfigured calendar systems."""
