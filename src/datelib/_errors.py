class DateLibError(Exception):
    """Base exception for all datelib errors."""
