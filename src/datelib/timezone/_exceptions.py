from datelib._errors import DateLibError


class UnknownZoneError(DateLibError):
    """Raised when a named time zone cannot be found in the zone database."""

    def __init__(self, zone: str) -> None:
        super().__init__(f"Unknown time zone {zone!r}.")
        self.zone = zone
