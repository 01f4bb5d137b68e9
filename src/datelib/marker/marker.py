from __future__ import annotations

from dataclasses import dataclass

from datelib._units import (  # noqa: F401
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    MS_PER_WEEK,
)


@dataclass(frozen=True, slots=True, order=True)
class Marker:
    """
    Zone-independent instant: the wall-clock value of a DateEnv's zone,
    counted in milliseconds from 1970-01-01T00:00 of the proleptic Gregorian
    calendar with no UTC offset applied.
    """

    ms: int

    def __post_init__(self) -> None:
        if isinstance(self.ms, bool) or not isinstance(self.ms, int):
            object.__setattr__(self, "ms", int(self.ms))

    def __repr__(self) -> str:
        return f"Marker(ms={self.ms})"
