"""
Minute-granularity durations.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True, order=True)
class Duration:
    """
    Human readable duration, no more precise than a minute.

    Ordered by (hours, minutes). After addition ``minutes`` is always in
    ``[0, 60)``; ``hours`` is never capped.
    """

    hours: int = 0
    minutes: int = 0

    @classmethod
    def zero(cls) -> "Duration":
        return cls(0, 0)

    @classmethod
    def from_timedelta(cls, span: timedelta) -> "Duration":
        """
        Convert a signed span, truncating toward zero.

        A negative span gives non-positive hours and minutes, e.g. -90 minutes
        becomes Duration(-1, -30).
        """
        sign = -1 if span < timedelta(0) else 1
        total_minutes = abs(span) // _MINUTE
        hours, minutes = divmod(total_minutes, 60)
        return cls(sign * hours, sign * minutes)

    @classmethod
    def from_span(cls, start: datetime, end: datetime) -> "Duration":
        """Duration of ``end - start``."""
        return cls.from_timedelta(end - start)

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        carry, minutes = divmod(self.minutes + other.minutes, 60)
        return Duration(self.hours + other.hours + carry, minutes)

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}h"

    def format(self) -> str:
        """Format as zero-padded ``HH:MMh``."""
        return str(self)
