"""
Data models for clock entries, clock-in markers and display rows.

Entry and ClockinMarker are pydantic models so stored YAML is validated on
load. Rows are plain dataclasses derived at query time and never stored.
"""

from dataclasses import dataclass
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator

from foliot.models.duration import Duration


def _ensure_aware(value: datetime) -> datetime:
    """Attach the local UTC offset to naive datetimes."""
    if value.tzinfo is None:
        return value.astimezone()
    return value


class ClockinMarker(BaseModel):
    """Record of a started clock."""

    model_config = ConfigDict(frozen=True)

    start_time: datetime

    @field_validator("start_time")
    @classmethod
    def attach_local_offset(cls, value: datetime) -> datetime:
        return _ensure_aware(value)


class Entry(BaseModel):
    """
    One completed clock interval.

    Entries are immutable. Their natural order is (start_time, end_time,
    comment) with a missing comment sorting first.
    """

    model_config = ConfigDict(frozen=True)

    start_time: datetime
    end_time: datetime
    comment: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def attach_local_offset(cls, value: datetime) -> datetime:
        return _ensure_aware(value)

    @property
    def duration(self) -> Duration:
        """Total duration of the entry."""
        return Duration.from_span(self.start_time, self.end_time)

    def sort_key(self) -> tuple:
        return (
            self.start_time,
            self.end_time,
            self.comment is not None,
            self.comment or "",
        )

    def __lt__(self, other: "Entry") -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.sort_key() < other.sort_key()


EntryList = TypeAdapter(list[Entry])


@dataclass(frozen=True)
class EntryRow:
    """Entry formatted for displaying in human-readable form."""

    date: date
    start: str
    end: str
    duration: Duration
    comment: str

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryRow":
        return cls(
            date=entry.start_time.date(),
            start=entry.start_time.strftime("%H:%M"),
            end=entry.end_time.strftime("%H:%M"),
            duration=entry.duration,
            comment=entry.comment or "",
        )

    def as_list(self) -> list[str]:
        return [self.date.isoformat(), self.start, self.end, str(self.duration), self.comment]


@dataclass(frozen=True)
class MonthlySummary:
    """Per-month rollup of entries."""

    month: str
    total_duration: Duration
    hours_per_week: float
    days: int
    entries: int

    def as_list(self) -> list[str]:
        return [
            self.month,
            str(self.total_duration),
            f"{self.hours_per_week:.2f}",
            str(self.days),
            str(self.entries),
        ]


@dataclass(frozen=True)
class ClockStatus:
    """A running clock and how long it has been running."""

    namespace: str
    start_time: datetime
    running: Duration
