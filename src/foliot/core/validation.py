"""
Entry validation and overlap detection.
"""

from foliot.core.config import REJECT_NONPOSITIVE_ENTRIES
from foliot.core.errors import InvalidEntryError, OverlapError
from foliot.core.logger import log
from foliot.models.entries import Entry


def _strictly_inside(instant, entry: Entry) -> bool:
    return entry.start_time < instant < entry.end_time


def same_span(e1: Entry, e2: Entry) -> bool:
    """Check if two entries cover exactly the same interval."""
    return e1.start_time == e2.start_time and e1.end_time == e2.end_time


def entries_overlap(e1: Entry, e2: Entry) -> bool:
    """
    Check if the timespans of two entries overlap.

    Touching boundaries (one entry ending exactly when the other starts) are
    not an overlap. Two identical non-empty spans are.
    """
    if (
        _strictly_inside(e1.start_time, e2)
        or _strictly_inside(e1.end_time, e2)
        or _strictly_inside(e2.start_time, e1)
        or _strictly_inside(e2.end_time, e1)
    ):
        return True
    return same_span(e1, e2) and e1.start_time < e1.end_time


def validate_entry(entry: Entry, reject_nonpositive: bool | None = None) -> None:
    """
    Check a single entry on its own.

    Raises:
        InvalidEntryError: The entry does not end after it starts and
            non-positive entries are refused
    """
    if reject_nonpositive is None:
        reject_nonpositive = REJECT_NONPOSITIVE_ENTRIES

    if reject_nonpositive and entry.end_time <= entry.start_time:
        raise InvalidEntryError(
            f"Entry must end after it starts ({entry.start_time.isoformat()} - "
            f"{entry.end_time.isoformat()})"
        )


def validate_insert(
    candidate: Entry,
    existing: list[Entry],
    reject_nonpositive: bool | None = None,
) -> None:
    """
    Validate a new entry against every entry already in the store.

    Checks:
    1. The entry itself (see ``validate_entry``)
    2. No existing entry overlaps it or has the exact same span

    Raises:
        InvalidEntryError: See ``validate_entry``
        OverlapError: On the first colliding entry
    """
    validate_entry(candidate, reject_nonpositive)

    for entry in existing:
        if entries_overlap(candidate, entry) or same_span(candidate, entry):
            log.info(f"Rejected entry {candidate.start_time} - {candidate.end_time}, overlaps {entry.start_time} - {entry.end_time}")
            raise OverlapError(candidate, entry)
