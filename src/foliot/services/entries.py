"""
Entry store operations: validated append, ordering, filtering and display rows.
"""

from collections.abc import Callable, Iterable

from foliot.core.validation import validate_insert
from foliot.models.entries import Entry, EntryRow

EntryPredicate = Callable[[Entry], bool]


def append(
    entries: list[Entry],
    candidate: Entry,
    reject_nonpositive: bool | None = None,
) -> list[Entry]:
    """
    Validate ``candidate`` against all entries and return a new list with it appended.

    Raises:
        OverlapError: The candidate collides with an existing entry
        InvalidEntryError: The candidate is non-positive and those are refused
    """
    validate_insert(candidate, entries, reject_nonpositive)
    return [*entries, candidate]


def sort_by_start(entries: Iterable[Entry]) -> list[Entry]:
    """Stable chronological sort (start, end, comment)."""
    return sorted(entries, key=Entry.sort_key)


def filter_entries(entries: Iterable[Entry], predicate: EntryPredicate | None = None) -> list[Entry]:
    if predicate is None:
        return list(entries)
    return [e for e in entries if predicate(e)]


def take_tail(items: list, tail: int = 0) -> list:
    """Last ``tail`` items, or all of them for 0."""
    if tail <= 0:
        return list(items)
    return items[-tail:]


def list_entries(
    entries: Iterable[Entry],
    predicate: EntryPredicate | None = None,
    tail: int = 0,
) -> list[EntryRow]:
    """Sorted, filtered and truncated display rows."""
    selected = filter_entries(sort_by_start(entries), predicate)
    rows = [EntryRow.from_entry(e) for e in selected]
    return take_tail(rows, tail)
