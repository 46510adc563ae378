"""
Clock-in / clock-out state machine.

A namespace is idle when it has no clock-in marker and running while it has
one. Clock-out turns the marker into an entry, abort drops it. Clocking an
arbitrary duration adds an entry without touching the marker.
"""

from datetime import datetime, timedelta

from foliot.core import storage
from foliot.core.errors import AlreadyRunningError, NotRunningError
from foliot.core.logger import log
from foliot.core.storage import DataStore
from foliot.core.timeparse import now
from foliot.models.duration import Duration
from foliot.models.entries import ClockinMarker, ClockStatus, Entry
from foliot.services.entries import append, sort_by_start


def clock_in(
    store: DataStore,
    namespace: str,
    starting: datetime | None = None,
) -> ClockinMarker:
    """
    Start a new clock by writing a clock-in marker.

    Raises:
        AlreadyRunningError: A marker exists already (it is left untouched)
    """
    if storage.marker_exists(store, namespace):
        raise AlreadyRunningError(namespace, store.path(storage.clockin_key(namespace)))

    marker = ClockinMarker(start_time=starting or now())
    storage.save_marker(store, namespace, marker)
    log.info(f"Clocked in namespace '{namespace}' at {marker.start_time.isoformat()}")
    return marker


def record(
    store: DataStore,
    namespace: str,
    start: datetime,
    end: datetime,
    comment: str | None = None,
    reject_nonpositive: bool | None = None,
) -> Entry:
    """
    Add an entry to the namespace: load, validate, append, store.

    Raises:
        OverlapError: The entry collides with an existing one
        InvalidEntryError: Non-positive entry while those are refused
    """
    entries = storage.load_entries_or_empty(store, namespace)
    entry = Entry(start_time=start, end_time=end, comment=comment)

    entries = append(entries, entry, reject_nonpositive)
    storage.save_entries(store, namespace, sort_by_start(entries))
    log.info(f"Added entry to namespace '{namespace}': {entry.start_time.isoformat()} - {entry.end_time.isoformat()} ({entry.duration})")
    return entry


def clock_out(
    store: DataStore,
    namespace: str,
    comment: str | None = None,
    ending: datetime | None = None,
    reject_nonpositive: bool | None = None,
) -> Entry:
    """
    Stop the clock and add its entry.

    The marker is removed only after the entry was stored, so a rejected
    entry leaves the clock running.

    Raises:
        NotRunningError: No clock is running
        OverlapError: The entry collides with an existing one
    """
    if not storage.marker_exists(store, namespace):
        raise NotRunningError(namespace)

    marker = storage.load_marker(store, namespace)
    entry = record(store, namespace, marker.start_time, ending or now(), comment, reject_nonpositive)
    storage.delete_marker(store, namespace)
    return entry


def abort(store: DataStore, namespace: str) -> ClockinMarker:
    """
    Abort the running clock by deleting its marker.

    Returns:
        The discarded marker

    Raises:
        NotRunningError: No clock is running
    """
    if not storage.marker_exists(store, namespace):
        raise NotRunningError(namespace)

    marker = storage.load_marker(store, namespace)
    storage.delete_marker(store, namespace)
    log.info(f"Aborted clock for namespace '{namespace}' started at {marker.start_time.isoformat()}")
    return marker


def clock_duration(
    store: DataStore,
    namespace: str,
    span: timedelta,
    starting: datetime | None = None,
    comment: str | None = None,
    reject_nonpositive: bool | None = None,
) -> Entry:
    """
    Clock an arbitrary span, either from ``starting`` or ending now.

    Raises:
        OverlapError: The entry collides with an existing one
    """
    if starting is not None:
        start, end = starting, starting + span
    else:
        end = now()
        start = end - span

    return record(store, namespace, start, end, comment, reject_nonpositive)


def status(store: DataStore, namespace: str, current: datetime | None = None) -> ClockStatus | None:
    """Running clock of the namespace, or None when idle."""
    if not storage.marker_exists(store, namespace):
        return None

    marker = storage.load_marker(store, namespace)
    running = Duration.from_span(marker.start_time, current or now())
    return ClockStatus(namespace=namespace, start_time=marker.start_time, running=running)
