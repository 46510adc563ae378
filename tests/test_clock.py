"""Tests for the clock-in / clock-out state machine."""

from datetime import timedelta

import pytest

from conftest import at, make_entry

from foliot.core import storage
from foliot.core.errors import AlreadyRunningError, InvalidEntryError, NotRunningError, OverlapError
from foliot.models.duration import Duration
from foliot.services import clock


def test_clock_in_writes_marker(store):
    marker = clock.clock_in(store, "work", at(2024, 1, 10, 9))
    assert storage.marker_exists(store, "work")
    assert storage.load_marker(store, "work") == marker


def test_clock_in_defaults_to_now(store):
    marker = clock.clock_in(store, "work")
    assert marker.start_time.second == 0
    assert marker.start_time.tzinfo is not None


def test_double_clock_in_keeps_existing_marker(store):
    first = clock.clock_in(store, "work", at(2024, 1, 10, 9))
    with pytest.raises(AlreadyRunningError):
        clock.clock_in(store, "work", at(2024, 1, 10, 11))
    assert storage.load_marker(store, "work") == first


def test_namespaces_are_independent(store):
    clock.clock_in(store, "work", at(2024, 1, 10, 9))
    clock.clock_in(store, "hobby", at(2024, 1, 10, 9))
    assert clock.status(store, "work") is not None
    assert clock.status(store, "other") is None


def test_clock_out_without_clock_in(store):
    with pytest.raises(NotRunningError):
        clock.clock_out(store, "work")


def test_clock_in_then_out(store):
    clock.clock_in(store, "work", at(2024, 1, 10, 9))
    entry = clock.clock_out(store, "work", "worked", ending=at(2024, 1, 10, 17, 30))

    assert entry.start_time == at(2024, 1, 10, 9)
    assert entry.end_time == at(2024, 1, 10, 17, 30)
    assert entry.duration == Duration(8, 30)
    assert entry.comment == "worked"
    assert not storage.marker_exists(store, "work")
    assert storage.load_entries(store, "work") == [entry]


def test_rejected_clock_out_keeps_marker(store):
    storage.save_entries(store, "work", [make_entry(at(2024, 1, 10, 10), at(2024, 1, 10, 12))])
    clock.clock_in(store, "work", at(2024, 1, 10, 11))

    with pytest.raises(OverlapError):
        clock.clock_out(store, "work", ending=at(2024, 1, 10, 13))

    assert storage.marker_exists(store, "work")
    assert len(storage.load_entries(store, "work")) == 1


def test_nonpositive_clock_out_refused_keeps_marker(store):
    clock.clock_in(store, "work", at(2024, 1, 10, 11))

    with pytest.raises(InvalidEntryError):
        clock.clock_out(store, "work", ending=at(2024, 1, 10, 11), reject_nonpositive=True)

    assert storage.marker_exists(store, "work")
    assert not storage.entries_exist(store, "work")


def test_abort_discards_marker(store):
    clock.clock_in(store, "work", at(2024, 1, 10, 9))
    marker = clock.abort(store, "work")

    assert marker.start_time == at(2024, 1, 10, 9)
    assert not storage.marker_exists(store, "work")
    assert storage.load_entries_or_empty(store, "work") == []


def test_abort_without_clock_in(store):
    with pytest.raises(NotRunningError):
        clock.abort(store, "work")


def test_clock_duration_from_start(store):
    entry = clock.clock_duration(store, "work", timedelta(minutes=90), at(2024, 1, 10, 9), "review")
    assert entry.end_time == at(2024, 1, 10, 10, 30)
    assert storage.load_entries(store, "work") == [entry]


def test_clock_duration_ending_now(store):
    entry = clock.clock_duration(store, "work", timedelta(hours=2))
    assert entry.end_time - entry.start_time == timedelta(hours=2)
    assert entry.end_time.second == 0


def test_clock_duration_does_not_touch_marker(store):
    marker = clock.clock_in(store, "work", at(2024, 1, 10, 9))
    clock.clock_duration(store, "work", timedelta(hours=1), at(2024, 1, 9, 9))
    assert storage.load_marker(store, "work") == marker


def test_clock_duration_rejects_overlap(store):
    clock.clock_duration(store, "work", timedelta(hours=2), at(2024, 1, 10, 10))
    with pytest.raises(OverlapError):
        clock.clock_duration(store, "work", timedelta(hours=2), at(2024, 1, 10, 11))
    clock.clock_duration(store, "work", timedelta(hours=1), at(2024, 1, 10, 12))
    assert len(storage.load_entries(store, "work")) == 2


def test_entries_are_stored_sorted(store):
    clock.clock_duration(store, "work", timedelta(hours=1), at(2024, 1, 12, 9))
    clock.clock_duration(store, "work", timedelta(hours=1), at(2024, 1, 10, 9))
    clock.clock_duration(store, "work", timedelta(hours=1), at(2024, 1, 11, 9))
    starts = [e.start_time.day for e in storage.load_entries(store, "work")]
    assert starts == [10, 11, 12]


def test_status(store):
    assert clock.status(store, "work") is None
    clock.clock_in(store, "work", at(2024, 1, 10, 9))
    current = clock.status(store, "work", current=at(2024, 1, 10, 11, 45))
    assert current.start_time == at(2024, 1, 10, 9)
    assert current.running == Duration(2, 45)
