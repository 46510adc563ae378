"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from foliot.core.logger import log
from foliot.core.storage import DataStore
from foliot.models.entries import Entry

# Fixed offset so dates and month keys do not depend on the machine's zone
TZ = timezone(timedelta(hours=1))


def at(year, month, day, hour=0, minute=0) -> datetime:
    """Aware datetime in the test zone."""
    return datetime(year, month, day, hour, minute, tzinfo=TZ)


def make_entry(start: datetime, end: datetime, comment: str | None = None) -> Entry:
    return Entry(start_time=start, end_time=end, comment=comment)


@pytest.fixture
def store(tmp_path):
    """Empty data store in a temporary directory."""
    return DataStore(tmp_path / "foliot")


@pytest.fixture
def sample_entry():
    """Two hour morning entry."""
    return make_entry(at(2024, 1, 10, 10), at(2024, 1, 10, 12), "morning")


@pytest.fixture
def sample_entries(sample_entry):
    """Entries spread over two months, out of order."""
    return [
        make_entry(at(2024, 2, 1, 9), at(2024, 2, 1, 17, 15), "february"),
        sample_entry,
        make_entry(at(2024, 1, 10, 13), at(2024, 1, 10, 14, 30), None),
        make_entry(at(2024, 1, 11, 8), at(2024, 1, 11, 9), "standup"),
    ]


@pytest.fixture(autouse=True)
def restore_log_handlers():
    """Drop handlers that cli.run attached to the captured streams of a test."""
    handlers = list(log.handlers)
    level = log.level
    yield
    for handler in log.handlers:
        if handler not in handlers:
            handler.close()
    log.handlers = handlers
    log.setLevel(level)
