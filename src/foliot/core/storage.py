"""
YAML file store for entries and clock-in markers.

``DataStore`` maps opaque keys to files under the data directory. The
namespace helpers below derive keys and (de)serialize the models.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from foliot.core.config import CLOCKIN_KEY_TEMPLATE, DATA_DIR, ENTRIES_KEY_TEMPLATE
from foliot.core.errors import CorruptDataError, NotFoundError, StorageError
from foliot.core.logger import log
from foliot.models.entries import ClockinMarker, Entry, EntryList


class DataStore:
    """Key-value store backed by whole files in one directory."""

    def __init__(self, root: Path | None = None):
        self.root = Path(root) if root is not None else DATA_DIR

    def path(self, key: str) -> Path:
        """Absolute path of the file holding ``key``."""
        return self.root / key

    def exists(self, key: str) -> bool:
        return self.path(key).is_file()

    def load(self, key: str) -> bytes:
        path = self.path(key)
        if not path.is_file():
            raise NotFoundError(f"No file '{key}' found in {self.root}")
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Unable to read '{path}': {e}") from e

    def store(self, key: str, content: bytes) -> None:
        path = self.path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise StorageError(f"Unable to write '{path}': {e}") from e
        log.debug(f"Wrote {len(content)} bytes to {path}")

    def delete(self, key: str) -> None:
        path = self.path(key)
        if not path.is_file():
            raise NotFoundError(f"No file '{key}' found in {self.root}")
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Unable to remove '{path}': {e}") from e
        log.debug(f"Removed {path}")


# =============================================================================
# KEYS
# =============================================================================


def entries_key(namespace: str) -> str:
    """Key of the file that entries are collected in."""
    return ENTRIES_KEY_TEMPLATE.format(namespace=namespace)


def clockin_key(namespace: str) -> str:
    """Key of the file that contains the last clock-in timestamp."""
    return CLOCKIN_KEY_TEMPLATE.format(namespace=namespace)


# =============================================================================
# SERIALIZATION
# =============================================================================


def dump_yaml(data) -> bytes:
    """Serialize plain data to YAML bytes."""
    text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return text.encode("utf-8")


def _parse_yaml(content: bytes, key: str):
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise CorruptDataError(f"Unable to parse '{key}': {e}") from e


def encode_entries(entries: list[Entry]) -> bytes:
    return dump_yaml(EntryList.dump_python(entries, mode="json"))


def decode_entries(content: bytes, key: str = "entries") -> list[Entry]:
    data = _parse_yaml(content, key)
    if data is None:
        return []
    try:
        return EntryList.validate_python(data)
    except ValidationError as e:
        raise CorruptDataError(f"Invalid entries in '{key}': {e}") from e


def encode_marker(marker: ClockinMarker) -> bytes:
    return dump_yaml(marker.model_dump(mode="json"))


def decode_marker(content: bytes, key: str = "clockin") -> ClockinMarker:
    data = _parse_yaml(content, key)
    try:
        return ClockinMarker.model_validate(data)
    except ValidationError as e:
        raise CorruptDataError(f"Invalid clock-in marker in '{key}': {e}") from e


# =============================================================================
# NAMESPACE OPERATIONS
# =============================================================================


def entries_exist(store: DataStore, namespace: str) -> bool:
    return store.exists(entries_key(namespace))


def load_entries(store: DataStore, namespace: str) -> list[Entry]:
    """
    Load all entries of a namespace.

    Raises:
        NotFoundError: The namespace has no entry file
        CorruptDataError: The file does not hold a valid entry list
    """
    key = entries_key(namespace)
    if not store.exists(key):
        raise NotFoundError(f"No file found for namespace '{namespace}'")
    return decode_entries(store.load(key), key)


def load_entries_or_empty(store: DataStore, namespace: str) -> list[Entry]:
    """Like ``load_entries`` but a missing file is an empty namespace."""
    if not entries_exist(store, namespace):
        return []
    return load_entries(store, namespace)


def save_entries(store: DataStore, namespace: str, entries: list[Entry]) -> None:
    store.store(entries_key(namespace), encode_entries(entries))


def marker_exists(store: DataStore, namespace: str) -> bool:
    return store.exists(clockin_key(namespace))


def load_marker(store: DataStore, namespace: str) -> ClockinMarker:
    key = clockin_key(namespace)
    return decode_marker(store.load(key), key)


def save_marker(store: DataStore, namespace: str, marker: ClockinMarker) -> None:
    store.store(clockin_key(namespace), encode_marker(marker))


def delete_marker(store: DataStore, namespace: str) -> None:
    store.delete(clockin_key(namespace))
