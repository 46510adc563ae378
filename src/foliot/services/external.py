"""
External programs: the user's editor and git in the data directory.
"""

import os
import subprocess
from pathlib import Path

from foliot.core import storage
from foliot.core.config import EDITOR_ENV_VARS, FALLBACK_EDITOR
from foliot.core.errors import ExternalCommandError, NotFoundError
from foliot.core.logger import log
from foliot.core.storage import DataStore


def find_editor(environ=None) -> str:
    """First of $EDITOR, $VISUAL that is set, else vi."""
    environ = os.environ if environ is None else environ
    for name in EDITOR_ENV_VARS:
        if environ.get(name):
            return environ[name]
    return FALLBACK_EDITOR


def _run(args: list[str], what: str) -> None:
    log.debug(f"Running {args}")
    try:
        result = subprocess.run(args)
    except OSError as e:
        raise ExternalCommandError(f"Unable to open {what}: {e}") from e
    if result.returncode != 0:
        raise ExternalCommandError(f"{what.capitalize()} exited with error code {result.returncode}")


def edit(store: DataStore, namespace: str, clockin: bool = False, editor: str | None = None) -> Path:
    """
    Open the entries file (or the clock-in file) of a namespace in an editor.

    Raises:
        NotFoundError: The file does not exist
        ExternalCommandError: The editor could not be started or failed
    """
    if clockin:
        key = storage.clockin_key(namespace)
        missing = f"No clockin file found for namespace '{namespace}'"
    else:
        key = storage.entries_key(namespace)
        missing = f"No entry file found for namespace '{namespace}'"

    if not store.exists(key):
        raise NotFoundError(missing)

    path = store.path(key)
    _run([editor or find_editor(), str(path)], "editor")
    return path


def git(store: DataStore, git_args: list[str]) -> None:
    """Run ``git -C <data dir> <git_args...>``."""
    if not store.root.is_dir():
        raise NotFoundError(f"Path not found: {store.root}")
    _run(["git", "-C", str(store.root), *git_args], "git")


def commit(store: DataStore, namespace: str, description: str) -> str:
    """Commit all tracked changes with a '[namespace] description' message."""
    message = f"[{namespace}] {description}"
    git(store, ["commit", "-am", message])
    return message


def sync(store: DataStore) -> None:
    """Pull with rebase, then push."""
    git(store, ["pull", "--rebase"])
    git(store, ["push"])
