"""
Exception hierarchy for foliot.

Every failure of a command is one of these; the CLI prints the message and
exits with status 1.
"""


class FoliotError(Exception):
    """Base class for all foliot errors."""


class AlreadyRunningError(FoliotError):
    """Clock-in requested while a clock is already running."""

    def __init__(self, namespace: str, path=None):
        self.namespace = namespace
        self.path = path
        location = f" ('{path}')" if path else ""
        super().__init__(
            f"Clock is already running for namespace '{namespace}'{location}.\n"
            "Clock out or abort it before continuing."
        )


class NotRunningError(FoliotError):
    """Clock-out or abort requested while no clock is running."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"Clock is not running for namespace '{namespace}'")


class OverlapError(FoliotError):
    """A new entry collides with an existing one."""

    def __init__(self, candidate, existing):
        self.candidate = candidate
        self.existing = existing
        super().__init__(
            "New entry overlaps an existing one "
            f"({existing.start_time.isoformat()} - {existing.end_time.isoformat()})"
        )


class InvalidEntryError(FoliotError):
    """An entry ends at or before its start and non-positive entries are refused."""


class ParseError(FoliotError):
    """User supplied text could not be parsed."""

    def __init__(self, text: str, what: str = "datetime", detail: str | None = None):
        self.text = text
        message = f"unable to parse {what} '{text}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class NotFoundError(FoliotError):
    """A namespace file or store key does not exist."""


class CorruptDataError(FoliotError):
    """Stored data could not be deserialized."""


class StorageError(FoliotError):
    """The underlying file store failed."""


class ExternalCommandError(FoliotError):
    """An external program (editor, git) could not be run or failed."""
