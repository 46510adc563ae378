"""
Logging setup.

Library modules log through ``log``. Handlers are only attached by
``configure_logging`` (called from the CLI), so importing foliot never touches
the filesystem.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from foliot.core.config import LOG_BACKUP_COUNT, LOG_DIR, LOG_MAX_BYTES

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOGGER_NAME = "foliot"

log = logging.getLogger(LOGGER_NAME)
log.addHandler(logging.NullHandler())


def configure_logging(
    level: str | int = logging.WARNING,
    log_dir: Path | None = None,
    persistent: bool = False,
    console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the foliot logger.

    Args:
        level: Level name or number for the logger and its handlers
        log_dir: Directory for the rotating log file (defaults to LOG_DIR)
        persistent: Also write to ``<log_dir>/foliot.log``
        console: Write to stderr

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    log.setLevel(level)
    log.propagate = False
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    persistent_handler_name = f"{LOGGER_NAME}:persistent"
    if persistent and not any(h.get_name() == persistent_handler_name for h in log.handlers):
        log_dir = log_dir or LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        persistent_handler = RotatingFileHandler(
            filename=log_dir / f"{LOGGER_NAME}.log",
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
            delay=True,
        )
        persistent_handler.setLevel(level)
        persistent_handler.setFormatter(fmt)
        persistent_handler.set_name(persistent_handler_name)
        log.addHandler(persistent_handler)

    console_handler_name = f"{LOGGER_NAME}:console"
    if console and not any(h.get_name() == console_handler_name for h in log.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(fmt)
        console_handler.set_name(console_handler_name)
        log.addHandler(console_handler)

    return log
