"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable ("true"/"1"/"yes")."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"true", "1", "yes", "on"}


# =============================================================================
# PATHS
# =============================================================================

APP_NAME = "foliot"

_XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
DATA_DIR = Path(os.environ.get("FOLIOT_DATA_DIR") or _XDG_DATA_HOME / APP_NAME)
OUTPUT_DIR = Path(os.environ.get("FOLIOT_OUTPUT_DIR") or DATA_DIR / "exports")
LOG_DIR = DATA_DIR / "logs"

# Store keys, relative to DATA_DIR
ENTRIES_KEY_TEMPLATE = "{namespace}.yaml"
CLOCKIN_KEY_TEMPLATE = "{namespace}-clockin.yaml"

# =============================================================================
# COMMAND DEFAULTS
# =============================================================================

DEFAULT_NAMESPACE = "default"
DEFAULT_TAIL = 30  # 0 shows everything
DEFAULT_WRAP = 80

# Editor lookup order, last entry is the fallback command
EDITOR_ENV_VARS = ("EDITOR", "VISUAL")
FALLBACK_EDITOR = "vi"

# =============================================================================
# ENTRY VALIDATION
# =============================================================================

# Entries with end_time <= start_time are accepted unless this is set
REJECT_NONPOSITIVE_ENTRIES = _env_flag("FOLIOT_REJECT_NONPOSITIVE")

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

# Zero-padded year/month first so the key sorts chronologically
MONTH_KEY_FORMAT = "%Y/%m %B"

ENTRY_HEADERS = ["date", "from", "to", "duration", "comment"]
SUMMARY_HEADERS = ["month", "total hours", "hours / week", "days", "entries"]

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("FOLIOT_LOG_LEVEL", "WARNING").upper()
LOG_TO_FILE = _env_flag("FOLIOT_LOG_FILE")
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3
