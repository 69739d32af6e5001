"""Runtime configuration defaults for persistence and logging."""

from __future__ import annotations

import os

DB_PATH = "data/deliverybook.db"
LOG_PATH = "data/deliverybook.log"
LOG_LEVEL = "INFO"

_DB_PATH_ENV = "DELIVERYBOOK_DB_PATH"
_LOG_PATH_ENV = "DELIVERYBOOK_LOG_PATH"
_LOG_LEVEL_ENV = "DELIVERYBOOK_LOG_LEVEL"


def _env_or_default(env_name: str, default: str) -> str:
    value = os.environ.get(env_name, "").strip()
    return value or default


def resolve_db_path(override: str | None = None) -> str:
    """
    Resolve the data file path.

    Resolution order:
    1. explicit override (``--db`` on the command line)
    2. DELIVERYBOOK_DB_PATH
    3. DB_PATH
    """
    if override:
        return override
    return _env_or_default(_DB_PATH_ENV, DB_PATH)


def resolve_log_path() -> str:
    """Resolve the log file path from DELIVERYBOOK_LOG_PATH or LOG_PATH."""
    return _env_or_default(_LOG_PATH_ENV, LOG_PATH)


def resolve_log_level() -> str:
    return _env_or_default(_LOG_LEVEL_ENV, LOG_LEVEL).upper()
