# src/logadapter/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict built from Settings; the
builder (builder.py) registers them under fixed names:

| Name            | Class                   | Level         | Formatter            |
| --------------- | ----------------------- | ------------- | -------------------- |
| `console`       | StreamHandler (stdout)  | LOG_LEVEL     | json or standard     |
| `file`          | RotatingFileHandler     | LOG_LEVEL     | json or standard     |
| `error_file`    | RotatingFileHandler     | ERROR         | json                 |
| `error_console` | StreamHandler (stderr)  | ERROR         | json                 |

The formatter names ("json", "standard") and the filter name ("redact") must
exist in the surrounding dictConfig; builder.make_dict_config provides them.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logadapter.config.settings import Settings


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    """
    Console handler on stdout, where container runtimes and Cloud Logging
    agents pick structured lines up.
    """
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": ["redact"],
        "stream": "ext://sys.stdout",
    }


def get_file_handler(settings: Settings) -> dict:
    file_path = str(Path(settings.LOG_DIR) / "app.log")
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": file_path,
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["redact"],
    }


# Error-specific rotating file to separate errors (useful for alerting/archival).
def get_error_file_handler(settings: Settings) -> dict:
    error_file_path = str(Path(settings.LOG_DIR) / "errors.log")
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",  # keep error files structured for easier ingestion
        "level": "ERROR",
        "filename": error_file_path,
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["redact"],
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": ["redact"],
        "stream": "ext://sys.stderr",
    }
