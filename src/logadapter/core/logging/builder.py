# src/logadapter/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration from
Settings, and build key/value adapters that format the same way.

This module:
 - builds a dictConfig-compatible mapping from Settings (make_dict_config)
 - applies it to the stdlib logging tree (setup_logging), so the package's own
   `logging.getLogger(__name__)` loggers and third-party loggers (uvicorn)
   share the adapter's output format
 - builds a standalone adapter.Logger from Settings (new_logger_from_settings)

Configuration knobs (on your Settings object):
 - LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR, LOG_MAX_BYTES,
   LOG_BACKUP_COUNT, ENV, SERVICE_NAME, SERVICE_VERSION

Settings may be any object with those attributes (tests use SimpleNamespace);
SERVICE_NAME / SERVICE_VERSION are optional there.
"""

from __future__ import annotations

import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .adapter import Logger, new_stackdriver_logger
from .filters import RedactFilter
from .formatters import ColorFormatter, StackdriverFormatter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)
from .levels import Level, parse_level

if TYPE_CHECKING:
    from logadapter.config.settings import Settings

logger = logging.getLogger(__name__)


def _service_options(settings: Settings) -> dict:
    return {
        "service": getattr(settings, "SERVICE_NAME", None),
        "version": getattr(settings, "SERVICE_VERSION", None),
        "env": settings.ENV,
    }


# -----------------------
# dictConfig builder
# -----------------------
def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (coloured text) and "json" (Stackdriver)
      - filters: "redact"
      - handlers: console, plus file/error_file OR error_console depending on LOG_TO_STDOUT
      - loggers: root, uvicorn.error, uvicorn.access
    """
    formatters = {
        "standard": {
            "()": ColorFormatter,
            "use_color": settings.ENV == "development",
        },
        "json": {
            "()": StackdriverFormatter,
            **_service_options(settings),
        },
    }

    filters = {
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            # request logging is done by RequestLoggingMiddleware
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize stdlib logging from settings.

    Creates LOG_DIR when file logging is enabled, then applies
    dictConfig(make_dict_config(settings)).
    """
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logger.debug("logging configured", extra={"log_format": settings.LOG_FORMAT})


def new_logger_from_settings(settings: Settings, stream: TextIO | None = None, name: str = "logadapter") -> Logger:
    """
    Build a key/value adapter configured from settings.

    JSON format gives a Stackdriver-formatted adapter (new_stackdriver_logger);
    text format swaps in the ColorFormatter. The adapter writes to `stream`
    (stdout by default) and never propagates into the root logger.
    """
    stream = stream if stream is not None else sys.stdout
    level: Level = parse_level(str(settings.LOG_LEVEL))
    adapter = new_stackdriver_logger(stream, name=name, level=level, **_service_options(settings))

    if settings.LOG_FORMAT == "text":
        for handler in adapter.logger.handlers:
            handler.setFormatter(ColorFormatter(use_color=settings.ENV == "development"))
    for handler in adapter.logger.handlers:
        handler.addFilter(RedactFilter())
    return adapter


__all__ = ["make_dict_config", "setup_logging", "new_logger_from_settings"]
