# src/logadapter/core/logging/levels.py
"""
Severity levels understood by the adapter.

A `Level` is the only value the reserved ``"severity"`` key recognizes:

    logger.log("msg", "disk almost full", "severity", Level.WARNING)

Plain ints and strings are not recognized and stay in the record as ordinary
fields. The numeric values line up with the stdlib `logging` levels so a
`Level` can be handed straight to `logging.Logger.log`; TRACE and PANIC are
registered as extra level names.
"""

import logging
from enum import IntEnum


class Level(IntEnum):
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL
    PANIC = 60


logging.addLevelName(Level.TRACE, "TRACE")
logging.addLevelName(Level.PANIC, "PANIC")


# Aliases accepted by settings / parse_level (lower-case keys).
LEVEL_ALIASES: dict[str, Level] = {
    "trace": Level.TRACE,
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARNING,
    "warning": Level.WARNING,
    "error": Level.ERROR,
    "fatal": Level.FATAL,
    "critical": Level.FATAL,
    "panic": Level.PANIC,
}


def parse_level(name: str) -> Level:
    """
    Resolve a level name such as "warn" or "ERROR" to a `Level`.

    Raises:
        ValueError: if the name is not a known level.
    """
    try:
        return LEVEL_ALIASES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"not a valid logging level: {name!r}") from None


__all__ = ["Level", "LEVEL_ALIASES", "parse_level"]
