# src/logadapter/core/logging/adapter.py
"""
Key/value logging adapter over the stdlib `logging` module.

Callers log with a flat sequence of alternating keys and values:

    log = new_stackdriver_logger(sys.stdout, service="billing", version="1.4.2")
    log = log.with_values("component", "invoicer")
    log.log("msg", "invoice sent", "invoice_id", 42)
    log.log("msg", "upstream timed out", "severity", Level.ERROR)

Each call is translated into one leveled `LogRecord`:

  - odd-length input is completed with MISSING_VALUE, never truncated;
  - the first ("severity", <Level>) pair selects the level and is removed
    from the fields (INFO when absent);
  - pairs whose key is not a string carry no field;
  - the remaining pairs are merged over the contextual fields collected by
    `with_values` / `with_fields` and attached as `record.fields`.

Fields ride on a single `fields` attribute instead of being splatted into
`extra`, so keys like "msg" or "name" never clash with LogRecord attributes.
The formatters in formatters.py flatten them back out.

`Logger` values are immutable: every `with_*` call returns a new instance that
shares the underlying `logging.Logger`. A derived logger can be handed to a
request, task or thread without coordination.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterable, TextIO

from logadapter.exceptions.base import CopyError

from .formatters import StackdriverFormatter
from .levels import Level

SEVERITY_KEY = "severity"
MESSAGE_KEYS = ("msg", "message")


class _MissingValue:
    """Placeholder value for a trailing key that was logged without a value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "(MISSING)"

    __str__ = __repr__

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING_VALUE = _MissingValue()


# -----------------------
# key/value helpers
# -----------------------
def copy_keyvals(keyvals: Iterable[Any]) -> list[Any]:
    """
    Deep-copy every element of a key/value sequence into a new list.

    Raises:
        CopyError: if any element cannot be copied. Nothing is partially returned.
    """
    values = list(keyvals)
    copied: list[Any] = []
    for i, value in enumerate(values):
        try:
            copied.append(copy.deepcopy(value))
        except Exception as exc:
            key = values[i - 1] if i % 2 else value
            raise CopyError(f"could not copy log value at position {i}: {exc}", index=i, key=key) from exc
    return copied


def pad_keyvals(kvs: list[Any]) -> list[Any]:
    """Complete an odd-length sequence with MISSING_VALUE (in place) and return it."""
    if len(kvs) % 2:
        kvs.append(MISSING_VALUE)
    return kvs


def severity_from_keyvals(kvs: list[Any]) -> tuple[Level, int]:
    """
    Return (level, index) of the first ("severity", <Level>) pair.

    Only key positions are scanned. When no pair matches the result is
    (Level.INFO, -1). The sequence must already be even-length.
    """
    for i in range(0, len(kvs) - 1, 2):
        key = kvs[i]
        if isinstance(key, str) and key == SEVERITY_KEY and isinstance(kvs[i + 1], Level):
            return kvs[i + 1], i
    return Level.INFO, -1


def keyvals_to_fields(kvs: list[Any]) -> dict[str, Any]:
    """Pair up an even-length sequence; pairs with non-string keys are skipped."""
    fields: dict[str, Any] = {}
    for i in range(0, len(kvs) - 1, 2):
        key = kvs[i]
        if isinstance(key, str):
            fields[key] = kvs[i + 1]
    return fields


def message_from_keyvals(kvs: list[Any]) -> str:
    for i in range(0, len(kvs) - 1, 2):
        if isinstance(kvs[i], str) and kvs[i] in MESSAGE_KEYS:
            return str(kvs[i + 1])
    return ""


# -----------------------
# Logger
# -----------------------
class Logger:
    """
    Contextual key/value logger wrapping a `logging.Logger`.

    Construction:
      - logger: the leveled backend records are emitted on.
      - fields: contextual fields attached to every record (copied, read-only).

    Usually built through `new_stackdriver_logger()` or
    `builder.new_logger_from_settings()` rather than directly.
    """

    __slots__ = ("_logger", "_fields")

    def __init__(self, logger: logging.Logger, fields: Mapping[str, Any] | None = None):
        self._logger = logger
        self._fields = MappingProxyType(dict(fields or {}))

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    def __repr__(self) -> str:
        return f"<Logger {self._logger.name!r} fields={dict(self._fields)!r}>"

    # --- context ---
    def with_values(self, *keyvals: Any) -> Logger:
        """
        Return a logger whose context also carries `keyvals`.

        With no arguments the same instance is returned. Values are deep-copied
        so later mutation by the caller does not leak into the context.

        Raises:
            CopyError: if a value cannot be deep-copied.
        """
        if not keyvals:
            return self
        kvs = pad_keyvals(copy_keyvals(keyvals))
        return self._layer(keyvals_to_fields(kvs))

    def with_fields(self, fields: Mapping[str, Any]) -> Logger:
        """
        Return a logger whose context also carries the given mapping.

        Same rules as `with_values`: copied, non-string keys skipped, last write wins.
        """
        if not fields:
            return self
        copied: dict[str, Any] = {}
        for key, value in fields.items():
            if not isinstance(key, str):
                continue
            try:
                copied[key] = copy.deepcopy(value)
            except Exception as exc:
                raise CopyError(f"could not copy field {key!r}: {exc}", key=key) from exc
        return self._layer(copied)

    def _layer(self, fields: Mapping[str, Any]) -> Logger:
        merged = dict(self._fields)
        merged.update(fields)
        return Logger(self._logger, merged)

    # --- emission ---
    def log(self, *keyvals: Any, severity: Level | None = None) -> None:
        """
        Emit one record built from alternating keys and values.

        Args:
            *keyvals: "key", value, "key", value, ...
            severity: explicit level. Overrides a ("severity", <Level>) pair,
                      which is still removed from the fields.

        Raises:
            CopyError: if the values cannot be copied; nothing is emitted.
        """
        self._log(keyvals, severity, stacklevel=3)

    def debug(self, *keyvals: Any) -> None:
        self._log(keyvals, Level.DEBUG, stacklevel=3)

    def info(self, *keyvals: Any) -> None:
        self._log(keyvals, Level.INFO, stacklevel=3)

    def warning(self, *keyvals: Any) -> None:
        self._log(keyvals, Level.WARNING, stacklevel=3)

    def error(self, *keyvals: Any) -> None:
        self._log(keyvals, Level.ERROR, stacklevel=3)

    def level_enabled(self, level: Level) -> bool:
        return self._logger.isEnabledFor(level)

    def _log(self, keyvals: tuple[Any, ...], severity: Level | None, stacklevel: int) -> None:
        if severity is not None and not isinstance(severity, Level):
            raise TypeError(f"severity must be a Level, got {type(severity).__name__}")

        kvs = pad_keyvals(copy_keyvals(keyvals))

        found, location = severity_from_keyvals(kvs)
        if location >= 0:
            del kvs[location:location + 2]
        level = severity if severity is not None else found

        if not self._logger.isEnabledFor(level):
            return

        fields = dict(self._fields)
        fields.update(keyvals_to_fields(kvs))
        # stacklevel points pathname/lineno at the code that called log()/info()/...
        self._logger.log(level, message_from_keyvals(kvs), extra={"fields": fields}, stacklevel=stacklevel)


# -----------------------
# constructors
# -----------------------
def new_stackdriver_logger(
    stream: TextIO,
    *,
    name: str = "logadapter",
    level: Level = Level.INFO,
    **formatter_options: Any,
) -> Logger:
    """
    Create a key/value Logger writing Stackdriver-style JSON lines to `stream`.

    Every call builds its own backend logger (not registered in the logging
    manager, not propagating to root), so two adapters never share handlers.
    `formatter_options` are passed to StackdriverFormatter unchanged
    (service, version, env, datefmt).
    """
    backend = logging.Logger(name, level)
    backend.propagate = False
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StackdriverFormatter(**formatter_options))
    backend.addHandler(handler)
    return Logger(backend)


def with_values(logger: Logger, *keyvals: Any) -> Logger:
    """Function form of `Logger.with_values`."""
    return logger.with_values(*keyvals)


__all__ = [
    "Logger",
    "MISSING_VALUE",
    "SEVERITY_KEY",
    "new_stackdriver_logger",
    "with_values",
    "copy_keyvals",
    "pad_keyvals",
    "severity_from_keyvals",
    "keyvals_to_fields",
    "message_from_keyvals",
]
