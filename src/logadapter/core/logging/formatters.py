# src/logadapter/core/logging/formatters.py

"""
Formatters for records produced by the key/value adapter.

  - StackdriverFormatter: one JSON object per line in the shape Google Cloud
    Logging (formerly Stackdriver) understands: `severity`, `message`,
    `timestamp`, `serviceContext`, and `context.reportLocation` for errors so
    Error Reporting can group them. Adapter fields are flattened to top level.

  - ColorFormatter: a compact, ANSI-coloured line for local development,
    with the fields appended as key=value pairs.

Both read adapter fields from `record.fields` (set by adapter.Logger) and also
pick up plain `extra={...}` attributes, so records from ordinary
`logging.getLogger(__name__)` calls format the same way.

How to use (dictConfig fragment, see builder.py):

    formatters = {
        "json": {
            "()": StackdriverFormatter,
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "env": settings.ENV,
        },
    }

Security note:
  - Formatters print whatever fields they are given. Attach RedactFilter
    (filters.py) to the handler when fields may carry secrets.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any
from logging import LogRecord

from .levels import Level

# Attributes every LogRecord has; anything else on the record came from `extra`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "fields"}

# Cloud Logging severity names. Unknown levels fall back to DEFAULT.
STACKDRIVER_SEVERITY = {
    5: "DEBUG",       # TRACE
    10: "DEBUG",
    20: "INFO",
    30: "WARNING",
    40: "ERROR",
    50: "CRITICAL",   # FATAL
    60: "ALERT",      # PANIC
}


def stackdriver_severity(levelno: int) -> str:
    return STACKDRIVER_SEVERITY.get(int(levelno), "DEFAULT")


def record_fields(record: LogRecord) -> dict[str, Any]:
    """
    Collect the fields of a record: `extra` attributes first, then the
    adapter's `record.fields` on top.
    """
    fields = {
        k: v
        for k, v in record.__dict__.items()
        if k not in _RECORD_ATTRS and not k.startswith("_")
    }
    fields.update(getattr(record, "fields", None) or {})
    return fields


def _json_safe(value: Any) -> Any:
    # Level is an IntEnum; json.dumps would write it as a bare number.
    if isinstance(value, Level):
        return value.name
    # A cheap check to let simple values pass through unchanged.
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


class StackdriverFormatter(logging.Formatter):
    """
    Structured JSON formatter for Google Cloud Logging.

    Construction:
      - service: logical service name; emitted as serviceContext.service.
      - version: service version; emitted as serviceContext.version.
      - env: environment name; emitted as `env` when set.
      - datefmt: optional strftime format. When unset, timestamps are RFC 3339
        in UTC with microseconds ("2025-01-02T03:04:05.000006Z").

    Canonical keys always win over fields with the same name; a clashing
    field is kept under a nested "fields" object instead of being dropped.
    """

    def __init__(self, *, service: str | None = None, version: str | None = None,
                 env: str | None = None, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.service = service
        self.version = version
        self.env = env

    def format_timestamp(self, record: LogRecord) -> str:
        if self.datefmt:
            return self.formatTime(record, self.datefmt)
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return ts.isoformat(timespec="microseconds").replace("+00:00", "Z")

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "severity": stackdriver_severity(record.levelno),
            "message": record.getMessage(),
            "timestamp": self.format_timestamp(record),
            "logger": record.name,
        }

        if self.service:
            service_context = {"service": self.service}
            if self.version:
                service_context["version"] = self.version
            entry["serviceContext"] = service_context
        if self.env:
            entry["env"] = self.env

        # Error Reporting needs a report location on ERROR and above.
        if record.levelno >= logging.ERROR:
            entry["context"] = {
                "reportLocation": {
                    "filePath": record.pathname,
                    "lineNumber": record.lineno,
                    "functionName": record.funcName,
                }
            }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_trace"] = self.formatStack(record.stack_info)

        clashes: dict[str, Any] = {}
        for key, value in record_fields(record).items():
            if key in entry:
                clashes[key] = _json_safe(value)
            else:
                entry[key] = _json_safe(value)
        if clashes:
            entry["fields"] = clashes

        # ensure_ascii=False keeps unicode readable; default=str covers nested values.
        return json.dumps(entry, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly coloured formatter.

    Line shape:
        TIMESTAMP | LEVEL | LOGGER | MESSAGE key=value key=value

    ANSI codes may not render on every console; use the JSON formatter for
    anything that gets collected.
    """

    COLOR_CODES = {
        "TRACE": "\033[2;37m",     # dim white
        "DEBUG": "\033[1;36m",     # bold cyan
        "INFO": "\033[32m",        # green
        "WARNING": "\033[33m",     # yellow
        "ERROR": "\033[31m",       # red
        "CRITICAL": "\033[1;41m",  # bold on red background
        "PANIC": "\033[1;45m",     # bold on magenta background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_color: bool = True) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: LogRecord) -> str:
        if self.use_color:
            color = self.COLOR_CODES.get(record.levelname, "")
            reset = self.COLOR_CODES["RESET"]
        else:
            color = reset = ""

        timestamp = self.formatTime(record, self.datefmt)
        base = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<20} | "
            f"{record.getMessage()}"
        )

        pairs = " ".join(f"{k}={v!r}" if isinstance(v, str)
                         else f"{k}={v.name}" if isinstance(v, Level)
                         else f"{k}={v}"
                         for k, v in record_fields(record).items())
        if pairs:
            base = f"{base} {pairs}"

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base
