# src/logadapter/core/logging/filters.py
"""
Logging filters

RedactFilter masks sensitive values before a record reaches a formatter.

Adapter records carry their key/values in `record.fields`; plain stdlib calls
carry them as attributes set through `extra={...}`. The filter scrubs both,
matching key names case-insensitively against SENSITIVE. Nested mappings in
field values are scrubbed too (one level of dict per level of nesting).

The filter always returns True: it annotates, it never drops records.
Dropping noisy requests is the job of the middleware filters in
logadapter.core.middleware.options, which decide before a record exists.

Install it on handlers through dictConfig (see handlers.py / builder.py):

     "filters": {"redact": {"()": RedactFilter}},
     "handlers": {"console": {..., "filters": ["redact"]}},
"""

import logging
from logging import LogRecord
from collections.abc import Iterable, Mapping
from typing import Any

REDACTED = "***REDACTED***"


class RedactFilter(logging.Filter):
    SENSITIVE = frozenset({
        "password", "passwd", "secret", "token", "access_token", "refresh_token",
        "api_key", "ssn", "authorization", "cookie",
    })

    def __init__(self, name: str = "", extra_keys: Iterable[str] | None = None):
        super().__init__(name)
        self.sensitive = self.SENSITIVE | {k.lower() for k in (extra_keys or ())}

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                k: REDACTED if isinstance(k, str) and k.lower() in self.sensitive else self._scrub(v)
                for k, v in value.items()
            }
        return value

    def filter(self, record: LogRecord) -> bool:
        # attributes set through extra={...}
        for key in list(record.__dict__.keys()):
            if key.lower() in self.sensitive:
                record.__dict__[key] = REDACTED
        # adapter fields; replaced, not mutated, since other handlers share the record
        fields = getattr(record, "fields", None)
        if fields:
            record.fields = self._scrub(fields)
        return True


__all__ = ["RedactFilter", "REDACTED"]
