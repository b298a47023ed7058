"""
Shared pytest fixtures.

- `stream`: an in-memory text sink adapters write to.
- `logger`: a Stackdriver adapter on `stream`, open down to TRACE.
- `records`: LogRecords captured from `logger`'s backend, for asserting on
  levels and fields without parsing JSON.
- `json_lines`: helper parsing everything written to `stream`.
"""

from __future__ import annotations

import io
import json
import logging

import pytest

from logadapter.core.logging.adapter import Logger, new_stackdriver_logger
from logadapter.core.logging.levels import Level


class RecordingHandler(logging.Handler):
    """Keeps every record it receives."""

    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(stream) -> Logger:
    return new_stackdriver_logger(stream, name="test", level=Level.TRACE, service="svc", version="1.2.3")


@pytest.fixture
def records(logger) -> list[logging.LogRecord]:
    handler = RecordingHandler()
    logger.logger.addHandler(handler)
    return handler.records


@pytest.fixture
def json_lines(stream):
    def read() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]
    return read
