# src/logadapter/tests/test_logging/test_adapter.py
import io
import logging
import threading

import pytest

from logadapter.core.logging.adapter import (
    MISSING_VALUE,
    Logger,
    new_stackdriver_logger,
    severity_from_keyvals,
    with_values,
)
from logadapter.core.logging.levels import Level
from logadapter.exceptions.base import CopyError


# -----------------------
# log()
# -----------------------

def test_even_pairs_become_fields_at_info(logger, records):
    logger.log("msg", "hello", "user", "ada", "attempt", 3)

    assert len(records) == 1
    rec = records[0]
    assert rec.levelno == Level.INFO
    assert rec.fields == {"msg": "hello", "user": "ada", "attempt": 3}
    assert rec.getMessage() == "hello"


def test_odd_length_is_completed_with_missing_value(logger, records):
    logger.log("msg", "hello", "dangling")

    assert records[0].fields["dangling"] is MISSING_VALUE
    assert len(records[0].fields) == 2


def test_single_key_gets_missing_value(logger, records):
    logger.log("only")
    assert records[0].fields == {"only": MISSING_VALUE}
    assert str(MISSING_VALUE) == "(MISSING)"


def test_severity_pair_is_excised_and_sets_level(logger, records):
    logger.log("msg", "boom", "severity", Level.ERROR, "code", 7)

    rec = records[0]
    assert rec.levelno == Level.ERROR
    assert rec.levelname == "ERROR"
    assert "severity" not in rec.fields
    assert rec.fields == {"msg": "boom", "code": 7}


@pytest.mark.parametrize("value", ["error", 40, logging.ERROR, None])
def test_unrecognized_severity_value_stays_as_field(logger, records, value):
    logger.log("severity", value, "msg", "x")

    assert records[0].levelno == Level.INFO
    assert records[0].fields["severity"] == value


@pytest.mark.parametrize("key", ["Severity", "SEVERITY", "level"])
def test_only_exact_severity_key_is_recognized(logger, records, key):
    logger.log(key, Level.ERROR)

    assert records[0].levelno == Level.INFO
    assert records[0].fields[key] is Level.ERROR


def test_first_severity_pair_wins(logger, records):
    logger.log("severity", Level.WARNING, "severity", Level.ERROR)

    assert records[0].levelno == Level.WARNING
    # the second pair is an ordinary field
    assert records[0].fields == {"severity": Level.ERROR}


def test_severity_in_value_position_is_not_a_key(logger, records):
    logger.log("note", "severity", Level.ERROR, "x")

    assert records[0].levelno == Level.INFO


def test_non_string_keys_are_skipped_without_shifting_pairs(logger, records):
    logger.log("a", 1, 42, "ignored", "b", 2, None, "also ignored")

    assert records[0].fields == {"a": 1, "b": 2}


def test_explicit_severity_keyword_overrides_pair(logger, records):
    logger.log("msg", "x", "severity", Level.DEBUG, severity=Level.WARNING)

    assert records[0].levelno == Level.WARNING
    assert "severity" not in records[0].fields


def test_explicit_severity_must_be_a_level(logger):
    with pytest.raises(TypeError):
        logger.log("msg", "x", severity=40)


def test_level_helpers(logger, records):
    logger.debug("msg", "d")
    logger.info("msg", "i")
    logger.warning("msg", "w")
    logger.error("msg", "e")

    assert [r.levelno for r in records] == [Level.DEBUG, Level.INFO, Level.WARNING, Level.ERROR]


def test_records_below_backend_level_are_dropped(stream):
    log = new_stackdriver_logger(stream)  # INFO by default
    log.log("msg", "noisy", "severity", Level.DEBUG)
    log.log("msg", "kept")

    assert "noisy" not in stream.getvalue()
    assert "kept" in stream.getvalue()
    assert not log.level_enabled(Level.TRACE)
    assert log.level_enabled(Level.INFO)


def test_caller_location_points_at_call_site(logger, records):
    logger.log("msg", "here")
    logger.info("msg", "and here")

    for rec in records:
        assert rec.pathname == __file__
        assert rec.funcName == "test_caller_location_points_at_call_site"


def test_message_key_is_used_when_msg_absent(logger, records):
    logger.log("message", "via message")
    logger.log("k", "v")

    assert records[0].getMessage() == "via message"
    assert records[1].getMessage() == ""


def test_percent_in_message_is_not_interpolated(logger, records):
    logger.log("msg", "100% done")
    assert records[0].getMessage() == "100% done"


def test_copy_failure_raises_and_emits_nothing(logger, records):
    with pytest.raises(CopyError) as excinfo:
        logger.log("msg", "x", "lock", threading.Lock())

    assert records == []
    assert excinfo.value.index == 3
    assert excinfo.value.key == "lock"
    assert isinstance(excinfo.value.__cause__, TypeError)
    assert excinfo.value.to_payload()["code"] == "copy_failed"


def test_logged_values_are_copied(logger, records):
    tags = ["a"]
    logger.log("tags", tags)
    tags.append("b")

    assert records[0].fields["tags"] == ["a"]


# -----------------------
# with_values() / with_fields()
# -----------------------

def test_with_values_without_arguments_returns_same_instance(logger):
    assert logger.with_values() is logger
    assert with_values(logger) is logger
    assert logger.with_fields({}) is logger


def test_with_values_layers_context_onto_every_record(logger, records):
    child = logger.with_values("component", "billing", "region", "eu")
    child.log("msg", "x", "region", "us")

    # call-time value wins over context
    assert records[0].fields == {"component": "billing", "region": "us", "msg": "x"}


def test_with_values_does_not_mutate_receiver(logger, records):
    child = logger.with_values("request_id", "r-1")

    assert child is not logger
    assert dict(logger.fields) == {}
    assert dict(child.fields) == {"request_id": "r-1"}
    assert child.logger is logger.logger


def test_with_values_last_write_per_key_wins(logger):
    child = logger.with_values("k", 1).with_values("k", 2, "j", 3)
    assert dict(child.fields) == {"k": 2, "j": 3}


def test_with_values_odd_length_and_non_string_keys(logger):
    child = logger.with_values(1, "skipped", "tail")

    assert dict(child.fields) == {"tail": MISSING_VALUE}


def test_with_values_copies_values(logger, records):
    tags = ["a"]
    child = logger.with_values("tags", tags)
    tags.append("b")
    child.log("msg", "x")

    assert child.fields["tags"] == ["a"]
    assert records[0].fields["tags"] == ["a"]


def test_with_values_copy_failure_raises(logger):
    with pytest.raises(CopyError):
        logger.with_values("lock", threading.Lock())


def test_with_fields_layers_mapping(logger, records):
    child = logger.with_fields({"a": 1, 2: "skipped"}).with_fields({"a": 10, "b": 2})
    child.log("msg", "x")

    assert records[0].fields == {"a": 10, "b": 2, "msg": "x"}


def test_with_fields_copies_values(logger, records):
    owner = {"name": "ada"}
    child = logger.with_fields({"owner": owner})
    owner["name"] = "grace"
    child.log("msg", "x")

    assert child.fields["owner"] == {"name": "ada"}
    assert records[0].fields["owner"] == {"name": "ada"}


def test_with_fields_copy_failure_raises(logger):
    with pytest.raises(CopyError) as excinfo:
        logger.with_fields({"lock": threading.Lock()})
    assert excinfo.value.key == "lock"


def test_fields_view_is_read_only(logger):
    child = logger.with_values("a", 1)
    with pytest.raises(TypeError):
        child.fields["a"] = 2


# -----------------------
# construction
# -----------------------

def test_new_stackdriver_logger_writes_json_to_stream(json_lines, logger):
    logger.log("msg", "hello", "n", 1)

    [line] = json_lines()
    assert line["message"] == "hello"
    assert line["severity"] == "INFO"
    assert line["n"] == 1
    assert line["serviceContext"] == {"service": "svc", "version": "1.2.3"}


def test_each_adapter_has_its_own_backend():
    a = new_stackdriver_logger(io.StringIO())
    b = new_stackdriver_logger(io.StringIO())

    assert a.logger is not b.logger
    assert a.logger.propagate is False
    assert len(a.logger.handlers) == 1


def test_logger_wraps_any_backend():
    backend = logging.Logger("plain", logging.DEBUG)
    seen = []
    backend.addHandler(type("H", (logging.Handler,), {"emit": lambda self, r: seen.append(r)})())

    Logger(backend, {"a": 1}).log("b", 2)

    assert seen[0].fields == {"a": 1, "b": 2}


def test_severity_from_keyvals_defaults_to_info():
    assert severity_from_keyvals(["a", 1]) == (Level.INFO, -1)
    assert severity_from_keyvals(["a", 1, "severity", Level.PANIC]) == (Level.PANIC, 2)
