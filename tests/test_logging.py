"""Tests for logging configuration, formatters and context propagation."""

import json
import logging

import pytest

from freelance_hub.logging import ComponentLoggerAdapter, get_logger
from freelance_hub.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from freelance_hub.logging.context import (
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture
def logger():
    """Create a test logger with no handlers."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert log_obj["timestamp"].endswith("Z")


def test_json_formatter_redacts_credentials(logger):
    """Credential-bearing extra fields never reach the output."""
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Uploading",
        (),
        None,
        extra={"authorization": "Bearer secret", "token": "secret", "target": "manifest"},
    )

    output = JSONFormatter().format(record)
    log_obj = json.loads(output)

    assert "secret" not in output
    assert log_obj["authorization"] == "***"
    assert log_obj["target"] == "manifest"


def test_key_value_formatter_with_extras(logger):
    """Test KeyValueFormatter includes extra fields as key=value pairs."""
    formatter = KeyValueFormatter("%(levelname)s %(name)s: %(message)s")
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Uploaded",
        (),
        None,
        extra={"event": "storage.upload.succeeded", "file_count": 2, "token": "secret"},
    )

    output = formatter.format(record)

    assert "event=storage.upload.succeeded" in output
    assert "file_count=2" in output
    assert "token=***" in output
    assert "secret" not in output


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter adds service, environment and context fields."""
    log_filter = ContextualFilter(service="freelance-hub", environment="test")

    with log_context(publish_run_id="abc123"):
        record = logger.makeRecord("test", logging.INFO, "test.py", 1, "msg", (), None)
        log_filter.filter(record)

    assert record.service == "freelance-hub"
    assert record.environment == "test"
    assert record.publish_run_id == "abc123"


def test_contextual_filter_keeps_explicit_fields(logger):
    log_filter = ContextualFilter()

    with log_context(target="manifest"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "msg", (), None, extra={"target": "certification"}
        )
        log_filter.filter(record)

    assert record.target == "certification"


def test_nested_context():
    """Test nested context pushes and pops."""
    outer = push_log_context(publish_run_id="abc123")
    inner = push_log_context(target="manifest")
    assert get_log_context() == {"publish_run_id": "abc123", "target": "manifest"}

    pop_log_context(inner)
    assert get_log_context() == {"publish_run_id": "abc123"}

    pop_log_context(outer)
    assert get_log_context() == {}


def test_log_context_restored_after_exception():
    with pytest.raises(RuntimeError):
        with log_context(publish_run_id="abc123"):
            raise RuntimeError("boom")

    assert get_log_context() == {}


def test_get_logger_with_component():
    adapter = get_logger("freelance_hub.test", component="storage")

    assert isinstance(adapter, ComponentLoggerAdapter)
    msg, kwargs = adapter.process("hello", {"extra": {"event": "x"}})
    assert kwargs["extra"] == {"component": "storage", "event": "x"}


def test_get_logger_without_component():
    assert isinstance(get_logger("freelance_hub.test"), logging.Logger)


def test_configure_logging_json(restore_root_logger):
    configure_logging(level="debug", format_type="json", environment="test")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JSONFormatter)


@pytest.mark.parametrize(
    "kwargs",
    [{"level": "LOUD"}, {"format_type": "xml"}],
)
def test_configure_logging_rejects_invalid_values(kwargs, restore_root_logger):
    with pytest.raises(ValueError):
        configure_logging(**kwargs)
