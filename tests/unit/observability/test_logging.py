"""Tests for structured logging."""

import json
import logging
import sys

import pytest

from bloomkit.core.config import Settings
from bloomkit.observability.logging import (
    StructuredFormatter,
    _sanitize_log_message,
    configure_from_settings,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name in ["bloomkit", "bloomkit.filters", "bloomkit.core"]:
        logging.getLogger(name).setLevel(logging.NOTSET)


def _record(message: str, **kwargs) -> logging.LogRecord:
    return logging.LogRecord(
        name="bloomkit.filters.bloom",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=kwargs.get("exc_info"),
    )


class TestSanitize:
    def test_escapes_newlines(self):
        assert _sanitize_log_message("a\nb\r\nc\rd") == "a\\nb\\r\\nc\\rd"

    def test_strips_control_chars(self):
        assert _sanitize_log_message("a\x00b\x1bc\td") == "abc\td"

    def test_non_string(self):
        assert _sanitize_log_message(42) == "42"


class TestStructuredFormatter:
    def test_json_output(self):
        line = StructuredFormatter().format(_record("Rejected merge"))
        data = json.loads(line)
        assert data["level"] == "WARNING"
        assert data["logger"] == "bloomkit.filters.bloom"
        assert data["message"] == "Rejected merge"
        assert "timestamp" in data

    def test_extra_fields_flattened(self):
        record = _record("merge")
        record.extra_fields = {"attribute": "hash_count"}
        data = json.loads(StructuredFormatter().format(record))
        assert data["attribute"] == "hash_count"

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record("failed", exc_info=sys.exc_info())
        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestConfigureLogging:
    def test_json_handler(self, restore_root_logger):
        configure_logging(level="DEBUG", json_output=True)
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        assert logging.getLogger("bloomkit.filters").level == logging.DEBUG

    def test_plain_handler(self, restore_root_logger):
        configure_logging(level="WARNING", json_output=False)
        formatter = restore_root_logger.handlers[0].formatter
        assert not isinstance(formatter, StructuredFormatter)

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "bloomkit.log"
        configure_logging(level="INFO", json_output=False, log_file=str(log_file))
        get_logger("bloomkit.test").info("written")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert json.loads(log_file.read_text().splitlines()[-1])["message"] == "written"

    def test_from_settings(self, restore_root_logger):
        configure_from_settings(Settings(log_level="ERROR", log_json=True))
        assert restore_root_logger.level == logging.ERROR
        assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)


def test_get_logger():
    assert get_logger("bloomkit.x") is logging.getLogger("bloomkit.x")
