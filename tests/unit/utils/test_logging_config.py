"""Tests for projfind.utils.logging_config module."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from projfind.utils.logging_config import (
    JsonFormatter,
    LogFormat,
    LogLevel,
    SearchLogger,
    StructuredFormatter,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)


def _record(**extra):
    record = logging.LogRecord("projfind", logging.INFO, "x.py", 10, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestEnums:
    """Tests for LogLevel and LogFormat."""

    def test_level_values(self):
        assert LogLevel.WARNING == "WARNING"
        assert LogLevel("DEBUG") is LogLevel.DEBUG

    def test_format_values(self):
        assert LogFormat.SIMPLE == "simple"
        assert LogFormat.JSON == "json"


class TestSearchLogger:
    """Tests for SearchLogger."""

    def test_default_level(self):
        logger = SearchLogger(enable_console=False)
        assert logger.logger.level == logging.WARNING
        assert logger.logger.handlers == []

    def test_reconfigure_replaces_handlers(self):
        SearchLogger(name="projfind-test")
        logger = SearchLogger(name="projfind-test")
        assert len(logger.logger.handlers) == 1

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "projfind.log"
        logger = SearchLogger(
            name="projfind-file",
            level=LogLevel.INFO,
            log_file=log_file,
            enable_console=False,
            enable_file=True,
        )
        logger.info("Collected candidates")
        for handler in logger.logger.handlers:
            handler.flush()
        assert "Collected candidates" in log_file.read_text(encoding="utf-8")

    def test_source_stats(self, caplog):
        caplog.set_level(logging.INFO, logger="projfind")
        get_logger().log_source_stats("files", 12, 3.5)
        assert "Collected 12 candidates from files in 3.50ms" in caplog.text
        assert caplog.records[-1].candidates == 12

    def test_rank_complete_is_debug(self, caplog):
        caplog.set_level(logging.INFO, logger="projfind")
        get_logger().log_rank_complete("door", 3, 2, 0.1)
        assert caplog.text == ""
        caplog.set_level(logging.DEBUG, logger="projfind")
        get_logger().log_rank_complete("door", 3, 2, 0.1)
        assert "Ranked query='door': 2/3 matched" in caplog.text

    def test_file_error_is_warning(self, caplog):
        caplog.set_level(logging.WARNING, logger="projfind")
        get_logger().log_file_error("a.py", "denied", stage="scan")
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.stage == "scan"


class TestFormatters:
    """Tests for JsonFormatter and StructuredFormatter."""

    def test_json(self):
        data = json.loads(JsonFormatter().format(_record(query="door")))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["query"] == "door"

    def test_structured(self):
        line = StructuredFormatter().format(_record(source="files"))
        assert "[INFO] projfind: hello world" in line
        assert line.endswith("| source=files")


class TestGlobalLogger:
    """Tests for module-level helpers."""

    def test_configure_replaces_global(self):
        logger = configure_logging(level=LogLevel.ERROR, enable_console=False)
        assert get_logger() is logger
        assert logger.logger.level == logging.ERROR

    def test_enable_debug(self):
        configure_logging(enable_console=False)
        enable_debug_logging()
        assert get_logger().level == LogLevel.DEBUG
        assert get_logger().logger.level == logging.DEBUG

    def test_disable(self):
        configure_logging(enable_console=False)
        disable_logging()
        assert get_logger().logger.level > logging.CRITICAL
