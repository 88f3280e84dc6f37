"""
Tests for structured JSON logging configuration.
"""

import json
import logging
import sys
from datetime import datetime
from io import StringIO
from unittest.mock import patch

import pytest

from hacklearn.core.logging_config import (
    JSONFormatter,
    LogLevel,
    PerformanceLogger,
    configure_from_dict,
    get_logger,
    setup_logging,
)


def _record(level=logging.INFO, msg="Index built", name="search.index", exc_info=None):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="/path/to/index.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """JSON log formatter."""

    def test_structured_fields(self):
        log_data = json.loads(JSONFormatter().format(_record()))

        assert log_data["level"] == "INFO"
        assert log_data["component"] == "search.index"
        assert log_data["message"] == "Index built"
        datetime.fromisoformat(log_data["timestamp"].replace("Z", "+00:00"))
        assert "file" not in log_data

    def test_source_location(self):
        log_data = json.loads(JSONFormatter(include_source_location=True).format(_record()))
        assert log_data["file"] == "index.py"
        assert log_data["line"] == 42

    def test_extras_are_included(self):
        record = _record()
        record.entries = 3
        record.route = {"name": "topic", "slug": "xss"}

        log_data = json.loads(JSONFormatter().format(record))

        assert log_data["entries"] == 3
        assert log_data["route"] == {"name": "topic", "slug": "xss"}

    def test_extras_cannot_clobber_core_fields(self):
        record = _record()
        record.component = "spoofed"
        log_data = json.loads(JSONFormatter().format(record))
        assert log_data["component"] == "search.index"

    def test_unserializable_extra_degrades_to_string(self):
        record = _record()
        record.payload = object()
        log_data = json.loads(JSONFormatter().format(record))
        assert "payload" in log_data

    def test_exception_info(self):
        try:
            raise ValueError("dataset exploded")
        except ValueError:
            record = _record(level=logging.ERROR, msg="Load failed", exc_info=sys.exc_info())

        log_data = json.loads(JSONFormatter().format(record))
        assert "ValueError" in log_data["exception"]
        assert "dataset exploded" in log_data["exception"]


class TestLogLevel:
    def test_from_string_is_case_insensitive(self):
        assert LogLevel.from_string("debug") is LogLevel.DEBUG

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            LogLevel.from_string("LOUD")

    def test_to_logging_level(self):
        assert LogLevel.WARNING.to_logging_level() == logging.WARNING


@pytest.mark.usefixtures("restore_root_logging")
class TestSetupLogging:
    """Handler installation on the root logger."""

    def test_info_goes_to_stdout_as_json(self):
        with patch("sys.stdout", new=StringIO()) as fake_stdout:
            setup_logging(level=LogLevel.INFO)
            logging.getLogger("site.router").info("Routing")

        log_data = json.loads(fake_stdout.getvalue().strip())
        assert log_data["message"] == "Routing"

    def test_level_filters_debug(self):
        with patch("sys.stdout", new=StringIO()) as fake_stdout:
            setup_logging(level=LogLevel.INFO)
            logger = logging.getLogger("site.router")
            logger.debug("hidden")
            logger.info("shown")
            logger.warning("also shown")

        lines = [line for line in fake_stdout.getvalue().splitlines() if line.strip()]
        assert [json.loads(line)["level"] for line in lines] == ["INFO", "WARNING"]

    def test_errors_go_to_stderr(self):
        with patch("sys.stdout", new=StringIO()) as fake_stdout, \
                patch("sys.stderr", new=StringIO()) as fake_stderr:
            setup_logging(level=LogLevel.INFO)
            logging.getLogger("purchases").error("boom")

        assert fake_stdout.getvalue() == ""
        assert json.loads(fake_stderr.getvalue())["message"] == "boom"

    def test_unsplit_streams_keep_stdout_clean(self):
        with patch("sys.stdout", new=StringIO()) as fake_stdout, \
                patch("sys.stderr", new=StringIO()) as fake_stderr:
            setup_logging(level=LogLevel.INFO, split_streams=False)
            logging.getLogger("hacklearn.cli").info("quiet please")

        assert fake_stdout.getvalue() == ""
        assert "quiet please" in fake_stderr.getvalue()

    def test_repeated_setup_does_not_duplicate(self):
        with patch("sys.stdout", new=StringIO()) as fake_stdout:
            setup_logging(level=LogLevel.INFO)
            setup_logging(level=LogLevel.INFO)
            logging.getLogger("x").info("once")

        assert len(fake_stdout.getvalue().strip().splitlines()) == 1

    def test_plain_text_format(self):
        with patch("sys.stdout", new=StringIO()) as fake_stdout:
            setup_logging(level=LogLevel.INFO, format_json=False)
            logging.getLogger("comments").info("plain")

        output = fake_stdout.getvalue()
        assert "INFO comments plain" in output

    def test_configure_from_dict_unknown_level_falls_back_to_info(self):
        configure_from_dict({"level": "chatty"})
        assert logging.getLogger().level == logging.INFO

    def test_configure_from_dict_reads_level(self):
        configure_from_dict({"level": "warning", "format_json": False})
        assert logging.getLogger().level == logging.WARNING


class TestGetLogger:
    def test_plain_logger(self):
        logger = get_logger("search.assistant")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "search.assistant"

    def test_context_is_merged(self, caplog):
        logger = get_logger("purchases", {"site": "hacklearn"})
        with caplog.at_level(logging.INFO, logger="purchases"):
            logger.info("Project purchased", extra={"project": "login-bypass-lab"})

        record = caplog.records[-1]
        assert record.site == "hacklearn"
        assert record.project == "login-bypass-lab"


class TestPerformanceLogger:
    def test_completed_with_duration(self, caplog):
        logger = logging.getLogger("perf.test")
        with caplog.at_level(logging.DEBUG, logger="perf.test"):
            with PerformanceLogger(logger, "render", chars=12) as perf:
                pass

        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["Starting render", "Completed render"]
        assert caplog.records[-1].duration_ms == perf.duration_ms
        assert caplog.records[-1].chars == 12

    def test_failure_logged_and_propagated(self, caplog):
        logger = logging.getLogger("perf.test")
        with caplog.at_level(logging.DEBUG, logger="perf.test"):
            with pytest.raises(RuntimeError):
                with PerformanceLogger(logger, "load"):
                    raise RuntimeError("nope")

        failed = caplog.records[-1]
        assert failed.levelno == logging.ERROR
        assert failed.getMessage() == "Failed load"
        assert failed.error_type == "RuntimeError"
