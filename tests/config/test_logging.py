"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import structlog

from crosstrain.config.logging import APP_LOGGER, configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(APP_LOGGER).level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger(APP_LOGGER).level == logging.WARNING

    def test_human_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)
        structlog.get_logger("crosstrain.test").warning("hello world", key="val")
        output = stream.getvalue()
        assert "hello world" in output
        assert "key" in output

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("crosstrain.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "crosstrain.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("crosstrain.config.sources").debug("layer loaded")
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "layer loaded"
        assert parsed["level"] == "debug"

    def test_debug_hidden_without_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        structlog.get_logger("crosstrain.test").debug("quiet")
        assert stream.getvalue() == ""

    def test_third_party_debug_is_suppressed(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("asyncio").debug("loop noise")
        assert stream.getvalue() == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True)
        assert len(logging.getLogger().handlers) == 1
