"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from headr.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("headr").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("headr").level == logging.WARNING

    def test_debug_hidden_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("headr.services.head").debug("Wrote %d lines", 3)
        assert capfd.readouterr().err == ""

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("headr.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "headr.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("headr.services.head").debug("Skipping %s", "gone.txt")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Skipping gone.txt"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "headr.services.head"

    def test_clears_context_from_earlier_runs(self, capfd: pytest.CaptureFixture[str]) -> None:
        structlog.contextvars.bind_contextvars(source="stale.txt")
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("headr.test").warning("fresh run")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert "source" not in parsed

    def test_bound_source_reaches_stdlib_records(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        with structlog.contextvars.bound_contextvars(source="a.txt"):
            logging.getLogger("headr.services.head").debug("Wrote %d lines", 2)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["source"] == "a.txt"
        assert parsed["event"] == "Wrote 2 lines"

    def test_logs_never_reach_stdout(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=False)
        structlog.get_logger("headr.test").warning("to stderr")
        assert capfd.readouterr().out == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
