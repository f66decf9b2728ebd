"""Tests for thermo-ai structured logging."""

from __future__ import annotations

import logging
import re

import pytest

from thermo_ai.log import setup_logging


class TestSetupLogging:
    """Tests for the setup_logging function."""

    def test_setup_logging_sets_level(self) -> None:
        """setup_logging('DEBUG') must set root logger to DEBUG."""
        setup_logging("DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_default_level_is_info(self) -> None:
        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_invalid_level_raises(self) -> None:
        """An unrecognised level string must raise ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging("INVALID")

    def test_setup_logging_idempotent(self) -> None:
        """Calling setup_logging() twice must not add duplicate handlers."""
        setup_logging()
        count_after_first = len(logging.getLogger().handlers)

        setup_logging("DEBUG")
        count_after_second = len(logging.getLogger().handlers)

        assert count_after_second == count_after_first


    def test_client_libraries_quieted_at_info(self) -> None:
        setup_logging("INFO")

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("google_genai").level == logging.WARNING

    def test_client_libraries_verbose_at_debug(self) -> None:
        setup_logging("DEBUG")

        assert logging.getLogger("urllib3").level == logging.DEBUG


class TestLogOutput:
    """Tests for the actual log output format."""

    def test_log_line_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A log line carries timestamp, level, logger name and message, pipe-separated."""
        setup_logging("INFO")
        logging.getLogger("test.format").info("hello world")

        captured = capsys.readouterr()
        assert re.search(
            r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2} \| INFO\s+\| test\.format \| hello world",
            captured.err,
        )

    def test_debug_not_shown_at_info_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("INFO")
        logging.getLogger("test.filter").debug("should not appear")

        captured = capsys.readouterr()
        assert "should not appear" not in captured.err
