"""Unit tests for LogLevel and emit.

Uses AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

import logging

import pytest

from logaspect.levels import LogLevel, emit


class TestLogLevel:
    """Tests for LogLevel parsing and numeric mapping."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("trace", LogLevel.TRACE),
            ("DEBUG", LogLevel.DEBUG),
            (" Info ", LogLevel.INFO),
            ("warn", LogLevel.WARN),
            ("WARNING", LogLevel.WARN),
            ("error", LogLevel.ERROR),
            (LogLevel.ERROR, LogLevel.ERROR),
        ],
    )
    def test_parse(self, name, expected):
        """Names parse case-insensitively, WARNING is an alias of WARN."""
        assert LogLevel.parse(name) is expected

    def test_parse_unknown(self):
        """Unknown names raise ValueError listing valid levels."""
        with pytest.raises(ValueError, match="TRACE, DEBUG, INFO, WARN, ERROR"):
            LogLevel.parse("fatal")

    @pytest.mark.parametrize(
        "level,number",
        [
            (LogLevel.TRACE, 5),
            (LogLevel.DEBUG, logging.DEBUG),
            (LogLevel.INFO, logging.INFO),
            (LogLevel.WARN, logging.WARNING),
            (LogLevel.ERROR, logging.ERROR),
        ],
    )
    def test_numeric(self, level, number):
        """Each level maps to a stdlib logging number."""
        assert level.numeric == number

    def test_trace_level_name_registered(self):
        """TRACE is known to the logging module."""
        assert logging.getLevelName(5) == "TRACE"


class TestEmit:
    """Tests for emit dispatch."""

    def test_emit_uses_level(self, call_logger, call_records):
        """emit writes the message at the mapped level."""
        # Act
        emit(call_logger, LogLevel.TRACE, "fine detail")
        emit(call_logger, LogLevel.WARN, "careful")

        # Assert
        assert call_records() == [("TRACE", "fine detail"), ("WARNING", "careful")]

    def test_emit_respects_logger_threshold(self, call_logger, call_records):
        """Lines below the logger's level are dropped by the sink."""
        # Arrange
        call_logger.setLevel(logging.ERROR)

        # Act
        emit(call_logger, LogLevel.INFO, "dropped")
        emit(call_logger, LogLevel.ERROR, "kept")

        # Assert
        assert call_records() == [("ERROR", "kept")]
