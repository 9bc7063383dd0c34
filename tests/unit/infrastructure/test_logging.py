"""Tests for structured logging setup and scoped log context."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from wellness_insights.config import LoggingSettings
from wellness_insights.infrastructure.logging import get_logger, log_context, setup_logging

pytestmark = pytest.mark.unit


def _json_settings(**overrides: object) -> LoggingSettings:
    return LoggingSettings(level="INFO", format="json", include_caller=False, **overrides)


def _last_event(capsys: pytest.CaptureFixture[str]) -> dict[str, object]:
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines, "No log output captured"
    return json.loads(lines[-1])


@pytest.fixture(autouse=True)
def _clean_context() -> None:
    structlog.contextvars.clear_contextvars()


class TestSetupLogging:
    """Tests for logging configuration."""

    def test_json_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON format emits one parseable object per event."""
        setup_logging(_json_settings())
        get_logger("wellness.scoring").info("Scored", instrument="anxiety", total=9)

        event = _last_event(capsys)
        assert event["event"] == "Scored"
        assert event["instrument"] == "anxiety"
        assert event["total"] == 9
        assert event["level"] == "info"
        assert event["logger"] == "wellness.scoring"
        assert "timestamp" in event

    def test_timestamp_can_be_disabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No timestamp key when timestamps are off."""
        setup_logging(_json_settings(include_timestamp=False))
        get_logger("wellness.scoring").info("Scored")
        assert "timestamp" not in _last_event(capsys)

    def test_caller_fields(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Caller fields name the logging function."""
        setup_logging(LoggingSettings(level="INFO", format="json", include_caller=True))
        get_logger("wellness.scoring").info("Scored")
        assert _last_event(capsys)["func_name"] == "test_caller_fields"

    def test_console_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Console format renders the event and its values as text."""
        setup_logging(LoggingSettings(level="INFO", format="console", include_caller=False))
        get_logger("wellness.cli").info("Insights generated", window="30d")

        output = capsys.readouterr().out
        assert "Insights generated" in output
        assert "30d" in output

    def test_custom_stream(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events go to the given stream, leaving stdout for results."""
        stream = io.StringIO()
        setup_logging(_json_settings(), stream=stream)
        get_logger("wellness.cli").info("Loaded history", count=3)

        assert json.loads(stream.getvalue().strip().splitlines()[-1])["count"] == 3
        assert capsys.readouterr().out == ""

    def test_level_filters_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events below the configured level are dropped."""
        setup_logging(LoggingSettings(level="WARNING", format="json", include_caller=False))
        assert logging.getLogger().level == logging.WARNING

        get_logger("wellness.scoring").info("Answer clamped")
        assert capsys.readouterr().out == ""

    def test_defaults_from_config(self) -> None:
        """None falls back to the configured settings."""
        setup_logging(None)
        assert logging.getLogger().level == logging.INFO


class TestLogContext:
    """Tests for scoped log context."""

    def test_values_attached_inside_block(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Every event inside the block carries the bound values."""
        setup_logging(_json_settings())
        with log_context(user_id="student-1", window="30d"):
            get_logger("wellness.insights").info("Insights generated")

        event = _last_event(capsys)
        assert event["user_id"] == "student-1"
        assert event["window"] == "30d"

    def test_values_removed_after_block(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Values do not outlive the block, even when it raises."""
        setup_logging(_json_settings())
        with pytest.raises(RuntimeError), log_context(user_id="student-1"):
            raise RuntimeError("history unavailable")
        get_logger("wellness.insights").info("Next run")

        assert "user_id" not in _last_event(capsys)

    def test_nested_blocks_restore_outer_value(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An inner block for another student restores the outer id on exit."""
        setup_logging(_json_settings())
        logger = get_logger("wellness.insights")
        with log_context(user_id="student-1"):
            with log_context(user_id="student-2"):
                logger.info("Inner")
            assert _last_event(capsys)["user_id"] == "student-2"
            logger.info("Outer")

        assert _last_event(capsys)["user_id"] == "student-1"
