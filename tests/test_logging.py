"""Tests for structured logging configuration."""

import json

import pytest
import structlog

from sqs_batch.core.logging import (
    bind_invocation,
    clear_invocation,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    clear_invocation()
    structlog.reset_defaults()


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_events_rendered_as_json(self, capsys):
        """Test that events are JSON lines with level and timestamp."""
        configure_logging(level="INFO")

        get_logger("test").info("messages_deleted", queue_url="q", count=3)

        events = _json_lines(capsys.readouterr().out)
        assert len(events) == 1
        assert events[0]["event"] == "messages_deleted"
        assert events[0]["count"] == 3
        assert events[0]["level"] == "info"
        assert "timestamp" in events[0]

    def test_level_filters_events(self, capsys):
        """Test that events below the configured level are dropped."""
        configure_logging(level="warning")

        logger = get_logger("test")
        logger.info("dropped")
        logger.warning("kept")

        events = _json_lines(capsys.readouterr().out)
        assert [e["event"] for e in events] == ["kept"]

    def test_unknown_level_defaults_to_info(self, capsys):
        configure_logging(level="chatty")

        logger = get_logger("test")
        logger.debug("dropped")
        logger.info("kept")

        assert [e["event"] for e in _json_lines(capsys.readouterr().out)] == ["kept"]

    def test_non_serializable_values(self, capsys):
        """Test that values without a JSON form are rendered as strings."""
        configure_logging()

        get_logger("test").error("batch_partially_failed", error=RuntimeError("boom"))

        assert _json_lines(capsys.readouterr().out)[0]["error"] == "boom"


class TestInvocationContext:
    """Tests for per-invocation context binding."""

    def test_bound_values_added_to_events(self, capsys):
        """Test that the request id is attached to every event."""
        configure_logging()
        bind_invocation(aws_request_id="req-1")

        logger = get_logger("test")
        logger.info("first")
        logger.info("second")

        events = _json_lines(capsys.readouterr().out)
        assert [e["aws_request_id"] for e in events] == ["req-1", "req-1"]

    def test_bind_replaces_previous_invocation(self, capsys):
        """Test that context does not leak between invocations."""
        configure_logging()
        bind_invocation(aws_request_id="req-1", function="old")
        bind_invocation(aws_request_id="req-2")

        get_logger("test").info("event")

        event = _json_lines(capsys.readouterr().out)[0]
        assert event["aws_request_id"] == "req-2"
        assert "function" not in event

    def test_clear_invocation(self, capsys):
        configure_logging()
        bind_invocation(aws_request_id="req-1")
        clear_invocation()

        get_logger("test").info("event")

        assert "aws_request_id" not in _json_lines(capsys.readouterr().out)[0]
