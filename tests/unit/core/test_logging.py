"""Unit tests for the Loguru formatters and setup."""

import json
from datetime import UTC, datetime
from typing import Any

import pytest
from pytest_mock import MockerFixture

from userdesk.core.config import Settings
from userdesk.core.logging import (
    CORRELATION_ID_DISPLAY_LENGTH,
    MAX_FIELD_VALUE_LENGTH,
    _state,
    format_console_with_context,
    serialize_for_json,
    setup_logging,
)


class _Level:
    name = "INFO"


@pytest.fixture
def record() -> dict[str, Any]:
    """A minimal Loguru record."""
    return {
        "time": datetime(2026, 1, 1, 12, 0, tzinfo=UTC),
        "level": _Level(),
        "message": "Request completed",
        "name": "userdesk.api.middleware.request_logging",
        "function": "dispatch",
        "line": 42,
        "extra": {},
        "exception": None,
    }


@pytest.mark.unit
class TestConsoleFormatter:
    """Test format_console_with_context."""

    def test_priority_fields_first(self, record: dict[str, Any]) -> None:
        """Request fields come before other context, in a fixed order."""
        record["extra"] = {
            "user_id": "u1",
            "status_code": 200,
            "correlation_id": "0123456789abcdef",
            "duration_ms": 1.5,
        }

        line = format_console_with_context(record)

        correlation = "0123456789abcdef"[:CORRELATION_ID_DISPLAY_LENGTH]
        assert line.index(correlation) < line.index("200") < line.index("1.5ms")
        assert line.index("1.5ms") < line.index("user_id=u1")
        assert "0123456789abcdef" not in line
        assert line.endswith("Request completed\n")

    def test_sensitive_values_redacted(self, record: dict[str, Any]) -> None:
        """Credential fields never reach the console."""
        record["extra"] = {"confirmPassword": "secret1"}

        line = format_console_with_context(record)

        assert "confirmPassword=[REDACTED]" in line
        assert "secret1" not in line

    def test_long_values_truncated(self, record: dict[str, Any]) -> None:
        """Long values are cut with an ellipsis."""
        record["extra"] = {"detail": "x" * 500}

        line = format_console_with_context(record)

        assert "x" * MAX_FIELD_VALUE_LENGTH not in line
        assert "..." in line

    def test_braces_escaped(self, record: dict[str, Any]) -> None:
        """Braces in messages cannot be read as format fields."""
        record["message"] = "body {name}"

        assert "body {{name}}" in format_console_with_context(record)

    def test_exception_placeholder(self, record: dict[str, Any]) -> None:
        """Records with an exception ask Loguru to render it."""
        record["exception"] = object()

        assert format_console_with_context(record).endswith("\n{exception}\n")


@pytest.mark.unit
class TestJsonFormatter:
    """Test serialize_for_json."""

    def test_fields(self, record: dict[str, Any]) -> None:
        """The JSON line carries the record and its context."""
        record["extra"] = {
            "correlation_id": "c1",
            "password": "secret1",
            "_private": "hidden",
        }

        entry = json.loads(serialize_for_json(record))

        assert entry["timestamp"] == "2026-01-01T12:00:00+00:00"
        assert entry["level"] == "INFO"
        assert entry["message"] == "Request completed"
        assert entry["correlation_id"] == "c1"
        assert entry["password"] == "[REDACTED]"
        assert "_private" not in entry

    def test_non_json_values_stringified(self, record: dict[str, Any]) -> None:
        """Objects without a JSON form are rendered with str()."""
        record["extra"] = {"cause": ValueError("bad")}

        assert json.loads(serialize_for_json(record))["cause"] == "bad"

    def test_exception_summary(
        self, record: dict[str, Any], mocker: MockerFixture
    ) -> None:
        """Exceptions are summarized by type and value."""
        record["exception"] = mocker.Mock(type=KeyError, value=KeyError("user"))

        entry = json.loads(serialize_for_json(record))

        assert entry["exception"] == {"type": "KeyError", "value": "'user'"}


@pytest.mark.unit
class TestSetupLogging:
    """Test setup_logging."""

    def test_configures_once(self, mocker: MockerFixture) -> None:
        """Sinks are installed on the first call only."""
        mocker.patch.object(_state, "configured", False)
        mock_logger = mocker.patch("userdesk.core.logging.logger")

        setup_logging(Settings())
        setup_logging(Settings())

        mock_logger.remove.assert_called_once()
        mock_logger.add.assert_called_once()
        assert _state.configured is True

    def test_json_sink_in_production(
        self, mocker: MockerFixture, production_env: None
    ) -> None:
        """Production settings install a callable JSON sink."""
        mocker.patch.object(_state, "configured", False)
        mock_logger = mocker.patch("userdesk.core.logging.logger")

        setup_logging(Settings())

        sink = mock_logger.add.call_args.args[0]
        assert callable(sink)
        assert mock_logger.add.call_args.kwargs["diagnose"] is False
