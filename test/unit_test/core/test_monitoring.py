"""
Unit tests for monitoring and Logfire integration.

Logfire is never contacted: every test patches the ``logfire`` module used by
``mentorconnect.core.monitoring``.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from mentorconnect.core import monitoring

MODULE = "mentorconnect.core.monitoring"


@pytest.fixture
def enabled(monkeypatch):
    monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
    monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "token-123")


class TestInitializeLogfire:
    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", False)
        with patch(f"{MODULE}.logfire") as mock_logfire:
            assert monitoring.initialize_logfire() is False
        mock_logfire.configure.assert_not_called()

    def test_enabled_without_token(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "")
        with patch(f"{MODULE}.logfire") as mock_logfire:
            assert monitoring.initialize_logfire() is False
        mock_logfire.configure.assert_not_called()

    def test_configures_and_instruments(self, enabled):
        app = FastAPI()
        with patch(f"{MODULE}.logfire") as mock_logfire:
            assert monitoring.initialize_logfire(app) is True

        mock_logfire.configure.assert_called_once()
        assert mock_logfire.configure.call_args[1]["token"] == "token-123"
        mock_logfire.instrument_sqlalchemy.assert_called_once()
        mock_logfire.instrument_httpx.assert_called_once()
        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)

    def test_fastapi_needs_an_app(self, enabled):
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.initialize_logfire()
        mock_logfire.instrument_fastapi.assert_not_called()

    def test_configure_failure(self, enabled):
        with patch(f"{MODULE}.logfire") as mock_logfire:
            mock_logfire.configure.side_effect = RuntimeError("bad token")
            assert monitoring.initialize_logfire() is False
        mock_logfire.instrument_httpx.assert_not_called()

    def test_instrumentation_failure_is_not_fatal(self, enabled):
        with patch(f"{MODULE}.logfire") as mock_logfire:
            mock_logfire.instrument_sqlalchemy.side_effect = RuntimeError("no engine")
            assert monitoring.initialize_logfire() is True
        mock_logfire.instrument_httpx.assert_called_once()


class TestLogHelpers:
    @pytest.mark.parametrize(
        ("call", "args"),
        [
            (monitoring.log_api_request, ("GET", "/health", 200, 1.5)),
            (monitoring.log_realtime_event, ("user-u1", "notification", True)),
            (monitoring.log_error, ("ValueError", "boom", {"path": "/x"})),
        ],
    )
    def test_noop_when_disabled(self, monkeypatch, call, args):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", False)
        with patch(f"{MODULE}.logfire") as mock_logfire:
            call(*args)
        assert mock_logfire.method_calls == []

    def test_log_api_request(self, enabled):
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_api_request("POST", "/api/v1/auth/login", 200, 12.5)
        mock_logfire.info.assert_called_once_with(
            "API request completed", method="POST", path="/api/v1/auth/login", status_code=200, duration_ms=12.5
        )

    def test_log_realtime_event(self, enabled):
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_realtime_event("chat-c1", "new-message", False)
        mock_logfire.info.assert_called_once_with(
            "Realtime event triggered", channel="chat-c1", event="new-message", delivered=False
        )

    def test_log_error(self, enabled):
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_error("KeyError", "'id'", {"error_id": 1})
        mock_logfire.error.assert_called_once_with("KeyError: 'id'", error_id=1)

    def test_logfire_failures_are_swallowed(self, enabled):
        failing = MagicMock()
        failing.info.side_effect = RuntimeError("exporter down")
        failing.error.side_effect = RuntimeError("exporter down")
        with patch(f"{MODULE}.logfire", failing):
            monitoring.log_api_request("GET", "/", 200, 1.0)
            monitoring.log_realtime_event("user-u1", "x", True)
            monitoring.log_error("E", "m")
