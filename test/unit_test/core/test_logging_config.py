"""
Unit tests for logging configuration.

Tests cover format selection, handler setup and module log levels.
"""

import logging

import pytest

from mentorconnect.core import logging_config
from mentorconnect.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Keep the root logger as the test session configured it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [("simple", SIMPLE_FORMAT), ("detailed", DETAILED_FORMAT), ("json", JSON_FORMAT), ("unknown", DETAILED_FORMAT)],
    )
    def test_format_selection(self, fmt, expected):
        setup_logging(log_level="INFO", log_format=fmt, enable_file=False)

        handler = logging.getLogger().handlers[0]
        assert handler.formatter._fmt == expected

    def test_console_handler_replaces_existing(self):
        root = logging.getLogger()
        root.addHandler(logging.NullHandler())

        setup_logging(log_level="warning", enable_file=False)

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert root.handlers[0].level == logging.WARNING
        assert root.level == logging.DEBUG

    def test_module_levels_applied(self):
        setup_logging(enable_file=False)

        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)

    def test_file_logging(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logging_config, "ENABLE_FILE_LOGGING", True)
        monkeypatch.setattr(logging_config, "LOG_FILE_DIR", str(tmp_path / "logs"))

        setup_logging(log_level="INFO", enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert (tmp_path / "logs" / "mentorconnect.log").exists()
        file_handlers[0].close()

    def test_file_logging_needs_both_switches(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logging_config, "ENABLE_FILE_LOGGING", False)
        monkeypatch.setattr(logging_config, "LOG_FILE_DIR", str(tmp_path / "logs"))

        setup_logging(enable_file=True)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)
        assert not (tmp_path / "logs").exists()


def test_get_logger_returns_named_logger():
    logger = get_logger("mentorconnect.server.api.v1.sessions")
    assert logger is logging.getLogger("mentorconnect.server.api.v1.sessions")
