"""
Core utilities and configuration for MentorConnect.

This package provides core functionality including logging configuration,
database setup, and other shared utilities.
"""

from mentorconnect.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
