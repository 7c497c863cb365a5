"""Error types raised by the third-party service clients.

Every error carries the HTTP status code and response body (when there was a
response) so callers can log useful context.
"""

from __future__ import annotations

from typing import Any, Optional


class IntegrationError(Exception):
    """Base error for third-party API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload from the remote service.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class RealtimeError(IntegrationError):
    """Publishing an event to the real-time relay failed."""


class MailDeliveryError(IntegrationError):
    """The mail provider rejected or did not accept a message."""


class RecaptchaError(IntegrationError):
    """The reCAPTCHA verification endpoint could not be reached."""
