"""Transactional email through the Resend API.

Without an API key the mailer is disabled: it logs a warning and sends
nothing. Any HTTP failure is raised as ``MailDeliveryError``.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from mentorconnect.core.logging_config import get_logger

from .errors import MailDeliveryError

logger = get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class Mailer:
    """Async Resend client with the messages MentorConnect sends."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        sender: str,
        public_base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self.sender = sender
        self.public_base_url = public_base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def send(self, to: str, subject: str, html: str) -> Optional[dict[str, Any]]:
        """Send one email.

        Returns:
            The provider response (contains the message id), or None when mail is disabled.

        Raises:
            MailDeliveryError: When the provider rejects the request.
        """
        if not self.enabled:
            logger.warning(f"RESEND_API_KEY is not set; email '{subject}' to {to} was not sent")
            return None

        try:
            r = await self._client.post(
                RESEND_API_URL,
                json={"from": self.sender, "to": [to], "subject": subject, "html": html},
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MailDeliveryError(
                f"Resend rejected email: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise MailDeliveryError(f"Resend request failed: {e}") from e

        logger.info(f"Email '{subject}' sent to {to}")
        return r.json()

    def reset_link(self, token: str) -> str:
        return f"{self.public_base_url}/reset-password?token={token}"

    async def send_password_reset(self, email: str, token: str) -> Optional[dict[str, Any]]:
        link = self.reset_link(token)
        html = (
            "<h1>Reset your password</h1>"
            "<p>We received a request to reset the password of your MentorConnect account.</p>"
            f'<p><a href="{link}">Click here to choose a new password</a></p>'
            "<p>This link expires in 1 hour. If you did not ask for a reset you can ignore this email.</p>"
        )
        return await self.send(email, "Reset your MentorConnect password", html)

    async def aclose(self) -> None:
        await self._client.aclose()
