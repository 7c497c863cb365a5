"""Google reCAPTCHA token verification."""

from __future__ import annotations

from typing import Optional

import httpx

from mentorconnect.core.logging_config import get_logger

from .errors import RecaptchaError

logger = get_logger(__name__)

SITEVERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


class RecaptchaVerifier:
    """Verifies reCAPTCHA response tokens. Disabled when no secret is configured."""

    def __init__(self, secret_key: Optional[str], *, timeout: float = 5.0, client: Optional[httpx.AsyncClient] = None):
        self._secret_key = secret_key
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def enabled(self) -> bool:
        return bool(self._secret_key)

    async def verify(self, token: Optional[str]) -> bool:
        """Check a response token with Google.

        Returns:
            True when verification is disabled or Google accepts the token.

        Raises:
            RecaptchaError: When Google cannot be reached.
        """
        if not self.enabled:
            return True
        if not token:
            return False
        try:
            r = await self._client.post(SITEVERIFY_URL, data={"secret": self._secret_key, "response": token})
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise RecaptchaError(f"reCAPTCHA verification failed: {e}") from e
        success = bool(r.json().get("success"))
        if not success:
            logger.info("reCAPTCHA token rejected")
        return success

    async def aclose(self) -> None:
        await self._client.aclose()
