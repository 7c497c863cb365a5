"""Pusher Channels REST client.

Overview
--------
Publishes events through Pusher's HTTP API (``POST /apps/{app_id}/events``).
Requests are signed with Pusher's REST authentication scheme:

- ``body_md5`` is the hex MD5 of the exact JSON body sent,
- the query parameters ``auth_key``, ``auth_timestamp``, ``auth_version`` and
  ``body_md5`` are sorted by key and joined as ``k=v&k=v``,
- ``auth_signature`` is the hex HMAC-SHA256 of
  ``"POST\\n/apps/{app_id}/events\\n" + query`` keyed by the app secret.

The event payload travels as a JSON-encoded string in the ``data`` field.

Errors
------
HTTP and transport failures are raised as ``RealtimeError``.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from typing import Any, Callable, Optional

import httpx

from mentorconnect.core.logging_config import get_logger

from .errors import RealtimeError

logger = get_logger(__name__)


def sign_request(secret: str, method: str, path: str, params: dict[str, str]) -> str:
    """Compute a Pusher REST ``auth_signature``."""
    query = "&".join(f"{key}={params[key]}" for key in sorted(params))
    string_to_sign = f"{method}\n{path}\n{query}"
    return hmac.new(secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()


class PusherClient:
    """Async client for triggering events on Pusher channels."""

    def __init__(
        self,
        app_id: str,
        key: str,
        secret: str,
        cluster: str,
        *,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Create a Pusher client.

        Args:
            app_id: Pusher application ID.
            key: Application key, sent as ``auth_key``.
            secret: Application secret used for signing.
            cluster: Cluster name; requests go to ``https://api-{cluster}.pusher.com``.
            timeout: HTTP timeout for the internal client.
            client: Optional preconfigured ``httpx.AsyncClient``.
            clock: Source of the ``auth_timestamp``.
        """
        self.app_id = app_id
        self.key = key
        self._secret = secret
        self.base_url = f"https://api-{cluster}.pusher.com"
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._clock = clock

    @property
    def events_path(self) -> str:
        return f"/apps/{self.app_id}/events"

    def _signed_params(self, body: bytes) -> dict[str, str]:
        params = {
            "auth_key": self.key,
            "auth_timestamp": str(int(self._clock())),
            "auth_version": "1.0",
            "body_md5": hashlib.md5(body).hexdigest(),
        }
        params["auth_signature"] = sign_request(self._secret, "POST", self.events_path, params)
        return params

    async def trigger(self, channel: str, event: str, data: Any) -> None:
        """Publish ``event`` with ``data`` on ``channel``.

        Raises:
            RealtimeError: When the request fails or Pusher answers with an error status.
        """
        body = json.dumps({"name": event, "channels": [channel], "data": json.dumps(data, default=str)}).encode("utf-8")
        params = self._signed_params(body)
        try:
            r = await self._client.post(
                f"{self.base_url}{self.events_path}",
                params=params,
                content=body,
                headers={"Content-Type": "application/json"},
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RealtimeError(
                f"Pusher trigger failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise RealtimeError(f"Pusher trigger failed: {e}") from e
        logger.debug(f"Pusher event '{event}' published on '{channel}'")

    async def aclose(self) -> None:
        await self._client.aclose()
