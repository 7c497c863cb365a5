"""
Real-time Event Hub.

Fans events out to in-process subscribers (used by the SSE stream) and, when
configured, to Pusher Channels. Delivery is fire-and-forget: there is no
ordering, retry or persistence guarantee.

Channels follow three naming schemes:
- ``user-{user_id}``: per-user notifications, calls and chat pings
- ``chat-{connection_id}``: messages of one connection
- ``call-{channel_name}``: signaling for one call
"""

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Optional

from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.monitoring import log_realtime_event
from mentorconnect.integrations.errors import RealtimeError
from mentorconnect.integrations.pusher import PusherClient
from mentorconnect.server.core.config import settings

logger = get_logger(__name__)


def user_channel(user_id: str) -> str:
    return f"user-{user_id}"


def chat_channel(connection_id: str) -> str:
    return f"chat-{connection_id}"


def call_channel(channel_name: str) -> str:
    return f"call-{channel_name}"


class RealtimeHub:
    """Publish/subscribe hub for real-time events."""

    def __init__(self, pusher: Optional[PusherClient] = None, *, queue_size: int = 100) -> None:
        self._pusher = pusher
        self._queue_size = queue_size
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)

    @property
    def pusher_enabled(self) -> bool:
        return self._pusher is not None

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, ()))

    @asynccontextmanager
    async def subscribe(self, channel: str) -> AsyncIterator[asyncio.Queue]:
        """Register a queue receiving ``{"event", "data"}`` dicts published on ``channel``."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers[channel].add(queue)
        logger.debug(f"Subscriber added to '{channel}' ({self.subscriber_count(channel)} total)")
        try:
            yield queue
        finally:
            self._subscribers[channel].discard(queue)
            if not self._subscribers[channel]:
                del self._subscribers[channel]

    def _publish_local(self, channel: str, event: str, data: Any) -> int:
        delivered = 0
        for queue in list(self._subscribers.get(channel, ())):
            try:
                queue.put_nowait({"event": event, "data": data})
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Dropping '{event}' for a slow subscriber on '{channel}'")
        return delivered

    async def trigger_strict(self, channel: str, event: str, data: Any) -> bool:
        """Publish an event, raising when Pusher rejects it.

        Returns:
            True when at least one transport accepted the event.

        Raises:
            RealtimeError: When Pusher is configured and publishing fails.
        """
        delivered = self._publish_local(channel, event, data) > 0
        if self._pusher is not None:
            await self._pusher.trigger(channel, event, data)
            delivered = True
        log_realtime_event(channel, event, delivered)
        return delivered

    async def trigger(self, channel: str, event: str, data: Any) -> bool:
        """Publish an event without ever raising.

        Returns:
            True when at least one transport accepted the event, False otherwise.
        """
        try:
            return await self.trigger_strict(channel, event, data)
        except RealtimeError as e:
            logger.warning(f"Realtime event '{event}' on '{channel}' failed: {e}", extra={"details": e.details})
            log_realtime_event(channel, event, False)
            return False

    async def notify_user(self, user_id: str, event: str, data: Any) -> bool:
        return await self.trigger(user_channel(user_id), event, data)

    async def aclose(self) -> None:
        if self._pusher is not None:
            await self._pusher.aclose()


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


_hub: Optional[RealtimeHub] = None


def get_realtime_hub() -> RealtimeHub:
    """Return the process-wide hub, creating it from settings on first use."""
    global _hub
    if _hub is None:
        pusher_config = settings.pusher
        pusher = None
        if pusher_config.is_configured:
            pusher = PusherClient(pusher_config.app_id, pusher_config.key, pusher_config.secret, pusher_config.cluster)
            logger.info(f"Pusher relay enabled for app {pusher_config.app_id}")
        else:
            logger.info("Pusher is not configured; real-time events stay in-process")
        _hub = RealtimeHub(pusher)
    return _hub
