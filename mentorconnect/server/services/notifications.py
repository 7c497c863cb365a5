"""
Notification Service.

Creates notification rows and relays them to the recipient's user channel.
"""

from typing import Any, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database.entities.notifications import Notification, NotificationType
from mentorconnect.core.database.repositories.notifications import NotificationRepository
from mentorconnect.core.logging_config import get_logger

from .realtime import RealtimeHub, timestamp, user_channel

logger = get_logger(__name__)


class NotificationService:
    """Persist notifications and optionally push them in real time."""

    def __init__(self, session: AsyncSession, hub: RealtimeHub) -> None:
        self.repo = NotificationRepository(session)
        self.hub = hub

    async def notify(
        self,
        *,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        sender_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        relay: bool = True,
    ) -> Notification:
        """
        Create a notification for ``user_id``.

        Args:
            user_id: Recipient
            type: Notification kind
            title: Short headline
            message: Body text
            sender_id: User who caused the notification
            metadata: Extra fields sent with the real-time event only
            relay: Whether to push a ``notification`` event to the recipient

        Returns:
            The stored notification
        """
        notification = await self.repo.create(
            Notification(user_id=user_id, sender_id=sender_id, type=type, title=title, message=message)
        )
        logger.debug(f"Notification {notification.id} ({type.value}) created for user {user_id}")

        if relay:
            await self.hub.trigger(
                user_channel(user_id),
                "notification",
                {
                    "id": notification.id,
                    "type": type.value,
                    "title": title,
                    "message": message,
                    "sender_id": sender_id,
                    "metadata": metadata or {},
                    "timestamp": timestamp(),
                },
            )
        return notification
