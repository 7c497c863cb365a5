"""Notification repository."""

from __future__ import annotations

from sqlalchemy import update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import utc_now
from ..entities.notifications import Notification
from .base import AsyncSQLRepository


class NotificationRepository(AsyncSQLRepository[Notification]):
    """Repository for user notifications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def list_recent(self, user_id: str, limit: int = 50) -> list[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(col(Notification.created_at).desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result)

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read.

        Returns:
            Number of rows updated
        """
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.read == False)  # noqa: E712
            .values(read=True, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0
