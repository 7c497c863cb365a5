"""Message repository."""

from __future__ import annotations

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.messages import Message
from ..entities.users import User
from .base import AsyncSQLRepository


class MessageRepository(AsyncSQLRepository[Message]):
    """Repository for chat messages."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Message)

    async def list_for_connection(self, connection_id: str) -> list[tuple[Message, User]]:
        """Messages of a connection with their sender, oldest first."""
        stmt = (
            select(Message, User)
            .join(User, User.id == Message.sender_id)
            .where(Message.connection_id == connection_id)
            .order_by(col(Message.created_at).asc())
        )
        result = await self.session.exec(stmt)
        return list(result)
