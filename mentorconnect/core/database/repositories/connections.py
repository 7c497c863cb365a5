"""
Connection repository.

Lookups by participant pair, plus the per-role listings.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import col, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.connections import Connection, ConnectionStatus
from .base import AsyncSQLRepository


class ConnectionRepository(AsyncSQLRepository[Connection]):
    """Repository for mentor/mentee connections."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Connection)

    async def get_pair(self, mentor_id: str, mentee_id: str) -> Optional[Connection]:
        stmt = select(Connection).where(Connection.mentor_id == mentor_id, Connection.mentee_id == mentee_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def is_accepted(self, mentor_id: str, mentee_id: str) -> bool:
        connection = await self.get_pair(mentor_id, mentee_id)
        return connection is not None and connection.status == ConnectionStatus.ACCEPTED

    async def list_accepted_for_user(self, user_id: str) -> list[Connection]:
        """Accepted connections where the user is either party, most recently updated first."""
        stmt = (
            select(Connection)
            .where(
                Connection.status == ConnectionStatus.ACCEPTED,
                or_(Connection.mentor_id == user_id, Connection.mentee_id == user_id),
            )
            .order_by(col(Connection.updated_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result)

    async def list_pending_for_mentor(self, mentor_id: str) -> list[Connection]:
        stmt = (
            select(Connection)
            .where(Connection.mentor_id == mentor_id, Connection.status == ConnectionStatus.PENDING)
            .order_by(col(Connection.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result)

    async def list_for_mentee(self, mentee_id: str) -> list[Connection]:
        stmt = select(Connection).where(Connection.mentee_id == mentee_id).order_by(col(Connection.created_at).desc())
        result = await self.session.exec(stmt)
        return list(result)
