"""General profile repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.profiles import Profile
from .base import AsyncSQLRepository


class ProfileRepository(AsyncSQLRepository[Profile]):
    """Repository for general profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Profile)

    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        result = await self.session.exec(select(Profile).where(Profile.user_id == user_id))
        return result.first()
