"""Password reset token repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.password_resets import PasswordReset
from .base import AsyncSQLRepository


class PasswordResetRepository(AsyncSQLRepository[PasswordReset]):
    """Repository for password reset tokens."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PasswordReset)

    async def get_by_token(self, token: str) -> Optional[PasswordReset]:
        result = await self.session.exec(select(PasswordReset).where(PasswordReset.token == token))
        return result.first()

    async def delete_for_user(self, user_id: str) -> None:
        await self.session.execute(delete(PasswordReset).where(PasswordReset.user_id == user_id))
        await self.session.commit()
