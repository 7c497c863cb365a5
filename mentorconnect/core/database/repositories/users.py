"""
User repository.

Data access for user accounts, including the email lookup used by login and
the mentor listing used by discovery.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.mentor_profiles import MentorProfile
from ..entities.users import User, UserRole
from .base import AsyncSQLRepository


class UserRepository(AsyncSQLRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.first()

    async def search_mentors(
        self,
        *,
        search: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> list[tuple[User, MentorProfile]]:
        """Find mentors that have a profile, filtered by name and price.

        Args:
            search: Case-insensitive substring of the mentor's name
            min_price: Inclusive lower bound on the hourly rate
            max_price: Inclusive upper bound on the hourly rate

        Returns:
            (user, mentor profile) pairs ordered by name
        """
        stmt = (
            select(User, MentorProfile)
            .join(MentorProfile, MentorProfile.user_id == User.id)
            .where(User.role == UserRole.MENTOR)
        )
        if search:
            stmt = stmt.where(col(User.name).icontains(search, autoescape=True))
        if min_price is not None:
            stmt = stmt.where(MentorProfile.hourly_rate >= min_price)
        if max_price is not None:
            stmt = stmt.where(MentorProfile.hourly_rate <= max_price)
        stmt = stmt.order_by(col(User.name).asc())

        result = await self.session.exec(stmt)
        return list(result)

    async def get_many(self, user_ids: list[str]) -> dict[str, User]:
        """Load several users at once, keyed by id."""
        if not user_ids:
            return {}
        result = await self.session.exec(select(User).where(col(User.id).in_(set(user_ids))))
        return {user.id: user for user in result}
