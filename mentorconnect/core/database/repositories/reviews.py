"""
Mentor review repository.

Ratings shown to mentees are always computed from reviews; the cached
``MentorProfile.rating`` is only used to rank top mentors.
"""

from __future__ import annotations

from sqlmodel import col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.reviews import MentorReview
from ..entities.users import User
from .base import AsyncSQLRepository


class MentorReviewRepository(AsyncSQLRepository[MentorReview]):
    """Repository for mentor reviews."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MentorReview)

    async def list_for_profile(self, mentor_profile_id: str) -> list[tuple[MentorReview, User]]:
        """Reviews of a mentor with their author, newest first."""
        stmt = (
            select(MentorReview, User)
            .join(User, User.id == MentorReview.author_id)
            .where(MentorReview.mentor_profile_id == mentor_profile_id)
            .order_by(col(MentorReview.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result)

    async def rating_summary(self, mentor_profile_ids: list[str]) -> dict[str, tuple[float, int]]:
        """Average rating and review count per mentor profile.

        Profiles without reviews are absent from the result.
        """
        if not mentor_profile_ids:
            return {}
        stmt = (
            select(MentorReview.mentor_profile_id, func.avg(MentorReview.rating), func.count(MentorReview.id))
            .where(col(MentorReview.mentor_profile_id).in_(set(mentor_profile_ids)))
            .group_by(MentorReview.mentor_profile_id)
        )
        result = await self.session.exec(stmt)
        return {profile_id: (float(avg or 0), int(count)) for profile_id, avg, count in result}

    async def average_rating(self, mentor_profile_id: str) -> float:
        summary = await self.rating_summary([mentor_profile_id])
        average, _ = summary.get(mentor_profile_id, (0.0, 0))
        return average
