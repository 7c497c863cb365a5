"""
Mentor profile repository.

Besides plain CRUD this repository answers the discovery queries (onboarded
mentors, top rated mentors) and the dashboard statistics for one mentor.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.bookings import Booking, BookingStatus
from ..entities.mentor_profiles import MentorProfile
from ..entities.users import User
from .base import AsyncSQLRepository


class MentorProfileRepository(AsyncSQLRepository[MentorProfile]):
    """Repository for mentor profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MentorProfile)

    async def get_by_user_id(self, user_id: str) -> Optional[MentorProfile]:
        result = await self.session.exec(select(MentorProfile).where(MentorProfile.user_id == user_id))
        return result.first()

    async def list_onboarded(self, limit: Optional[int] = None) -> list[tuple[MentorProfile, User]]:
        """List profiles whose owner finished onboarding, best rated first when limited."""
        stmt = (
            select(MentorProfile, User)
            .join(User, User.id == MentorProfile.user_id)
            .where(User.onboarding_completed == True)  # noqa: E712
        )
        if limit is not None:
            stmt = stmt.order_by(col(MentorProfile.rating).desc()).limit(limit)
        else:
            stmt = stmt.order_by(col(MentorProfile.created_at).desc())
        result = await self.session.exec(stmt)
        return list(result)

    async def get_stats(self, profile: MentorProfile) -> dict[str, float | int]:
        """Compute session, earnings and student statistics for a mentor.

        Returns:
            Dictionary with ``total_sessions``, ``total_earnings`` and ``total_students``
        """
        active = (BookingStatus.CONFIRMED, BookingStatus.COMPLETED)

        sessions_stmt = select(func.count(Booking.id)).where(
            Booking.mentor_profile_id == profile.id, col(Booking.status).in_(active)
        )
        total_sessions = (await self.session.exec(sessions_stmt)).one()

        students_stmt = select(func.count(func.distinct(Booking.mentee_id))).where(
            Booking.mentor_profile_id == profile.id, col(Booking.status).in_(active)
        )
        total_students = (await self.session.exec(students_stmt)).one()

        completed_stmt = select(Booking).where(
            Booking.mentor_profile_id == profile.id, Booking.status == BookingStatus.COMPLETED
        )
        completed = (await self.session.exec(completed_stmt)).all()
        total_earnings = sum(profile.hourly_rate * booking.duration_hours for booking in completed)

        return {
            "total_sessions": total_sessions or 0,
            "total_earnings": round(total_earnings, 2),
            "total_students": total_students or 0,
        }
