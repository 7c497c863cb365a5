"""
Booking repository.

Holds the single-query conflict check used before any booking is created, and
the participant-centric listings behind the sessions page.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.bookings import Booking, BookingStatus
from ..entities.mentor_profiles import MentorProfile
from ..entities.users import User
from .base import AsyncSQLRepository


class BookingRepository(AsyncSQLRepository[Booking]):
    """Repository for bookings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Booking)

    async def find_conflict(self, mentor_profile_id: str, start_time: datetime, end_time: datetime) -> Optional[Booking]:
        """Return a live booking of the mentor overlapping ``[start_time, end_time)``.

        Two half-open intervals overlap iff each starts before the other ends.
        Cancelled bookings never conflict.
        """
        stmt = (
            select(Booking)
            .where(
                Booking.mentor_profile_id == mentor_profile_id,
                Booking.status != BookingStatus.CANCELLED,
                Booking.start_time < end_time,
                Booking.end_time > start_time,
            )
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_for_mentor_profile(self, mentor_profile_id: str) -> list[tuple[Booking, User]]:
        """Bookings of a mentor profile with their mentee, earliest first."""
        stmt = (
            select(Booking, User)
            .join(User, User.id == Booking.mentee_id)
            .where(Booking.mentor_profile_id == mentor_profile_id)
            .order_by(col(Booking.start_time).asc())
        )
        result = await self.session.exec(stmt)
        return list(result)

    async def list_for_mentee(self, mentee_id: str) -> list[tuple[Booking, MentorProfile, User]]:
        """Bookings of a mentee with the mentor profile and its owner, earliest first."""
        stmt = (
            select(Booking, MentorProfile, User)
            .join(MentorProfile, MentorProfile.id == Booking.mentor_profile_id)
            .join(User, User.id == MentorProfile.user_id)
            .where(Booking.mentee_id == mentee_id)
            .order_by(col(Booking.start_time).asc())
        )
        result = await self.session.exec(stmt)
        return list(result)
