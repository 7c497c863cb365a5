"""Availability repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.availability import Availability
from .base import AsyncSQLRepository

WEEKDAY_ORDER = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class AvailabilityRepository(AsyncSQLRepository[Availability]):
    """Repository for weekly mentor availability."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Availability)

    async def list_for_profile(self, mentor_profile_id: str) -> list[Availability]:
        """List a mentor's availability ordered Monday to Sunday."""
        result = await self.session.exec(select(Availability).where(Availability.mentor_profile_id == mentor_profile_id))
        rows = list(result)
        rows.sort(key=lambda row: WEEKDAY_ORDER.index(row.day) if row.day in WEEKDAY_ORDER else len(WEEKDAY_ORDER))
        return rows

    async def get_for_day(self, mentor_profile_id: str, day: str) -> Optional[Availability]:
        stmt = select(Availability).where(Availability.mentor_profile_id == mentor_profile_id, Availability.day == day)
        result = await self.session.exec(stmt)
        return result.first()
