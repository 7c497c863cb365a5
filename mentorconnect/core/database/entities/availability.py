"""
Availability entity.

One row per mentor profile and weekday, holding that day's open slots as a
list of ``{"start": "HH:MM", "end": "HH:MM"}`` objects.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_id


class AvailabilityBase(Base):
    """Base fields for a day of mentor availability."""

    day: str = Field(description="Weekday name, e.g. 'Monday'")
    slots: list[dict[str, Any]] = Field(default_factory=list, sa_type=JSON)


class Availability(AvailabilityBase, table=True):
    """Persistent availability for one weekday.

    Table: availability
    """

    __tablename__ = "availability"
    __table_args__ = (
        UniqueConstraint("mentor_profile_id", "day", name="uq_availability_profile_day"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    mentor_profile_id: str = Field(foreign_key="mentor_profiles.id", index=True)

    def __repr__(self) -> str:
        return f"Availability(id={self.id}, mentor_profile_id={self.mentor_profile_id}, day={self.day})"
