"""
Booking entity.

A booking (shown to users as a "session") is a time interval reserved between
a mentor profile and a mentee, with a lifecycle status.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class BookingStatus(str, Enum):
    """Lifecycle of a booking."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)


class BookingBase(Base):
    """Base fields for a booking."""

    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    start_time: datetime = Field(sa_type=DateTime, index=True, description="Interval start (UTC), inclusive")
    end_time: datetime = Field(sa_type=DateTime, description="Interval end (UTC), exclusive")
    status: BookingStatus = Field(default=BookingStatus.PENDING, index=True)


class Booking(BookingBase, table=True):
    """Persistent booking.

    Table: bookings
    """

    __tablename__ = "bookings"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    mentor_profile_id: str = Field(foreign_key="mentor_profiles.id", index=True)
    mentee_id: str = Field(foreign_key="users.id", index=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def duration_hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600

    def __repr__(self) -> str:
        return f"Booking(id={self.id}, mentor_profile_id={self.mentor_profile_id}, status={self.status})"
