"""
Booking I/O models.

Bookings are called "sessions" on the wire.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mentorconnect.core.database.entities.bookings import BookingStatus

from .common import UserContact, UserSummary, to_naive_utc


class BookingRead(BaseModel):
    """Schema for reading a booking."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_profile_id: str
    mentee_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    created_at: datetime
    updated_at: datetime


class BookingMentorProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: Optional[str] = None
    hourly_rate: float
    user: UserSummary


class BookingWithParties(BookingRead):
    """Booking with the counterpart embedded, depending on who asks."""

    mentee: Optional[UserContact] = None
    mentor_profile: Optional[BookingMentorProfile] = None


class BookingList(BaseModel):
    success: bool = True
    bookings: list[BookingWithParties]


class _TimeRange(BaseModel):
    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class BookingCreate(_TimeRange):
    """Schema for a mentee requesting a session."""

    mentor_profile_id: str = Field(min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None


class MentorBookingCreate(_TimeRange):
    """Schema for a mentor scheduling a session with a connected mentee."""

    mentor_profile_id: str = Field(min_length=1)
    mentee_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingAutoCompleteResponse(BaseModel):
    message: str
    session: BookingRead


class BookingCreated(BaseModel):
    success: bool = True
    booking: BookingRead
