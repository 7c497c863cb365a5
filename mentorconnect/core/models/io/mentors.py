"""
Mentor I/O models.

Covers onboarding, the two mentor profile write paths, mentor discovery and
weekly availability.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import UserSummary

_URL_RE = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def _optional_url(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return value
    if not _URL_RE.match(value):
        raise ValueError("must be a valid http(s) URL or empty")
    return value


class MentorProfileRead(BaseModel):
    """Schema for reading a mentor profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: Optional[str] = None
    company: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    expertise: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)
    hourly_rate: float
    rating: float
    github: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class OnboardingRequest(BaseModel):
    """Schema for the mentor onboarding step."""

    title: str = Field(min_length=1)
    hourly_rate: float = Field(ge=0)
    experience: str = Field(min_length=1)
    interests: list[str] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)


class OnboardingResponse(BaseModel):
    message: str
    profile: MentorProfileRead


class MentorProfileCreate(BaseModel):
    """Schema for the basic mentor profile creation form."""

    title: str = Field(min_length=2)
    company: Optional[str] = None
    experience: str = Field(min_length=1)
    education: Optional[str] = None
    languages: list[str] = Field(min_length=1)
    skills: list[str] = Field(min_length=1)
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None

    @field_validator("linkedin", "github", "website")
    @classmethod
    def check_urls(cls, value: Optional[str]) -> Optional[str]:
        return _optional_url(value)


class MentorProfileUpsert(BaseModel):
    """Schema for the full mentor profile form."""

    title: str = Field(min_length=2)
    company: Optional[str] = None
    experience: str = Field(min_length=1)
    expertise: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    hourly_rate: float = Field(ge=1)
    languages: list[str] = Field(default_factory=list)
    bio: str = Field(min_length=50)
    github: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    interests: Optional[list[str]] = None
    goals: Optional[list[str]] = None

    @field_validator("linkedin", "github", "website")
    @classmethod
    def check_urls(cls, value: Optional[str]) -> Optional[str]:
        return _optional_url(value)


class MentorProfileUpsertResponse(BaseModel):
    success: bool = True
    profile: MentorProfileRead


class MentorDashboardRead(MentorProfileRead):
    """Mentor profile with dashboard statistics."""

    total_sessions: int = 0
    total_earnings: float = 0
    average_rating: float = 0
    total_students: int = 0


class MentorSearchItem(BaseModel):
    """One row of the public mentor search."""

    id: str
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    expertise: list[str] = Field(default_factory=list)
    hourly_rate: float
    languages: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    rating: float = 0
    total_reviews: int = 0


class MentorListItem(BaseModel):
    """Mentor profile card shown to signed-in users."""

    id: str
    user_id: str
    title: Optional[str] = None
    bio: Optional[str] = None
    expertise: list[str] = Field(default_factory=list)
    hourly_rate: float
    rating: float = 0
    user: UserSummary


class ReviewAuthor(BaseModel):
    name: str
    image: str


class ReviewRead(BaseModel):
    id: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    author: ReviewAuthor


class TimeSlot(BaseModel):
    """An open interval within a day, as ``HH:MM`` strings."""

    start: str
    end: str


class AvailabilityDay(BaseModel):
    day: str
    slots: list[TimeSlot]


class AvailabilityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_profile_id: str
    day: str
    slots: list[TimeSlot]


class AvailabilityUpsert(BaseModel):
    """Schema for setting one weekday's slots."""

    day: str
    slots: list[TimeSlot] = Field(default_factory=list)


class MentorDetailRead(BaseModel):
    """Public mentor page."""

    id: str
    user_id: str
    name: Optional[str] = None
    image: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    expertise: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    hourly_rate: float
    rating: float = 0
    total_reviews: int = 0
    github: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    availability: list[AvailabilityDay] = Field(default_factory=list)
    reviews: list[ReviewRead] = Field(default_factory=list)
