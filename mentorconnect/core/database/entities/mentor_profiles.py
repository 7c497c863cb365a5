"""
Mentor profile entity.

A mentor profile carries everything a mentee sees when browsing mentors:
expertise, languages, pricing and the cached rating. A user owns at most one.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, JSON
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class MentorProfileBase(Base):
    """Base fields for a mentor profile."""

    title: Optional[str] = Field(default=None, description="Professional title")
    company: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None)
    experience: Optional[str] = Field(default=None, description="Years of experience, free text")
    education: Optional[str] = Field(default=None)

    expertise: list[str] = Field(default_factory=list, sa_type=JSON)
    languages: list[str] = Field(default_factory=list, sa_type=JSON)
    skills: list[str] = Field(default_factory=list, sa_type=JSON)
    interests: list[str] = Field(default_factory=list, sa_type=JSON)
    goals: list[str] = Field(default_factory=list, sa_type=JSON)

    hourly_rate: float = Field(default=0.0, ge=0)
    rating: float = Field(default=0.0, description="Cached rating used to rank mentors")

    github: Optional[str] = Field(default=None)
    linkedin: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)


class MentorProfile(MentorProfileBase, table=True):
    """Persistent mentor profile.

    Table: mentor_profiles
    """

    __tablename__ = "mentor_profiles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"MentorProfile(id={self.id}, user_id={self.user_id}, title={self.title})"
