"""
General profile entity.

Every user may have one general profile. Mentee-specific learning fields live
here as well; they stay empty for mentors.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class ProfileBase(Base):
    """Base fields for a general profile."""

    title: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None)
    location: Optional[str] = Field(default=None)
    company: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    timezone: Optional[str] = Field(default=None)

    # Mentee fields
    learning_goals: Optional[str] = Field(default=None)
    skill_level: Optional[str] = Field(default=None)
    areas_of_interest: Optional[str] = Field(default=None)
    learning_style: Optional[str] = Field(default=None)
    career_goals: Optional[str] = Field(default=None)
    current_challenges: Optional[str] = Field(default=None)
    education: Optional[str] = Field(default=None)


class Profile(ProfileBase, table=True):
    """Persistent general profile.

    Table: profiles
    """

    __tablename__ = "profiles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Profile(id={self.id}, user_id={self.user_id})"
