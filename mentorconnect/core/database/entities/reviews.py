"""
Mentor review entity.

Reviews are written by mentees about a mentor profile. They are only read here,
to compute mentor ratings and to show on the mentor detail page.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class MentorReviewBase(Base):
    """Base fields for a review."""

    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None)


class MentorReview(MentorReviewBase, table=True):
    """Persistent review of a mentor.

    Table: mentor_reviews
    """

    __tablename__ = "mentor_reviews"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    mentor_profile_id: str = Field(foreign_key="mentor_profiles.id", index=True)
    author_id: str = Field(foreign_key="users.id", index=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"MentorReview(id={self.id}, mentor_profile_id={self.mentor_profile_id}, rating={self.rating})"
