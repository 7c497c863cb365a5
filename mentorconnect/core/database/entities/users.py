"""
User entity models.

A user is either a mentor or a mentee. Users created through an external
identity provider have no password hash.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class UserRole(str, Enum):
    """Marketplace role of a user."""

    MENTOR = "MENTOR"
    MENTEE = "MENTEE"


class UserBase(Base):
    """Base fields for a user account."""

    name: Optional[str] = Field(default=None, description="Display name")
    email: str = Field(unique=True, index=True, description="Login email, unique across users")
    image: Optional[str] = Field(default=None, description="Avatar URL")
    role: UserRole = Field(default=UserRole.MENTEE, description="Marketplace role")
    onboarding_completed: bool = Field(default=False, description="Whether the role onboarding step is done")


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    hashed_password: Optional[str] = Field(default=None, description="bcrypt hash, absent for OAuth users")

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_mentor(self) -> bool:
        return self.role == UserRole.MENTOR

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
