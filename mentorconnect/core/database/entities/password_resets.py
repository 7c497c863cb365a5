"""Password reset token entity."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class PasswordReset(Base, table=True):
    """A single-use password reset token.

    Table: password_resets
    """

    __tablename__ = "password_resets"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", index=True)
    token: str = Field(unique=True, index=True)
    expires: datetime = Field(sa_type=DateTime, description="Expiry instant (UTC)")

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)

    def is_expired(self, now: datetime) -> bool:
        return self.expires < now

    def __repr__(self) -> str:
        return f"PasswordReset(id={self.id}, user_id={self.user_id}, expires={self.expires})"
