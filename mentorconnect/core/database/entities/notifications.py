"""
Notification entity.

Notifications are persisted for every user-facing event (connection changes,
messages, bookings) and are also pushed over the real-time relay.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class NotificationType(str, Enum):
    """Kind of event a notification describes."""

    CONNECTION = "connection"
    MESSAGE = "message"
    SESSION = "session"
    BOOKING = "booking"


class NotificationBase(Base):
    """Base fields for a notification."""

    type: NotificationType = Field(description="Notification kind")
    title: str = Field(description="Short headline")
    message: str = Field(description="Body text")
    read: bool = Field(default=False, index=True)


class Notification(NotificationBase, table=True):
    """Persistent notification.

    Table: notifications
    """

    __tablename__ = "notifications"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="users.id", index=True, description="Recipient")
    sender_id: Optional[str] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, index=True)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Notification(id={self.id}, user_id={self.user_id}, type={self.type}, read={self.read})"
