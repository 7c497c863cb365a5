"""Chat message entity."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class MessageBase(Base):
    """Base fields for a chat message."""

    content: str = Field(description="Message body")


class Message(MessageBase, table=True):
    """A message sent within a connection.

    Table: messages
    """

    __tablename__ = "messages"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    connection_id: str = Field(foreign_key="connections.id", index=True)
    sender_id: str = Field(foreign_key="users.id", index=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Message(id={self.id}, connection_id={self.connection_id}, sender_id={self.sender_id})"
