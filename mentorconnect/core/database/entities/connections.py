"""
Connection entity.

A connection is the consent record between one mentor and one mentee. Only an
accepted connection allows messaging and booking.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class ConnectionStatus(str, Enum):
    """Lifecycle of a connection."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    REMOVED = "REMOVED"


class ConnectionBase(Base):
    """Base fields for a connection."""

    status: ConnectionStatus = Field(default=ConnectionStatus.PENDING, index=True)


class Connection(ConnectionBase, table=True):
    """Persistent mentor/mentee connection.

    Table: connections
    """

    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("mentor_id", "mentee_id", name="uq_connections_mentor_mentee"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    mentor_id: str = Field(foreign_key="users.id", index=True)
    mentee_id: str = Field(foreign_key="users.id", index=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.mentor_id, self.mentee_id)

    def other_party(self, user_id: str) -> str:
        return self.mentee_id if user_id == self.mentor_id else self.mentor_id

    def __repr__(self) -> str:
        return f"Connection(id={self.id}, mentor_id={self.mentor_id}, mentee_id={self.mentee_id}, status={self.status})"
