"""Connection I/O models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mentorconnect.core.database.entities.connections import ConnectionStatus

from .common import UserSummary


class ConnectionAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class ConnectionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_id: str
    mentee_id: str
    status: ConnectionStatus
    created_at: datetime
    updated_at: datetime


class ConnectionRequestCreate(BaseModel):
    mentor_id: str = Field(min_length=1)


class ConnectionRespond(BaseModel):
    request_id: str = Field(min_length=1)
    action: str = Field(description="accept or reject")


class ConnectionRemove(BaseModel):
    connection_id: Optional[str] = None


class ConnectionWithUsers(ConnectionRead):
    """Accepted connection with both parties and the caller's counterpart."""

    mentor: UserSummary
    mentee: UserSummary
    other_user: UserSummary


class PendingConnection(ConnectionRead):
    mentee: UserSummary


class MentorProfileSummary(BaseModel):
    title: Optional[str] = None
    expertise: list[str] = Field(default_factory=list)
    rating: float = 0


class MenteeConnection(ConnectionRead):
    mentor: UserSummary
    mentor_profile: Optional[MentorProfileSummary] = None
