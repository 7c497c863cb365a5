"""Chat message I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .common import UserSummary


class MessageCreate(BaseModel):
    connection_id: str = Field(min_length=1)
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message content must not be empty")
        return value


class MessageRead(BaseModel):
    id: str
    connection_id: str
    sender_id: str
    content: str
    created_at: datetime
    sender: UserSummary


class RelayError(BaseModel):
    type: str = "REALTIME_ERROR"
    details: Optional[Any] = None


class MessageSendResult(BaseModel):
    """Result of sending a message when the real-time relay failed."""

    message: MessageRead
    error: RelayError
