"""Notification I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from mentorconnect.core.database.entities.notifications import NotificationType

from .common import UserSummary


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    sender_id: Optional[str] = None
    type: NotificationType
    title: str
    message: str
    read: bool
    created_at: datetime
    updated_at: datetime


class NotificationWithSender(NotificationRead):
    sender: Optional[UserSummary] = None
    timestamp: datetime


class MarkReadRequest(BaseModel):
    notification_id: Optional[str] = None


class MarkAllReadResponse(BaseModel):
    success: bool = True
    updated_count: int
