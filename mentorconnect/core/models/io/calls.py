"""Call signaling I/O models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class CallInitiate(BaseModel):
    recipient_id: Optional[str] = None
    channel_name: Optional[str] = None
    is_video: Optional[bool] = None


class CallChannel(BaseModel):
    channel_name: Optional[str] = None


class CallResult(BaseModel):
    success: bool
