"""
Shared I/O building blocks.

Small user projections embedded in many responses, and datetime normalization
for request bodies.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class UserSummary(BaseModel):
    """Minimal public view of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    image: Optional[str] = None


class UserContact(UserSummary):
    """Public view of a user including the email address."""

    email: str
