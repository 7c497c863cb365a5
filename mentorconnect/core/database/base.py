"""
Base database models and utilities.

This module provides the foundational database components shared by every
entity in the MentorConnect schema.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def new_id() -> str:
    """Generate a primary key: 32 lowercase hex characters."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
