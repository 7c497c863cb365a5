"""
I/O models for API requests and responses.

These schemas define the contract between API endpoints and clients. They are
kept separate from database entities so the wire format can evolve on its own.

Modules:
- common: Embedded user projections and datetime helpers
- users: Authentication and role models
- profiles: Merged profile and completion models
- mentors: Mentor profile, discovery and availability models
- bookings: Session models
- connections: Connection models
- messages: Chat message models
- notifications: Notification models
- calls: Call signaling models
"""

from .bookings import (
    BookingCreate,
    BookingRead,
    BookingStatusUpdate,
    MentorBookingCreate,
)
from .common import UserSummary
from .connections import ConnectionRead
from .messages import MessageCreate, MessageRead
from .notifications import NotificationRead
from .users import UserRead

__all__ = [
    "BookingCreate",
    "BookingRead",
    "BookingStatusUpdate",
    "ConnectionRead",
    "MentorBookingCreate",
    "MessageCreate",
    "MessageRead",
    "NotificationRead",
    "UserRead",
    "UserSummary",
]
