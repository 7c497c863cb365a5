"""
Repository layer.

Each repository wraps an ``AsyncSession`` and owns the queries for one entity.
"""

from .availability import AvailabilityRepository
from .base import AsyncBaseRepository, AsyncQueryBuilder, AsyncSQLRepository
from .bookings import BookingRepository
from .connections import ConnectionRepository
from .mentor_profiles import MentorProfileRepository
from .messages import MessageRepository
from .notifications import NotificationRepository
from .password_resets import PasswordResetRepository
from .profiles import ProfileRepository
from .reviews import MentorReviewRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "AsyncQueryBuilder",
    "AsyncSQLRepository",
    "AvailabilityRepository",
    "BookingRepository",
    "ConnectionRepository",
    "MentorProfileRepository",
    "MentorReviewRepository",
    "MessageRepository",
    "NotificationRepository",
    "PasswordResetRepository",
    "ProfileRepository",
    "UserRepository",
]
