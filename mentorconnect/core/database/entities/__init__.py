"""
Database entity models.

One module per table:
- users: User accounts and roles
- profiles: General profile and mentee learning fields
- mentor_profiles: Mentor marketplace profile
- availability: Weekly open slots per mentor
- bookings: Scheduled sessions between mentor and mentee
- connections: Mentor/mentee consent records
- messages: Chat messages within a connection
- notifications: Persisted user notifications
- password_resets: Password reset tokens
- reviews: Mentor reviews feeding ratings
"""

from .availability import Availability
from .bookings import Booking, BookingStatus
from .connections import Connection, ConnectionStatus
from .mentor_profiles import MentorProfile
from .messages import Message
from .notifications import Notification, NotificationType
from .password_resets import PasswordReset
from .profiles import Profile
from .reviews import MentorReview
from .users import User, UserRole

__all__ = [
    "Availability",
    "Booking",
    "BookingStatus",
    "Connection",
    "ConnectionStatus",
    "MentorProfile",
    "MentorReview",
    "Message",
    "Notification",
    "NotificationType",
    "PasswordReset",
    "Profile",
    "User",
    "UserRole",
]
