"""Initial schema for MentorConnect

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

Creates every table of the marketplace:
- Accounts (users, profiles, password_resets)
- Mentors (mentor_profiles, availability, mentor_reviews)
- Scheduling and relationships (bookings, connections)
- Communication (messages, notifications)

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("MENTOR", "MENTEE", name="userrole")
booking_status = sa.Enum("PENDING", "CONFIRMED", "CANCELLED", "COMPLETED", name="bookingstatus")
connection_status = sa.Enum("PENDING", "ACCEPTED", "REJECTED", "REMOVED", name="connectionstatus")
notification_type = sa.Enum("CONNECTION", "MESSAGE", "SESSION", "BOOKING", name="notificationtype")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "users",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        *[
            sa.Column(name, sa.String(), nullable=True)
            for name in (
                "title",
                "bio",
                "location",
                "company",
                "website",
                "timezone",
                "learning_goals",
                "skill_level",
                "areas_of_interest",
                "learning_style",
                "career_goals",
                "current_challenges",
                "education",
            )
        ],
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "mentor_profiles",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("company", sa.String(), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("experience", sa.String(), nullable=True),
        sa.Column("education", sa.String(), nullable=True),
        sa.Column("expertise", sa.JSON(), nullable=False),
        sa.Column("languages", sa.JSON(), nullable=False),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("interests", sa.JSON(), nullable=False),
        sa.Column("goals", sa.JSON(), nullable=False),
        sa.Column("hourly_rate", sa.Float(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("github", sa.String(), nullable=True),
        sa.Column("linkedin", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_mentor_profiles_user_id", "mentor_profiles", ["user_id"], unique=True)

    op.create_table(
        "availability",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("mentor_profile_id", sa.String(), nullable=False),
        sa.Column("day", sa.String(), nullable=False),
        sa.Column("slots", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["mentor_profile_id"], ["mentor_profiles.id"]),
        sa.UniqueConstraint("mentor_profile_id", "day", name="uq_availability_profile_day"),
    )
    op.create_index("ix_availability_mentor_profile_id", "availability", ["mentor_profile_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("mentor_profile_id", sa.String(), nullable=False),
        sa.Column("mentee_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("status", booking_status, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["mentor_profile_id"], ["mentor_profiles.id"]),
        sa.ForeignKeyConstraint(["mentee_id"], ["users.id"]),
    )
    op.create_index("ix_bookings_mentor_profile_id", "bookings", ["mentor_profile_id"])
    op.create_index("ix_bookings_mentee_id", "bookings", ["mentee_id"])
    op.create_index("ix_bookings_start_time", "bookings", ["start_time"])
    op.create_index("ix_bookings_status", "bookings", ["status"])

    op.create_table(
        "connections",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("mentor_id", sa.String(), nullable=False),
        sa.Column("mentee_id", sa.String(), nullable=False),
        sa.Column("status", connection_status, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["mentor_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["mentee_id"], ["users.id"]),
        sa.UniqueConstraint("mentor_id", "mentee_id", name="uq_connections_mentor_mentee"),
    )
    op.create_index("ix_connections_mentor_id", "connections", ["mentor_id"])
    op.create_index("ix_connections_mentee_id", "connections", ["mentee_id"])
    op.create_index("ix_connections_status", "connections", ["status"])

    op.create_table(
        "messages",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("connection_id", sa.String(), nullable=False),
        sa.Column("sender_id", sa.String(), nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["connection_id"], ["connections.id"]),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
    )
    op.create_index("ix_messages_connection_id", "messages", ["connection_id"])
    op.create_index("ix_messages_sender_id", "messages", ["sender_id"])
    op.create_index("ix_messages_created_at", "messages", ["created_at"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("sender_id", sa.String(), nullable=True),
        sa.Column("type", notification_type, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_read", "notifications", ["read"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])

    op.create_table(
        "password_resets",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("token", sa.String(), nullable=False),
        sa.Column("expires", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_password_resets_user_id", "password_resets", ["user_id"])
    op.create_index("ix_password_resets_token", "password_resets", ["token"], unique=True)

    op.create_table(
        "mentor_reviews",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("mentor_profile_id", sa.String(), nullable=False),
        sa.Column("author_id", sa.String(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["mentor_profile_id"], ["mentor_profiles.id"]),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
    )
    op.create_index("ix_mentor_reviews_mentor_profile_id", "mentor_reviews", ["mentor_profile_id"])
    op.create_index("ix_mentor_reviews_author_id", "mentor_reviews", ["author_id"])
    op.create_index("ix_mentor_reviews_created_at", "mentor_reviews", ["created_at"])


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("mentor_reviews")
    op.drop_table("password_resets")
    op.drop_table("notifications")
    op.drop_table("messages")
    op.drop_table("connections")
    op.drop_table("bookings")
    op.drop_table("availability")
    op.drop_table("mentor_profiles")
    op.drop_table("profiles")
    op.drop_table("users")

    bind = op.get_bind()
    for enum in (notification_type, connection_status, booking_status, user_role):
        enum.drop(bind, checkfirst=True)
