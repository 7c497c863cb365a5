"""
Session (Booking) Endpoints.

Mentees request sessions with mentors they are connected to; mentors can
schedule confirmed sessions directly. Every new booking is checked against the
mentor's live bookings for overlap before it is stored.

Status lifecycle: PENDING -> CONFIRMED -> COMPLETED, with CANCELLED reachable
from any live state. CANCELLED and COMPLETED are final.
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session, utc_now
from mentorconnect.core.database.entities.bookings import Booking, BookingStatus
from mentorconnect.core.database.entities.mentor_profiles import MentorProfile
from mentorconnect.core.database.entities.notifications import NotificationType
from mentorconnect.core.database.entities.users import User, UserRole
from mentorconnect.core.database.repositories.bookings import BookingRepository
from mentorconnect.core.database.repositories.connections import ConnectionRepository
from mentorconnect.core.database.repositories.mentor_profiles import MentorProfileRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.bookings import (
    BookingAutoCompleteResponse,
    BookingCreate,
    BookingCreated,
    BookingList,
    BookingMentorProfile,
    BookingRead,
    BookingStatusUpdate,
    BookingWithParties,
    MentorBookingCreate,
)
from mentorconnect.core.models.io.common import UserContact, UserSummary
from mentorconnect.server.services.deps import HubDep, get_current_mentor, get_current_user
from mentorconnect.server.services.notifications import NotificationService
from mentorconnect.server.services.realtime import timestamp, user_channel

logger = get_logger(__name__)
router = APIRouter()

STATUS_WORDING = {
    BookingStatus.PENDING: "pending",
    BookingStatus.CONFIRMED: "confirmed",
    BookingStatus.CANCELLED: "cancelled",
    BookingStatus.COMPLETED: "marked as completed",
}


def format_slot(start: datetime) -> tuple[str, str]:
    """Human readable date ("Monday, March 3") and time ("2:05 PM") of a session start."""
    date = f"{start:%A, %B} {start.day}"
    time = f"{start.hour % 12 or 12}:{start:%M %p}"
    return date, time


async def _notify_quietly(notifier: NotificationService, session: AsyncSession, **kwargs: Any) -> None:
    """Create a notification; a failure is logged and does not fail the request."""
    try:
        await notifier.notify(**kwargs)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to create notification for user {kwargs.get('user_id')}: {e}", exc_info=True)


async def _check_slot_free(bookings: BookingRepository, mentor_profile_id: str, start: datetime, end: datetime) -> None:
    conflict = await bookings.find_conflict(mentor_profile_id, start, end)
    if conflict is not None:
        logger.info(f"Booking conflict on mentor profile {mentor_profile_id} with booking {conflict.id}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This time slot is no longer available")


def _check_times(start: datetime, end: datetime) -> None:
    if start >= end:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Start time must be before end time")
    if start < utc_now():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot book a session in the past")


@router.get(
    "/sessions",
    response_model=BookingList,
    summary="List Sessions",
    description="Sessions of the current user, earliest first. Mentors see the mentee, mentees see the mentor.",
    responses={404: {"description": "Mentor profile not found"}},
)
async def list_sessions(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> BookingList:
    bookings = BookingRepository(session)
    items: list[BookingWithParties] = []

    if current_user.role == UserRole.MENTOR:
        profile = await MentorProfileRepository(session).get_by_user_id(current_user.id)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor profile not found")
        for booking, mentee in await bookings.list_for_mentor_profile(profile.id):
            item = BookingWithParties.model_validate(booking)
            item.mentee = UserContact.model_validate(mentee)
            items.append(item)
    else:
        for booking, profile, mentor in await bookings.list_for_mentee(current_user.id):
            item = BookingWithParties.model_validate(booking)
            item.mentor_profile = BookingMentorProfile(
                id=profile.id,
                title=profile.title,
                hourly_rate=profile.hourly_rate,
                user=UserSummary.model_validate(mentor),
            )
            items.append(item)

    return BookingList(bookings=items)


@router.post(
    "/sessions",
    response_model=BookingCreated,
    summary="Request Session",
    description="Request a session with a connected mentor. The booking starts as PENDING.",
    responses={
        400: {"description": "Invalid or past time range"},
        403: {"description": "Not connected with this mentor"},
        404: {"description": "Mentor profile not found"},
        409: {"description": "Time slot already taken"},
    },
)
async def request_session(
    body: BookingCreate,
    hub: HubDep,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> BookingCreated:
    """
    Request a session.

    The mentor and the mentee both get a notification, and the mentor's
    dashboard receives a ``session-update`` event.

    - **mentor_profile_id**: Mentor profile to book.
    - **start_time** / **end_time**: The requested interval.
    - **title** / **description**: Optional agenda.
    """
    _check_times(body.start_time, body.end_time)

    profile = await session.get(MentorProfile, body.mentor_profile_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor profile not found")
    mentor = await session.get(User, profile.user_id)

    if not await ConnectionRepository(session).is_accepted(profile.user_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You need to be connected with this mentor to book a session",
        )

    bookings = BookingRepository(session)
    await _check_slot_free(bookings, profile.id, body.start_time, body.end_time)
    booking = await bookings.create(
        Booking(
            mentor_profile_id=profile.id,
            mentee_id=current_user.id,
            title=body.title,
            description=body.description,
            start_time=body.start_time,
            end_time=body.end_time,
            status=BookingStatus.PENDING,
        )
    )
    logger.info(f"Booking {booking.id} requested by {current_user.id} on mentor profile {profile.id}")

    date, time = format_slot(booking.start_time)
    mentor_name = mentor.name if mentor else "your mentor"
    notifier = NotificationService(session, hub)
    await _notify_quietly(
        notifier,
        session,
        user_id=profile.user_id,
        sender_id=current_user.id,
        type=NotificationType.SESSION,
        title="New Booking Request",
        message=f"{current_user.name} has requested a mentoring session on {date} at {time}. Session ID: {booking.id}",
        metadata={"session_id": booking.id, "mentee_id": current_user.id, "action": "requested"},
    )
    await _notify_quietly(
        notifier,
        session,
        user_id=current_user.id,
        sender_id=current_user.id,
        type=NotificationType.SESSION,
        title="Session Request Sent",
        message=f"Your session request with {mentor_name} for {date} at {time} has been sent. Session ID: {booking.id}",
        metadata={"session_id": booking.id, "mentor_id": profile.user_id, "action": "requested"},
    )
    await hub.trigger(
        user_channel(profile.user_id),
        "session-update",
        {"type": "new-request", "session_id": booking.id, "timestamp": timestamp()},
    )

    return BookingCreated(booking=BookingRead.model_validate(booking))


@router.post(
    "/mentor/sessions",
    response_model=BookingCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule Session",
    description="Schedule a confirmed session with a connected mentee.",
    responses={
        400: {"description": "Invalid time range or the user is not a mentee"},
        403: {"description": "Not a mentor, not the profile owner, or not connected"},
        404: {"description": "Mentee not found"},
        409: {"description": "Time slot already taken"},
    },
)
async def schedule_session(
    body: MentorBookingCreate,
    hub: HubDep,
    current_user: User = Depends(get_current_mentor),
    session: AsyncSession = Depends(get_session),
) -> BookingCreated:
    """
    Schedule a session as a mentor.

    The booking is created as CONFIRMED and the mentee is notified.

    - **mentor_profile_id**: Must be the caller's own profile.
    - **mentee_id**: A connected mentee.
    - **title**: Session title.
    - **start_time** / **end_time**: The interval.
    """
    _check_times(body.start_time, body.end_time)

    profile = await session.get(MentorProfile, body.mentor_profile_id)
    if profile is None or profile.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only schedule on your own profile")

    mentee = await session.get(User, body.mentee_id)
    if mentee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentee not found")
    if mentee.role != UserRole.MENTEE:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Selected user is not a mentee")

    if not await ConnectionRepository(session).is_accepted(current_user.id, mentee.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You are not connected with this mentee")

    bookings = BookingRepository(session)
    await _check_slot_free(bookings, profile.id, body.start_time, body.end_time)
    booking = await bookings.create(
        Booking(
            mentor_profile_id=profile.id,
            mentee_id=mentee.id,
            title=body.title,
            description=body.description,
            start_time=body.start_time,
            end_time=body.end_time,
            status=BookingStatus.CONFIRMED,
        )
    )
    logger.info(f"Booking {booking.id} scheduled by mentor {current_user.id} with mentee {mentee.id}")

    date, time = format_slot(booking.start_time)
    await _notify_quietly(
        NotificationService(session, hub),
        session,
        user_id=mentee.id,
        sender_id=current_user.id,
        type=NotificationType.SESSION,
        title="New Session Scheduled",
        message=(
            f"{current_user.name} has scheduled a mentoring session with you on {date} at {time}. "
            f"Session ID: {booking.id}"
        ),
        metadata={"session_id": booking.id, "mentor_id": current_user.id, "action": "scheduled"},
    )
    await hub.trigger(
        user_channel(mentee.id),
        "session-update",
        {"type": "new-session", "session_id": booking.id, "timestamp": timestamp()},
    )

    return BookingCreated(booking=BookingRead.model_validate(booking))


async def _load_for_participant(session: AsyncSession, booking_id: str, user: User) -> tuple[Booking, MentorProfile]:
    booking = await session.get(Booking, booking_id)
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    profile = await session.get(MentorProfile, booking.mentor_profile_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor profile not found")
    if user.id not in (booking.mentee_id, profile.user_id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return booking, profile


@router.patch(
    "/sessions/{booking_id}",
    response_model=BookingRead,
    summary="Update Session Status",
    description="Change the status of a session the caller takes part in.",
    responses={
        401: {"description": "Caller is not a participant"},
        404: {"description": "Booking or its mentor profile not found"},
        409: {"description": "Booking is already cancelled or completed"},
    },
)
async def update_session_status(
    booking_id: str,
    body: BookingStatusUpdate,
    hub: HubDep,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> BookingRead:
    """
    Update a session's status and notify the other participant.

    - **status**: PENDING, CONFIRMED, CANCELLED or COMPLETED.
    """
    booking, profile = await _load_for_participant(session, booking_id, current_user)
    if booking.status.is_terminal:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Booking is already {booking.status.value.lower()}",
        )

    booking.status = body.status
    booking = await BookingRepository(session).update(booking)
    logger.info(f"Booking {booking.id} set to {booking.status.value} by {current_user.id}")

    receiver_id = booking.mentee_id if current_user.id == profile.user_id else profile.user_id
    await _notify_quietly(
        NotificationService(session, hub),
        session,
        user_id=receiver_id,
        sender_id=current_user.id,
        type=NotificationType.BOOKING,
        title="Session Update",
        message=f"Your session has been {STATUS_WORDING[booking.status]}",
        metadata={"session_id": booking.id, "status": booking.status.value},
    )
    return BookingRead.model_validate(booking)


@router.patch(
    "/sessions/{booking_id}/auto-complete",
    response_model=BookingAutoCompleteResponse,
    summary="Auto-complete Session",
    description="Mark a confirmed session whose end time has passed as completed.",
    responses={
        400: {"description": "Session is not confirmed or has not ended yet"},
        401: {"description": "Caller is not a participant"},
        404: {"description": "Booking or its mentor profile not found"},
    },
)
async def auto_complete_session(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> BookingAutoCompleteResponse:
    booking, _ = await _load_for_participant(session, booking_id, current_user)
    if booking.status != BookingStatus.CONFIRMED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only confirmed sessions can be completed")
    if booking.end_time > utc_now():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Session has not ended yet")

    booking.status = BookingStatus.COMPLETED
    booking = await BookingRepository(session).update(booking)
    logger.info(f"Booking {booking.id} auto-completed")
    return BookingAutoCompleteResponse(
        message="Session marked as completed", session=BookingRead.model_validate(booking)
    )
