"""
Connection Endpoints.

A mentee asks a mentor to connect; the mentor accepts or rejects. Either side
may later remove an accepted connection. Rejected and removed connections can
be requested again.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session, utc_now
from mentorconnect.core.database.entities.connections import Connection, ConnectionStatus
from mentorconnect.core.database.entities.notifications import NotificationType
from mentorconnect.core.database.entities.users import User, UserRole
from mentorconnect.core.database.repositories.connections import ConnectionRepository
from mentorconnect.core.database.repositories.mentor_profiles import MentorProfileRepository
from mentorconnect.core.database.repositories.reviews import MentorReviewRepository
from mentorconnect.core.database.repositories.users import UserRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.common import UserSummary
from mentorconnect.core.models.io.connections import (
    ConnectionAction,
    ConnectionRead,
    ConnectionRemove,
    ConnectionRequestCreate,
    ConnectionRespond,
    ConnectionWithUsers,
    MenteeConnection,
    MentorProfileSummary,
    PendingConnection,
)
from mentorconnect.server.services.deps import HubDep, get_current_user
from mentorconnect.server.services.notifications import NotificationService
from mentorconnect.server.services.realtime import user_channel

logger = get_logger(__name__)
router = APIRouter()

OPEN_STATUSES = (ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED)


def _summary(user: User | None, user_id: str) -> UserSummary:
    if user is None:
        return UserSummary(id=user_id)
    return UserSummary.model_validate(user)


@router.post(
    "/request",
    response_model=PendingConnection,
    summary="Request Connection",
    description="Ask a mentor to connect. Re-opens a rejected or removed connection.",
    responses={
        400: {"description": "A pending or accepted connection already exists"},
        404: {"description": "Mentor not found"},
    },
)
async def request_connection(
    body: ConnectionRequestCreate,
    hub: HubDep,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> PendingConnection:
    """
    Request a connection with a mentor.

    The mentor gets a notification and a ``connection-request`` event.

    - **mentor_id**: User ID of the mentor.
    """
    mentor = await session.get(User, body.mentor_id)
    if mentor is None or mentor.role != UserRole.MENTOR:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor not found")

    repo = ConnectionRepository(session)
    connection = await repo.get_pair(mentor.id, current_user.id)
    if connection is not None and connection.status in OPEN_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Connection request already exists")

    if connection is None:
        connection = Connection(mentor_id=mentor.id, mentee_id=current_user.id)
    else:
        # a re-opened request counts as a new one in the mentor's pending list
        connection.created_at = utc_now()
    connection.status = ConnectionStatus.PENDING
    connection = await repo.update(connection)
    logger.info(f"Connection {connection.id} requested by {current_user.id} to mentor {mentor.id}")

    await NotificationService(session, hub).notify(
        user_id=mentor.id,
        sender_id=current_user.id,
        type=NotificationType.CONNECTION,
        title="Connection Request",
        message=f"{current_user.name} wants to connect with you!",
        relay=False,
    )

    result = PendingConnection(
        **ConnectionRead.model_validate(connection).model_dump(),
        mentee=UserSummary.model_validate(current_user),
    )
    await hub.trigger(user_channel(mentor.id), "connection-request", result.model_dump(mode="json"))
    return result


@router.post(
    "/respond",
    response_model=ConnectionWithUsers,
    summary="Respond to Connection",
    description="Accept or reject a pending connection request addressed to the current mentor.",
    responses={
        400: {"description": "Invalid action"},
        401: {"description": "Request is addressed to another mentor"},
        404: {"description": "Connection request not found"},
        409: {"description": "Request is no longer pending"},
    },
)
async def respond_to_connection(
    body: ConnectionRespond,
    hub: HubDep,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ConnectionWithUsers:
    """
    Respond to a connection request.

    - **request_id**: Connection ID.
    - **action**: ``accept`` or ``reject``.
    """
    try:
        action = ConnectionAction(body.action)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action") from None

    repo = ConnectionRepository(session)
    connection = await repo.get_by_id(body.request_id)
    if connection is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection request not found")
    if connection.mentor_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if connection.status != ConnectionStatus.PENDING:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Connection request is already {connection.status.value.lower()}",
        )

    connection.status = ConnectionStatus.ACCEPTED if action == ConnectionAction.ACCEPT else ConnectionStatus.REJECTED
    connection = await repo.update(connection)
    logger.info(f"Connection {connection.id} {connection.status.value} by mentor {current_user.id}")

    mentee = await session.get(User, connection.mentee_id)
    mentee_summary = _summary(mentee, connection.mentee_id)
    result = ConnectionWithUsers(
        **ConnectionRead.model_validate(connection).model_dump(),
        mentor=UserSummary.model_validate(current_user),
        mentee=mentee_summary,
        other_user=mentee_summary,
    )
    await hub.trigger(
        user_channel(connection.mentee_id),
        "connection-response",
        {
            "connection": result.model_dump(mode="json"),
            "action": action.value,
            "message": f"{current_user.name} has {action.value}ed your connection request.",
        },
    )
    return result


@router.post(
    "/remove",
    response_model=ConnectionRead,
    summary="Remove Connection",
    description="Remove a connection the current user takes part in.",
    responses={
        400: {"description": "connection_id is missing"},
        401: {"description": "Caller is not a participant"},
        404: {"description": "Connection not found"},
    },
)
async def remove_connection(
    body: ConnectionRemove,
    hub: HubDep,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ConnectionRead:
    if not body.connection_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Connection ID is required")

    repo = ConnectionRepository(session)
    connection = await repo.get_by_id(body.connection_id)
    if connection is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
    if not connection.has_participant(current_user.id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    connection.status = ConnectionStatus.REMOVED
    connection = await repo.update(connection)
    logger.info(f"Connection {connection.id} removed by {current_user.id}")

    await NotificationService(session, hub).notify(
        user_id=connection.other_party(current_user.id),
        sender_id=current_user.id,
        type=NotificationType.CONNECTION,
        title="Connection Removed",
        message=f"{current_user.name} has removed the connection with you.",
    )
    return ConnectionRead.model_validate(connection)


@router.get(
    "/list",
    response_model=list[ConnectionWithUsers],
    summary="List Connections",
    description="Accepted connections of the current user in either role, most recently updated first.",
)
async def list_connections(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[ConnectionWithUsers]:
    connections = await ConnectionRepository(session).list_accepted_for_user(current_user.id)
    users = await UserRepository(session).get_many(
        [c.mentor_id for c in connections] + [c.mentee_id for c in connections]
    )

    results = []
    for connection in connections:
        mentor = _summary(users.get(connection.mentor_id), connection.mentor_id)
        mentee = _summary(users.get(connection.mentee_id), connection.mentee_id)
        results.append(
            ConnectionWithUsers(
                **ConnectionRead.model_validate(connection).model_dump(),
                mentor=mentor,
                mentee=mentee,
                other_user=mentee if connection.mentor_id == current_user.id else mentor,
            )
        )
    return results


@router.get(
    "/pending",
    response_model=list[PendingConnection],
    summary="Pending Requests",
    description="Pending connection requests addressed to the current mentor, newest first.",
)
async def pending_connections(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[PendingConnection]:
    connections = await ConnectionRepository(session).list_pending_for_mentor(current_user.id)
    users = await UserRepository(session).get_many([c.mentee_id for c in connections])
    return [
        PendingConnection(
            **ConnectionRead.model_validate(connection).model_dump(),
            mentee=_summary(users.get(connection.mentee_id), connection.mentee_id),
        )
        for connection in connections
    ]


@router.get(
    "/mentee",
    response_model=list[MenteeConnection],
    summary="Mentee Connections",
    description="Every connection of the current mentee with the mentor and a summary of the mentor profile.",
)
async def mentee_connections(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[MenteeConnection]:
    connections = await ConnectionRepository(session).list_for_mentee(current_user.id)
    users = await UserRepository(session).get_many([c.mentor_id for c in connections])
    mentor_profiles = MentorProfileRepository(session)
    reviews = MentorReviewRepository(session)

    results = []
    for connection in connections:
        profile = await mentor_profiles.get_by_user_id(connection.mentor_id)
        summary = None
        if profile is not None:
            summary = MentorProfileSummary(
                title=profile.title,
                expertise=profile.expertise,
                rating=round(await reviews.average_rating(profile.id), 2),
            )
        results.append(
            MenteeConnection(
                **ConnectionRead.model_validate(connection).model_dump(),
                mentor=_summary(users.get(connection.mentor_id), connection.mentor_id),
                mentor_profile=summary,
            )
        )
    return results
