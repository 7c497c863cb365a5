"""
Notification Endpoints.

Reading notifications and marking them as read.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.users import User
from mentorconnect.core.database.repositories.notifications import NotificationRepository
from mentorconnect.core.database.repositories.users import UserRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.common import UserSummary
from mentorconnect.core.models.io.notifications import (
    MarkAllReadResponse,
    MarkReadRequest,
    NotificationRead,
    NotificationWithSender,
)
from mentorconnect.server.services.deps import get_current_user

logger = get_logger(__name__)
router = APIRouter()

RECENT_LIMIT = 50


@router.get(
    "",
    response_model=list[NotificationWithSender],
    summary="List Notifications",
    description="The 50 most recent notifications of the current user, newest first.",
)
async def list_notifications(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[NotificationWithSender]:
    notifications = await NotificationRepository(session).list_recent(current_user.id, limit=RECENT_LIMIT)
    senders = await UserRepository(session).get_many([n.sender_id for n in notifications if n.sender_id])
    results = []
    for notification in notifications:
        sender = senders.get(notification.sender_id) if notification.sender_id else None
        results.append(
            NotificationWithSender(
                **NotificationRead.model_validate(notification).model_dump(),
                sender=UserSummary.model_validate(sender) if sender else None,
                timestamp=notification.created_at,
            )
        )
    return results


@router.post(
    "/mark-read",
    response_model=NotificationRead,
    summary="Mark Notification Read",
    description="Mark one of the current user's notifications as read.",
    responses={
        400: {"description": "notification_id is missing"},
        404: {"description": "Notification not found"},
    },
)
async def mark_read(
    body: MarkReadRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> NotificationRead:
    if not body.notification_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Notification ID is required")

    repo = NotificationRepository(session)
    notification = await repo.get_by_id(body.notification_id)
    if notification is None or notification.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    notification.read = True
    notification = await repo.update(notification)
    return NotificationRead.model_validate(notification)


@router.post(
    "/mark-all-read",
    response_model=MarkAllReadResponse,
    summary="Mark All Notifications Read",
    description="Mark every unread notification of the current user as read.",
)
async def mark_all_read(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MarkAllReadResponse:
    updated = await NotificationRepository(session).mark_all_read(current_user.id)
    logger.debug(f"Marked {updated} notifications read for user {current_user.id}")
    return MarkAllReadResponse(updated_count=updated)
