"""
Messaging Endpoints.

Chat between the two parties of an accepted connection. New messages are
stored, notified and relayed on the connection's chat channel and on the
recipient's user channel.
"""

from typing import Union

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.connections import Connection, ConnectionStatus
from mentorconnect.core.database.entities.messages import Message
from mentorconnect.core.database.entities.notifications import NotificationType
from mentorconnect.core.database.entities.users import User
from mentorconnect.core.database.repositories.messages import MessageRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.common import UserSummary
from mentorconnect.core.models.io.messages import MessageCreate, MessageRead, MessageSendResult, RelayError
from mentorconnect.integrations.errors import RealtimeError
from mentorconnect.server.services.deps import HubDep, get_current_user
from mentorconnect.server.services.notifications import NotificationService
from mentorconnect.server.services.realtime import chat_channel, user_channel

logger = get_logger(__name__)
router = APIRouter()


async def _load_connection(session: AsyncSession, connection_id: str, user: User) -> Connection:
    connection = await session.get(Connection, connection_id)
    if connection is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
    if not connection.has_participant(user.id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return connection


def _read(message: Message, sender: User) -> MessageRead:
    return MessageRead(
        id=message.id,
        connection_id=message.connection_id,
        sender_id=message.sender_id,
        content=message.content,
        created_at=message.created_at,
        sender=UserSummary.model_validate(sender),
    )


@router.post(
    "/send",
    response_model=Union[MessageRead, MessageSendResult],
    summary="Send Message",
    description="Send a message within an accepted connection.",
    responses={
        401: {"description": "Caller is not a participant"},
        403: {"description": "Connection is not accepted"},
        404: {"description": "Connection not found"},
    },
)
async def send_message(
    body: MessageCreate,
    hub: HubDep,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Union[MessageRead, MessageSendResult]:
    """
    Send a message.

    The message is stored even when the real-time relay fails; in that case the
    response wraps it together with a ``REALTIME_ERROR``.

    - **connection_id**: Connection to write in.
    - **content**: Non-empty text.
    """
    connection = await _load_connection(session, body.connection_id, current_user)
    if connection.status != ConnectionStatus.ACCEPTED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Connection is not active")

    message = await MessageRepository(session).create(
        Message(connection_id=connection.id, sender_id=current_user.id, content=body.content)
    )
    recipient_id = connection.other_party(current_user.id)
    logger.debug(f"Message {message.id} stored on connection {connection.id}")

    await NotificationService(session, hub).notify(
        user_id=recipient_id,
        sender_id=current_user.id,
        type=NotificationType.MESSAGE,
        title="New Message",
        message=message.content,
        relay=False,
    )

    result = _read(message, current_user)
    payload = result.model_dump(mode="json")
    try:
        await hub.trigger_strict(chat_channel(connection.id), "new-message", payload)
        await hub.trigger_strict(user_channel(recipient_id), "new-message", payload)
    except RealtimeError as e:
        logger.warning(f"Message {message.id} stored but relay failed: {e}")
        return MessageSendResult(message=result, error=RelayError(details=e.details or str(e)))
    return result


@router.get(
    "/{connection_id}",
    response_model=list[MessageRead],
    summary="List Messages",
    description="Messages of a connection, oldest first.",
    responses={
        401: {"description": "Caller is not a participant"},
        404: {"description": "Connection not found"},
    },
)
async def list_messages(
    connection_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[MessageRead]:
    connection = await _load_connection(session, connection_id, current_user)
    rows = await MessageRepository(session).list_for_connection(connection.id)
    return [_read(message, sender) for message, sender in rows]
