"""
Real-time Stream Endpoint.

Server-Sent Events feed of the in-process hub, for clients that do not use
Pusher directly.
"""

import json
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlmodel.ext.asyncio.session import AsyncSession
from sse_starlette.sse import EventSourceResponse

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.connections import Connection
from mentorconnect.core.database.entities.users import User
from mentorconnect.core.logging_config import get_logger
from mentorconnect.server.services.deps import HubDep, get_current_user
from mentorconnect.server.services.realtime import RealtimeHub, user_channel

logger = get_logger(__name__)
router = APIRouter()

KEEPALIVE_SECONDS = 15


async def authorize_channel(channel: str, user: User, session: AsyncSession) -> None:
    """Raise 403 unless ``user`` may listen on ``channel``."""
    if channel.startswith("call-") and len(channel) > len("call-"):
        return
    if channel.startswith("user-"):
        if channel == user_channel(user.id):
            return
    elif channel.startswith("chat-"):
        connection = await session.get(Connection, channel[len("chat-") :])
        if connection is not None and connection.has_participant(user.id):
            return
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to subscribe to this channel")


async def event_stream(request: Request, hub: RealtimeHub, channel: str) -> AsyncIterator[dict[str, Any]]:
    """Yield SSE events for ``channel`` until the client disconnects."""
    async with hub.subscribe(channel) as queue:
        while True:
            if await request.is_disconnected():
                logger.info(f"Client disconnected from '{channel}'")
                break
            item = await queue.get()
            yield {"event": item["event"], "data": json.dumps(item["data"], default=str)}


@router.get(
    "/stream",
    summary="Stream Events",
    description="Subscribe to a real-time channel as Server-Sent Events.",
    response_description="An ``text/event-stream`` of channel events.",
    responses={403: {"description": "Caller may not listen on this channel"}},
)
async def stream(
    request: Request,
    hub: HubDep,
    channel: str = Query(..., description="Channel name, e.g. user-{id}, chat-{connection_id}, call-{name}"),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """
    Stream events of one channel.

    - **user-{id}**: Only your own user channel.
    - **chat-{connection_id}**: Only connections you take part in.
    - **call-{name}**: Any authenticated user.
    """
    await authorize_channel(channel, current_user, session)
    logger.debug(f"User {current_user.id} subscribed to '{channel}'")
    return EventSourceResponse(event_stream(request, hub, channel), ping=KEEPALIVE_SECONDS)
