"""
Call Signaling Endpoints.

Relays call setup events between users. Nothing is stored; media runs
peer-to-peer through the client's RTC provider.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from mentorconnect.core.database.entities.users import User
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.calls import CallChannel, CallInitiate, CallResult
from mentorconnect.core.models.io.common import UserSummary
from mentorconnect.server.services.deps import HubDep, get_current_user
from mentorconnect.server.services.realtime import call_channel, user_channel

logger = get_logger(__name__)
router = APIRouter()


def _require_channel(body: CallChannel) -> str:
    if not body.channel_name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Channel name is required")
    return body.channel_name


@router.post(
    "/initiate",
    response_model=CallResult,
    summary="Initiate Call",
    description="Ring another user with an ``incoming-call`` event.",
    responses={400: {"description": "A required field is missing"}},
)
async def initiate_call(
    body: CallInitiate,
    hub: HubDep,
    current_user: User = Depends(get_current_user),
) -> CallResult:
    """
    Start a call.

    - **recipient_id**: User to ring.
    - **channel_name**: Call channel both sides will join.
    - **is_video**: Video or audio-only call.
    """
    if not body.recipient_id or not body.channel_name or body.is_video is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    delivered = await hub.trigger(
        user_channel(body.recipient_id),
        "incoming-call",
        {
            "channel_name": body.channel_name,
            "is_video": body.is_video,
            "caller": UserSummary.model_validate(current_user).model_dump(),
        },
    )
    logger.info(f"Call {body.channel_name} initiated by {current_user.id} to {body.recipient_id}")
    return CallResult(success=delivered)


@router.post(
    "/accept",
    response_model=CallResult,
    summary="Accept Call",
    description="Tell the caller the call was accepted.",
    responses={400: {"description": "channel_name is missing"}},
)
async def accept_call(body: CallChannel, hub: HubDep, current_user: User = Depends(get_current_user)) -> CallResult:
    channel_name = _require_channel(body)
    delivered = await hub.trigger(
        call_channel(channel_name),
        "call-accepted",
        {"accepted_by": UserSummary.model_validate(current_user).model_dump()},
    )
    return CallResult(success=delivered)


@router.post(
    "/end",
    response_model=CallResult,
    summary="End Call",
    description="Tell the other side the call has ended.",
    responses={400: {"description": "channel_name is missing"}},
)
async def end_call(body: CallChannel, hub: HubDep, current_user: User = Depends(get_current_user)) -> CallResult:
    channel_name = _require_channel(body)
    delivered = await hub.trigger(
        call_channel(channel_name),
        "call-ended",
        {"ended_by": UserSummary.model_validate(current_user).model_dump()},
    )
    logger.info(f"Call {channel_name} ended by {current_user.id}")
    return CallResult(success=delivered)
