"""
Availability Endpoints.

Mentors publish their open slots per weekday; anyone signed in can read them.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.availability import Availability
from mentorconnect.core.database.entities.users import User
from mentorconnect.core.database.repositories.availability import AvailabilityRepository
from mentorconnect.core.database.repositories.mentor_profiles import MentorProfileRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.mentors import AvailabilityRead, AvailabilityUpsert
from mentorconnect.server.services.deps import get_current_user
from mentorconnect.server.services.scheduling import SlotValidationError, normalize_day, validate_slots

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=list[AvailabilityRead],
    summary="Get Availability",
    description="List the weekly availability of a mentor profile, Monday first.",
    responses={400: {"description": "mentor_profile_id is missing"}},
)
async def get_availability(
    mentor_profile_id: Optional[str] = Query(default=None),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[AvailabilityRead]:
    if not mentor_profile_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Mentor profile ID is required")
    rows = await AvailabilityRepository(session).list_for_profile(mentor_profile_id)
    return [AvailabilityRead.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=AvailabilityRead,
    summary="Set Availability",
    description="Create or replace the slots of one weekday for the current mentor.",
    responses={
        400: {"description": "Invalid day, malformed or overlapping slots"},
        404: {"description": "Mentor profile not found"},
    },
)
async def set_availability(
    body: AvailabilityUpsert,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> AvailabilityRead:
    """
    Set the availability of one weekday.

    - **day**: Weekday name, e.g. "Monday".
    - **slots**: ``{"start": "HH:MM", "end": "HH:MM"}`` items; each must start
      before it ends and no two may overlap.
    """
    profile = await MentorProfileRepository(session).get_by_user_id(current_user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor profile not found")

    try:
        day = normalize_day(body.day)
        slots = validate_slots((slot.start, slot.end) for slot in body.slots)
    except SlotValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    repo = AvailabilityRepository(session)
    row = await repo.get_for_day(profile.id, day) or Availability(mentor_profile_id=profile.id, day=day)
    row.slots = slots
    row = await repo.update(row)
    logger.info(f"Availability for {day} saved on mentor profile {profile.id} ({len(slots)} slots)")
    return AvailabilityRead.model_validate(row)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Availability",
    description="Delete one weekday of the current mentor's availability.",
    responses={
        400: {"description": "id is missing"},
        404: {"description": "Availability not found or not owned by the caller"},
    },
)
async def delete_availability(
    id: Optional[str] = Query(default=None),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Response:
    if not id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Availability ID is required")

    repo = AvailabilityRepository(session)
    row = await repo.get_by_id(id)
    profile = await MentorProfileRepository(session).get_by_user_id(current_user.id)
    if row is None or profile is None or row.mentor_profile_id != profile.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Availability not found")

    await repo.delete(row.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
