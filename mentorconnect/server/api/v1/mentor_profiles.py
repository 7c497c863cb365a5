"""
Mentor Profile Endpoints.

Three write paths exist for a mentor profile:
- ``POST /onboarding``: the short onboarding form,
- ``POST /mentor-profile``: the basic creation form (fails when a profile exists),
- ``POST /mentor/profile``: the full editor, creating or replacing the profile.

``GET /mentor/profile`` returns the profile with dashboard statistics.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.mentor_profiles import MentorProfile
from mentorconnect.core.database.entities.users import User
from mentorconnect.core.database.repositories.mentor_profiles import MentorProfileRepository
from mentorconnect.core.database.repositories.reviews import MentorReviewRepository
from mentorconnect.core.database.repositories.users import UserRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.mentors import (
    MentorDashboardRead,
    MentorProfileCreate,
    MentorProfileRead,
    MentorProfileUpsert,
    MentorProfileUpsertResponse,
    OnboardingRequest,
    OnboardingResponse,
)
from mentorconnect.server.services.deps import get_current_user

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "/onboarding",
    response_model=OnboardingResponse,
    summary="Complete Onboarding",
    description="Create or update the mentor profile from the onboarding form and mark onboarding as completed.",
)
async def complete_onboarding(
    body: OnboardingRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> OnboardingResponse:
    """
    Save the onboarding form.

    A new profile takes every field. An existing profile only has its
    experience, interests and goals replaced.

    - **title**: Professional title.
    - **hourly_rate**: Hourly price.
    - **experience**: Years of experience.
    - **interests** / **goals**: Free-form lists.
    """
    repo = MentorProfileRepository(session)
    profile = await repo.get_by_user_id(current_user.id)
    if profile is None:
        profile = MentorProfile(
            user_id=current_user.id,
            title=body.title,
            hourly_rate=body.hourly_rate,
            experience=body.experience,
            interests=body.interests,
            goals=body.goals,
        )
    else:
        profile.experience = body.experience
        profile.interests = list(body.interests)
        profile.goals = list(body.goals)
    profile = await repo.update(profile)

    current_user.onboarding_completed = True
    await UserRepository(session).update(current_user)

    logger.info(f"Onboarding completed for user {current_user.id}")
    return OnboardingResponse(message="Onboarding completed", profile=MentorProfileRead.model_validate(profile))


@router.post(
    "/mentor-profile",
    response_model=MentorProfileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Mentor Profile",
    description="Create the mentor profile of the current user. Fails when one already exists.",
    responses={400: {"description": "Mentor profile already exists"}},
)
async def create_mentor_profile(
    body: MentorProfileCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MentorProfileRead:
    repo = MentorProfileRepository(session)
    if await repo.get_by_user_id(current_user.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Mentor profile already exists")

    profile = await repo.create(MentorProfile(user_id=current_user.id, hourly_rate=0, **body.model_dump()))
    logger.info(f"Mentor profile {profile.id} created for user {current_user.id}")
    return MentorProfileRead.model_validate(profile)


@router.post(
    "/mentor/profile",
    response_model=MentorProfileUpsertResponse,
    summary="Save Mentor Profile",
    description="Create or replace the mentor profile of the current user from the full editor.",
)
async def upsert_mentor_profile(
    body: MentorProfileUpsert,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MentorProfileUpsertResponse:
    """
    Save the full mentor profile.

    - **bio**: At least 50 characters.
    - **hourly_rate**: At least 1.
    - **github** / **linkedin** / **website**: Valid http(s) URLs or empty.
    - **interests** / **goals**: Left unchanged when omitted.
    """
    repo = MentorProfileRepository(session)
    profile = await repo.get_by_user_id(current_user.id) or MentorProfile(user_id=current_user.id)
    for key, value in body.model_dump(exclude_none=True).items():
        setattr(profile, key, value)
    profile = await repo.update(profile)

    current_user.onboarding_completed = True
    await UserRepository(session).update(current_user)

    logger.info(f"Mentor profile {profile.id} saved for user {current_user.id}")
    return MentorProfileUpsertResponse(profile=MentorProfileRead.model_validate(profile))


@router.get(
    "/mentor/profile",
    response_model=MentorDashboardRead,
    summary="Get Mentor Dashboard Profile",
    description="Return the mentor profile of the current user with session, earnings, rating and student statistics.",
    responses={404: {"description": "Mentor profile not found"}},
)
async def get_mentor_profile(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MentorDashboardRead:
    """
    Get the mentor dashboard profile.

    - **total_sessions**: Confirmed and completed sessions.
    - **total_earnings**: Hourly rate times duration over completed sessions.
    - **average_rating**: Mean review rating, 0 without reviews.
    - **total_students**: Distinct mentees of confirmed and completed sessions.
    """
    repo = MentorProfileRepository(session)
    profile = await repo.get_by_user_id(current_user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor profile not found")

    stats = await repo.get_stats(profile)
    average_rating = await MentorReviewRepository(session).average_rating(profile.id)
    return MentorDashboardRead(
        **MentorProfileRead.model_validate(profile).model_dump(),
        **stats,
        average_rating=round(average_rating, 2),
    )
