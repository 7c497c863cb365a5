"""
Profile Endpoints.

The merged profile of the signed-in user (account, general profile and, for
mentors, the mentor profile) and its completion status.
"""

import re
from typing import Any, Optional

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.mentor_profiles import MentorProfile
from mentorconnect.core.database.entities.profiles import Profile
from mentorconnect.core.database.entities.users import User, UserRole
from mentorconnect.core.database.repositories.mentor_profiles import MentorProfileRepository
from mentorconnect.core.database.repositories.profiles import ProfileRepository
from mentorconnect.core.database.repositories.users import UserRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.profiles import ProfileCompletionRead, ProfileRead, ProfileUpdate
from mentorconnect.server.services.completion import build_checklist, completion_percentage
from mentorconnect.server.services.deps import get_current_user

logger = get_logger(__name__)
router = APIRouter()

GENERAL_FIELDS = ("title", "bio", "location", "company", "website", "timezone")
MENTEE_FIELDS = (
    "learning_goals",
    "skill_level",
    "areas_of_interest",
    "learning_style",
    "career_goals",
    "current_challenges",
    "education",
)


def parse_years(experience: Optional[str]) -> int:
    """Leading integer of a free-text experience value, 0 when there is none."""
    match = re.match(r"\s*(\d+)", experience or "")
    return int(match.group(1)) if match else 0


def build_profile_view(user: User, profile: Optional[Profile], mentor_profile: Optional[MentorProfile]) -> dict[str, Any]:
    view: dict[str, Any] = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "image": user.image,
        "role": user.role.value,
        "onboarding_completed": user.onboarding_completed,
        "is_mentor": mentor_profile is not None,
    }
    for name in GENERAL_FIELDS + MENTEE_FIELDS:
        view[name] = (getattr(profile, name) if profile else None) or ""

    if mentor_profile is not None:
        view.update(
            github_url=mentor_profile.github or "",
            linkedin_url=mentor_profile.linkedin or "",
            expertise=list(mentor_profile.expertise or []),
            skills=list(mentor_profile.skills or []),
            hourly_rate=mentor_profile.hourly_rate or 0,
            years_of_experience=parse_years(mentor_profile.experience),
        )

    view["completion_status"] = completion_percentage(user, profile, mentor_profile)
    return view


async def _load(session: AsyncSession, user: User) -> tuple[Optional[Profile], Optional[MentorProfile]]:
    profile = await ProfileRepository(session).get_by_user_id(user.id)
    mentor_profile = await MentorProfileRepository(session).get_by_user_id(user.id)
    return profile, mentor_profile


@router.get(
    "",
    response_model=ProfileRead,
    summary="Get Profile",
    description="Return the merged profile of the current user with its completion percentage.",
)
async def get_profile(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProfileRead:
    profile, mentor_profile = await _load(session, current_user)
    return ProfileRead.model_validate(build_profile_view(current_user, profile, mentor_profile))


@router.put(
    "",
    response_model=ProfileRead,
    summary="Update Profile",
    description="Update the account, the general profile and, for mentors, the mentor profile in one call.",
)
async def update_profile(
    body: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProfileRead:
    """
    Update the merged profile.

    Mentee learning fields are only stored for mentees. For mentors the mentor
    profile is created or updated from the same form:

    - **github_url** / **linkedin_url**: Stored as the mentor's GitHub and LinkedIn links.
    - **skills**: Stored as both skills and expertise.
    - **years_of_experience**: Stored as the experience text.
    - **hourly_rate**: Hourly price.
    """
    if body.name is not None:
        current_user.name = body.name
    if body.image:
        current_user.image = body.image
    if body.onboarding_completed is not None:
        current_user.onboarding_completed = body.onboarding_completed
    await UserRepository(session).update(current_user)

    profiles = ProfileRepository(session)
    profile = await profiles.get_by_user_id(current_user.id) or Profile(user_id=current_user.id)
    fields = GENERAL_FIELDS + (MENTEE_FIELDS if current_user.role == UserRole.MENTEE else ())
    for name in fields:
        setattr(profile, name, getattr(body, name) or "")
    profile = await profiles.update(profile)

    mentor_profiles = MentorProfileRepository(session)
    mentor_profile = await mentor_profiles.get_by_user_id(current_user.id)
    if current_user.role == UserRole.MENTOR:
        if mentor_profile is None:
            mentor_profile = MentorProfile(user_id=current_user.id, languages=["English"])
        skills = list(body.skills or [])
        mentor_profile.title = body.title or "Mentor"
        mentor_profile.bio = body.bio or ""
        mentor_profile.company = body.company or ""
        mentor_profile.github = body.github_url or ""
        mentor_profile.linkedin = body.linkedin_url or ""
        mentor_profile.website = body.website or ""
        mentor_profile.expertise = skills
        mentor_profile.skills = list(skills)
        mentor_profile.hourly_rate = body.hourly_rate or 0
        mentor_profile.experience = str(body.years_of_experience or 0)
        mentor_profile = await mentor_profiles.update(mentor_profile)

    logger.info(f"Profile updated for user {current_user.id}")
    return ProfileRead.model_validate(build_profile_view(current_user, profile, mentor_profile))


@router.get(
    "/completion",
    response_model=ProfileCompletionRead,
    summary="Profile Completion",
    description="Return the completion percentage and the role-specific checklist of missing fields.",
)
async def get_profile_completion(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProfileCompletionRead:
    profile, mentor_profile = await _load(session, current_user)
    view = build_profile_view(current_user, profile, mentor_profile)
    checklist = build_checklist(current_user.role, view)
    missing = [item["label"] for item in checklist if not item["completed"]]
    return ProfileCompletionRead(
        completion_status=view["completion_status"],
        checklist=checklist,
        missing_fields=missing,
        is_complete=not missing,
    )
