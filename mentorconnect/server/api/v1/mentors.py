"""
Mentor Discovery Endpoints.

Public search and detail pages, plus the mentor lists shown on the signed-in
dashboard. Ratings shown here are always computed from reviews.
"""

from typing import Optional
from urllib.parse import quote_plus

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.users import User, UserRole
from mentorconnect.core.database.repositories.availability import AvailabilityRepository
from mentorconnect.core.database.repositories.mentor_profiles import MentorProfileRepository
from mentorconnect.core.database.repositories.reviews import MentorReviewRepository
from mentorconnect.core.database.repositories.users import UserRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.common import UserSummary
from mentorconnect.core.models.io.mentors import (
    AvailabilityDay,
    MentorDetailRead,
    MentorListItem,
    MentorSearchItem,
    ReviewAuthor,
    ReviewRead,
)
from mentorconnect.server.services.deps import get_current_user

logger = get_logger(__name__)
router = APIRouter()

TOP_MENTORS_LIMIT = 6


def split_csv(value: Optional[str]) -> set[str]:
    """Parse a comma-separated filter into a set of lowercase terms."""
    if not value:
        return set()
    return {item.strip().lower() for item in value.split(",") if item.strip()}


def shares_any(wanted: set[str], values: list[str]) -> bool:
    return bool(wanted & {value.lower() for value in values or []})


def avatar_url(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote_plus(name)}"


@router.get(
    "",
    response_model=list[MentorSearchItem],
    summary="Search Mentors",
    description="Public mentor search by name, languages, skills and price range.",
    response_description="Matching mentors ordered by name.",
)
async def search_mentors(
    search: Optional[str] = Query(default=None, description="Case-insensitive substring of the mentor name"),
    languages: Optional[str] = Query(default=None, description="Comma-separated languages; any match counts"),
    skills: Optional[str] = Query(default=None, description="Comma-separated skills; any match counts"),
    min_price: Optional[float] = Query(default=None, ge=0, description="Inclusive minimum hourly rate"),
    max_price: Optional[float] = Query(default=None, ge=0, description="Inclusive maximum hourly rate"),
    session: AsyncSession = Depends(get_session),
) -> list[MentorSearchItem]:
    """
    Search mentors.

    Only users with the MENTOR role and a mentor profile are returned.

    - **search**: Matches anywhere in the name, ignoring case.
    - **languages** / **skills**: A mentor matches when at least one listed value is on its profile.
    - **min_price** / **max_price**: Bounds on the hourly rate, both inclusive.
    """
    rows = await UserRepository(session).search_mentors(search=search, min_price=min_price, max_price=max_price)

    wanted_languages = split_csv(languages)
    wanted_skills = split_csv(skills)
    if wanted_languages:
        rows = [(user, profile) for user, profile in rows if shares_any(wanted_languages, profile.languages)]
    if wanted_skills:
        rows = [(user, profile) for user, profile in rows if shares_any(wanted_skills, profile.skills)]

    ratings = await MentorReviewRepository(session).rating_summary([profile.id for _, profile in rows])
    results = []
    for user, profile in rows:
        average, count = ratings.get(profile.id, (0.0, 0))
        results.append(
            MentorSearchItem(
                id=user.id,
                name=user.name,
                title=profile.title,
                company=profile.company,
                expertise=profile.expertise,
                hourly_rate=profile.hourly_rate,
                languages=profile.languages,
                skills=profile.skills,
                rating=round(average, 2),
                total_reviews=count,
            )
        )
    logger.debug(f"Mentor search returned {len(results)} results")
    return results


async def _list_items(session: AsyncSession, limit: Optional[int] = None) -> list[MentorListItem]:
    rows = await MentorProfileRepository(session).list_onboarded(limit=limit)
    ratings = await MentorReviewRepository(session).rating_summary([profile.id for profile, _ in rows])
    return [
        MentorListItem(
            id=profile.id,
            user_id=profile.user_id,
            title=profile.title,
            bio=profile.bio,
            expertise=profile.expertise,
            hourly_rate=profile.hourly_rate,
            rating=round(ratings.get(profile.id, (0.0, 0))[0], 2),
            user=UserSummary.model_validate(user),
        )
        for profile, user in rows
    ]


@router.get(
    "/list",
    response_model=list[MentorListItem],
    summary="List Mentors",
    description="Mentor profiles of every mentor who finished onboarding.",
)
async def list_mentors(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[MentorListItem]:
    return await _list_items(session)


@router.get(
    "/top",
    response_model=list[MentorListItem],
    summary="Top Mentors",
    description="The six best rated onboarded mentors.",
)
async def top_mentors(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[MentorListItem]:
    return await _list_items(session, limit=TOP_MENTORS_LIMIT)


@router.get(
    "/{user_id}",
    response_model=MentorDetailRead,
    summary="Get Mentor",
    description="Public mentor page with weekly availability and reviews.",
    responses={404: {"description": "User is not a mentor or has no mentor profile"}},
)
async def get_mentor(user_id: str, session: AsyncSession = Depends(get_session)) -> MentorDetailRead:
    """
    Get a mentor by user ID.

    Reviews are newest first. Authors without a name show as "Anonymous" and
    authors without an image get a generated avatar.

    - **user_id**: ID of the mentor's user account.
    """
    user = await session.get(User, user_id)
    profile = await MentorProfileRepository(session).get_by_user_id(user_id) if user else None
    if user is None or user.role != UserRole.MENTOR or profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mentor not found")

    availability = await AvailabilityRepository(session).list_for_profile(profile.id)
    review_rows = await MentorReviewRepository(session).list_for_profile(profile.id)

    reviews = []
    for review, author in review_rows:
        author_name = author.name or "Anonymous"
        reviews.append(
            ReviewRead(
                id=review.id,
                rating=review.rating,
                comment=review.comment,
                created_at=review.created_at,
                author=ReviewAuthor(name=author_name, image=author.image or avatar_url(author_name)),
            )
        )
    average = sum(review.rating for review in reviews) / len(reviews) if reviews else 0.0

    return MentorDetailRead(
        id=profile.id,
        user_id=user.id,
        name=user.name,
        image=user.image,
        title=profile.title,
        company=profile.company,
        bio=profile.bio,
        experience=profile.experience,
        education=profile.education,
        expertise=profile.expertise,
        languages=profile.languages,
        skills=profile.skills,
        hourly_rate=profile.hourly_rate,
        rating=round(average, 2),
        total_reviews=len(reviews),
        github=profile.github,
        linkedin=profile.linkedin,
        website=profile.website,
        availability=[AvailabilityDay(day=row.day, slots=row.slots) for row in availability],
        reviews=reviews,
    )
