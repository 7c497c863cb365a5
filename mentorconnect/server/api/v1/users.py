"""
User Role Endpoints.

Reading and choosing the marketplace role of the signed-in user.
"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.users import User
from mentorconnect.core.database.repositories.users import UserRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.users import RoleRead, RoleUpdate, RoleUpdateResponse, RoleUpdateUser
from mentorconnect.server.services.deps import get_current_user

from .auth import parse_role

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "/me/role",
    response_model=RoleRead,
    summary="Get Role",
    description="Return the role of the current user in lowercase.",
)
async def get_role(current_user: User = Depends(get_current_user)) -> RoleRead:
    return RoleRead(role=current_user.role.value.lower())


@router.post(
    "/me/role",
    response_model=RoleUpdateResponse,
    summary="Set Role",
    description="Choose the marketplace role and mark onboarding as completed.",
    responses={400: {"description": "Role is not MENTOR or MENTEE"}},
)
async def set_role(
    body: RoleUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> RoleUpdateResponse:
    """
    Set the role of the current user.

    - **role**: MENTOR or MENTEE (any case).
    """
    current_user.role = parse_role(body.role)
    current_user.onboarding_completed = True
    user = await UserRepository(session).update(current_user)
    logger.info(f"User {user.id} selected role {user.role.value}")
    return RoleUpdateResponse(message="Role updated successfully", user=RoleUpdateUser.model_validate(user))
