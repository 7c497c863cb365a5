"""
Request Dependencies.

Typed FastAPI dependencies for the database session, the authenticated user
and the shared third-party clients. Tests replace them through
``app.dependency_overrides``.
"""

from typing import Annotated, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session
from mentorconnect.core.database.entities.users import User, UserRole
from mentorconnect.core.logging_config import get_logger
from mentorconnect.integrations.recaptcha import RecaptchaVerifier
from mentorconnect.integrations.resend import Mailer
from mentorconnect.server.core.config import settings

from .realtime import RealtimeHub, get_realtime_hub
from .security import decode_access_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    session: SessionDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> User:
    """Resolve the bearer token to a stored user, or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized()
    try:
        user_id = decode_access_token(credentials.credentials)
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected access token: {e}")
        raise _unauthorized("Invalid or expired token") from e

    user = await session.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_current_mentor(user: CurrentUser) -> User:
    if user.role != UserRole.MENTOR:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only mentors can perform this action")
    return user


CurrentMentor = Annotated[User, Depends(get_current_mentor)]

HubDep = Annotated[RealtimeHub, Depends(get_realtime_hub)]


_mailer: Optional[Mailer] = None
_recaptcha: Optional[RecaptchaVerifier] = None


def get_mailer() -> Mailer:
    global _mailer
    if _mailer is None:
        mail = settings.mail
        _mailer = Mailer(mail.resend_api_key, sender=mail.mail_from, public_base_url=mail.public_base_url)
    return _mailer


def get_recaptcha() -> RecaptchaVerifier:
    global _recaptcha
    if _recaptcha is None:
        _recaptcha = RecaptchaVerifier(settings.recaptcha.secret_key)
    return _recaptcha


MailerDep = Annotated[Mailer, Depends(get_mailer)]
RecaptchaDep = Annotated[RecaptchaVerifier, Depends(get_recaptcha)]


async def close_clients() -> None:
    """Close the shared HTTP clients created by the dependency getters."""
    global _mailer, _recaptcha
    await get_realtime_hub().aclose()
    if _mailer is not None:
        await _mailer.aclose()
        _mailer = None
    if _recaptcha is not None:
        await _recaptcha.aclose()
        _recaptcha = None
