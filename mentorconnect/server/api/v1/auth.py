"""
Authentication Endpoints.

Account registration, login with bearer tokens, and the password reset flow.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import get_session, utc_now
from mentorconnect.core.database.entities.password_resets import PasswordReset
from mentorconnect.core.database.entities.users import User, UserRole
from mentorconnect.core.database.repositories.password_resets import PasswordResetRepository
from mentorconnect.core.database.repositories.users import UserRepository
from mentorconnect.core.logging_config import get_logger
from mentorconnect.core.models.io.users import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenResponse,
    UserRead,
)
from mentorconnect.integrations.errors import RecaptchaError
from mentorconnect.server.core.config import settings
from mentorconnect.server.services.deps import MailerDep, RecaptchaDep, get_current_user
from mentorconnect.server.services.security import (
    create_access_token,
    generate_reset_token,
    hash_password,
    verify_password,
)

logger = get_logger(__name__)
router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If an account exists with this email, you will receive a password reset link."


def parse_role(value: str) -> UserRole:
    """Map a role string (any case) to a ``UserRole`` or fail with 400."""
    try:
        return UserRole(value.strip().upper())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role selected") from None


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a new mentor or mentee account.",
    response_description="The created user, without credentials.",
    responses={
        201: {"description": "User created"},
        400: {"description": "Invalid role, failed reCAPTCHA or email already registered"},
    },
)
async def register(
    body: RegisterRequest,
    recaptcha: RecaptchaDep,
    session: AsyncSession = Depends(get_session),
) -> RegisterResponse:
    """
    Register a new account.

    When a reCAPTCHA secret is configured the request must carry a valid token.

    - **name**: At least 2 characters.
    - **email**: Must not be registered already.
    - **password**: At least 6 characters.
    - **role**: MENTOR or MENTEE.
    """
    role = parse_role(body.role)

    try:
        verified = await recaptcha.verify(body.recaptcha_token)
    except RecaptchaError as e:
        logger.warning(f"reCAPTCHA verification unavailable: {e}")
        verified = False
    if not verified:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid reCAPTCHA. Please try again.")

    users = UserRepository(session)
    email = body.email.lower()
    if await users.get_by_email(email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    user = await users.create(
        User(
            name=body.name,
            email=email,
            hashed_password=hash_password(body.password),
            role=role,
            onboarding_completed=False,
        )
    )
    logger.info(f"Registered user {user.id} as {role.value}")
    return RegisterResponse(message="User created successfully", user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login",
    description="Exchange email and password for a bearer token.",
    response_description="Access token and the signed-in user.",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(body: LoginRequest, session: AsyncSession = Depends(get_session)) -> TokenResponse:
    user = await UserRepository(session).get_by_email(body.email.lower())
    if user is None or not verify_password(body.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(access_token=create_access_token(user.id), user=UserRead.model_validate(user))


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current User",
    description="Return the user the bearer token belongs to.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def me(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Request Password Reset",
    description="Email a password reset link. The answer is the same whether or not the account exists.",
    response_description="Generic confirmation message.",
)
async def forgot_password(
    body: ForgotPasswordRequest,
    mailer: MailerDep,
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """
    Start the password reset flow.

    Earlier reset tokens of the user are discarded; the new token expires after
    the configured lifetime (1 hour by default).

    - **email**: Account email.
    """
    user = await UserRepository(session).get_by_email(body.email.lower())
    if user is None:
        logger.info("Password reset requested for an unknown email")
        return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)

    resets = PasswordResetRepository(session)
    await resets.delete_for_user(user.id)
    reset = await resets.create(
        PasswordReset(
            user_id=user.id,
            token=generate_reset_token(),
            expires=utc_now() + timedelta(minutes=settings.auth.password_reset_ttl_minutes),
        )
    )
    await mailer.send_password_reset(user.email, reset.token)
    logger.info(f"Password reset issued for user {user.id}")
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    summary="Reset Password",
    description="Set a new password using a reset token.",
    responses={400: {"description": "Unknown or expired token"}},
)
async def reset_password(body: ResetPasswordRequest, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    """
    Complete the password reset flow.

    - **token**: Token from the reset email.
    - **password**: New password, at least 6 characters.
    """
    resets = PasswordResetRepository(session)
    reset = await resets.get_by_token(body.token)
    if reset is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired reset token")

    if reset.is_expired(utc_now()):
        await resets.delete(reset.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reset token has expired")

    user = await session.get(User, reset.user_id)
    if user is None:
        await resets.delete(reset.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired reset token")

    user.hashed_password = hash_password(body.password)
    await UserRepository(session).update(user)
    await resets.delete(reset.id)
    logger.info(f"Password reset completed for user {user.id}")
    return MessageResponse(message="Password has been reset successfully")
