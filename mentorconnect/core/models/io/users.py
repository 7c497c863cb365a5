"""
User and authentication I/O models.

Request and response schemas for registration, login, password reset and role
selection.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from mentorconnect.core.database.entities.users import UserRole

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class UserRead(BaseModel):
    """Schema for reading a user from the API. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    role: UserRole
    onboarding_completed: bool
    created_at: datetime


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    name: str = Field(min_length=2, description="Display name")
    email: EmailStr = Field(description="Login email")
    password: str = Field(min_length=6, description="Plain password, hashed before storage")
    role: str = Field(default="MENTEE", description="MENTOR or MENTEE")
    recaptcha_token: Optional[str] = Field(default=None, description="reCAPTCHA response token")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class RegisterResponse(BaseModel):
    message: str
    user: UserRead


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    """Bearer token issued on login."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class MessageResponse(BaseModel):
    message: str


class RoleRead(BaseModel):
    role: str = Field(description="Lowercase role name")


class RoleUpdate(BaseModel):
    role: str = Field(description="MENTOR or MENTEE")


class RoleUpdateUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: UserRole
    onboarding_completed: bool


class RoleUpdateResponse(BaseModel):
    message: str
    user: RoleUpdateUser
