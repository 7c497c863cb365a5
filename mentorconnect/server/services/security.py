"""
Password hashing and access tokens.

Passwords are hashed with bcrypt. Access tokens are signed JWTs whose subject
is the user id.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from mentorconnect.server.core.config import AuthConfig, settings

BCRYPT_ROUNDS = 12


def hash_password(password: str, *, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: Optional[str]) -> bool:
    """Check a plain password against a stored hash. Users without a hash never match."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user_id: str, *, config: Optional[AuthConfig] = None, now: Optional[datetime] = None) -> str:
    """Issue a signed access token for a user.

    Args:
        user_id: Stored as the ``sub`` claim.
        config: Auth settings; the application settings are used when omitted.
        now: Issue time, defaults to the current UTC time.

    Returns:
        Encoded JWT.
    """
    config = config or settings.auth
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=config.token_ttl_minutes),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, *, config: Optional[AuthConfig] = None) -> str:
    """Validate a token and return its subject.

    Raises:
        jwt.PyJWTError: When the token is malformed, badly signed, expired or has no subject.
    """
    config = config or settings.auth
    payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm], options={"require": ["sub", "exp"]})
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise jwt.InvalidTokenError("token subject is missing")
    return subject


def generate_reset_token() -> str:
    """64 hex characters of randomness."""
    return secrets.token_hex(32)
