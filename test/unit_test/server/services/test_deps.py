"""Unit tests for server request dependencies."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from mentorconnect.core.database.entities import UserRole
from mentorconnect.integrations.recaptcha import RecaptchaVerifier
from mentorconnect.integrations.resend import Mailer
from mentorconnect.server.services import deps, realtime
from mentorconnect.server.services.deps import (
    HubDep,
    close_clients,
    get_current_mentor,
    get_current_user,
    get_mailer,
    get_recaptcha,
)
from mentorconnect.server.services.realtime import get_realtime_hub
from mentorconnect.server.services.security import create_access_token

pytestmark = pytest.mark.asyncio


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    async def test_resolves_user(self, session, mentee):
        user = await get_current_user(session, _bearer(create_access_token(mentee.id)))
        assert user.id == mentee.id

    async def test_missing_credentials(self, session):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(session, None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    async def test_expired_token(self, session, mentee):
        token = create_access_token(mentee.id, now=datetime.now(timezone.utc) - timedelta(days=30))
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(session, _bearer(token))
        assert exc_info.value.detail == "Invalid or expired token"

    async def test_unknown_user(self, session):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(session, _bearer(create_access_token("ghost")))
        assert exc_info.value.detail == "User not found"


class TestGetCurrentMentor:
    async def test_mentor_passes(self, mentor):
        assert await get_current_mentor(mentor) is mentor

    async def test_mentee_is_forbidden(self, mentee):
        assert mentee.role == UserRole.MENTEE
        with pytest.raises(HTTPException) as exc_info:
            await get_current_mentor(mentee)
        assert exc_info.value.status_code == 403


def test_hub_dep_uses_get_realtime_hub():
    depends_obj = HubDep.__metadata__[0]
    assert depends_obj.dependency == get_realtime_hub


async def test_shared_clients_are_cached_and_closed(monkeypatch):
    monkeypatch.setattr(deps, "_mailer", None)
    monkeypatch.setattr(deps, "_recaptcha", None)
    monkeypatch.setattr(realtime, "_hub", None)

    mailer = get_mailer()
    verifier = get_recaptcha()
    assert isinstance(mailer, Mailer)
    assert isinstance(verifier, RecaptchaVerifier)
    assert get_mailer() is mailer
    assert get_recaptcha() is verifier

    await close_clients()

    assert deps._mailer is None
    assert deps._recaptcha is None
