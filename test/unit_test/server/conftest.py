import json
import os
from typing import AsyncGenerator, Awaitable, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.pool import StaticPool

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Set test database URL before importing app
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from mentorconnect.core.database import create_all, create_sessionmaker, new_id  # noqa: E402
from mentorconnect.core.database.entities import (  # noqa: E402
    Connection,
    ConnectionStatus,
    MentorProfile,
    User,
    UserRole,
)
from mentorconnect.integrations.recaptcha import RecaptchaVerifier  # noqa: E402
from mentorconnect.integrations.resend import Mailer  # noqa: E402
from mentorconnect.server.services.realtime import RealtimeHub  # noqa: E402
from mentorconnect.server.services.security import create_access_token, hash_password  # noqa: E402

TEST_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh database per test so rows never leak between tests."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def hub() -> RealtimeHub:
    """In-process hub without Pusher."""
    return RealtimeHub()


@pytest.fixture
def sent_emails() -> list[dict]:
    return []


@pytest.fixture
def mailer(sent_emails: list[dict]) -> Mailer:
    """Mailer whose Resend calls are captured in ``sent_emails``."""

    def handler(request: httpx.Request) -> httpx.Response:
        sent_emails.append(json.loads(request.content))
        return httpx.Response(200, json={"id": f"email_{len(sent_emails)}"})

    return Mailer(
        "re_test_key",
        sender="MentorConnect <test@example.com>",
        public_base_url="http://localhost:3000",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def recaptcha() -> RecaptchaVerifier:
    """Verifier with no secret, so every registration passes."""
    return RecaptchaVerifier(None)


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, hub: RealtimeHub, mailer: Mailer, recaptcha: RecaptchaVerifier
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from mentorconnect.core.database import get_session
    from mentorconnect.server.main import app
    from mentorconnect.server.services.deps import get_mailer, get_recaptcha
    from mentorconnect.server.services.realtime import get_realtime_hub

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_realtime_hub] = lambda: hub
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_recaptcha] = lambda: recaptcha

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory storing a user whose password is ``TEST_PASSWORD``."""

    async def _make(
        *,
        name: str = "Test User",
        email: str | None = None,
        role: UserRole = UserRole.MENTEE,
        image: str | None = None,
        onboarding_completed: bool = True,
    ) -> User:
        user = User(
            name=name,
            email=email or f"user-{new_id()[:8]}@example.com",
            role=role,
            image=image,
            onboarding_completed=onboarding_completed,
            hashed_password=hash_password(TEST_PASSWORD, rounds=4),
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_mentor_profile(session: AsyncSession) -> Callable[..., Awaitable[MentorProfile]]:
    async def _make(user: User, **fields) -> MentorProfile:
        fields.setdefault("title", "Senior Engineer")
        fields.setdefault("hourly_rate", 50.0)
        fields.setdefault("languages", ["English"])
        fields.setdefault("skills", ["Python"])
        fields.setdefault("expertise", ["Backend"])
        profile = MentorProfile(user_id=user.id, **fields)
        session.add(profile)
        await session.commit()
        await session.refresh(profile)
        return profile

    return _make


@pytest.fixture
def make_connection(session: AsyncSession) -> Callable[..., Awaitable[Connection]]:
    async def _make(mentor: User, mentee: User, status: ConnectionStatus = ConnectionStatus.ACCEPTED) -> Connection:
        connection = Connection(mentor_id=mentor.id, mentee_id=mentee.id, status=status)
        session.add(connection)
        await session.commit()
        await session.refresh(connection)
        return connection

    return _make


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest_asyncio.fixture
async def mentor(make_user) -> User:
    return await make_user(name="Grace Mentor", email="grace@example.com", role=UserRole.MENTOR)


@pytest_asyncio.fixture
async def mentee(make_user) -> User:
    return await make_user(name="Alan Mentee", email="alan@example.com", role=UserRole.MENTEE)


@pytest_asyncio.fixture
async def mentor_profile(make_mentor_profile, mentor: User) -> MentorProfile:
    return await make_mentor_profile(mentor)
