"""Test configuration for database unit tests.

This module provides an in-memory SQLite session with every MentorConnect table
created, plus factories for the rows most tests need.
"""

from __future__ import annotations

from datetime import datetime
from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.core.database import create_all, create_sessionmaker
from mentorconnect.core.database.entities import Booking, BookingStatus, MentorProfile, User, UserRole


@pytest_asyncio.fixture
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture
def add_user(in_memory_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    async def _add(name: str, role: UserRole = UserRole.MENTEE, *, onboarding_completed: bool = True) -> User:
        user = User(
            name=name,
            email=f"{name.lower().replace(' ', '.')}@example.com",
            role=role,
            onboarding_completed=onboarding_completed,
        )
        in_memory_session.add(user)
        await in_memory_session.commit()
        await in_memory_session.refresh(user)
        return user

    return _add


@pytest.fixture
def add_mentor_profile(in_memory_session: AsyncSession) -> Callable[..., Awaitable[MentorProfile]]:
    async def _add(user: User, **fields) -> MentorProfile:
        profile = MentorProfile(user_id=user.id, **{"title": "Engineer", "hourly_rate": 40.0, **fields})
        in_memory_session.add(profile)
        await in_memory_session.commit()
        await in_memory_session.refresh(profile)
        return profile

    return _add


@pytest.fixture
def add_booking(in_memory_session: AsyncSession) -> Callable[..., Awaitable[Booking]]:
    async def _add(
        profile: MentorProfile,
        mentee: User,
        start: datetime,
        end: datetime,
        status: BookingStatus = BookingStatus.CONFIRMED,
    ) -> Booking:
        booking = Booking(
            mentor_profile_id=profile.id, mentee_id=mentee.id, start_time=start, end_time=end, status=status
        )
        in_memory_session.add(booking)
        await in_memory_session.commit()
        await in_memory_session.refresh(booking)
        return booking

    return _add
