"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlmodel.ext.asyncio.session import AsyncSession

from mentorconnect.server.core.config import settings

from .utils import create_engine, create_sessionmaker

engine = create_engine(settings.database.url, echo=settings.database.echo)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db():
    """
    Initialize the database.

    This is a no-op: Alembic migrations own all DDL and run before the
    application starts.
    """
    pass
