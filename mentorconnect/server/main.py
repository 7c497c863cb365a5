"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers exception handlers and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mentorconnect.core.database import init_db
from mentorconnect.core.logging_config import get_logger, setup_logging
from mentorconnect.core.monitoring import initialize_logfire

from .api.v1 import (
    auth,
    availability,
    calls,
    connections,
    health,
    mentor_profiles,
    mentors,
    messages,
    notifications,
    profile,
    realtime,
    sessions,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.deps import close_clients

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Startup initializes the database; shutdown closes the shared HTTP clients.
    """
    try:
        logger.info("Starting up MentorConnect Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down MentorConnect Server...")
    await close_clients()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    MentorConnect Server API

    Backend services for the MentorConnect mentorship marketplace: accounts and
    profiles, mentor discovery, availability and bookings, connections,
    messaging, notifications and real-time call signaling.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users", tags=["users"])
app.include_router(profile.router, prefix=f"{constant.API_V1_STR}/profile", tags=["profile"])
app.include_router(mentor_profiles.router, prefix=constant.API_V1_STR, tags=["mentor-profile"])
app.include_router(mentors.router, prefix=f"{constant.API_V1_STR}/mentors", tags=["mentors"])
app.include_router(availability.router, prefix=f"{constant.API_V1_STR}/availability", tags=["availability"])
app.include_router(sessions.router, prefix=constant.API_V1_STR, tags=["sessions"])
app.include_router(connections.router, prefix=f"{constant.API_V1_STR}/connections", tags=["connections"])
app.include_router(messages.router, prefix=f"{constant.API_V1_STR}/messages", tags=["messages"])
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/notifications", tags=["notifications"])
app.include_router(calls.router, prefix=f"{constant.API_V1_STR}/call", tags=["calls"])
app.include_router(realtime.router, prefix=f"{constant.API_V1_STR}/realtime", tags=["realtime"])
