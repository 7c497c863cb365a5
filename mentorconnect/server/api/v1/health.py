"""
Health Check Endpoints.

Basic system status endpoints (health, version) used for monitoring and
deployment verification.
"""

from fastapi import APIRouter

from mentorconnect.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """Get the API version and the supported schema version."""
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}
