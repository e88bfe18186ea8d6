"""System-level API routes."""

from datetime import UTC, datetime
from typing import Final

from fastapi import APIRouter, Request

HEALTH_STATUS_HEALTHY: Final[str] = "healthy"

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Check system health.

    Returns:
        Health status and current server time
    """
    return {
        "status": HEALTH_STATUS_HEALTHY,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/")
async def read_root(request: Request) -> dict[str, str]:
    """Root endpoint with API info.

    Returns:
        Basic API information
    """
    settings = request.app.state.settings
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
