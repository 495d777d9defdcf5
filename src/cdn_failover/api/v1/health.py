"""Service health endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from cdn_failover.api.dependencies import get_settings_dependency
from cdn_failover.config.settings import ApplicationSettings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=dict[str, str])
async def health_check(
    settings: Annotated[ApplicationSettings, Depends(get_settings_dependency)],
) -> dict[str, str]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": settings.app_version,
    }


@router.get("/live", response_model=dict[str, str])
async def liveness_check() -> dict[str, str]:
    """Liveness check."""
    return {
        "status": "alive",
        "timestamp": datetime.now(UTC).isoformat(),
    }
