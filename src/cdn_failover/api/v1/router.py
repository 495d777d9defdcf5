"""Main API router that combines all v1 endpoints."""

from fastapi import APIRouter

from cdn_failover.api.v1 import cdn, health

# Create main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(cdn.router)
router.include_router(health.router)
