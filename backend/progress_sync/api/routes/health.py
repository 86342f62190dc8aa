"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the sync backend is unconfigured or unreachable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Readiness asks the same SyncService the sync routes use (one source of availability)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from progress_sync.api.routes.progress_sync import get_sync_service
from progress_sync.services.sync_service import SyncService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "progress-sync-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(service: SyncService = Depends(get_sync_service)):
    """Readiness probe: includes sync store connectivity."""
    if not service.available:
        return _not_ready("sync_backend_unconfigured")
    if not await service.health_check():
        return _not_ready("sync_backend_unavailable")
    return {"status": "ready", "checks": {"sync_store": "healthy"}}


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
