"""Progress Sync Routes — GET (fetch) and POST (submit) keyed by the x-sync-key header.

Invariants:
    - Routes never contain business logic (delegate to SyncService)
    - A body that is not valid JSON is INVALID_PAYLOAD (400), not a 422
    - 409 CONFLICT carries `latest` so the client can reconcile locally
    - Domain errors propagate to the global handler (api/error_handlers.py)

Design Decisions:
    - Raw body handed to the service undecoded: the key is checked first, and the
      untyped payload reaches validate_submission intact so too-large and malformed stay distinguishable
    - SyncService lives on app.state (built in lifespan), injected via Depends
"""

import logging

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from progress_sync.core.domain_types import SubmitConflict
from progress_sync.core.errors import ErrorCategory, ErrorSeverity
from progress_sync.schemas.progress_sync import (
    SubmitAcceptedResponse, SyncRecordResponse,
)
from progress_sync.services.sync_service import SyncService, utc_now

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/progress-sync", tags=["progress-sync"])


def get_sync_service(request: Request) -> SyncService:
    """FastAPI dependency: the service built at startup."""
    return request.app.state.sync_service


@router.get("", response_model=SyncRecordResponse)
async def fetch_progress(
    x_sync_key: str | None = Header(None),
    service: SyncService = Depends(get_sync_service),
):
    """Return the synced snapshot for the key."""
    record = await service.fetch(x_sync_key)
    return SyncRecordResponse.from_record(record)


@router.post("", response_model=SubmitAcceptedResponse)
async def submit_progress(
    request: Request,
    x_sync_key: str | None = Header(None),
    service: SyncService = Depends(get_sync_service),
):
    """Store the snapshot unless a newer one is already synced."""
    outcome = await service.submit_body(x_sync_key, await request.body())

    if isinstance(outcome, SubmitConflict):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=_build_conflict_response(outcome),
        )
    return SubmitAcceptedResponse.from_record(outcome.record)


def _build_conflict_response(conflict: SubmitConflict) -> dict:
    """409 body: uniform error envelope plus the record that won."""
    return {
        "error": {
            "code": "CONFLICT",
            "message": "Sync conflict.",
            "category": ErrorCategory.CONFLICT.value,
            "severity": ErrorSeverity.WARNING.value,
            "timestamp": utc_now().isoformat(),
        },
        "latest": SyncRecordResponse.from_record(
            conflict.latest,
        ).model_dump(by_alias=True),
    }
