"""Sync Service — orchestrates key normalization, validation, conflict resolution, and store IO.

Invariants:
    - Validation (key, payload) happens BEFORE any store access: fail fast, no partial state
    - fetch = one read; submit = one read + at most one write, awaited in order
    - Conflict is a returned outcome (SubmitConflict), never raised
    - serverUpdatedAt is always generated here at acceptance time
    - SyncStoreError → SyncUnavailableError (503); anything else → SyncInternalError (500)

Design Decisions:
    - store=None is the boot-time "backend not configured" flag (no global lookup)
    - Read-then-write is NOT atomic: two concurrent submits can both pass the resolver
      and the last landed write wins (ADR: single-secret, low-contention key space)
    - No retries: retry policy belongs to the client transport
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from progress_sync.core.domain_types import (
    MAX_SNAPSHOT_BYTES, PROGRESS_SYNC_TTL_SECONDS,
    StorageKey, SubmitAccepted, SubmitConflict, SubmitOutcome, SyncRecord,
)
from progress_sync.core.errors import (
    ErrorContext, ProgressSyncError, SyncInternalError,
    SyncRecordNotFoundError, SyncStoreError, SyncUnavailableError,
)
from progress_sync.core.repository_protocols import SyncStore
from progress_sync.core.resolve_conflict import should_accept_incoming
from progress_sync.core.sync_key import build_storage_key, normalize_sync_key
from progress_sync.core.validate_record import (
    decode_json_body, parse_stored_record, validate_submission,
)
from progress_sync.infrastructure.observability import redact_storage_key

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_server_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class SyncService:
    """Fetch and Submit over a SyncStore."""

    def __init__(
        self,
        store: SyncStore | None,
        ttl_seconds: int = PROGRESS_SYNC_TTL_SECONDS,
        max_snapshot_bytes: int = MAX_SNAPSHOT_BYTES,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._max_snapshot_bytes = max_snapshot_bytes
        self._clock = clock

    @property
    def available(self) -> bool:
        return self._store is not None

    async def health_check(self) -> bool:
        """Store connectivity for the readiness probe. False when unconfigured."""
        if self._store is None:
            return False
        return await self._store.health_check()

    async def fetch(self, raw_key: str | None) -> SyncRecord:
        """Return the stored record for raw_key or raise SyncRecordNotFoundError."""
        store = self._require_store()
        storage_key = build_storage_key(normalize_sync_key(raw_key))

        stored = await self._call_store(
            "fetch", storage_key, store.get_json(storage_key),
        )
        record = parse_stored_record(stored)
        if record is None:
            raise SyncRecordNotFoundError(ErrorContext(operation="fetch"))
        return record

    async def submit(
        self, raw_key: str | None, payload: object,
    ) -> SubmitOutcome:
        """Accept payload if it is not older than the stored record."""
        store = self._require_store()
        storage_key = build_storage_key(normalize_sync_key(raw_key))
        return await self._submit(store, storage_key, payload)

    async def submit_body(
        self, raw_key: str | None, body: bytes,
    ) -> SubmitOutcome:
        """submit() for an undecoded request body. Key is checked before the body."""
        store = self._require_store()
        storage_key = build_storage_key(normalize_sync_key(raw_key))
        return await self._submit(store, storage_key, decode_json_body(body))

    async def _submit(
        self, store: SyncStore, storage_key: StorageKey, payload: object,
    ) -> SubmitOutcome:
        candidate = validate_submission(payload, self._max_snapshot_bytes)

        stored = await self._call_store(
            "submit", storage_key, store.get_json(storage_key),
        )
        existing = parse_stored_record(stored)

        if existing and not should_accept_incoming(
            existing.updated_at, candidate.updated_at,
        ):
            logger.info(
                "Sync conflict: incoming updatedAt older than stored",
                extra={
                    "operation": "submit", "outcome": "conflict",
                    "storage_key": redact_storage_key(storage_key),
                },
            )
            return SubmitConflict(latest=existing)

        record = SyncRecord(
            updated_at=candidate.updated_at,
            server_updated_at=format_server_timestamp(self._clock()),
            snapshot=candidate.snapshot,
        )
        await self._call_store(
            "submit", storage_key,
            store.set_json(storage_key, record.to_storage(), self._ttl_seconds),
        )
        logger.info(
            "Sync accepted",
            extra={
                "operation": "submit", "outcome": "accepted",
                "storage_key": redact_storage_key(storage_key),
            },
        )
        return SubmitAccepted(record=record)

    def _require_store(self) -> SyncStore:
        if self._store is None:
            raise SyncUnavailableError("Progress sync backend is not configured.")
        return self._store

    async def _call_store(
        self, operation: str, storage_key: StorageKey, call: Any,
    ) -> Any:
        """Await a store coroutine, mapping failures to service-level errors."""
        context = ErrorContext(operation=operation)
        try:
            return await call
        except SyncStoreError as e:
            logger.error(
                f"Sync store unavailable during {operation}: {e.message}",
                extra={
                    "error_code": e.code, "operation": operation,
                    "storage_key": redact_storage_key(storage_key),
                },
            )
            raise SyncUnavailableError(
                "Progress sync backend is unreachable.", context,
            ) from e
        except ProgressSyncError:
            raise
        except Exception as e:
            logger.error(
                f"Unexpected store failure during {operation}: {e}",
                exc_info=True,
                extra={
                    "operation": operation,
                    "storage_key": redact_storage_key(storage_key),
                },
            )
            raise SyncInternalError(
                f"Failed to {operation} synced progress.", context,
            ) from e
