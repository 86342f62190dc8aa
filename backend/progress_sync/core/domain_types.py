"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SyncKey is only produced by normalize_sync_key (trimmed, allow-listed)
    - StorageKey is only produced by build_storage_key
    - SyncRecord.updated_at is the client string, verbatim; never rewritten
    - SyncRecord.snapshot is opaque: never inspected beyond "is a JSON object"

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses for records/outcomes: the service hands them out, nobody mutates them
    - Storage field names are camelCase (wire format shared with JS clients)
"""

from dataclasses import dataclass
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

SyncKey = NewType("SyncKey", str)
StorageKey = NewType("StorageKey", str)


# ─── Constants ───────────────────────────────────────────────────

SCHEMA_VERSION: int = 1
PROGRESS_SYNC_TTL_SECONDS: int = 60 * 60 * 24 * 30       # 30 days
MAX_SNAPSHOT_BYTES: int = 256 * 1024


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class SyncCandidate:
    """Validated Submit body."""
    updated_at: str
    snapshot: dict[str, Any]


@dataclass(frozen=True)
class SyncRecord:
    """The persisted unit. Created only by a successful Submit."""
    updated_at: str
    server_updated_at: str
    snapshot: dict[str, Any]
    schema_version: int = SCHEMA_VERSION

    def to_storage(self) -> dict[str, Any]:
        """Layout written to the store."""
        return {
            "schemaVersion": self.schema_version,
            "updatedAt": self.updated_at,
            "serverUpdatedAt": self.server_updated_at,
            "snapshot": self.snapshot,
        }


# ─── Submit Outcomes ─────────────────────────────────────────────

@dataclass(frozen=True)
class SubmitAccepted:
    record: SyncRecord


@dataclass(frozen=True)
class SubmitConflict:
    """Incoming write was older than the stored one. Store left untouched."""
    latest: SyncRecord


SubmitOutcome = SubmitAccepted | SubmitConflict
