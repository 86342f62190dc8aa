"""Progress Sync Schemas — Pydantic response models for the sync endpoints.

Invariants:
    - Wire names are camelCase (updatedAt, serverUpdatedAt) via alias_generator
    - snapshot passes through untouched (dict[str, Any]): never typed here
    - Request bodies are NOT modeled: they are validated by core/validate_record so
      malformed and too-large payloads map to distinct codes

Design Decisions:
    - from_record classmethods keep route handlers free of field mapping
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from progress_sync.core.domain_types import SyncRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SyncRecordResponse(_CamelModel):
    """Fetch response and the `latest` block of a conflict."""
    updated_at: str
    server_updated_at: str
    snapshot: dict[str, Any]

    @classmethod
    def from_record(cls, record: SyncRecord) -> "SyncRecordResponse":
        return cls(
            updated_at=record.updated_at,
            server_updated_at=record.server_updated_at,
            snapshot=record.snapshot,
        )


class SubmitAcceptedResponse(_CamelModel):
    """Submit success: echoes the stored clocks, not the snapshot."""
    accepted: Literal[True] = True
    updated_at: str
    server_updated_at: str

    @classmethod
    def from_record(cls, record: SyncRecord) -> "SubmitAcceptedResponse":
        return cls(
            updated_at=record.updated_at,
            server_updated_at=record.server_updated_at,
        )
