"""Record Validation — shape, type, and size checks for Submit bodies and stored records.

Invariants:
    - validate_submission checks in order: object → updatedAt → snapshot type → snapshot size
    - Exactly two failure kinds: MalformedPayloadError (400) or PayloadTooLargeError (413)
    - Unknown top-level fields are ignored; updatedAt/snapshot are strictly type-checked
    - updatedAt is returned verbatim (the string the client sent), never re-formatted
    - parse_stored_record returns None for anything that is not a v1 record

Design Decisions:
    - Size measured on compact UTF-8 JSON: matches what the store persists
    - Naive timestamps read as UTC: clients that drop the offset still compare sanely
    - Strict JSON on decode (no NaN/Infinity, bounded nesting): the snapshot must be
      stored and echoed unchanged
"""

import json
from datetime import datetime, timezone
from typing import Any

from progress_sync.core.domain_types import (
    SCHEMA_VERSION, SyncCandidate, SyncRecord,
)
from progress_sync.core.errors import MalformedPayloadError, PayloadTooLargeError


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 string to an aware UTC datetime. None if unparseable."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # fromisoformat accepts offsets that push year 1 / 9999 out of range
        return None


def serialized_size(value: Any) -> int:
    """Byte length of the compact JSON encoding of value."""
    return len(
        json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8"),
    )


def _reject_constant(name: str) -> object:
    raise MalformedPayloadError(f"Request body must be valid JSON ({name} is not allowed).")


def decode_json_body(body: bytes) -> object:
    """Decode a raw request body. Raises MalformedPayloadError on invalid JSON.

    NaN/Infinity are rejected: they are not JSON and would not survive a round trip.
    """
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError):
        raise MalformedPayloadError("Request body must be valid JSON.")


def validate_submission(payload: object, max_snapshot_bytes: int) -> SyncCandidate:
    """Validate an untyped Submit body. Raises MalformedPayloadError or PayloadTooLargeError."""
    if not isinstance(payload, dict):
        raise MalformedPayloadError("Request body must be a JSON object.")

    updated_at = payload.get("updatedAt")
    if parse_timestamp(updated_at) is None:
        raise MalformedPayloadError(
            "updatedAt must be an ISO-8601 timestamp string.", field="updatedAt",
        )

    snapshot = payload.get("snapshot")
    if not isinstance(snapshot, dict):
        raise MalformedPayloadError(
            "snapshot must be a JSON object.", field="snapshot",
        )

    size = serialized_size(snapshot)
    if size > max_snapshot_bytes:
        raise PayloadTooLargeError(size, max_snapshot_bytes)

    return SyncCandidate(updated_at=updated_at, snapshot=snapshot)


def parse_stored_record(value: object) -> SyncRecord | None:
    """Recognize a persisted v1 record. Anything else reads as absent."""
    if not isinstance(value, dict):
        return None
    if value.get("schemaVersion") != SCHEMA_VERSION:
        return None
    updated_at = value.get("updatedAt")
    server_updated_at = value.get("serverUpdatedAt")
    snapshot = value.get("snapshot")
    if parse_timestamp(updated_at) is None:
        return None
    if not isinstance(server_updated_at, str) or not isinstance(snapshot, dict):
        return None
    return SyncRecord(
        updated_at=updated_at,
        server_updated_at=server_updated_at,
        snapshot=snapshot,
    )
