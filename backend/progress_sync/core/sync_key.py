"""Sync Key — normalization and storage-key derivation.

Invariants:
    - normalize_sync_key is idempotent: normalize(normalize(k)) == normalize(k)
    - Normalized keys match ^[A-Za-z0-9_.-]{1,128}$ (no separators that could
      escape the storage namespace)
    - build_storage_key is deterministic and injective: fixed prefix + unchanged key

Design Decisions:
    - No hashing/salting in build_storage_key: must be stable across restarts and
      replicas, and the allow-list already rules out injection
"""

import re

from progress_sync.core.domain_types import SyncKey, StorageKey
from progress_sync.core.errors import InvalidSyncKeyError


MAX_SYNC_KEY_LENGTH: int = 128
STORAGE_KEY_PREFIX: str = "progress-sync:v1:"

_ALLOWED_KEY = re.compile(r"[A-Za-z0-9_.-]+")


def normalize_sync_key(raw: str | None) -> SyncKey:
    """Trim and validate a client-supplied key. Raises InvalidSyncKeyError."""
    if not isinstance(raw, str):
        raise InvalidSyncKeyError("missing")
    key = raw.strip()
    if not key:
        raise InvalidSyncKeyError("empty")
    if len(key) > MAX_SYNC_KEY_LENGTH:
        raise InvalidSyncKeyError("too_long")
    if not _ALLOWED_KEY.fullmatch(key):
        raise InvalidSyncKeyError("disallowed_characters")
    return SyncKey(key)


def build_storage_key(key: SyncKey) -> StorageKey:
    return StorageKey(f"{STORAGE_KEY_PREFIX}{key}")
