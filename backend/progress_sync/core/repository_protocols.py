"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All store IO accessed through the SyncStore Protocol
    - Implementations raise SyncStoreError (never raw driver exceptions)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Values are plain JSON-compatible objects: interpretation belongs to the service
"""

from typing import Protocol

from progress_sync.core.domain_types import StorageKey


class SyncStore(Protocol):
    """Key-value store with per-write TTL: implemented by shell."""
    async def get_json(self, key: StorageKey) -> object | None: ...
    async def set_json(
        self, key: StorageKey, value: dict, ttl_seconds: int,
    ) -> None: ...
    async def health_check(self) -> bool: ...
    async def close(self) -> None: ...
