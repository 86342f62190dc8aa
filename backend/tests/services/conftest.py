"""Service test fixtures — SyncService over an in-memory fake store.

Invariants:
    - Every test gets a fresh FakeSyncStore
    - The service clock is pinned so serverUpdatedAt is predictable
"""

import pytest

from progress_sync.services.sync_service import SyncService

from tests.services.fake_store import FIXED_NOW, FakeSyncStore


@pytest.fixture
def fake_store():
    return FakeSyncStore()


@pytest.fixture
def sync_service(fake_store):
    return SyncService(
        fake_store,
        ttl_seconds=3600,
        max_snapshot_bytes=1024,
        clock=lambda: FIXED_NOW,
    )
