"""Infrastructure fixtures — SqlSyncStore on in-memory SQLite with a movable clock.

Invariants:
    - Every test gets a fresh in-memory database with the schema created
    - clock["now"] drives expiry; tests advance it instead of sleeping
"""

import pytest

from progress_sync.infrastructure.database import DatabaseSessionManager
from progress_sync.infrastructure.sql_store import SqlSyncStore

T0 = 1_771_588_800  # 2026-02-20T12:00:00Z


@pytest.fixture
def clock():
    return {"now": float(T0)}


@pytest.fixture
async def sql_store(clock):
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    store = SqlSyncStore(manager, clock=lambda: clock["now"])
    await store.create_schema()
    yield store
    await store.close()
