"""API test fixtures — FastAPI app over a real SqlSyncStore on in-memory SQLite.

Invariants:
    - Every test gets a fresh in-memory database
    - get_sync_service overridden for both the sync routes and the readiness probe
    - httpx ASGITransport does not run lifespan, so the fixture wires what lifespan would

Design Decisions:
    - Real store instead of the fake: route tests double as end-to-end sync scenarios
"""

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from progress_sync.api.routes.progress_sync import get_sync_service
from progress_sync.infrastructure.database import DatabaseSessionManager
from progress_sync.infrastructure.sql_store import SqlSyncStore
from progress_sync.main import app
from progress_sync.services.sync_service import SyncService

MAX_SNAPSHOT_BYTES = 4096


@pytest.fixture
async def sql_store():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    store = SqlSyncStore(manager)
    await store.create_schema()
    yield store
    await store.close()


@pytest.fixture
def sync_service(sql_store):
    return SyncService(
        sql_store, ttl_seconds=3600, max_snapshot_bytes=MAX_SNAPSHOT_BYTES,
    )


@asynccontextmanager
async def _client_for(service):
    app.dependency_overrides[get_sync_service] = lambda: service
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(sync_service):
    """Client wired to a configured, healthy sync backend."""
    async with _client_for(sync_service) as c:
        yield c


@pytest.fixture
async def unconfigured_client():
    """Client wired to a service with no backend (store=None)."""
    async with _client_for(SyncService(None)) as c:
        yield c
