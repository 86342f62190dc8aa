"""Sync Store Factory — backend selection from settings."""

from progress_sync.config import Settings
from progress_sync.infrastructure.redis_store import RedisSyncStore
from progress_sync.infrastructure.sql_store import SqlSyncStore
from progress_sync.infrastructure.sync_store import init_sync_store


async def test_database_backend_builds_sql_store():
    store = init_sync_store(Settings(
        sync_backend="database", database_url="sqlite+aiosqlite:///:memory:",
    ))
    assert isinstance(store, SqlSyncStore)
    await store.close()


def test_redis_backend_builds_redis_store():
    store = init_sync_store(Settings(
        sync_backend="redis", redis_url="redis://localhost:6379/0",
    ))
    assert isinstance(store, RedisSyncStore)


def test_redis_without_url_is_unconfigured():
    assert init_sync_store(Settings(sync_backend="redis", redis_url=None)) is None


def test_none_backend_is_unconfigured():
    assert init_sync_store(Settings(sync_backend="none")) is None
