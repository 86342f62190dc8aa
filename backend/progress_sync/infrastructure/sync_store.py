"""Sync Store Factory — builds the configured SyncStore once at boot.

Invariants:
    - Returns None when no backend is configured (the capability flag the service reads)
    - Never connects eagerly: first IO happens on the first request or readiness probe

Design Decisions:
    - Backend chosen by settings.sync_backend, not by URL sniffing (ADR: explicit config)
"""

import logging

from progress_sync.config import Settings
from progress_sync.core.repository_protocols import SyncStore
from progress_sync.infrastructure.database import DatabaseSessionManager
from progress_sync.infrastructure.redis_store import RedisSyncStore
from progress_sync.infrastructure.sql_store import SqlSyncStore

logger = logging.getLogger(__name__)


def init_sync_store(settings: Settings) -> SyncStore | None:
    """Build the store named by settings, or None if sync is not configured."""
    if not settings.sync_backend_configured:
        logger.warning("Progress sync backend is not configured")
        return None
    if settings.sync_backend == "redis":
        logger.info("Progress sync using Redis backend")
        return RedisSyncStore.from_url(settings.redis_url)
    logger.info("Progress sync using database backend")
    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    return SqlSyncStore(manager)

