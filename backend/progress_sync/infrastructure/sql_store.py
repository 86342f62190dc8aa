"""SQL Sync Store — SyncStore backed by the progress_sync_entries table.

Invariants:
    - get_json never returns an entry whose expires_at <= now
    - set_json fully replaces the row and resets expires_at = now + ttl
    - Driver errors surface as SyncStoreError (via DatabaseSessionManager, or
      mapped directly in create_schema, which runs on the raw engine)

Design Decisions:
    - session.merge for upsert: portable across PostgreSQL and SQLite
    - Expired rows are left for purge_expired (run at boot) rather than deleted on read
"""

import logging
import time
from typing import Callable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from progress_sync.core.domain_types import StorageKey
from progress_sync.core.errors import SyncStoreError
from progress_sync.db.base import Base
from progress_sync.infrastructure.database import DatabaseSessionManager
from progress_sync.models.sync_entry import SyncEntry

logger = logging.getLogger(__name__)


class SqlSyncStore:
    """TTL key/value store on top of SQLAlchemy async sessions."""

    def __init__(
        self,
        manager: DatabaseSessionManager,
        clock: Callable[[], float] = time.time,
    ):
        self._manager = manager
        self._clock = clock

    async def get_json(self, key: StorageKey) -> object | None:
        now = int(self._clock())
        async with self._manager.session() as db:
            result = await db.execute(
                select(SyncEntry.value).where(
                    SyncEntry.storage_key == key,
                    SyncEntry.expires_at > now,
                ),
            )
            return result.scalar_one_or_none()

    async def set_json(
        self, key: StorageKey, value: dict, ttl_seconds: int,
    ) -> None:
        expires_at = int(self._clock()) + ttl_seconds
        async with self._manager.session() as db:
            await db.merge(
                SyncEntry(storage_key=key, value=value, expires_at=expires_at),
            )
            await db.commit()

    async def purge_expired(self) -> int:
        """Delete rows past their expiry. Returns the number removed."""
        now = int(self._clock())
        async with self._manager.session() as db:
            result = await db.execute(
                delete(SyncEntry).where(SyncEntry.expires_at <= now),
            )
            await db.commit()
        logger.info(
            f"Purged {result.rowcount} expired sync entries",
            extra={"operation": "purge_expired"},
        )
        return result.rowcount

    async def create_schema(self) -> None:
        """Create missing tables (sqlite/dev convenience; production runs alembic)."""
        try:
            async with self._manager.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"Schema creation failed: {e}")
            raise SyncStoreError("Schema creation failed", "create_schema")

    async def health_check(self) -> bool:
        return await self._manager.health_check()

    async def close(self) -> None:
        await self._manager.dispose()
