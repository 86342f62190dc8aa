"""Redis Sync Store — SyncStore backed by Redis string keys with native expiry.

Invariants:
    - set_json is a single SET ... EX ttl (write and TTL reset are atomic together)
    - get_json returns None for missing, expired, or undecodable values
    - RedisError surfaces as SyncStoreError: raw client errors never escape

Design Decisions:
    - redis.asyncio client with decode_responses=True: values are JSON text
    - Client injected (from_url factory for production): tests pass a mock
"""

import json
import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from progress_sync.core.domain_types import StorageKey
from progress_sync.core.errors import SyncStoreError
from progress_sync.infrastructure.observability import redact_storage_key

logger = logging.getLogger(__name__)


class RedisSyncStore:
    """TTL key/value store on Redis."""

    def __init__(self, client: Redis):
        self._redis = client

    @classmethod
    def from_url(cls, redis_url: str) -> "RedisSyncStore":
        return cls(Redis.from_url(redis_url, decode_responses=True))

    async def get_json(self, key: StorageKey) -> object | None:
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed: {e}", extra={"operation": "get"})
            raise SyncStoreError("Redis read failed", "get")
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(
                "Undecodable value in sync store, treating as absent",
                extra={"storage_key": redact_storage_key(key)},
            )
            return None

    async def set_json(
        self, key: StorageKey, value: dict, ttl_seconds: int,
    ) -> None:
        try:
            await self._redis.set(
                key, json.dumps(value, ensure_ascii=False), ex=ttl_seconds,
            )
        except RedisError as e:
            logger.error(f"Redis SET failed: {e}", extra={"operation": "set"})
            raise SyncStoreError("Redis write failed", "set")

    async def health_check(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        await self._redis.aclose()
