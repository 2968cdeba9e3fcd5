"""Redis side-cache keyed by entity id.

One EntityCache per entity type ("userCache", "cardInfoCache").
Key format: "<cache name>::<id>", e.g. "userCache::42".
Value: the DTO as camelCase JSON, write-only fields included, so a hit
returns exactly what the store path would have produced.

The cache is best effort. A failed read counts as a miss; a failed
write or eviction is logged and skipped. Entries heal on the next
update/delete of the same id or when the TTL runs out.
"""

import logging
from datetime import timedelta
from typing import Generic, TypeVar

import redis.asyncio as aioredis
from pydantic import BaseModel, ValidationError
from redis.exceptions import RedisError

from src.us_common.redis_client import get_redis

logger = logging.getLogger("us.cache")

M = TypeVar("M", bound=BaseModel)


class EntityCache(Generic[M]):
    def __init__(
        self,
        name: str,
        model: type[M],
        ttl: timedelta,
        client: aioredis.Redis | None = None,
    ) -> None:
        self.name = name
        self._model = model
        self._ttl_seconds = int(ttl.total_seconds())
        self._client = client

    async def _redis(self) -> aioredis.Redis:
        if self._client is not None:
            return self._client
        return await get_redis()

    def key(self, entity_id: int) -> str:
        return f"{self.name}::{entity_id}"

    async def get(self, entity_id: int) -> M | None:
        key = self.key(entity_id)
        try:
            client = await self._redis()
            raw = await client.get(key)
        except RedisError as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return None

        if raw is None:
            logger.debug("Cache miss %s", key)
            return None
        try:
            value = self._model.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable cache entry %s", key)
            return None
        logger.debug("Cache hit %s", key)
        return value

    async def put(self, entity_id: int, value: M | None) -> None:
        """Store value under entity_id. Absent values are never cached."""
        if value is None:
            return
        key = self.key(entity_id)
        payload = value.model_dump_json(by_alias=True)
        try:
            client = await self._redis()
            await client.set(key, payload, ex=self._ttl_seconds)
        except RedisError as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)

    async def evict(self, entity_id: int) -> None:
        key = self.key(entity_id)
        try:
            client = await self._redis()
            await client.delete(key)
        except RedisError as exc:
            logger.warning("Cache eviction failed for %s: %s", key, exc)
