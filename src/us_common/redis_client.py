"""Redis client factory — backs the userCache / cardInfoCache entity caches.

The cache is a side-cache only: PostgreSQL stays authoritative and a Redis
outage degrades reads to the store (see us_common/cache.py).
"""

import redis.asyncio as aioredis

from config.settings import settings

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Get or create the shared Redis client."""
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
    return _redis_pool


async def ping_redis() -> None:
    client = await get_redis()
    await client.ping()


async def close_redis() -> None:
    """Close the Redis connection pool."""
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None
