"""Shared redis.asyncio pool for the account list cache.

Created on first use and closed in the app lifespan. Callers never rely on
Redis being reachable: RedisAccountCache absorbs every error it raises.
"""

import redis.asyncio as aioredis

from config.settings import settings

_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """FastAPI dependency: the process-wide client (connections are pooled)."""
    global _pool  # noqa: PLW0603
    if _pool is None:
        _pool = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    return _pool


async def close_redis() -> None:
    global _pool  # noqa: PLW0603
    if _pool is None:
        return
    await _pool.aclose()
    _pool = None
