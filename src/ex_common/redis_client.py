"""Redis connection for the peer broadcast channel.

The explorer only publishes here; nothing it serves is cached in Redis.
"""

import redis.asyncio as aioredis

from config.settings import settings

_broadcast_pool: aioredis.Redis | None = None


async def get_broadcast_redis() -> aioredis.Redis:
    """Get or create the connection pool used to publish broadcasts."""
    global _broadcast_pool  # noqa: PLW0603
    if _broadcast_pool is None:
        _broadcast_pool = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            health_check_interval=settings.REDIS_HEALTH_CHECK_INTERVAL,
        )
    return _broadcast_pool


async def close_broadcast_redis() -> None:
    global _broadcast_pool  # noqa: PLW0603
    if _broadcast_pool is not None:
        await _broadcast_pool.aclose()
        _broadcast_pool = None
