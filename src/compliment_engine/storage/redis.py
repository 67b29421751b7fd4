"""Redis-backed key-value store and connection pool management.

This module provides:
- A single async connection pool for compliment data
- Pool lifecycle helpers called from the application lifespan
- RedisKeyValueStore, the KeyValueStore implementation over that pool
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from compliment_engine.observability.logging import get_logger


if TYPE_CHECKING:
    from redis.asyncio import Redis

    from compliment_engine.core.config import Settings

logger = get_logger(__name__)

# Global connection pool and client
_pool: ConnectionPool[Any] | None = None
_client: Redis[Any] | None = None


async def init_redis_pool(settings: Settings) -> Redis[Any]:
    """Create the connection pool and verify the server answers.

    Should be called during application startup (lifespan).

    Raises:
        redis.ConnectionError: If Redis cannot be reached.
    """
    global _pool, _client  # noqa: PLW0603

    logger.info(
        "Initializing Redis connection",
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.cache_db,
    )

    _pool = ConnectionPool.from_url(
        settings.redis_cache_url,
        max_connections=settings.redis.max_connections,
        decode_responses=True,
    )
    _client = redis.Redis(connection_pool=_pool)

    try:
        await _client.ping()
    except redis.ConnectionError:
        logger.exception("Failed to connect to Redis")
        await close_redis_pool()
        raise

    logger.info("Redis connection established")
    return _client


async def close_redis_pool() -> None:
    """Close the client and disconnect the pool.

    Should be called during application shutdown (lifespan).
    """
    global _pool, _client  # noqa: PLW0603

    if _client:
        await _client.aclose()
        _client = None

    if _pool:
        await _pool.disconnect()
        _pool = None

    logger.info("Redis connection closed")


def get_redis_client() -> Redis[Any]:
    """Get the shared Redis client.

    Raises:
        RuntimeError: If init_redis_pool() has not run.
    """
    if _client is None:
        msg = "Redis client not initialized. Call init_redis_pool() first."
        raise RuntimeError(msg)
    return _client


async def check_redis_health() -> str:
    """Ping Redis and report "healthy", "unhealthy" or "not_initialized"."""
    if _client is None:
        return "not_initialized"
    try:
        await _client.ping()
    except redis.RedisError:
        return "unhealthy"
    return "healthy"


class RedisKeyValueStore:
    """KeyValueStore over a Redis client.

    Keys are namespaced with ``prefix`` so several deployments can share a
    database.
    """

    def __init__(self, client: Redis[Any], prefix: str = "compliments") -> None:
        self._client = client
        self.prefix = prefix

    def _make_key(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    async def get(self, key: str) -> str | None:
        value = await self._client.get(self._make_key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self._client.set(self._make_key(key), value)

    async def remove(self, key: str) -> None:
        await self._client.delete(self._make_key(key))
