"""Integration test fixtures.

Provides fixtures for integration testing with real Redis via testcontainers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from redis.asyncio import Redis
from testcontainers.redis import RedisContainer

from compliment_engine.core.config import Settings, StoreBackend
from compliment_engine.core.config.settings import (
    ComplimentSettings,
    ComplimentStoreSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
    RedisSettings,
)
from compliment_engine.storage import close_redis_pool


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator


pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def redis_container() -> Generator[RedisContainer]:
    """Start a Redis container for the test session."""
    with RedisContainer("redis:7-alpine") as redis:
        yield redis


@pytest.fixture(scope="session")
def redis_host_port(redis_container: RedisContainer) -> tuple[str, int]:
    """Host and mapped port of the container."""
    host = redis_container.get_container_host_ip()
    port = int(redis_container.get_exposed_port(6379))
    return host, port


@pytest.fixture
async def redis_client(
    redis_host_port: tuple[str, int],
) -> AsyncGenerator[Redis[Any]]:
    """Redis client connected to the test container on an empty database."""
    host, port = redis_host_port
    client: Redis[Any] = Redis(host=host, port=port, decode_responses=True)
    await client.flushdb()
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()


@pytest.fixture
def redis_settings(redis_host_port: tuple[str, int]) -> Settings:
    """Settings pointing at the container with the Redis backend."""
    host, port = redis_host_port
    return Settings(
        APP_ENV="test",
        REDIS_PASSWORD="",
        redis=RedisSettings(host=host, port=port, cache_db=0),
        compliments=ComplimentSettings(
            store=ComplimentStoreSettings(backend=StoreBackend.REDIS),
        ),
        logging=LoggingSettings(level="DEBUG", format="json"),
        observability=ObservabilitySettings(
            metrics=MetricsSettings(enabled=False),
        ),
    )


@pytest.fixture(autouse=True)
async def reset_redis_pool() -> AsyncGenerator[None]:
    """Close the module-level pool after each test."""
    yield
    await close_redis_pool()
