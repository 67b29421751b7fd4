"""Integration tests for the Redis store and the engine running on it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
import pytest
from fastapi.testclient import TestClient

from compliment_engine.factory import create_app
from compliment_engine.services.compliments import ComplimentCache, ComplimentGenerator
from compliment_engine.services.favorites import FavoritesService
from compliment_engine.storage import (
    RedisKeyValueStore,
    ResilientStore,
    check_redis_health,
    init_redis_pool,
)


if TYPE_CHECKING:
    from redis.asyncio import Redis

    from compliment_engine.core.config import Settings


pytestmark = pytest.mark.integration


class TestRedisKeyValueStore:
    """Round trips through a real Redis."""

    async def test_set_get_remove(self, redis_client: Redis[Any]) -> None:
        store = RedisKeyValueStore(redis_client)

        await store.set("complimentCache", '{"a": 1}')
        assert await store.get("complimentCache") == '{"a": 1}'
        assert await redis_client.get("compliments:complimentCache") == '{"a": 1}'

        await store.remove("complimentCache")
        assert await store.get("complimentCache") is None


class TestPool:
    """Tests for pool lifecycle against a real server."""

    async def test_init_and_health(self, redis_settings: Settings) -> None:
        client = await init_redis_pool(redis_settings)

        assert await client.ping()
        assert await check_redis_health() == "healthy"


class TestEngineOnRedis:
    """The compliment engine persisting to Redis."""

    async def test_cache_survives_new_generator(
        self, redis_client: Redis[Any]
    ) -> None:
        store = ResilientStore(RedisKeyValueStore(redis_client))
        first = ComplimentGenerator(ComplimentCache(store))

        await first.generate_compliment("animal", "low")

        second = ComplimentGenerator(ComplimentCache(store))
        stats = await second.get_compliment_stats()
        assert stats.cached_types == 1
        assert stats.total_cached_compliments == 1

        raw = await redis_client.get("compliments:complimentCache")
        assert list(orjson.loads(raw)) == ["animal-low-safe"]

    async def test_favorites_persist(self, redis_client: Redis[Any]) -> None:
        store = ResilientStore(RedisKeyValueStore(redis_client))
        service = FavoritesService(store)

        saved = await service.save_compliment("You are great.", "Sweet")

        reloaded = FavoritesService(store)
        assert [item.id for item in await reloaded.list_saved()] == [saved.id]


class TestAppOnRedis:
    """Full app wired to Redis through the lifespan."""

    def test_generate_and_ready(self, redis_settings: Settings) -> None:
        app = create_app(redis_settings)

        with TestClient(app) as client:
            prefix = redis_settings.api.v1_prefix
            response = client.post(f"{prefix}/compliments/generate", json={})
            ready = client.get(f"{prefix}/ready").json()

        assert response.status_code == 200
        assert ready["dependencies"] == {"redis": "healthy", "store": "healthy"}
