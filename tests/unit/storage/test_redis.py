"""Unit tests for the Redis-backed store and pool helpers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import redis.asyncio as redis

import compliment_engine.storage.redis as redis_module
from compliment_engine.storage import (
    KeyValueStore,
    RedisKeyValueStore,
    check_redis_health,
    get_redis_client,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_client() -> MagicMock:
    """Create mock Redis client."""
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.ping = AsyncMock(return_value=True)
    return client


class TestRedisKeyValueStore:
    """Tests for RedisKeyValueStore."""

    async def test_get_uses_prefixed_key(self, mock_client: MagicMock) -> None:
        mock_client.get.return_value = "value"
        store = RedisKeyValueStore(mock_client)

        assert await store.get("complimentCache") == "value"
        mock_client.get.assert_awaited_once_with("compliments:complimentCache")

    async def test_get_decodes_bytes(self, mock_client: MagicMock) -> None:
        mock_client.get.return_value = b'{"a": 1}'
        store = RedisKeyValueStore(mock_client)

        assert await store.get("key") == '{"a": 1}'

    async def test_get_missing_returns_none(self, mock_client: MagicMock) -> None:
        store = RedisKeyValueStore(mock_client)

        assert await store.get("key") is None

    async def test_set_and_remove(self, mock_client: MagicMock) -> None:
        store = RedisKeyValueStore(mock_client, prefix="test")

        await store.set("key", "value")
        await store.remove("key")

        mock_client.set.assert_awaited_once_with("test:key", "value")
        mock_client.delete.assert_awaited_once_with("test:key")

    async def test_empty_prefix_uses_raw_key(self, mock_client: MagicMock) -> None:
        store = RedisKeyValueStore(mock_client, prefix="")

        await store.get("key")

        mock_client.get.assert_awaited_once_with("key")

    async def test_propagates_redis_errors(self, mock_client: MagicMock) -> None:
        mock_client.get.side_effect = redis.ConnectionError("down")
        store = RedisKeyValueStore(mock_client)

        with pytest.raises(redis.ConnectionError):
            await store.get("key")

    def test_satisfies_protocol(self, mock_client: MagicMock) -> None:
        assert isinstance(RedisKeyValueStore(mock_client), KeyValueStore)


class TestPoolHelpers:
    """Tests for module-level client helpers."""

    def test_get_client_before_init_raises(self) -> None:
        with (
            patch.object(redis_module, "_client", None),
            pytest.raises(RuntimeError, match="not initialized"),
        ):
            get_redis_client()

    def test_get_client_after_init(self, mock_client: MagicMock) -> None:
        with patch.object(redis_module, "_client", mock_client):
            assert get_redis_client() is mock_client

    async def test_health_not_initialized(self) -> None:
        with patch.object(redis_module, "_client", None):
            assert await check_redis_health() == "not_initialized"

    async def test_health_healthy(self, mock_client: MagicMock) -> None:
        with patch.object(redis_module, "_client", mock_client):
            assert await check_redis_health() == "healthy"

    async def test_health_unhealthy(self, mock_client: MagicMock) -> None:
        mock_client.ping.side_effect = redis.ConnectionError("down")
        with patch.object(redis_module, "_client", mock_client):
            assert await check_redis_health() == "unhealthy"
