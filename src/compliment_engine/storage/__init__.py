"""Key-value storage layer.

This module provides:
- The KeyValueStore protocol the engine depends on
- Redis and in-memory implementations
- ResilientStore, which turns backend failures into StoreResult values
"""

from compliment_engine.storage.memory import InMemoryKeyValueStore
from compliment_engine.storage.protocol import KeyValueStore
from compliment_engine.storage.redis import (
    RedisKeyValueStore,
    check_redis_health,
    close_redis_pool,
    get_redis_client,
    init_redis_pool,
)
from compliment_engine.storage.resilient import ResilientStore, StoreResult


__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "RedisKeyValueStore",
    "ResilientStore",
    "StoreResult",
    "check_redis_health",
    "close_redis_pool",
    "get_redis_client",
    "init_redis_pool",
]
