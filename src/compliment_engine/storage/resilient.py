"""Best-effort store access that reports failures as values.

Callers that must never fail because of storage (compliment generation,
favorites) go through ResilientStore. Every operation returns a StoreResult
instead of raising, and the wrapper remembers whether the backend is currently
misbehaving so health checks can report degraded mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from compliment_engine.observability.logging import get_logger
from compliment_engine.observability.metrics import store_errors


if TYPE_CHECKING:
    from compliment_engine.storage.protocol import KeyValueStore

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of a store operation.

    ``ok`` is False when the backend raised; ``error`` then holds the
    exception and ``value`` is None.
    """

    ok: bool
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T | None = None) -> StoreResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> StoreResult[T]:
        return cls(ok=False, error=error)


class ResilientStore:
    """Wrap a KeyValueStore so that no operation raises."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self.last_error: Exception | None = None
        self.failure_count = 0

    @property
    def store(self) -> KeyValueStore:
        """The wrapped backend."""
        return self._store

    @property
    def degraded(self) -> bool:
        """True when the most recent operation failed."""
        return self.last_error is not None

    async def get(self, key: str) -> StoreResult[str]:
        try:
            value = await self._store.get(key)
        except Exception as e:
            return self._fail("get", key, e)
        self.last_error = None
        return StoreResult.success(value)

    async def set(self, key: str, value: str) -> StoreResult[None]:
        try:
            await self._store.set(key, value)
        except Exception as e:
            return self._fail("set", key, e)
        self.last_error = None
        return StoreResult.success()

    async def remove(self, key: str) -> StoreResult[None]:
        try:
            await self._store.remove(key)
        except Exception as e:
            return self._fail("remove", key, e)
        self.last_error = None
        return StoreResult.success()

    def _fail(self, operation: str, key: str, error: Exception) -> StoreResult[T]:
        self.last_error = error
        self.failure_count += 1
        store_errors.labels(operation=operation).inc()
        logger.warning(
            "Store operation failed",
            operation=operation,
            key=key,
            error=str(error),
            error_type=type(error).__name__,
        )
        return StoreResult.failure(error)
