"""Key-value store protocol definition.

The compliment engine only ever talks to storage through this interface.
Any async string store (Redis, a local dict) can back it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Async string store keyed by string.

    Every operation may fail independently; implementations are free to raise
    whatever their backend raises.

    Example implementation:
        class DictStore:
            async def get(self, key: str) -> str | None:
                return self._data.get(key)

            async def set(self, key: str, value: str) -> None:
                self._data[key] = value

            async def remove(self, key: str) -> None:
                self._data.pop(key, None)
    """

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    async def remove(self, key: str) -> None:
        """Delete ``key``. Removing an absent key is not an error."""
        ...
