"""Recently shown compliments, used to avoid immediate repeats."""

from __future__ import annotations

from collections import deque

from compliment_engine.services.compliments.constants import RECENT_HISTORY_CAPACITY


class RecentHistory:
    """Bounded newest-first buffer of shown compliments.

    Lives only as long as its owner; nothing is persisted.
    """

    def __init__(self, capacity: int = RECENT_HISTORY_CAPACITY) -> None:
        if capacity < 0:
            msg = f"capacity must be >= 0, got {capacity}"
            raise ValueError(msg)
        self.capacity = capacity
        self._items: deque[str] = deque(maxlen=capacity)

    def record(self, compliment: str) -> None:
        """Push to the front, dropping the oldest entry when full."""
        self._items.appendleft(compliment)

    def contains(self, compliment: str) -> bool:
        return compliment in self._items

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> list[str]:
        """Return the history, newest first."""
        return list(self._items)

    def __contains__(self, compliment: object) -> bool:
        return compliment in self._items

    def __len__(self) -> int:
        return len(self._items)
