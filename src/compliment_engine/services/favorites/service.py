"""Favorites service for saved compliments, shown history and preferences.

Provides methods for:
- Saving, listing (optionally by category) and removing compliments
- A capped, newest-first history of saved compliments
- User-defined categories
- Persisted generation preferences

All data lives in the key-value store. Reads that fail or find corrupt data
fall back to defaults. Writes are best effort and are skipped when the value
being updated could not be read.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeVar

import orjson
from pydantic import TypeAdapter, ValidationError

from compliment_engine.observability.logging import get_logger
from compliment_engine.services.compliments.cache import epoch_ms
from compliment_engine.services.favorites.constants import (
    CATEGORIES_KEY,
    DEFAULT_CATEGORIES,
    HISTORY_KEY,
    HISTORY_LIMIT,
    PREFERENCES_KEY,
    SAVED_COMPLIMENTS_KEY,
)
from compliment_engine.services.favorites.exceptions import (
    CategoryError,
    SavedComplimentNotFoundError,
)
from compliment_engine.services.favorites.models import Preferences, SavedCompliment
from compliment_engine.storage.resilient import StoreResult


if TYPE_CHECKING:
    from collections.abc import Callable

    from compliment_engine.core.config import Settings
    from compliment_engine.storage.resilient import ResilientStore

logger = get_logger(__name__)

_saved_adapter: TypeAdapter[list[SavedCompliment]] = TypeAdapter(
    list[SavedCompliment]
)
_strings_adapter: TypeAdapter[list[str]] = TypeAdapter(list[str])
_preferences_adapter: TypeAdapter[Preferences] = TypeAdapter(Preferences)

T = TypeVar("T")


class FavoritesService:
    """Manage saved compliments, shown history, categories and preferences."""

    def __init__(
        self,
        store: ResilientStore,
        *,
        history_limit: int = HISTORY_LIMIT,
        default_categories: list[str] | tuple[str, ...] = DEFAULT_CATEGORIES,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        self._store = store
        self.history_limit = history_limit
        self.default_categories = list(default_categories)
        self._clock = clock

    @classmethod
    def from_settings(cls, store: ResilientStore, settings: Settings) -> FavoritesService:
        """Build the service from the ``favorites`` config section."""
        return cls(
            store,
            history_limit=settings.favorites.history_limit,
            default_categories=settings.favorites.default_categories,
        )

    # =========================================================================
    # Saved Compliments
    # =========================================================================

    async def save_compliment(
        self,
        text: str,
        category: str | None = None,
    ) -> SavedCompliment:
        """Save a compliment and add it to the shown history.

        When the saved list or history cannot be read, that list is left
        untouched in the store.

        Args:
            text: Compliment text.
            category: Optional category label.

        Returns:
            The new SavedCompliment.
        """
        loaded = await self._load_saved()
        saved = loaded.value or []
        now_ms = self._clock()

        # Ids are epoch milliseconds; bump on collision within the same ms
        existing_ids = {item.id for item in saved}
        compliment_id = now_ms
        while str(compliment_id) in existing_ids:
            compliment_id += 1

        compliment = SavedCompliment(
            id=str(compliment_id),
            text=text,
            date=datetime.fromtimestamp(now_ms / 1000, tz=UTC).isoformat(),
            category=category or None,
        )

        history = await self._load_strings(HISTORY_KEY)
        if history.ok and text not in (history.value or []):
            updated = [text, *(history.value or [])][: self.history_limit]
            await self._write(HISTORY_KEY, updated)

        if loaded.ok:
            await self._write_saved([compliment, *saved])
            logger.info(
                "Compliment saved",
                compliment_id=compliment.id,
                category=compliment.category,
            )
        else:
            logger.warning("Compliment not persisted", compliment_id=compliment.id)
        return compliment

    async def remove_compliment(self, compliment_id: str) -> None:
        """Delete a saved compliment.

        Raises:
            SavedComplimentNotFoundError: If no compliment has this id.
        """
        saved = (await self._load_saved()).value or []
        remaining = [item for item in saved if item.id != compliment_id]
        if len(remaining) == len(saved):
            raise SavedComplimentNotFoundError(compliment_id)

        await self._write_saved(remaining)
        logger.info("Compliment removed", compliment_id=compliment_id)

    async def list_saved(self, category: str | None = None) -> list[SavedCompliment]:
        """Saved compliments, newest first, optionally for one category."""
        saved = (await self._load_saved()).value or []
        if category is not None:
            return [item for item in saved if item.category == category]
        return saved

    # =========================================================================
    # History
    # =========================================================================

    async def get_history(self) -> list[str]:
        """Shown compliments, newest first."""
        return (await self._load_strings(HISTORY_KEY)).value or []

    async def clear_history(self) -> None:
        await self._store.remove(HISTORY_KEY)
        logger.info("Compliment history cleared")

    # =========================================================================
    # Categories
    # =========================================================================

    async def get_categories(self) -> list[str]:
        return self._categories_or_default(await self._load_strings(CATEGORIES_KEY))

    async def add_category(self, name: str) -> list[str]:
        """Add a category; existing names are left alone.

        Raises:
            CategoryError: If ``name`` is blank.
        """
        name = name.strip()
        if not name:
            msg = "Category name must not be blank"
            raise CategoryError(msg)

        loaded = await self._load_strings(CATEGORIES_KEY)
        categories = self._categories_or_default(loaded)
        if name not in categories:
            categories.append(name)
            if loaded.ok:
                await self._write(CATEGORIES_KEY, categories)
        return categories

    async def remove_category(self, name: str) -> list[str]:
        loaded = await self._load_strings(CATEGORIES_KEY)
        categories = [c for c in self._categories_or_default(loaded) if c != name]
        if loaded.ok:
            await self._write(CATEGORIES_KEY, categories)
        return categories

    def _categories_or_default(self, loaded: StoreResult[list[str]]) -> list[str]:
        if loaded.value is None:
            return list(self.default_categories)
        return loaded.value

    # =========================================================================
    # Preferences
    # =========================================================================

    async def get_preferences(self) -> Preferences:
        return (await self._load_preferences()).value or Preferences()

    async def update_preferences(self, changes: dict[str, Any]) -> Preferences:
        """Merge ``changes`` into the stored preferences and persist them.

        Raises:
            pydantic.ValidationError: If a changed value is invalid.
        """
        loaded = await self._load_preferences()
        current = loaded.value or Preferences()
        merged = Preferences.model_validate(
            {**current.model_dump(by_alias=False), **changes}
        )
        if loaded.ok:
            await self._write(PREFERENCES_KEY, merged.model_dump(mode="json"))
        return merged

    # =========================================================================
    # Store Helpers
    # =========================================================================

    async def _read(self, key: str) -> StoreResult[Any]:
        """Load and decode a JSON value.

        A failed store read is returned as a failure. Absent and corrupt values
        succeed with None.
        """
        result = await self._store.get(key)
        if not result.ok:
            return StoreResult(ok=False, error=result.error)
        if not result.value:
            return StoreResult.success()
        try:
            return StoreResult.success(orjson.loads(result.value))
        except orjson.JSONDecodeError as e:
            logger.warning("Ignoring malformed stored value", key=key, error=str(e))
            return StoreResult.success()

    async def _load_saved(self) -> StoreResult[list[SavedCompliment]]:
        return await self._load(SAVED_COMPLIMENTS_KEY, _saved_adapter)

    async def _load_strings(self, key: str) -> StoreResult[list[str]]:
        return await self._load(key, _strings_adapter)

    async def _load_preferences(self) -> StoreResult[Preferences]:
        return await self._load(PREFERENCES_KEY, _preferences_adapter)

    async def _load(self, key: str, adapter: TypeAdapter[T]) -> StoreResult[T]:
        raw = await self._read(key)
        if not raw.ok or raw.value is None:
            return raw
        try:
            return StoreResult.success(adapter.validate_python(raw.value))
        except ValidationError as e:
            logger.warning("Ignoring malformed stored value", key=key, error=str(e))
            return StoreResult.success()

    async def _write(self, key: str, value: Any) -> bool:
        result = await self._store.set(key, orjson.dumps(value).decode())
        return result.ok

    async def _write_saved(self, saved: list[SavedCompliment]) -> bool:
        return await self._write(
            SAVED_COMPLIMENTS_KEY,
            _saved_adapter.dump_python(saved, mode="json", by_alias=True),
        )
