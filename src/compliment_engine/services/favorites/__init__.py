"""Favorites service package.

Persists saved compliments, the shown history, categories and generation
preferences in the key-value store.
"""

from compliment_engine.services.favorites.models import Preferences, SavedCompliment
from compliment_engine.services.favorites.service import FavoritesService


__all__ = ["FavoritesService", "Preferences", "SavedCompliment"]
