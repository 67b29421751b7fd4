"""Exceptions for the favorites service.

These are caught by the endpoint layer and converted to HTTP responses.
"""

from __future__ import annotations


class FavoritesError(Exception):
    """Base exception for favorites service errors."""


class SavedComplimentNotFoundError(FavoritesError):
    """Raised when no saved compliment has the requested id."""

    def __init__(self, compliment_id: str) -> None:
        self.compliment_id = compliment_id
        super().__init__(f"Saved compliment '{compliment_id}' not found")


class CategoryError(FavoritesError):
    """Raised when a category name is unusable (for example blank)."""
