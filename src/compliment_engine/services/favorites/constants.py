"""Constants for the favorites service.

Contains:
- Store keys for each persisted collection
- Defaults used when nothing has been stored yet
"""

from __future__ import annotations

from typing import Final


# =============================================================================
# Store Keys
# =============================================================================

SAVED_COMPLIMENTS_KEY: Final[str] = "savedCompliments"
HISTORY_KEY: Final[str] = "complimentHistory"
CATEGORIES_KEY: Final[str] = "categories"
PREFERENCES_KEY: Final[str] = "preferences"


# =============================================================================
# Defaults
# =============================================================================

HISTORY_LIMIT: Final[int] = 50
DEFAULT_CATEGORIES: Final[tuple[str, ...]] = (
    "Funny",
    "Inspirational",
    "Clever",
    "Sweet",
)
