"""Compliment service package.

Generates whimsical compliments from a persistent, expiring cache with a
recent-history anti-repeat filter and a static fallback template bank.
"""

from compliment_engine.services.compliments.cache import (
    ComplimentCache,
    make_cache_key,
)
from compliment_engine.services.compliments.content import ContentBank
from compliment_engine.services.compliments.history import RecentHistory
from compliment_engine.services.compliments.personalization import personalize
from compliment_engine.services.compliments.service import ComplimentGenerator


__all__ = [
    "ComplimentCache",
    "ComplimentGenerator",
    "ContentBank",
    "RecentHistory",
    "make_cache_key",
    "personalize",
]
