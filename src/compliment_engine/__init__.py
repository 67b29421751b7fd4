"""Compliment generation engine with a persistent, expiring cache."""

__version__ = "0.1.0"
