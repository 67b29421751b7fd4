"""Exceptions for the compliment service.

Storage problems never surface as exceptions here - they are absorbed by the
cache layer. What remains are defects in the static content itself.
"""

from __future__ import annotations


class ComplimentError(Exception):
    """Base exception for compliment service errors."""


class ContentBankError(ComplimentError):
    """Raised when the static template bank cannot produce a compliment.

    This signals a programming error (for example an empty template list),
    not a runtime or environment fault, and is the only error
    ``generate_compliment`` lets escape.
    """

    def __init__(self, message: str, category: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            category: Template or modifier category that was defective.
        """
        self.category = category
        super().__init__(message)
