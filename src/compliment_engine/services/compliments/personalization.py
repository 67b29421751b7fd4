"""Recipient-name personalization.

Substitutions are literal substring operations: "You" must be
the exact prefix and only the first "your" is rewritten.
"""

from __future__ import annotations


def personalize(text: str, recipient_name: str | None = None) -> str:
    """Address ``text`` to ``recipient_name``.

    The first matching rule wins:

    1. ``"You are wonderful"`` -> ``"Sam are wonderful"``
    2. ``"I love your style"`` -> ``"I love Sam's style"``
    3. ``"Something great"`` -> ``"Sam, something great"``

    Returns ``text`` unchanged when no name is given.
    """
    if not recipient_name:
        return text

    if text.startswith("You"):
        return f"{recipient_name} {text[3:].strip()}"

    if "your" in text:
        return text.replace("your", f"{recipient_name}'s", 1)

    return f"{recipient_name}, {text[:1].lower()}{text[1:]}"
