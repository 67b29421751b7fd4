"""Fallback content bank.

Draws templates from the static bank and optionally intensifies them with a
specificity modifier. All randomness comes from an injectable
``random.Random`` so tests can seed it.
"""

from __future__ import annotations

import random
import re
from typing import TYPE_CHECKING

from compliment_engine.services.compliments.constants import (
    FALLBACK_CATEGORY,
    FALLBACK_TEMPLATES,
    SPECIFICITY_MODIFIERS,
    SPECIFICITY_PROBABILITY,
)
from compliment_engine.services.compliments.exceptions import ContentBankError


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# First literal "is" or "are", case-sensitive, not word-bounded
_VERB_PATTERN = re.compile(r"is|are")
_SIMILE_MARKER = " like "
_UNMODIFIED_LEVEL = "low"


class ContentBank:
    """Categorized compliment templates plus specificity modifiers."""

    def __init__(
        self,
        templates: Mapping[str, Sequence[str]] = FALLBACK_TEMPLATES,
        modifiers: Mapping[str, Sequence[str]] = SPECIFICITY_MODIFIERS,
        rng: random.Random | None = None,
        specificity_probability: float = SPECIFICITY_PROBABILITY,
    ) -> None:
        self._templates = templates
        self._modifiers = modifiers
        self._rng = rng or random.Random()
        self.specificity_probability = specificity_probability

    def templates_for(self, compliment_type: str) -> Sequence[str]:
        """Return the template list for a type, or the random list if unknown."""
        if compliment_type in self._templates:
            return self._templates[compliment_type]
        try:
            return self._templates[FALLBACK_CATEGORY]
        except KeyError:
            msg = f"Template bank has no '{FALLBACK_CATEGORY}' category"
            raise ContentBankError(msg, category=FALLBACK_CATEGORY) from None

    def pick_template(self, compliment_type: str) -> str:
        """Draw one template uniformly for ``compliment_type``.

        Raises:
            ContentBankError: If the selected category is empty.
        """
        templates = self.templates_for(compliment_type)
        if not templates:
            msg = f"Template list for '{compliment_type}' is empty"
            raise ContentBankError(msg, category=str(compliment_type))
        return templates[self._rng.randrange(len(templates))]

    def apply_specificity(self, template: str, level: str) -> str:
        """Blend a modifier phrase into ``template`` for medium/high levels.

        The substitution fires on an independent draw, and only when the
        template is not already a simile. It rewrites the first literal
        ``is``/``are`` into ``is {modifier}``. Unknown levels are left
        unmodified.
        """
        if level == _UNMODIFIED_LEVEL:
            return template

        modifiers = self._modifiers.get(level)
        if modifiers is None:
            return template
        if not modifiers:
            msg = f"Modifier list for '{level}' is empty"
            raise ContentBankError(msg, category=str(level))

        modifier = modifiers[self._rng.randrange(len(modifiers))]
        if (
            self._rng.random() < self.specificity_probability
            and _SIMILE_MARKER not in template
        ):
            return _VERB_PATTERN.sub(lambda _: f"is {modifier}", template, count=1)
        return template

    def synthesize(self, compliment_type: str, level: str) -> str:
        """Pick a template and apply specificity in one step."""
        return self.apply_specificity(self.pick_template(compliment_type), level)
