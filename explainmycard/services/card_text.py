"""
Lowercased views of a card's text fields.

Tag, mechanic and explanation rules all match against the same normalized
text, so normalization happens in exactly one place.
"""

import re
from dataclasses import dataclass

from explainmycard.models.card import CardFacts


@dataclass(frozen=True, slots=True)
class CardText:
    """Lowercased oracle text, type line, mana cost and keywords."""

    oracle: str
    type_line: str
    mana_cost: str
    keywords: tuple[str, ...]

    @classmethod
    def of(cls, card: CardFacts) -> "CardText":
        return cls(
            oracle=(card.oracle_text or "").lower(),
            type_line=(card.type_line or "").lower(),
            mana_cost=(card.mana_cost or "").lower(),
            keywords=tuple(k.lower() for k in card.keywords),
        )

    def field(self, name: str) -> str:
        if name == "oracle":
            return self.oracle
        if name == "type":
            return self.type_line
        if name == "cost":
            return self.mana_cost
        raise ValueError(f"Unknown text field: {name}")

    def has_keyword(self, *names: str) -> bool:
        return any(k in self.keywords for k in names)


_YOU_GAIN_LIFE = re.compile(r"\byou gain (?:\w+ |that much )?life\b")


def contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in text for phrase in phrases)


def has_word(text: str, word: str) -> bool:
    """True if word occurs on its own, not inside a longer word."""
    return re.search(rf"\b{re.escape(word)}\b", text) is not None


def gains_life(text: str) -> bool:
    """True for "you gain 3 life" and the like, not "you gain control of"."""
    return _YOU_GAIN_LIFE.search(text) is not None
