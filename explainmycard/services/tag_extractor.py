"""
Tag extractor.

Derives a set of semantic tags from a card's type line and rules text.
Each rule is independent: a tag is added when any of its phrases occurs in
the rule's field. Rule order does not affect the result.

Multi-faced cards arrive with faces already joined, so a tag can fire on
the text of either face.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from explainmycard.models import tags as t
from explainmycard.models.card import CardFacts
from explainmycard.models.tags import TagSet
from explainmycard.services.card_text import CardText, contains_any, gains_life, has_word

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TagRule:
    """Add `tag` when any phrase occurs in the named text field."""

    tag: str
    field: str  # "oracle" or "type"
    phrases: tuple[str, ...]

    def matches(self, text: CardText) -> bool:
        return contains_any(text.field(self.field), self.phrases)


# Phrase-containment rules: (tag, field, phrases)
TAG_RULES: list[TagRule] = [
    TagRule(
        t.MANA,
        "oracle",
        (
            "add {",
            "add one mana",
            "add two mana",
            "add three mana",
            "mana of any color",
            "mana of any one color",
            "basic land card",
            "basic land cards",
            "additional land",
        ),
    ),
    TagRule(t.TREASURE, "oracle", ("treasure",)),
    TagRule(
        t.CARD_DRAW,
        "oracle",
        (
            "draw a card",
            "draws a card",
            "draw two cards",
            "draw three cards",
            "draw cards",
            "draw x cards",
            "draw that many",
            "cards equal to",
        ),
    ),
    TagRule(
        t.REMOVAL,
        "oracle",
        (
            "destroy target",
            "exile target creature",
            "exile target nonland",
            "exile target permanent",
            "exile target artifact",
            "exile target enchantment",
            "exile target planeswalker",
            "damage to any target",
            "damage to target creature",
            "damage to target planeswalker",
            "return target nonland permanent",
            "return target creature",
            "target creature gets -",
            "fights target",
        ),
    ),
    TagRule(
        t.BOARD_WIPE,
        "oracle",
        (
            "destroy all",
            "exile all",
            "all creatures get -",
            "damage to each creature",
            "return all nonland permanents",
            "overload",
        ),
    ),
    TagRule(t.COUNTERMAGIC, "oracle", ("counter target",)),
    TagRule(t.GRAVEYARD, "oracle", ("graveyard",)),
    TagRule(t.TUTOR, "oracle", ("search your library", "search their library")),
    TagRule(
        t.COUNTERS,
        "oracle",
        ("counter on", "counters on", "+1/+1 counter", "loyalty counter", "proliferate"),
    ),
    TagRule(t.SACRIFICE, "oracle", ("sacrifice",)),
    TagRule(
        t.LIFEGAIN,
        "oracle",
        ("gain life", "gains life", "gain that much life", "lifelink"),
    ),
    TagRule(t.RECURRING_TRIGGER, "oracle", ("whenever", "at the beginning of")),
    TagRule(t.CREATURE, "type", ("creature",)),
    TagRule(t.PLANESWALKER, "type", ("planeswalker",)),
    TagRule(t.EQUIPMENT, "type", ("equipment",)),
    TagRule(t.AURA, "type", ("aura",)),
    TagRule(t.ARTIFACT, "type", ("artifact",)),
    TagRule(t.ENCHANTMENT, "type", ("enchantment",)),
    TagRule(t.LAND, "type", ("land",)),
    TagRule(t.INSTANT_SPEED, "type", ("instant",)),
]

_ETB_PATTERN = re.compile(r"\bwhen(ever)?\b[^.]*\benters\b")

_PROTECTION_KEYWORDS = ("hexproof", "indestructible", "ward", "protection", "shroud")
_PROTECTION_PHRASES = (
    "hexproof",
    "indestructible",
    "protection from",
    "phase out",
    "phases out",
    "shroud",
)


def _has_tokens(text: CardText) -> bool:
    # "create" alone is not enough: it must create a token
    return "create" in text.oracle and "token" in text.oracle


def _has_etb(text: CardText) -> bool:
    return "enters the battlefield" in text.oracle or bool(_ETB_PATTERN.search(text.oracle))


def _has_protection(text: CardText) -> bool:
    return (
        text.has_keyword(*_PROTECTION_KEYWORDS)
        or contains_any(text.oracle, _PROTECTION_PHRASES)
        or has_word(text.oracle, "ward")
    )


def _has_flash(text: CardText) -> bool:
    return text.has_keyword("flash") or has_word(text.oracle, "flash")


def _has_lifegain(text: CardText) -> bool:
    return gains_life(text.oracle)


# Predicate rules for tags that need more than phrase containment
TAG_PREDICATES: list[tuple[str, Callable[[CardText], bool]]] = [
    (t.TOKENS, _has_tokens),
    (t.ETB, _has_etb),
    (t.PROTECTION, _has_protection),
    (t.INSTANT_SPEED, _has_flash),
    (t.LIFEGAIN, _has_lifegain),
]


def extract_tags(card: CardFacts) -> TagSet:
    """
    Derive semantic tags from a card.

    Args:
        card: The card to tag

    Returns:
        Frozen set of tags, all drawn from TAG_VOCABULARY. Empty when the
        card has no text to match.
    """
    text = CardText.of(card)
    found: set[str] = set()

    for rule in TAG_RULES:
        if rule.matches(text):
            found.add(rule.tag)

    for tag, predicate in TAG_PREDICATES:
        if predicate(text):
            found.add(tag)

    logger.debug("Tags for %s: %s", card.name, sorted(found))
    return frozenset(found)
