"""
Role and speed classifier.

Role resolution walks a fixed priority list and stops at the first match;
it does not look for the "most specific" role. Speed is resolved in two
passes: a default from mana value, then role-specific overrides.
"""

from collections.abc import Callable

from explainmycard.config import (
    EARLY_MAX_MANA_VALUE,
    ENGINE_LATE_MIN_MANA_VALUE,
    LATE_MIN_MANA_VALUE,
)
from explainmycard.models import tags as t
from explainmycard.models.badge import Role, RoleBadge, Speed
from explainmycard.models.card import CardFacts
from explainmycard.models.tags import TagSet
from explainmycard.services.tag_extractor import extract_tags

_PROTECTION_KEYWORDS = ("hexproof", "indestructible", "ward", "protection")

# Roles in priority order. Threat needs stated power/toughness, which only
# the card can tell us, so predicates take (tags, card).
ROLE_PRIORITY: list[tuple[Role, Callable[[TagSet, CardFacts | None], bool]]] = [
    (Role.RAMP, lambda tags, _: t.MANA in tags or t.TREASURE in tags),
    (Role.REMOVAL, lambda tags, _: t.REMOVAL in tags or t.BOARD_WIPE in tags),
    (Role.DRAW, lambda tags, _: t.CARD_DRAW in tags),
    (Role.TUTOR, lambda tags, _: t.TUTOR in tags),
    (
        Role.PROTECTION,
        lambda tags, card: t.PROTECTION in tags
        or (
            card is not None
            and any(k.lower() in _PROTECTION_KEYWORDS for k in card.keywords)
        ),
    ),
    (Role.DISRUPTION, lambda tags, _: t.COUNTERMAGIC in tags),
    (
        Role.THREAT,
        lambda tags, card: t.CREATURE in tags
        and (card is None or (bool(card.power) and bool(card.toughness))),
    ),
    (Role.ENGINE, lambda tags, _: t.RECURRING_TRIGGER in tags),
]


def default_speed(mv: float) -> Speed:
    """Speed from mana value alone."""
    if mv <= EARLY_MAX_MANA_VALUE:
        return Speed.EARLY
    if mv >= LATE_MIN_MANA_VALUE:
        return Speed.LATE
    return Speed.MID


def resolve_role(tags: TagSet, card: CardFacts | None = None) -> Role:
    for role, predicate in ROLE_PRIORITY:
        if predicate(tags, card):
            return role
    return Role.UTILITY


def classify(tags: TagSet, mv: float | None, card: CardFacts | None = None) -> RoleBadge:
    """
    Classify a card into exactly one role and one speed.

    Args:
        tags: Tags from extract_tags
        mv: Mana value; None is treated as 0
        card: Optional card, used for keyword and power/toughness checks

    Returns:
        RoleBadge with the first matching role and the resolved speed
    """
    mana_value = mv if mv is not None else 0.0
    role = resolve_role(tags, card)

    speed = default_speed(mana_value)
    if role in (Role.RAMP, Role.REMOVAL) and mana_value <= EARLY_MAX_MANA_VALUE:
        speed = Speed.EARLY
    if role == Role.ENGINE and mana_value >= ENGINE_LATE_MIN_MANA_VALUE:
        speed = Speed.LATE

    return RoleBadge(role=role, speed=speed)


def classify_card(card: CardFacts) -> RoleBadge:
    """Convenience wrapper: tag the card and classify it."""
    return classify(extract_tags(card), card.mana_value, card)
