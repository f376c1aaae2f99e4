"""
Mechanic detector.

Computes the MechanicSet flags from a card's lowercased text. Every flag
has its own predicate and is evaluated on every call; conjunctive flags
(aristocrats, voltron) re-run the predicates they depend on instead of
reading other flags.
"""

import logging
import re
from collections.abc import Callable

from explainmycard.models.card import CardFacts
from explainmycard.models.mechanics import MechanicSet
from explainmycard.services.card_text import CardText, contains_any, gains_life

logger = logging.getLogger(__name__)

_DIES_PATTERN = re.compile(r"\bdies\b|\bdie\b|put into a graveyard from the battlefield")
_MILL_PATTERN = re.compile(r"\bmills?\b|\bsurveil\b")
_SUBTYPE_SEPARATORS = ("—", " - ")
_MANA_SYMBOL = re.compile(r"\{(?!t\}|q\})[^}]+\}")
_SINK_EFFECT = re.compile(r"\b(draws?|create|creates|deals?)\b")
_MULTI_MANA = re.compile(r"add (\{[^}]+\}){2,}")
_ETB_PATTERN = re.compile(r"\bwhen(ever)?\b[^.]*\benters\b")

_DRAIN_PHRASES = (
    "loses life",
    "lose life",
    "loses 1 life",
    "lose 1 life",
    "loses 2 life",
    "loses x life",
    "gain life",
    "gain 1 life",
    "gains 1 life",
    "drain",
)


def _tokens(text: CardText) -> bool:
    return "create" in text.oracle and "token" in text.oracle


def _treasure(text: CardText) -> bool:
    return "treasure" in text.oracle


def _etb(text: CardText) -> bool:
    return "enters the battlefield" in text.oracle or _ETB_PATTERN.search(text.oracle) is not None


def _blink(text: CardText) -> bool:
    return contains_any(
        text.oracle,
        (
            "return it to the battlefield",
            "return that card to the battlefield",
            "return them to the battlefield",
            "return those cards to the battlefield",
            "flicker",
            "blink",
        ),
    )


def _dies(text: CardText) -> bool:
    return _DIES_PATTERN.search(text.oracle) is not None


def _sacrifice(text: CardText) -> bool:
    return "sacrifice" in text.oracle


def _aristocrats(text: CardText) -> bool:
    return (_dies(text) or _sacrifice(text)) and (
        contains_any(text.oracle, _DRAIN_PHRASES) or gains_life(text.oracle)
    )


def _counters(text: CardText) -> bool:
    return contains_any(text.oracle, ("counter on", "counters on"))


def _plus_counters(text: CardText) -> bool:
    return "+1/+1 counter" in text.oracle


def _proliferate(text: CardText) -> bool:
    return "proliferate" in text.oracle


def _graveyard(text: CardText) -> bool:
    return "graveyard" in text.oracle


def _reanimate(text: CardText) -> bool:
    return contains_any(
        text.oracle, ("graveyard to the battlefield", "graveyard onto the battlefield")
    )


def _self_mill(text: CardText) -> bool:
    return _MILL_PATTERN.search(text.oracle) is not None or (
        "top" in text.oracle and "into your graveyard" in text.oracle
    )


def _spellslinger(text: CardText) -> bool:
    return text.has_keyword("prowess", "magecraft") or contains_any(
        text.oracle,
        ("instant or sorcery", "noncreature spell", "whenever you cast", "prowess", "magecraft"),
    )


def _copy_spells(text: CardText) -> bool:
    return contains_any(text.oracle, ("copy target", "copy that spell", "copy it", "copies of"))


def _cost_reduce(text: CardText) -> bool:
    return contains_any(
        text.oracle, ("less to cast", "costs {1} less", "cost {1} less", "costs less")
    )


def _equipment(text: CardText) -> bool:
    return "equipment" in text.type_line or "equip" in text.oracle


def _aura(text: CardText) -> bool:
    return "aura" in text.type_line


def _artifacts(text: CardText) -> bool:
    return "artifact" in text.type_line or "artifact" in text.oracle


def _enchantments(text: CardText) -> bool:
    return "enchantment" in text.type_line or "enchantment" in text.oracle


def _lifegain(text: CardText) -> bool:
    return text.has_keyword("lifelink") or contains_any(
        text.oracle, ("gain life", "gains life", "lifelink")
    ) or gains_life(text.oracle)


def _voltron(text: CardText) -> bool:
    return (_equipment(text) or _aura(text)) and (
        "creature" in text.type_line or "creature" in text.oracle
    )


def _go_wide(text: CardText) -> bool:
    return text.has_keyword("convoke") or contains_any(
        text.oracle,
        (
            "creatures you control get",
            "for each creature you control",
            "creature tokens",
            "convoke",
            "populate",
        ),
    )


def _big_mana(text: CardText) -> bool:
    return _MULTI_MANA.search(text.oracle) is not None or contains_any(
        text.oracle,
        (
            "add two mana",
            "add three mana",
            "add x mana",
            "twice that much mana",
            "double the amount",
        ),
    )


def _mana_sink(text: CardText) -> bool:
    if "{x}" in text.mana_cost:
        return True
    for line in text.oracle.splitlines():
        cost, sep, effect = line.partition(":")
        if sep and _MANA_SYMBOL.search(cost) and _SINK_EFFECT.search(effect):
            return True
    return False


def _tribal(text: CardText) -> bool:
    if "creature" not in text.type_line:
        return False
    for separator in _SUBTYPE_SEPARATORS:
        if separator in text.type_line:
            _, _, subtypes = text.type_line.partition(separator)
            if subtypes.strip():
                return True
    return False


def _planeswalker(text: CardText) -> bool:
    return "planeswalker" in text.type_line


MECHANIC_RULES: dict[str, Callable[[CardText], bool]] = {
    "tokens": _tokens,
    "treasure": _treasure,
    "etb": _etb,
    "blink": _blink,
    "dies": _dies,
    "sacrifice": _sacrifice,
    "aristocrats": _aristocrats,
    "counters": _counters,
    "plus_counters": _plus_counters,
    "proliferate": _proliferate,
    "graveyard": _graveyard,
    "reanimate": _reanimate,
    "self_mill": _self_mill,
    "spellslinger": _spellslinger,
    "copy_spells": _copy_spells,
    "cost_reduce": _cost_reduce,
    "equipment": _equipment,
    "aura": _aura,
    "artifacts": _artifacts,
    "enchantments": _enchantments,
    "lifegain": _lifegain,
    "voltron": _voltron,
    "go_wide": _go_wide,
    "big_mana": _big_mana,
    "mana_sink": _mana_sink,
    "tribal": _tribal,
    "planeswalker": _planeswalker,
}


def detect_mechanics(card: CardFacts) -> MechanicSet:
    """
    Detect mechanic flags for a card.

    Args:
        card: The card to inspect

    Returns:
        MechanicSet with every flag evaluated independently
    """
    text = CardText.of(card)
    mechanics = MechanicSet(**{name: rule(text) for name, rule in MECHANIC_RULES.items()})
    logger.debug("Mechanics for %s: %s", card.name, mechanics.active())
    return mechanics
