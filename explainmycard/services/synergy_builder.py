"""
Synergy synthesizer.

Builds the four-section synergy report from mechanic flags and tags.
Each true mechanic contributes theme labels, one to three pairing bullets
and sometimes a sequencing pattern. Flags that look contradictory (e.g.
treasure and tokens) both contribute; the only guard is that the generic
token pairing is skipped for Treasure makers.

Anti-synergies come from independent negative-signal rules.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from explainmycard.config import LATE_MIN_MANA_VALUE
from explainmycard.models import tags as t
from explainmycard.models.card import CardFacts
from explainmycard.models.document import ExplainDocument, SectionCollector
from explainmycard.models.mechanics import MechanicSet
from explainmycard.models.tags import TagSet
from explainmycard.services.card_text import CardText, contains_any

logger = logging.getLogger(__name__)

THEMES = "Best deck themes"
PAIRS = "Pairs well with"
PATTERNS = "Common patterns"
ANTI = "Anti-synergies"

SYNERGY_SECTIONS: tuple[str, ...] = (THEMES, PAIRS, PATTERNS, ANTI)

SYNERGY_FALLBACKS: dict[str, str] = {
    THEMES: "Good-stuff: it fits any deck in its colors that needs what it does.",
    PAIRS: "Cards that share its job, so your deck can do that job more reliably.",
    PATTERNS: "No special sequencing: cast it when it does the most for you.",
    ANTI: "No clear anti-synergies; just make sure it fits your deck's plan.",
}


@dataclass(frozen=True, slots=True)
class MechanicSynergy:
    """
    What one mechanic flag contributes to the synergy report.

    Attributes:
        flag: MechanicSet field name
        themes: Deck theme labels
        pairs: Pairing bullets (one to three)
        pattern: Optional sequencing bullet
        unless: Flag that, when also true, suppresses the pairing bullets
    """

    flag: str
    themes: tuple[str, ...]
    pairs: tuple[str, ...]
    pattern: str | None = None
    unless: str | None = None


MECHANIC_SYNERGIES: list[MechanicSynergy] = [
    MechanicSynergy(
        "tokens",
        ("Tokens / go-wide",),
        ("Anthem effects that boost all your creatures.", "Token doublers."),
        "Make tokens every turn, then cast an anthem or sacrifice them for value.",
        unless="treasure",
    ),
    MechanicSynergy(
        "treasure",
        ("Treasure / artifacts",),
        (
            "Cards that care about artifacts entering or being sacrificed.",
            "Expensive spells you can cast early with the extra mana.",
        ),
        "Stockpile Treasures, then spend them all on one explosive turn.",
    ),
    MechanicSynergy(
        "etb",
        ("Enters-the-battlefield value",),
        ("Flicker and blink effects.", "Cards that copy or return permanents."),
        "Cast it, use the ETB, blink it, and repeat the ETB.",
    ),
    MechanicSynergy(
        "blink",
        ("Blink / flicker",),
        ("Creatures with strong enters-the-battlefield abilities.",),
        "Blink your best ETB creature at instant speed to reuse it and dodge removal.",
    ),
    MechanicSynergy(
        "dies",
        ("Death triggers",),
        ("Sacrifice outlets that let you choose when creatures die.",),
    ),
    MechanicSynergy(
        "sacrifice",
        ("Sacrifice",),
        (
            "Token makers that give you cheap things to sacrifice.",
            "Creatures with 'when this dies' abilities.",
        ),
        "Make fodder, sacrifice it, and collect the death triggers.",
    ),
    MechanicSynergy(
        "aristocrats",
        ("Aristocrats",),
        (
            "Drain effects: 'whenever a creature dies, each opponent loses life'.",
            "Recursion that returns creatures from the graveyard so you can sacrifice them again.",
            "Free sacrifice outlets.",
        ),
        "Sacrifice creatures, drain each opponent, then bring the creatures back and repeat.",
    ),
    MechanicSynergy(
        "counters",
        ("Counters",),
        ("Proliferate effects that add more of each counter.",),
    ),
    MechanicSynergy(
        "plus_counters",
        ("+1/+1 counters",),
        (
            "Counter doublers.",
            "Creatures that get bonuses when they have counters.",
        ),
        "Spread counters early, then proliferate or double them.",
    ),
    MechanicSynergy(
        "proliferate",
        ("Proliferate / superfriends",),
        ("Planeswalkers and permanents that already have counters.",),
    ),
    MechanicSynergy(
        "graveyard",
        ("Graveyard value",),
        ("Self-mill and discard effects that fill your graveyard.",),
    ),
    MechanicSynergy(
        "reanimate",
        ("Reanimator",),
        (
            "Big creatures you can discard or mill instead of casting.",
            "Self-mill effects that put targets into your graveyard.",
        ),
        "Put a big creature in your graveyard early, then return it for a fraction of its cost.",
    ),
    MechanicSynergy(
        "self_mill",
        ("Self-mill",),
        ("Cards that work from the graveyard (flashback, recursion, reanimation).",),
        "Mill first, then use what lands in the graveyard.",
    ),
    MechanicSynergy(
        "spellslinger",
        ("Spellslinger",),
        ("Cheap instants and sorceries.", "Cantrips that replace themselves."),
        "Chain several cheap spells in one turn to trigger it many times.",
    ),
    MechanicSynergy(
        "copy_spells",
        ("Spell copying",),
        ("Powerful instants and sorceries worth copying.",),
    ),
    MechanicSynergy(
        "cost_reduce",
        ("Cost reduction",),
        ("Many cheap spells, so the discount adds up.",),
    ),
    MechanicSynergy(
        "equipment",
        ("Equipment",),
        ("Evasive creatures that carry Equipment well.", "Cards that reduce equip costs."),
    ),
    MechanicSynergy(
        "aura",
        ("Auras / enchantress",),
        ("Enchantress cards that draw when you cast enchantments.", "Creatures with hexproof."),
    ),
    MechanicSynergy(
        "artifacts",
        ("Artifacts",),
        ("Cards that count or care about artifacts you control.",),
    ),
    MechanicSynergy(
        "enchantments",
        ("Enchantments",),
        ("Constellation and enchantress effects.",),
    ),
    MechanicSynergy(
        "lifegain",
        ("Lifegain",),
        ("Cards that trigger whenever you gain life.",),
    ),
    MechanicSynergy(
        "voltron",
        ("Voltron",),
        ("A single evasive or protected creature to build up.",),
        "Pick one creature, suit it up, and protect it while it attacks.",
    ),
    MechanicSynergy(
        "go_wide",
        ("Go-wide",),
        ("Cheap token makers and anthems.",),
    ),
    MechanicSynergy(
        "big_mana",
        ("Ramp / big mana",),
        ("Expensive threats and X spells that use the extra mana.", "More mana rocks."),
        "Ramp early, then cast a big threat turns ahead of schedule.",
    ),
    MechanicSynergy(
        "mana_sink",
        ("Big mana",),
        ("Ramp and mana rocks to pour into it.",),
    ),
    MechanicSynergy(
        "tribal",
        ("Tribal (creature type)",),
        ("Lords and cards that care about the same creature type.",),
    ),
    MechanicSynergy(
        "planeswalker",
        ("Superfriends",),
        ("Proliferate effects.", "Cards that protect planeswalkers."),
    ),
]

# Tags that add themes and pairings the mechanics do not cover
TAG_SYNERGIES: list[tuple[str, tuple[str, ...], tuple[str, ...]]] = [
    (t.MANA, ("Ramp / big mana",), ("Expensive spells and big finishers.",)),
    (t.CARD_DRAW, ("Card advantage",), ("Cards that reward drawing extra cards.",)),
    (t.REMOVAL, ("Control / interaction",), ("Other cheap removal and card draw.",)),
    (t.COUNTERMAGIC, ("Control / interaction",), ("Instant-speed card draw to use open mana.",)),
    (t.TUTOR, ("Combo / toolbox",), ("Silver-bullet cards worth searching for.",)),
]


@dataclass(frozen=True, slots=True)
class AntiSynergyRule:
    """A negative signal; fires off text, tags and mechanics."""

    bullet: str
    predicate: Callable[[CardText, TagSet, MechanicSet, CardFacts], bool]


_EXILES_GRAVEYARD = re.compile(r"exile[^.]*graveyard|graveyard[^.]*exile")

ANTI_SYNERGY_RULES: list[AntiSynergyRule] = [
    AntiSynergyRule(
        "It exiles cards from graveyards, which works against your own graveyard strategies.",
        lambda text, *_: _EXILES_GRAVEYARD.search(text.oracle) is not None,
    ),
    AntiSynergyRule(
        "Auras are fragile: instant-speed removal on the creature costs you both cards.",
        lambda text, *_: "aura" in text.type_line,
    ),
    AntiSynergyRule(
        "It affects each player, so it can help opponents as much as you.",
        lambda text, *_: "each player" in text.oracle,
    ),
    AntiSynergyRule(
        "It clears the board, which clashes with decks that flood the board with creatures.",
        lambda _text, tags, *_: t.BOARD_WIPE in tags,
    ),
    AntiSynergyRule(
        "It needs a steady supply of things to sacrifice; decks with few creatures struggle.",
        lambda _text, _tags, mechanics, _card: mechanics.sacrifice and not mechanics.tokens,
    ),
    AntiSynergyRule(
        "Its tap ability waits a turn because of summoning sickness; haste helps.",
        lambda text, *_: "{t}" in text.oracle and "creature" in text.type_line,
    ),
    AntiSynergyRule(
        "Discarding clashes with decks that want to keep a full hand.",
        lambda text, *_: "discard" in text.oracle,
    ),
    AntiSynergyRule(
        "It costs you life, which is risky against aggressive decks.",
        lambda text, *_: contains_any(text.oracle, ("pay life", "you lose", "pay 2 life")),
    ),
    AntiSynergyRule(
        "It is slow for low-curve aggro decks that want to win early.",
        lambda _text, _tags, _mechanics, card: card.mv >= LATE_MIN_MANA_VALUE,
    ),
    AntiSynergyRule(
        "It is reactive, so it does little in decks that tap out every turn.",
        lambda _text, tags, *_: t.COUNTERMAGIC in tags,
    ),
]


def synthesize_synergies(
    card: CardFacts,
    tags: TagSet,
    mechanics: MechanicSet,
) -> ExplainDocument:
    """
    Build the synergy report for a card.

    Args:
        card: The card being explained
        tags: Tags from extract_tags
        mechanics: Flags from detect_mechanics

    Returns:
        ExplainDocument with four sections, each holding at least one bullet
    """
    text = CardText.of(card)
    collector = SectionCollector(SYNERGY_SECTIONS)

    for entry in MECHANIC_SYNERGIES:
        if not getattr(mechanics, entry.flag):
            continue
        collector.add(THEMES, *entry.themes)
        if entry.unless is None or not getattr(mechanics, entry.unless):
            collector.add(PAIRS, *entry.pairs)
        if entry.pattern:
            collector.add(PATTERNS, entry.pattern)

    for tag, themes, pairs in TAG_SYNERGIES:
        if tag in tags:
            collector.add(THEMES, *themes)
            collector.add(PAIRS, *pairs)

    for rule in ANTI_SYNERGY_RULES:
        if rule.predicate(text, tags, mechanics, card):
            collector.add(ANTI, rule.bullet)

    document = collector.build("synergies", SYNERGY_FALLBACKS)
    logger.debug("Synergies for %s: themes=%s", card.name, document.section(THEMES).bullets)
    return document
