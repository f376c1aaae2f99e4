"""
Explanation synthesizer.

Builds a six-section beginner explanation from a card's tags and raw text.
Rules are plain data: tag contributions add bullets to one or more
sections, text rules fire off raw text features that tags do not capture.
After all rules run, every empty section gets exactly one fallback bullet.

The "Example play" section keeps only the first few candidate bullets; if
no candidate fired, a mana-value based fallback is used instead.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from explainmycard.config import EARLY_MAX_MANA_VALUE, EXAMPLE_PLAY_LIMIT, LATE_MIN_MANA_VALUE
from explainmycard.models import tags as t
from explainmycard.models.card import CardFacts
from explainmycard.models.document import ExplainDocument, SectionCollector
from explainmycard.models.tags import TagSet
from explainmycard.services.card_text import CardText, has_word

logger = logging.getLogger(__name__)

WHAT = "What it does"
WHY = "Why people play it"
PATTERNS = "Common play patterns"
GOTCHAS = "Rules notes/gotchas"
TIPS = "Quick tips"
EXAMPLE = "Example play"

EXPLANATION_SECTIONS: tuple[str, ...] = (WHAT, WHY, PATTERNS, GOTCHAS, TIPS, EXAMPLE)

EXPLANATION_FALLBACKS: dict[str, str] = {
    WHAT: "Read the card text one sentence at a time; each sentence is one instruction.",
    WHY: "It fills a specific job in the decks that play it; check what your deck needs.",
    PATTERNS: "Cast it when its effect matters most, not just as soon as you can.",
    GOTCHAS: "No special rules traps stand out; do exactly what the text says, in order.",
    TIPS: "Before using it, read the card again and say each step out loud.",
}

EXAMPLE_FALLBACK_EARLY = "It is cheap, so cast it early to develop your board."
EXAMPLE_FALLBACK_LATE = "It is expensive, so plan a turn ahead and keep mana open for it."
EXAMPLE_FALLBACK_MID = "Look for the best timing window, usually when it changes the board most."


@dataclass(frozen=True, slots=True)
class TagExplanation:
    """Bullets a single tag contributes to each section."""

    tag: str
    what: tuple[str, ...] = ()
    why: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()
    gotchas: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()
    example: tuple[str, ...] = ()

    def contributions(self) -> list[tuple[str, tuple[str, ...]]]:
        return [
            (WHAT, self.what),
            (WHY, self.why),
            (PATTERNS, self.patterns),
            (GOTCHAS, self.gotchas),
            (TIPS, self.tips),
        ]


TAG_EXPLANATIONS: list[TagExplanation] = [
    TagExplanation(
        t.MANA,
        what=("Produces extra mana, so you can cast bigger spells sooner.",),
        why=("Ramp gets you ahead: you play your big spells a turn or more early.",),
        patterns=("Play it early, then use the extra mana to cast a bigger spell next turn.",),
        tips=("Mana ramp is best early; late in the game, a threat or answer is usually better.",),
        example=(
            "Turn 1 or 2: cast {name}. Next turn you have extra mana for a spell "
            "that normally costs more.",
        ),
    ),
    TagExplanation(
        t.TREASURE,
        what=("Makes Treasure tokens you can sacrifice for one mana of any color.",),
        why=("Treasure is flexible mana that also fixes your colors.",),
        patterns=("Save Treasures for a big turn instead of spending them right away.",),
        gotchas=("Using a Treasure sacrifices it, which counts for 'sacrifice' triggers.",),
    ),
    TagExplanation(
        t.CARD_DRAW,
        what=("Draws cards, giving you more options.",),
        why=("Card draw keeps your hand full so you do not run out of things to do.",),
        patterns=("Use it when you have spare mana, often at the end of an opponent's turn.",),
        tips=("Drawing is strongest when you are low on cards; keep track of your hand size.",),
        example=("Cast {name} when your hand is getting empty to refill it.",),
    ),
    TagExplanation(
        t.REMOVAL,
        what=("Removes or neutralizes something an opponent controls.",),
        why=("Every deck needs ways to deal with dangerous threats.",),
        patterns=("Hold it for the biggest threat instead of using it on the first one you see.",),
        tips=("Ask yourself which opposing card will hurt you most before you fire it off.",),
        example=("An opponent casts a dangerous creature: answer it with {name}.",),
    ),
    TagExplanation(
        t.BOARD_WIPE,
        what=("Affects many permanents at once, often clearing the board.",),
        why=("A board wipe can turn around a game where you are behind.",),
        patterns=(
            "Cast it when opponents have committed more to the board than you have.",
        ),
        gotchas=("It usually hits your own permanents too unless the text says otherwise.",),
        example=("When opponents have more creatures than you, reset the board with {name}.",),
    ),
    TagExplanation(
        t.TOKENS,
        what=("Creates tokens, which act like permanents but are not real cards.",),
        why=("Tokens give you many bodies for attacking, blocking or sacrificing.",),
        patterns=("Build a wide board of tokens, then boost them all at once.",),
        gotchas=("A token that leaves the battlefield stops existing; it cannot be returned.",),
    ),
    TagExplanation(
        t.COUNTERMAGIC,
        what=("Counters a spell so it does nothing.",),
        why=("It can stop the single most important spell an opponent casts.",),
        patterns=("Leave mana open on opponents' turns so you can respond.",),
        gotchas=(
            "You must counter the spell while it is on the stack, before it resolves.",
        ),
        tips=("Do not counter the first thing you see; wait for something that really matters.",),
        example=("Keep mana open; when an opponent casts a game-winning spell, counter it.",),
    ),
    TagExplanation(
        t.GRAVEYARD,
        what=("Interacts with the graveyard.",),
        why=("The graveyard can be a second hand if your deck knows how to use it.",),
        tips=("Remember which cards are in your graveyard; they may still be useful.",),
    ),
    TagExplanation(
        t.TUTOR,
        what=("Searches your library for a specific card.",),
        why=("Finding the exact card you need makes your deck more consistent.",),
        patterns=("Use it to find your best answer or your win condition.",),
        gotchas=("Searching your library means you shuffle it afterward.",),
        example=("Cast {name} to find the one card that wins or saves the game.",),
    ),
    TagExplanation(
        t.COUNTERS,
        what=("Puts counters on permanents.",),
        why=("Counters add up over time and make your permanents stronger.",),
        gotchas=("A +1/+1 counter and a -1/-1 counter on the same creature cancel out.",),
    ),
    TagExplanation(
        t.ETB,
        what=("Does something when it enters the battlefield.",),
        why=("You get value right away, even if it is removed later.",),
        patterns=("Blink or flicker it to use its enters ability again.",),
        example=("Cast {name} and use its enters ability right away.",),
    ),
    TagExplanation(
        t.SACRIFICE,
        what=("Involves sacrificing permanents.",),
        why=("Sacrifice effects turn spare creatures and tokens into value.",),
        gotchas=("Sacrifice cannot be stopped by indestructible or regeneration.",),
        tips=("Sacrifice your least useful permanent, such as a token.",),
    ),
    TagExplanation(
        t.PROTECTION,
        what=("Protects your permanents from removal or damage.",),
        why=("It keeps your key pieces alive against removal and board wipes.",),
        patterns=("Hold it until an opponent tries to remove your most important card.",),
        tips=("Protection is reactive; keep the mana for it when you can.",),
    ),
    TagExplanation(
        t.CREATURE,
        what=("Is a creature that can attack and block.",),
        gotchas=("Creatures cannot attack or use tap abilities the turn they arrive.",),
    ),
    TagExplanation(
        t.PLANESWALKER,
        what=("Is a planeswalker that uses loyalty abilities.",),
        why=("A planeswalker can give you value every turn if you protect it.",),
        example=("Cast {name} when you have blockers to protect it.",),
    ),
    TagExplanation(
        t.EQUIPMENT,
        what=("Is an Equipment you attach to a creature you control.",),
        why=("Equipment keeps giving value because you can move it to a new creature.",),
    ),
    TagExplanation(
        t.AURA,
        what=("Is an Aura that you attach to something when you cast it.",),
    ),
    TagExplanation(
        t.ARTIFACT,
        why=("Artifacts fit into almost any deck because they are often colorless.",),
    ),
    TagExplanation(
        t.ENCHANTMENT,
        tips=("Enchantments are harder to remove than creatures in many decks.",),
    ),
    TagExplanation(
        t.LAND,
        what=("Is a land: you can play one land each turn without paying mana.",),
        tips=("Playing a land does not use the stack, so it cannot be countered.",),
    ),
    TagExplanation(
        t.INSTANT_SPEED,
        patterns=("Cast it on an opponent's turn to surprise them.",),
        tips=("Waiting until the end of an opponent's turn keeps your options open.",),
    ),
    TagExplanation(
        t.LIFEGAIN,
        what=("Gains you life.",),
        why=("Extra life buys time against aggressive decks.",),
    ),
    TagExplanation(
        t.RECURRING_TRIGGER,
        what=("Has an ability that triggers again and again.",),
        why=("Repeated triggers add up to a lot of value over a long game.",),
        tips=("Watch for the trigger each time; it is easy to forget.",),
        example=("Cast {name} early so it has more turns to trigger.",),
    ),
]


@dataclass(frozen=True, slots=True)
class TextRule:
    """A bullet that fires off the raw card text or the resolved mana value."""

    section: str
    bullet: str
    predicate: Callable[[CardText, float], bool]


TEXT_RULES: list[TextRule] = [
    TextRule(
        GOTCHAS,
        "It targets: if the target becomes illegal before it resolves, that part does nothing.",
        lambda text, _: has_word(text.oracle, "target"),
    ),
    TextRule(
        GOTCHAS,
        "Exiled cards do not go to the graveyard, so 'dies' abilities do not trigger.",
        lambda text, _: "exile" in text.oracle,
    ),
    TextRule(
        GOTCHAS,
        "The effect lasts only until end of turn, so use it that turn.",
        lambda text, _: "until end of turn" in text.oracle,
    ),
    TextRule(
        GOTCHAS,
        "Equipment stays on the battlefield when the creature leaves; equip only at sorcery speed.",
        lambda text, _: "equipment" in text.type_line,
    ),
    TextRule(
        TIPS,
        "Attach the Equipment to a creature that is hard to block or hard to remove.",
        lambda text, _: "equipment" in text.type_line,
    ),
    TextRule(
        GOTCHAS,
        "If the enchanted permanent leaves the battlefield, the Aura goes to the graveyard.",
        lambda text, _: "aura" in text.type_line,
    ),
    TextRule(
        TIPS,
        "Put Auras on creatures that are unlikely to be removed, or you lose both cards.",
        lambda text, _: "aura" in text.type_line,
    ),
    TextRule(
        GOTCHAS,
        "Use only one loyalty ability per planeswalker each turn, and only when you could cast a sorcery.",
        lambda text, _: "planeswalker" in text.type_line,
    ),
    TextRule(
        TIPS,
        "Opponents can attack planeswalkers, so keep creatures back to block.",
        lambda text, _: "planeswalker" in text.type_line,
    ),
    TextRule(
        TIPS,
        "It costs a lot of mana, so play ramp to cast it on time.",
        lambda _, mv: mv >= LATE_MIN_MANA_VALUE,
    ),
    TextRule(
        GOTCHAS,
        "You choose X when you cast it; anywhere except the stack, X counts as 0.",
        lambda text, _: "{x}" in text.mana_cost,
    ),
    TextRule(
        TIPS,
        "Wait until you have spare mana so X is big enough to matter.",
        lambda text, _: "{x}" in text.mana_cost,
    ),
    TextRule(
        GOTCHAS,
        "The legend rule: if you control two with the same name, you keep one.",
        lambda text, _: "legendary" in text.type_line,
    ),
    TextRule(
        TIPS,
        "'May' means the choice is yours; you can skip that part.",
        lambda text, _: has_word(text.oracle, "may"),
    ),
    TextRule(
        WHY,
        "It affects each opponent, which is extra strong in multiplayer games.",
        lambda text, _: "each opponent" in text.oracle,
    ),
]


def _example_fallback(mv: float) -> str:
    if mv <= EARLY_MAX_MANA_VALUE:
        return EXAMPLE_FALLBACK_EARLY
    if mv >= LATE_MIN_MANA_VALUE:
        return EXAMPLE_FALLBACK_LATE
    return EXAMPLE_FALLBACK_MID


def _with_name(template: str, card: CardFacts) -> str:
    name = card.name.strip() or "this card"
    return template.replace("{name}", name)


def synthesize_explanation(
    card: CardFacts,
    tags: TagSet,
    mv: float | None,
) -> ExplainDocument:
    """
    Build the beginner explanation for a card.

    Args:
        card: The card being explained
        tags: Tags from extract_tags
        mv: Mana value; None is treated as 0

    Returns:
        ExplainDocument with six sections, each holding at least one bullet
    """
    mana_value = mv if mv is not None else 0.0
    text = CardText.of(card)
    collector = SectionCollector(EXPLANATION_SECTIONS)
    examples: list[str] = []

    for entry in TAG_EXPLANATIONS:
        if entry.tag not in tags:
            continue
        for section, bullets in entry.contributions():
            collector.add(section, *bullets)
        examples.extend(_with_name(e, card) for e in entry.example)

    for rule in TEXT_RULES:
        if rule.predicate(text, mana_value):
            collector.add(rule.section, rule.bullet)

    collector.add(EXAMPLE, *examples)
    kept = collector.get(EXAMPLE)[:EXAMPLE_PLAY_LIMIT]
    collector.replace(EXAMPLE, kept or [_example_fallback(mana_value)])

    document = collector.build("explanation", EXPLANATION_FALLBACKS)
    logger.debug(
        "Explanation for %s: %d bullets",
        card.name,
        sum(len(s.bullets) for s in document.sections),
    )
    return document
