"""
Manual override registry.

Hand-written explanations for popular cards, keyed by exact card name.
Lookups are trimmed and case-insensitive. The table is built once at import
and exposed read-only; whether a manual entry replaces or accompanies the
synthesized explanation is decided by the caller, not here.
"""

from dataclasses import dataclass
from types import MappingProxyType

from explainmycard.models.card import lookup_key


@dataclass(frozen=True, slots=True)
class ManualEntry:
    """
    A curated explanation.

    Attributes:
        title: Display name of the card
        summary: One-line summary
        why: Reasons people play it, in order
        tips: Usage tips, in order
        gotchas: Rules notes, may be empty
        pairings: (card name, reason) pairs known to work well
    """

    title: str
    summary: str
    why: tuple[str, ...]
    tips: tuple[str, ...]
    gotchas: tuple[str, ...] = ()
    pairings: tuple[tuple[str, str], ...] = ()


_ENTRIES: list[ManualEntry] = [
    ManualEntry(
        title="Sol Ring",
        summary="A fast mana card: pay 1, and it taps for 2 colorless mana.",
        why=(
            "It lets you play bigger spells earlier than normal.",
            "Drawn early in Commander, it often puts you ahead of the whole table.",
        ),
        tips=("Cast it on turn 1 if you can.", "Use the colorless mana on artifacts or generic costs."),
        pairings=(
            ("Arcane Signet", "more fast mana early."),
            ("Thran Dynamo", "big follow-up ramp."),
        ),
    ),
    ManualEntry(
        title="Arcane Signet",
        summary="A mana rock that taps for one mana of any color in your commander's color identity.",
        why=("It helps you cast your spells reliably in multicolor Commander decks.",),
        tips=("Play it on turn 2 to reach 4 mana on turn 3.",),
        gotchas=("With no commander, it produces no mana.",),
        pairings=(
            ("Sol Ring", "fast acceleration."),
            ("Command Tower", "perfect color fixing."),
        ),
    ),
    ManualEntry(
        title="Command Tower",
        summary="A land that taps for any color in your commander's color identity.",
        why=("It fixes your colors with no downside, so most Commander decks play it.",),
        tips=("Play it whenever you need a specific color.",),
        gotchas=("Without a commander it taps for nothing.",),
    ),
    ManualEntry(
        title="Cultivate",
        summary="A ramp spell that finds two basic lands: one onto the battlefield tapped, one into your hand.",
        why=(
            "It increases your mana for future turns.",
            "It helps you keep hitting land drops.",
        ),
        tips=("Pick lands of colors you are missing.",),
        gotchas=("The land put onto the battlefield enters tapped.",),
    ),
    ManualEntry(
        title="Kodama’s Reach",
        summary="Does the same thing as Cultivate.",
        why=("Commander decks often run both for consistent ramp and card advantage.",),
        tips=("Cast it on turn 3 to have 5 mana on turn 4.",),
    ),
    ManualEntry(
        title="Swords to Plowshares",
        summary="Exiles a creature for just one mana.",
        why=("It is one of the most efficient removal spells ever printed.",),
        tips=("The creature's controller gains life; that is usually worth it to remove a threat.",),
        gotchas=("Exile gets around indestructible and 'dies' triggers.",),
    ),
    ManualEntry(
        title="Path to Exile",
        summary="Exiles a creature, but its controller may search for a basic land.",
        why=("Exiling is powerful, so the downside is often acceptable.",),
        tips=("Use it on your own creature in an emergency to ramp a land.",),
        gotchas=("Giving an opponent a land early helps them ramp.",),
    ),
    ManualEntry(
        title="Counterspell",
        summary="Stops a spell from resolving and sends it to the graveyard.",
        why=("It is a classic defensive tool that answers anything.",),
        tips=("Keep two blue mana open and wait for the spell that matters.",),
    ),
    ManualEntry(
        title="Cyclonic Rift",
        summary="Returns a nonland permanent to its owner's hand; overloaded, it hits all of your opponents' nonland permanents.",
        why=("Overloaded at the end of an opponent's turn, it often enables a winning turn.",),
        tips=("Overload it at the end of the turn before yours.",),
        gotchas=("Tokens returned to hand stop existing.",),
    ),
    ManualEntry(
        title="Lightning Bolt",
        summary="Deals 3 damage to any target.",
        why=("It is efficient removal or a way to finish off an opponent.",),
        tips=("Save it for a creature you must kill or for the last 3 points of damage.",),
    ),
    ManualEntry(
        title="Rhystic Study",
        summary="Draws you cards whenever opponents cast spells, unless they pay extra mana.",
        why=("In multiplayer games, it often draws many cards.",),
        tips=("Remind opponents politely that they may pay, then draw when they do not.",),
    ),
    ManualEntry(
        title="Smothering Tithe",
        summary="Creates Treasure tokens when opponents draw cards, unless they pay mana.",
        why=("It often produces a huge mana advantage.",),
        tips=("Cast it before your opponents' draw steps so it triggers right away.",),
    ),
    ManualEntry(
        title="Mystic Remora",
        summary="Draws cards when opponents cast noncreature spells, unless they pay mana.",
        why=("It is strongest early in the game.",),
        tips=("Stop paying its upkeep cost once it slows down.",),
        gotchas=("Its upkeep cost grows every turn.",),
    ),
    ManualEntry(
        title="Brainstorm",
        summary="Draw three cards, then put two back on top of your library.",
        why=("It lets you dig for the card you need at instant speed.",),
        tips=("It is best when you can shuffle afterward.",),
    ),
    ManualEntry(
        title="Sensei’s Divining Top",
        summary="Lets you control your draws by rearranging the top of your library.",
        why=("It smooths every draw for the rest of the game.",),
        tips=("Use it at the end of each opponent's turn to set up your next draw.",),
    ),
    ManualEntry(
        title="Wrath of God",
        summary="Destroys all creatures and prevents regeneration, resetting the board.",
        why=("It saves you when opponents have more creatures than you.",),
        tips=("Hold your own creatures back before casting it.",),
        gotchas=("Indestructible creatures survive it.",),
    ),
    ManualEntry(
        title="Teferi’s Protection",
        summary="Phases out your permanents and protects your life total for a turn.",
        why=("It saves you from almost anything for one turn.",),
        tips=("Cast it in response to a board wipe or a lethal attack.",),
        gotchas=("Phased-out permanents are treated as though they do not exist until your next untap.",),
    ),
    ManualEntry(
        title="Doubling Season",
        summary="Doubles the tokens and counters you put on permanents.",
        why=("It supercharges token and planeswalker strategies.",),
        tips=("Cast it before your token makers and planeswalkers.",),
    ),
    ManualEntry(
        title="The One Ring",
        summary="Protects you for a turn and draws increasing numbers of cards, but drains your life.",
        why=("It gives a turn of safety and then a lot of cards.",),
        tips=("Plan to remove or bounce it before the life loss gets too high.",),
        gotchas=("The life loss grows with each burden counter.",),
    ),
    ManualEntry(
        title="Dockside Extortionist",
        summary="Creates Treasure tokens based on opponents' artifacts and enchantments.",
        why=("It often generates explosive mana.",),
        tips=("Cast it later, when opponents have more artifacts and enchantments out.",),
    ),
]


def _registry_key(name: str) -> str:
    # Curated names use typographic apostrophes; users usually type straight ones
    return lookup_key(name).replace("’", "'")


MANUAL_ENTRIES = MappingProxyType({_registry_key(e.title): e for e in _ENTRIES})


def lookup_manual(name: str) -> ManualEntry | None:
    """
    Find the curated entry for a card.

    Args:
        name: Card name, matched exactly after trimming and case folding

    Returns:
        The entry, or None if the card has no curated text
    """
    return MANUAL_ENTRIES.get(_registry_key(name))
