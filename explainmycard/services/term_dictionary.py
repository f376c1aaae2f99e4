"""
Term dictionary.

Static mapping from a lowercase rules term or symbol to a one-sentence
definition. Shared read-only by the keyword annotator. Built once at
import and exposed as a read-only mapping.
"""

from types import MappingProxyType

_TERMS: dict[str, str] = {
    # Symbols
    "{t}": "Tap this permanent (turn it sideways) as part of the cost.",
    "{q}": "Untap this permanent as part of the cost.",
    "{c}": "One colorless mana.",
    "{x}": "A number you choose when you cast or activate it; you pay that much mana.",
    "+1/+1 counter": "A marker that gives a creature +1 power and +1 toughness.",
    "-1/-1 counter": "A marker that gives a creature -1 power and -1 toughness.",
    # Zones and card flow
    "battlefield": "The area where permanents (lands, creatures, artifacts and so on) stay in play.",
    "graveyard": "Your discard pile; cards go here when they are destroyed, die or are discarded.",
    "exile": "A zone outside the game; exiled cards usually never come back.",
    "library": "Your deck of cards that you draw from.",
    "mill": "Put cards from the top of a library into its owner's graveyard.",
    "scry": "Look at the top cards of your library and put any of them on the bottom.",
    "surveil": "Look at the top cards of your library and put any of them into your graveyard.",
    "search your library": "Look through your deck for a card, then shuffle it.",
    # Actions and rules words
    "counter": "Cancel a spell or ability so it does nothing.",
    "counters": "Markers placed on a permanent that change it or track something.",
    "target": "A specific object or player the spell chooses; if it becomes illegal, that part does nothing.",
    "sacrifice": "Put your own permanent into the graveyard; it cannot be prevented.",
    "destroy": "Put a permanent into its owner's graveyard; indestructible stops this.",
    "dies": "A creature was put into the graveyard from the battlefield.",
    "token": "A permanent created by an effect that is not a real card.",
    "treasure": "An artifact token you can sacrifice to add one mana of any color.",
    "enters the battlefield": "The moment a permanent is put onto the battlefield.",
    "enters": "Comes onto the battlefield.",
    "until end of turn": "The effect lasts only for the current turn.",
    "mana value": "The total amount of mana in a card's mana cost.",
    "activated ability": "An ability written as cost, colon, effect that you can use when you choose.",
    "proliferate": "Add one more of each kind of counter already on any permanents or players you choose.",
    "flicker": "Exile a permanent and return it to the battlefield, resetting it.",
    "equip": "Pay the cost to attach this Equipment to a creature you control.",
    "enchant": "Names what this Aura can be attached to.",
    "planeswalker": "A permanent ally that uses loyalty abilities once per turn.",
    "loyalty": "The counters a planeswalker uses to pay for its abilities.",
    "commander": "A multiplayer format where each deck is led by a legendary creature.",
    "color identity": "All mana symbols on a card; Commander decks must match the commander's.",
    "summoning sickness": "A creature cannot attack or use tap abilities the turn it comes under your control.",
    "instant": "A spell you can cast at almost any time, even on an opponent's turn.",
    "sorcery": "A spell you can cast only during your own main phase when nothing else is happening.",
    # Keywords
    "flash": "You may cast this any time you could cast an instant.",
    "flying": "Can only be blocked by creatures with flying or reach.",
    "reach": "Can block creatures with flying.",
    "haste": "Can attack and use tap abilities the turn it arrives.",
    "vigilance": "Attacking does not cause this creature to tap.",
    "trample": "Extra combat damage beyond what blockers need can hit the player.",
    "lifelink": "Damage this deals also makes you gain that much life.",
    "deathtouch": "Any amount of damage this deals to a creature is enough to destroy it.",
    "first strike": "Deals combat damage before creatures without first strike.",
    "double strike": "Deals combat damage twice: once in the first-strike step and once normally.",
    "menace": "Cannot be blocked except by two or more creatures.",
    "hexproof": "Cannot be the target of spells or abilities your opponents control.",
    "indestructible": "Is not destroyed by damage or by destroy effects.",
    "ward": "Opponents must pay an extra cost when they target this, or their spell is countered.",
    "protection": "Cannot be blocked, targeted, damaged or enchanted by the named quality.",
    "flashback": "You may cast this from your graveyard for its flashback cost, then it is exiled.",
    "cycling": "Pay the cycling cost and discard this card to draw a card.",
    "convoke": "Your creatures can tap to help pay for this spell.",
    "storm": "Copy this spell for each spell cast before it this turn.",
}

TERMS = MappingProxyType(_TERMS)


def define(term: str) -> str | None:
    """Look up the definition of a term, case-insensitively."""
    return TERMS.get(term.strip().lower())
