"""
Semantic tag vocabulary.

A TagSet is a frozenset of tokens drawn from TAG_VOCABULARY. Tags are
derived fresh for every card and are never cached.
"""

TagSet = frozenset[str]

MANA = "mana"
TREASURE = "treasure"
CARD_DRAW = "card-draw"
REMOVAL = "removal"
BOARD_WIPE = "board-wipe"
TOKENS = "tokens"
COUNTERMAGIC = "countermagic"
GRAVEYARD = "graveyard"
TUTOR = "tutor-or-search"
COUNTERS = "counters"
ETB = "etb"
SACRIFICE = "sacrifice"
PROTECTION = "protection"
CREATURE = "creature"
PLANESWALKER = "planeswalker"
EQUIPMENT = "equipment"
AURA = "aura"
ARTIFACT = "artifact"
ENCHANTMENT = "enchantment"
LAND = "land"
INSTANT_SPEED = "instant-speed"
LIFEGAIN = "lifegain"
RECURRING_TRIGGER = "recurring-trigger"

TAG_VOCABULARY: frozenset[str] = frozenset(
    {
        MANA,
        TREASURE,
        CARD_DRAW,
        REMOVAL,
        BOARD_WIPE,
        TOKENS,
        COUNTERMAGIC,
        GRAVEYARD,
        TUTOR,
        COUNTERS,
        ETB,
        SACRIFICE,
        PROTECTION,
        CREATURE,
        PLANESWALKER,
        EQUIPMENT,
        AURA,
        ARTIFACT,
        ENCHANTMENT,
        LAND,
        INSTANT_SPEED,
        LIFEGAIN,
        RECURRING_TRIGGER,
    }
)
