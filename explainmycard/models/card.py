"""
Card facts model.

CardFacts is the only input to the explanation engine. It is built once
from a card lookup payload and never mutated afterwards.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

# Separators used when joining the faces of a multi-faced card
FACE_TEXT_SEPARATOR = "\n//\n"
FACE_TYPE_SEPARATOR = " // "


def lookup_key(name: str) -> str:
    """Normalize a card name for use as a lookup key."""
    return name.strip().casefold()


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return str(value)


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, Iterable) or isinstance(value, str | bytes):
        return ()
    return tuple(s for s in (_text(v).strip() for v in value) if s)


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class CardFacts:
    """
    Raw attributes of a single card.

    Attributes:
        name: Card name, the key for manual entries and caching
        mana_cost: Symbolic mana cost (e.g., "{2}{U}{U}")
        type_line: Full type line (e.g., "Creature — Elf Druid")
        oracle_text: Rules text; faces of multi-faced cards are pre-joined
        mana_value: Numeric mana value, None if unknown
        power: Printed power (creatures)
        toughness: Printed toughness (creatures)
        loyalty: Starting loyalty (planeswalkers)
        keywords: Keyword abilities reported by the card source
        colors: Color letters (W, U, B, R, G)
        color_identity: Commander color identity letters
        produced_mana: Mana symbols the card can produce
        rarity: common, uncommon, rare, mythic
        set_name: Name of the printing's set
        legalities: (format, status) pairs
        image_url: Image of the card's front face
    """

    name: str
    mana_cost: str = ""
    type_line: str = ""
    oracle_text: str = ""
    mana_value: float | None = None
    power: str | None = None
    toughness: str | None = None
    loyalty: str | None = None
    keywords: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()
    color_identity: tuple[str, ...] = ()
    produced_mana: tuple[str, ...] = ()
    rarity: str = ""
    set_name: str = ""
    legalities: tuple[tuple[str, str], ...] = ()
    image_url: str | None = None

    @property
    def key(self) -> str:
        return lookup_key(self.name)

    @property
    def mv(self) -> float:
        """Mana value with unknown treated as zero."""
        return self.mana_value if self.mana_value is not None else 0.0

    def legality(self, format_name: str) -> str | None:
        for fmt, status in self.legalities:
            if fmt == format_name:
                return status
        return None

    @property
    def best_format(self) -> str:
        if self.legality("commander") == "legal":
            return "Commander (EDH)"
        return "Not legal in Commander"

    @classmethod
    def from_scryfall(cls, payload: Mapping[str, Any]) -> "CardFacts":
        """
        Build CardFacts from a Scryfall card object.

        Multi-faced cards carry their rules text on each face. Face oracle
        text and type lines are joined with a visible separator so rules
        can fire on either face.
        """
        faces = payload.get("card_faces")
        faces = [f for f in faces if isinstance(f, Mapping)] if isinstance(faces, list) else []

        oracle_text = _text(payload.get("oracle_text"))
        type_line = _text(payload.get("type_line"))
        mana_cost = _text(payload.get("mana_cost"))
        power = payload.get("power")
        toughness = payload.get("toughness")
        loyalty = payload.get("loyalty")
        image_uris = payload.get("image_uris")

        if faces:
            face_texts = [_text(f.get("oracle_text")) for f in faces]
            if not oracle_text:
                oracle_text = FACE_TEXT_SEPARATOR.join(t for t in face_texts if t)
            if not type_line:
                type_line = FACE_TYPE_SEPARATOR.join(
                    t for t in (_text(f.get("type_line")) for f in faces) if t
                )
            if not mana_cost:
                mana_cost = _text(faces[0].get("mana_cost"))
            front = faces[0]
            power = power if power is not None else front.get("power")
            toughness = toughness if toughness is not None else front.get("toughness")
            loyalty = loyalty if loyalty is not None else front.get("loyalty")
            if not isinstance(image_uris, Mapping):
                image_uris = front.get("image_uris")

        legalities = payload.get("legalities")
        legality_pairs: tuple[tuple[str, str], ...] = ()
        if isinstance(legalities, Mapping):
            legality_pairs = tuple(
                sorted((_text(k), _text(v)) for k, v in legalities.items())
            )

        image_url = None
        if isinstance(image_uris, Mapping):
            image_url = image_uris.get("normal") or image_uris.get("small")

        return cls(
            name=_text(payload.get("name")).strip(),
            mana_cost=mana_cost,
            type_line=type_line,
            oracle_text=oracle_text,
            mana_value=_number(payload.get("cmc")),
            power=None if power is None else _text(power),
            toughness=None if toughness is None else _text(toughness),
            loyalty=None if loyalty is None else _text(loyalty),
            keywords=_strings(payload.get("keywords")),
            colors=_strings(payload.get("colors")),
            color_identity=_strings(payload.get("color_identity")),
            produced_mana=_strings(payload.get("produced_mana")),
            rarity=_text(payload.get("rarity")),
            set_name=_text(payload.get("set_name")),
            legalities=legality_pairs,
            image_url=image_url,
        )
