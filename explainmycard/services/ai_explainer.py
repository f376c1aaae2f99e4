"""
Optional AI explanations via Claude.

Only used when explicitly enabled. Any failure here is non-fatal: callers
use `explain_or_none()` and fall back to the synthesized documents.

Responses are cached per (card, mode) for the life of the process.
Cards with a curated manual entry never reach the AI.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Literal

import anthropic
from anthropic.types import TextBlock

from explainmycard.config import Settings, settings
from explainmycard.models.card import CardFacts, lookup_key
from explainmycard.models.failure import FailureKind, KnownError
from explainmycard.models.tags import TagSet
from explainmycard.services.manual_registry import lookup_manual

logger = logging.getLogger(__name__)

Mode = Literal["explain", "synergies"]

SYSTEM_PROMPT = (
    "You are a careful, accurate Magic: The Gathering rules explainer. "
    "If something is uncertain, say you are unsure rather than guessing."
)

_PREAMBLE = """You are "Explain My Card", an autism-friendly Magic: The Gathering {role}.
Write in clear, literal language. Avoid sarcasm. Avoid slang. No fluff.
Assume the user is a beginner and often plays Commander."""

EXPLAIN_TASK = """TASK:
Return an explanation with these EXACT section headers (in this order):

1) What this card does
- 2-5 bullet points, plain English, no jargon unless explained.

2) Why people play it (Commander)
- 2-5 bullet points focused on common reasons.

3) Common play patterns
- 2-5 bullet points. Examples like "Cast this, then do X" are good.

4) Rules notes / gotchas
- 2-6 bullet points. Mention timing, "targets", replacement effects, state-based actions, etc. ONLY if relevant.

5) Quick tips
- 2-6 bullet points that help a beginner use it correctly.

Formatting rules:
- Use bullet points (•).
- Keep each bullet short (1-2 sentences).
- Do not include card prices.
- Do not invent exact combo pieces if you are unsure. When uncertain, speak generally (e.g., "pairs well with sacrifice outlets")."""

SYNERGY_TASK = """TASK:
Return "Synergies & Combos" ideas in this structure:

A) Best deck themes for this card
- 3-6 bullet points.

B) What this card pairs well with
- 6-12 bullet points.
- Prefer TYPES of cards (e.g., "cheap instants", "mana rocks", "flicker effects", "sacrifice outlets").
- You MAY include 0-4 specific famous staples only if you are confident they fit.

C) If you want to go infinite (optional)
- Either:
  - "No clear infinite combos are typical for this card"
  - OR 2-4 bullet points describing common infinite-style patterns in general terms.
- Do NOT hallucinate obscure named combos.

D) Anti-synergies / what to avoid
- 3-6 bullet points.

Formatting rules:
- Use bullet points (•).
- Keep each bullet short.
- Do not include card prices."""


class AIUnavailableError(KnownError):
    """Raised when AI explanations are disabled or not configured."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="AI explanations are not available.",
            detail=reason,
            suggestion="The built-in explanation is shown instead.",
            status_code=503,
        )


class AIExplanationError(KnownError):
    """Raised when the AI service fails or returns nothing usable."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="The AI explanation could not be generated.",
            detail=reason,
            suggestion="The built-in explanation is shown instead.",
            status_code=502,
        )


def _joined(values: tuple[str, ...] | list[str], empty: str) -> str:
    return ", ".join(values) or empty


def _fmt_mv(card: CardFacts) -> str:
    if card.mana_value is None:
        return "(unknown)"
    return f"{card.mana_value:g}"


def build_explain_prompt(card: CardFacts, tags: TagSet) -> str:
    """Prompt asking for the five-section beginner explanation."""
    oracle = card.oracle_text or "(no oracle text found)"
    lines = [
        _PREAMBLE.format(role="explainer"),
        "",
        "CARD DATA (from Scryfall):",
        f"Name: {card.name or '(unknown)'}",
        f"Mana cost: {card.mana_cost or '(unknown)'}",
        f"Type line: {card.type_line or '(unknown)'}",
        f"CMC: {_fmt_mv(card)}",
        f"Colors: {_joined(card.colors, '(unknown)')}",
        f"Color identity: {_joined(card.color_identity, '(unknown)')}",
        f"Keywords: {_joined(card.keywords, '(none)')}",
        f"Produced mana: {_joined(card.produced_mana, '(none)')}",
        f"Rarity: {card.rarity or '(unknown)'}",
        f"Set name: {card.set_name or '(unknown)'}",
        f"Context tags: {_joined(sorted(tags), '(none)')}",
        "Oracle text:",
        oracle,
        "",
        EXPLAIN_TASK,
    ]
    return "\n".join(lines).strip()


def build_synergy_prompt(card: CardFacts, tags: TagSet) -> str:
    """Prompt asking for the four-part synergy report."""
    oracle = card.oracle_text or "(no oracle text found)"
    lines = [
        _PREAMBLE.format(role="helper"),
        "",
        "CARD DATA:",
        f"Name: {card.name or '(unknown)'}",
        f"Mana cost: {card.mana_cost or '(unknown)'}",
        f"Type line: {card.type_line or '(unknown)'}",
        f"Colors: {_joined(card.colors, '(unknown)')}",
        f"Color identity: {_joined(card.color_identity, '(unknown)')}",
        f"Context tags: {_joined(sorted(tags), '(none)')}",
        "Oracle text:",
        oracle,
        "",
        SYNERGY_TASK,
    ]
    return "\n".join(lines).strip()


@dataclass
class AIResponseCache:
    """Thread-safe cache of AI text keyed by (card lookup key, mode)."""

    _entries: dict[tuple[str, str], str] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def get(self, name: str, mode: Mode) -> str | None:
        with self._lock:
            return self._entries.get((lookup_key(name), mode))

    def put(self, name: str, mode: Mode, text: str) -> None:
        with self._lock:
            self._entries[(lookup_key(name), mode)] = text

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class AIExplainer:
    """Calls Claude for free-text explanations, with caching."""

    def __init__(
        self,
        config: Settings | None = None,
        cache: AIResponseCache | None = None,
    ) -> None:
        self._config = config or settings
        self.cache = cache if cache is not None else AIResponseCache()

    @property
    def enabled(self) -> bool:
        return self._config.ai_enabled and bool(self._config.anthropic_api_key)

    def _create(self, prompt: str) -> str:
        client = anthropic.Anthropic(api_key=self._config.anthropic_api_key)
        response = client.messages.create(
            model=self._config.ai_model,
            max_tokens=self._config.ai_max_tokens,
            temperature=self._config.ai_temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        text = ""
        for block in response.content:
            if isinstance(block, TextBlock):
                text += block.text
        return text.strip()

    def explain(self, card: CardFacts, tags: TagSet, mode: Mode = "explain") -> str:
        """
        Get AI text for a card.

        Raises:
            AIUnavailableError: If AI is disabled or the key is missing
            AIExplanationError: If the call fails or returns empty text
        """
        if not self._config.ai_enabled:
            raise AIUnavailableError("ai_enabled=false")
        if not self._config.anthropic_api_key:
            raise AIUnavailableError("anthropic_api_key not set")

        cached = self.cache.get(card.name, mode)
        if cached:
            return cached

        if mode == "synergies":
            prompt = build_synergy_prompt(card, tags)
        else:
            prompt = build_explain_prompt(card, tags)
        try:
            text = self._create(prompt)
        except anthropic.APIError as e:
            raise AIExplanationError(f"{type(e).__name__}: {e}") from e

        if not text:
            raise AIExplanationError("empty response")

        self.cache.put(card.name, mode, text)
        return text

    async def explain_or_none(
        self,
        card: CardFacts,
        tags: TagSet,
        mode: Mode = "explain",
    ) -> str | None:
        """
        Get AI text, or None if AI is off, the card is curated, or the call fails.

        Never raises for AI problems.
        """
        if not self.enabled or lookup_manual(card.name) is not None:
            return None
        try:
            return await asyncio.to_thread(self.explain, card, tags, mode)
        except KnownError as e:
            logger.warning("AI explanation unavailable for %s: %s", card.name, e.detail)
            return None


ai_explainer = AIExplainer()
