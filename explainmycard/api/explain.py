"""
Explain API endpoints.

- GET /explain: route information for quick checks in a browser
- POST /explain: explain a card sent in the request body
- GET /cards/{name}: look a card up by exact name and return the full report

The synthesized documents are always returned. AI text is added only when
AI is enabled and the call succeeds; AI failures never fail the request.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query
from pydantic import BaseModel, Field

from explainmycard.config import settings
from explainmycard.models.card import CardFacts
from explainmycard.models.failure import ApiResponse, FailureKind, KnownError, create_success
from explainmycard.services.ai_explainer import Mode
from explainmycard.services.card_lookup import fetch_card_by_exact_name
from explainmycard.services.card_report import (
    BadgeModel,
    CardReport,
    DocumentModel,
    explain_card,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["explain"])


class MissingCardNameError(KnownError):
    """Raised when a request body carries no card name."""

    def __init__(self, received_keys: list[str]) -> None:
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message="Missing card name.",
            detail=f"Received keys: {', '.join(received_keys) or '(none)'}",
            suggestion="Send card.name, or cardName for the flat format.",
            status_code=400,
        )


class ExplainResponse(BaseModel):
    """Explanation or synergy document for one card."""

    mode: str
    card_name: str
    badge: BadgeModel
    tags: list[str]
    document: DocumentModel
    source: str = Field(description="'ai' when ai_text is present, otherwise 'synthesized'")
    ai_text: str | None = None


class RouteInfo(BaseModel):
    ok: bool
    route: str
    methods: list[str]
    message: str
    ai_enabled: bool
    ai_model: str
    example_body: dict[str, Any]


def _first(body: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if body.get(key) is not None:
            return body[key]
    return default


def parse_mode(value: Any) -> Mode:
    """Anything other than "synergies" means "explain"."""
    if isinstance(value, str) and value.strip().lower() == "synergies":
        return "synergies"
    return "explain"


def card_from_body(body: dict[str, Any]) -> CardFacts:
    """
    Build CardFacts from a request body.

    Accepts {"card": {...}} with Scryfall field names, or the older flat
    format with camelCase or snake_case fields at the top level.

    Raises:
        MissingCardNameError: If no card name is present
    """
    card = body.get("card")
    if not isinstance(card, dict):
        card = {
            "name": _first(body, "cardName", "name", default=""),
            "mana_cost": _first(body, "manaCost", "mana_cost", default=""),
            "type_line": _first(body, "typeLine", "type_line", default=""),
            "oracle_text": _first(body, "oracleText", "oracle_text", "text", default=""),
            "keywords": body.get("keywords") or [],
            "colors": body.get("colors") or [],
            "color_identity": body.get("color_identity") or [],
            "produced_mana": body.get("produced_mana") or [],
            "cmc": body.get("cmc"),
            "rarity": body.get("rarity"),
            "set_name": body.get("set_name"),
        }

    facts = CardFacts.from_scryfall(card)
    if not facts.name:
        raise MissingCardNameError(sorted(body))
    return facts


@router.get("/explain", response_model=RouteInfo)
async def explain_info() -> RouteInfo:
    """Describe the explain route."""
    return RouteInfo(
        ok=True,
        route="/explain",
        methods=["POST"],
        message="This endpoint expects a POST with a JSON body.",
        ai_enabled=settings.ai_enabled and bool(settings.anthropic_api_key),
        ai_model=settings.ai_model,
        example_body={
            "mode": "explain",
            "card": {
                "name": "Sol Ring",
                "mana_cost": "{1}",
                "type_line": "Artifact",
                "oracle_text": "{T}: Add {C}{C}.",
            },
        },
    )


@router.post("/explain", response_model=ApiResponse[ExplainResponse])
async def explain(body: Annotated[dict[str, Any], Body()]) -> ApiResponse[ExplainResponse]:
    """
    Explain a card sent in the request body.

    `mode` selects the explanation ("explain", the default) or the synergy
    report ("synergies").
    """
    mode = parse_mode(body.get("mode"))
    card = card_from_body(body)
    report = await explain_card(card, mode=mode)

    document = report.synergies if mode == "synergies" else report.explanation
    return create_success(
        ExplainResponse(
            mode=mode,
            card_name=report.name,
            badge=report.badge,
            tags=report.tags,
            document=document,
            source="ai" if report.ai_text else "synthesized",
            ai_text=report.ai_text,
        )
    )


@router.get("/cards/{name}", response_model=ApiResponse[CardReport])
async def card_report(
    name: str,
    prefer_manual: Annotated[bool | None, Query()] = None,
) -> ApiResponse[CardReport]:
    """
    Look up a card by exact name and return its full report.

    Lookup failures surface as classified errors; no partial report is sent.
    """
    card = await fetch_card_by_exact_name(name)
    if prefer_manual is None:
        prefer_manual = settings.prefer_manual_explanations
    report = await explain_card(card, prefer_manual=prefer_manual)
    return create_success(report)
