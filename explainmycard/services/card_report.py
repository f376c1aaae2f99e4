"""
Card report.

Runs the whole engine for one card: tags, mechanics, badge, explanation,
synergies and annotated oracle text. The curated manual entry is looked up
alongside; the synthesized documents are always computed, and
`show_synthesized` tells the presentation layer whether to display them.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field

from explainmycard.models.card import CardFacts
from explainmycard.models.document import ExplainDocument
from explainmycard.services.ai_explainer import AIExplainer, Mode, ai_explainer
from explainmycard.services.explanation_builder import synthesize_explanation
from explainmycard.services.keyword_annotator import AnnotatedTerm, Segment, annotate
from explainmycard.services.manual_registry import ManualEntry, lookup_manual
from explainmycard.services.mechanic_detector import detect_mechanics
from explainmycard.services.role_classifier import classify
from explainmycard.services.synergy_builder import synthesize_synergies
from explainmycard.services.tag_extractor import extract_tags

logger = logging.getLogger(__name__)


class SectionModel(BaseModel):
    title: str
    bullets: list[str]


class DocumentModel(BaseModel):
    kind: str
    sections: list[SectionModel]

    @classmethod
    def from_document(cls, document: ExplainDocument) -> "DocumentModel":
        return cls(
            kind=document.kind,
            sections=[
                SectionModel(title=s.title, bullets=list(s.bullets)) for s in document.sections
            ],
        )


class BadgeModel(BaseModel):
    role: str
    speed: str
    label: str


class PairingModel(BaseModel):
    name: str
    reason: str


class ManualEntryModel(BaseModel):
    title: str
    summary: str
    why: list[str]
    tips: list[str]
    gotchas: list[str] = Field(default_factory=list)
    pairings: list[PairingModel] = Field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: ManualEntry) -> "ManualEntryModel":
        return cls(
            title=entry.title,
            summary=entry.summary,
            why=list(entry.why),
            tips=list(entry.tips),
            gotchas=list(entry.gotchas),
            pairings=[PairingModel(name=n, reason=r) for n, r in entry.pairings],
        )


class SegmentModel(BaseModel):
    """A literal run of text, or an annotated term when `term` is set."""

    text: str
    term: str | None = None
    definition: str | None = None
    occurrence_id: str | None = None

    @classmethod
    def from_segment(cls, segment: Segment) -> "SegmentModel":
        if isinstance(segment, AnnotatedTerm):
            return cls(
                text=segment.text,
                term=segment.term,
                definition=segment.definition,
                occurrence_id=segment.occurrence_id,
            )
        return cls(text=segment.text)


class CardReport(BaseModel):
    """Everything the presentation layer needs to show one card."""

    name: str
    mana_cost: str
    type_line: str
    oracle_text: str
    image_url: str | None = None
    best_format: str
    badge: BadgeModel
    tags: list[str]
    mechanics: list[str]
    explanation: DocumentModel
    synergies: DocumentModel
    manual: ManualEntryModel | None = None
    show_synthesized: bool = True
    oracle_segments: list[SegmentModel] = Field(default_factory=list)
    ai_text: str | None = None
    ai_mode: str | None = None


def build_card_report(card: CardFacts, prefer_manual: bool = False) -> CardReport:
    """
    Run the deterministic engine for a card.

    Args:
        card: The card to explain
        prefer_manual: Hide synthesized documents when a curated entry exists

    Returns:
        CardReport; never raises for well-formed CardFacts
    """
    tags = extract_tags(card)
    mechanics = detect_mechanics(card)
    badge = classify(tags, card.mana_value, card)
    explanation = synthesize_explanation(card, tags, card.mana_value)
    synergies = synthesize_synergies(card, tags, mechanics)
    manual = lookup_manual(card.name)

    logger.info(
        "Report for %s: %s, %d tags, manual=%s",
        card.name,
        badge.label,
        len(tags),
        manual is not None,
    )

    return CardReport(
        name=card.name,
        mana_cost=card.mana_cost,
        type_line=card.type_line,
        oracle_text=card.oracle_text,
        image_url=card.image_url,
        best_format=card.best_format,
        badge=BadgeModel(role=badge.role.value, speed=badge.speed.value, label=badge.label),
        tags=sorted(tags),
        mechanics=mechanics.active(),
        explanation=DocumentModel.from_document(explanation),
        synergies=DocumentModel.from_document(synergies),
        manual=ManualEntryModel.from_entry(manual) if manual else None,
        show_synthesized=not (manual is not None and prefer_manual),
        oracle_segments=[SegmentModel.from_segment(s) for s in annotate(card.oracle_text)],
    )


async def explain_card(
    card: CardFacts,
    prefer_manual: bool = False,
    mode: Mode = "explain",
    explainer: AIExplainer | None = None,
) -> CardReport:
    """Build the report and attach AI text when AI is enabled and succeeds."""
    report = build_card_report(card, prefer_manual=prefer_manual)
    explainer = explainer or ai_explainer
    ai_text = await explainer.explain_or_none(card, frozenset(report.tags), mode)
    if ai_text:
        report.ai_text = ai_text
        report.ai_mode = mode
    return report


def report_summary(report: CardReport) -> dict[str, Any]:
    """Compact view used for logging and the CLI header."""
    return {
        "name": report.name,
        "badge": report.badge.label,
        "tags": report.tags,
        "best_format": report.best_format,
        "manual": report.manual is not None,
    }
