"""
Explain My Card services.

The deterministic explanation engine plus thin adapters for card lookup
and optional AI explanations.
"""

from explainmycard.services.ai_explainer import (
    AIExplainer,
    AIExplanationError,
    AIResponseCache,
    AIUnavailableError,
    ai_explainer,
)
from explainmycard.services.card_lookup import (
    CardLookupError,
    CardNotFoundError,
    fetch_card_by_exact_name,
)
from explainmycard.services.card_report import CardReport, build_card_report, explain_card
from explainmycard.services.explanation_builder import synthesize_explanation
from explainmycard.services.keyword_annotator import (
    AnnotatedTerm,
    KeywordAnnotator,
    LiteralSegment,
    TooltipState,
    annotate,
)
from explainmycard.services.manual_registry import ManualEntry, lookup_manual
from explainmycard.services.mechanic_detector import detect_mechanics
from explainmycard.services.role_classifier import classify, classify_card
from explainmycard.services.synergy_builder import synthesize_synergies
from explainmycard.services.tag_extractor import extract_tags
from explainmycard.services.term_dictionary import TERMS, define

__all__ = [
    "TERMS",
    "AIExplainer",
    "AIExplanationError",
    "AIResponseCache",
    "AIUnavailableError",
    "AnnotatedTerm",
    "CardLookupError",
    "CardNotFoundError",
    "CardReport",
    "KeywordAnnotator",
    "LiteralSegment",
    "ManualEntry",
    "TooltipState",
    "ai_explainer",
    "annotate",
    "build_card_report",
    "classify",
    "classify_card",
    "define",
    "detect_mechanics",
    "explain_card",
    "extract_tags",
    "fetch_card_by_exact_name",
    "lookup_manual",
    "synthesize_explanation",
    "synthesize_synergies",
]
