"""End-to-end tests for the card report."""

from typing import Any
from unittest.mock import AsyncMock

from explainmycard.config import Settings
from explainmycard.models.card import CardFacts
from explainmycard.services.ai_explainer import AIExplainer
from explainmycard.services.card_report import build_card_report, explain_card, report_summary


class TestBuildCardReport:
    def test_sol_ring(self, sol_ring: CardFacts) -> None:
        report = build_card_report(sol_ring)

        assert report.badge.label == "Ramp · Early"
        assert report.tags == ["artifact", "mana"]
        assert "big_mana" in report.mechanics
        assert report.best_format == "Commander (EDH)"
        assert report.explanation.sections[0].title == "What it does"
        assert report.synergies.kind == "synergies"

    def test_curated_entry_shown_alongside(self, sol_ring: CardFacts) -> None:
        report = build_card_report(sol_ring)

        assert report.manual is not None
        assert report.manual.title == "Sol Ring"
        assert report.manual.pairings[0].name == "Arcane Signet"
        assert report.show_synthesized

    def test_prefer_manual_hides_synthesized(self, sol_ring: CardFacts) -> None:
        report = build_card_report(sol_ring, prefer_manual=True)

        assert not report.show_synthesized
        assert report.explanation.sections

    def test_prefer_manual_without_entry(self, drain_outlet: CardFacts) -> None:
        report = build_card_report(drain_outlet, prefer_manual=True)

        assert report.manual is None
        assert report.show_synthesized

    def test_oracle_segments(self, sol_ring: CardFacts) -> None:
        report = build_card_report(sol_ring)

        assert "".join(s.text for s in report.oracle_segments) == sol_ring.oracle_text
        assert [s.term for s in report.oracle_segments if s.term] == ["{t}", "{c}", "{c}"]

    def test_two_faced_card(self, werewolf_payload: dict[str, Any]) -> None:
        report = build_card_report(CardFacts.from_scryfall(werewolf_payload))

        assert report.badge.label == "Removal · Early"
        assert report.image_url == "https://cards.scryfall.io/normal/front/village-watcher.jpg"

    def test_deterministic(self, drain_outlet: CardFacts) -> None:
        first = build_card_report(drain_outlet)
        second = build_card_report(drain_outlet)

        assert first.model_dump() == second.model_dump()

    def test_summary(self, sol_ring: CardFacts) -> None:
        summary = report_summary(build_card_report(sol_ring))

        assert summary == {
            "name": "Sol Ring",
            "badge": "Ramp · Early",
            "tags": ["artifact", "mana"],
            "best_format": "Commander (EDH)",
            "manual": True,
        }


class TestExplainCard:
    async def test_without_ai(self, drain_outlet: CardFacts) -> None:
        explainer = AIExplainer(config=Settings(ai_enabled=False))
        report = await explain_card(drain_outlet, explainer=explainer)

        assert report.ai_text is None
        assert report.ai_mode is None

    async def test_with_ai_text(self, drain_outlet: CardFacts) -> None:
        explainer = AIExplainer(config=Settings(ai_enabled=False))
        explainer.explain_or_none = AsyncMock(return_value="AI text")  # type: ignore[method-assign]

        report = await explain_card(drain_outlet, mode="synergies", explainer=explainer)

        assert report.ai_text == "AI text"
        assert report.ai_mode == "synergies"
        assert report.synergies.sections
        explainer.explain_or_none.assert_awaited_once()
