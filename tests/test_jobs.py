"""Tests for the explain-card command."""

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from explainmycard.config import Settings
from explainmycard.jobs.explain_card import main, run_explain
from explainmycard.models.card import CardFacts
from explainmycard.services.ai_explainer import AIExplainer
from explainmycard.services.card_lookup import CardNotFoundError


@pytest.fixture(autouse=True)
def no_ai():
    with patch(
        "explainmycard.services.card_report.ai_explainer",
        AIExplainer(config=Settings(ai_enabled=False)),
    ):
        yield


@pytest.fixture
def sol_ring_file(tmp_path: Path, sol_ring_payload: dict[str, Any]) -> Path:
    path = tmp_path / "sol_ring.json"
    path.write_text(json.dumps(sol_ring_payload), encoding="utf-8")
    return path


class TestRunExplain:
    async def test_from_file(self, sol_ring_file: Path) -> None:
        output = await run_explain(None, file=sol_ring_file)

        assert output.startswith("# Sol Ring  {1}")
        assert "[Ramp · Early]  Commander (EDH)" in output
        assert "## Beginner explanation: Sol Ring" in output
        assert "• Pairs with Arcane Signet: more fast mana early." in output
        assert "## What it does" in output
        assert "## Best deck themes" in output
        assert "Terms: {c}, {t}" in output

    async def test_prefer_manual_hides_synthesized(self, sol_ring_file: Path) -> None:
        output = await run_explain(None, file=sol_ring_file, prefer_manual=True)

        assert "## Beginner explanation: Sol Ring" in output
        assert "## What it does" not in output

    async def test_lookup_by_name(self, sol_ring_payload: dict[str, Any]) -> None:
        card = CardFacts.from_scryfall(sol_ring_payload)
        with patch(
            "explainmycard.jobs.explain_card.fetch_card_by_exact_name",
            AsyncMock(return_value=card),
        ) as mock_fetch:
            output = await run_explain("Sol Ring")

        mock_fetch.assert_awaited_once_with("Sol Ring")
        assert "# Sol Ring" in output


class TestMain:
    def test_prints_report(self, sol_ring_file: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["--file", str(sol_ring_file)]) == 0

        out = capsys.readouterr().out
        assert "# Sol Ring" in out

    def test_not_found_returns_error(self) -> None:
        with patch(
            "explainmycard.jobs.explain_card.fetch_card_by_exact_name",
            AsyncMock(side_effect=CardNotFoundError("Nope")),
        ):
            assert main(["Nope"]) == 1

    def test_requires_name_or_file(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
