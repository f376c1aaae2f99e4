"""Tests for the HTTP API."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from explainmycard.config import Settings
from explainmycard.main import app
from explainmycard.models.card import CardFacts
from explainmycard.services.ai_explainer import AIExplainer
from explainmycard.services.card_lookup import CardLookupError, CardNotFoundError

SOL_RING_BODY = {
    "card": {
        "name": "Sol Ring",
        "mana_cost": "{1}",
        "type_line": "Artifact",
        "oracle_text": "{T}: Add {C}{C}.",
        "cmc": 1,
        "legalities": {"commander": "legal"},
    }
}


@pytest.fixture(autouse=True)
def no_ai():
    """Keep the shared explainer offline for API tests."""
    with patch(
        "explainmycard.services.card_report.ai_explainer",
        AIExplainer(config=Settings(ai_enabled=False)),
    ):
        yield


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "ai_enabled" in data


class TestExplainEndpoint:
    async def test_get_describes_route(self, client: AsyncClient) -> None:
        response = await client.get("/explain")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["methods"] == ["POST"]
        assert data["example_body"]["card"]["name"] == "Sol Ring"

    async def test_explain_card(self, client: AsyncClient) -> None:
        response = await client.post("/explain", json=SOL_RING_BODY)

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "success"
        data = body["data"]
        assert data["mode"] == "explain"
        assert data["card_name"] == "Sol Ring"
        assert data["badge"]["label"] == "Ramp · Early"
        assert data["source"] == "synthesized"
        assert data["ai_text"] is None
        titles = [s["title"] for s in data["document"]["sections"]]
        assert titles == [
            "What it does",
            "Why people play it",
            "Common play patterns",
            "Rules notes/gotchas",
            "Quick tips",
            "Example play",
        ]

    async def test_synergy_mode(self, client: AsyncClient) -> None:
        response = await client.post("/explain", json={**SOL_RING_BODY, "mode": "synergies"})

        data = response.json()["data"]
        assert data["mode"] == "synergies"
        assert data["document"]["kind"] == "synergies"
        themes = data["document"]["sections"][0]["bullets"]
        assert "Ramp / big mana" in themes

    async def test_unknown_mode_means_explain(self, client: AsyncClient) -> None:
        response = await client.post("/explain", json={**SOL_RING_BODY, "mode": "poetry"})
        assert response.json()["data"]["mode"] == "explain"

    async def test_flat_legacy_body(self, client: AsyncClient) -> None:
        response = await client.post(
            "/explain",
            json={
                "cardName": "Lightning Bolt",
                "typeLine": "Instant",
                "oracleText": "Lightning Bolt deals 3 damage to any target.",
                "cmc": 1,
            },
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["card_name"] == "Lightning Bolt"
        assert "removal" in data["tags"]
        assert data["badge"]["role"] == "Removal"

    async def test_missing_name(self, client: AsyncClient) -> None:
        response = await client.post("/explain", json={"oracleText": "Draw a card."})

        assert response.status_code == 400
        body = response.json()
        assert body["outcome"] == "known_failure"
        assert body["data"] is None
        assert body["failure"]["kind"] == "missing_required"
        assert "oracleText" in body["failure"]["detail"]


class TestCardEndpoint:
    async def test_card_report(self, client: AsyncClient) -> None:
        card = CardFacts(
            name="Sol Ring",
            mana_cost="{1}",
            type_line="Artifact",
            oracle_text="{T}: Add {C}{C}.",
            mana_value=1.0,
        )
        with patch(
            "explainmycard.api.explain.fetch_card_by_exact_name",
            AsyncMock(return_value=card),
        ):
            response = await client.get("/cards/Sol Ring")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Sol Ring"
        assert data["manual"]["title"] == "Sol Ring"
        assert data["show_synthesized"] is True
        assert any(s["term"] == "{t}" for s in data["oracle_segments"])

    async def test_prefer_manual(self, client: AsyncClient) -> None:
        card = CardFacts(name="Sol Ring", oracle_text="{T}: Add {C}{C}.", mana_value=1.0)
        with patch(
            "explainmycard.api.explain.fetch_card_by_exact_name",
            AsyncMock(return_value=card),
        ):
            response = await client.get("/cards/Sol Ring", params={"prefer_manual": "true"})

        assert response.json()["data"]["show_synthesized"] is False

    async def test_card_not_found(self, client: AsyncClient) -> None:
        with patch(
            "explainmycard.api.explain.fetch_card_by_exact_name",
            AsyncMock(side_effect=CardNotFoundError("Sol Rnig")),
        ):
            response = await client.get("/cards/Sol Rnig")

        assert response.status_code == 404
        body = response.json()
        assert body["outcome"] == "known_failure"
        assert body["data"] is None
        assert body["failure"]["kind"] == "not_found"

    async def test_lookup_unavailable(self, client: AsyncClient) -> None:
        with patch(
            "explainmycard.api.explain.fetch_card_by_exact_name",
            AsyncMock(side_effect=CardLookupError("Sol Ring", "HTTP 503")),
        ):
            response = await client.get("/cards/Sol Ring")

        assert response.status_code == 502
        assert response.json()["failure"]["kind"] == "external_api_error"


class TestAnnotateEndpoint:
    async def test_segments(self, client: AsyncClient) -> None:
        response = await client.post("/annotate/", json={"text": "Flying\nFlying"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["open_id"] is None
        assert [s["occurrence_id"] for s in data["segments"] if s["term"]] == [
            "flying:0:0",
            "flying:1:0",
        ]

    async def test_click_opens(self, client: AsyncClient) -> None:
        response = await client.post(
            "/annotate/", json={"text": "Flying\nFlying", "click": "flying:1:0"}
        )
        assert response.json()["data"]["open_id"] == "flying:1:0"

    async def test_click_other_replaces(self, client: AsyncClient) -> None:
        response = await client.post(
            "/annotate/",
            json={"text": "Flying\nFlying", "open_id": "flying:0:0", "click": "flying:1:0"},
        )
        assert response.json()["data"]["open_id"] == "flying:1:0"

    async def test_click_open_closes(self, client: AsyncClient) -> None:
        response = await client.post(
            "/annotate/",
            json={"text": "Flying", "open_id": "flying:0:0", "click": "flying:0:0"},
        )
        assert response.json()["data"]["open_id"] is None

    async def test_escape_closes(self, client: AsyncClient) -> None:
        response = await client.post(
            "/annotate/", json={"text": "Flying", "open_id": "flying:0:0", "key": "Escape"}
        )
        assert response.json()["data"]["open_id"] is None

    async def test_outside_click_closes(self, client: AsyncClient) -> None:
        response = await client.post(
            "/annotate/", json={"text": "Flying", "open_id": "flying:0:0", "outside_click": True}
        )
        assert response.json()["data"]["open_id"] is None

    async def test_stale_open_id_dropped(self, client: AsyncClient) -> None:
        response = await client.post(
            "/annotate/", json={"text": "Haste", "open_id": "flying:0:0"}
        )
        assert response.json()["data"]["open_id"] is None
