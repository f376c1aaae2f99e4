import json
from pathlib import Path
from typing import Any

import pytest

from explainmycard.models import failure as failure_module
from explainmycard.models.card import CardFacts

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def sol_ring_payload() -> dict[str, Any]:
    """Scryfall card object for Sol Ring."""
    return load_fixture("sol_ring.json")


@pytest.fixture
def werewolf_payload() -> dict[str, Any]:
    """Scryfall card object for a two-faced card."""
    return load_fixture("two_faced.json")


@pytest.fixture
def sol_ring() -> CardFacts:
    return CardFacts(
        name="Sol Ring",
        mana_cost="{1}",
        type_line="Artifact",
        oracle_text="{T}: Add {C}{C}.",
        mana_value=1.0,
        legalities=(("commander", "legal"), ("modern", "not_legal")),
    )


@pytest.fixture
def blank_card() -> CardFacts:
    """A card with no text at all."""
    return CardFacts(name="Mystery Card")


@pytest.fixture
def drain_outlet() -> CardFacts:
    """Sacrifice outlet that drains each opponent."""
    return CardFacts(
        name="Drain Altar",
        mana_cost="{1}{B}",
        type_line="Artifact",
        oracle_text="Sacrifice a creature: Each opponent loses 1 life.",
        mana_value=2.0,
    )


@pytest.fixture
def lightning_bolt() -> CardFacts:
    return CardFacts(
        name="Lightning Bolt",
        mana_cost="{R}",
        type_line="Instant",
        oracle_text="Lightning Bolt deals 3 damage to any target.",
        mana_value=1.0,
    )


@pytest.fixture
def token_maker() -> CardFacts:
    return CardFacts(
        name="Raise the Alarm",
        mana_cost="{1}{W}",
        type_line="Instant",
        oracle_text="Create two 1/1 white Soldier creature tokens.",
        mana_value=2.0,
    )
