"""Tests for mechanic flag detection."""

from typing import Any

from explainmycard.models.card import CardFacts
from explainmycard.models.mechanics import MECHANIC_NAMES
from explainmycard.services.mechanic_detector import MECHANIC_RULES, detect_mechanics


def _card(oracle: str = "", type_line: str = "", **kwargs: Any) -> CardFacts:
    return CardFacts(name="Test Card", oracle_text=oracle, type_line=type_line, **kwargs)


class TestMechanicRules:
    def test_one_rule_per_flag(self) -> None:
        assert tuple(MECHANIC_RULES) == MECHANIC_NAMES

    def test_blank_card_has_no_flags(self, blank_card: CardFacts) -> None:
        assert detect_mechanics(blank_card).active() == []


class TestAristocrats:
    def test_sacrifice_with_drain(self, drain_outlet: CardFacts) -> None:
        mechanics = detect_mechanics(drain_outlet)

        assert mechanics.sacrifice
        assert mechanics.aristocrats

    def test_dies_with_drain(self) -> None:
        card = _card(
            "Whenever Blood Artist or another creature dies, target player loses 1 life "
            "and you gain 1 life.",
            "Creature — Vampire",
        )
        mechanics = detect_mechanics(card)

        assert mechanics.dies
        assert mechanics.aristocrats
        assert mechanics.lifegain

    def test_loses_life_without_amount(self) -> None:
        card = _card("Sacrifice a creature: Each opponent loses life equal to its power.")
        assert detect_mechanics(card).aristocrats

    def test_sacrifice_without_drain(self) -> None:
        mechanics = detect_mechanics(_card("Sacrifice a creature: Draw a card."))

        assert mechanics.sacrifice
        assert not mechanics.aristocrats

    def test_sacrifice_to_gain_control_is_not_a_drain(self) -> None:
        mechanics = detect_mechanics(
            _card("Sacrifice a creature: You gain control of target creature until end of turn.")
        )

        assert mechanics.sacrifice
        assert not mechanics.lifegain
        assert not mechanics.aristocrats

    def test_sacrifice_to_gain_life_is_a_drain(self) -> None:
        mechanics = detect_mechanics(_card("Sacrifice a creature: You gain 2 life."))

        assert mechanics.lifegain
        assert mechanics.aristocrats

    def test_drain_without_death_or_sacrifice(self) -> None:
        mechanics = detect_mechanics(_card("Each opponent loses 2 life."))
        assert not mechanics.aristocrats


class TestTribal:
    def test_creature_with_subtype(self) -> None:
        assert detect_mechanics(_card("", "Creature — Elf Druid")).tribal

    def test_creature_without_subtype(self) -> None:
        assert not detect_mechanics(_card("", "Creature")).tribal

    def test_hyphen_separator(self) -> None:
        assert detect_mechanics(_card("", "Creature - Goblin")).tribal

    def test_noncreature_subtype(self) -> None:
        assert not detect_mechanics(_card("", "Artifact — Equipment")).tribal


class TestManaSink:
    def test_x_in_mana_cost(self) -> None:
        card = _card("Deal X damage to any target.", "Sorcery", mana_cost="{X}{R}")
        assert detect_mechanics(card).mana_sink

    def test_paid_activated_draw(self) -> None:
        assert detect_mechanics(_card("{2}, {T}: Draw a card.")).mana_sink

    def test_tap_only_activation_is_not_a_sink(self) -> None:
        assert not detect_mechanics(_card("{T}: Draw a card.")).mana_sink

    def test_paid_activation_without_sink_effect(self) -> None:
        assert not detect_mechanics(_card("{1}: This creature gets +1/+0.")).mana_sink


class TestVoltron:
    def test_equipment_for_creatures(self) -> None:
        card = _card("Equipped creature gets +2/+2.\nEquip {2}", "Artifact — Equipment")
        mechanics = detect_mechanics(card)

        assert mechanics.equipment
        assert mechanics.voltron

    def test_creature_aura(self) -> None:
        card = _card("Enchant creature\nEnchanted creature gets +1/+1.", "Enchantment — Aura")
        mechanics = detect_mechanics(card)

        assert mechanics.aura
        assert mechanics.voltron

    def test_equipment_without_creature(self) -> None:
        card = _card("Equipped permanent has hexproof.", "Artifact — Equipment")
        mechanics = detect_mechanics(card)

        assert mechanics.equipment
        assert not mechanics.voltron


class TestOtherFlags:
    def test_treasure_and_tokens_coexist(self) -> None:
        mechanics = detect_mechanics(_card("Create a Treasure token."))

        assert mechanics.tokens
        assert mechanics.treasure

    def test_multi_symbol_mana_is_big_mana(self, sol_ring: CardFacts) -> None:
        mechanics = detect_mechanics(sol_ring)

        assert mechanics.big_mana
        assert mechanics.artifacts
        assert not mechanics.mana_sink

    def test_single_symbol_mana_is_not_big_mana(self) -> None:
        assert not detect_mechanics(_card("{T}: Add {G}.", "Land — Forest")).big_mana

    def test_reanimate_and_graveyard(self) -> None:
        card = _card("Return target creature card from your graveyard to the battlefield.")
        mechanics = detect_mechanics(card)

        assert mechanics.reanimate
        assert mechanics.graveyard

    def test_self_mill(self) -> None:
        assert detect_mechanics(_card("Mill three cards.")).self_mill
        assert detect_mechanics(_card("Surveil 2.")).self_mill

    def test_counters(self) -> None:
        mechanics = detect_mechanics(
            _card("Put a +1/+1 counter on target creature. Proliferate.")
        )

        assert mechanics.counters
        assert mechanics.plus_counters
        assert mechanics.proliferate

    def test_spellslinger_from_keyword(self) -> None:
        card = _card("", "Creature — Human Monk", keywords=("Prowess",))
        assert detect_mechanics(card).spellslinger

    def test_blink(self) -> None:
        card = _card("Exile target creature you control, then return it to the battlefield.")
        assert detect_mechanics(card).blink

    def test_etb_via_enters(self) -> None:
        card = _card("When this creature enters, draw a card.", "Creature — Bird")
        assert detect_mechanics(card).etb

    def test_planeswalker(self) -> None:
        card = _card("+1: Draw a card.", "Legendary Planeswalker — Jace")
        assert detect_mechanics(card).planeswalker

    def test_deterministic(self, drain_outlet: CardFacts) -> None:
        assert detect_mechanics(drain_outlet) == detect_mechanics(drain_outlet)
