from collections.abc import Callable
from typing import Any

import pytest

from deckwright.models.card import CardFacts
from deckwright.services.deck_resolver import InMemoryCardLookup

CardFactory = Callable[..., CardFacts]


def _make_card(name: str, **overrides: Any) -> CardFacts:
    fields: dict[str, Any] = {
        "id": name.lower().replace(" ", "-"),
        "name": name,
        "mana_cost": "",
        "mana_value": 0.0,
        "colors": (),
        "type_line": "Instant",
        "rarity": "common",
    }
    fields.update(overrides)
    return CardFacts(**fields)


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for CardFacts with sensible defaults."""
    return _make_card


@pytest.fixture
def card_pool() -> dict[str, CardFacts]:
    """Small card database covering the main card shapes."""
    cards = [
        _make_card(
            "Lightning Bolt",
            mana_cost="{R}",
            mana_value=1,
            colors=("R",),
            type_line="Instant",
            set_code="LEB",
            collector_number="163",
        ),
        _make_card(
            "Monastery Swiftspear",
            mana_cost="{R}",
            mana_value=1,
            colors=("R",),
            type_line="Creature — Human Monk",
            rarity="uncommon",
        ),
        _make_card(
            "Counterspell",
            mana_cost="{U}{U}",
            mana_value=2,
            colors=("U",),
            type_line="Instant",
        ),
        _make_card("Negate", mana_cost="{1}{U}", mana_value=2, colors=("U",)),
        _make_card("Abrade", mana_cost="{1}{R}", mana_value=2, colors=("R",)),
        _make_card(
            "Boros Charm",
            mana_cost="{R}{W}",
            mana_value=2,
            colors=("R", "W"),
            type_line="Instant",
        ),
        _make_card(
            "Ornithopter",
            mana_cost="{0}",
            mana_value=0,
            type_line="Artifact Creature — Thopter",
        ),
        _make_card(
            "Atraxa, Praetors' Voice",
            mana_cost="{G}{W}{U}{B}",
            mana_value=4,
            colors=("G", "W", "U", "B"),
            type_line="Legendary Creature — Phyrexian Angel Horror",
            rarity="mythic",
        ),
        _make_card("Mountain", type_line="Basic Land — Mountain"),
        _make_card("Island", type_line="Basic Land — Island"),
        _make_card("Sacred Foundry", type_line="Land — Mountain Plains", rarity="rare"),
    ]
    return {card.name: card for card in cards}


@pytest.fixture
def lookup(card_pool: dict[str, CardFacts]) -> InMemoryCardLookup:
    """In-memory lookup over the card pool."""
    return InMemoryCardLookup(card_pool.values())


@pytest.fixture
def sample_deck_text() -> str:
    """Hand-edited decklist with mixed header styles."""
    return """// Mono-Red Burn
// Format: Modern

Deck:
4 Lightning Bolt (LEB) 163
4 Monastery Swiftspear
20 Mountain

SIDEBOARD
2 Abrade
"""
