"""
Deck statistics.

Computes totals, color and type breakdowns, and the mana curve for the main
deck. Sideboard and commander entries are ignored: they are not part of the
library the player draws from.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from deckwright.config import COLOR_SYMBOLS, COLORLESS
from deckwright.models.deck import DeckEntry, Zone
from deckwright.services.mana_cost import effective_mana_value

# Display groups for a decklist, in output order
CATEGORY_ORDER = (
    "Creatures",
    "Spells",
    "Artifacts",
    "Enchantments",
    "Planeswalkers",
    "Lands",
    "Other",
)


@dataclass
class DeckStats:
    """Computed statistics for a main deck."""

    total_cards: int = 0
    avg_cmc: float = 0.0
    color_distribution: dict[str, int] = field(default_factory=dict)
    type_distribution: dict[str, int] = field(default_factory=dict)
    cmc_distribution: dict[int, int] = field(default_factory=dict)


def calculate_deck_stats(entries: Iterable[DeckEntry]) -> DeckStats:
    """
    Calculate statistics for the main deck.

    Args:
        entries: Deck entries; only main-zone entries are counted

    Returns:
        DeckStats. An empty deck yields zero totals and an average of 0.
    """
    color_distribution: dict[str, int] = {symbol: 0 for symbol in COLOR_SYMBOLS}
    color_distribution[COLORLESS] = 0
    type_distribution: dict[str, int] = {}
    cmc_distribution: dict[int, int] = {}

    total_cards = 0
    curve_cards = 0
    curve_total = 0

    for entry in entries:
        if entry.zone != Zone.MAIN:
            continue

        card = entry.card
        quantity = entry.quantity
        total_cards += quantity

        # Multicolor cards count once per color
        if card.colors:
            for color in card.colors:
                color_distribution[color] = color_distribution.get(color, 0) + quantity
        else:
            color_distribution[COLORLESS] += quantity

        primary_type = primary_type_label(card.type_line)
        type_distribution[primary_type] = type_distribution.get(primary_type, 0) + quantity

        # Lands and other costless cards stay off the curve unless they carry a cost
        has_mana_cost = bool(card.mana_cost and card.mana_cost.strip())
        if has_mana_cost or card.mana_value > 0:
            cmc = effective_mana_value(card)
            cmc_distribution[cmc] = cmc_distribution.get(cmc, 0) + quantity
            curve_total += cmc * quantity
            curve_cards += quantity

    return DeckStats(
        total_cards=total_cards,
        avg_cmc=curve_total / curve_cards if curve_cards > 0 else 0.0,
        color_distribution=color_distribution,
        type_distribution=type_distribution,
        cmc_distribution=dict(sorted(cmc_distribution.items())),
    )


def primary_type_label(type_line: str) -> str:
    """
    Bucket label for a type line.

    The first word of the type line, except that every land type line
    ("Land", "Basic Land — Plains", "Land — Gate") collapses to "Land".
    """
    if not type_line.strip():
        return "Unknown"
    if "land" in type_line.lower():
        return "Land"
    return type_line.split()[0]


def card_category(type_line: str) -> str:
    """Decklist display group for a card, checked in priority order."""
    type_lower = type_line.lower()
    if "creature" in type_lower:
        return "Creatures"
    if "artifact" in type_lower:
        return "Artifacts"
    if "enchantment" in type_lower:
        return "Enchantments"
    if "planeswalker" in type_lower:
        return "Planeswalkers"
    if "land" in type_lower:
        return "Lands"
    if "instant" in type_lower or "sorcery" in type_lower:
        return "Spells"
    return "Other"


def group_by_category(entries: Iterable[DeckEntry]) -> dict[str, list[DeckEntry]]:
    """
    Group entries into display categories.

    Returns:
        Non-empty groups in CATEGORY_ORDER, entries sorted by name within each
    """
    groups: dict[str, list[DeckEntry]] = {category: [] for category in CATEGORY_ORDER}
    for entry in entries:
        groups[card_category(entry.card.type_line)].append(entry)

    return {
        category: sorted(grouped, key=lambda e: e.card.name.lower())
        for category, grouped in groups.items()
        if grouped
    }
