"""
Deck classification.

Labels a deck as best-of-one, best-of-three, or commander-style for display
and metadata. Classification never gates legality; see legality_validator.
"""

from dataclasses import dataclass
from enum import Enum

from deckwright.models.deck import Deck, DeckEntry, Zone
from deckwright.models.format_rules import FormatRule, is_commander_format


class DeckKind(str, Enum):
    """Play style a deck is built for."""

    SINGLE_GAME = "bo1"
    BEST_OF_THREE = "bo3"
    COMMANDER_STYLE = "commander"


@dataclass(frozen=True, slots=True)
class DeckClassification:
    """
    Result of classifying a deck.

    Attributes:
        kind: Play style
        label: Format label to show (e.g., "Modern", "Brawl")
        detail: Human-readable description
        has_commander: True if a commander is assigned or inferred
        commander_inferred: True if the commander was guessed from the main deck
    """

    kind: DeckKind
    label: str
    detail: str
    has_commander: bool = False
    commander_inferred: bool = False


def classify_deck(deck: Deck, rule: FormatRule) -> DeckClassification:
    """
    Classify a deck for its format.

    Args:
        deck: Deck to classify
        rule: The deck's format rules

    Returns:
        DeckClassification for display
    """
    has_assigned = bool(deck.entries_in(Zone.COMMANDER))
    commander_format = is_commander_format(rule)

    # Only commander formats guess a commander from legendary main-deck cards
    inferred = (
        commander_format
        and not has_assigned
        and any(_could_be_commander(entry) for entry in deck.entries_in(Zone.MAIN))
    )
    has_commander = has_assigned or inferred

    if commander_format or has_commander:
        label = rule.name if commander_format else "Commander"
        if has_commander:
            detail = f"{label} format with legendary commander"
        else:
            detail = f"{label} format (add a commander)"
        return DeckClassification(
            kind=DeckKind.COMMANDER_STYLE,
            label=label,
            detail=detail,
            has_commander=has_commander,
            commander_inferred=inferred,
        )

    sideboard_count = deck.zone_total(Zone.SIDEBOARD)
    if sideboard_count > 0:
        noun = "card" if sideboard_count == 1 else "cards"
        return DeckClassification(
            kind=DeckKind.BEST_OF_THREE,
            label=rule.name,
            detail=f"{rule.name} Best of 3 (has {sideboard_count} sideboard {noun})",
        )

    return DeckClassification(
        kind=DeckKind.SINGLE_GAME,
        label=rule.name,
        detail=f"{rule.name} Best of 1 (no sideboard)",
    )


def _could_be_commander(entry: DeckEntry) -> bool:
    type_lower = entry.card.type_line.lower()
    return "legendary" in type_lower and ("creature" in type_lower or "planeswalker" in type_lower)
