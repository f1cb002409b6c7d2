"""
deckwright services.

Deck classification, statistics, legality, search ranking and decklist
formatting/resolution.
"""

from deckwright.services.deck_classifier import DeckClassification, DeckKind, classify_deck
from deckwright.services.deck_formatter import format_deck_text
from deckwright.services.deck_resolver import (
    CardLookup,
    DeckResolution,
    DeckTextResolver,
    FuzzySubstitution,
    InMemoryCardLookup,
    UnresolvedLine,
    import_deck_text,
)
from deckwright.services.deck_statistics import (
    CATEGORY_ORDER,
    DeckStats,
    calculate_deck_stats,
    card_category,
    group_by_category,
    primary_type_label,
)
from deckwright.services.legality_validator import (
    LegalityResult,
    LegalityViolation,
    ViolationCode,
    can_add_copy,
    validate_deck,
)
from deckwright.services.mana_cost import ManaCostInfo, effective_mana_value, parse_mana_cost
from deckwright.services.search_ranker import (
    RelevanceTier,
    consolidate_duplicates,
    fuzzy_match,
    levenshtein_distance,
    matches_filters,
    name_similarity,
    rank_cards,
    relevance_tier,
    search_cards,
)

__all__ = [
    # Classification
    "DeckClassification",
    "DeckKind",
    "classify_deck",
    # Statistics
    "CATEGORY_ORDER",
    "DeckStats",
    "calculate_deck_stats",
    "card_category",
    "group_by_category",
    "primary_type_label",
    "ManaCostInfo",
    "effective_mana_value",
    "parse_mana_cost",
    # Legality
    "LegalityResult",
    "LegalityViolation",
    "ViolationCode",
    "can_add_copy",
    "validate_deck",
    # Search
    "RelevanceTier",
    "consolidate_duplicates",
    "fuzzy_match",
    "levenshtein_distance",
    "matches_filters",
    "name_similarity",
    "rank_cards",
    "relevance_tier",
    "search_cards",
    # Decklist text
    "format_deck_text",
    "CardLookup",
    "DeckResolution",
    "DeckTextResolver",
    "FuzzySubstitution",
    "InMemoryCardLookup",
    "UnresolvedLine",
    "import_deck_text",
]
