"""
deckwright: deck validation and card search ranking for Magic: The Gathering.

Pure computation over card facts supplied by the caller. No I/O.
"""

from deckwright.models import (
    CardFacts,
    Deck,
    DeckEntry,
    DeckTextLine,
    FormatRule,
    KnownError,
    MalformedDeckTextError,
    SearchQuery,
    UnknownFormatError,
    Zone,
    get_format_rule,
)
from deckwright.parsers import parse_deck_text
from deckwright.services import (
    calculate_deck_stats,
    classify_deck,
    format_deck_text,
    import_deck_text,
    rank_cards,
    search_cards,
    validate_deck,
)

__all__ = [
    "CardFacts",
    "Deck",
    "DeckEntry",
    "DeckTextLine",
    "FormatRule",
    "KnownError",
    "MalformedDeckTextError",
    "SearchQuery",
    "UnknownFormatError",
    "Zone",
    "calculate_deck_stats",
    "classify_deck",
    "format_deck_text",
    "get_format_rule",
    "import_deck_text",
    "parse_deck_text",
    "rank_cards",
    "search_cards",
    "validate_deck",
]
