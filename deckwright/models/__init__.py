from deckwright.models.card import CardFacts
from deckwright.models.deck import Deck, DeckEntry, DeckTextLine, SearchQuery, Zone
from deckwright.models.failure import (
    FailureDetail,
    FailureKind,
    KnownError,
    MalformedDeckTextError,
    UnknownFormatError,
)
from deckwright.models.format_rules import (
    FORMAT_RULES,
    FormatName,
    FormatRule,
    available_formats,
    get_format_rule,
    is_commander_format,
)

__all__ = [
    "CardFacts",
    "Deck",
    "DeckEntry",
    "DeckTextLine",
    "FORMAT_RULES",
    "FailureDetail",
    "FailureKind",
    "FormatName",
    "FormatRule",
    "KnownError",
    "MalformedDeckTextError",
    "SearchQuery",
    "UnknownFormatError",
    "Zone",
    "available_formats",
    "get_format_rule",
    "is_commander_format",
]
