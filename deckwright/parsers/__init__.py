from deckwright.parsers.deck_text import (
    SECTION_HEADERS,
    DeckTextParser,
    ParsedDeckText,
    parse_deck_text,
)

__all__ = [
    "SECTION_HEADERS",
    "DeckTextParser",
    "ParsedDeckText",
    "parse_deck_text",
]
