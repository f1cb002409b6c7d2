"""
Plain-text decklist formatter.

THIS MODULE HANDLES OUTPUT RENDERING ONLY.

Output is always readable by deckwright.parsers.deck_text:

    // Mono-Red Burn
    // Format: Modern

    Deck
    // Creatures
    4 Monastery Swiftspear
    // Spells
    4 Lightning Bolt
    // Lands
    20 Mountain

    Sideboard
    2 Abrade
"""

from __future__ import annotations

from typing import Literal

from deckwright.models.deck import Deck, DeckEntry, Zone
from deckwright.services.deck_statistics import group_by_category

SideboardStyle = Literal["header", "prefix"]


def format_deck_text(
    deck: Deck,
    sideboard_style: SideboardStyle = "header",
    include_printing: bool = False,
) -> str:
    """
    Format a deck as plain text.

    Args:
        deck: Deck to render
        sideboard_style: "header" writes a Sideboard section; "prefix" writes
            each sideboard card as "SB: <qty> <name>"
        include_printing: Append "(SET) number" where the printing is known

    Returns:
        Decklist text ending with a newline
    """
    lines: list[str] = []

    # Free text must stay inside comments or it would parse as card lines
    lines.extend(_comment_lines(deck.name))
    lines.extend(_comment_lines(deck.description))
    lines.append(f"// Format: {' '.join(deck.format.split())}")

    commanders = deck.entries_in(Zone.COMMANDER)
    if commanders:
        lines.append("")
        lines.append("Commander")
        lines.extend(_format_line(entry, include_printing) for entry in _by_name(commanders))

    main = deck.entries_in(Zone.MAIN)
    if main:
        lines.append("")
        lines.append("Deck")
        for category, entries in group_by_category(main).items():
            lines.append(f"// {category}")
            lines.extend(_format_line(entry, include_printing) for entry in entries)

    sideboard = deck.entries_in(Zone.SIDEBOARD)
    if sideboard:
        lines.append("")
        sideboard_lines = [_format_line(entry, include_printing) for entry in _by_name(sideboard)]
        if sideboard_style == "prefix":
            lines.extend(f"SB: {line}" for line in sideboard_lines)
        else:
            lines.append("Sideboard")
            lines.extend(sideboard_lines)

    return "\n".join(lines) + "\n"


def _comment_lines(text: str) -> list[str]:
    return [f"// {part.strip()}" for part in text.splitlines() if part.strip()]


def _by_name(entries: list[DeckEntry]) -> list[DeckEntry]:
    return sorted(entries, key=lambda entry: entry.card.name.lower())


def _format_line(entry: DeckEntry, include_printing: bool = False) -> str:
    """Format a single card line."""
    line = f"{entry.quantity} {entry.card.name}"
    card = entry.card
    if include_printing and card.set_code and card.collector_number:
        line += f" ({card.set_code}) {card.collector_number}"
    return line
