"""
Plain-text decklist parser.

THIS MODULE HANDLES SYNTAX ONLY.

It reads hand-edited decklists (Arena, MTGO, Moxfield exports, typed lists)
into zone-tagged card requests. It does not look cards up: raw names and
set hints go to deck_resolver for that.

Tolerated:
- Blank lines, trailing whitespace, "//" comment lines
- Section headers in any case, with or without a trailing colon
- Missing headers (cards default to the main deck)
- "SB: 2 Negate" sideboard lines
- "4x Lightning Bolt" quantities
- "(SET) 123" printing hints, "*F*" finish markers, "#12" and "2/2" decorations

Lines that match none of these are skipped, not errors.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from deckwright.models.deck import DeckTextLine, Zone
from deckwright.models.failure import MalformedDeckTextError

logger = logging.getLogger(__name__)

# Section headers (lowercase, colon removed) -> zone
SECTION_HEADERS: dict[str, Zone] = {
    "commander": Zone.COMMANDER,
    "maindeck": Zone.MAIN,
    "main deck": Zone.MAIN,
    "main": Zone.MAIN,
    "deck": Zone.MAIN,
    "sideboard": Zone.SIDEBOARD,
    "side board": Zone.SIDEBOARD,
    "side": Zone.SIDEBOARD,
    "sb": Zone.SIDEBOARD,
    # Arena exports list the companion in its own section; it lives in the sideboard
    "companion": Zone.SIDEBOARD,
}

COMMENT_PREFIX = "//"

# Pattern: "4 Lightning Bolt" or "4x Lightning Bolt"
# Groups: (quantity, remainder)
_CARD_LINE_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

# Pattern: "Lightning Bolt (LEB) 163", collector numbers may be "290a", "123s"
# Groups: (name, set_code, collector_number)
_PRINTING_PATTERN = re.compile(r"^(.+?)\s*\(([A-Za-z0-9]{2,6})\)\s*(\S+)\s*$")

# Pattern: "SB: 2 Negate"
_SIDEBOARD_PREFIX_PATTERN = re.compile(r"^sb:\s*(.+)$", re.IGNORECASE)

# Pattern: "Ajani (AER) 185 *F*", foil and etched markers from Arena/Moxfield
_FINISH_TAG_PATTERN = re.compile(r"\s*\*[FE]\*\s*$", re.IGNORECASE)

# Best-effort cleanup when no printing hint is present
_NUMBER_TAG_PATTERN = re.compile(r"\s*#\d+.*$")
_POWER_TOUGHNESS_PATTERN = re.compile(r"\s*\d+/\d+\s*$")


@dataclass
class ParsedDeckText:
    """
    Parsed decklist. NOT YET RESOLVED.

    Attributes:
        lines: Card requests in source order
        skipped_lines: (line_number, content) of lines that were not understood
    """

    lines: list[DeckTextLine] = field(default_factory=list)
    skipped_lines: list[tuple[int, str]] = field(default_factory=list)

    def in_section(self, section: Zone) -> list[DeckTextLine]:
        """Card requests read under one section."""
        return [line for line in self.lines if line.section == section]


class DeckTextParser:
    """
    Parser for plain-text decklists.

    Section headers take effect for the lines after them. The initial
    section is the main deck.

    Usage:
        parser = DeckTextParser()
        parsed = parser.parse(raw_text)
        # parsed.lines still need resolving to cards
    """

    def parse(self, raw_input: str) -> ParsedDeckText:
        """
        Parse decklist text.

        Args:
            raw_input: Decklist text

        Returns:
            ParsedDeckText with card requests and skipped lines

        Raises:
            MalformedDeckTextError: If the input is not text
        """
        if not isinstance(raw_input, str):
            raise MalformedDeckTextError(f"Expected text, got {type(raw_input).__name__}")
        if "\x00" in raw_input:
            raise MalformedDeckTextError("Input contains NUL bytes; it looks like a binary file")

        result = ParsedDeckText()
        current_section = Zone.MAIN

        for line_number, line in enumerate(raw_input.splitlines(), 1):
            stripped = line.strip()

            # Skip empty lines and comments
            if not stripped or stripped.startswith(COMMENT_PREFIX):
                continue

            header = self._section_for_header(stripped)
            if header is not None:
                current_section = header
                continue

            section = current_section
            prefixed = _SIDEBOARD_PREFIX_PATTERN.match(stripped)
            if prefixed:
                section = Zone.SIDEBOARD
                stripped = prefixed.group(1).strip()

            entry = self._parse_card_line(stripped, section, line_number)
            if entry is None:
                logger.debug("Skipping line %d: %r", line_number, stripped)
                result.skipped_lines.append((line_number, stripped))
                continue

            result.lines.append(entry)

        return result

    def _section_for_header(self, line: str) -> Zone | None:
        """Zone named by a section header line, or None if it is not one."""
        name = line.lower()
        if name.endswith(":"):
            name = name[:-1].strip()
        return SECTION_HEADERS.get(name)

    def _parse_card_line(self, line: str, section: Zone, line_number: int) -> DeckTextLine | None:
        """
        Parse "<quantity> <name>" with optional decorations.

        Returns None if the line is not a card line.
        """
        match = _CARD_LINE_PATTERN.match(line)
        if not match:
            return None

        quantity = int(match.group(1))
        if quantity < 1:
            return None

        remainder = _FINISH_TAG_PATTERN.sub("", match.group(2).strip())
        set_code: str | None = None
        collector_number: str | None = None

        printing = _PRINTING_PATTERN.match(remainder)
        if printing:
            name, set_code, collector_number = printing.groups()
            name = name.strip()
            set_code = set_code.upper()
        else:
            name = _NUMBER_TAG_PATTERN.sub("", remainder)
            name = _POWER_TOUGHNESS_PATTERN.sub("", name).strip()

        if not name:
            return None

        return DeckTextLine(
            quantity=quantity,
            raw_name=name,
            section=section,
            set_code_hint=set_code,
            collector_number_hint=collector_number,
            line_number=line_number,
        )


def parse_deck_text(raw_input: str) -> list[DeckTextLine]:
    """
    Parse decklist text into card requests.

    Args:
        raw_input: Decklist text

    Returns:
        Card requests in source order
    """
    return DeckTextParser().parse(raw_input).lines
