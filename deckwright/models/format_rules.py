"""
Format Rule Table: Static Deck Construction Constraints.

INVARIANT: Every validator call takes an explicit FormatRule.
Callers resolve a format name with get_format_rule() first. Unknown names
raise UnknownFormatError; there is no fallback to Standard.

A FormatRule captures:
1. Deck size bounds (max may be unbounded)
2. Copy limit per non-basic-land card (may be unbounded)
3. Whether a commander is required
4. Whether a sideboard is allowed, and its cap
"""

from dataclasses import dataclass
from enum import Enum

from deckwright.config import DEFAULT_SIDEBOARD_SIZE
from deckwright.models.failure import UnknownFormatError


class FormatName(str, Enum):
    """Supported formats."""

    STANDARD = "standard"
    PIONEER = "pioneer"
    MODERN = "modern"
    LEGACY = "legacy"
    VINTAGE = "vintage"
    PAUPER = "pauper"
    COMMANDER = "commander"
    BRAWL = "brawl"
    LIMITED = "limited"


@dataclass(frozen=True, slots=True)
class FormatRule:
    """
    Construction constraints for one format.

    Attributes:
        name: Display name (e.g., "Modern")
        min_size: Minimum main deck size (commander counted where required)
        max_size: Maximum deck size, None when unbounded
        max_copies: Copies allowed per non-basic-land card, None when unbounded
        requires_commander: True for commander-style formats
        allows_sideboard: True if a sideboard may be registered
        sideboard_max_size: Sideboard cap, None when unbounded
    """

    name: str
    min_size: int
    max_size: int | None
    max_copies: int | None
    requires_commander: bool = False
    allows_sideboard: bool = True
    sideboard_max_size: int | None = DEFAULT_SIDEBOARD_SIZE

    @property
    def description(self) -> str:
        """One-sentence summary of the construction rules."""
        if self.max_size is not None and self.max_size == self.min_size:
            size = f"exactly {self.min_size} cards"
        else:
            size = f"a minimum of {self.min_size} cards"
        if self.requires_commander:
            size += ", including your Commander"

        if self.max_copies is None:
            copies = "any number of copies of each card"
        elif self.max_copies == 1:
            copies = "only 1 copy of each card except basic lands"
        else:
            copies = f"a maximum of {self.max_copies} copies of any card except basic lands"

        return f"{self.name} requires {size}, with {copies}."


def _constructed(name: str) -> FormatRule:
    return FormatRule(name=name, min_size=60, max_size=None, max_copies=4)


FORMAT_RULES: dict[FormatName, FormatRule] = {
    FormatName.STANDARD: _constructed("Standard"),
    FormatName.PIONEER: _constructed("Pioneer"),
    FormatName.MODERN: _constructed("Modern"),
    FormatName.LEGACY: _constructed("Legacy"),
    FormatName.VINTAGE: _constructed("Vintage"),
    FormatName.PAUPER: _constructed("Pauper"),
    FormatName.COMMANDER: FormatRule(
        name="Commander",
        min_size=100,
        max_size=100,
        max_copies=1,
        requires_commander=True,
        allows_sideboard=False,
        sideboard_max_size=0,
    ),
    FormatName.BRAWL: FormatRule(
        name="Brawl",
        min_size=60,
        max_size=60,
        max_copies=1,
        requires_commander=True,
        allows_sideboard=False,
        sideboard_max_size=0,
    ),
    # Limited decks are built from a pool; the rest of the pool is the sideboard
    FormatName.LIMITED: FormatRule(
        name="Limited",
        min_size=40,
        max_size=None,
        max_copies=None,
        sideboard_max_size=None,
    ),
}


def available_formats() -> list[str]:
    """Display names of all supported formats, in table order."""
    return [rule.name for rule in FORMAT_RULES.values()]


def is_commander_format(rule: FormatRule) -> bool:
    """True for formats built around a commander (Commander, Brawl)."""
    return rule.requires_commander


def get_format_rule(format_name: str) -> FormatRule:
    """
    Look up the construction rules for a format.

    Matching is case-insensitive and ignores surrounding whitespace.

    Args:
        format_name: Format name (e.g., "Modern", "commander")

    Returns:
        The format's FormatRule

    Raises:
        UnknownFormatError: If the format is not supported
    """
    try:
        key = FormatName(format_name.strip().lower())
    except ValueError:
        raise UnknownFormatError(format_name, available_formats()) from None
    return FORMAT_RULES[key]
