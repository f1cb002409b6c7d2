from dataclasses import dataclass, field
from enum import Enum

from deckwright.models.card import CardFacts


class Zone(str, Enum):
    """Disjoint partitions of a deck."""

    MAIN = "main"
    SIDEBOARD = "sideboard"
    COMMANDER = "commander"


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """
    A card in one zone of a deck.

    Attributes:
        card: The card's facts
        quantity: Number of copies (at least 1)
        zone: Which part of the deck the copies live in
    """

    card: CardFacts
    quantity: int
    zone: Zone = Zone.MAIN

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(
                f"Quantity must be at least 1, got {self.quantity} for {self.card.name}"
            )

    @property
    def key(self) -> tuple[str, Zone]:
        """Composite identity of an entry within a deck."""
        return (self.card.id, self.zone)


@dataclass
class Deck:
    """
    A deck being built for a format.

    Entries keep insertion order. A (card id, zone) pair appears at most once;
    adding the same card to the same zone again raises its quantity.

    Classification, statistics and legality are derived from the entries on
    demand and never stored here.

    Attributes:
        format: Format name (e.g., "Modern", "Commander")
        entries: Cards in the deck, across all zones
        name: Deck name
        description: Free-text description
    """

    format: str
    entries: list[DeckEntry] = field(default_factory=list)
    name: str = ""
    description: str = ""

    @classmethod
    def from_entries(
        cls,
        format: str,
        entries: list[DeckEntry],
        name: str = "",
        description: str = "",
    ) -> "Deck":
        """Build a deck, merging entries that share a (card id, zone) key."""
        deck = cls(format=format, name=name, description=description)
        for entry in entries:
            deck.add(entry.card, entry.zone, entry.quantity)
        return deck

    def add(self, card: CardFacts, zone: Zone = Zone.MAIN, quantity: int = 1) -> DeckEntry:
        """
        Add copies of a card to a zone.

        Returns:
            The resulting entry for (card, zone)
        """
        for index, entry in enumerate(self.entries):
            if entry.key == (card.id, zone):
                merged = DeckEntry(card=entry.card, quantity=entry.quantity + quantity, zone=zone)
                self.entries[index] = merged
                return merged

        added = DeckEntry(card=card, quantity=quantity, zone=zone)
        self.entries.append(added)
        return added

    def remove(self, card_id: str, zone: Zone = Zone.MAIN, quantity: int = 1) -> None:
        """Remove copies of a card from a zone, dropping the entry at zero."""
        for index, entry in enumerate(self.entries):
            if entry.key != (card_id, zone):
                continue
            remaining = entry.quantity - quantity
            if remaining > 0:
                self.entries[index] = DeckEntry(card=entry.card, quantity=remaining, zone=zone)
            else:
                del self.entries[index]
            return

    def entries_in(self, zone: Zone) -> list[DeckEntry]:
        """Entries belonging to one zone, in deck order."""
        return [entry for entry in self.entries if entry.zone == zone]

    def zone_total(self, zone: Zone) -> int:
        """Total copies in a zone."""
        return sum(entry.quantity for entry in self.entries if entry.zone == zone)

    def counts(self) -> dict[tuple[str, Zone], int]:
        """Deck as a multiset {(card id, zone): quantity}."""
        return {entry.key: entry.quantity for entry in self.entries}


@dataclass(frozen=True, slots=True)
class DeckTextLine:
    """
    One card request read from a plain-text decklist.

    Not yet resolved to a card: raw_name is whatever the text said.

    Attributes:
        quantity: Number of copies requested
        raw_name: Card name as written, with set/number decorations removed
        section: Zone the line was read under
        set_code_hint: Set code from a trailing "(SET) 123" decoration
        collector_number_hint: Collector number from the same decoration
        line_number: 1-based line in the source text
    """

    quantity: int
    raw_name: str
    section: Zone = Zone.MAIN
    set_code_hint: str | None = None
    collector_number_hint: str | None = None
    line_number: int = 0


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """
    A free-text card search with optional filters.

    Attributes:
        text: Raw query text
        set_code: Only cards from this set
        rarity: Only cards of this rarity
        colors: Color filter (W, U, B, R, G)
        color_exact: If True, colors must match exactly; otherwise any overlap
        format: Only cards legal or restricted in this format
        mana_value: Exact mana value (e.g., "3"), or "7+" for 7 and above
    """

    text: str
    set_code: str | None = None
    rarity: str | None = None
    colors: tuple[str, ...] = ()
    color_exact: bool = False
    format: str | None = None
    mana_value: str | None = None
