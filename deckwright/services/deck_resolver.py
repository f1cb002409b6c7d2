"""
Decklist Name Resolution.

Turns parsed DeckTextLine requests into a Deck by asking a card lookup for
each name.

INVARIANTS:
1. Lookup order per line: exact name + printing hint, then name only, then
   fuzzy match over the lookup's looser search
2. A line that cannot be resolved is a WARNING, not a failure; the rest of
   the deck still resolves
3. Lookups run in bounded batches, never one unbounded fan-out
4. Resolved entries merge by (card id, zone)
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from deckwright.config import settings
from deckwright.models.card import CardFacts
from deckwright.models.deck import Deck, DeckTextLine
from deckwright.models.failure import FailureKind
from deckwright.parsers.deck_text import parse_deck_text
from deckwright.services.search_ranker import fuzzy_match, name_similarity

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    """
    Card lookup collaborator.

    Implementations may hit a database or a network service; timeouts and
    cancellation are theirs to enforce.
    """

    async def find_card(
        self,
        name: str,
        set_code: str | None = None,
        collector_number: str | None = None,
    ) -> CardFacts | None:
        """Exact name lookup, restricted to a printing when hints are given."""
        ...

    async def search_candidates(self, query: str, limit: int) -> list[CardFacts]:
        """Looser lookup returning cards whose names resemble the query."""
        ...


class InMemoryCardLookup:
    """
    CardLookup over an in-memory card list.

    Names index case-insensitively; the first printing of each name wins
    name-only lookups.
    """

    def __init__(self, cards: Iterable[CardFacts]) -> None:
        self._by_name: dict[str, CardFacts] = {}
        self._by_printing: dict[tuple[str, str, str | None], CardFacts] = {}

        for card in cards:
            key = card.name.casefold()
            self._by_name.setdefault(key, card)
            if card.set_code:
                set_code = card.set_code.upper()
                self._by_printing.setdefault((key, set_code, card.collector_number), card)
                self._by_printing.setdefault((key, set_code, None), card)

    @classmethod
    def from_scryfall(cls, cards: Iterable[dict[str, Any]]) -> "InMemoryCardLookup":
        """Build a lookup from Scryfall card objects."""
        return cls(CardFacts.from_scryfall(card) for card in cards if card.get("name"))

    def __len__(self) -> int:
        return len(self._by_name)

    async def find_card(
        self,
        name: str,
        set_code: str | None = None,
        collector_number: str | None = None,
    ) -> CardFacts | None:
        key = name.strip().casefold()
        if set_code:
            return self._by_printing.get((key, set_code.upper(), collector_number))
        return self._by_name.get(key)

    async def search_candidates(self, query: str, limit: int) -> list[CardFacts]:
        ranked = sorted(
            self._by_name.values(),
            key=lambda card: name_similarity(query, card.name),
            reverse=True,
        )
        return ranked[:limit]


@dataclass(frozen=True, slots=True)
class UnresolvedLine:
    """A decklist line whose card could not be found."""

    line: DeckTextLine
    reason: str
    kind: FailureKind = FailureKind.CARD_NOT_FOUND

    @property
    def message(self) -> str:
        """Per-line warning for an import summary."""
        return f"Line {self.line.line_number}: {self.line.raw_name} ({self.reason})"


@dataclass(frozen=True, slots=True)
class FuzzySubstitution:
    """A line resolved to a different name by fuzzy matching."""

    line: DeckTextLine
    card: CardFacts
    similarity: float


@dataclass
class DeckResolution:
    """Result of resolving a parsed decklist."""

    deck: Deck
    unresolved: list[UnresolvedLine] = field(default_factory=list)
    fuzzy_matches: list[FuzzySubstitution] = field(default_factory=list)

    @property
    def all_resolved(self) -> bool:
        """True if every line resolved to a card."""
        return len(self.unresolved) == 0

    def warnings(self) -> list[str]:
        """Import warnings: unresolved lines, then fuzzy substitutions."""
        messages = [item.message for item in self.unresolved]
        messages.extend(
            f"Line {item.line.line_number}: using {item.card.name} for {item.line.raw_name} "
            f"({round(item.similarity * 100)}% similar)"
            for item in self.fuzzy_matches
        )
        return messages


_RequestKey = tuple[str, str | None, str | None]


class DeckTextResolver:
    """
    Resolves DeckTextLine requests to deck entries through a CardLookup.

    Usage:
        resolver = DeckTextResolver(lookup)
        resolution = await resolver.resolve(lines, format_name="Modern")
    """

    def __init__(self, lookup: CardLookup, batch_size: int | None = None) -> None:
        self._lookup = lookup
        self._batch_size = max(1, batch_size or settings.resolve_batch_size)

    async def resolve(
        self,
        lines: list[DeckTextLine],
        format_name: str,
        name: str = "",
        description: str = "",
    ) -> DeckResolution:
        """
        Resolve card requests and build a deck.

        Each distinct (name, set, number) request is looked up once.

        Args:
            lines: Parsed card requests
            format_name: Format for the resulting deck
            name: Deck name
            description: Deck description

        Returns:
            DeckResolution with the deck and per-line warnings
        """
        requests: dict[_RequestKey, DeckTextLine] = {}
        for line in lines:
            requests.setdefault(_request_key(line), line)

        keys = list(requests)
        resolved: dict[_RequestKey, tuple[CardFacts, float | None] | None] = {}

        for start in range(0, len(keys), self._batch_size):
            batch = keys[start : start + self._batch_size]
            logger.debug(
                "Resolving cards %d-%d of %d",
                start + 1,
                start + len(batch),
                len(keys),
            )
            resolved.update(await self._resolve_batch(requests, batch))

        resolution = DeckResolution(
            deck=Deck(format=format_name, name=name, description=description)
        )
        for line in lines:
            found = resolved[_request_key(line)]
            if found is None:
                logger.warning("Card not found: %s (line %d)", line.raw_name, line.line_number)
                resolution.unresolved.append(
                    UnresolvedLine(line=line, reason="card not found, skipped")
                )
                continue

            card, similarity = found
            resolution.deck.add(card, line.section, line.quantity)
            if similarity is not None:
                resolution.fuzzy_matches.append(
                    FuzzySubstitution(line=line, card=card, similarity=similarity)
                )

        return resolution

    async def _resolve_batch(
        self,
        requests: dict[_RequestKey, DeckTextLine],
        batch: list[_RequestKey],
    ) -> dict[_RequestKey, tuple[CardFacts, float | None] | None]:
        """
        Resolve one batch concurrently.

        If any lookup fails, the rest of the batch is cancelled and the first
        lookup error is raised as-is.
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = {key: group.create_task(self._resolve_line(requests[key])) for key in batch}
        except ExceptionGroup as errors:
            raise errors.exceptions[0] from errors

        return {key: task.result() for key, task in tasks.items()}

    async def _resolve_line(self, line: DeckTextLine) -> tuple[CardFacts, float | None] | None:
        """
        Resolve one request.

        Returns (card, None) for exact matches, (card, similarity) for fuzzy
        matches, None when nothing was found.
        """
        name = line.raw_name
        wanted = name.casefold()

        if line.set_code_hint:
            card = await self._lookup.find_card(
                name,
                set_code=line.set_code_hint,
                collector_number=line.collector_number_hint,
            )
            if card is not None and card.name.casefold() == wanted:
                return card, None

        card = await self._lookup.find_card(name)
        if card is not None:
            return card, None

        candidates = await self._lookup.search_candidates(name, settings.fuzzy_candidate_limit)
        for candidate in candidates:
            if candidate.name.casefold() == wanted:
                return candidate, None

        match = fuzzy_match(name, candidates)
        if match is None:
            return None
        return match, name_similarity(name, match.name)


def _request_key(line: DeckTextLine) -> _RequestKey:
    return (line.raw_name.casefold(), line.set_code_hint, line.collector_number_hint)


async def import_deck_text(
    text: str,
    lookup: CardLookup,
    format_name: str,
    name: str = "",
    description: str = "",
) -> DeckResolution:
    """
    Parse decklist text and resolve it into a deck.

    Args:
        text: Decklist text
        lookup: Card lookup collaborator
        format_name: Format for the resulting deck
        name: Deck name
        description: Deck description

    Returns:
        DeckResolution with the deck and per-line warnings

    Raises:
        MalformedDeckTextError: If the input is not text
    """
    lines = parse_deck_text(text)
    resolver = DeckTextResolver(lookup)
    return await resolver.resolve(lines, format_name, name=name, description=description)
