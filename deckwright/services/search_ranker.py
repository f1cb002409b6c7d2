"""
Card search ranking.

Orders candidates returned by an upstream text filter (a database LIKE query,
a search index) by how well their names match the query. When the upstream
filter finds nothing, a fuzzy fallback picks the single closest name.

Relevance tiers, best first:
- EXACT: name equals the query
- PREFIX: name starts with the query
- WORD: query is a whole word (or phrase) in the name
- SUBSTRING: query appears anywhere in the name
- ALL_WORDS: every query word appears in the name, in any order
- FALLBACK: query appears in the type line or rules text only

Within a tier, results are alphabetical by name.
"""

import logging
import re
from collections.abc import Iterable
from enum import IntEnum

from deckwright.config import settings
from deckwright.models.card import CardFacts
from deckwright.models.deck import SearchQuery

logger = logging.getLogger(__name__)

# Restricted cards are still playable (one copy in Vintage)
_PLAYABLE_LEGALITIES = frozenset({"legal", "restricted"})

HIGH_MANA_VALUE_FILTER = "7+"


class RelevanceTier(IntEnum):
    """Discrete rank buckets; higher ranks first."""

    NONE = 0
    FALLBACK = 1
    ALL_WORDS = 2
    SUBSTRING = 3
    WORD = 4
    PREFIX = 5
    EXACT = 6


def relevance_tier(card: CardFacts, query: str) -> RelevanceTier:
    """
    Score a card's name against a query.

    Args:
        card: Candidate card
        query: Search text; compared trimmed and case-folded

    Returns:
        The best tier the card reaches, NONE if nothing matches
    """
    needle = query.strip().casefold()
    if not needle:
        return RelevanceTier.FALLBACK

    name = card.name.casefold()
    if name == needle:
        return RelevanceTier.EXACT
    if name.startswith(needle):
        return RelevanceTier.PREFIX
    if re.search(rf"(?<!\w){re.escape(needle)}(?!\w)", name):
        return RelevanceTier.WORD
    if needle in name:
        return RelevanceTier.SUBSTRING

    words = needle.split()
    if len(words) > 1 and all(word in name for word in words):
        return RelevanceTier.ALL_WORDS

    if needle in card.type_line.casefold() or needle in card.oracle_text.casefold():
        return RelevanceTier.FALLBACK

    return RelevanceTier.NONE


def consolidate_duplicates(cards: Iterable[CardFacts]) -> list[CardFacts]:
    """
    Keep one printing per card name.

    Names compare case-insensitively. The first printing seen is kept unless
    a later one has strictly more complete data.

    Returns:
        Consolidated cards in first-seen order
    """
    by_name: dict[str, CardFacts] = {}
    for card in cards:
        key = card.name.casefold()
        existing = by_name.get(key)
        if existing is None or card.completeness() > existing.completeness():
            by_name[key] = card
    return list(by_name.values())


def matches_filters(card: CardFacts, query: SearchQuery) -> bool:
    """Check a card against a query's set, rarity, color, format and mana value filters."""
    if query.set_code and (card.set_code or "").upper() != query.set_code.upper():
        return False

    if query.rarity and card.rarity.lower() != query.rarity.lower():
        return False

    if query.colors:
        card_colors = set(card.colors)
        filter_colors = {color.upper() for color in query.colors}
        if query.color_exact:
            # Exact match: card must have EXACTLY these colors
            if card_colors != filter_colors:
                return False
        elif not card_colors & filter_colors:
            return False

    if query.format and query.format.strip():
        if card.legality(query.format.strip()).lower() not in _PLAYABLE_LEGALITIES:
            return False

    if query.mana_value and query.mana_value.strip():
        if not _matches_mana_value(card.mana_value, query.mana_value.strip()):
            return False

    return True


def _matches_mana_value(mana_value: float, wanted: str) -> bool:
    """Exact mana value match; "7+" matches 7 and above. Unreadable values match all."""
    if wanted == HIGH_MANA_VALUE_FILTER:
        return mana_value >= 7
    try:
        return mana_value == float(wanted)
    except ValueError:
        return True


def rank_cards(query: str | SearchQuery, candidates: Iterable[CardFacts]) -> list[CardFacts]:
    """
    Rank search candidates by relevance.

    Args:
        query: Query text, or a SearchQuery carrying filters
        candidates: Cards admitted by the upstream filter

    Returns:
        Deduplicated cards sorted by tier, then name. Cards matching nothing
        are dropped. An empty query returns every candidate alphabetically.
    """
    search = query if isinstance(query, SearchQuery) else SearchQuery(text=query)

    filtered = [card for card in candidates if matches_filters(card, search)]

    scored: list[tuple[RelevanceTier, CardFacts]] = []
    for card in consolidate_duplicates(filtered):
        tier = relevance_tier(card, search.text)
        if tier != RelevanceTier.NONE:
            scored.append((tier, card))

    scored.sort(key=lambda item: (-item[0], item[1].name.casefold(), item[1].name))
    return [card for _, card in scored]


def levenshtein_distance(source: str, target: str) -> int:
    """Minimum single-character insertions, deletions and substitutions."""
    if len(source) < len(target):
        source, target = target, source

    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, 1):
        current = [i]
        for j, target_char in enumerate(target, 1):
            substitution_cost = 0 if source_char == target_char else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + substitution_cost,  # substitution
                )
            )
        previous = current

    return previous[-1]


def name_similarity(first: str, second: str) -> float:
    """
    Normalized similarity in [0, 1]: (max length - edit distance) / max length.

    Comparison is case-insensitive. Two empty strings are identical.
    """
    a = first.casefold()
    b = second.casefold()
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    return (max_length - levenshtein_distance(a, b)) / max_length


def fuzzy_match(
    query: str,
    candidates: Iterable[CardFacts],
    threshold: float | None = None,
) -> CardFacts | None:
    """
    Find the candidate whose name is closest to the query.

    Args:
        query: Card name as typed (at least fuzzy_min_query_length characters)
        candidates: Cards to compare against
        threshold: Similarity must be strictly greater than this

    Returns:
        Best match (first seen on ties), or None if nothing clears the threshold
    """
    if threshold is None:
        threshold = settings.fuzzy_match_threshold

    needle = query.strip()
    if len(needle) < settings.fuzzy_min_query_length:
        return None

    best: CardFacts | None = None
    best_similarity = -1.0
    for card in candidates:
        similarity = name_similarity(needle, card.name)
        if similarity > best_similarity:
            best, best_similarity = card, similarity

    if best is None or best_similarity <= threshold:
        return None

    logger.info(
        "Fuzzy match %r -> %r (%d%% similarity)",
        needle,
        best.name,
        round(best_similarity * 100),
    )
    return best


def search_cards(
    query: str | SearchQuery,
    candidates: Iterable[CardFacts],
    fallback_candidates: Iterable[CardFacts] | None = None,
) -> list[CardFacts]:
    """
    Rank candidates, falling back to a fuzzy name match when none match.

    Args:
        query: Query text or SearchQuery
        candidates: Cards admitted by the upstream filter
        fallback_candidates: Cards from a looser lookup, used only when the
            ranked result is empty

    Returns:
        Ranked cards, or a single fuzzy match, or an empty list
    """
    ranked = rank_cards(query, candidates)
    if ranked or fallback_candidates is None:
        return ranked

    search = query if isinstance(query, SearchQuery) else SearchQuery(text=query)
    pool = [card for card in fallback_candidates if matches_filters(card, search)]
    match = fuzzy_match(search.text, pool)
    return [match] if match is not None else []
