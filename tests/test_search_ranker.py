import logging

import pytest

from deckwright.models.card import CardFacts
from deckwright.models.deck import SearchQuery
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


def _names(cards: list[CardFacts]) -> list[str]:
    return [card.name for card in cards]


class TestRelevanceTier:
    @pytest.mark.parametrize(
        ("name", "query", "tier"),
        [
            ("Lightning Bolt", "lightning bolt", RelevanceTier.EXACT),
            ("Lightning Bolt", "light", RelevanceTier.PREFIX),
            ("Chain Lightning", "lightning", RelevanceTier.WORD),
            ("Fire Elemental", "Elemental", RelevanceTier.WORD),
            ("Thunderbolt", "bolt", RelevanceTier.SUBSTRING),
            ("Bolt of Lightning", "lightning bolt", RelevanceTier.ALL_WORDS),
            ("Counterspell", "bolt", RelevanceTier.NONE),
        ],
    )
    def test_name_tiers(self, make_card, name: str, query: str, tier: RelevanceTier) -> None:
        assert relevance_tier(make_card(name), query) == tier

    def test_type_line_match_is_fallback(self, make_card) -> None:
        card = make_card("Llanowar Elves", type_line="Creature — Elf Druid")
        assert relevance_tier(card, "druid") == RelevanceTier.FALLBACK

    def test_oracle_text_match_is_fallback(self, make_card) -> None:
        card = make_card("Shock", oracle_text="Shock deals 2 damage to any target.")
        assert relevance_tier(card, "any target") == RelevanceTier.FALLBACK

    def test_query_is_trimmed(self, make_card) -> None:
        assert relevance_tier(make_card("Negate"), "  negate ") == RelevanceTier.EXACT


class TestRankCards:
    def test_elemental_ordering(self, make_card) -> None:
        candidates = [
            make_card("Fire Elemental", type_line="Creature — Elemental"),
            make_card("Elemental Fury"),
            make_card("Lightning Strike"),
        ]
        assert _names(rank_cards("Elemental", candidates)) == ["Elemental Fury", "Fire Elemental"]

    def test_exact_first_then_alphabetical_within_tier(self, make_card) -> None:
        candidates = [
            make_card("Thunderbolt"),
            make_card("Boltwave"),
            make_card("Bolt"),
            make_card("Bolt Bend"),
            make_card("Lightning Bolt"),
        ]
        assert _names(rank_cards("bolt", candidates)) == [
            "Bolt",
            "Bolt Bend",
            "Boltwave",
            "Lightning Bolt",
            "Thunderbolt",
        ]

    def test_tie_break_is_case_insensitive(self, make_card) -> None:
        candidates = [make_card("bolt Storm"), make_card("Bolt Bend")]
        assert _names(rank_cards("bolt", candidates)) == ["Bolt Bend", "bolt Storm"]

    def test_deduplicates_printings(self, make_card) -> None:
        candidates = [
            make_card("Lightning Bolt", id="a"),
            make_card("Lightning Bolt", id="b"),
            make_card("Chain Lightning"),
        ]
        ranked = rank_cards("lightning", candidates)
        assert _names(ranked) == ["Lightning Bolt", "Chain Lightning"]

    def test_empty_query_returns_all_alphabetically(self, make_card) -> None:
        candidates = [make_card("Negate"), make_card("Abrade"), make_card("Mountain")]
        assert _names(rank_cards("", candidates)) == ["Abrade", "Mountain", "Negate"]

    def test_empty_candidates(self) -> None:
        assert rank_cards("bolt", []) == []

    def test_search_query_filters(self, card_pool) -> None:
        query = SearchQuery(text="", colors=("U",))
        assert _names(rank_cards(query, card_pool.values())) == [
            "Atraxa, Praetors' Voice",
            "Counterspell",
            "Negate",
        ]


class TestConsolidateDuplicates:
    def test_keeps_most_complete_printing(self, make_card) -> None:
        sparse = CardFacts(id="a", name="Lightning Bolt")
        full = make_card("Lightning Bolt", id="b", set_code="LEB", collector_number="163")

        result = consolidate_duplicates([sparse, full])

        assert len(result) == 1
        assert result[0].id == "b"

    def test_first_wins_on_tie(self, make_card) -> None:
        first = make_card("Lightning Bolt", id="a")
        second = make_card("lightning bolt", id="b")
        assert consolidate_duplicates([first, second]) == [first]


class TestMatchesFilters:
    def test_set_filter(self, card_pool) -> None:
        bolt = card_pool["Lightning Bolt"]
        assert matches_filters(bolt, SearchQuery(text="", set_code="leb"))
        assert not matches_filters(bolt, SearchQuery(text="", set_code="M10"))

    def test_rarity_filter(self, card_pool) -> None:
        atraxa = card_pool["Atraxa, Praetors' Voice"]
        assert matches_filters(atraxa, SearchQuery(text="", rarity="Mythic"))
        assert not matches_filters(card_pool["Negate"], SearchQuery(text="", rarity="rare"))

    def test_color_overlap(self, card_pool) -> None:
        query = SearchQuery(text="", colors=("W",))
        assert matches_filters(card_pool["Boros Charm"], query)
        assert not matches_filters(card_pool["Lightning Bolt"], query)

    def test_color_exact(self, card_pool) -> None:
        query = SearchQuery(text="", colors=("R", "W"), color_exact=True)
        assert matches_filters(card_pool["Boros Charm"], query)
        assert not matches_filters(card_pool["Lightning Bolt"], query)

    def test_format_filter_keeps_legal_and_restricted(self, make_card) -> None:
        """Legal and restricted cards are playable; banned and missing are not."""
        bolt = make_card("Lightning Bolt", legalities={"modern": "legal", "vintage": "legal"})
        ring = make_card("Sol Ring", legalities={"vintage": "restricted", "modern": "banned"})
        oko = make_card("Oko, Thief of Crowns", legalities={"vintage": "Restricted"})

        modern = SearchQuery(text="", format="Modern")
        vintage = SearchQuery(text="", format="vintage")

        assert matches_filters(bolt, modern)
        assert not matches_filters(ring, modern)
        assert not matches_filters(oko, modern)
        assert matches_filters(ring, vintage)
        assert matches_filters(oko, vintage)

    def test_blank_format_is_no_filter(self, make_card) -> None:
        card = make_card("Shock")
        assert matches_filters(card, SearchQuery(text="", format="  "))

    def test_exact_mana_value(self, card_pool) -> None:
        query = SearchQuery(text="", mana_value="2")
        assert matches_filters(card_pool["Counterspell"], query)
        assert not matches_filters(card_pool["Lightning Bolt"], query)

    def test_seven_plus_mana_value(self, make_card) -> None:
        query = SearchQuery(text="", mana_value="7+")
        assert matches_filters(make_card("Emrakul, the Aeons Torn", mana_value=15), query)
        assert matches_filters(make_card("Ulamog's Crusher", mana_value=8), query)
        assert matches_filters(make_card("Void Winnower", mana_value=7), query)
        assert not matches_filters(make_card("Wurmcoil Engine", mana_value=6), query)

    def test_unreadable_mana_value_is_no_filter(self, card_pool) -> None:
        query = SearchQuery(text="", mana_value="lots")
        assert matches_filters(card_pool["Lightning Bolt"], query)

    def test_rank_cards_applies_format_filter(self, make_card) -> None:
        candidates = [
            make_card("Lightning Bolt", legalities={"modern": "legal"}),
            make_card("Lightning Helix", legalities={"modern": "legal"}),
            make_card("Lightning Storm", legalities={"modern": "not_legal"}),
        ]
        query = SearchQuery(text="lightning", format="Modern")
        assert _names(rank_cards(query, candidates)) == ["Lightning Bolt", "Lightning Helix"]


class TestNameSimilarity:
    def test_levenshtein(self) -> None:
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "bolt") == 4
        assert levenshtein_distance("bolt", "bolt") == 0

    def test_similarity_bounds(self) -> None:
        assert name_similarity("Negate", "negate") == 1.0
        assert name_similarity("", "") == 1.0
        assert name_similarity("abc", "xyz") == 0.0

    def test_similarity_is_symmetric(self) -> None:
        assert name_similarity("Lighming Bolt", "Lightning Bolt") == name_similarity(
            "Lightning Bolt", "Lighming Bolt"
        )


class TestFuzzyMatch:
    def test_typo_accepted(self, card_pool) -> None:
        match = fuzzy_match("Lighming Bolt", card_pool.values())
        assert match is not None
        assert match.name == "Lightning Bolt"
        assert name_similarity("Lighming Bolt", "Lightning Bolt") == pytest.approx(12 / 14)

    def test_short_fragment_rejected(self, card_pool) -> None:
        assert name_similarity("Bolt", "Lightning Bolt") == pytest.approx(4 / 14)
        assert fuzzy_match("Bolt", [card_pool["Lightning Bolt"]]) is None

    def test_query_too_short(self, make_card) -> None:
        assert fuzzy_match("Ox", [make_card("Ox")]) is None

    def test_threshold_is_strict(self, make_card) -> None:
        """Similarity exactly at the threshold is rejected."""
        # 1 edit over 5 characters: 0.8
        assert fuzzy_match("Shokk", [make_card("Shock")]) is None
        assert fuzzy_match("Shokk", [make_card("Shock")], threshold=0.79) is not None

    def test_first_candidate_wins_ties(self, make_card) -> None:
        first = make_card("Negatx", id="first")
        second = make_card("Negaty", id="second")
        match = fuzzy_match("Negate", [first, second], threshold=0.5)
        assert match is first

    def test_logs_accepted_match(self, card_pool, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="deckwright.services.search_ranker"):
            fuzzy_match("Lighming Bolt", card_pool.values())
        assert "Lightning Bolt" in caplog.text


class TestSearchCards:
    def test_ranked_results_skip_fuzzy(self, card_pool) -> None:
        result = search_cards("bolt", card_pool.values(), fallback_candidates=card_pool.values())
        assert _names(result) == ["Lightning Bolt"]

    def test_fuzzy_fallback_when_nothing_ranks(self, card_pool) -> None:
        result = search_cards("Lighming Bolt", [], fallback_candidates=card_pool.values())
        assert _names(result) == ["Lightning Bolt"]

    def test_no_fallback_without_candidates(self, card_pool) -> None:
        assert search_cards("Lighming Bolt", []) == []

    def test_fallback_respects_filters(self, card_pool) -> None:
        query = SearchQuery(text="Lighming Bolt", colors=("U",))
        assert search_cards(query, [], fallback_candidates=card_pool.values()) == []
