from deckwright.models.card import CardFacts
from deckwright.models.deck import Deck, Zone
from deckwright.models.format_rules import get_format_rule
from deckwright.services.deck_classifier import DeckKind, classify_deck
from deckwright.services.legality_validator import validate_deck


def _playset_deck(format_name: str, main_cards: int) -> Deck:
    """Deck of 4-ofs plus basic lands filling out the main deck."""
    deck = Deck(format=format_name)
    spells = main_cards // 2
    for index in range(spells // 4):
        card = CardFacts(id=f"spell-{index}", name=f"Spell {index}", type_line="Instant")
        deck.add(card, Zone.MAIN, 4)
    mountain = CardFacts(id="mountain", name="Mountain", type_line="Basic Land — Mountain")
    deck.add(mountain, Zone.MAIN, main_cards - deck.zone_total(Zone.MAIN))
    return deck


class TestClassifyConstructed:
    def test_best_of_one(self) -> None:
        deck = _playset_deck("Standard", 60)
        result = classify_deck(deck, get_format_rule("Standard"))

        assert result.kind == DeckKind.SINGLE_GAME
        assert result.detail == "Standard Best of 1 (no sideboard)"
        assert result.has_commander is False

    def test_best_of_three(self, card_pool) -> None:
        """60-card Modern deck with 10 sideboard cards across 3 entries."""
        deck = _playset_deck("Modern", 60)
        deck.add(card_pool["Abrade"], Zone.SIDEBOARD, 4)
        deck.add(card_pool["Negate"], Zone.SIDEBOARD, 4)
        deck.add(card_pool["Counterspell"], Zone.SIDEBOARD, 2)
        rule = get_format_rule("Modern")

        result = classify_deck(deck, rule)

        assert result.kind == DeckKind.BEST_OF_THREE
        assert result.label == "Modern"
        assert "10 sideboard cards" in result.detail
        assert validate_deck(deck, rule).legal

    def test_single_sideboard_card_is_singular(self, card_pool) -> None:
        deck = _playset_deck("Modern", 60)
        deck.add(card_pool["Negate"], Zone.SIDEBOARD, 1)
        result = classify_deck(deck, get_format_rule("Modern"))
        assert result.detail == "Modern Best of 3 (has 1 sideboard card)"

    def test_legendary_creature_in_constructed_is_not_a_commander(self, card_pool) -> None:
        deck = _playset_deck("Standard", 60)
        deck.add(card_pool["Atraxa, Praetors' Voice"], Zone.MAIN, 1)
        result = classify_deck(deck, get_format_rule("Standard"))
        assert result.kind == DeckKind.SINGLE_GAME
        assert result.commander_inferred is False


class TestClassifyCommander:
    def test_assigned_commander(self, card_pool) -> None:
        deck = Deck(format="Commander")
        deck.add(card_pool["Atraxa, Praetors' Voice"], Zone.COMMANDER)
        deck.add(card_pool["Island"], Zone.MAIN, 99)

        result = classify_deck(deck, get_format_rule("Commander"))

        assert result.kind == DeckKind.COMMANDER_STYLE
        assert result.has_commander is True
        assert result.commander_inferred is False
        assert result.detail == "Commander format with legendary commander"

    def test_inferred_commander(self, card_pool) -> None:
        """A legendary creature in the main deck reads as the intended commander."""
        deck = Deck(format="Brawl")
        deck.add(card_pool["Atraxa, Praetors' Voice"], Zone.MAIN)
        deck.add(card_pool["Island"], Zone.MAIN, 59)

        result = classify_deck(deck, get_format_rule("Brawl"))

        assert result.kind == DeckKind.COMMANDER_STYLE
        assert result.label == "Brawl"
        assert result.has_commander is True
        assert result.commander_inferred is True

    def test_no_commander(self, card_pool) -> None:
        deck = Deck(format="Commander")
        deck.add(card_pool["Island"], Zone.MAIN, 99)

        result = classify_deck(deck, get_format_rule("Commander"))

        assert result.kind == DeckKind.COMMANDER_STYLE
        assert result.has_commander is False
        assert result.detail == "Commander format (add a commander)"

    def test_classification_does_not_affect_legality(self, card_pool) -> None:
        """An inferred commander still fails the missing-commander check."""
        deck = Deck(format="Commander")
        deck.add(card_pool["Atraxa, Praetors' Voice"], Zone.MAIN)
        deck.add(card_pool["Island"], Zone.MAIN, 99)
        rule = get_format_rule("Commander")

        assert classify_deck(deck, rule).has_commander is True
        assert validate_deck(deck, rule).reasons == ["MissingCommander"]
