"""
Deck Legality Validator: Format Construction Rules.

INVARIANT: Validation is a full recomputation from the deck's entries and an
explicit FormatRule. No state carries between calls.

A failing deck is a normal result, not an exception: LegalityResult lists
every unmet constraint in check order.

Checks:
1. Deck size (commander counted where the format requires one)
2. Copy limit per card per zone (basic lands exempt)
3. Commander presence
4. Sideboard allowance and cap
"""

from dataclasses import dataclass, field
from enum import Enum

from deckwright.models.card import CardFacts
from deckwright.models.deck import Deck, Zone
from deckwright.models.failure import FailureDetail, FailureKind
from deckwright.models.format_rules import FormatRule


class ViolationCode(str, Enum):
    """Reason codes for failed construction checks."""

    SIZE_TOO_SMALL = "SizeTooSmall"
    SIZE_TOO_LARGE = "SizeTooLarge"
    COPY_LIMIT_EXCEEDED = "CopyLimitExceeded"
    MISSING_COMMANDER = "MissingCommander"
    SIDEBOARD_TOO_LARGE = "SideboardTooLarge"
    SIDEBOARD_NOT_ALLOWED = "SideboardNotAllowed"


@dataclass(frozen=True, slots=True)
class LegalityViolation:
    """
    One unmet constraint.

    Attributes:
        code: Which check failed
        message: Actionable text for the player
        card_name: Offending card, for per-card checks
    """

    code: ViolationCode
    message: str
    card_name: str | None = None


@dataclass(frozen=True)
class LegalityResult:
    """Outcome of validating a deck against its format."""

    format: str
    violations: tuple[LegalityViolation, ...] = field(default_factory=tuple)

    @property
    def legal(self) -> bool:
        """True when every check passed."""
        return not self.violations

    @property
    def reasons(self) -> list[str]:
        """Reason codes of failed checks, in check order."""
        return [violation.code.value for violation in self.violations]

    @property
    def messages(self) -> list[str]:
        """Player-facing messages for failed checks."""
        return [violation.message for violation in self.violations]

    def has(self, code: ViolationCode) -> bool:
        """Check whether a specific reason code is present."""
        return any(violation.code == code for violation in self.violations)

    def to_failure(self) -> FailureDetail | None:
        """Describe a failing result for presentation, or None if legal."""
        if self.legal:
            return None
        return FailureDetail(
            kind=FailureKind.VALIDATION_FAILED,
            message=f"Deck is not legal in {self.format}.",
            detail=", ".join(self.reasons),
            suggestion=self.messages[0],
            reasons=self.messages,
        )


def validate_deck(deck: Deck, rule: FormatRule) -> LegalityResult:
    """
    Validate a deck against format construction rules.

    Args:
        deck: Deck with all zones
        rule: Format rules to check against

    Returns:
        LegalityResult; legal iff no violations were found
    """
    violations: list[LegalityViolation] = []

    violations.extend(_check_size(deck, rule))
    violations.extend(_check_copy_limits(deck, rule))

    commander_count = deck.zone_total(Zone.COMMANDER)
    if rule.requires_commander and commander_count == 0:
        violations.append(
            LegalityViolation(
                code=ViolationCode.MISSING_COMMANDER,
                message="Select a commander",
            )
        )

    violations.extend(_check_sideboard(deck, rule))

    return LegalityResult(format=rule.name, violations=tuple(violations))


def can_add_copy(deck: Deck, card: CardFacts, zone: Zone, rule: FormatRule) -> bool:
    """
    Check whether one more copy of a card fits the copy limit.

    Used before adding a card so the player is told at once. Commander zone
    entries are limited to a single copy regardless of format.
    """
    if card.is_basic_land and zone != Zone.COMMANDER:
        return True

    current = next(
        (entry.quantity for entry in deck.entries if entry.key == (card.id, zone)),
        0,
    )
    limit = 1 if zone == Zone.COMMANDER else rule.max_copies
    return limit is None or current < limit


def _check_size(deck: Deck, rule: FormatRule) -> list[LegalityViolation]:
    deck_size = deck.zone_total(Zone.MAIN)
    if rule.requires_commander:
        deck_size += deck.zone_total(Zone.COMMANDER)

    if deck_size < rule.min_size:
        missing = rule.min_size - deck_size
        noun = "card" if missing == 1 else "cards"
        return [
            LegalityViolation(
                code=ViolationCode.SIZE_TOO_SMALL,
                message=f"Deck needs {missing} more {noun} (minimum {rule.min_size})",
            )
        ]

    if rule.max_size is not None and deck_size > rule.max_size:
        extra = deck_size - rule.max_size
        noun = "card" if extra == 1 else "cards"
        return [
            LegalityViolation(
                code=ViolationCode.SIZE_TOO_LARGE,
                message=f"Deck has {extra} {noun} too many (maximum {rule.max_size})",
            )
        ]

    return []


def _check_copy_limits(deck: Deck, rule: FormatRule) -> list[LegalityViolation]:
    if rule.max_copies is None:
        return []

    violations: list[LegalityViolation] = []
    for entry in deck.entries:
        if entry.card.is_basic_land:
            continue
        if entry.quantity > rule.max_copies:
            violations.append(
                LegalityViolation(
                    code=ViolationCode.COPY_LIMIT_EXCEEDED,
                    message=(
                        f"Too many copies of {entry.card.name} in {entry.zone.value}: "
                        f"{entry.quantity} (maximum {rule.max_copies})"
                    ),
                    card_name=entry.card.name,
                )
            )
    return violations


def _check_sideboard(deck: Deck, rule: FormatRule) -> list[LegalityViolation]:
    sideboard_count = deck.zone_total(Zone.SIDEBOARD)
    if sideboard_count == 0:
        return []

    if not rule.allows_sideboard:
        return [
            LegalityViolation(
                code=ViolationCode.SIDEBOARD_NOT_ALLOWED,
                message=f"{rule.name} does not allow a sideboard; remove {sideboard_count} cards",
            )
        ]

    if rule.sideboard_max_size is not None and sideboard_count > rule.sideboard_max_size:
        extra = sideboard_count - rule.sideboard_max_size
        return [
            LegalityViolation(
                code=ViolationCode.SIDEBOARD_TOO_LARGE,
                message=(
                    f"Sideboard has {sideboard_count} cards; "
                    f"remove {extra} (maximum {rule.sideboard_max_size})"
                ),
            )
        ]

    return []
