"""
Mana cost parsing.

Resolves symbolic mana costs to a numeric range so that variable costs
(X spells, two-brid and Phyrexian symbols) get a defined floor on the
mana curve.

Symbol values (min, max):
- {N}: N, N
- {W} {U} {B} {R} {G} {C} {S} and color hybrids like {W/U}: 1, 1
- {X} {Y} {Z}: 0, 0 (marks the cost as variable)
- {2/W}: 1, 2
- {W/P} and {W/U/P}: 0, 1
- {HW}: 0.5, 0.5
- anything else: 0, 0

Split and multi-face costs ("{1}{R} // {2}{U}") are variable: the floor is
the cheapest face.
"""

import math
import re
from dataclasses import dataclass

from deckwright.models.card import CardFacts

_SYMBOL_PATTERN = re.compile(r"\{([^}]+)\}")
_GENERIC = re.compile(r"^\d+$")
_COLORED = re.compile(r"^[WUBRGCS]$")
_COLOR_HYBRID = re.compile(r"^[WUBRG]/[WUBRG]$")
_TWOBRID = re.compile(r"^(\d+)/[WUBRG]$")
_PHYREXIAN = re.compile(r"^(?:[WUBRG]/)?[WUBRG]/P$")
_HALF = re.compile(r"^H[WUBRG]$")
_VARIABLE = frozenset({"X", "Y", "Z"})


@dataclass(frozen=True, slots=True)
class ManaCostInfo:
    """Numeric interpretation of a mana cost."""

    min_value: float
    max_value: float
    has_variable_cost: bool
    display: str


def parse_mana_cost(mana_cost: str | None, stored_value: float | None = None) -> ManaCostInfo:
    """
    Interpret a mana cost string.

    Args:
        mana_cost: Symbolic cost (e.g., "{X}{R}{R}")
        stored_value: Mana value recorded for the card, used when there is no cost

    Returns:
        ManaCostInfo with the floor and ceiling of the cost
    """
    if not mana_cost or not mana_cost.strip():
        value = stored_value or 0
        return ManaCostInfo(value, value, False, _format_number(value))

    faces = [face for face in (part.strip() for part in mana_cost.split("//")) if face]
    if len(faces) > 1:
        parsed = [_parse_face(face) for face in faces]
        cheapest = min(parsed, key=lambda info: info.min_value)
        ceiling = max(info.max_value for info in parsed)
        return ManaCostInfo(
            min_value=cheapest.min_value,
            max_value=ceiling,
            has_variable_cost=True,
            display=" // ".join(info.display for info in parsed),
        )

    return _parse_face(mana_cost)


def _parse_face(mana_cost: str) -> ManaCostInfo:
    min_value = 0.0
    max_value = 0.0
    has_x = False

    for symbol in _SYMBOL_PATTERN.findall(mana_cost.upper()):
        if _GENERIC.match(symbol):
            min_value += int(symbol)
            max_value += int(symbol)
        elif _COLORED.match(symbol) or _COLOR_HYBRID.match(symbol):
            min_value += 1
            max_value += 1
        elif symbol in _VARIABLE:
            has_x = True
        elif _TWOBRID.match(symbol):
            min_value += 1
            max_value += int(symbol.split("/")[0])
        elif _PHYREXIAN.match(symbol):
            max_value += 1
        elif _HALF.match(symbol):
            min_value += 0.5
            max_value += 0.5

    if has_x:
        display = f"X+{_format_number(min_value)}" if min_value > 0 else "X"
    elif min_value != max_value:
        display = f"{_format_number(min_value)}-{_format_number(max_value)}"
    else:
        display = _format_number(min_value)

    return ManaCostInfo(
        min_value=min_value,
        max_value=max_value,
        has_variable_cost=has_x or min_value != max_value,
        display=display,
    )


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def effective_mana_value(card: CardFacts) -> int:
    """
    Integer mana value used for curve placement.

    Variable costs use the floor of their cheapest payment; fixed costs use
    the card's recorded mana value.
    """
    info = parse_mana_cost(card.mana_cost, card.mana_value)
    if info.has_variable_cost:
        return math.floor(info.min_value)
    return int(card.mana_value)
