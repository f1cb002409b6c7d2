"""
Card facts model.

CardFacts is the single value type for a card's rules-relevant attributes.
It is built once at the lookup boundary (see CardFacts.from_scryfall) and is
read-only everywhere downstream.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CardFacts:
    """
    Immutable snapshot of one card's static attributes.

    Attributes:
        id: Stable identifier (Scryfall card id)
        name: Card name
        mana_cost: Symbolic cost (e.g., "{2}{W}{W}"); empty for lands
        mana_value: Numeric mana value (CMC)
        colors: Color symbols from W, U, B, R, G
        color_identity: Color identity symbols
        type_line: Full type line (e.g., "Legendary Creature — Elf Druid")
        rarity: common, uncommon, rare, mythic, special
        legalities: Format name -> legal/restricted/banned/not_legal
        set_code: Set code of this printing (e.g., "LEB")
        collector_number: Collector number within the set
        oracle_text: Rules text
        image_url: Card image, if any
    """

    id: str
    name: str
    mana_cost: str = ""
    mana_value: float = 0.0
    colors: tuple[str, ...] = ()
    color_identity: tuple[str, ...] = ()
    type_line: str = ""
    rarity: str = ""
    legalities: dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    set_code: str | None = None
    collector_number: str | None = None
    oracle_text: str = ""
    image_url: str | None = None

    @property
    def is_land(self) -> bool:
        """True for any card whose type line mentions Land."""
        return "land" in self.type_line.lower()

    @property
    def is_basic_land(self) -> bool:
        """True for basic lands, which are exempt from copy limits."""
        type_lower = self.type_line.lower()
        return "basic" in type_lower and "land" in type_lower

    def legality(self, format_name: str) -> str:
        """Legality status in a format, "not_legal" when unknown."""
        return self.legalities.get(format_name.lower(), "not_legal")

    def completeness(self) -> int:
        """Number of populated optional attributes, used to pick between printings."""
        populated = [
            self.mana_cost,
            self.type_line,
            self.rarity,
            self.legalities,
            self.set_code,
            self.collector_number,
            self.oracle_text,
            self.image_url,
        ]
        return sum(1 for value in populated if value)

    @classmethod
    def from_scryfall(cls, data: dict[str, Any]) -> "CardFacts":
        """
        Build CardFacts from a Scryfall-shaped card dict.

        Double-faced cards carry mana cost, colors and image on their faces;
        the front face fills anything missing at the top level.

        Args:
            data: Scryfall card object

        Returns:
            CardFacts for the card

        Raises:
            KeyError: If the card has no name
        """
        faces: list[dict[str, Any]] = data.get("card_faces") or []
        front: dict[str, Any] = faces[0] if faces else {}

        mana_cost = data.get("mana_cost")
        if mana_cost is None:
            mana_cost = " // ".join(face.get("mana_cost", "") for face in faces)

        colors = data.get("colors")
        if colors is None:
            colors = front.get("colors", [])

        image_uris = data.get("image_uris") or front.get("image_uris") or {}

        return cls(
            id=str(data.get("id") or data.get("oracle_id") or data["name"]),
            name=data["name"],
            mana_cost=mana_cost or "",
            mana_value=float(data.get("cmc") or 0),
            colors=tuple(colors),
            color_identity=tuple(data.get("color_identity", colors)),
            type_line=data.get("type_line") or front.get("type_line", ""),
            rarity=data.get("rarity", ""),
            legalities=dict(data.get("legalities", {})),
            set_code=str(data["set"]).upper() if data.get("set") else None,
            collector_number=data.get("collector_number"),
            oracle_text=data.get("oracle_text") or front.get("oracle_text", ""),
            image_url=image_uris.get("normal"),
        )
