"""Card models.

One class per card category. All cards are frozen pydantic models, so they
are hashable and compare by value.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class Colour(str, Enum):
    """Front-side card colour."""

    RED = "RED"
    BLUE = "BLUE"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    ALL = "ALL"  # Wild cards only


class FlipColour(str, Enum):
    """Flip-side card colour."""

    PINK = "PINK"
    TEAL = "TEAL"
    ORANGE = "ORANGE"
    PURPLE = "PURPLE"
    ALL = "ALL"


class CardType(str, Enum):
    """Front-side card type."""

    NUMBER = "NUMBER"
    SKIP = "SKIP"
    DRAW_ONE = "DRAW_ONE"
    REVERSE = "REVERSE"
    FLIP = "FLIP"
    WILD = "WILD"
    WILDTWO = "WILDTWO"


class FlipType(str, Enum):
    """Flip-side card type."""

    NUMBER = "NUMBER"
    SKIP_ALL = "SKIP_ALL"
    DRAW_FIVE = "DRAW_FIVE"
    REVERSE = "REVERSE"
    FLIP = "FLIP"
    WILD = "WILD"
    WILD_DRAW = "WILD_DRAW"


PLAYABLE_COLOURS: tuple[Colour, ...] = (
    Colour.RED,
    Colour.BLUE,
    Colour.GREEN,
    Colour.YELLOW,
)

WILD_TYPES = frozenset({CardType.WILD, CardType.WILDTWO})

# Front palette -> flip palette
FLIP_COLOURS: dict[Colour, FlipColour] = {
    Colour.RED: FlipColour.PINK,
    Colour.BLUE: FlipColour.TEAL,
    Colour.GREEN: FlipColour.ORANGE,
    Colour.YELLOW: FlipColour.PURPLE,
    Colour.ALL: FlipColour.ALL,
}

FLIP_TYPES: dict[CardType, FlipType] = {
    CardType.NUMBER: FlipType.NUMBER,
    CardType.SKIP: FlipType.SKIP_ALL,
    CardType.DRAW_ONE: FlipType.DRAW_FIVE,
    CardType.REVERSE: FlipType.REVERSE,
    CardType.FLIP: FlipType.FLIP,
    CardType.WILD: FlipType.WILD,
    CardType.WILDTWO: FlipType.WILD_DRAW,
}


class FlipSide(BaseModel, frozen=True):
    """Alternate side of a card. Carried but never played."""

    color: FlipColour
    card_type: FlipType
    rank: int | None = None

    @classmethod
    def mirror(
        cls,
        card_type: CardType,
        color: Colour,
        rank: int | None = None,
    ) -> "FlipSide":
        """Map a front-side descriptor onto the flip palette."""
        return cls(
            color=FLIP_COLOURS[color],
            card_type=FLIP_TYPES[card_type],
            rank=rank,
        )

    def describe(self) -> str:
        if self.card_type == FlipType.WILD:
            return "WILD"
        if self.card_type == FlipType.WILD_DRAW:
            return "WILD STACK DRAW"
        if self.card_type != FlipType.NUMBER:
            return f"{self.color.value} {self.card_type.value}"
        return f"{self.color.value} {self.rank}"


class Card(BaseModel, frozen=True):
    """Base for every card category."""

    card_type: CardType
    color: Colour
    rank: None = None
    flip: FlipSide

    @model_validator(mode="before")
    @classmethod
    def _default_flip_side(cls, data: Any) -> Any:
        """Mirror the front side when no flip side is supplied."""
        if not isinstance(data, dict) or data.get("flip") is not None:
            return data
        fields = cls.model_fields
        card_type = data.get("card_type", fields["card_type"].default)
        color = data.get("color", fields["color"].default)
        rank = data.get("rank")
        try:
            flip = FlipSide.mirror(CardType(card_type), Colour(color), rank)
        except (KeyError, ValueError):
            # Leave it to field validation to report the bad front side
            return data
        return {**data, "flip": flip}

    @property
    def is_wild(self) -> bool:
        """Check if this card lets the player nominate a colour."""
        return self.card_type in WILD_TYPES

    @property
    def points(self) -> int:
        """Points this card is worth in a losing hand."""
        return 0

    def describe(self, flipped: bool = False) -> str:
        """Human-readable description of either side."""
        if flipped:
            return self.flip.describe()
        return f"{self.color.value} {self.card_type.value}"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()})"


class ColouredCard(Card, frozen=True):
    """Card that belongs to one of the four playable colours."""

    @field_validator("color")
    @classmethod
    def _real_colour(cls, value: Colour) -> Colour:
        if value == Colour.ALL:
            raise ValueError(f"{cls.__name__} needs a playable colour, not ALL")
        return value


class NumberCard(ColouredCard, frozen=True):
    card_type: Literal[CardType.NUMBER] = CardType.NUMBER
    rank: int = Field(ge=0)

    @property
    def points(self) -> int:
        return self.rank

    def describe(self, flipped: bool = False) -> str:
        if flipped:
            return self.flip.describe()
        return f"{self.color.value} {self.rank}"


class SkipCard(ColouredCard, frozen=True):
    card_type: Literal[CardType.SKIP] = CardType.SKIP

    @property
    def points(self) -> int:
        return 20


class DrawOneCard(ColouredCard, frozen=True):
    card_type: Literal[CardType.DRAW_ONE] = CardType.DRAW_ONE

    @property
    def points(self) -> int:
        return 10


class ReverseCard(ColouredCard, frozen=True):
    card_type: Literal[CardType.REVERSE] = CardType.REVERSE

    @property
    def points(self) -> int:
        return 20


class FlipCard(ColouredCard, frozen=True):
    """Flip card. Never built into the deck and has no effect of its own."""

    card_type: Literal[CardType.FLIP] = CardType.FLIP


class WildCard(Card, frozen=True):
    card_type: Literal[CardType.WILD] = CardType.WILD
    color: Literal[Colour.ALL] = Colour.ALL

    @property
    def points(self) -> int:
        return 40

    def describe(self, flipped: bool = False) -> str:
        if flipped:
            return self.flip.describe()
        return "WILD"


class WildDrawTwoCard(Card, frozen=True):
    card_type: Literal[CardType.WILDTWO] = CardType.WILDTWO
    color: Literal[Colour.ALL] = Colour.ALL

    @property
    def points(self) -> int:
        return 50

    def describe(self, flipped: bool = False) -> str:
        if flipped:
            return self.flip.describe()
        return "WILD DRAW TWO"


CARD_CLASSES: dict[CardType, type[Card]] = {
    CardType.NUMBER: NumberCard,
    CardType.SKIP: SkipCard,
    CardType.DRAW_ONE: DrawOneCard,
    CardType.REVERSE: ReverseCard,
    CardType.FLIP: FlipCard,
    CardType.WILD: WildCard,
    CardType.WILDTWO: WildDrawTwoCard,
}
