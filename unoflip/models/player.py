"""Player model."""

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from .card import Card


class Player(BaseModel):
    """Player state: name, score and hand.

    The hand is exposed as a tuple; only the engine mutates it, through
    ``add_card``, ``remove_card`` and ``clear_hand``.
    """

    name: str = Field(frozen=True)
    score: int = Field(default=0, ge=0)

    _hand: list[Card] = PrivateAttr(default_factory=list)

    @field_validator("name")
    @classmethod
    def _non_blank_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Player name cannot be empty")
        return value

    @property
    def hand(self) -> tuple[Card, ...]:
        """Read-only view of the hand."""
        return tuple(self._hand)

    @property
    def hand_size(self) -> int:
        return len(self._hand)

    def add_card(self, card: Card) -> None:
        """Add a card to the end of the hand."""
        self._hand.append(card)

    def remove_card(self, index: int) -> Card:
        """Remove a card from the hand.

        Args:
            index: 0-based position in the hand.

        Returns:
            The removed card.

        Raises:
            IndexError: If index is out of range.
        """
        if index < 0 or index >= len(self._hand):
            raise IndexError(
                f"Card index {index} out of range for hand of {len(self._hand)}"
            )
        return self._hand.pop(index)

    def clear_hand(self) -> list[Card]:
        """Empty the hand and return the cards it held."""
        cards = self._hand
        self._hand = []
        return cards

    def increase_score(self, amount: int) -> None:
        """Add points to the score.

        Raises:
            ValueError: If amount is negative.
        """
        if amount < 0:
            raise ValueError("Score increment must be >= 0")
        self.score += amount

    def hand_points(self) -> int:
        """Total point value of the cards in hand."""
        return sum(card.points for card in self._hand)

    def describe_hand(self, flipped: bool = False) -> str:
        """Numbered listing of the hand (1-based for display)."""
        if not self._hand:
            return f"{self.name}'s hand is empty"
        lines = [f"{self.name}'s cards:"]
        for i, card in enumerate(self._hand, 1):
            lines.append(f"{i}: {card.describe(flipped)}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return f"{self.name} ({self.score} pts, {len(self._hand)} cards)"

    def __repr__(self) -> str:
        return f"Player(name={self.name!r}, score={self.score}, cards={len(self._hand)})"
