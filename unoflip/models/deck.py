"""Deck model: draw pile and discard pile."""

import logging
import random
from typing import Iterable

from .card import (
    CARD_CLASSES,
    PLAYABLE_COLOURS,
    Card,
    CardType,
    Colour,
    FlipSide,
)

logger = logging.getLogger(__name__)

DUPLICATES = 2
MIN_RANK = 1
MAX_RANK = 9
WILD_COPIES = 4

# Action cards dealt twice per colour
COLOURED_ACTIONS = (CardType.SKIP, CardType.DRAW_ONE, CardType.REVERSE)

# 4 colours x 2 copies x (9 numbers + 3 actions) + 4 x (WILD + WILDTWO)
DECK_SIZE = 104


class DeckExhaustedError(RuntimeError):
    """Raised when a draw is requested and no card is left to draw."""


def _front_descriptors() -> list[tuple[CardType, Colour, int | None]]:
    """Front sides of a full deck in build order."""
    fronts: list[tuple[CardType, Colour, int | None]] = []
    for colour in PLAYABLE_COLOURS:
        for _ in range(DUPLICATES):
            for rank in range(MIN_RANK, MAX_RANK + 1):
                fronts.append((CardType.NUMBER, colour, rank))
            for card_type in COLOURED_ACTIONS:
                fronts.append((card_type, colour, None))

    for _ in range(WILD_COPIES):
        fronts.append((CardType.WILD, Colour.ALL, None))
        fronts.append((CardType.WILDTWO, Colour.ALL, None))
    return fronts


def build_deck(rng: random.Random | None = None) -> list[Card]:
    """Create the full 104-card deck in build order.

    Flip sides are drawn from a shuffled copy of the front descriptors, so
    the flip deck has the same composition as the front deck.

    Args:
        rng: Random source used to pair front and flip sides.

    Returns:
        List of cards (not shuffled).
    """
    rng = rng or random.Random()
    fronts = _front_descriptors()
    flips = [FlipSide.mirror(*front) for front in fronts]
    rng.shuffle(flips)

    cards: list[Card] = []
    for (card_type, colour, rank), flip in zip(fronts, flips):
        card_class = CARD_CLASSES[card_type]
        if card_type == CardType.NUMBER:
            cards.append(card_class(color=colour, rank=rank, flip=flip))
        elif card_type in (CardType.WILD, CardType.WILDTWO):
            cards.append(card_class(flip=flip))
        else:
            cards.append(card_class(color=colour, flip=flip))
    return cards


class Deck:
    """Draw pile plus discard pile.

    The draw pile is drawn from the front; the last element of the discard
    pile is its top card.
    """

    def __init__(
        self,
        cards: Iterable[Card] | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize deck.

        Args:
            cards: Initial draw pile. Builds a full deck if not provided.
            rng: Random source for shuffling (seed it for repeatable games).
        """
        self.rng = rng or random.Random()
        self._cards: list[Card] = (
            list(cards) if cards is not None else build_deck(self.rng)
        )
        self._discards: list[Card] = []
        self.shuffle()

    @property
    def draw_count(self) -> int:
        """Number of cards in the draw pile."""
        return len(self._cards)

    @property
    def discard_count(self) -> int:
        """Number of cards in the discard pile."""
        return len(self._discards)

    @property
    def total_count(self) -> int:
        """Number of cards held by the deck (draw + discard)."""
        return len(self._cards) + len(self._discards)

    @property
    def draw_pile(self) -> tuple[Card, ...]:
        """Read-only view of the draw pile, next card first."""
        return tuple(self._cards)

    @property
    def discard_pile(self) -> tuple[Card, ...]:
        """Read-only view of the discard pile, top card last."""
        return tuple(self._discards)

    def shuffle(self) -> None:
        """Shuffle the draw pile."""
        self.rng.shuffle(self._cards)

    def _reshuffle_discards(self) -> None:
        """Move all discards except the top card back into the draw pile."""
        if len(self._discards) <= 1:
            raise DeckExhaustedError(
                "No cards left to draw: draw pile empty and nothing to reshuffle"
            )
        top = self._discards.pop()
        self._cards.extend(self._discards)
        self._discards = [top]
        self.shuffle()
        logger.debug(f"Reshuffled {len(self._cards)} discards into the draw pile")

    def draw(self) -> Card:
        """Draw the front card of the draw pile.

        Refills the draw pile from the discards when it is empty.

        Returns:
            The drawn card.

        Raises:
            DeckExhaustedError: If neither pile can supply a card.
        """
        if not self._cards:
            self._reshuffle_discards()
        return self._cards.pop(0)

    def discard(self, card: Card) -> None:
        """Put a card on top of the discard pile."""
        self._discards.append(card)

    def peek_top(self) -> Card | None:
        """Get the top discard without removing it."""
        if not self._discards:
            return None
        return self._discards[-1]

    def reclaim(self, returned: Iterable[Card] = ()) -> None:
        """Gather the discards and returned cards back into the draw pile.

        Args:
            returned: Cards coming back from players' hands.
        """
        self._cards.extend(self._discards)
        self._cards.extend(returned)
        self._discards = []
        self.shuffle()
        logger.debug(f"Deck reclaimed, {len(self._cards)} cards in draw pile")

    def __len__(self) -> int:
        return self.total_count
