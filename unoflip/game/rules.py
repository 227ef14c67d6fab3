"""Card effects and scoring rules."""

from dataclasses import dataclass

from unoflip.models.card import CardType
from unoflip.models.player import Player


@dataclass(frozen=True)
class CardEffect:
    """What playing a card does to the turn order.

    Attributes:
        advance_steps: Seats to move on the next advance.
        victim_draws: Cards the next player draws immediately.
        reverses: Whether the play flips the direction.
    """

    advance_steps: int = 1
    victim_draws: int = 0
    reverses: bool = False

    @property
    def name(self) -> str | None:
        """Effect name for the game log, None for a plain play."""
        if self.reverses:
            return "reverse"
        if self.victim_draws:
            return "draw_penalty"
        if self.advance_steps > 1:
            return "skip"
        return None


# Every CardType has an entry
CARD_EFFECTS: dict[CardType, CardEffect] = {
    CardType.NUMBER: CardEffect(),
    CardType.SKIP: CardEffect(advance_steps=2),
    CardType.DRAW_ONE: CardEffect(advance_steps=2, victim_draws=1),
    CardType.REVERSE: CardEffect(reverses=True),
    CardType.FLIP: CardEffect(),
    CardType.WILD: CardEffect(),
    CardType.WILDTWO: CardEffect(advance_steps=2, victim_draws=2),
}

# With two players a reverse hands the turn straight back
TWO_PLAYER_REVERSE_STEPS = 0


def effect_for(card_type: CardType, num_players: int) -> CardEffect:
    """Get the effect of a card type for a table of the given size."""
    effect = CARD_EFFECTS[card_type]
    if effect.reverses and num_players == 2:
        return CardEffect(advance_steps=TWO_PLAYER_REVERSE_STEPS, reverses=True)
    return effect


def round_points(players: list[Player] | tuple[Player, ...], winner: int) -> int:
    """Points the round winner collects from everyone else's hand.

    Args:
        players: All players in turn order.
        winner: Seat index of the player who emptied their hand.

    Returns:
        Sum of the point values of the other players' cards.
    """
    return sum(p.hand_points() for i, p in enumerate(players) if i != winner)
