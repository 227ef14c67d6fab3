"""Move validation for played cards."""

from dataclasses import dataclass

from unoflip.models.card import PLAYABLE_COLOURS, Card, CardType, Colour


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error_message: str = ""


class MoveValidator:
    """Validates a card against the discard top.

    A non-wild card matches on colour (the forced colour if one is active),
    on rank when both cards are numbers, or on type when both are actions.
    A wild card is always playable once a real colour is nominated.
    """

    @staticmethod
    def is_playable_colour(colour: object) -> bool:
        """Check that a nominated colour is one of the four real colours."""
        return isinstance(colour, Colour) and colour in PLAYABLE_COLOURS

    @staticmethod
    def active_colour(top_card: Card | None, forced_colour: Colour | None) -> Colour | None:
        """Colour a non-wild card has to match."""
        if forced_colour is not None:
            return forced_colour
        if top_card is None:
            return None
        return top_card.color

    def validate(
        self,
        card: Card,
        chosen_colour: Colour | None,
        top_card: Card | None,
        forced_colour: Colour | None = None,
    ) -> ValidationResult:
        """Validate playing a card.

        Args:
            card: Card the player wants to play
            chosen_colour: Colour nominated for a wild card (ignored otherwise)
            top_card: Current top of the discard pile
            forced_colour: Colour nominated by the previous wild, if any

        Returns:
            ValidationResult
        """
        if card.is_wild:
            if not self.is_playable_colour(chosen_colour):
                return ValidationResult(
                    is_valid=False,
                    error_message="A colour must be chosen for a wild card",
                )
            return ValidationResult(is_valid=True)

        if top_card is None:
            return ValidationResult(
                is_valid=False,
                error_message="No card on the discard pile",
            )

        if card.color == self.active_colour(top_card, forced_colour):
            return ValidationResult(is_valid=True)

        if card.card_type == CardType.NUMBER:
            if top_card.card_type == CardType.NUMBER and card.rank == top_card.rank:
                return ValidationResult(is_valid=True)
        elif card.card_type == top_card.card_type:
            return ValidationResult(is_valid=True)

        return ValidationResult(
            is_valid=False,
            error_message=(
                f"{card} does not match {top_card}"
                + (f" (colour {forced_colour.value})" if forced_colour else "")
            ),
        )
