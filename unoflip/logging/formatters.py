"""Formatters for game log output."""

from unoflip.models.card import Card, CardType, Colour
from unoflip.models.player import Player

# Colour codes for log output
COLOUR_CODES: dict[Colour, str] = {
    Colour.RED: "R",
    Colour.BLUE: "B",
    Colour.GREEN: "G",
    Colour.YELLOW: "Y",
}

# Type codes appended to the colour code (numbers use their rank)
TYPE_CODES: dict[CardType, str] = {
    CardType.SKIP: "S",
    CardType.DRAW_ONE: "D1",
    CardType.REVERSE: "R",
    CardType.FLIP: "F",
}


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "R5" for red 5, "BS" for blue skip,
        "W" for wild, "W2" for wild draw two).
    """
    if card.card_type == CardType.WILD:
        return "W"
    if card.card_type == CardType.WILDTWO:
        return "W2"
    colour = COLOUR_CODES[card.color]
    if card.card_type == CardType.NUMBER:
        return f"{colour}{card.rank}"
    return f"{colour}{TYPE_CODES[card.card_type]}"


def format_cards(cards: list[Card] | tuple[Card, ...]) -> str:
    """Format cards to comma-separated string.

    Returns:
        Comma-separated card codes (e.g., "R5,G5,W"). Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_hands(players: list[Player] | tuple[Player, ...]) -> dict[str, str]:
    """Format all players' hands to dict.

    Args:
        players: Players in turn order.

    Returns:
        Dict mapping seat index (as string) to formatted hand string.
    """
    return {str(i): format_cards(p.hand) for i, p in enumerate(players)}
