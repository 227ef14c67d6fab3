"""Game models."""

from .card import (
    Card,
    CardType,
    Colour,
    DrawOneCard,
    FlipCard,
    FlipColour,
    FlipSide,
    FlipType,
    NumberCard,
    ReverseCard,
    SkipCard,
    WildCard,
    WildDrawTwoCard,
)
from .deck import DECK_SIZE, Deck, DeckExhaustedError, build_deck
from .game_state import GameState, TurnPhase
from .player import Player

__all__ = [
    "Card",
    "CardType",
    "Colour",
    "DrawOneCard",
    "FlipCard",
    "FlipColour",
    "FlipSide",
    "FlipType",
    "NumberCard",
    "ReverseCard",
    "SkipCard",
    "WildCard",
    "WildDrawTwoCard",
    "DECK_SIZE",
    "Deck",
    "DeckExhaustedError",
    "build_deck",
    "GameState",
    "TurnPhase",
    "Player",
]
