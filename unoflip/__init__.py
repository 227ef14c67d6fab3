"""UnoFlip rules engine."""

from .config import Config, load_config
from .game import GameEngine, GameEvent, EventType
from .models import Card, CardType, Colour, Deck, Player, TurnPhase

__all__ = [
    "Card",
    "CardType",
    "Colour",
    "Config",
    "Deck",
    "EventType",
    "GameEngine",
    "GameEvent",
    "Player",
    "TurnPhase",
    "load_config",
]
