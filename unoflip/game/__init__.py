"""Game logic."""

from .engine import GameEngine
from .events import EventChannel, EventType, GameEvent
from .rules import CARD_EFFECTS, CardEffect, effect_for, round_points
from .validator import MoveValidator, ValidationResult

__all__ = [
    "CARD_EFFECTS",
    "CardEffect",
    "EventChannel",
    "EventType",
    "GameEngine",
    "GameEvent",
    "MoveValidator",
    "ValidationResult",
    "effect_for",
    "round_points",
]
