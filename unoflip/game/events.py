"""State-change events emitted by the engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from unoflip.models.card import Card, Colour
    from unoflip.models.player import Player

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Which command produced the event."""

    GAME_STARTED = "game_started"
    ROUND_STARTED = "round_started"
    CARD_PLAYED = "card_played"
    CARD_DRAWN = "card_drawn"
    TURN_ADVANCED = "turn_advanced"
    ROUND_OVER = "round_over"
    MATCH_OVER = "match_over"


@dataclass(frozen=True, eq=False)
class GameEvent:
    """Snapshot of the engine state after a mutation."""

    event_type: EventType
    round_over: bool
    game_over: bool
    current_player: Player | None
    top_card: Card | None
    forced_colour: Colour | None


Observer = Callable[[GameEvent], None]


class EventChannel:
    """Ordered list of observers notified after every engine mutation."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []
        self._dispatching = False

    @property
    def is_dispatching(self) -> bool:
        """True while observers are being notified."""
        return self._dispatching

    def subscribe(self, observer: Observer) -> None:
        """Register an observer. Registering the same observer twice is a no-op."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        """Remove an observer if registered."""
        if observer in self._observers:
            self._observers.remove(observer)

    def emit(self, event: GameEvent) -> None:
        """Notify every observer in subscription order."""
        logger.debug(f"Emitting {event.event_type.value} to {len(self._observers)} observers")
        self._dispatching = True
        try:
            for observer in list(self._observers):
                observer(event)
        finally:
            self._dispatching = False

    def __len__(self) -> int:
        return len(self._observers)
