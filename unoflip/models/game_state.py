"""Game state models."""

from enum import Enum

from pydantic import BaseModel

from .card import Colour


class TurnPhase(str, Enum):
    """Where the engine is in the turn cycle."""

    AWAITING_ACTION = "awaiting_action"  # Current player may play or draw
    ACTION_TAKEN = "action_taken"  # Played or drew; only advance is valid
    ROUND_OVER = "round_over"
    MATCH_OVER = "match_over"


class GameState(BaseModel):
    """Turn and round state owned by the engine."""

    # Progress
    round_number: int = 0
    turn_number: int = 0

    # Turn order
    current_player: int = 0  # Index into the engine's player list
    direction: int = 1  # 1 = clockwise, -1 = counter-clockwise
    pending_advance_steps: int = 1
    action_taken: bool = False

    # Active colour nominated by the last wild card
    forced_colour: Colour | None = None

    # Round / match results (indices into the player list)
    round_over: bool = False
    game_over: bool = False
    round_winner: int | None = None
    match_winner: int | None = None
    last_round_points: int = 0

    @property
    def phase(self) -> TurnPhase:
        if self.game_over:
            return TurnPhase.MATCH_OVER
        if self.round_over:
            return TurnPhase.ROUND_OVER
        if self.action_taken:
            return TurnPhase.ACTION_TAKEN
        return TurnPhase.AWAITING_ACTION

    def reset_for_new_round(self) -> None:
        """Reset turn state at the start of a round. Match results survive."""
        self.round_number += 1
        self.turn_number = 0
        self.current_player = 0
        self.direction = 1
        self.pending_advance_steps = 1
        self.action_taken = False
        self.forced_colour = None
        self.round_over = False
        self.round_winner = None
        self.last_round_points = 0

    def reset_for_new_game(self) -> None:
        """Reset everything for a new match."""
        self.round_number = 0
        self.game_over = False
        self.match_winner = None
        self.reset_for_new_round()

    def __str__(self) -> str:
        parts = [f"Round {self.round_number}, Turn {self.turn_number}"]
        if self.direction < 0:
            parts.append("[REVERSED]")
        if self.forced_colour is not None:
            parts.append(f"[{self.forced_colour.value}]")
        parts.append(f"Player {self.current_player}'s turn ({self.phase.value})")
        return " ".join(parts)
