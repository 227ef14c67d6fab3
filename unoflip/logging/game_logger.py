"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from unoflip.models.card import Card, Colour
from unoflip.models.player import Player

from .formatters import format_card, format_hands


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of a match.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_match_start(self, players: list[Player] | tuple[Player, ...]) -> None:
        """Log match start with the seating order."""
        self._write({
            "type": "match_start",
            "timestamp": datetime.now().isoformat(),
            "players": [
                {"seat": i, "name": p.name}
                for i, p in enumerate(players)
            ],
        })

    def log_round_start(
        self,
        round_num: int,
        players: list[Player] | tuple[Player, ...],
        top_card: Card | None,
        first_player: int,
    ) -> None:
        """Log round start with dealt hands and the revealed discard.

        Args:
            round_num: Round number within the match.
            players: Players in turn order, holding their dealt hands.
            top_card: First card of the discard pile.
            first_player: Seat index that acts first.
        """
        self._write({
            "type": "round_start",
            "round": round_num,
            "hands": format_hands(players),
            "top": format_card(top_card) if top_card else "",
            "first_player": first_player,
        })

    def log_turn(
        self,
        round_num: int,
        turn_num: int,
        player_index: int,
        action: str,
        card: Card,
        top_card: Card | None,
        forced_colour: Colour | None,
        players: list[Player] | tuple[Player, ...],
    ) -> None:
        """Log a single play or draw.

        Args:
            round_num: Round number.
            turn_num: Turn number within the round.
            player_index: Seat that took the action.
            action: "play" or "draw".
            card: Card played or drawn.
            top_card: Discard top after the action.
            forced_colour: Active forced colour after the action.
            players: All players, for their hands after the action.
        """
        self._write({
            "type": "turn",
            "round": round_num,
            "turn": turn_num,
            "player": player_index,
            "action": action,
            "card": format_card(card),
            "top": format_card(top_card) if top_card else "",
            "forced_colour": forced_colour.value if forced_colour else None,
            "hands": format_hands(players),
        })

    def log_special(
        self,
        round_num: int,
        turn_num: int,
        event: str,
        player_index: int,
        detail: dict[str, Any] | None = None,
    ) -> None:
        """Log a card effect.

        Args:
            round_num: Round number.
            turn_num: Turn number when the effect happened.
            event: Effect name (e.g., "skip", "reverse", "draw_penalty").
            player_index: Seat that played the card.
            detail: Additional effect details.
        """
        record: dict[str, Any] = {
            "type": "special",
            "round": round_num,
            "turn": turn_num,
            "event": event,
            "player": player_index,
        }
        if detail:
            record["detail"] = detail
        self._write(record)

    def log_round_end(
        self,
        round_num: int,
        winner: int,
        points: int,
        players: list[Player] | tuple[Player, ...],
    ) -> None:
        """Log round end with the points awarded and running scores."""
        self._write({
            "type": "round_end",
            "round": round_num,
            "winner": winner,
            "points": points,
            "scores": {str(i): p.score for i, p in enumerate(players)},
        })

    def log_match_end(
        self,
        total_rounds: int,
        winner: int,
        players: list[Player] | tuple[Player, ...],
    ) -> None:
        """Log match end with final scores."""
        self._write({
            "type": "match_end",
            "total_rounds": total_rounds,
            "winner": winner,
            "final_scores": {str(i): p.score for i, p in enumerate(players)},
        })
