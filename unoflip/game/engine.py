"""Game engine for UnoFlip."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from unoflip.config import Config
from unoflip.logging import GameLogger
from unoflip.models.card import Card, CardType, Colour
from unoflip.models.deck import Deck
from unoflip.models.game_state import GameState, TurnPhase
from unoflip.models.player import Player

from .events import EventChannel, EventType, GameEvent
from .rules import effect_for, round_points
from .validator import MoveValidator

if TYPE_CHECKING:
    from .events import Observer
    from .rules import CardEffect

logger = logging.getLogger(__name__)


class GameEngine:
    """Rules engine for a multi-round UnoFlip match.

    Commands (``initialize_game``, ``play_card``, ``draw_card``,
    ``advance_to_next_player``, ``start_new_round``) are called one at a
    time by a controller. A command that is invalid in the current phase,
    or whose move is illegal, returns a failure value and leaves every
    piece of state untouched. Each successful command emits one
    ``GameEvent`` to the subscribed observers.
    """

    def __init__(
        self,
        config: Config | None = None,
        rng: random.Random | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            rng: Random source for shuffling (seeded from config if not provided)
            game_logger: GameLogger instance for detailed logging
        """
        self.config = config or Config()
        self.rng = rng or random.Random(self.config.game.seed)
        self.game_logger = game_logger

        self.deck = Deck(rng=self.rng)
        self.validator = MoveValidator()
        self.events = EventChannel()

        self.state = GameState()
        self._players: list[Player] = []

    # ------------------------------------------------------------------
    # Observers

    def subscribe(self, observer: Observer) -> None:
        """Register a callable notified with a GameEvent after each mutation."""
        self.events.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        """Stop notifying an observer."""
        self.events.unsubscribe(observer)

    def _notify(self, event_type: EventType) -> None:
        self.events.emit(
            GameEvent(
                event_type=event_type,
                round_over=self.state.round_over,
                game_over=self.state.game_over,
                current_player=self.current_player,
                top_card=self.top_card,
                forced_colour=self.state.forced_colour,
            )
        )

    def _check_not_dispatching(self) -> None:
        if self.events.is_dispatching:
            raise RuntimeError("Engine commands cannot be issued from an event observer")

    # ------------------------------------------------------------------
    # Queries

    @property
    def players(self) -> tuple[Player, ...]:
        """Players in turn order."""
        return tuple(self._players)

    @property
    def current_player(self) -> Player | None:
        """Player whose turn it is (None before the game starts)."""
        if not self._players:
            return None
        return self._players[self.state.current_player]

    @property
    def current_turn_index(self) -> int:
        return self.state.current_player

    @property
    def top_card(self) -> Card | None:
        return self.deck.peek_top()

    @property
    def forced_colour(self) -> Colour | None:
        return self.state.forced_colour

    @property
    def active_colour(self) -> Colour | None:
        """Colour a non-wild card has to match right now."""
        return self.validator.active_colour(self.top_card, self.state.forced_colour)

    @property
    def direction(self) -> int:
        return self.state.direction

    @property
    def pending_advance_steps(self) -> int:
        return self.state.pending_advance_steps

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    @property
    def round_number(self) -> int:
        return self.state.round_number

    @property
    def last_round_points(self) -> int:
        """Points awarded to the winner of the most recent round."""
        return self.state.last_round_points

    @property
    def total_card_count(self) -> int:
        """Cards in the draw pile, the discard pile and every hand."""
        return self.deck.total_count + sum(p.hand_size for p in self._players)

    def is_round_over(self) -> bool:
        return self.state.round_over

    def is_game_over(self) -> bool:
        return self.state.game_over

    def get_round_winner(self) -> Player | None:
        if self.state.round_winner is None:
            return None
        return self._players[self.state.round_winner]

    def get_winner(self) -> Player | None:
        """Match winner, once the match is over."""
        if self.state.match_winner is None:
            return None
        return self._players[self.state.match_winner]

    def is_legal(self, card: Card, chosen_colour: Colour | None = None) -> bool:
        """Check whether a card may be played on the current discard top."""
        return self.validator.validate(
            card, chosen_colour, self.top_card, self.state.forced_colour
        ).is_valid

    # ------------------------------------------------------------------
    # Commands

    def initialize_game(self, names: list[str]) -> bool:
        """Start a new match.

        Args:
            names: Player names in turn order (2-4, distinct, non-blank)

        Returns:
            True if the match started, False if the names were rejected.
        """
        self._check_not_dispatching()
        error = self._validate_names(names)
        if error:
            logger.warning(f"Cannot start game: {error}")
            return False

        # Cards still held from a previous match go back into the deck
        returned: list[Card] = []
        for player in self._players:
            returned.extend(player.clear_hand())
        self.deck.reclaim(returned)

        self._players = [Player(name=name) for name in names]
        self.state.reset_for_new_game()
        self._deal()

        logger.info(f"Game initialized with players: {', '.join(names)}")
        if self.game_logger:
            self.game_logger.log_match_start(self._players)
            self.game_logger.log_round_start(
                self.state.round_number,
                self._players,
                self.top_card,
                self.state.current_player,
            )

        self._notify(EventType.GAME_STARTED)
        return True

    def _validate_names(self, names: list[str]) -> str:
        """Return an error message for a bad player list, "" if it is fine."""
        game = self.config.game
        if not isinstance(names, (list, tuple)):
            return "player names must be a list"
        if not (game.min_players <= len(names) <= game.max_players):
            return f"need {game.min_players}-{game.max_players} players"
        for name in names:
            if not isinstance(name, str) or not name.strip():
                return "player names cannot be empty"
        if len(set(names)) != len(names):
            return "player names must be distinct"
        return ""

    def _deal(self) -> None:
        """Deal hands and reveal a number card on the discard pile."""
        hand_size = self.config.game.hand_size
        for player in self._players:
            while player.hand_size < hand_size:
                player.add_card(self.deck.draw())

        # Action and wild cards turned up here stay buried in the discards
        while True:
            card = self.deck.draw()
            self.deck.discard(card)
            if card.card_type == CardType.NUMBER:
                break

        logger.debug(f"Dealt {hand_size} cards each, starting card: {self.top_card}")

    def start_new_round(self) -> bool:
        """Deal a new round, keeping players and scores.

        Returns:
            True if a new round started, False if the current round is not
            over or the match has already been decided.
        """
        self._check_not_dispatching()
        if not self.state.round_over or self.state.game_over:
            logger.info("Cannot start a new round now")
            return False

        returned: list[Card] = []
        for player in self._players:
            returned.extend(player.clear_hand())
        self.deck.reclaim(returned)

        self.state.reset_for_new_round()
        self._deal()

        logger.info(f"Round {self.state.round_number} started")
        if self.game_logger:
            self.game_logger.log_round_start(
                self.state.round_number,
                self._players,
                self.top_card,
                self.state.current_player,
            )

        self._notify(EventType.ROUND_STARTED)
        return True

    def _can_act(self) -> bool:
        return bool(self._players) and self.state.phase == TurnPhase.AWAITING_ACTION

    def play_card(self, index: int, chosen_colour: Colour | None = None) -> bool:
        """Play a card from the current player's hand.

        Args:
            index: 0-based position of the card in the hand
            chosen_colour: Colour nominated when playing a wild card

        Returns:
            True if the card was played. False leaves the game untouched.
        """
        self._check_not_dispatching()
        if not self._can_act():
            logger.info(f"Cannot play a card in phase {self.state.phase.value}")
            return False

        player = self._players[self.state.current_player]
        hand = player.hand
        if index < 0 or index >= len(hand):
            logger.info(f"{player.name}: invalid card index {index}")
            return False

        card = hand[index]
        validation = self.validator.validate(
            card, chosen_colour, self.top_card, self.state.forced_colour
        )
        if not validation.is_valid:
            logger.info(f"{player.name}: illegal move, {validation.error_message}")
            return False

        player.remove_card(index)
        self.deck.discard(card)
        self.state.forced_colour = chosen_colour if card.is_wild else None
        self.state.turn_number += 1

        logger.debug(f"{player.name} played {card}")
        if self.game_logger:
            self.game_logger.log_turn(
                self.state.round_number,
                self.state.turn_number,
                self.state.current_player,
                "play",
                card,
                self.top_card,
                self.state.forced_colour,
                self._players,
            )

        if player.hand_size == 0:
            self._end_round()
            self._notify(
                EventType.MATCH_OVER if self.state.game_over else EventType.ROUND_OVER
            )
            return True

        self._resolve_effect(card)
        self.state.action_taken = True
        self._notify(EventType.CARD_PLAYED)
        return True

    def _seat(self, steps: int) -> int:
        """Seat index ``steps`` places from the current player."""
        n = len(self._players)
        return (self.state.current_player + steps * self.state.direction) % n

    def _resolve_effect(self, card: Card) -> None:
        """Apply the played card's effect to turn order and other hands."""
        effect: CardEffect = effect_for(card.card_type, len(self._players))

        if effect.victim_draws:
            victim = self._players[self._seat(1)]
            for _ in range(effect.victim_draws):
                victim.add_card(self.deck.draw())
            logger.debug(f"{victim.name} draws {effect.victim_draws}")

        if effect.reverses:
            self.state.direction = -self.state.direction

        self.state.pending_advance_steps = effect.advance_steps

        if effect.name and self.game_logger:
            self.game_logger.log_special(
                self.state.round_number,
                self.state.turn_number,
                effect.name,
                self.state.current_player,
                {
                    "direction": self.state.direction,
                    "advance_steps": effect.advance_steps,
                    "victim_draws": effect.victim_draws,
                },
            )

    def _end_round(self) -> None:
        """Score the round won by the current player."""
        winner_index = self.state.current_player
        winner = self._players[winner_index]
        points = round_points(self._players, winner_index)

        winner.increase_score(points)
        self.state.round_over = True
        self.state.round_winner = winner_index
        self.state.last_round_points = points
        logger.info(
            f"Round {self.state.round_number} won by {winner.name} "
            f"(+{points}, total {winner.score})"
        )
        if self.game_logger:
            self.game_logger.log_round_end(
                self.state.round_number, winner_index, points, self._players
            )

        if winner.score >= self.config.game.match_threshold:
            self.state.game_over = True
            self.state.match_winner = winner_index
            logger.info(f"Match won by {winner.name} with {winner.score} points")
            if self.game_logger:
                self.game_logger.log_match_end(
                    self.state.round_number, winner_index, self._players
                )

    def draw_card(self) -> Card | None:
        """Draw one card into the current player's hand.

        Returns:
            The drawn card, or None if drawing is not allowed right now.
        """
        self._check_not_dispatching()
        if not self._can_act():
            logger.info(f"Cannot draw in phase {self.state.phase.value}")
            return None

        player = self._players[self.state.current_player]
        card = self.deck.draw()
        player.add_card(card)
        self.state.pending_advance_steps = 1
        self.state.action_taken = True
        self.state.turn_number += 1

        logger.debug(f"{player.name} drew a card")
        if self.game_logger:
            self.game_logger.log_turn(
                self.state.round_number,
                self.state.turn_number,
                self.state.current_player,
                "draw",
                card,
                self.top_card,
                self.state.forced_colour,
                self._players,
            )

        self._notify(EventType.CARD_DRAWN)
        return card

    def advance_to_next_player(self) -> bool:
        """Pass the turn on by the steps the last play or draw set.

        Returns:
            True if the turn moved, False if the current player has not
            acted yet or the round is over.
        """
        self._check_not_dispatching()
        if not self._players or self.state.phase != TurnPhase.ACTION_TAKEN:
            logger.info(f"Cannot advance in phase {self.state.phase.value}")
            return False

        self.state.current_player = self._seat(self.state.pending_advance_steps)
        self.state.pending_advance_steps = 1
        self.state.action_taken = False

        logger.debug(f"Turn passes to {self._players[self.state.current_player].name}")
        self._notify(EventType.TURN_ADVANCED)
        return True
