"""Tests for the game engine."""

import random

import pytest

from unoflip.config import Config, GameConfig
from unoflip.game.engine import GameEngine
from unoflip.models.card import (
    CardType,
    Colour,
    DrawOneCard,
    FlipColour,
    NumberCard,
    ReverseCard,
    SkipCard,
    WildCard,
    WildDrawTwoCard,
)
from unoflip.models.deck import DECK_SIZE, Deck
from unoflip.models.game_state import TurnPhase


def set_hand(player, cards):
    """Replace a player's hand."""
    player.clear_hand()
    for card in cards:
        player.add_card(card)


def set_top(engine, card):
    """Put a known card on the discard pile."""
    engine.deck.discard(card)
    return card


def make_engine(names, seed=42, config=None):
    engine = GameEngine(config=config, rng=random.Random(seed))
    assert engine.initialize_game(names)
    return engine


@pytest.fixture
def engine():
    return make_engine(["A", "B"])


@pytest.fixture
def engine3():
    return make_engine(["A", "B", "C"])


def play_greedy_turn(engine):
    """Play the first legal card (wilds nominate red), else draw."""
    player = engine.current_player
    for i, card in enumerate(player.hand):
        colour = Colour.RED if card.is_wild else None
        if engine.is_legal(card, colour):
            assert engine.play_card(i, colour)
            return
    assert engine.draw_card() is not None


class TestInitializeGame:
    """Tests for game initialization."""

    def test_players_created_in_order(self, engine):
        assert [p.name for p in engine.players] == ["A", "B"]
        assert engine.current_player is engine.players[0]

    def test_initial_state(self, engine):
        assert all(p.hand_size == 7 for p in engine.players)
        assert all(p.score == 0 for p in engine.players)
        assert engine.top_card.card_type == CardType.NUMBER
        assert engine.current_turn_index == 0
        assert engine.direction == 1
        assert engine.forced_colour is None
        assert engine.pending_advance_steps == 1
        assert engine.phase == TurnPhase.AWAITING_ACTION
        assert engine.round_number == 1
        assert not engine.is_round_over()
        assert not engine.is_game_over()
        assert engine.get_round_winner() is None
        assert engine.get_winner() is None

    def test_card_count_after_init(self, engine):
        assert engine.total_card_count == DECK_SIZE

    @pytest.mark.parametrize(
        "names",
        [
            ["A"],
            ["A", "B", "C", "D", "E"],
            ["A", ""],
            ["A", "   "],
            ["A", "A"],
            [],
        ],
    )
    def test_invalid_names_rejected(self, names):
        engine = GameEngine(rng=random.Random(0))
        assert not engine.initialize_game(names)
        assert engine.players == ()
        assert engine.current_player is None
        assert engine.total_card_count == DECK_SIZE

    @pytest.mark.parametrize("names", ["AB", "ABC", None, 42, {"A", "B"}])
    def test_names_must_be_a_list(self, names):
        """Test that a bare string or other non-sequence is not split into players."""
        engine = GameEngine(rng=random.Random(0))
        assert not engine.initialize_game(names)
        assert engine.players == ()

    def test_names_as_tuple(self):
        engine = GameEngine(rng=random.Random(0))
        assert engine.initialize_game(("A", "B"))
        assert [p.name for p in engine.players] == ["A", "B"]

    def test_invalid_names_leave_running_game_alone(self, engine):
        players = engine.players
        top = engine.top_card

        assert not engine.initialize_game(["Solo"])

        assert engine.players == players
        assert engine.top_card is top

    def test_reinitialize_starts_new_match(self, engine):
        engine.draw_card()
        engine.players[0].increase_score(30)

        assert engine.initialize_game(["X", "Y", "Z", "W"])

        assert [p.name for p in engine.players] == ["X", "Y", "Z", "W"]
        assert all(p.score == 0 for p in engine.players)
        assert engine.total_card_count == DECK_SIZE
        assert engine.phase == TurnPhase.AWAITING_ACTION

    def test_commands_fail_before_init(self):
        engine = GameEngine(rng=random.Random(0))
        assert not engine.play_card(0, None)
        assert engine.draw_card() is None
        assert not engine.advance_to_next_player()
        assert not engine.start_new_round()

    def test_same_seed_same_deal(self):
        first = make_engine(["A", "B"], seed=9)
        second = make_engine(["A", "B"], seed=9)
        assert first.players[0].hand == second.players[0].hand
        assert first.top_card == second.top_card


class TestPlayCard:
    """Tests for playing cards."""

    def test_colour_match(self, engine):
        set_top(engine, NumberCard(color=Colour.RED, rank=5))
        played = NumberCard(color=Colour.RED, rank=7)
        set_hand(engine.players[0], [played, NumberCard(color=Colour.BLUE, rank=9)])

        assert engine.play_card(0)

        assert engine.top_card is played
        assert engine.players[0].hand_size == 1
        assert engine.phase == TurnPhase.ACTION_TAKEN
        assert engine.pending_advance_steps == 1

    def test_rank_match(self, engine):
        set_top(engine, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine.players[0], [NumberCard(color=Colour.BLUE, rank=5), WildCard()])
        assert engine.play_card(0)

    def test_wild_sets_forced_colour(self, engine):
        set_top(engine, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine.players[0], [WildCard(), WildCard()])
        assert engine.play_card(0, Colour.GREEN)
        assert engine.forced_colour == Colour.GREEN
        assert engine.active_colour == Colour.GREEN
        assert engine.advance_to_next_player()

        set_hand(engine.players[1], [
            NumberCard(color=Colour.RED, rank=5),
            NumberCard(color=Colour.GREEN, rank=2),
            NumberCard(color=Colour.GREEN, rank=3),
        ])
        assert not engine.play_card(0)
        assert engine.play_card(1)
        assert engine.forced_colour is None

    def test_illegal_play_changes_nothing(self, engine):
        """Test that an illegal play leaves every piece of state untouched."""
        top = set_top(engine, NumberCard(color=Colour.RED, rank=5))
        player = engine.current_player
        set_hand(player, [NumberCard(color=Colour.BLUE, rank=7), SkipCard(color=Colour.GREEN)])
        hand_before = player.hand
        state_before = engine.state.model_copy()
        total_before = engine.total_card_count

        assert not engine.play_card(0)
        assert not engine.play_card(1)

        assert all(a is b for a, b in zip(player.hand, hand_before))
        assert len(player.hand) == len(hand_before)
        assert engine.top_card is top
        assert [p.score for p in engine.players] == [0, 0]
        assert engine.state == state_before
        assert engine.total_card_count == total_before

    def test_wild_without_colour_is_rejected(self, engine):
        top = engine.top_card
        player = engine.current_player
        wild = WildCard()
        set_hand(player, [wild])

        assert not engine.play_card(0, None)
        assert not engine.play_card(0, Colour.ALL)

        assert player.hand_size == 1
        assert player.hand[0] is wild
        assert engine.top_card is top
        assert not engine.is_round_over()
        assert player.score == 0

    @pytest.mark.parametrize("colour", [FlipColour.PINK, "RED", "red"])
    def test_wild_with_foreign_colour_is_rejected(self, engine, colour):
        """Test that a wild nominating a non-playable colour changes nothing."""
        top = engine.top_card
        player = engine.current_player
        set_hand(player, [WildCard(), NumberCard(color=Colour.RED, rank=1)])
        state_before = engine.state.model_copy()

        assert not engine.is_legal(WildCard(), colour)
        assert not engine.play_card(0, colour)

        assert player.hand_size == 2
        assert engine.top_card is top
        assert engine.state == state_before
        assert engine.forced_colour is None

        assert engine.play_card(0, Colour.GREEN)
        assert engine.forced_colour == Colour.GREEN

    @pytest.mark.parametrize("index", [-1, 7, 100])
    def test_index_out_of_range(self, engine, index):
        top = engine.top_card
        assert not engine.play_card(index, Colour.RED)
        assert engine.current_player.hand_size == 7
        assert engine.top_card is top

    def test_one_action_per_turn(self, engine):
        set_hand(engine.players[0], [WildCard(), WildCard(), WildCard()])
        assert engine.play_card(0, Colour.RED)
        assert not engine.play_card(0, Colour.RED)
        assert engine.draw_card() is None
        assert engine.players[0].hand_size == 2

    def test_advance_requires_action(self, engine):
        assert not engine.advance_to_next_player()
        assert engine.current_turn_index == 0


class TestCardEffects:
    """Tests for special card effects."""

    def test_number_advances_one(self, engine3):
        set_top(engine3, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine3.players[0], [NumberCard(color=Colour.RED, rank=1), WildCard()])
        engine3.play_card(0)
        engine3.advance_to_next_player()
        assert engine3.current_turn_index == 1

    def test_skip(self, engine3):
        set_top(engine3, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine3.players[0], [SkipCard(color=Colour.RED), WildCard()])

        assert engine3.play_card(0)
        assert engine3.pending_advance_steps == 2
        assert engine3.advance_to_next_player()

        assert engine3.current_turn_index == 2
        assert engine3.pending_advance_steps == 1

    def test_reverse_three_players(self, engine3):
        set_top(engine3, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine3.players[0], [ReverseCard(color=Colour.RED), WildCard()])

        assert engine3.play_card(0)
        assert engine3.direction == -1
        assert engine3.advance_to_next_player()

        assert engine3.current_turn_index == 2

    def test_reverse_two_players_acts_as_skip(self, engine):
        """Test that a two-player reverse flips direction and repeats the turn."""
        set_top(engine, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine.players[0], [ReverseCard(color=Colour.RED), WildCard()])

        assert engine.play_card(0)
        assert engine.direction == -1
        assert engine.pending_advance_steps == 0
        assert engine.advance_to_next_player()

        assert engine.current_player is engine.players[0]
        assert engine.phase == TurnPhase.AWAITING_ACTION
        assert engine.play_card(0, Colour.BLUE)

    def test_draw_one(self, engine3):
        set_top(engine3, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine3.players[0], [DrawOneCard(color=Colour.RED), WildCard()])
        victim_before = engine3.players[1].hand_size

        assert engine3.play_card(0)

        assert engine3.players[1].hand_size == victim_before + 1
        assert engine3.players[2].hand_size == 7
        assert engine3.advance_to_next_player()
        assert engine3.current_turn_index == 2

    def test_draw_one_follows_direction(self, engine3):
        """Test that the penalty hits the next seat in the current direction."""
        set_top(engine3, NumberCard(color=Colour.RED, rank=5))
        set_hand(engine3.players[0], [ReverseCard(color=Colour.RED), WildCard()])
        engine3.play_card(0)
        engine3.advance_to_next_player()
        assert engine3.current_turn_index == 2

        set_hand(engine3.players[2], [DrawOneCard(color=Colour.RED), WildCard()])
        b_before = engine3.players[1].hand_size
        a_before = engine3.players[0].hand_size

        assert engine3.play_card(0)

        assert engine3.players[1].hand_size == b_before + 1
        assert engine3.players[0].hand_size == a_before
        engine3.advance_to_next_player()
        assert engine3.current_turn_index == 0

    def test_wild_draw_two(self, engine3):
        set_hand(engine3.players[0], [WildDrawTwoCard(), WildCard()])
        victim_before = engine3.players[1].hand_size

        assert engine3.play_card(0, Colour.YELLOW)

        assert engine3.players[1].hand_size == victim_before + 2
        assert engine3.forced_colour == Colour.YELLOW
        assert engine3.pending_advance_steps == 2
        engine3.advance_to_next_player()
        assert engine3.current_turn_index == 2

    def test_effects_keep_card_count(self, engine3):
        set_hand(engine3.players[0], [WildDrawTwoCard(), WildCard()])
        total = engine3.total_card_count
        engine3.play_card(0, Colour.RED)
        assert engine3.total_card_count == total


class TestDrawCard:
    """Tests for drawing."""

    def test_draw_adds_one_card(self, engine):
        current = engine.current_player
        before_size = current.hand_size
        before_score = current.score

        card = engine.draw_card()

        assert card is current.hand[-1]
        assert current.hand_size == before_size + 1
        assert current.score == before_score
        assert not engine.is_round_over()
        assert engine.phase == TurnPhase.ACTION_TAKEN
        assert engine.pending_advance_steps == 1
        assert engine.total_card_count == DECK_SIZE

    def test_draw_then_advance(self, engine):
        engine.draw_card()
        assert engine.advance_to_next_player()
        assert engine.current_player is engine.players[1]


class TestRoundEnd:
    """Tests for round scoring and new rounds."""

    def test_round_winner_collects_points(self, engine):
        a, b = engine.players
        set_hand(a, [WildCard()])
        set_hand(b, [NumberCard(color=Colour.RED, rank=10)])

        assert engine.play_card(0, Colour.RED)

        assert engine.is_round_over()
        assert engine.get_round_winner() is a
        assert a.score == 10
        assert b.score == 0
        assert engine.last_round_points == 10
        assert engine.phase == TurnPhase.ROUND_OVER
        assert not engine.is_game_over()

    def test_points_from_every_opponent(self, engine3):
        a, b, c = engine3.players
        set_hand(a, [WildCard()])
        set_hand(b, [SkipCard(color=Colour.RED), NumberCard(color=Colour.BLUE, rank=3)])
        set_hand(c, [WildDrawTwoCard()])

        engine3.play_card(0, Colour.RED)

        assert a.score == 73

    def test_no_moves_after_round_over(self, engine):
        a, b = engine.players
        set_hand(a, [WildCard()])
        engine.play_card(0, Colour.RED)

        assert not engine.advance_to_next_player()
        assert engine.draw_card() is None
        assert not engine.play_card(0, Colour.RED)
        assert engine.current_player is a

    def test_last_card_effect_is_not_applied(self, engine):
        """Test that a winning draw card does not penalise the next player."""
        a, b = engine.players
        set_hand(a, [WildDrawTwoCard()])
        b_before = b.hand_size

        engine.play_card(0, Colour.RED)

        assert b.hand_size == b_before
        assert a.score == b.hand_points()

    def test_start_new_round_keeps_scores_and_players(self, engine):
        a, b = engine.players
        set_hand(a, [WildCard()])
        set_hand(b, [NumberCard(color=Colour.RED, rank=10)])
        engine.play_card(0, Colour.RED)
        total = engine.total_card_count

        assert engine.start_new_round()

        assert engine.players[0] is a
        assert engine.players[1] is b
        assert a.score == 10
        assert not engine.is_round_over()
        assert engine.get_round_winner() is None
        assert engine.round_number == 2
        assert engine.current_turn_index == 0
        assert engine.direction == 1
        assert engine.forced_colour is None
        assert all(p.hand_size == 7 for p in engine.players)
        assert engine.top_card.card_type == CardType.NUMBER
        assert engine.total_card_count == total

    def test_start_new_round_requires_round_over(self, engine):
        assert not engine.start_new_round()
        assert engine.round_number == 1


class TestMatchEnd:
    """Tests for match completion."""

    def test_big_round_ends_match(self, engine):
        a, b = engine.players
        set_hand(a, [WildCard()])
        set_hand(b, [WildDrawTwoCard() for _ in range(10)])

        assert engine.get_winner() is None
        engine.play_card(0, Colour.RED)

        assert engine.is_game_over()
        assert engine.get_winner() is a
        assert engine.phase == TurnPhase.MATCH_OVER
        assert not engine.start_new_round()

    def test_scores_accumulate_over_rounds(self):
        config = Config(game=GameConfig(match_threshold=60))
        engine = make_engine(["A", "B"], config=config)
        a, b = engine.players

        set_hand(a, [WildCard()])
        set_hand(b, [WildCard()])
        engine.play_card(0, Colour.RED)
        assert a.score == 40
        assert not engine.is_game_over()

        assert engine.start_new_round()
        set_hand(a, [WildCard()])
        set_hand(b, [SkipCard(color=Colour.BLUE)])
        engine.play_card(0, Colour.RED)

        assert a.score == 60
        assert engine.is_game_over()
        assert engine.get_winner() is a


class TestInvariants:
    """Properties that hold over whole games."""

    @pytest.mark.parametrize("names", [["A", "B"], ["A", "B", "C"], ["A", "B", "C", "D"]])
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_card_count_and_turn_index(self, names, seed):
        engine = make_engine(names, seed=seed, config=Config(game=GameConfig(match_threshold=200)))

        for _ in range(400):
            if engine.is_game_over():
                break
            if engine.is_round_over():
                assert engine.start_new_round()
            else:
                play_greedy_turn(engine)
                if not engine.is_round_over():
                    assert engine.advance_to_next_player()

            assert engine.total_card_count == DECK_SIZE
            assert 0 <= engine.current_turn_index < len(names)
            assert engine.direction in (1, -1)

    def test_deck_is_reused_between_matches(self, engine):
        deck = engine.deck
        engine.initialize_game(["C", "D"])
        assert engine.deck is deck
        assert isinstance(engine.deck, Deck)
        assert engine.total_card_count == DECK_SIZE
