import random
from collections import Counter

import pytest

from colorlines.components.board import Board
from colorlines.components.cell import Ball
from colorlines.components.game_state import GameStatistics
from colorlines.config import EngineConfig
from colorlines.engine import GameEngine
from colorlines.errors import ConfigurationError, InvalidMoveError

from helpers import board_from_strings, filled_board, make_state, put


@pytest.fixture
def engine():
    return GameEngine(rng=random.Random(11))


def test_new_game_has_initial_balls_and_previews(engine):
    state = engine.create_new_game()
    assert state.board.size == 9
    assert state.board.ball_count() == 3
    assert state.board.preview_count() == 3
    assert len(state.next_balls) == 3
    previews = [c.incoming_ball.color for c in state.board.iter_cells() if c.has_preview]
    assert Counter(previews) == Counter(state.next_balls)
    assert state.score == 0
    assert not state.game_over
    assert state.statistics == GameStatistics()


def test_new_game_is_reproducible_with_seed():
    a = GameEngine(rng=random.Random(5)).create_new_game()
    b = GameEngine(rng=random.Random(5)).create_new_game()
    assert a == b


def test_reset_game_preserves_high_score(engine):
    state = engine.reset_game(preserved_high_score=120)
    assert state.high_score == 120
    assert state.score == 0
    assert not state.is_new_high_score


def test_engine_validates_config():
    with pytest.raises(ConfigurationError):
        GameEngine(config=EngineConfig(board_size=4))


def test_move_ball_relocates_and_conserves(engine):
    state = make_state(board_from_strings([
        "R....",
        ".....",
        "..b..",
        ".....",
        ".....",
    ]))
    result = engine.move_ball(state, (0, 0), (4, 4))
    board = result.new_state.board
    assert board.cell((0, 0)).ball is None
    assert board.cell((4, 4)).ball == Ball("red")
    assert board.ball_count() == state.board.ball_count()
    assert result.stepped_on_incoming_ball is None
    # The input state is untouched.
    assert state.board.cell((0, 0)).ball == Ball("red")


def test_move_onto_preview_reports_stepped_on_colour(engine):
    state = make_state(board_from_strings([
        "R....",
        ".....",
        "..b..",
        ".....",
        ".....",
    ]))
    result = engine.move_ball(state, (0, 0), (2, 2))
    cell = result.new_state.board.cell((2, 2))
    assert result.stepped_on_incoming_ball == "blue"
    assert cell.ball == Ball("red")
    assert cell.incoming_ball is None


@pytest.mark.parametrize(
    "source,target",
    [((1, 0), (2, 0)), ((0, 0), (0, 1)), ((0, 0), (0, 0)), ((0, 0), (5, 0))],
)
def test_illegal_moves_raise(engine, source, target):
    state = make_state(board_from_strings([
        "R....",
        "G....",
        ".....",
        ".....",
        ".....",
    ]))
    with pytest.raises(InvalidMoveError):
        engine.move_ball(state, source, target)


def test_update_score_tracks_high_score(engine):
    state = make_state(Board.empty(9), high_score=10)
    lower = engine.update_score(state, 6)
    assert lower.score == 6 and lower.high_score == 10 and not lower.is_new_high_score
    higher = engine.update_score(lower, 8)
    assert higher.score == 14 and higher.high_score == 14 and higher.is_new_high_score
    same = engine.update_score(higher, 0)
    assert same.is_new_high_score and same.high_score == 14


def test_update_statistics_adds_counts_and_keeps_longest(engine):
    state = make_state(Board.empty(9))
    state = engine.update_statistics(state, turns_count=1, lines_popped=1, longest_line_popped=6, balls_popped=6)
    state = engine.update_statistics(state, turns_count=1, lines_popped=2, longest_line_popped=5, balls_popped=9)
    assert state.statistics == GameStatistics(
        turns_count=2, lines_popped=3, longest_line_popped=6, balls_popped=15
    )


def test_detect_and_remove_lines(engine):
    board = put(Board.empty(9), balls={(x, 4): "green" for x in range(5)})
    board = put(board, balls={(8, 8): "red"})
    state = make_state(board)
    result = engine.detect_lines(state, (0, 4))
    assert result.score == 5
    assert engine.detect_lines_at_positions(state, [(0, 4), (3, 4)]).lines == result.lines
    cleared = engine.remove_lines(state, result.lines)
    assert cleared.board.ball_count() == 1
    assert cleared.board.cell((8, 8)).ball == Ball("red")


def test_check_blocked_preview_balls(engine):
    state = make_state(board_from_strings([
        "R..",
        ".g.",
        "...",
    ]), next_balls=["green", "pink"])
    assert engine.check_blocked_preview_balls(state) is None

    blocked = state.evolve(board=put(state.board, previews={(0, 0): "green"}))
    repaired = engine.check_blocked_preview_balls(blocked)
    assert repaired is not None
    assert repaired.board.preview_count() == 2
    assert all(not (c.ball and c.has_preview) for c in repaired.board.iter_cells())
    assert sorted(c.incoming_ball.color for c in repaired.board.iter_cells() if c.has_preview) == ["green", "pink"]


def test_check_game_over(engine):
    assert not engine.check_game_over(make_state(filled_board(9, empty=[(4, 4)])))
    assert engine.check_game_over(make_state(filled_board(9)))


def test_query_helpers_delegate(engine):
    board = board_from_strings([
        "R.B..",
        "..B..",
        "..B..",
        "..B..",
        "..B..",
    ])
    assert engine.validate_move(board, (0, 0), (1, 0))
    assert not engine.validate_move(board, (0, 0), (2, 0))
    assert engine.find_path(board, (0, 0), (1, 1)) is not None
    assert engine.find_path(board, (0, 0), (4, 4)) is None
    assert (4, 4) in engine.find_unreachable_cells(board, (0, 0))
