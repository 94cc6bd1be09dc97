import pytest

from colorlines.errors import InvalidMoveError
from colorlines.systems.validation import ensure_valid_move, validate_move

from helpers import board_from_strings

BOARD = board_from_strings([
    "R.g",
    ".B.",
    "...",
])


def test_move_to_empty_cell_is_valid():
    assert validate_move(BOARD, 0, 0, 1, 0)


def test_move_onto_preview_is_valid():
    assert validate_move(BOARD, 0, 0, 2, 0)


def test_invalid_moves():
    assert not validate_move(BOARD, 1, 0, 2, 2)  # empty source
    assert not validate_move(BOARD, 0, 0, 1, 1)  # occupied target
    assert not validate_move(BOARD, 0, 0, 0, 0)
    assert not validate_move(BOARD, 0, 0, 3, 0)
    assert not validate_move(BOARD, -1, 0, 1, 0)


@pytest.mark.parametrize(
    "source,target,fragment",
    [
        ((1, 0), (2, 2), "no ball"),
        ((0, 0), (1, 1), "occupied"),
        ((0, 0), (0, 0), "same cell"),
        ((0, 0), (0, 9), "off the board"),
        ((9, 0), (0, 1), "off the board"),
    ],
)
def test_ensure_valid_move_explains_failures(source, target, fragment):
    with pytest.raises(InvalidMoveError) as info:
        ensure_valid_move(BOARD, source, target)
    assert fragment in str(info.value)
    assert info.value.source == source
    assert info.value.target == target
    assert isinstance(info.value, ValueError)
