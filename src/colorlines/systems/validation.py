from typing import Tuple

from colorlines.components.board import Board
from colorlines.errors import InvalidMoveError

Position = Tuple[int, int]


def validate_move(board: Board, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
    """Cheap precondition for a move; a preview ball on the target is allowed."""
    source = (from_x, from_y)
    target = (to_x, to_y)
    if source == target:
        return False
    if not (board.in_bounds(source) and board.in_bounds(target)):
        return False
    return board.cell(source).ball is not None and board.cell(target).ball is None


def ensure_valid_move(board: Board, source: Position, target: Position) -> None:
    """Raise InvalidMoveError describing why ``source -> target`` is illegal."""
    source = tuple(source)
    target = tuple(target)
    if not board.in_bounds(source):
        raise InvalidMoveError(f"source {source} is off the board", source=source, target=target)
    if not board.in_bounds(target):
        raise InvalidMoveError(f"target {target} is off the board", source=source, target=target)
    if source == target:
        raise InvalidMoveError("source and target are the same cell", source=source, target=target)
    if board.cell(source).ball is None:
        raise InvalidMoveError(f"no ball at source {source}", source=source, target=target)
    if board.cell(target).ball is not None:
        raise InvalidMoveError(f"target {target} is occupied", source=source, target=target)
