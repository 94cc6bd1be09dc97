"""JSON-compatible snapshots of a GameState.

Boards are stored as rows of ``{"ball": colour|None, "incoming_ball": colour|None}``
so a snapshot can be written with ``json.dump`` and restored verbatim.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from colorlines.components.board import Board
from colorlines.components.cell import Ball, Cell
from colorlines.components.game_state import GameState, GameStatistics
from colorlines.errors import InvalidStateError

_STAT_FIELDS = ("turns_count", "lines_popped", "longest_line_popped", "balls_popped")


def _color(ball: Optional[Ball]) -> Optional[str]:
    return None if ball is None else ball.color


def board_to_rows(board: Board) -> List[List[Dict[str, Optional[str]]]]:
    return [
        [{"ball": _color(cell.ball), "incoming_ball": _color(cell.incoming_ball)} for cell in row]
        for row in board
    ]


def game_state_to_dict(state: GameState) -> Dict[str, Any]:
    stats = state.statistics
    return {
        "board": board_to_rows(state.board),
        "score": state.score,
        "high_score": state.high_score,
        "is_new_high_score": state.is_new_high_score,
        "game_over": state.game_over,
        "next_balls": list(state.next_balls),
        "timer": state.timer,
        "timer_active": state.timer_active,
        "statistics": {name: getattr(stats, name) for name in _STAT_FIELDS},
    }


def _ball_from(value: Any, where: str) -> Optional[Ball]:
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise InvalidStateError(f"{where} must be a colour name or null, got {value!r}")
    return Ball(value)


def board_from_rows(rows: Any) -> Board:
    if not isinstance(rows, list) or not rows:
        raise InvalidStateError("board must be a non-empty list of rows")
    size = len(rows)
    cells: List[List[Cell]] = []
    for y, row in enumerate(rows):
        if not isinstance(row, list) or len(row) != size:
            raise InvalidStateError(f"board row {y} must hold {size} cells")
        built: List[Cell] = []
        for x, raw in enumerate(row):
            if not isinstance(raw, Mapping):
                raise InvalidStateError(f"cell ({x}, {y}) must be an object")
            built.append(
                Cell(
                    x,
                    y,
                    ball=_ball_from(raw.get("ball"), f"cell ({x}, {y}) ball"),
                    incoming_ball=_ball_from(raw.get("incoming_ball"), f"cell ({x}, {y}) incoming_ball"),
                )
            )
        cells.append(built)
    return Board.from_rows(cells)


def _int(data: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidStateError(f"{key} must be a non-negative integer, got {value!r}")
    return value


def game_state_from_dict(data: Mapping[str, Any]) -> GameState:
    """Rebuild a GameState written by ``game_state_to_dict``.

    Raises InvalidStateError when the snapshot is malformed.
    """
    if not isinstance(data, Mapping):
        raise InvalidStateError("game state snapshot must be a mapping")
    if "board" not in data:
        raise InvalidStateError("game state snapshot has no board")
    board = board_from_rows(data["board"])
    next_balls = data.get("next_balls", [])
    if not isinstance(next_balls, list) or not all(isinstance(c, str) and c for c in next_balls):
        raise InvalidStateError("next_balls must be a list of colour names")
    raw_stats = data.get("statistics") or {}
    if not isinstance(raw_stats, Mapping):
        raise InvalidStateError("statistics must be an object")
    stats = GameStatistics(**{name: _int(raw_stats, name) for name in _STAT_FIELDS})
    return GameState(
        board=board,
        score=_int(data, "score"),
        high_score=_int(data, "high_score"),
        is_new_high_score=bool(data.get("is_new_high_score", False)),
        game_over=bool(data.get("game_over", False)),
        next_balls=tuple(next_balls),
        timer=_int(data, "timer"),
        timer_active=bool(data.get("timer_active", False)),
        statistics=stats,
    )
