from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from colorlines.components.board import Board
from colorlines.components.cell import Ball, Cell
from colorlines.components.game_state import GameState
from colorlines.components.turn_state import TurnPhase
from colorlines.components.ui_update import UIUpdate
from colorlines.constants import BALL_COLORS
from colorlines.systems.turn_flow import TurnCallbacks

# Upper case is a real ball, lower case a preview, '.' an empty cell.
COLOR_CODES = {
    "R": "red",
    "B": "blue",
    "G": "green",
    "Y": "yellow",
    "P": "purple",
    "I": "pink",
    "K": "black",
}


def board_from_strings(rows: Sequence[str]) -> Board:
    """Build a board from rows of colour codes, one string per ``y``."""
    cells: List[List[Cell]] = []
    for y, row in enumerate(rows):
        built: List[Cell] = []
        for x, code in enumerate(row):
            if code == ".":
                built.append(Cell(x, y))
            elif code.isupper():
                built.append(Cell(x, y, ball=Ball(COLOR_CODES[code])))
            else:
                built.append(Cell(x, y, incoming_ball=Ball(COLOR_CODES[code.upper()])))
        cells.append(built)
    return Board.from_rows(cells)


def pattern_color(x: int, y: int) -> str:
    """Colour layout with no two equal neighbours along any line axis."""
    return BALL_COLORS[(x + 2 * y) % len(BALL_COLORS)]


def filled_board(size: int = 9, empty: Iterable[Tuple[int, int]] = ()) -> Board:
    """Board packed with ``pattern_color`` balls except for ``empty`` cells."""
    holes = {tuple(pos) for pos in empty}
    return Board.from_rows(
        [
            [
                Cell(x, y) if (x, y) in holes else Cell(x, y, ball=Ball(pattern_color(x, y)))
                for x in range(size)
            ]
            for y in range(size)
        ]
    )


def put(board: Board, *, balls=None, previews=None) -> Board:
    """Set real balls and/or previews from ``{(x, y): colour}`` mappings."""
    changes = {}
    for pos, color in (balls or {}).items():
        cell = changes.get(pos, board.cell(pos))
        changes[pos] = cell.with_ball(Ball(color) if color else None)
    for pos, color in (previews or {}).items():
        cell = changes.get(pos, board.cell(pos))
        changes[pos] = cell.with_incoming(Ball(color) if color else None)
    return board.replace_cells(changes)


def make_state(board: Board, next_balls: Sequence[str] | None = None, **kwargs) -> GameState:
    if next_balls is None:
        next_balls = [cell.incoming_ball.color for cell in board.iter_cells() if cell.has_preview]
    return GameState(board=board, next_balls=tuple(next_balls), **kwargs)


def previews_of(board: Board):
    return [(cell.position, cell.incoming_ball) for cell in board.iter_cells() if cell.has_preview]


class Recorder:
    """Collects everything the turn flow reports through its callbacks."""

    def __init__(self) -> None:
        self.phases: List[TurnPhase] = []
        self.states: List[GameState] = []
        self.updates: List[UIUpdate] = []
        self.animations: List[TurnPhase] = []

    def callbacks(self, **overrides) -> TurnCallbacks:
        hooks = dict(
            on_phase_change=self.phases.append,
            on_game_state_update=self.states.append,
            on_ui_update=self.updates.append,
            on_animation_complete=self.animations.append,
        )
        hooks.update(overrides)
        return TurnCallbacks(**hooks)

    def kinds(self):
        return [update.kind for update in self.updates]
