from dataclasses import dataclass
from typing import Optional, Tuple

from colorlines.components.board import Board
from colorlines.components.game_state import GameState
from colorlines.components.line import Line

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Move:
    source: Position
    target: Position


@dataclass(frozen=True, slots=True)
class MoveResult:
    new_state: GameState
    stepped_on_incoming_ball: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of turning preview balls into real balls and seeding new previews.

    The lines_formed/balls_removed/points_earned/lines fields describe clears
    triggered by the spawned balls only; move-triggered clears are reported
    by the turn flow separately.
    """
    new_board: Board
    next_balls: Tuple[str, ...]
    game_over: bool
    lines_formed: bool = False
    balls_removed: Tuple[Position, ...] = ()
    points_earned: int = 0
    lines: Tuple[Line, ...] = ()
    spawned_positions: Tuple[Position, ...] = ()
