"""Game state value describing one point in a game of colorlines."""
from dataclasses import dataclass, field, replace
from typing import Tuple

from colorlines.components.board import Board


@dataclass(frozen=True, slots=True)
class GameStatistics:
    """Per-game tallies updated by the turn flow."""
    turns_count: int = 0
    lines_popped: int = 0
    longest_line_popped: int = 0
    balls_popped: int = 0


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete, serializable game state.

    The engine never mutates a GameState; every step returns a new one and the
    caller replaces its reference wholesale.
    """
    board: Board
    score: int = 0
    high_score: int = 0
    is_new_high_score: bool = False
    game_over: bool = False
    next_balls: Tuple[str, ...] = ()
    timer: int = 0
    timer_active: bool = False
    statistics: GameStatistics = field(default_factory=GameStatistics)

    def evolve(self, **changes) -> "GameState":
        return replace(self, **changes)
