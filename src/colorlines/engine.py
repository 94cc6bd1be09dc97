"""Pure game-rule facade used by the turn flow and by the ECS systems.

Every method takes values and returns new values; nothing here keeps state
between calls apart from the injected rng and config.
"""
from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Tuple

from colorlines.components.board import Board
from colorlines.components.game_state import GameState, GameStatistics
from colorlines.components.line import Line, LineDetectionResult
from colorlines.components.move import ConversionResult, MoveResult
from colorlines.config import DEFAULT_CONFIG, EngineConfig
from colorlines.systems import board_ops, line_detection, pathfinding, validation

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class GameEngine:
    def __init__(self, rng: random.Random | None = None, config: EngineConfig | None = None) -> None:
        self.rng = rng or random.Random()
        self.config = (config or DEFAULT_CONFIG).validate()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def create_new_game(self, high_score: int = 0) -> GameState:
        cfg = self.config
        board = board_ops.create_empty_board(cfg.board_size)
        board = board_ops.place_real_balls(
            board, board_ops.random_colors(cfg.initial_balls, self.rng, cfg.colors), rng=self.rng
        )
        next_balls = board_ops.random_colors(cfg.balls_per_turn, self.rng, cfg.colors)
        board = board_ops.place_preview_balls(board, next_balls, rng=self.rng)
        logger.info("New %dx%d game started", cfg.board_size, cfg.board_size)
        return GameState(board=board, high_score=high_score, next_balls=next_balls)

    def reset_game(self, preserved_high_score: int = 0) -> GameState:
        return self.create_new_game(high_score=preserved_high_score)

    # ------------------------------------------------------------------
    # Per-turn steps
    # ------------------------------------------------------------------

    def move_ball(self, state: GameState, source: Position, target: Position) -> MoveResult:
        """Relocate the ball at ``source`` to ``target``.

        A preview on the target is consumed and its colour returned as
        ``stepped_on_incoming_ball``. Raises InvalidMoveError for illegal moves.
        """
        board = state.board
        validation.ensure_valid_move(board, source, target)
        source = tuple(source)
        target = tuple(target)
        src_cell = board.cell(source)
        dst_cell = board.cell(target)
        stepped = dst_cell.incoming_ball.color if dst_cell.incoming_ball is not None else None
        new_board = board.replace_cells(
            {
                source: src_cell.with_ball(None),
                target: dst_cell.with_ball(src_cell.ball).with_incoming(None),
            }
        )
        logger.debug("Moved %s ball %s -> %s", src_cell.ball.color, source, target)
        return MoveResult(new_state=state.evolve(board=new_board), stepped_on_incoming_ball=stepped)

    def detect_lines(self, state: GameState, pos: Position) -> Optional[LineDetectionResult]:
        return line_detection.detect_lines_at_position(state.board, pos, self.config)

    def detect_lines_at_positions(
        self, state: GameState, positions: Iterable[Position]
    ) -> Optional[LineDetectionResult]:
        return line_detection.detect_lines_at_positions(state.board, positions, self.config)

    def remove_lines(self, state: GameState, lines: Iterable[Line]) -> GameState:
        cells = {pos for line in lines for pos in line.cells}
        return state.evolve(board=board_ops.remove_balls(state.board, cells))

    def update_score(self, state: GameState, points: int) -> GameState:
        score = state.score + points
        if score > state.high_score:
            if not state.is_new_high_score:
                logger.info("New high score %d", score)
            return state.evolve(score=score, high_score=score, is_new_high_score=True)
        return state.evolve(score=score)

    def update_statistics(
        self,
        state: GameState,
        *,
        turns_count: int = 0,
        lines_popped: int = 0,
        longest_line_popped: int = 0,
        balls_popped: int = 0,
    ) -> GameState:
        stats = state.statistics
        return state.evolve(
            statistics=GameStatistics(
                turns_count=stats.turns_count + turns_count,
                lines_popped=stats.lines_popped + lines_popped,
                longest_line_popped=max(stats.longest_line_popped, longest_line_popped),
                balls_popped=stats.balls_popped + balls_popped,
            )
        )

    def check_blocked_preview_balls(self, state: GameState) -> Optional[GameState]:
        """Re-seed previews when any of them sits under a real ball.

        Returns the repaired state, or None when nothing is blocked.
        """
        if not board_ops.has_blocked_previews(state.board):
            return None
        logger.debug("Blocked preview found; recalculating preview positions")
        board = board_ops.recalculate_incoming_positions(state.board, state.next_balls, self.rng)
        return state.evolve(board=board)

    def convert_preview_to_real(
        self, state: GameState, stepped_on_incoming_ball: Optional[str] = None
    ) -> ConversionResult:
        return board_ops.handle_incoming_ball_conversion(
            state.board, stepped_on_incoming_ball, self.rng, self.config
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def check_game_over(self, state: GameState) -> bool:
        return board_ops.is_board_full(state.board)

    def find_path(self, board: Board, source: Position, target: Position) -> Optional[List[Position]]:
        return pathfinding.find_path(board, source, target)

    def find_unreachable_cells(self, board: Board, source: Position) -> List[Position]:
        return pathfinding.find_unreachable_cells(board, source)

    def validate_move(self, board: Board, source: Position, target: Position) -> bool:
        return validation.validate_move(board, source[0], source[1], target[0], target[1])
