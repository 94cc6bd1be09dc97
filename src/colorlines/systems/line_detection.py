from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from colorlines.components.board import Board
from colorlines.components.line import Line, LineDetectionResult, LineDirection
from colorlines.config import DEFAULT_CONFIG, EngineConfig
from colorlines.systems.scoring import calculate_total_score

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# One vector per undirected axis; runs are walked both ways from the anchor.
AXES: Tuple[Tuple[LineDirection, Tuple[int, int]], ...] = (
    (LineDirection.HORIZONTAL, (1, 0)),
    (LineDirection.VERTICAL, (0, 1)),
    (LineDirection.DIAGONAL_DOWN, (1, 1)),
    (LineDirection.DIAGONAL_UP, (1, -1)),
)


def _same_color(board: Board, pos: Position, color: str) -> bool:
    if not board.in_bounds(pos):
        return False
    ball = board.cell(pos).ball
    return ball is not None and ball.color == color


def _run_through(board: Board, anchor: Position, step: Tuple[int, int], color: str) -> List[Position]:
    dx, dy = step
    x, y = anchor
    back: List[Position] = []
    cx, cy = x - dx, y - dy
    while _same_color(board, (cx, cy), color):
        back.append((cx, cy))
        cx, cy = cx - dx, cy - dy
    forward: List[Position] = []
    cx, cy = x + dx, y + dy
    while _same_color(board, (cx, cy), color):
        forward.append((cx, cy))
        cx, cy = cx + dx, cy + dy
    back.reverse()
    return back + [anchor] + forward


def find_lines_at(board: Board, pos: Position, config: EngineConfig | None = None) -> List[Line]:
    """All maximal qualifying runs through ``pos``; empty when the cell has no ball."""
    cfg = config or DEFAULT_CONFIG
    if not board.in_bounds(pos):
        return []
    ball = board.cell(pos).ball
    if ball is None:
        return []
    lines: List[Line] = []
    for direction, step in AXES:
        run = _run_through(board, pos, step, ball.color)
        if len(run) >= cfg.min_line_length:
            lines.append(Line(cells=tuple(run), color=ball.color, direction=direction))
    return lines


def _build_result(lines: List[Line], config: EngineConfig) -> Optional[LineDetectionResult]:
    if not lines:
        return None
    cells = sorted({pos for line in lines for pos in line.cells})
    result = LineDetectionResult(
        lines=tuple(lines),
        balls_to_remove=tuple(cells),
        score=calculate_total_score(lines, config),
    )
    logger.debug(
        "Detected %d line(s), %d ball(s), score %d",
        len(result.lines),
        len(result.balls_to_remove),
        result.score,
    )
    return result


def detect_lines_at_position(
    board: Board,
    pos: Position,
    config: EngineConfig | None = None,
) -> Optional[LineDetectionResult]:
    cfg = config or DEFAULT_CONFIG
    return _build_result(find_lines_at(board, pos, cfg), cfg)


def detect_lines_at_positions(
    board: Board,
    positions: Iterable[Position],
    config: EngineConfig | None = None,
) -> Optional[LineDetectionResult]:
    """Union of lines through every anchor, each physical line counted once."""
    cfg = config or DEFAULT_CONFIG
    seen: Dict[Tuple[Position, ...], Line] = {}
    for pos in positions:
        for line in find_lines_at(board, tuple(pos), cfg):
            seen.setdefault(line.key(), line)
    return _build_result(list(seen.values()), cfg)
