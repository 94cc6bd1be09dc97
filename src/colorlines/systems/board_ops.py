from __future__ import annotations

import logging
import random
from typing import Collection, Dict, List, Optional, Sequence, Tuple

from colorlines.components.board import Board
from colorlines.components.cell import Ball, Cell
from colorlines.components.move import ConversionResult
from colorlines.config import DEFAULT_CONFIG, EngineConfig
from colorlines.systems.line_detection import detect_lines_at_positions

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def create_empty_board(size: int | None = None) -> Board:
    return Board.empty(DEFAULT_CONFIG.board_size if size is None else size)


def random_colors(
    count: int,
    rng: random.Random | None = None,
    palette: Sequence[str] | None = None,
) -> Tuple[str, ...]:
    rng = rng or random.Random()
    palette = tuple(palette or DEFAULT_CONFIG.colors)
    return tuple(rng.choice(palette) for _ in range(max(0, count)))


def get_random_empty_cells(
    board: Board,
    count: int,
    exclude: Collection[Position] = (),
    rng: random.Random | None = None,
) -> List[Position]:
    """Pick up to ``count`` distinct cells that hold no real ball.

    Candidates are gathered in row-major order before sampling so that a seeded
    rng always yields the same cells for the same board.
    """
    rng = rng or random.Random()
    excluded = {tuple(pos) for pos in exclude}
    candidates = [
        cell.position
        for cell in board.iter_cells()
        if cell.ball is None and cell.position not in excluded
    ]
    take = min(max(0, count), len(candidates))
    if take == 0:
        return []
    return rng.sample(candidates, take)


def _place(
    board: Board,
    colors: Sequence[str],
    exclude: Collection[Position],
    rng: random.Random | None,
    *,
    preview: bool,
) -> Tuple[Board, List[Position]]:
    positions = get_random_empty_cells(board, len(colors), exclude, rng)
    changes: Dict[Position, Cell] = {}
    for pos, color in zip(positions, colors):
        cell = board.cell(pos)
        changes[pos] = cell.with_incoming(Ball(color)) if preview else cell.with_ball(Ball(color))
    if len(positions) < len(colors):
        logger.debug(
            "Placed %d of %d %s ball(s); board has no more room",
            len(positions),
            len(colors),
            "preview" if preview else "real",
        )
    return board.replace_cells(changes), positions


def place_real_balls(
    board: Board,
    colors: Sequence[str],
    exclude: Collection[Position] = (),
    rng: random.Random | None = None,
) -> Board:
    new_board, _ = _place(board, colors, exclude, rng, preview=False)
    return new_board


def place_preview_balls(
    board: Board,
    colors: Sequence[str],
    exclude: Collection[Position] = (),
    rng: random.Random | None = None,
) -> Board:
    new_board, _ = _place(board, colors, exclude, rng, preview=True)
    return new_board


def clear_previews(board: Board) -> Board:
    return board.replace_cells(
        {cell.position: cell.with_incoming(None) for cell in board.iter_cells() if cell.has_preview}
    )


def recalculate_incoming_positions(
    board: Board,
    colors: Sequence[str],
    rng: random.Random | None = None,
) -> Board:
    """Drop every preview and seed ``colors`` again on cells without a real ball."""
    return place_preview_balls(clear_previews(board), colors, rng=rng)


def has_blocked_previews(board: Board) -> bool:
    return any(cell.ball is not None and cell.has_preview for cell in board.iter_cells())


def is_board_full(board: Board) -> bool:
    return all(cell.ball is not None for cell in board.iter_cells())


def board_with_previews_as_real(board: Board) -> Board:
    """View of ``board`` where each preview counts as a real ball."""
    return board.replace_cells(
        {
            cell.position: cell.with_ball(cell.incoming_ball)
            for cell in board.iter_cells()
            if cell.has_preview and cell.ball is None
        }
    )


def remove_balls(board: Board, positions: Collection[Position]) -> Board:
    return board.replace_cells({tuple(pos): board.cell(pos).with_ball(None) for pos in positions})


def handle_incoming_ball_conversion(
    board: Board,
    stepped_on_color: Optional[str] = None,
    rng: random.Random | None = None,
    config: EngineConfig | None = None,
) -> ConversionResult:
    """Turn previews into real balls, promote the stepped-on colour and seed new previews.

    Lines completed by any spawned ball are removed before the board is
    returned, and reported through the line fields of the result.
    """
    cfg = config or DEFAULT_CONFIG
    rng = rng or random.Random()

    changes: Dict[Position, Cell] = {}
    converted: List[Position] = []
    for cell in board.iter_cells():
        if not cell.has_preview:
            continue
        if cell.ball is None:
            changes[cell.position] = Cell(cell.x, cell.y, ball=cell.incoming_ball, active=cell.active)
            converted.append(cell.position)
        else:
            changes[cell.position] = cell.with_incoming(None)
    converted_board = board.replace_cells(changes)

    if is_board_full(converted_board):
        logger.debug("Board full after converting %d preview(s)", len(converted))
        return ConversionResult(
            new_board=converted_board,
            next_balls=random_colors(cfg.balls_per_turn, rng, cfg.colors),
            game_over=True,
            spawned_positions=tuple(converted),
        )

    working = converted_board
    spawned = list(converted)
    if stepped_on_color is not None:
        working, promoted = _place(working, [stepped_on_color], (), rng, preview=False)
        spawned.extend(promoted)

    next_balls = random_colors(cfg.balls_per_turn, rng, cfg.colors)
    working, _ = _place(working, next_balls, (), rng, preview=True)

    detection = detect_lines_at_positions(working, spawned, cfg)
    if detection is None:
        return ConversionResult(
            new_board=working,
            next_balls=next_balls,
            game_over=is_board_full(working),
            spawned_positions=tuple(spawned),
        )

    cleared = remove_balls(working, detection.balls_to_remove)
    logger.debug("Spawned balls completed %d line(s)", len(detection.lines))
    return ConversionResult(
        new_board=cleared,
        next_balls=next_balls,
        game_over=is_board_full(cleared),
        lines_formed=True,
        balls_removed=detection.balls_to_remove,
        points_earned=detection.score,
        lines=detection.lines,
        spawned_positions=tuple(spawned),
    )
