"""Breadth-first path queries over cells without a real ball.

Neighbours are probed in the order down, right, up, left. Which of several
equally short paths is returned follows from that order and is not something
callers should rely on.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Tuple

from colorlines.components.board import Board

Position = Tuple[int, int]

NEIGHBOUR_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def _neighbours(board: Board, pos: Position):
    x, y = pos
    for dx, dy in NEIGHBOUR_STEPS:
        nxt = (x + dx, y + dy)
        if board.in_bounds(nxt) and board.cell(nxt).ball is None:
            yield nxt


def find_path(board: Board, source: Position, target: Position) -> Optional[List[Position]]:
    """Shortest 4-directional path from ``source`` to ``target`` inclusive.

    Returns None when the endpoints coincide, either endpoint is off the board,
    or no open route exists. The source cell itself may hold a ball.
    """
    source = tuple(source)
    target = tuple(target)
    if source == target:
        return None
    if not (board.in_bounds(source) and board.in_bounds(target)):
        return None
    came_from: Dict[Position, Optional[Position]] = {source: None}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        if current == target:
            break
        for nxt in _neighbours(board, current):
            if nxt in came_from:
                continue
            came_from[nxt] = current
            queue.append(nxt)
    if target not in came_from:
        return None
    path: List[Position] = []
    step: Optional[Position] = target
    while step is not None:
        path.append(step)
        step = came_from[step]
    path.reverse()
    return path


def find_unreachable_cells(board: Board, source: Position) -> List[Position]:
    """Empty cells the ball at ``source`` cannot reach, in row-major order."""
    source = tuple(source)
    visited = {source}
    if board.in_bounds(source):
        queue = deque([source])
        while queue:
            current = queue.popleft()
            for nxt in _neighbours(board, current):
                if nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
    return [
        cell.position
        for cell in board.iter_cells()
        if cell.ball is None and cell.position not in visited
    ]
