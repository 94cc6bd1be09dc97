from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Sequence, Tuple

from colorlines.components.cell import Cell

Position = Tuple[int, int]  # (x, y)


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable square grid of cells, row-major and indexed ``board[y][x]``.

    Updates go through ``replace_cells`` which rebuilds only the touched rows;
    untouched rows are shared with the previous board, so earlier boards held
    by callers never change underneath them.
    """
    rows: Tuple[Tuple[Cell, ...], ...]

    @classmethod
    def empty(cls, size: int) -> "Board":
        return cls(tuple(tuple(Cell(x, y) for x in range(size)) for y in range(size)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        return cls(tuple(tuple(row) for row in rows))

    @property
    def size(self) -> int:
        return len(self.rows)

    def __getitem__(self, y: int) -> Tuple[Cell, ...]:
        return self.rows[y]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Tuple[Cell, ...]]:
        return iter(self.rows)

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, pos: Position) -> Cell:
        x, y = pos
        return self.rows[y][x]

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.rows:
            yield from row

    def ball_count(self) -> int:
        return sum(1 for cell in self.iter_cells() if cell.ball is not None)

    def preview_count(self) -> int:
        return sum(1 for cell in self.iter_cells() if cell.incoming_ball is not None)

    def replace_cells(self, changes: Mapping[Position, Cell]) -> "Board":
        if not changes:
            return self
        by_row: Dict[int, Dict[int, Cell]] = {}
        for (x, y), cell in changes.items():
            by_row.setdefault(y, {})[x] = cell
        rows = list(self.rows)
        for y, updates in by_row.items():
            row = list(rows[y])
            for x, cell in updates.items():
                row[x] = cell
            rows[y] = tuple(row)
        return Board(tuple(rows))
