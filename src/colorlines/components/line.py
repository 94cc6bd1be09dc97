from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Position = Tuple[int, int]


class LineDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL_DOWN = "diagonal-down"
    DIAGONAL_UP = "diagonal-up"


@dataclass(frozen=True, slots=True)
class Line:
    """Maximal run of equal-colour real balls through an anchor cell.

    cells are ordered along the direction vector with no gaps.
    """
    cells: Tuple[Position, ...]
    color: str
    direction: LineDirection

    @property
    def length(self) -> int:
        return len(self.cells)

    def key(self) -> Tuple[Position, ...]:
        """Identity used to deduplicate the same line found from several anchors."""
        return tuple(sorted(self.cells))


@dataclass(frozen=True, slots=True)
class LineDetectionResult:
    lines: Tuple[Line, ...]
    balls_to_remove: Tuple[Position, ...]
    score: int

    @property
    def longest(self) -> int:
        return max((line.length for line in self.lines), default=0)
