from dataclasses import dataclass, field
from typing import Optional, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class SelectionState:
    """Currently selected ball and the empty cells it cannot reach."""
    selected: Optional[Position] = None
    unreachable: Tuple[Position, ...] = field(default_factory=tuple)
