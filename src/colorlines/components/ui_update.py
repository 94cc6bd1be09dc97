from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class UIUpdateKind(Enum):
    POP = "pop"
    GROW = "grow"
    FLOATING_SCORE = "floating_score"


@dataclass(frozen=True, slots=True)
class UIUpdate:
    """Presentation hint emitted by the turn flow.

    pop: data = {balls, lines, score, trigger}
    grow: data = {transitioning, new}
    floating_score: data = {score, x, y}
    """
    kind: UIUpdateKind
    data: Dict[str, Any] = field(default_factory=dict)
