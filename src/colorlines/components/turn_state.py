from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TurnPhase(Enum):
    """Phases of one turn, in the order the turn flow may visit them."""
    IDLE = "idle"
    MOVING = "moving"
    CHECKING_LINES = "checking_lines"
    POPPING = "popping"
    CHECKING_BLOCKED = "checking_blocked"
    GROWING = "growing"
    CHECKING_LINES_AFTER_GROW = "checking_lines_after_grow"
    POPPING_AFTER_GROW = "popping_after_grow"
    TURN_COMPLETE = "turn_complete"
    GAME_OVER = "game_over"


@dataclass(slots=True)
class TurnState:
    """Tracks the turn currently being resolved for the session entity."""

    phase: TurnPhase = TurnPhase.IDLE
    turn_in_progress: bool = False
    turns_resolved: int = 0
    last_error: Optional[str] = None
