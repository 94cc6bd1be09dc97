from blinker import Signal
from typing import Dict

class EventBus:
    """Named blinker signals shared by every system of a session."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems created without a variable keep receiving events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float
EVENT_TIMER_UPDATED = "timer_updated"              # payload: timer=int, active=bool


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_CELL_CLICK = "cell_click"                    # payload: x, y
EVENT_CELL_SELECTED = "cell_selected"              # payload: x, y, unreachable=list[(x,y)]
EVENT_CELL_DESELECTED = "cell_deselected"          # payload: reason=str


# ============================================================================
# MOVES & TURN FLOW
# ============================================================================
EVENT_MOVE_REQUEST = "move_request"                # payload: source=(x,y), target=(x,y)
EVENT_MOVE_ACCEPTED = "move_accepted"              # payload: source, target, path=list[(x,y)]
EVENT_MOVE_REJECTED = "move_rejected"              # payload: source, target, reason=str
EVENT_TURN_PHASE_CHANGED = "turn_phase_changed"    # payload: phase=TurnPhase
EVENT_GAME_STATE_UPDATED = "game_state_updated"    # payload: state=GameState
EVENT_TURN_COMPLETED = "turn_completed"            # payload: state=GameState, game_over=bool


# ============================================================================
# PRESENTATION
# ============================================================================
EVENT_UI_UPDATE = "ui_update"                      # payload: update=UIUpdate
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: phase=TurnPhase


# ============================================================================
# GAME LIFECYCLE
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: none
EVENT_NEW_GAME_STARTED = "new_game_started"        # payload: state=GameState
EVENT_GAME_OVER = "game_over"                      # payload: score=int, high_score=int, is_new_high_score=bool
