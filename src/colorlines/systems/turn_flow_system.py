from __future__ import annotations

import logging
import random
from typing import Any, Tuple

from esper import World

from colorlines.components.move import Move
from colorlines.components.turn_state import TurnPhase
from colorlines.engine import GameEngine
from colorlines.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_GAME_STATE_UPDATED,
    EVENT_MOVE_ACCEPTED,
    EVENT_MOVE_REJECTED,
    EVENT_MOVE_REQUEST,
    EVENT_TURN_COMPLETED,
    EVENT_TURN_PHASE_CHANGED,
    EVENT_UI_UPDATE,
    EventBus,
)
from colorlines.systems.turn_flow import TurnCallbacks, TurnFlowController
from colorlines.utils.session import commit_state, get_or_create_turn_state, get_state

logger = logging.getLogger(__name__)


def _as_position(value: Any) -> Tuple[int, int] | None:
    try:
        x, y = value
        return int(x), int(y)
    except (TypeError, ValueError):
        return None


class TurnFlowSystem:
    """Validates move requests and runs accepted moves through the turn flow."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
        controller: TurnFlowController | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        if controller is None:
            engine = GameEngine(
                rng=rng or getattr(world, "random", None),
                config=getattr(world, "config", None),
            )
            controller = TurnFlowController(engine)
        self.controller = controller
        self.event_bus.subscribe(EVENT_MOVE_REQUEST, self.on_move_request)

    @property
    def engine(self) -> GameEngine:
        return self.controller.engine

    def on_move_request(self, sender, **kwargs) -> None:
        source = _as_position(kwargs.get("source"))
        target = _as_position(kwargs.get("target"))
        if source is None or target is None:
            return
        turn_state = get_or_create_turn_state(self.world)
        if turn_state.turn_in_progress:
            self._reject(source, target, "turn_in_progress")
            return
        state = get_state(self.world)
        if state.game_over:
            self._reject(source, target, "game_over")
            return
        if not self.engine.validate_move(state.board, source, target):
            self._reject(source, target, "invalid_move")
            return
        path = self.engine.find_path(state.board, source, target)
        if path is None:
            self._reject(source, target, "no_path")
            return
        self.event_bus.emit(EVENT_MOVE_ACCEPTED, source=source, target=target, path=path)
        self._run_turn(Move(source=source, target=target))

    def _reject(self, source, target, reason: str) -> None:
        logger.warning("Move %s -> %s rejected: %s", source, target, reason)
        self.event_bus.emit(EVENT_MOVE_REJECTED, source=source, target=target, reason=reason)

    def _run_turn(self, move: Move) -> None:
        turn_state = get_or_create_turn_state(self.world)
        turn_state.turn_in_progress = True
        turn_state.last_error = None
        callbacks = TurnCallbacks(
            on_phase_change=self._on_phase_change,
            on_game_state_update=lambda state: self.event_bus.emit(EVENT_GAME_STATE_UPDATED, state=state),
            on_ui_update=lambda update: self.event_bus.emit(EVENT_UI_UPDATE, update=update),
            on_animation_complete=lambda phase: self.event_bus.emit(EVENT_ANIMATION_COMPLETE, phase=phase),
        )
        before = get_state(self.world)
        try:
            new_state = self.controller.execute_turn(before, move, callbacks)
        finally:
            turn_state.turn_in_progress = False
        if new_state is before:
            turn_state.last_error = "turn_voided"
        else:
            turn_state.turns_resolved += 1
        commit_state(self.world, new_state)
        self.event_bus.emit(EVENT_TURN_COMPLETED, state=new_state, game_over=new_state.game_over)

    def _on_phase_change(self, phase: TurnPhase) -> None:
        get_or_create_turn_state(self.world).phase = phase
        self.event_bus.emit(EVENT_TURN_PHASE_CHANGED, phase=phase)
