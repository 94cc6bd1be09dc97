"""Multi-phase resolution of a single player move.

The controller walks an explicit phase table and reports progress through
optional callbacks. It never waits: animation timing belongs to whoever
handles ``on_animation_complete``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from colorlines.components.game_state import GameState
from colorlines.components.line import LineDetectionResult
from colorlines.components.move import ConversionResult, Move
from colorlines.components.turn_state import TurnPhase
from colorlines.components.ui_update import UIUpdate, UIUpdateKind
from colorlines.engine import GameEngine
from colorlines.errors import InvalidStateError
from colorlines.systems import board_ops

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

TRANSITIONS: Dict[TurnPhase, FrozenSet[TurnPhase]] = {
    TurnPhase.IDLE: frozenset({TurnPhase.MOVING}),
    TurnPhase.MOVING: frozenset({TurnPhase.CHECKING_LINES}),
    TurnPhase.CHECKING_LINES: frozenset({TurnPhase.POPPING, TurnPhase.CHECKING_BLOCKED}),
    TurnPhase.POPPING: frozenset({TurnPhase.CHECKING_BLOCKED}),
    TurnPhase.CHECKING_BLOCKED: frozenset(
        {TurnPhase.GROWING, TurnPhase.TURN_COMPLETE, TurnPhase.GAME_OVER}
    ),
    TurnPhase.GROWING: frozenset(
        {TurnPhase.CHECKING_LINES_AFTER_GROW, TurnPhase.TURN_COMPLETE, TurnPhase.GAME_OVER}
    ),
    TurnPhase.CHECKING_LINES_AFTER_GROW: frozenset(
        {TurnPhase.POPPING_AFTER_GROW, TurnPhase.TURN_COMPLETE, TurnPhase.GAME_OVER}
    ),
    TurnPhase.POPPING_AFTER_GROW: frozenset({TurnPhase.TURN_COMPLETE, TurnPhase.GAME_OVER}),
    TurnPhase.TURN_COMPLETE: frozenset({TurnPhase.IDLE}),
    TurnPhase.GAME_OVER: frozenset(),
}


def can_transition(current: TurnPhase, nxt: TurnPhase) -> bool:
    return nxt in TRANSITIONS.get(current, frozenset())


@dataclass(slots=True)
class TurnCallbacks:
    """Presentation hooks; every one is optional."""
    on_phase_change: Optional[Callable[[TurnPhase], None]] = None
    on_game_state_update: Optional[Callable[[GameState], None]] = None
    on_ui_update: Optional[Callable[[UIUpdate], None]] = None
    on_animation_complete: Optional[Callable[[TurnPhase], None]] = None


class _TurnRun:
    """Book-keeping for one execute_turn call."""

    def __init__(self, callbacks: TurnCallbacks) -> None:
        self.callbacks = callbacks
        self.phase = TurnPhase.IDLE
        self.published = False

    def enter(self, phase: TurnPhase) -> None:
        if not can_transition(self.phase, phase):
            raise InvalidStateError(f"Illegal turn phase transition {self.phase.value} -> {phase.value}")
        logger.debug("Turn phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        if self.callbacks.on_phase_change is not None:
            self.callbacks.on_phase_change(phase)

    def publish(self, state: GameState) -> None:
        self.published = True
        if self.callbacks.on_game_state_update is not None:
            self.callbacks.on_game_state_update(state)

    def ui(self, kind: UIUpdateKind, **data) -> None:
        if self.callbacks.on_ui_update is not None:
            self.callbacks.on_ui_update(UIUpdate(kind=kind, data=data))

    def animation_done(self, phase: TurnPhase) -> None:
        if self.callbacks.on_animation_complete is not None:
            self.callbacks.on_animation_complete(phase)


def _center(positions: Tuple[Position, ...]) -> Tuple[int, int]:
    count = len(positions)
    cx = sum(x for x, _ in positions) / count
    cy = sum(y for _, y in positions) / count
    return int(round(cx)), int(round(cy))


class TurnFlowController:
    def __init__(self, engine: GameEngine | None = None) -> None:
        self.engine = engine or GameEngine()

    def execute_turn(
        self,
        state: GameState,
        move: Move,
        callbacks: TurnCallbacks | None = None,
    ) -> GameState:
        """Resolve ``move`` against ``state`` and return the resulting state.

        Any exception voids the turn: it is logged and the pre-turn state is
        returned (and re-published if an intermediate state was published).
        """
        run = _TurnRun(callbacks or TurnCallbacks())
        if state.game_over:
            logger.warning("Ignoring move %s -> %s after game over", move.source, move.target)
            return state
        try:
            return self._run(state, move, run)
        except Exception:
            logger.exception("Turn %s -> %s failed; keeping previous state", move.source, move.target)
            self._recover(state, run)
            return state

    @staticmethod
    def _recover(state: GameState, run: _TurnRun) -> None:
        # A listener that raised mid-turn may raise again here.
        if run.published:
            try:
                run.publish(state)
            except Exception:
                logger.exception("State listener failed while restoring the previous state")
        if run.callbacks.on_phase_change is not None:
            try:
                run.callbacks.on_phase_change(TurnPhase.TURN_COMPLETE)
            except Exception:
                logger.exception("Phase listener failed while completing a voided turn")

    def _run(self, state: GameState, move: Move, run: _TurnRun) -> GameState:
        engine = self.engine
        run.enter(TurnPhase.MOVING)
        moved = engine.move_ball(state, move.source, move.target)
        run.animation_done(TurnPhase.MOVING)

        run.enter(TurnPhase.CHECKING_LINES)
        current = engine.update_statistics(moved.new_state, turns_count=1)
        run.publish(current)
        detection = engine.detect_lines(current, move.target)

        if detection is not None:
            return self._resolve_scoring_move(current, detection, run)
        return self._resolve_quiet_move(current, moved.stepped_on_incoming_ball, run)

    def _pop(self, state: GameState, detection: LineDetectionResult, run: _TurnRun, trigger: str) -> GameState:
        run.ui(
            UIUpdateKind.POP,
            balls=list(detection.balls_to_remove),
            lines=list(detection.lines),
            score=detection.score,
            trigger=trigger,
        )
        if detection.balls_to_remove:
            x, y = _center(detection.balls_to_remove)
            run.ui(UIUpdateKind.FLOATING_SCORE, score=detection.score, x=x, y=y)
        state = self.engine.update_score(state, detection.score)
        return self.engine.update_statistics(
            state,
            lines_popped=len(detection.lines),
            longest_line_popped=detection.longest,
            balls_popped=len(detection.balls_to_remove),
        )

    def _resolve_scoring_move(self, state: GameState, detection: LineDetectionResult, run: _TurnRun) -> GameState:
        engine = self.engine
        run.enter(TurnPhase.POPPING)
        state = self._pop(state, detection, run, trigger="move")
        state = engine.remove_lines(state, detection.lines)
        run.animation_done(TurnPhase.POPPING)
        run.publish(state)

        # Previews stay where they are on a scoring move.
        run.enter(TurnPhase.CHECKING_BLOCKED)
        repaired = engine.check_blocked_preview_balls(state)
        if repaired is not None:
            state = repaired
            run.publish(state)

        pending = state.evolve(board=board_ops.board_with_previews_as_real(state.board))
        if engine.check_game_over(pending):
            return self._finish_game_over(state, run)
        run.enter(TurnPhase.TURN_COMPLETE)
        return state

    def _resolve_quiet_move(self, state: GameState, stepped_on: Optional[str], run: _TurnRun) -> GameState:
        engine = self.engine
        run.enter(TurnPhase.CHECKING_BLOCKED)
        repaired = engine.check_blocked_preview_balls(state)
        if repaired is not None:
            state = repaired
            run.publish(state)

        run.enter(TurnPhase.GROWING)
        conversion = engine.convert_preview_to_real(state, stepped_on)
        run.ui(UIUpdateKind.GROW, **self._grow_payload(state, conversion, stepped_on))
        state = state.evolve(board=conversion.new_board, next_balls=conversion.next_balls)
        run.publish(state)
        run.animation_done(TurnPhase.GROWING)

        if conversion.lines_formed:
            run.enter(TurnPhase.CHECKING_LINES_AFTER_GROW)
            spawn_detection = LineDetectionResult(
                lines=conversion.lines,
                balls_to_remove=conversion.balls_removed,
                score=conversion.points_earned,
            )
            run.enter(TurnPhase.POPPING_AFTER_GROW)
            state = self._pop(state, spawn_detection, run, trigger="spawn")
            run.animation_done(TurnPhase.POPPING_AFTER_GROW)
            run.publish(state)
        if conversion.game_over or engine.check_game_over(state):
            return self._finish_game_over(state, run)
        run.enter(TurnPhase.TURN_COMPLETE)
        return state

    def _finish_game_over(self, state: GameState, run: _TurnRun) -> GameState:
        state = state.evolve(game_over=True)
        logger.info("Game over with score %d", state.score)
        run.publish(state)
        run.enter(TurnPhase.GAME_OVER)
        return state

    @staticmethod
    def _grow_payload(state: GameState, conversion: ConversionResult, stepped_on: Optional[str]) -> dict:
        old = state.board
        transitioning: List[dict] = []
        for x, y in conversion.spawned_positions:
            incoming = old.cell((x, y)).incoming_ball
            color = incoming.color if incoming is not None else stepped_on
            transitioning.append({"x": x, "y": y, "color": color})
        new_previews = [
            {"x": cell.x, "y": cell.y, "color": cell.incoming_ball.color}
            for cell in conversion.new_board.iter_cells()
            if cell.has_preview
        ]
        return {"transitioning": transitioning, "new": new_previews}
