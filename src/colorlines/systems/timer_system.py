from __future__ import annotations

from typing import Any

from esper import World

from colorlines.events.bus import (
    EVENT_GAME_OVER,
    EVENT_MOVE_ACCEPTED,
    EVENT_NEW_GAME_STARTED,
    EVENT_TICK,
    EVENT_TIMER_UPDATED,
    EventBus,
)
from colorlines.utils.game_timer import GameTimer
from colorlines.utils.session import commit_state, get_state


class TimerSystem:
    """Keeps GameState.timer in step with a tick-driven GameTimer."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        timer: GameTimer | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._timer = timer or GameTimer()
        state = get_state(world)
        self._timer.seconds = state.timer
        if state.timer_active and not state.game_over:
            self._timer.start()
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_MOVE_ACCEPTED, self._on_move_accepted)
        self.event_bus.subscribe(EVENT_NEW_GAME_STARTED, self._on_new_game)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    @property
    def timer(self) -> GameTimer:
        return self._timer

    def _on_tick(self, sender: Any, **payload: Any) -> None:
        try:
            dt = float(payload.get("dt", 0.0))
        except (TypeError, ValueError):
            return
        self._timer.advance(dt)
        self._sync()

    def _on_move_accepted(self, sender: Any, **payload: Any) -> None:
        self._timer.record_activity()
        self._sync()

    def _on_new_game(self, sender: Any, **payload: Any) -> None:
        self._timer.reset()
        self._sync()

    def _on_game_over(self, sender: Any, **payload: Any) -> None:
        self._timer.stop()
        self._sync()

    def _sync(self) -> None:
        state = get_state(self.world)
        if state.timer == self._timer.seconds and state.timer_active == self._timer.active:
            return
        commit_state(self.world, state.evolve(timer=self._timer.seconds, timer_active=self._timer.active))
        self.event_bus.emit(EVENT_TIMER_UPDATED, timer=self._timer.seconds, active=self._timer.active)
