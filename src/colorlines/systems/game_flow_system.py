"""High-level coordinator for starting games and announcing their end."""
from __future__ import annotations

import logging
import random

from esper import World

from colorlines.components.turn_state import TurnPhase
from colorlines.engine import GameEngine
from colorlines.events.bus import (
    EVENT_GAME_OVER,
    EVENT_NEW_GAME_REQUEST,
    EVENT_NEW_GAME_STARTED,
    EVENT_TURN_COMPLETED,
    EventBus,
)
from colorlines.utils.session import commit_state, get_or_create_turn_state, get_state

logger = logging.getLogger(__name__)


class GameFlowSystem:
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.engine = GameEngine(
            rng=rng or getattr(world, "random", None),
            config=getattr(world, "config", None),
        )
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_TURN_COMPLETED, self._on_turn_completed)

    def _on_new_game_request(self, sender, **payload) -> None:
        turn_state = get_or_create_turn_state(self.world)
        if turn_state.turn_in_progress:
            logger.warning("New game requested during a turn; ignoring")
            return
        previous = get_state(self.world)
        state = self.engine.reset_game(preserved_high_score=previous.high_score)
        turn_state.phase = TurnPhase.IDLE
        turn_state.last_error = None
        commit_state(self.world, state)
        self.event_bus.emit(EVENT_NEW_GAME_STARTED, state=state)

    def _on_turn_completed(self, sender, **payload) -> None:
        if not payload.get("game_over"):
            return
        state = payload.get("state") or get_state(self.world)
        get_or_create_turn_state(self.world).phase = TurnPhase.GAME_OVER
        logger.info(
            "Game finished: score %d, high score %d%s",
            state.score,
            state.high_score,
            " (new)" if state.is_new_high_score else "",
        )
        self.event_bus.emit(
            EVENT_GAME_OVER,
            score=state.score,
            high_score=state.high_score,
            is_new_high_score=state.is_new_high_score,
        )
