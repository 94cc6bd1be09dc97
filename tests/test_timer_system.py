import random

from colorlines.components.board import Board
from colorlines.events.bus import (
    EVENT_GAME_OVER,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_TICK,
    EVENT_TIMER_UPDATED,
    EventBus,
)
from colorlines.systems.game_flow_system import GameFlowSystem
from colorlines.systems.timer_system import TimerSystem
from colorlines.systems.turn_flow_system import TurnFlowSystem
from colorlines.utils.game_timer import GameTimer
from colorlines.utils.session import get_state
from colorlines.world import create_world

from helpers import make_state, put


def _setup(state=None):
    bus = EventBus()
    world = create_world(
        bus,
        rng=random.Random(0),
        state=state or make_state(put(Board.empty(9), balls={(0, 0): "red"})),
    )
    TurnFlowSystem(world, bus)
    GameFlowSystem(world, bus)
    system = TimerSystem(world, bus, timer=GameTimer(interval=1.0, inactivity_timeout=10.0))
    return bus, world, system


def test_timer_waits_for_first_move():
    bus, world, _ = _setup()
    bus.emit(EVENT_TICK, dt=5.0)
    assert get_state(world).timer == 0
    assert not get_state(world).timer_active


def test_move_starts_timer_and_ticks_are_written_to_state():
    bus, world, _ = _setup()
    updates = []
    bus.subscribe(EVENT_TIMER_UPDATED, lambda sender, **p: updates.append(p))

    bus.emit(EVENT_MOVE_REQUEST, source=(0, 0), target=(1, 0))
    assert get_state(world).timer_active
    bus.emit(EVENT_TICK, dt=1.0)
    bus.emit(EVENT_TICK, dt=1.0)

    state = get_state(world)
    assert state.timer == 2
    assert state.board.cell((1, 0)).ball is not None
    assert updates[-1] == {"timer": 2, "active": True}


def test_inactivity_pauses_timer():
    bus, world, _ = _setup()
    bus.emit(EVENT_MOVE_REQUEST, source=(0, 0), target=(1, 0))
    bus.emit(EVENT_TICK, dt=15.0)
    state = get_state(world)
    assert state.timer == 10
    assert not state.timer_active


def test_new_game_resets_timer():
    bus, world, _ = _setup()
    bus.emit(EVENT_MOVE_REQUEST, source=(0, 0), target=(1, 0))
    bus.emit(EVENT_TICK, dt=3.0)
    bus.emit(EVENT_NEW_GAME_REQUEST)
    state = get_state(world)
    assert state.timer == 0
    assert not state.timer_active


def test_game_over_stops_timer():
    bus, world, system = _setup()
    bus.emit(EVENT_MOVE_REQUEST, source=(0, 0), target=(1, 0))
    bus.emit(EVENT_GAME_OVER, score=0, high_score=0, is_new_high_score=False)
    assert not system.timer.active
    assert not get_state(world).timer_active


def test_restored_timer_resumes_from_state():
    state = make_state(put(Board.empty(9), balls={(0, 0): "red"}), timer=42, timer_active=True)
    bus, world, system = _setup(state)
    assert system.timer.seconds == 42
    bus.emit(EVENT_TICK, dt=1.0)
    assert get_state(world).timer == 43
