import random

from esper import World

from colorlines.components.game_session import GameSession
from colorlines.components.game_state import GameState
from colorlines.components.selection import SelectionState
from colorlines.components.turn_state import TurnState
from colorlines.config import DEFAULT_CONFIG, EngineConfig
from colorlines.engine import GameEngine
from .events.bus import EventBus


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
    config: EngineConfig | None = None,
    state: GameState | None = None,
) -> World:
    """Build a world holding one game session.

    ``state`` resumes a previously saved game; otherwise a new game is dealt
    with the world's rng.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", (config or DEFAULT_CONFIG).validate())
    setattr(world, "event_bus", event_bus)

    if state is None:
        engine = GameEngine(rng=world.random, config=world.config)
        state = engine.create_new_game()

    world.create_entity(GameSession(state=state), TurnState(), SelectionState())
    return world
