from esper import World

from colorlines.components.game_session import GameSession
from colorlines.components.game_state import GameState
from colorlines.components.selection import SelectionState
from colorlines.components.turn_state import TurnState


def get_session(world: World) -> GameSession:
    """Return the singleton GameSession component."""
    for _, session in world.get_component(GameSession):
        return session
    raise RuntimeError("GameSession not found; build the world with create_world")


def get_state(world: World) -> GameState:
    return get_session(world).state


def commit_state(world: World, state: GameState) -> None:
    get_session(world).state = state


def get_or_create_turn_state(world: World) -> TurnState:
    """Return the shared TurnState component, creating it if absent."""
    existing = list(world.get_component(TurnState))
    if existing:
        return existing[0][1]
    world.create_entity(TurnState())
    return list(world.get_component(TurnState))[0][1]


def get_or_create_selection(world: World) -> SelectionState:
    existing = list(world.get_component(SelectionState))
    if existing:
        return existing[0][1]
    world.create_entity(SelectionState())
    return list(world.get_component(SelectionState))[0][1]
