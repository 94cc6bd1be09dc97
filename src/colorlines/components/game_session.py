from dataclasses import dataclass

from colorlines.components.game_state import GameState


@dataclass(slots=True)
class GameSession:
    """Singleton component holding the latest committed GameState.

    Systems replace ``state`` wholesale; the GameState value itself is immutable.
    """
    state: GameState
