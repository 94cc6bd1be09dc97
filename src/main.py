"""Headless entry point for colorlines.

Wires the ECS world, the event bus and the game systems, then plays random
legal moves through the same cell-click events a front end would send.
"""
from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import List, Optional, Sequence, Tuple

from colorlines.config import EngineConfig
from colorlines.errors import ColorLinesError
from colorlines.events.bus import (
    EVENT_CELL_CLICK,
    EVENT_NEW_GAME_REQUEST,
    EVENT_TICK,
    EventBus,
)
from colorlines.serialization import game_state_from_dict, game_state_to_dict
from colorlines.systems.game_flow_system import GameFlowSystem
from colorlines.systems.pathfinding import find_unreachable_cells
from colorlines.systems.selection_system import SelectionSystem
from colorlines.systems.timer_system import TimerSystem
from colorlines.systems.turn_flow_system import TurnFlowSystem
from colorlines.utils.session import get_state
from colorlines.world import create_world

logger = logging.getLogger("colorlines.autoplay")

Position = Tuple[int, int]


class AutoplaySession:
    def __init__(self, *, seed: int | None = None, config: EngineConfig | None = None, state=None):
        self.rng = random.Random(seed)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, rng=self.rng, config=config, state=state)
        self.turn_flow_system = TurnFlowSystem(self.world, self.event_bus)
        self.selection_system = SelectionSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus)
        self.timer_system = TimerSystem(self.world, self.event_bus)

    @property
    def state(self):
        return get_state(self.world)

    def legal_moves(self) -> List[Tuple[Position, Position]]:
        board = self.state.board
        empty = [cell.position for cell in board.iter_cells() if cell.ball is None]
        moves: List[Tuple[Position, Position]] = []
        for cell in board.iter_cells():
            if cell.ball is None:
                continue
            blocked = set(find_unreachable_cells(board, cell.position))
            moves.extend((cell.position, target) for target in empty if target not in blocked)
        return moves

    def play_turn(self, tick: float = 1.0) -> bool:
        """Play one random legal move; False when no move is possible."""
        if self.state.game_over:
            return False
        moves = self.legal_moves()
        if not moves:
            return False
        source, target = self.rng.choice(moves)
        if self.selection_system.selected != source:
            self.event_bus.emit(EVENT_CELL_CLICK, x=source[0], y=source[1])
        self.event_bus.emit(EVENT_CELL_CLICK, x=target[0], y=target[1])
        self.event_bus.emit(EVENT_TICK, dt=tick)
        return True

    def play(self, max_turns: int, tick: float = 1.0) -> int:
        played = 0
        while played < max_turns and self.play_turn(tick):
            played += 1
        return played

    def new_game(self) -> None:
        self.event_bus.emit(EVENT_NEW_GAME_REQUEST)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play colorlines with random legal moves.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for ball placement and move choice")
    parser.add_argument("--turns", type=int, default=500, help="Maximum number of turns to play")
    parser.add_argument("--load", default=None, help="Resume from a JSON snapshot")
    parser.add_argument("--save", default=None, help="Write the final state as a JSON snapshot")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = EngineConfig.from_env()
        state = None
        if args.load:
            with open(args.load, "r", encoding="utf-8") as fh:
                state = game_state_from_dict(json.load(fh))
    except (ColorLinesError, OSError, ValueError) as exc:
        logger.error("Cannot start: %s", exc)
        return 2

    session = AutoplaySession(seed=args.seed, config=config, state=state)
    played = session.play(args.turns)
    final = session.state
    stats = final.statistics
    print(
        f"turns={played} score={final.score} high_score={final.high_score} "
        f"lines={stats.lines_popped} longest={stats.longest_line_popped} "
        f"game_over={final.game_over}"
    )
    if args.save:
        with open(args.save, "w", encoding="utf-8") as fh:
            json.dump(game_state_to_dict(final), fh, indent=2)
    return 0


if __name__ == "__main__":
    sys.exit(main())
