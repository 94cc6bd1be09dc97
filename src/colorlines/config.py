from __future__ import annotations

import os
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from colorlines.constants import (
    BALL_COLORS,
    BALLS_PER_TURN,
    BOARD_SIZE,
    ENV_PREFIX,
    INITIAL_BALLS,
    MIN_LINE_LENGTH,
    SCORING_TABLE,
)
from colorlines.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Game-balance settings shared by every engine function.

    Defaults mirror ``colorlines.constants``. The board size used for a given
    board is always the board's own size; ``board_size`` only drives new games.
    """

    board_size: int = BOARD_SIZE
    min_line_length: int = MIN_LINE_LENGTH
    balls_per_turn: int = BALLS_PER_TURN
    initial_balls: int = INITIAL_BALLS
    colors: Tuple[str, ...] = BALL_COLORS
    # Sorted (length, points) pairs; a mapping is normalized on construction.
    scoring_table: Tuple[Tuple[int, int], ...] = tuple(sorted(SCORING_TABLE.items()))

    def __post_init__(self) -> None:
        table = self.scoring_table
        pairs = table.items() if isinstance(table, Mapping) else table
        object.__setattr__(self, "scoring_table", tuple(sorted((int(k), int(v)) for k, v in pairs)))

    @property
    def scores(self) -> Mapping[int, int]:
        """Read-only length -> points view of ``scoring_table``."""
        return MappingProxyType(dict(self.scoring_table))

    def validate(self) -> "EngineConfig":
        if self.board_size <= 0:
            raise ConfigurationError(f"board_size must be positive, got {self.board_size}")
        if self.min_line_length <= 1:
            raise ConfigurationError(f"min_line_length must be at least 2, got {self.min_line_length}")
        if self.min_line_length > self.board_size:
            raise ConfigurationError(
                f"min_line_length {self.min_line_length} does not fit on a {self.board_size}x{self.board_size} board"
            )
        if self.balls_per_turn < 0 or self.initial_balls < 0:
            raise ConfigurationError("ball counts must not be negative")
        if not self.colors:
            raise ConfigurationError("colour palette is empty")
        if not self.scoring_table:
            raise ConfigurationError("scoring table is empty")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build a config from ``COLORLINES_*`` environment overrides."""
        env = os.environ if environ is None else environ
        overrides: Dict[str, object] = {}
        for name in ("board_size", "min_line_length", "balls_per_turn", "initial_balls"):
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[name] = int(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}") from exc
        raw_colors = env.get(f"{ENV_PREFIX}COLORS")
        if raw_colors:
            overrides["colors"] = tuple(c.strip() for c in raw_colors.split(",") if c.strip())
        return replace(cls(), **overrides).validate()


DEFAULT_CONFIG = EngineConfig()
