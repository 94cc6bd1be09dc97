"""Exception hierarchy for the colorlines engine.

All engine errors derive from ``ColorLinesError`` so callers can catch them
in one place; the concrete classes also derive from ``ValueError`` because
each one reports bad input rather than a broken engine.
"""
from __future__ import annotations

from typing import Optional, Tuple

__all__ = [
    "ColorLinesError",
    "ConfigurationError",
    "InvalidMoveError",
    "InvalidStateError",
]


class ColorLinesError(Exception):
    """Base class for all engine errors."""


class InvalidMoveError(ColorLinesError, ValueError):
    """A move that breaks the board rules (programming-contract violation)."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[Tuple[int, int]] = None,
        target: Optional[Tuple[int, int]] = None,
    ) -> None:
        super().__init__(f"Invalid move: {message}")
        self.message = message
        self.source = source
        self.target = target


class InvalidStateError(ColorLinesError, ValueError):
    """Malformed game state or an illegal turn-phase transition."""


class ConfigurationError(ColorLinesError, ValueError):
    """Engine configuration values that cannot produce a playable board."""
