from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True, slots=True)
class Ball:
    """A ball colour tag; the same value is used for real and preview balls."""
    color: str


@dataclass(frozen=True, slots=True)
class Cell:
    """One board square.

    ball: the real ball occupying the square, if any.
    incoming_ball: preview of the ball that spawns here next turn.
    active: selection hint for presentation; engine logic never reads it.

    A real ball and a preview on the same cell is a transient state that the
    turn flow resolves before the turn ends.
    """
    x: int
    y: int
    ball: Optional[Ball] = None
    incoming_ball: Optional[Ball] = None
    active: bool = False

    @property
    def position(self):
        return (self.x, self.y)

    @property
    def is_empty(self) -> bool:
        return self.ball is None

    @property
    def has_preview(self) -> bool:
        return self.incoming_ball is not None

    def with_ball(self, ball: Optional[Ball]) -> "Cell":
        return replace(self, ball=ball)

    def with_incoming(self, ball: Optional[Ball]) -> "Cell":
        return replace(self, incoming_ball=ball)
