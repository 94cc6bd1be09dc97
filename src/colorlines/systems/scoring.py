from __future__ import annotations

from typing import Iterable, Mapping

from colorlines.components.line import Line
from colorlines.config import DEFAULT_CONFIG, EngineConfig


def calculate_line_score(
    length: int,
    table: Mapping[int, int] | None = None,
    min_length: int | None = None,
) -> int:
    """Points for a single cleared line of ``length`` balls.

    Lengths past the largest tabulated key score the largest tabulated value.
    """
    table = DEFAULT_CONFIG.scores if table is None else table
    min_length = DEFAULT_CONFIG.min_line_length if min_length is None else min_length
    if length < min_length or not table:
        return 0
    if length in table:
        return table[length]
    top = max(table)
    if length > top:
        return table[top]
    # Gap inside the table: fall back to the nearest shorter entry.
    lower = [key for key in table if key <= length]
    return table[max(lower)] if lower else 0


def calculate_total_score(lines: Iterable[Line], config: EngineConfig | None = None) -> int:
    cfg = config or DEFAULT_CONFIG
    return sum(
        calculate_line_score(line.length, cfg.scores, cfg.min_line_length)
        for line in lines
    )
