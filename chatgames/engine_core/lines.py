"""
Line scanning - four-in-a-row detection over a plain int grid.

The scan order is part of the rules: horizontal, vertical, diagonal
down-right, diagonal down-left. The first run found is reported.
"""

from __future__ import annotations
from typing import Sequence

RUN_LENGTH = 4

EMPTY = 0


def find_winner(grid: Sequence[Sequence[int]], run: int = RUN_LENGTH) -> int | None:
    """Return the value owning the first run of `run` equal cells, or None."""
    rows = len(grid)
    columns = len(grid[0]) if rows else 0
    span = run - 1

    # Horizontal
    for row in range(rows):
        for col in range(columns - span):
            player = grid[row][col]
            if player != EMPTY and all(grid[row][col + i] == player for i in range(1, run)):
                return player

    # Vertical
    for row in range(rows - span):
        for col in range(columns):
            player = grid[row][col]
            if player != EMPTY and all(grid[row + i][col] == player for i in range(1, run)):
                return player

    # Diagonal, top-left to bottom-right
    for row in range(rows - span):
        for col in range(columns - span):
            player = grid[row][col]
            if player != EMPTY and all(grid[row + i][col + i] == player for i in range(1, run)):
                return player

    # Diagonal, top-right to bottom-left
    for row in range(rows - span):
        for col in range(span, columns):
            player = grid[row][col]
            if player != EMPTY and all(grid[row + i][col - i] == player for i in range(1, run)):
                return player

    return None


def is_full(grid: Sequence[Sequence[int]]) -> bool:
    """A grid is full when its top row has no empty cell."""
    if not grid:
        return False
    return all(value != EMPTY for value in grid[0])
