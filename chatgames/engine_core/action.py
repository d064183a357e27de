"""
Moves and move results.

A Move only names a column; the row is derived by gravity.
A MoveResult carries the new state together with the cell that changed,
so presentation layers never need to diff two snapshots.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator

from .state import GameState


INVALID_MOVE = "INVALID_MOVE"


@dataclass(frozen=True)
class Move:
    """Drop a piece into a column."""
    column: int

    @classmethod
    def drop(cls, column: int) -> Move:
        """Factory for a drop move."""
        return cls(column=column)


@dataclass(frozen=True)
class MoveResult:
    """
    Result of proposing a move.

    Contains:
    - Whether the move was applied
    - The new state (or the untouched original when not applied)
    - The (row, column) that received the piece
    - Error text and code for rejected moves

    Unpacks as ``state, applied = result``.
    """
    applied: bool
    state: GameState
    cell: tuple[int, int] | None = None
    error: str | None = None
    error_code: str | None = None

    def __iter__(self) -> Iterator:
        return iter((self.state, self.applied))

    @classmethod
    def rejected(cls, state: GameState, error: str, error_code: str = INVALID_MOVE) -> MoveResult:
        """Create a non-applied result around the unchanged state."""
        return cls(applied=False, state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: GameState, cell: tuple[int, int]) -> MoveResult:
        """Create an applied result with the new state."""
        return cls(applied=True, state=state, cell=cell)
