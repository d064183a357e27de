"""
Move Validator - Pure legality checks for drop moves.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Move
from .state import GameState, Cell


@dataclass(frozen=True)
class MoveValidator:
    """
    Decides whether a move is legal against a state.

    Stateless; never touches the state it inspects.
    """

    def validation_error(self, state: GameState, move: Move) -> str | None:
        """
        Validate that a move is legal in the given state.

        Returns error message if invalid, None if valid.
        """
        column = move.column
        if isinstance(column, bool) or not isinstance(column, int):
            return f"Column must be an integer, got {column!r}"
        if not 0 <= column < state.columns:
            return f"Column {column} is outside 0..{state.columns - 1}"

        if state.is_terminal:
            return f"Game is over ({state.status.value}) - no moves allowed"

        if state.grid[0][column] != Cell.EMPTY:
            return f"Column {column} is full"

        return None

    def is_valid(self, state: GameState, move: Move) -> bool:
        return self.validation_error(state, move) is None


def is_valid(state: GameState, move: Move) -> bool:
    """Convenience predicate using a default validator."""
    return MoveValidator().is_valid(state, move)
