"""
Rule Engine - Applies moves to game state.

The rule engine is the single point of state advancement.
All state changes must go through apply().

Design principles:
- Pure function: (state, move) -> new_state
- Validates before applying
- Returns MoveResult with applied/rejected
- A completed four-in-a-row wins even when the same move fills the board
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .action import Move, MoveResult
from .lines import find_winner, is_full
from .state import Cell, GameState, GameStatus
from .validator import MoveValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleEngine:
    """
    Applies drop moves and detects the end of the game.

    Stateless - all state is in GameState.
    """
    validator: MoveValidator = field(default_factory=MoveValidator)

    def apply(self, state: GameState, move: Move) -> MoveResult:
        """
        Apply a move to the game state.

        Returns MoveResult with the new state, or the original state and
        an error when the move is not legal.
        """
        error = self.validator.validation_error(state, move)
        if error:
            logger.debug("Rejected move %s: %s", move, error)
            return MoveResult.rejected(state, error)

        row = state.landing_row(move.column)
        if row is None:
            return MoveResult.rejected(state, f"Column {move.column} is full")

        mover = state.turn
        new_state = state.with_cell(row, move.column, mover)._copy_with(
            status=GameStatus.IN_PROGRESS,
        )

        winner = check_win(new_state)
        if winner is not None:
            logger.info("Player %d wins %s", winner, state.game_kind)
            new_state = new_state._copy_with(status=GameStatus.WON)
        elif check_draw(new_state):
            logger.info("%s ends in a draw", state.game_kind)
            new_state = new_state._copy_with(status=GameStatus.DRAWN)
        else:
            new_state = new_state._copy_with(turn=mover.opponent)

        return MoveResult.success_with_state(new_state, cell=(row, move.column))

    def apply_move(self, state: GameState, move: Move) -> tuple[GameState, bool]:
        """Apply a move and return ``(state, applied)``."""
        result = self.apply(state, move)
        return result.state, result.applied


def check_win(state: GameState) -> Cell | None:
    """Return the player with a four-in-a-row anywhere on the grid."""
    winner = find_winner(state.grid)
    return Cell(winner) if winner else None


def check_draw(state: GameState) -> bool:
    """True when no column can take another piece."""
    return is_full(state.grid)


def apply_move(state: GameState, move: Move) -> MoveResult:
    """
    Convenience function to apply a move.

    Creates a RuleEngine and applies the move.
    """
    engine = RuleEngine()
    return engine.apply(state, move)
