"""
Game State - Immutable snapshot of one grid game in progress.

Design principles:
- Immutable: every move produces a fresh state, the old one is untouched
- Serializable: the grid is plain ints so it maps 1:1 onto the wire payload
- Game-agnostic: dimensions come from the game kind, not from this module

Row 0 is the TOP of the grid. Gravity fills each column from the last
row upward.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum, IntEnum

from .lines import find_winner, is_full


class Cell(IntEnum):
    """Cell values. The non-empty values double as player identifiers."""
    EMPTY = 0
    PLAYER_A = 1
    PLAYER_B = 2

    @property
    def opponent(self) -> Cell:
        """The other player. EMPTY has no opponent."""
        if self == Cell.PLAYER_A:
            return Cell.PLAYER_B
        if self == Cell.PLAYER_B:
            return Cell.PLAYER_A
        raise ValueError("EMPTY is not a player")


PLAYERS = (Cell.PLAYER_A, Cell.PLAYER_B)


class GameStatus(str, Enum):
    """Lifecycle status. Values are the wire names."""
    WAITING = "waiting"
    IN_PROGRESS = "inProgress"
    WON = "won"
    DRAWN = "draw"
    ENDED = "ended"

    @property
    def is_terminal(self) -> bool:
        return self not in (GameStatus.WAITING, GameStatus.IN_PROGRESS)


Grid = tuple[tuple[int, ...], ...]


@dataclass(frozen=True)
class GameState:
    """
    Authoritative snapshot of a game.

    The state is only ever advanced by the rule engine, one validated
    move at a time.
    """
    game_kind: str
    grid: Grid
    turn: Cell = Cell.PLAYER_A
    status: GameStatus = GameStatus.WAITING

    @classmethod
    def empty(
        cls,
        game_kind: str,
        rows: int,
        columns: int,
        turn: Cell = Cell.PLAYER_A,
        status: GameStatus = GameStatus.WAITING,
    ) -> GameState:
        """Create a state with an empty rows x columns grid."""
        grid = tuple(tuple(Cell.EMPTY.value for _ in range(columns)) for _ in range(rows))
        return cls(game_kind=game_kind, grid=grid, turn=turn, status=status)

    @classmethod
    def from_rows(
        cls,
        game_kind: str,
        rows: list[list[int]],
        turn: Cell = Cell.PLAYER_A,
        status: GameStatus = GameStatus.WAITING,
    ) -> GameState:
        """Build a state from a list-of-lists grid (e.g. a decoded payload)."""
        grid = tuple(tuple(int(v) for v in row) for row in rows)
        return cls(game_kind=game_kind, grid=grid, turn=Cell(turn), status=GameStatus(status))

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Cell | None:
        """The player owning a four-in-a-row, for won games only."""
        if self.status != GameStatus.WON:
            return None
        winner = find_winner(self.grid)
        return Cell(winner) if winner else None

    def cell(self, row: int, column: int) -> int:
        """Cell value, EMPTY for coordinates off the grid."""
        if 0 <= row < self.rows and 0 <= column < self.columns:
            return self.grid[row][column]
        return Cell.EMPTY.value

    def column_height(self, column: int) -> int:
        """Number of pieces stacked in a column."""
        return sum(1 for row in self.grid if row[column] != Cell.EMPTY)

    def landing_row(self, column: int) -> int | None:
        """Row a piece dropped in `column` would land on, None if full."""
        for row in range(self.rows - 1, -1, -1):
            if self.grid[row][column] == Cell.EMPTY:
                return row
        return None

    def with_cell(self, row: int, column: int, value: int) -> GameState:
        """Return new state with a single cell replaced."""
        new_row = self.grid[row][:column] + (int(value),) + self.grid[row][column + 1:]
        new_grid = self.grid[:row] + (new_row,) + self.grid[row + 1:]
        return self._copy_with(grid=new_grid)

    def to_rows(self) -> list[list[int]]:
        """Grid as a mutable list of lists (wire shape)."""
        return [list(row) for row in self.grid]

    def invariant_violations(self) -> list[str]:
        """
        Check the structural invariants of the state.

        Returns a list of human-readable violations, empty if the state
        is consistent.
        """
        errors: list[str] = []

        if not self.grid or any(len(row) != self.columns for row in self.grid):
            errors.append("grid must be a non-empty rectangle")
            return errors

        allowed = {c.value for c in Cell}
        for r, row in enumerate(self.grid):
            for c, value in enumerate(row):
                if value not in allowed:
                    errors.append(f"cell ({r}, {c}) has invalid value {value}")
        if errors:
            return errors

        # Gravity: once a column has a piece, every cell below is filled
        for c in range(self.columns):
            seen_piece = False
            for r in range(self.rows):
                if self.grid[r][c] != Cell.EMPTY:
                    seen_piece = True
                elif seen_piece:
                    errors.append(f"column {c} has a floating piece above row {r}")
                    break

        if self.turn not in PLAYERS:
            errors.append("turn must be a player")

        winner = find_winner(self.grid)
        if self.status == GameStatus.WON and not winner:
            errors.append("status is won but no four-in-a-row exists")
        if winner and self.status in (GameStatus.WAITING, GameStatus.IN_PROGRESS, GameStatus.DRAWN):
            errors.append(f"four-in-a-row exists but status is {self.status.value}")
        if self.status == GameStatus.DRAWN and not is_full(self.grid):
            errors.append("status is draw but the grid is not full")

        return errors

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
