"""
Connect 4 rules constants and initial state.
"""

from __future__ import annotations

from ...engine_core.state import Cell, GameState, GameStatus


GAME_KIND = "connect4"
TITLE = "Connect 4"

ROWS = 6
COLUMNS = 7


def new_game(
    first_player: Cell = Cell.PLAYER_A,
    status: GameStatus = GameStatus.IN_PROGRESS,
) -> GameState:
    """
    Create an empty Connect 4 game.

    Args:
        first_player: Player who drops the first piece
        status: WAITING or IN_PROGRESS

    Returns:
        Empty 6 x 7 GameState
    """
    if status not in (GameStatus.WAITING, GameStatus.IN_PROGRESS):
        raise ValueError(f"A new game cannot start as '{status.value}'")
    if first_player not in (Cell.PLAYER_A, Cell.PLAYER_B):
        raise ValueError("first_player must be PLAYER_A or PLAYER_B")

    return GameState.empty(
        GAME_KIND,
        rows=ROWS,
        columns=COLUMNS,
        turn=Cell(first_player),
        status=GameStatus(status),
    )
