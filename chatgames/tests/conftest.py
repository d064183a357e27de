"""
Pytest fixtures for ChatGames tests.
"""

import pytest

from ..api.service import GameService
from ..engine_core.action import Move
from ..engine_core.reducer import RuleEngine
from ..engine_core.state import Cell, GameState, GameStatus
from ..games.connect4 import new_game
from ..games.registry import GameRegistry, default_registry


# Fills the 6 x 7 board with no four-in-a-row. Columns are played in
# interleaved pairs (0/2, 1/3, 4/6) and then column 5 on its own.
DRAW_SEQUENCE = (
    [0, 2, 2, 0, 0, 2, 2, 0, 0, 2, 2, 0]
    + [1, 3, 3, 1, 1, 3, 3, 1, 1, 3, 3, 1]
    + [4, 6, 6, 4, 4, 6, 6, 4, 4, 6, 6, 4]
    + [5, 5, 5, 5, 5, 5]
)

# 41 pieces, only the top of column 5 is empty. PLAYER_B dropping there
# completes B-B-B-B along the top row and fills the board.
LAST_MOVE_WIN_BOARD = [
    [1, 1, 1, 2, 2, 0, 2],
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
    [1, 1, 2, 2, 1, 1, 2],
]


def play(state: GameState, columns: list[int]) -> GameState:
    """Apply a sequence of drops, failing the test on any rejected move."""
    engine = RuleEngine()
    for column in columns:
        result = engine.apply(state, Move(column))
        assert result.applied, f"move in column {column} rejected: {result.error}"
        state = result.state
    return state


@pytest.fixture
def registry() -> GameRegistry:
    """Registry with every shipped game kind."""
    return default_registry()


@pytest.fixture
def service(registry: GameRegistry) -> GameService:
    """Service wired to the test registry."""
    return GameService(registry=registry)


@pytest.fixture
def fresh_game() -> GameState:
    """Empty Connect 4 game, PLAYER_A to move."""
    return new_game()


@pytest.fixture
def mid_game(fresh_game: GameState) -> GameState:
    """A few moves in, nobody close to winning."""
    return play(fresh_game, [3, 3, 4, 2, 0])


@pytest.fixture
def won_game(fresh_game: GameState) -> GameState:
    """PLAYER_A wins along the bottom row while PLAYER_B stacks column 0."""
    return play(fresh_game, [0, 0, 1, 0, 2, 0, 3])


@pytest.fixture
def drawn_game(fresh_game: GameState) -> GameState:
    """Full board without a four-in-a-row."""
    return play(fresh_game, DRAW_SEQUENCE)


@pytest.fixture
def last_move_win_state() -> GameState:
    """Board one piece short of full where the last piece wins for B."""
    return GameState.from_rows(
        "connect4",
        LAST_MOVE_WIN_BOARD,
        turn=Cell.PLAYER_B,
        status=GameStatus.IN_PROGRESS,
    )
