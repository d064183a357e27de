"""
Game Registry - Maps a game-kind tag to its rules and codec.

Each implemented kind is one GameKind record:
- validator: legality checks
- engine: applies moves and detects the end of the game
- codec: payload serialization for the transport envelope

The registry is an ordinary object. Entry points (API service, HTTP app,
CLI) build one with default_registry() and pass it to whatever needs it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..engine_core.codec import EnvelopeCodec, StateCodec
from ..engine_core.reducer import RuleEngine
from ..engine_core.state import Cell, GameState, GameStatus
from ..engine_core.validator import MoveValidator
from . import connect4

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameKind:
    """
    Everything the engine needs to run one kind of game.

    The engine checks moves with the record's validator. When no engine
    is given, one is built around it. An explicit engine must hold the
    same validator object.
    """
    kind: str
    title: str
    rows: int
    columns: int
    new_game: Callable[..., GameState]
    codec: StateCodec
    validator: MoveValidator = field(default_factory=MoveValidator)
    engine: Optional[RuleEngine] = None

    def __post_init__(self):
        if self.engine is None:
            object.__setattr__(self, "engine", RuleEngine(validator=self.validator))
        elif self.engine.validator is not self.validator:
            raise ValueError(f"Engine for '{self.kind}' must use the registered validator")


@dataclass(frozen=True)
class GameInfo:
    """Catalog entry shown on the game picker."""
    kind: str
    title: str
    available: bool


# Announced on the picker, not implemented yet
COMING_SOON: list[tuple[str, str]] = [
    ("pool", "Pool"),
    ("minigolf", "Mini Golf"),
    ("checkers", "Checkers"),
    ("chess", "Chess"),
    ("reversi", "Reversi"),
    ("tictactoe", "Tic-Tac-Toe"),
    ("dotsboxes", "Dots & Boxes"),
    ("battleship", "Battleship"),
    ("wordduel", "Word Duel"),
    ("sudokuduel", "Sudoku Duel"),
    ("trivia", "Trivia"),
    ("hangman", "Hangman"),
    ("scramble", "Scramble"),
    ("bingo", "Bingo"),
    ("mines", "Mines"),
    ("duel2048", "2048 Duel"),
    ("fasttap", "Fast Tap"),
    ("memory", "Memory"),
    ("match3", "Match 3"),
    ("snake", "Snake Race"),
    ("runner", "Runner"),
    ("airhockey", "Air Hockey"),
    ("quizrush", "Quiz Rush"),
    ("rps", "Rock Paper"),
]


class GameRegistry:
    """
    Registry of game kinds.

    Usage:
        registry = default_registry()
        state = registry.create("connect4")
        data = registry.envelope_codec.encode("connect4", state)
    """

    def __init__(self):
        self._kinds: dict[str, GameKind] = {}
        self._placeholders: dict[str, str] = {}
        self.envelope_codec = EnvelopeCodec(self)

    def register(self, game_kind: GameKind) -> None:
        """Register an implemented game kind."""
        self._kinds[game_kind.kind] = game_kind
        self._placeholders.pop(game_kind.kind, None)

    def announce(self, kind: str, title: str) -> None:
        """List a kind on the catalog without implementing it."""
        if kind not in self._kinds:
            self._placeholders[kind] = title

    def get(self, kind: str) -> GameKind | None:
        return self._kinds.get(kind)

    def is_available(self, kind: str) -> bool:
        return kind in self._kinds

    @property
    def kinds(self) -> list[str]:
        return list(self._kinds)

    def create(
        self,
        kind: str,
        first_player: Cell = Cell.PLAYER_A,
        status: GameStatus = GameStatus.IN_PROGRESS,
    ) -> GameState | None:
        """
        Create a fresh game of the given kind.

        Returns None for kinds that are not implemented, so callers can
        show a "coming soon" placeholder instead of failing.
        """
        game_kind = self._kinds.get(kind)
        if game_kind is None:
            logger.info("Game kind '%s' is not available", kind)
            return None
        return game_kind.new_game(first_player=first_player, status=status)

    def codec_for(self, kind: str) -> Optional[StateCodec]:
        game_kind = self._kinds.get(kind)
        return game_kind.codec if game_kind else None

    def validator_for(self, kind: str) -> MoveValidator | None:
        game_kind = self._kinds.get(kind)
        return game_kind.validator if game_kind else None

    def engine_for(self, kind: str) -> RuleEngine | None:
        game_kind = self._kinds.get(kind)
        return game_kind.engine if game_kind else None

    def catalog(self) -> list[GameInfo]:
        """Implemented kinds first, then the announced ones."""
        entries = [GameInfo(kind=k.kind, title=k.title, available=True) for k in self._kinds.values()]
        entries.extend(
            GameInfo(kind=kind, title=title, available=False)
            for kind, title in self._placeholders.items()
        )
        return entries


def default_registry() -> GameRegistry:
    """Build a registry with every game kind shipped in this release."""
    registry = GameRegistry()
    registry.register(
        GameKind(
            kind=connect4.GAME_KIND,
            title=connect4.TITLE,
            rows=connect4.ROWS,
            columns=connect4.COLUMNS,
            new_game=connect4.new_game,
            codec=connect4.Connect4Codec(),
        )
    )
    for kind, title in COMING_SOON:
        registry.announce(kind, title)
    return registry
