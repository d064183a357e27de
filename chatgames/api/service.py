"""
Game Service - The narrow interface collaborators call.

The service:
1. Creates new games through the registry
2. Decodes envelopes delivered by the transport
3. Encodes states before they are handed to the transport
4. Applies proposed moves for the interactive layer

Failures never raise out of this layer: unknown kinds and unreadable
envelopes come back as None, illegal moves as a non-applied MoveResult.

This layer is framework-agnostic (used by the FastAPI app and the CLI).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..engine_core.action import Move, MoveResult
from ..engine_core.codec import DecodeError
from ..engine_core.state import Cell, GameState, GameStatus
from ..games.registry import GameInfo, GameRegistry, default_registry
from ..session import TurnSession

logger = logging.getLogger(__name__)


@dataclass
class GameService:
    """
    Entry point for UI and transport collaborators.

    Usage:
        service = GameService()

        state = service.create_game("connect4")
        state, applied = service.propose_move(state, 3)
        data = service.encode_game(state)

        received = service.decode_game(data)
    """
    registry: GameRegistry = field(default_factory=default_registry)
    play_both_sides: bool = False

    def list_games(self) -> list[GameInfo]:
        return self.registry.catalog()

    def create_game(
        self,
        kind: str,
        first_player: Cell | None = None,
        status: GameStatus | None = None,
    ) -> GameState | None:
        """
        Create a new game.

        Returns None for kinds that are not implemented yet.
        """
        return self.registry.create(
            kind,
            first_player=Cell.PLAYER_A if first_player is None else first_player,
            status=GameStatus.IN_PROGRESS if status is None else status,
        )

    def decode_game(self, data: bytes | str) -> GameState | None:
        """Decode a delivered envelope, None if it is unreadable."""
        try:
            _, state = self.registry.envelope_codec.decode(data)
        except DecodeError as e:
            logger.warning("Could not decode game message (%s): %s", e.reason, e.message)
            return None
        return state

    def encode_game(self, state: GameState) -> bytes | None:
        """Encode a state for the transport, None for unknown kinds."""
        try:
            return self.registry.envelope_codec.encode(state.game_kind, state)
        except ValueError as e:
            logger.warning("Could not encode game: %s", e)
            return None

    def propose_move(self, state: GameState, move: Move | int) -> MoveResult:
        """
        Apply a move without committing it anywhere.

        The result unpacks as ``(state, applied)``; callers must check
        `applied` before treating the new state as committed.
        """
        if not isinstance(move, Move):
            move = Move(column=move)

        engine = self.registry.engine_for(state.game_kind)
        if engine is None:
            return MoveResult.rejected(
                state,
                f"Unknown game kind '{state.game_kind}'",
                error_code="UNKNOWN_GAME_KIND",
            )
        return engine.apply(state, move)

    def start_conversation_game(self, kind: str) -> TurnSession | None:
        """
        Start a game from the picker.

        The opponent moves first: the new game is sent straight away and
        the local player answers their first move as PLAYER_A.
        """
        state = self.create_game(kind, first_player=Cell.PLAYER_B, status=GameStatus.IN_PROGRESS)
        if state is None:
            return None
        return TurnSession(
            registry=self.registry,
            committed=state,
            local_player=Cell.PLAYER_A,
            play_both_sides=self.play_both_sides,
        )

    def open_received(self, data: bytes | str) -> TurnSession | None:
        """Open the local side of a game from a delivered envelope."""
        return TurnSession.received(self.registry, data, play_both_sides=self.play_both_sides)
