"""
Turn Session - Turn ownership for one side of a conversation game.

The two players never talk to each other directly. Each side only holds:
- the COMMITTED state: the last state it sent or received
- an optional PENDING state: a local move built on the committed state
  that has not been sent yet

Rules:
1. A move may only be proposed against the committed state
2. Proposing again replaces the pending move, it never stacks on it
3. Sending (commit) is the only way the committed state advances locally
4. Receiving an opponent's state replaces the committed state and drops
   any pending move
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum

from ..engine_core.action import Move, MoveResult
from ..engine_core.codec import DecodeError
from ..engine_core.state import Cell, GameState, GameStatus
from ..games.registry import GameRegistry

logger = logging.getLogger(__name__)


class GameOutcome(Enum):
    """Result of a finished game from the local player's point of view."""
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


def receiver_of(state: GameState) -> Cell:
    """
    The player a received state is addressed to.

    Non-terminal states are addressed to the side to move. After a win or
    a draw the turn is not switched, so the receiver is the opponent of
    the last mover.
    """
    if state.is_terminal:
        return state.turn.opponent
    return state.turn


@dataclass
class TurnSession:
    """
    One player's view of an ongoing game.

    Usage:
        session = TurnSession.received(registry, data)
        if session.can_move:
            session.propose(3)
            data = session.commit()   # hand to the transport
    """
    registry: GameRegistry
    committed: GameState
    local_player: Cell = Cell.PLAYER_A
    play_both_sides: bool = False
    pending: GameState | None = None
    last_cell: tuple[int, int] | None = None

    @classmethod
    def received(
        cls,
        registry: GameRegistry,
        data: bytes,
        play_both_sides: bool = False,
    ) -> TurnSession | None:
        """Open a session from a delivered envelope, None if unreadable."""
        try:
            _, state = registry.envelope_codec.decode(data)
        except DecodeError as e:
            logger.warning("Ignoring unreadable game message: %s", e)
            return None
        return cls(
            registry=registry,
            committed=state,
            local_player=receiver_of(state),
            play_both_sides=play_both_sides,
        )

    @property
    def display_state(self) -> GameState:
        """State to show: the pending move if there is one."""
        return self.pending if self.pending is not None else self.committed

    @property
    def has_pending_move(self) -> bool:
        return self.pending is not None

    @property
    def can_move(self) -> bool:
        """Whether the local player may start (or change) a move."""
        state = self.committed
        if state.is_terminal:
            return False
        if self.play_both_sides:
            return True
        return state.turn == self.local_player

    def propose(self, column: int) -> MoveResult:
        """
        Build a pending move off the committed state.

        A second proposal replaces the first. Rejected proposals leave the
        current pending move in place.
        """
        if not self.can_move:
            return MoveResult.rejected(self.committed, "Not your turn", error_code="NOT_YOUR_TURN")

        engine = self.registry.engine_for(self.committed.game_kind)
        if engine is None:
            return MoveResult.rejected(
                self.committed,
                f"Unknown game kind '{self.committed.game_kind}'",
                error_code="UNKNOWN_GAME_KIND",
            )

        result = engine.apply(self.committed, Move(column=column))
        if result.applied:
            self.pending = result.state
            self.last_cell = result.cell
        return result

    def discard(self) -> None:
        """Drop the pending move; the committed state is untouched."""
        self.pending = None
        self.last_cell = None

    def commit(self) -> bytes:
        """
        Encode the pending state for sending and make it the committed one.

        Raises ValueError when there is no pending move.
        """
        if self.pending is None:
            raise ValueError("No pending move to send")
        data = self.registry.envelope_codec.encode(self.pending.game_kind, self.pending)
        self.committed = self.pending
        self.pending = None
        return data

    def snapshot(self) -> bytes:
        """Envelope bytes of the committed state (e.g. a game just created)."""
        return self.registry.envelope_codec.encode(self.committed.game_kind, self.committed)

    def receive(self, data: bytes) -> bool:
        """Accept the opponent's turn. Returns False for unreadable data."""
        try:
            _, state = self.registry.envelope_codec.decode(data)
        except DecodeError as e:
            logger.warning("Ignoring unreadable game message: %s", e)
            return False
        self.committed = state
        self.pending = None
        self.last_cell = None
        return True

    def outcome(self) -> GameOutcome | None:
        """Win/loss/draw for the local player once the game is over."""
        state = self.committed
        if state.status == GameStatus.DRAWN:
            return GameOutcome.DRAW
        if state.status == GameStatus.WON:
            return GameOutcome.WIN if state.winner == self.local_player else GameOutcome.LOSS
        return None

    def status_text(self) -> str:
        """Short caption describing the situation to the local player."""
        state = self.display_state
        if state.status == GameStatus.WAITING:
            return "Waiting to start..."
        if state.status == GameStatus.IN_PROGRESS:
            if self.has_pending_move:
                return "Move ready! Send it when you're happy."
            if self.can_move:
                return "Your turn! Pick a column to drop your piece."
            return "Waiting for opponent..."
        if state.status == GameStatus.WON:
            return "You won!" if state.winner == self.local_player else "You lost."
        if state.status == GameStatus.DRAWN:
            return "It's a draw!"
        return "Game ended"
