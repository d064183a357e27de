"""
Engine Core - Deterministic game state, rules and serialization.

The engine is the runtime that:
1. Holds an immutable GameState
2. Validates proposed moves
3. Applies moves via the rule engine, detecting wins and draws
4. Encodes states into transport envelopes and back
"""

from .state import GameState, GameStatus, Cell, PLAYERS
from .action import Move, MoveResult
from .validator import MoveValidator, is_valid
from .reducer import RuleEngine, apply_move, check_win, check_draw
from .codec import Envelope, EnvelopeCodec, StateCodec, DecodeError, DecodeReason

__all__ = [
    "GameState",
    "GameStatus",
    "Cell",
    "PLAYERS",
    "Move",
    "MoveResult",
    "MoveValidator",
    "is_valid",
    "RuleEngine",
    "apply_move",
    "check_win",
    "check_draw",
    "Envelope",
    "EnvelopeCodec",
    "StateCodec",
    "DecodeError",
    "DecodeReason",
]
