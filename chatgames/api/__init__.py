"""
API Module - Interface for messaging clients.

Exposes the engine to collaborators:
1. GameService: in-process facade (create, decode, encode, propose)
2. create_app: stateless REST API over the same facade

No state is kept server-side; the envelope in each message is the game.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    DecodeRequest,
    MoveRequest,
    # Responses
    GameListResponse,
    GameResponse,
    MoveResponse,
    ErrorResponse,
    # Shared
    GameInfoModel,
    GameStateView,
    ErrorCode,
)
from .service import GameService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "DecodeRequest",
    "MoveRequest",
    # Responses
    "GameListResponse",
    "GameResponse",
    "MoveResponse",
    "ErrorResponse",
    # Shared
    "GameInfoModel",
    "GameStateView",
    "ErrorCode",
    # Service
    "GameService",
    "create_app",
]
