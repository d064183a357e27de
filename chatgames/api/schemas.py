"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between messaging clients and the engine.
Envelopes travel as base64 text (the same form used in message URLs).

Error Codes:
- UNKNOWN_GAME_KIND: Game kind is not implemented
- DECODE_ERROR: Envelope or payload could not be read
- VALIDATION_ERROR: Request body is invalid
- INTERNAL_ERROR: A state could not be encoded for the response
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    UNKNOWN_GAME_KIND = "UNKNOWN_GAME_KIND"
    DECODE_ERROR = "DECODE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GameStatusName(str, Enum):
    """Game status values as they appear on the wire."""
    WAITING = "waiting"
    IN_PROGRESS = "inProgress"
    WON = "won"
    DRAW = "draw"
    ENDED = "ended"


# =============================================================================
# Shared Models
# =============================================================================

class GameInfoModel(BaseModel):
    """Catalog entry for the game picker."""
    kind: str
    title: str
    available: bool

    model_config = {"from_attributes": True}


class GameStateView(BaseModel):
    """Game state for display."""
    game_kind: str
    rows: int
    columns: int
    board: list[list[int]] = Field(description="rows x columns, row 0 on top, 0=empty")
    current_player: int = Field(ge=1, le=2)
    status: GameStatusName
    winner: Optional[int] = None
    is_terminal: bool = False


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    game_kind: str = Field("connect4", description="Game kind tag")
    first_player: int = Field(1, ge=1, le=2, description="Player who moves first")
    status: GameStatusName = Field(
        GameStatusName.IN_PROGRESS, description="waiting or inProgress"
    )


class DecodeRequest(BaseModel):
    """Request to read a received envelope."""
    envelope: str = Field(..., description="Base64 envelope bytes")


class MoveRequest(BaseModel):
    """Request to propose a move against a received envelope."""
    envelope: str = Field(..., description="Base64 envelope bytes")
    column: int = Field(..., description="Target column")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameListResponse(BaseModel):
    """Every game offered on the picker."""
    games: list[GameInfoModel]
    count: int
    api_version: str = "v1"


class GameResponse(BaseModel):
    """A game state together with its envelope."""
    envelope: str = Field(..., description="Base64 envelope bytes to send")
    state: GameStateView
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """
    Result of a proposed move.

    Illegal moves are not errors: `applied` is false and the state is
    unchanged.
    """
    applied: bool
    envelope: str = Field(..., description="Envelope of the resulting state")
    state: GameStateView
    cell: Optional[tuple[int, int]] = Field(None, description="row, column of the new piece")
    error: Optional[str] = None
    api_version: str = "v1"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
