"""
FastAPI Application - REST API over the game engine.

Endpoints:
    GET    /api/v1/games            List games on the picker
    POST   /api/v1/games            Create a new game
    POST   /api/v1/games/decode     Read a received envelope
    POST   /api/v1/games/moves      Propose a move against an envelope
    GET    /health                  Health check

The API is stateless: every request carries the envelope it works on,
exactly like a message in the conversation. Envelopes are base64 text.

All responses are JSON with explicit Pydantic schemas.
"""

import base64
import binascii
import logging
from typing import Optional, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..engine_core.state import Cell, GameState, GameStatus
from .schemas import (
    # Request models
    CreateGameRequest,
    DecodeRequest,
    MoveRequest,
    # Response models
    ErrorResponse,
    GameListResponse,
    GameResponse,
    MoveResponse,
    HealthResponse,
    # Nested models
    GameInfoModel,
    GameStateView,
    # Enums
    ErrorCode,
)
from .service import GameService

logger = logging.getLogger(__name__)


def state_view(state: GameState) -> GameStateView:
    """Convert an engine state to its display model."""
    winner = state.winner
    return GameStateView(
        game_kind=state.game_kind,
        rows=state.rows,
        columns=state.columns,
        board=state.to_rows(),
        current_player=int(state.turn),
        status=state.status.value,
        winner=int(winner) if winner is not None else None,
        is_terminal=state.is_terminal,
    )


def create_app(service: Optional[GameService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="ChatGames Engine API",
        description="""
Turn-based board games played over a messaging channel.

Each message carries a versioned envelope with the full game state.
Clients decode the envelope they received, propose a move, and send the
resulting envelope back into the conversation.

## Error Codes

| Code | Description |
|------|-------------|
| `UNKNOWN_GAME_KIND` | Game kind not implemented yet |
| `DECODE_ERROR` | Envelope could not be read |
| `VALIDATION_ERROR` | Request cannot start a game |
| `INTERNAL_ERROR` | State could not be encoded |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    game_service = service or GameService(play_both_sides=settings.play_both_sides)
    logger.info("ChatGames API created (env=%s)", settings.env)

    # =========================================================================
    # Helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def read_envelope(text: str) -> Union[GameState, JSONResponse]:
        """Decode base64 envelope text, or build the matching error response."""
        try:
            data = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError):
            return make_error_response(ErrorCode.DECODE_ERROR, "Envelope is not valid base64")

        state = game_service.decode_game(data)
        if state is None:
            return make_error_response(ErrorCode.DECODE_ERROR, "Envelope could not be decoded")
        return state

    def encode_envelope(state: GameState) -> Optional[str]:
        """Base64 envelope text, None when the state has no codec."""
        data = game_service.encode_game(state)
        if data is None:
            return None
        return base64.b64encode(data).decode("ascii")

    def encode_failed(state: GameState) -> JSONResponse:
        logger.error("No codec could encode a %s state", state.game_kind)
        return make_error_response(
            ErrorCode.INTERNAL_ERROR,
            f"Could not encode a '{state.game_kind}' game",
            status_code=500,
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games on the picker",
    )
    async def list_games() -> GameListResponse:
        """List every game, with `available=false` for the ones coming soon."""
        games = [GameInfoModel.model_validate(info) for info in game_service.list_games()]
        return GameListResponse(games=games, count=len(games))

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid starting status"},
            404: {"model": ErrorResponse, "description": "Game kind not implemented"},
        },
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(request: CreateGameRequest) -> Union[GameResponse, JSONResponse]:
        """Create a new game and return its first envelope."""
        try:
            state = game_service.create_game(
                request.game_kind,
                first_player=Cell(request.first_player),
                status=GameStatus(request.status.value),
            )
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

        if state is None:
            return make_error_response(
                ErrorCode.UNKNOWN_GAME_KIND,
                f"'{request.game_kind}' is coming soon",
                status_code=404,
                details={"game_kind": request.game_kind},
            )

        envelope = encode_envelope(state)
        if envelope is None:
            return encode_failed(state)
        return GameResponse(envelope=envelope, state=state_view(state))

    @app.post(
        "/api/v1/games/decode",
        response_model=GameResponse,
        responses={400: {"model": ErrorResponse, "description": "Unreadable envelope"}},
        tags=["Games"],
        summary="Read a received envelope",
    )
    async def decode_game(request: DecodeRequest) -> Union[GameResponse, JSONResponse]:
        """Decode an envelope delivered by the transport."""
        state = read_envelope(request.envelope)
        if isinstance(state, JSONResponse):
            return state
        envelope = encode_envelope(state)
        if envelope is None:
            return encode_failed(state)
        return GameResponse(envelope=envelope, state=state_view(state))

    @app.post(
        "/api/v1/games/moves",
        response_model=MoveResponse,
        responses={400: {"model": ErrorResponse, "description": "Unreadable envelope"}},
        tags=["Games"],
        summary="Propose a move",
    )
    async def propose_move(request: MoveRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Apply a move to the state in the envelope.

        An illegal move returns `applied=false` with the original state.
        """
        state = read_envelope(request.envelope)
        if isinstance(state, JSONResponse):
            return state

        result = game_service.propose_move(state, request.column)
        envelope = encode_envelope(result.state)
        if envelope is None:
            return encode_failed(result.state)
        return MoveResponse(
            applied=result.applied,
            envelope=envelope,
            state=state_view(result.state),
            cell=result.cell,
            error=result.error,
        )

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="chatgames-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "ChatGames Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn chatgames.api.app:app
app = create_app()
