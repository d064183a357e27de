"""
Connect 4 payload codec.

Payload shape (JSON):

    {"currentPlayer": 1 | 2,
     "gameState": "waiting" | "inProgress" | "won" | "draw" | "ended",
     "board": [[int]]}   # 6 rows x 7 columns, 0=empty, 1=A, 2=B, row 0 on top
"""

from __future__ import annotations
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...engine_core.codec import DecodeError, DecodeReason
from ...engine_core.state import Cell, GameState, GameStatus
from .rules import GAME_KIND, ROWS, COLUMNS


CellValue = Annotated[int, Field(strict=True, ge=0, le=2)]


class Connect4Payload(BaseModel):
    """Wire form of a Connect 4 state."""
    model_config = ConfigDict(populate_by_name=True)

    current_player: int = Field(..., alias="currentPlayer", strict=True, ge=1, le=2)
    game_state: GameStatus = Field(..., alias="gameState")
    board: list[list[CellValue]]

    @field_validator("board")
    @classmethod
    def _check_shape(cls, board: list[list[int]]) -> list[list[int]]:
        if len(board) != ROWS or any(len(row) != COLUMNS for row in board):
            raise ValueError(f"board must be {ROWS} rows x {COLUMNS} columns")
        return board

    @classmethod
    def from_state(cls, state: GameState) -> Connect4Payload:
        return cls(
            current_player=int(state.turn),
            game_state=state.status,
            board=state.to_rows(),
        )

    def to_state(self) -> GameState:
        return GameState.from_rows(
            GAME_KIND,
            self.board,
            turn=Cell(self.current_player),
            status=self.game_state,
        )


class Connect4Codec:
    """StateCodec for Connect 4."""

    def encode_state(self, state: GameState) -> bytes:
        return Connect4Payload.from_state(state).model_dump_json(by_alias=True).encode("utf-8")

    def decode_state(self, payload: bytes) -> GameState:
        try:
            parsed = Connect4Payload.model_validate_json(payload)
        except (ValidationError, ValueError, UnicodeDecodeError) as e:
            raise DecodeError(DecodeReason.INVALID_PAYLOAD, str(e)) from e

        state = parsed.to_state()
        violations = state.invariant_violations()
        if violations:
            raise DecodeError(DecodeReason.INVALID_PAYLOAD, "; ".join(violations))
        return state
