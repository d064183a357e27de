"""
Envelope Codec - Wraps a kind-specific payload for transport.

Wire shape (JSON):

    {"gameKind": "connect4", "version": 1, "payload": "<base64>"}

- `version` defaults to 1 when absent or null
- envelopes from the first release used `gameType` / `gameData`;
  both are still accepted on decode
- encode always writes `gameKind` / `version` / `payload`

The envelope knows nothing about any particular game. The payload is
handed to the StateCodec registered for the envelope's game kind.
"""

from __future__ import annotations
import base64
import binascii
import logging
from typing import Any, Optional, Protocol

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from .state import GameState

logger = logging.getLogger(__name__)


ENVELOPE_VERSION = 1


class DecodeReason:
    """Machine-readable reasons for a DecodeError."""
    MALFORMED_ENVELOPE = "MALFORMED_ENVELOPE"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    UNKNOWN_GAME_KIND = "UNKNOWN_GAME_KIND"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"


class DecodeError(Exception):
    """Raised when bytes cannot be turned back into a game state."""

    def __init__(self, reason: str, message: str):
        self.reason = reason
        self.message = message
        super().__init__(f"{reason}: {message}")


class StateCodec(Protocol):
    """Serializes the state of one game kind to payload bytes and back."""

    def encode_state(self, state: GameState) -> bytes:
        ...

    def decode_state(self, payload: bytes) -> GameState:
        """Parse a payload; raises DecodeError when it is not a valid state."""
        ...


class CodecResolver(Protocol):
    """Anything that can look up the StateCodec for a game kind."""

    def codec_for(self, kind: str) -> Optional[StateCodec]:
        ...


class Envelope(BaseModel):
    """Versioned, tagged wrapper around a serialized game state."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    game_kind: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("gameKind", "gameType"),
        serialization_alias="gameKind",
    )
    version: int = Field(ENVELOPE_VERSION, ge=1)
    payload: bytes = Field(
        ...,
        validation_alias=AliasChoices("payload", "gameData"),
        serialization_alias="payload",
    )

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value: Any) -> Any:
        return ENVELOPE_VERSION if value is None else value

    @field_validator("payload", mode="before")
    @classmethod
    def _decode_payload(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ValueError(f"payload is not valid base64: {e}") from e
        return value

    @field_serializer("payload")
    def _encode_payload(self, payload: bytes) -> str:
        return base64.b64encode(payload).decode("ascii")

    def to_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> Envelope:
        """Parse envelope bytes; raises DecodeError on malformed input."""
        try:
            return cls.model_validate_json(data)
        except (ValidationError, ValueError, UnicodeDecodeError) as e:
            raise DecodeError(DecodeReason.MALFORMED_ENVELOPE, str(e)) from e


class EnvelopeCodec:
    """
    Encodes and decodes tagged game states.

    Usage:
        codec = EnvelopeCodec(registry)
        data = codec.encode("connect4", state)
        kind, state = codec.decode(data)
    """

    def __init__(self, resolver: CodecResolver):
        self._resolver = resolver

    def encode(self, kind: str, state: GameState) -> bytes:
        """
        Serialize a state into envelope bytes.

        Raises ValueError for a game kind with no registered codec.
        """
        state_codec = self._resolver.codec_for(kind)
        if state_codec is None:
            raise ValueError(f"No codec registered for game kind '{kind}'")

        envelope = Envelope(
            game_kind=kind,
            version=ENVELOPE_VERSION,
            payload=state_codec.encode_state(state),
        )
        return envelope.to_bytes()

    def decode(self, data: bytes | str) -> tuple[str, GameState]:
        """
        Parse envelope bytes into (kind, state).

        Raises DecodeError when the envelope or its payload is unreadable.
        """
        envelope = Envelope.from_bytes(data)

        if envelope.version > ENVELOPE_VERSION:
            raise DecodeError(
                DecodeReason.UNSUPPORTED_VERSION,
                f"Envelope version {envelope.version} is newer than {ENVELOPE_VERSION}",
            )

        state_codec = self._resolver.codec_for(envelope.game_kind)
        if state_codec is None:
            raise DecodeError(
                DecodeReason.UNKNOWN_GAME_KIND,
                f"Unknown game kind '{envelope.game_kind}'",
            )

        state = state_codec.decode_state(envelope.payload)
        logger.debug("Decoded %s envelope v%d", envelope.game_kind, envelope.version)
        return envelope.game_kind, state
