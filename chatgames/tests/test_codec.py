"""
Tests for the envelope codec and the Connect 4 payload.

Validates that:
- States round-trip exactly
- The wire shape uses the documented field names
- Old envelopes (no version, legacy field names) still decode
- Every kind of bad input raises DecodeError with the right reason
"""

import base64
import json

import pytest

from ..engine_core.codec import DecodeError, DecodeReason, Envelope, ENVELOPE_VERSION
from ..engine_core.state import Cell, GameStatus
from ..games.connect4 import Connect4Codec, Connect4Payload


def make_envelope(payload, **fields) -> bytes:
    """Build raw envelope bytes around a payload dict."""
    body = {"gameKind": "connect4", "version": 1}
    body.update(fields)
    body["payload"] = base64.b64encode(json.dumps(payload).encode()).decode()
    return json.dumps(body).encode()


def empty_payload():
    return {
        "currentPlayer": 1,
        "gameState": "inProgress",
        "board": [[0] * 7 for _ in range(6)],
    }


class TestRoundTrip:
    """decode(encode(k, s)) == (k, s)"""

    @pytest.mark.parametrize(
        "fixture_name", ["fresh_game", "mid_game", "won_game", "drawn_game"]
    )
    def test_round_trip(self, request, registry, fixture_name):
        state = request.getfixturevalue(fixture_name)
        codec = registry.envelope_codec

        kind, decoded = codec.decode(codec.encode("connect4", state))

        assert kind == "connect4"
        assert decoded == state

    def test_waiting_state_round_trips(self, registry):
        state = registry.create("connect4", first_player=Cell.PLAYER_B, status=GameStatus.WAITING)
        _, decoded = registry.envelope_codec.decode(registry.envelope_codec.encode("connect4", state))

        assert decoded.status == GameStatus.WAITING
        assert decoded.turn == Cell.PLAYER_B

    def test_ended_state_round_trips(self, registry, mid_game):
        ended = mid_game._copy_with(status=GameStatus.ENDED)
        codec = registry.envelope_codec
        assert codec.decode(codec.encode("connect4", ended)) == ("connect4", ended)


class TestWireFormat:
    """The envelope and payload field names are a contract."""

    def test_envelope_fields(self, registry, mid_game):
        data = json.loads(registry.envelope_codec.encode("connect4", mid_game))

        assert set(data) == {"gameKind", "version", "payload"}
        assert data["gameKind"] == "connect4"
        assert data["version"] == ENVELOPE_VERSION

    def test_payload_fields(self, registry, mid_game):
        data = json.loads(registry.envelope_codec.encode("connect4", mid_game))
        payload = json.loads(base64.b64decode(data["payload"]))

        assert payload["currentPlayer"] == 2
        assert payload["gameState"] == "inProgress"
        assert payload["board"] == mid_game.to_rows()
        assert payload["board"][5][3] == 1

    def test_draw_is_spelled_draw(self, drawn_game):
        payload = json.loads(Connect4Codec().encode_state(drawn_game))
        assert payload["gameState"] == "draw"

    def test_payload_model_aliases(self, fresh_game):
        model = Connect4Payload.from_state(fresh_game)
        dumped = model.model_dump(by_alias=True)
        assert "currentPlayer" in dumped
        assert "gameState" in dumped


class TestCompatibility:
    """Envelopes written before the current format."""

    def test_missing_version_defaults_to_one(self, registry):
        data = make_envelope(empty_payload())
        body = json.loads(data)
        del body["version"]

        envelope = Envelope.from_bytes(json.dumps(body).encode())
        kind, state = registry.envelope_codec.decode(json.dumps(body).encode())

        assert envelope.version == 1
        assert kind == "connect4"
        assert state.turn == Cell.PLAYER_A

    def test_null_version_defaults_to_one(self):
        body = json.loads(make_envelope(empty_payload()))
        body["version"] = None
        assert Envelope.from_bytes(json.dumps(body).encode()).version == 1

    def test_legacy_field_names(self, registry):
        payload = base64.b64encode(json.dumps(empty_payload()).encode()).decode()
        data = json.dumps({"gameType": "connect4", "gameData": payload}).encode()

        kind, state = registry.envelope_codec.decode(data)

        assert kind == "connect4"
        assert state.status == GameStatus.IN_PROGRESS

    def test_accepts_text(self, registry, fresh_game):
        text = registry.envelope_codec.encode("connect4", fresh_game).decode()
        _, state = registry.envelope_codec.decode(text)
        assert state == fresh_game


class TestDecodeErrors:
    """Bad input never crashes, it raises DecodeError."""

    def decode_reason(self, registry, data) -> str:
        with pytest.raises(DecodeError) as exc_info:
            registry.envelope_codec.decode(data)
        return exc_info.value.reason

    @pytest.mark.parametrize(
        "data",
        [b"", b"not json", b"[1, 2, 3]", b'"connect4"', b"\xff\xfe\x00", b'{"gameKind": "connect4"}'],
    )
    def test_malformed_envelope(self, registry, data):
        assert self.decode_reason(registry, data) == DecodeReason.MALFORMED_ENVELOPE

    def test_payload_not_base64(self, registry):
        data = json.dumps({"gameKind": "connect4", "version": 1, "payload": "%%%"}).encode()
        assert self.decode_reason(registry, data) == DecodeReason.MALFORMED_ENVELOPE

    def test_unknown_game_kind(self, registry):
        data = make_envelope(empty_payload(), gameKind="chess")
        assert self.decode_reason(registry, data) == DecodeReason.UNKNOWN_GAME_KIND

    def test_newer_version(self, registry):
        data = make_envelope(empty_payload(), version=ENVELOPE_VERSION + 1)
        assert self.decode_reason(registry, data) == DecodeReason.UNSUPPORTED_VERSION

    def test_payload_not_json(self, registry):
        body = {"gameKind": "connect4", "version": 1, "payload": base64.b64encode(b"nope").decode()}
        assert self.decode_reason(registry, json.dumps(body).encode()) == DecodeReason.INVALID_PAYLOAD

    def test_wrong_board_shape(self, registry):
        payload = empty_payload()
        payload["board"] = [[0] * 7 for _ in range(5)]
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD

    def test_bad_cell_value(self, registry):
        payload = empty_payload()
        payload["board"][5][0] = 3
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD

    def test_bad_player(self, registry):
        payload = empty_payload()
        payload["currentPlayer"] = 0
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD

    def test_bad_status(self, registry):
        payload = empty_payload()
        payload["gameState"] = "paused"
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD

    def test_floating_piece(self, registry):
        payload = empty_payload()
        payload["board"][0][3] = 1
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD

    def test_won_without_line(self, registry):
        payload = empty_payload()
        payload["gameState"] = "won"
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD

    def test_draw_on_partial_board(self, registry):
        payload = empty_payload()
        payload["gameState"] = "draw"
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD

    def test_line_without_won_status(self, registry):
        payload = empty_payload()
        payload["board"][5][:4] = [2, 2, 2, 2]
        assert self.decode_reason(registry, make_envelope(payload)) == DecodeReason.INVALID_PAYLOAD


class TestEncode:
    """Encoding side of the codec."""

    def test_unknown_kind_raises(self, registry, fresh_game):
        with pytest.raises(ValueError):
            registry.envelope_codec.encode("chess", fresh_game)
