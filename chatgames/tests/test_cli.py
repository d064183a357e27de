"""
Tests for the command-line interface.
"""

import base64

from ..cli import main, render
from ..engine_core.state import Cell


def last_line(text: str) -> str:
    return text.strip().splitlines()[-1]


class TestCLI:
    """End-to-end CLI commands."""

    def test_games(self, capsys):
        assert main(["games"]) == 0
        out = capsys.readouterr().out
        assert "connect4" in out
        assert "coming soon" in out

    def test_new_and_show(self, capsys):
        assert main(["new", "connect4", "--first-player", "2"]) == 0
        envelope = last_line(capsys.readouterr().out)

        assert main(["show", envelope]) == 0
        out = capsys.readouterr().out
        assert "player 2 (O) to move" in out
        assert "0 1 2 3 4 5 6" in out

    def test_new_unknown(self, capsys):
        assert main(["new", "chess"]) == 1
        assert "coming soon" in capsys.readouterr().out

    def test_move(self, capsys, service):
        main(["new", "connect4"])
        envelope = last_line(capsys.readouterr().out)

        assert main(["move", envelope, "3"]) == 0
        new_envelope = last_line(capsys.readouterr().out)

        state = service.decode_game(base64.b64decode(new_envelope))
        assert state.grid[5][3] == Cell.PLAYER_A
        assert state.turn == Cell.PLAYER_B

    def test_rejected_move(self, capsys):
        main(["new", "connect4"])
        envelope = last_line(capsys.readouterr().out)

        assert main(["move", envelope, "7"]) == 2
        assert "rejected" in capsys.readouterr().err

    def test_bad_envelope(self, capsys):
        assert main(["show", "not-base64!"]) == 1
        assert main(["show", base64.b64encode(b"{}").decode()]) == 1

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_render(self, mid_game):
        lines = render(mid_game).splitlines()
        assert len(lines) == 7
        assert lines[5] == "X . O X X . ."
