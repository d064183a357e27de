"""
ChatGames CLI - Command-line interface for the engine.

Usage:
    chatgames games                       List games on the picker
    chatgames new <kind>                  Create a game, print its envelope
    chatgames show <envelope>             Decode an envelope and print the board
    chatgames move <envelope> <column>    Drop a piece, print the new envelope

Envelopes are passed as base64 text, as they appear in message URLs.
"""

import argparse
import base64
import binascii
import sys

from .api.service import GameService
from .config import Settings, configure_logging
from .engine_core.state import Cell, GameState, GameStatus

PIECES = {Cell.EMPTY: ".", Cell.PLAYER_A: "X", Cell.PLAYER_B: "O"}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="ChatGames - Turn-based games over a messaging channel",
        prog="chatgames",
    )
    parser.add_argument("--log-level", help="Logging level (default from CHATGAMES_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("games", help="List games on the picker")

    new_parser = subparsers.add_parser("new", help="Create a new game")
    new_parser.add_argument("kind", help="Game kind, e.g. connect4")
    new_parser.add_argument(
        "--first-player", type=int, choices=[1, 2], default=1, help="Player who moves first"
    )
    new_parser.add_argument("--waiting", action="store_true", help="Start in the waiting status")

    show_parser = subparsers.add_parser("show", help="Decode an envelope")
    show_parser.add_argument("envelope", help="Base64 envelope")

    move_parser = subparsers.add_parser("move", help="Drop a piece into a column")
    move_parser.add_argument("envelope", help="Base64 envelope")
    move_parser.add_argument("column", type=int, help="Target column")

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)
    service = GameService(play_both_sides=settings.play_both_sides)

    if args.command == "games":
        return cmd_games(service, args)
    elif args.command == "new":
        return cmd_new(service, args)
    elif args.command == "show":
        return cmd_show(service, args)
    elif args.command == "move":
        return cmd_move(service, args)
    else:
        parser.print_help()
        return 1


def render(state: GameState) -> str:
    """Plain-text board, row 0 on top, column numbers underneath."""
    lines = [" ".join(PIECES[Cell(v)] for v in row) for row in state.grid]
    lines.append(" ".join(str(c) for c in range(state.columns)))
    return "\n".join(lines)


def describe(state: GameState) -> str:
    if state.status == GameStatus.WON:
        return f"Player {int(state.winner)} ({PIECES[state.winner]}) won"
    if state.status == GameStatus.DRAWN:
        return "Draw"
    if state.status == GameStatus.ENDED:
        return "Game ended"
    return f"{state.status.value} - player {int(state.turn)} ({PIECES[state.turn]}) to move"


def _read_envelope(service: GameService, text: str):
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        print("Error: envelope is not valid base64")
        return None
    state = service.decode_game(data)
    if state is None:
        print("Error: envelope could not be decoded")
    return state


def _print_envelope(service: GameService, state: GameState):
    data = service.encode_game(state)
    print(base64.b64encode(data).decode("ascii"))


def cmd_games(service: GameService, args):
    """List games."""
    for info in service.list_games():
        marker = "" if info.available else "  (coming soon)"
        print(f"{info.kind:<12} {info.title}{marker}")
    return 0


def cmd_new(service: GameService, args):
    """Create a game."""
    status = GameStatus.WAITING if args.waiting else GameStatus.IN_PROGRESS
    state = service.create_game(args.kind, first_player=Cell(args.first_player), status=status)
    if state is None:
        print(f"{args.kind} is coming soon!")
        return 1
    _print_envelope(service, state)
    return 0


def cmd_show(service: GameService, args):
    """Decode and print a game."""
    state = _read_envelope(service, args.envelope)
    if state is None:
        return 1
    print(render(state))
    print(describe(state))
    return 0


def cmd_move(service: GameService, args):
    """Apply a move and print the new envelope."""
    state = _read_envelope(service, args.envelope)
    if state is None:
        return 1

    result = service.propose_move(state, args.column)
    if not result.applied:
        print(f"Move rejected: {result.error}", file=sys.stderr)
        return 2

    print(render(result.state), file=sys.stderr)
    print(describe(result.state), file=sys.stderr)
    _print_envelope(service, result.state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
