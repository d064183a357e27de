"""
Connect 4 - The first game kind.

Two players take turns dropping pieces into a 6 x 7 grid. A piece falls
to the lowest empty cell of its column. Four in a row horizontally,
vertically or diagonally wins; a full grid without a winner is a draw.

This module contains:
- Board dimensions and the kind tag
- The wire payload schema
- The payload codec
"""

from .rules import GAME_KIND, TITLE, ROWS, COLUMNS, new_game
from .codec import Connect4Payload, Connect4Codec

__all__ = [
    "GAME_KIND",
    "TITLE",
    "ROWS",
    "COLUMNS",
    "new_game",
    "Connect4Payload",
    "Connect4Codec",
]
