"""
Session Module - Turn ownership for conversation games.

A session is one player's side of a game played over a messaging
channel:
- Created when a game is started or a message is opened
- Holds the committed state and an optional pending move
- Produces the bytes to send and accepts the bytes received

Sessions are EPHEMERAL: the authoritative state travels in the messages.
"""

from .turn import TurnSession, GameOutcome, receiver_of

__all__ = [
    "TurnSession",
    "GameOutcome",
    "receiver_of",
]
