"""
ChatGames - Turn-based board games over a messaging channel

A deterministic engine for two-player games whose authoritative state
travels inside conversation messages. The engine provides:
- Immutable game state with checked invariants
- Move validation and win/draw detection
- A versioned envelope codec for the transport
- A registry of game kinds
"""

__version__ = "0.1.0"
