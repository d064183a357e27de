"""
Games module - Game-specific implementations.

Each game has its own subpackage with:
- Dimensions and the kind tag
- Initial state factory
- Payload schema and codec

The registry ties every kind to its validator, rule engine and codec.
"""

from .registry import GameRegistry, GameKind, GameInfo, default_registry

__all__ = [
    "GameRegistry",
    "GameKind",
    "GameInfo",
    "default_registry",
]
