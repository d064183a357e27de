"""
Configuration - Settings read from the environment.

Variables:
    CHATGAMES_ENV               development | production (default development)
    CHATGAMES_LOG_LEVEL         logging level name (default INFO)
    ALLOWED_ORIGINS             comma-separated CORS origins (default *)
    CHATGAMES_PLAY_BOTH_SIDES   1/true to let one device play both sides
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    play_both_sides: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("CHATGAMES_ENV", "development"),
            log_level=os.getenv("CHATGAMES_LOG_LEVEL", "INFO").upper(),
            allowed_origins=[
                origin.strip()
                for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
                if origin.strip()
            ],
            play_both_sides=_env_flag("CHATGAMES_PLAY_BOTH_SIDES"),
        )

    @property
    def is_production(self) -> bool:
        return self.env == "production"


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stderr handler. Only entry points call this."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
