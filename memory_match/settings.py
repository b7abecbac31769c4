"""
Central application configuration using pydantic-settings.

This module provides typed access to environment-based configuration for:
- the game engine (deck size, replay reset, seeded shuffle)
- logging level and the optional JSONL event log
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from memory_match.config import GameConfig
from memory_match.game import GameState, create_game
from memory_match.game_logger import GameLogger, read_events, replay_events


class MemoryMatchSettings(BaseSettings):
    """
    Configuration for the memory match engine.

    Environment variables (prefix: MEMORY_MATCH_):
        MEMORY_MATCH_NUM_CARDS           - Deck size, even and >= 2 (default: 8)
        MEMORY_MATCH_RESET_DECK_ON_START - Clear matched flags on each start (default: false)
        MEMORY_MATCH_SHUFFLE_SEED        - Seed for a shuffled deal (default: unset, fixed deal)
        MEMORY_MATCH_LOG_LEVEL           - Logging level name (default: INFO)
        MEMORY_MATCH_EVENT_LOG_PATH      - JSONL file receiving every signal (default: unset)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="MEMORY_MATCH_",
    )

    num_cards: int = Field(default=8, ge=2, description="Number of cards in the deck.")
    reset_deck_on_start: bool = Field(
        default=False,
        description="Clear matched flags when a new game starts so a finished deck can be replayed.",
    )
    shuffle_seed: Optional[int] = Field(
        default=None,
        description="Seed for a pseudo-random deal; unset keeps the fixed pair pattern.",
    )
    log_level: str = Field(default="INFO")
    event_log_path: Optional[Path] = Field(
        default=None,
        description="Append every game signal to this JSONL file.",
    )

    @field_validator("num_cards")
    @classmethod
    def validate_even(cls, v: int) -> int:
        """Pairs need an even deck."""
        if v % 2 != 0:
            raise ValueError(f"num_cards must be even, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    def to_game_config(self) -> GameConfig:
        return GameConfig(
            num_cards=self.num_cards,
            reset_deck_on_start=self.reset_deck_on_start,
            shuffle_seed=self.shuffle_seed,
        )


@lru_cache
def get_settings() -> MemoryMatchSettings:
    """Return cached settings instance."""
    return MemoryMatchSettings()


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging with the configured level."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_game_from_settings(settings: Optional[MemoryMatchSettings] = None) -> GameState:
    """
    Build an engine from settings.

    Attaches a JSONL GameLogger when event_log_path is configured. An
    existing log is replayed first, so the engine resumes the logged game
    and new signals continue it.
    """
    settings = settings or get_settings()
    config = settings.to_game_config()
    path = settings.event_log_path

    if path is not None and path.exists():
        game = replay_events(read_events(path), config)
    else:
        game = create_game(config)

    if path is not None:
        GameLogger(path, append=True).attach(game)
    return game
