"""
Memory Match Engine

A deterministic, single-session memory-matching game state machine.
"""

from .cards import Card, build_pair_pattern
from .config import GameConfig
from .events import EventLog, EventType, GameEvent
from .exceptions import (
    AlreadyActiveError,
    AlreadyMatchedError,
    ConfigurationError,
    EventLogError,
    GameNotActiveError,
    InvalidActionError,
    InvalidCardError,
    MemoryMatchError,
    SameCardError,
)
from .game import GameState, create_game

__all__ = [
    "Card",
    "build_pair_pattern",
    "GameConfig",
    "EventLog",
    "EventType",
    "GameEvent",
    "GameState",
    "create_game",
    "MemoryMatchError",
    "InvalidActionError",
    "AlreadyActiveError",
    "GameNotActiveError",
    "InvalidCardError",
    "AlreadyMatchedError",
    "SameCardError",
    "ConfigurationError",
    "EventLogError",
]
