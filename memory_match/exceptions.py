"""
Custom exception hierarchy for the memory match engine.

Provides typed errors that callers can handle consistently, whether they
drive the engine directly or through a transport layer of their own.
"""

from typing import Tuple


class MemoryMatchError(Exception):
    """Base exception for all game-related errors."""


class InvalidActionError(MemoryMatchError):
    """Action is not legal in the current state."""


class AlreadyActiveError(InvalidActionError):
    """A game is already running; wait for it to end before starting another."""

    def __init__(self) -> None:
        super().__init__("A game is already active")


class GameNotActiveError(InvalidActionError):
    """A match was attempted outside an active game."""

    def __init__(self) -> None:
        super().__init__("No game is active")


class InvalidCardError(InvalidActionError):
    """A card index lies outside the deck."""

    def __init__(self, card1: int, card2: int, num_cards: int) -> None:
        self.cards: Tuple[int, int] = (card1, card2)
        self.num_cards = num_cards
        super().__init__(f"Card indices {card1}, {card2} must be in [0, {num_cards})")


class AlreadyMatchedError(InvalidActionError):
    """One or both referenced cards were already matched."""

    def __init__(self, card1: int, card2: int) -> None:
        self.cards: Tuple[int, int] = (card1, card2)
        super().__init__(f"Card {card1} or {card2} is already matched")


class SameCardError(InvalidActionError):
    """Both indices name the same card."""

    def __init__(self, card: int) -> None:
        self.card = card
        super().__init__(f"Cannot match card {card} with itself")


class ConfigurationError(MemoryMatchError):
    """Deck size or pair pattern is invalid."""


class EventLogError(MemoryMatchError):
    """A persisted event log could not be read or replayed."""
