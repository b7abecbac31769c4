"""
Main game engine and state management.
"""

import logging
import random
import threading
from typing import Dict, List, Optional

from memory_match.cards import Card, create_deck, resolve_pair_pattern
from memory_match.config import GameConfig
from memory_match.events import EventLog, EventType, GameEvent
from memory_match.exceptions import (
    AlreadyActiveError,
    AlreadyMatchedError,
    GameNotActiveError,
    InvalidCardError,
    SameCardError,
)

logger = logging.getLogger(__name__)


class GameState:
    """
    Represents the complete state of a memory match game.
    This is the main interface for the game engine.

    The deck, the active flag and the score table are owned here and only
    change through start() and attempt_match(). Every call holds the same
    lock, so each one reads, validates, mutates and signals atomically.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.event_log = EventLog()
        self._lock = threading.RLock()

        # Only seeded configs shuffle; the default deal is the fixed pattern
        self.rng: Optional[random.Random] = None
        if self.config.shuffle_seed is not None:
            self.rng = random.Random(self.config.shuffle_seed)

        self.cards: List[Card] = create_deck(resolve_pair_pattern(self.config, self.rng))
        self._active = False
        self._revealed_pairs = 0
        self._scores: Dict[str, int] = {}

        logger.debug(f"Deck dealt: {[c.pair_id for c in self.cards]}")

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    @property
    def total_pairs(self) -> int:
        return len(self.cards) // 2

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    @property
    def revealed_pairs(self) -> int:
        with self._lock:
            return self._revealed_pairs

    @property
    def scores(self) -> Dict[str, int]:
        """Copy of the score table, keyed by caller identity."""
        with self._lock:
            return dict(self._scores)

    def get_score(self, caller: str) -> int:
        """Accumulated score of a caller; 0 if they never matched a pair."""
        with self._lock:
            return self._scores.get(caller, 0)

    def get_all_cards(self) -> List[Card]:
        """Detached copies of every card, in id order."""
        with self._lock:
            return [card.copy() for card in self.cards]

    def start(self, caller: str) -> GameEvent:
        """
        Start a new game.

        Scores and matched flags carry over unless the config asks for a
        deck reset.

        Raises:
            AlreadyActiveError: a game is already running
        """
        with self._lock:
            if self._active:
                logger.debug(f"start rejected for {caller}: game already active")
                raise AlreadyActiveError()

            if self.config.reset_deck_on_start:
                self._reset_deck()

            self._revealed_pairs = 0
            self._active = True
            logger.info(f"Game started by {caller}")
            return self.event_log.log(EventType.GAME_STARTED, caller=caller)

    def attempt_match(self, caller: str, card1: int, card2: int) -> List[GameEvent]:
        """
        Try to match two cards.

        Returns the events emitted by this call: empty for a miss,
        CARD_MATCHED for a pair, followed by GAME_ENDED for the last pair.

        Raises:
            GameNotActiveError: no game is running
            InvalidCardError: an index is outside the deck
            AlreadyMatchedError: a card was matched earlier
            SameCardError: both indices are equal
        """
        with self._lock:
            self._validate_match(caller, card1, card2)

            first, second = self.cards[card1], self.cards[card2]
            if first.pair_id != second.pair_id:
                logger.debug(f"{caller} missed: cards {card1} and {card2}")
                return []

            first.matched = True
            second.matched = True
            self._scores[caller] = self._scores.get(caller, 0) + 1
            self._revealed_pairs += 1
            game_over = self._revealed_pairs == self.total_pairs
            if game_over:
                self._active = False
            score = self._scores[caller]

            # All state is final before observers run; a failing observer
            # propagates but cannot leave the game half-transitioned
            logger.debug(
                f"{caller} matched cards {card1} and {card2} "
                f"({self._revealed_pairs}/{self.total_pairs})"
            )
            emitted = [
                self.event_log.log(
                    EventType.CARD_MATCHED,
                    caller=caller,
                    card1=card1,
                    card2=card2,
                    pair_id=first.pair_id,
                )
            ]

            if game_over:
                logger.info(f"Game ended by {caller} with score {score}")
                emitted.append(self.event_log.log(EventType.GAME_ENDED, caller=caller, score=score))

            return emitted

    def _validate_match(self, caller: str, card1: int, card2: int) -> None:
        """Check match preconditions in order; the first failure wins."""
        if not self._active:
            logger.debug(f"attempt_match rejected for {caller}: no active game")
            raise GameNotActiveError()

        if not (self._is_valid_index(card1) and self._is_valid_index(card2)):
            logger.debug(f"attempt_match rejected for {caller}: cards {card1}, {card2} out of range")
            raise InvalidCardError(card1, card2, self.num_cards)

        if self.cards[card1].matched or self.cards[card2].matched:
            logger.debug(f"attempt_match rejected for {caller}: cards {card1}, {card2} already matched")
            raise AlreadyMatchedError(card1, card2)

        if card1 == card2:
            logger.debug(f"attempt_match rejected for {caller}: same card {card1}")
            raise SameCardError(card1)

    def _is_valid_index(self, index: int) -> bool:
        # bool is an int subclass but never a card index
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self.cards)

    def _reset_deck(self) -> None:
        """Clear matched flags, redealing pair ids when the config is seeded."""
        if self.rng is not None:
            pattern = resolve_pair_pattern(self.config, self.rng)
            self.cards = create_deck(pattern)
        else:
            for card in self.cards:
                card.matched = False
        logger.debug("Deck reset for a new game")


def create_game(config: Optional[GameConfig] = None) -> GameState:
    """Create a new game with the given configuration."""
    return GameState(config)
