"""
Cards and deck construction.
"""

import random
from collections import Counter
from dataclasses import dataclass, replace
from typing import List, Optional

from memory_match.config import GameConfig
from memory_match.exceptions import ConfigurationError


@dataclass
class Card:
    """A single card on the table."""

    id: int
    pair_id: int
    matched: bool = False

    def copy(self) -> "Card":
        return replace(self)


def build_pair_pattern(num_cards: int) -> List[int]:
    """
    Fixed pairing pattern for an even deck size.

    Each pair id 1..N/2 appears twice in a row: [1, 1, 2, 2, ...].
    """
    if num_cards < 2 or num_cards % 2 != 0:
        raise ConfigurationError(f"Deck size must be an even number >= 2, got {num_cards}")
    return [pair for pair in range(1, num_cards // 2 + 1) for _ in range(2)]


def validate_pair_pattern(pattern: List[int]) -> None:
    """Ensure every pair id in the pattern is held by exactly two cards."""
    if len(pattern) < 2 or len(pattern) % 2 != 0:
        raise ConfigurationError(f"Pair pattern must have an even length >= 2, got {len(pattern)}")

    counts = Counter(pattern)
    bad = sorted(pair for pair, count in counts.items() if count != 2)
    if bad:
        raise ConfigurationError(f"Pair ids must appear exactly twice, offending ids: {bad}")


def resolve_pair_pattern(config: GameConfig, rng: Optional[random.Random] = None) -> List[int]:
    """
    Pattern the deck is dealt from.

    Uses the explicit pattern from the config when given, the fixed
    pattern otherwise. Shuffles it only when an RNG is supplied.
    """
    if config.pair_pattern is not None:
        pattern = list(config.pair_pattern)
        validate_pair_pattern(pattern)
    else:
        pattern = build_pair_pattern(config.num_cards)

    if rng is not None:
        rng.shuffle(pattern)
    return pattern


def create_deck(pattern: List[int]) -> List[Card]:
    """Deal one card per pattern entry; the card id is its position."""
    return [Card(id=index, pair_id=pair_id) for index, pair_id in enumerate(pattern)]
