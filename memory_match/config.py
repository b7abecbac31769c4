"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class GameConfig:
    """Configuration for a memory match game."""

    num_cards: int = 8

    # Explicit pair ids per card position; derived from num_cards when None
    pair_pattern: Optional[List[int]] = None

    # Clear matched flags (and redeal when seeded) on every start
    reset_deck_on_start: bool = False

    # Seeded shuffle of the pattern; None keeps the fixed arrangement
    shuffle_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.pair_pattern is not None:
            self.pair_pattern = list(self.pair_pattern)
            self.num_cards = len(self.pair_pattern)
