"""
Public snapshot serialization of GameState.

Produces a UI-friendly view of the current game: lifecycle flags, every
card with its matched flag, and the score table.
"""

from __future__ import annotations

from typing import Any, Dict, List

from memory_match.game import GameState
from memory_match.schemas import CardDTO


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - active flag, revealed_pairs and total_pairs
    - cards in id order with pair_id and matched
    - scores sorted by caller
    """
    cards: List[Dict[str, Any]] = [
        CardDTO(id=c.id, pair_id=c.pair_id, matched=c.matched).model_dump()
        for c in game.get_all_cards()
    ]

    snapshot: Dict[str, Any] = {
        "active": game.active,
        "revealed_pairs": game.revealed_pairs,
        "total_pairs": game.total_pairs,
        "num_cards": game.num_cards,
        "cards": cards,
        "scores": dict(sorted(game.scores.items())),
    }

    return snapshot
