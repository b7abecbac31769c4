"""
Mapping from internal EventLog objects to canonical public JSON events.

The engine emits GameEvent objects where:
- event_type is events.EventType
- caller is the opaque identity that triggered the transition
- details holds the event-specific fields

This module produces stable, JSONL-friendly dicts with consistent
event_type strings and payload keys.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from memory_match.events import EventType, GameEvent


def map_event(event: GameEvent) -> Dict[str, Any]:
    """
    Map a single GameEvent to a canonical JSON dict.

    Returns:
        dict with keys: event_type (str), caller (optional), and event-specific fields
    """
    d = event.details or {}

    base: Dict[str, Any] = {"event_type": event.event_type.value}
    if event.caller is not None:
        base["caller"] = event.caller

    if event.event_type == EventType.CARD_MATCHED:
        base.update(card1=d.get("card1"), card2=d.get("card2"), pair_id=d.get("pair_id"))
        return base

    if event.event_type == EventType.GAME_ENDED:
        base.update(score=d.get("score"))
        return base

    # GAME_STARTED carries only the caller; unknown details pass through
    base.update({k: v for k, v in d.items() if k not in base})
    return base


def map_events(events: Iterable[GameEvent]) -> List[Dict[str, Any]]:
    """Map a sequence of GameEvent objects, preserving order."""
    return [map_event(e) for e in events]
