"""
Game signals and event logging.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of game events."""

    GAME_STARTED = "game_started"
    CARD_MATCHED = "card_matched"
    GAME_ENDED = "game_ended"


@dataclass
class GameEvent:
    """A signal emitted on a state transition."""

    event_type: EventType
    caller: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        caller_str = self.caller if self.caller is not None else "System"
        return f"[{caller_str}] {self.event_type.value}: {self.details}"


EventListener = Callable[[GameEvent], None]


class EventLog:
    """Manages the game event log and notifies observers of new events."""

    def __init__(self):
        self.events: List[GameEvent] = []
        self._listeners: List[EventListener] = []

    def log(self, event_type: EventType, caller: Optional[str] = None, **details: Any) -> GameEvent:
        """
        Record an event and hand it to every subscribed observer.

        The event is recorded before delivery, so it stays in the log even
        when an observer raises; the exception propagates to the caller and
        later observers are skipped. The log keeps every event for the
        lifetime of the game; call clear() to drop history.
        """
        event = GameEvent(event_type, caller, details)
        self.events.append(event)
        for listener in list(self._listeners):
            listener(event)
        return event

    def subscribe(self, listener: EventListener) -> None:
        """Register an observer called with each event as it is logged."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove an observer; unknown observers are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug(f"Listener {listener!r} was not subscribed")

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self.events[-count:]

    def clear(self) -> None:
        """Clear the event log."""
        self.events.clear()
