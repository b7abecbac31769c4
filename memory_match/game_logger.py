"""
JSONL logger for memory match game events.

Appends every signal an engine emits to a JSONL file, and rebuilds an
engine from such a file by re-applying the logged actions.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from memory_match.config import GameConfig
from memory_match.events import EventType, GameEvent
from memory_match.exceptions import EventLogError, InvalidActionError
from memory_match.game import GameState, create_game
from memory_match.mapper import map_event
from memory_match.schemas import EventRecord

logger = logging.getLogger(__name__)


class GameLogger:
    """Logger that writes game events to a JSONL file."""

    def __init__(self, log_file: Optional[Union[str, Path]] = None, append: bool = False):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates timestamped filename.
            append: Keep existing lines instead of truncating the file.
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"memory_match_{timestamp}.jsonl"

        self.log_file = Path(log_file)
        self.event_count = 0

        if append and self.log_file.exists():
            self.event_count = len(read_events(self.log_file))
        else:
            self.log_file.write_text("", encoding="utf-8")

        logger.info(f"Logging game events to {self.log_file} (starting at event {self.event_count})")

    def attach(self, game: GameState) -> None:
        """Subscribe to a game's event log."""
        game.event_log.subscribe(self.log_event)

    def detach(self, game: GameState) -> None:
        game.event_log.unsubscribe(self.log_event)

    def log_event(self, event: GameEvent) -> EventRecord:
        """Append one engine event as a JSON line."""
        mapped = map_event(event)
        event_type = mapped.pop("event_type")
        caller = mapped.pop("caller", None)
        record = EventRecord(
            event_id=self.event_count,
            event_type=event_type,
            timestamp=datetime.now(),
            caller=caller,
            payload=mapped,
        )

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(record.model_dump_json() + "\n")

        self.event_count += 1
        return record


def read_events(log_file: Union[str, Path]) -> List[EventRecord]:
    """
    Read a JSONL event log.

    Raises:
        EventLogError: file missing or a line is not a valid event record
    """
    path = Path(log_file)
    if not path.exists():
        raise EventLogError(f"Event log not found: {path}")

    records: List[EventRecord] = []
    with open(path, "rb") as f:
        for line_no, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8")
                if not line.strip():
                    continue
                records.append(EventRecord.model_validate(json.loads(line)))
            except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
                raise EventLogError(f"{path}:{line_no}: invalid event record: {e}") from e
    return records


def replay_events(records: List[EventRecord], config: Optional[GameConfig] = None) -> GameState:
    """
    Rebuild a game by re-applying logged actions to a fresh engine.

    GAME_STARTED replays as start(), CARD_MATCHED as attempt_match().
    GAME_ENDED is recomputed by the engine and only checked against the log.

    Raises:
        EventLogError: the log does not describe a legal sequence of actions
    """
    game = create_game(config)
    last_emitted: List[GameEvent] = []

    for record in records:
        try:
            if record.event_type == EventType.GAME_STARTED.value:
                last_emitted = [game.start(record.caller)]
            elif record.event_type == EventType.CARD_MATCHED.value:
                last_emitted = game.attempt_match(
                    record.caller, record.payload.get("card1"), record.payload.get("card2")
                )
                if not last_emitted:
                    raise EventLogError(f"Event {record.event_id}: logged match replays as a miss")
            elif record.event_type == EventType.GAME_ENDED.value:
                _check_game_end(record, last_emitted)
            else:
                raise EventLogError(f"Event {record.event_id}: unknown event type {record.event_type!r}")
        except InvalidActionError as e:
            raise EventLogError(f"Event {record.event_id}: cannot replay {record.event_type}: {e}") from e

    logger.info(f"Replayed {len(records)} events ({game.revealed_pairs} pairs revealed, active={game.active})")
    return game


def _check_game_end(record: EventRecord, last_emitted: List[GameEvent]) -> None:
    ended = next((e for e in last_emitted if e.event_type == EventType.GAME_ENDED), None)
    if ended is None:
        raise EventLogError(f"Event {record.event_id}: logged game end but the game is still running")
    if ended.caller != record.caller or ended.details.get("score") != record.payload.get("score"):
        raise EventLogError(
            f"Event {record.event_id}: logged end ({record.caller}, {record.payload.get('score')}) "
            f"differs from replay ({ended.caller}, {ended.details.get('score')})"
        )
