"""
Tests for the JSONL event log and replay.
"""

import json

import pytest

from memory_match.config import GameConfig
from memory_match.exceptions import EventLogError
from memory_match.game import create_game
from memory_match.game_logger import GameLogger, read_events, replay_events
from memory_match.snapshot import serialize_snapshot


@pytest.fixture
def logged_game(tmp_path):
    game = create_game()
    game_logger = GameLogger(tmp_path / "events.jsonl")
    game_logger.attach(game)
    return game, game_logger


def test_each_signal_is_one_line(logged_game):
    game, game_logger = logged_game
    game.start("alice")
    game.attempt_match("alice", 0, 1)
    game.attempt_match("alice", 2, 4)

    lines = game_logger.log_file.read_text(encoding="utf-8").splitlines()

    assert len(lines) == 2
    first, second = (json.loads(line) for line in lines)
    assert first["event_id"] == 0
    assert first["event_type"] == "game_started"
    assert first["caller"] == "alice"
    assert second["event_id"] == 1
    assert second["payload"] == {"card1": 0, "card2": 1, "pair_id": 1}
    assert game_logger.event_count == 2


def test_replay_restores_state(logged_game):
    game, game_logger = logged_game
    game.start("alice")
    game.attempt_match("bob", 2, 3)
    for card1, card2 in [(0, 1), (4, 5), (6, 7)]:
        game.attempt_match("alice", card1, card2)
    game.start("carol")

    records = read_events(game_logger.log_file)
    restored = replay_events(records)

    assert serialize_snapshot(restored) == serialize_snapshot(game)
    assert [e.event_type for e in restored.event_log.get_events()] == [
        e.event_type for e in game.event_log.get_events()
    ]


def test_replay_with_reset_config(tmp_path):
    config = GameConfig(num_cards=6, reset_deck_on_start=True, shuffle_seed=11)
    game = create_game(config)
    game_logger = GameLogger(tmp_path / "events.jsonl")
    game_logger.attach(game)

    game.start("alice")
    cards = game.get_all_cards()
    by_pair = {}
    for card in cards:
        by_pair.setdefault(card.pair_id, []).append(card.id)
    for first, second in by_pair.values():
        game.attempt_match("alice", first, second)
    game.start("bob")

    restored = replay_events(
        read_events(game_logger.log_file),
        GameConfig(num_cards=6, reset_deck_on_start=True, shuffle_seed=11),
    )

    assert serialize_snapshot(restored) == serialize_snapshot(game)


def test_append_continues_numbering(tmp_path):
    path = tmp_path / "events.jsonl"
    game = create_game()
    first = GameLogger(path)
    first.attach(game)
    game.start("alice")
    first.detach(game)

    resumed = GameLogger(path, append=True)

    assert resumed.event_count == 1
    record = resumed.log_event(game.attempt_match("alice", 0, 1)[0])
    assert record.event_id == 1
    assert len(read_events(path)) == 2


def test_detach_stops_logging(logged_game):
    game, game_logger = logged_game
    game_logger.detach(game)

    game.start("alice")

    assert game_logger.log_file.read_text(encoding="utf-8") == ""


def test_missing_log(tmp_path):
    with pytest.raises(EventLogError):
        read_events(tmp_path / "missing.jsonl")


def test_corrupt_line(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text('{"event_id": 0, "event_type": "game_started"}\nnot json\n', encoding="utf-8")

    with pytest.raises(EventLogError, match=":2:"):
        read_events(path)


def _write_records(path, records):
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")


def test_replay_rejects_illegal_sequence(tmp_path):
    path = tmp_path / "events.jsonl"
    _write_records(path, [{"event_id": 0, "event_type": "card_matched", "caller": "alice", "payload": {"card1": 0, "card2": 1}}])

    with pytest.raises(EventLogError, match="cannot replay"):
        replay_events(read_events(path))


def test_replay_rejects_miss_logged_as_match(tmp_path):
    path = tmp_path / "events.jsonl"
    _write_records(
        path,
        [
            {"event_id": 0, "event_type": "game_started", "caller": "alice"},
            {"event_id": 1, "event_type": "card_matched", "caller": "alice", "payload": {"card1": 0, "card2": 2}},
        ],
    )

    with pytest.raises(EventLogError, match="miss"):
        replay_events(read_events(path))


def test_replay_rejects_premature_end(tmp_path):
    path = tmp_path / "events.jsonl"
    _write_records(
        path,
        [
            {"event_id": 0, "event_type": "game_started", "caller": "alice"},
            {"event_id": 1, "event_type": "card_matched", "caller": "alice", "payload": {"card1": 0, "card2": 1}},
            {"event_id": 2, "event_type": "game_ended", "caller": "alice", "payload": {"score": 1}},
        ],
    )

    with pytest.raises(EventLogError, match="still running"):
        replay_events(read_events(path))


def test_replay_rejects_unknown_event(tmp_path):
    path = tmp_path / "events.jsonl"
    _write_records(path, [{"event_id": 0, "event_type": "card_flipped"}])

    with pytest.raises(EventLogError, match="unknown event type"):
        replay_events(read_events(path))


def test_invalid_utf8(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_bytes(b'\xff\xfe{"event_id": 0}\n')

    with pytest.raises(EventLogError, match=":1:"):
        read_events(path)
