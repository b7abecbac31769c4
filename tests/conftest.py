"""Shared test fixtures for memory match tests."""

import pytest

from memory_match import GameConfig, create_game


@pytest.fixture
def game_config():
    """Default configuration: eight cards dealt as [1, 1, 2, 2, 3, 3, 4, 4]."""
    return GameConfig()


@pytest.fixture
def basic_game(game_config):
    """Fresh, inactive eight-card game."""
    return create_game(game_config)


@pytest.fixture
def started_game(basic_game):
    """Eight-card game already started by Alice."""
    basic_game.start("alice")
    return basic_game


@pytest.fixture
def play_all_pairs():
    """Match every pair on a fixed-pattern deck, in order."""

    def play(game, caller):
        events = []
        for card in range(0, game.num_cards, 2):
            events.extend(game.attempt_match(caller, card, card + 1))
        return events

    return play
