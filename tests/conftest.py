"""Shared test fixtures for Language Monopoly tests."""

import pytest
from language_monopoly import GameConfig, Player, create_game


# Color groups on the standard board
BROWN = (1, 2)
LIGHT_BLUE = (4, 5, 6)
GREEN = (17, 18, 20, 21)

LIBRARY_SPACE = 3
CANTEEN_SPACE = 7
REST_SPACE = 11
ORATORY_SPACE = 13


def give(game, player_id, *space_ids):
    """Record ownership directly, bypassing the purchase flow."""
    for space_id in space_ids:
        game.ledger.assign_owner(space_id, game.players[player_id])


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def two_players():
    """Two test players."""
    return [Player(0, "Alice"), Player(1, "Bob")]


@pytest.fixture
def basic_game(game_config, two_players):
    """Basic game with two players and fixed seed."""
    return create_game(game_config, two_players)
