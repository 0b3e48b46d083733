"""Shared fixtures for Block Domino tests."""

import numpy as np
import pytest

from blockdomino.game.controller import GameController
from blockdomino.game.state import Hand, Player, Side
from blockdomino.game.tile import Tile


def _arrange(game, hands, board=(), current=0):
    """Replace the dealt round with known hands and board.

    Args:
        game: A started GameController.
        hands: One list of (left, right) pairs per player.
        board: Pairs placed left to right; each must join the previous one.
        current: Index of the player to move.
    """
    game.board.clear()
    for i, (a, b) in enumerate(board):
        assert game.board.place(Tile(a, b), Side.RIGHT), f"bad board tile {a}-{b}"
    for player, tiles in zip(game.players, hands):
        player.hand = Hand(Tile(a, b) for a, b in tiles)
    game.current_player_index = current
    return game


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def two_players():
    return [Player("Alice"), Player("Bob")]


@pytest.fixture
def game(two_players, rng):
    """A started two-player game."""
    g = GameController(two_players, rng=rng)
    g.start_game(max_rounds=5)
    return g


@pytest.fixture
def arrange():
    return _arrange
