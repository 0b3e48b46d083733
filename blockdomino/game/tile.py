"""Domino tiles, the double-six set, and dealing."""

from __future__ import annotations

import numpy as np

MAX_PIP = 6
SET_SIZE = 28

# Canonical unordered pairs of the double-six set, (low, high)
ALL_TILE_KEYS: list[tuple[int, int]] = [
    (i, j) for i in range(MAX_PIP + 1) for j in range(i, MAX_PIP + 1)
]


class Tile:
    """A domino tile.

    ``left``/``right`` are the current orientation and change on flip().
    Identity (equality, hashing) uses the unordered pair, so a tile stays
    the same tile however it is turned.
    """

    __slots__ = ("left", "right", "flipped", "_original")

    def __init__(self, left: int, right: int):
        if not (0 <= left <= MAX_PIP and 0 <= right <= MAX_PIP):
            raise ValueError(f"Tile out of range: {left}-{right}")
        self.left = left
        self.right = right
        self.flipped = False
        self._original = (left, right)

    @property
    def key(self) -> tuple[int, int]:
        return (min(self.left, self.right), max(self.left, self.right))

    @property
    def is_double(self) -> bool:
        return self.left == self.right

    @property
    def total_pips(self) -> int:
        return self.left + self.right

    def matches(self, value: int | None) -> bool:
        return value is not None and (self.left == value or self.right == value)

    def other_end(self, value: int) -> int:
        """Return the pip opposite ``value``."""
        if self.left == value:
            return self.right
        if self.right == value:
            return self.left
        raise ValueError(f"{self.left}-{self.right} does not contain {value}")

    def flip(self) -> None:
        self.left, self.right = self.right, self.left
        self.flipped = not self.flipped

    def reset_orientation(self) -> None:
        self.left, self.right = self._original
        self.flipped = False

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Tile({self.left}, {self.right})"


def full_set() -> list[Tile]:
    """Return a fresh double-six set in canonical order."""
    return [Tile(i, j) for i, j in ALL_TILE_KEYS]


def shuffle_tiles(tiles: list[Tile], rng: np.random.Generator) -> list[Tile]:
    """Return a uniformly random permutation of ``tiles``."""
    order = rng.permutation(len(tiles))
    return [tiles[i] for i in order]


class Deck:
    """The set of tiles for one round.

    Tiles not dealt stay in the deck as the boneyard. Block Domino never
    draws from it.
    """

    def __init__(self, rng: np.random.Generator):
        self.rng = rng
        self.tiles: list[Tile] = full_set()

    def reset(self) -> None:
        self.tiles = full_set()

    def shuffle(self) -> None:
        self.tiles = shuffle_tiles(self.tiles, self.rng)

    def draw(self, count: int) -> list[Tile]:
        drawn = self.tiles[:count]
        del self.tiles[:count]
        return drawn

    @property
    def remaining(self) -> list[Tile]:
        return list(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)


def deal(deck: Deck, num_players: int, hand_size: int) -> list[list[Tile]]:
    """Deal ``hand_size`` tiles to each player in turn order.

    Raises:
        ValueError: If the deck cannot cover every hand.
    """
    if num_players * hand_size > len(deck):
        raise ValueError(
            f"Cannot deal {hand_size} tiles to {num_players} players "
            f"from {len(deck)} tiles"
        )
    return [deck.draw(hand_size) for _ in range(num_players)]
