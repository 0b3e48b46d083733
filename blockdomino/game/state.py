"""Players, hands, and the small value types shared by the engine."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, NamedTuple, Optional

from blockdomino.game.tile import Tile


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Phase(str, Enum):
    """Controller state."""
    NOT_STARTED = "not_started"
    AWAITING_PLAY = "awaiting_play"
    ROUND_OVER = "round_over"
    GAME_OVER = "game_over"


class Play(NamedTuple):
    tile: Tile
    side: Side


class Hand:
    """Tiles owned by one player, in the order they were dealt."""

    def __init__(self, tiles: Optional[Iterable[Tile]] = None):
        self.tiles: list[Tile] = list(tiles) if tiles is not None else []

    def add(self, tile: Tile) -> None:
        self.tiles.append(tile)

    def extend(self, tiles: Iterable[Tile]) -> None:
        self.tiles.extend(tiles)

    def remove(self, tile: Tile) -> None:
        """Remove ``tile``. Raises ValueError if it is not held."""
        for i, held in enumerate(self.tiles):
            if held == tile:
                del self.tiles[i]
                return
        raise ValueError(f"{tile!r} is not in this hand")

    def clear(self) -> None:
        self.tiles.clear()

    def is_empty(self) -> bool:
        return not self.tiles

    def pip_count(self) -> int:
        return sum(t.total_pips for t in self.tiles)

    def __contains__(self, tile) -> bool:
        return tile in self.tiles

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def __getitem__(self, index: int) -> Tile:
        return self.tiles[index]

    def __repr__(self) -> str:
        return f"Hand({self.tiles!r})"


class Player:
    """A seat at the table.

    Players compare by identity: two players with the same name are still
    different seats.
    """

    def __init__(self, name: str, automated: bool = False,
                 hand: Optional[Hand] = None):
        self.name = name
        self.automated = automated
        self.hand = hand if hand is not None else Hand()
        self.score = 0

    def reset_score(self) -> None:
        self.score = 0

    def __repr__(self) -> str:
        kind = "auto" if self.automated else "human"
        return f"Player(name='{self.name}', {kind}, score={self.score}, tiles={len(self.hand)})"
