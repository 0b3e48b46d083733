"""The line of play and its text rendering."""

from __future__ import annotations

from typing import Iterator, Optional

from blockdomino.game.state import Side
from blockdomino.game.tile import Tile


class Board:
    """Ordered chain of placed tiles.

    The first tile's ``left`` pip and the last tile's ``right`` pip are the
    open ends. Adjacent tiles always share the pip at their join.
    """

    def __init__(self):
        self._tiles: list[Tile] = []

    @property
    def tiles(self) -> tuple[Tile, ...]:
        return tuple(self._tiles)

    def is_empty(self) -> bool:
        return not self._tiles

    @property
    def left_end(self) -> Optional[int]:
        return self._tiles[0].left if self._tiles else None

    @property
    def right_end(self) -> Optional[int]:
        return self._tiles[-1].right if self._tiles else None

    def end_at(self, side: Side) -> Optional[int]:
        return self.left_end if side == Side.LEFT else self.right_end

    def place(self, tile: Tile, side: Side) -> bool:
        """Attach ``tile`` at ``side``, flipping it so the matching pip joins.

        The first tile goes down as-is regardless of side. Returns False and
        leaves both board and tile untouched when the tile does not match.
        """
        if not self._tiles:
            self._tiles.append(tile)
            return True

        end = self.end_at(side)
        if not tile.matches(end):
            return False

        if side == Side.LEFT:
            if tile.right != end:
                tile.flip()
            self._tiles.insert(0, tile)
        else:
            if tile.left != end:
                tile.flip()
            self._tiles.append(tile)
        return True

    def clear(self) -> None:
        self._tiles.clear()

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)


def render_board(board: Board) -> str:
    """Render the chain as text, e.g. ``3 [3|6][6|6][6|1] 1``."""
    if board.is_empty():
        return "(empty board)"
    chain = "".join(f"[{t.left}|{t.right}]" for t in board)
    return f"{board.left_end} {chain} {board.right_end}"
