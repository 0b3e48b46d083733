"""Block Domino rules: play legality, the opening rule, and round scoring.

Opening rule: on an empty board a player holding any double must open with
their highest double. A player without doubles must open with a tile of the
highest pip total in their hand (every tile sharing that total is legal).

After the opening, a tile is legal if it carries the pip of either open end.
A player who cannot play is skipped; nobody draws.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from blockdomino.game.board import Board
from blockdomino.game.state import Hand, Play, Player, Side
from blockdomino.game.tile import Tile


def pip_count(tiles: Iterable[Tile]) -> int:
    return sum(t.total_pips for t in tiles)


# ---------------------------------------------------------------------------
# Opening move
# ---------------------------------------------------------------------------

def opening_tiles(hand: Hand) -> list[Tile]:
    """All tiles this hand may open with."""
    tiles = list(hand)
    if not tiles:
        return []
    doubles = [t for t in tiles if t.is_double]
    if doubles:
        return [max(doubles, key=lambda t: t.left)]
    best = max(t.total_pips for t in tiles)
    return [t for t in tiles if t.total_pips == best]


def opening_tile(hand: Hand) -> Optional[Tile]:
    """The single opening tile an automated player uses.

    Highest double, else highest pip total; among equal totals the tile
    with the higher pip wins.
    """
    candidates = opening_tiles(hand)
    if not candidates:
        return None
    return max(candidates, key=lambda t: (t.total_pips, max(t.key)))


def is_legal_opening(tile: Tile, hand: Hand) -> bool:
    return tile in opening_tiles(hand)


# ---------------------------------------------------------------------------
# Regular moves
# ---------------------------------------------------------------------------

def can_play(tile: Tile, board: Board) -> bool:
    """True if ``tile`` fits either open end of a non-empty board."""
    return tile.matches(board.left_end) or tile.matches(board.right_end)


def playable_sides(tile: Tile, board: Board) -> list[Side]:
    """Sides ``tile`` can be attached to, left first."""
    if board.is_empty():
        return [Side.LEFT]
    sides = []
    if tile.matches(board.left_end):
        sides.append(Side.LEFT)
    if tile.matches(board.right_end):
        sides.append(Side.RIGHT)
    return sides


def is_legal_play(tile: Tile, hand: Hand, board: Board) -> bool:
    if board.is_empty():
        return is_legal_opening(tile, hand)
    return can_play(tile, board)


def has_playable_tile(hand: Hand, board: Board) -> bool:
    if board.is_empty():
        return not hand.is_empty()
    return any(can_play(t, board) for t in hand)


def playable_tiles(hand: Hand, board: Board) -> list[Tile]:
    if board.is_empty():
        return opening_tiles(hand)
    return [t for t in hand if can_play(t, board)]


def legal_plays(hand: Hand, board: Board) -> list[Play]:
    """Every (tile, side) pair the board would accept from this hand."""
    if board.is_empty():
        return [Play(t, Side.LEFT) for t in opening_tiles(hand)]
    plays = []
    for tile in hand:
        for side in playable_sides(tile, board):
            plays.append(Play(tile, side))
    return plays


def next_playable_tile(hand: Hand, board: Board) -> Optional[Play]:
    """Deterministic pick for automated players.

    The first tile in hand order matching the left end; failing that the
    first matching the right end. On an empty board, the opening tile.
    """
    if hand.is_empty():
        return None
    if board.is_empty():
        return Play(opening_tile(hand), Side.LEFT)
    for tile in hand:
        if tile.matches(board.left_end):
            return Play(tile, Side.LEFT)
    for tile in hand:
        if tile.matches(board.right_end):
            return Play(tile, Side.RIGHT)
    return None


# ---------------------------------------------------------------------------
# Round and game results
# ---------------------------------------------------------------------------

def round_winner(players: Sequence[Player]) -> Optional[int]:
    """Index of the round winner, or None when the lowest count is shared.

    A player who emptied their hand wins outright. In a blocked round the
    player with the lowest remaining pip count wins.
    """
    if not players:
        raise ValueError("No players")
    for i, p in enumerate(players):
        if p.hand.is_empty():
            return i
    counts = [p.hand.pip_count() for p in players]
    lowest = min(counts)
    winners = [i for i, c in enumerate(counts) if c == lowest]
    return winners[0] if len(winners) == 1 else None


def round_points(players: Sequence[Player], winner_index: int) -> int:
    """Opponents' remaining pips minus the winner's own, never below zero."""
    opponents = sum(p.hand.pip_count() for i, p in enumerate(players)
                    if i != winner_index)
    return max(0, opponents - players[winner_index].hand.pip_count())


def game_winner(players: Sequence[Player]) -> int:
    """Index of the highest scorer; ties go to the earlier seat."""
    if not players:
        raise ValueError("No players")
    best = 0
    for i, p in enumerate(players):
        if p.score > players[best].score:
            best = i
    return best
