"""Text notation for tiles, plays, and round transcripts.

Formats:
  3-5        A tile (also accepted: 3|5, [3|5], 35)
  L:3-5      Play 3-5 on the left end
  R:6-6      Play 6-6 on the right end
  3-5        A play with no side; the side is inferred when only one fits

Transcript (one line per event):
  Round 1 - Computer opens
  Computer: R:6-6
  You: L:6-2
  You: pass
  Round 1 over - You wins 14
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from blockdomino.game.events import EventType, GameEvent
from blockdomino.game.state import Side
from blockdomino.game.tile import MAX_PIP, Tile

_TILE_RE = re.compile(r"^\[?(\d)\s*[-|,/ ]?\s*(\d)\]?$")
_PLAY_RE = re.compile(r"^(?:([LRlr])\s*:\s*)?(.+)$")

_SIDE_CHARS = {Side.LEFT: "L", Side.RIGHT: "R"}


def tile_to_str(tile: Tile) -> str:
    return f"{tile.left}-{tile.right}"


def parse_tile(text: str) -> tuple[int, int]:
    """Parse tile notation into a (left, right) pip pair.

    Raises:
        ValueError: If the notation is invalid.
    """
    m = _TILE_RE.match(text.strip())
    if not m:
        raise ValueError(f"Cannot parse tile: '{text}'")
    left, right = int(m.group(1)), int(m.group(2))
    if left > MAX_PIP or right > MAX_PIP:
        raise ValueError(f"Tile out of range: '{text}'")
    return left, right


def play_to_str(tile: Tile, side: Side) -> str:
    return f"{_SIDE_CHARS[side]}:{tile_to_str(tile)}"


def parse_play(text: str) -> tuple[tuple[int, int], Optional[Side]]:
    """Parse play notation into ((left, right), side or None)."""
    m = _PLAY_RE.match(text.strip())
    if not m:
        raise ValueError(f"Cannot parse play: '{text}'")
    side_char, tile_text = m.group(1), m.group(2)
    side = None
    if side_char is not None:
        side = Side.LEFT if side_char.upper() == "L" else Side.RIGHT
    return parse_tile(tile_text), side


def event_to_str(event: GameEvent) -> Optional[str]:
    """One transcript line for ``event``, or None if it has none."""
    d = event.details
    if event.event_type == EventType.GAME_STARTED:
        return f"Game: {', '.join(d['players'])} - {d['max_rounds']} rounds, {d['match_points']} points"
    if event.event_type == EventType.ROUND_STARTED:
        return f"Round {d['round']} - {d['player'].name} opens"
    if event.event_type == EventType.TILE_PLAYED:
        return f"{d['player'].name}: {play_to_str(d['tile'], d['side'])}"
    if event.event_type == EventType.PLAYER_SKIPPED:
        return f"{d['player'].name}: pass"
    if event.event_type == EventType.ROUND_OVER:
        if d["winner"] is None:
            return f"Round {d['round']} over - blocked, no winner"
        return f"Round {d['round']} over - {d['winner'].name} wins {d['points']}"
    if event.event_type == EventType.GAME_OVER:
        scores = ", ".join(f"{name} {score}" for name, score in d["scores"].items())
        return f"Game over - {d['winner'].name} wins ({scores})"
    return None


def events_to_text(events: Iterable[GameEvent]) -> str:
    """Readable transcript of recorded events."""
    lines = []
    for event in events:
        line = event_to_str(event)
        if line is not None:
            lines.append(line)
    return "\n".join(lines)
