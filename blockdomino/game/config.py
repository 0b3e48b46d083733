"""Game configuration: table size, round limits, and match points.

Configs live in YAML under a ``game:`` section, for example::

    game:
      num_players: 2
      automated_players: 1
      max_rounds: 5
      match_points: 30
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from blockdomino.game.state import Player
from blockdomino.game.tile import SET_SIZE

logger = logging.getLogger("blockdomino.config")

MIN_PLAYERS = 2
MAX_PLAYERS = 4
AGENT_NAMES = ("first", "random", "heuristic")


@dataclass
class GameConfig:
    """Settings for one game."""
    num_players: int = 2
    automated_players: int = 1
    player_names: Optional[list[str]] = None
    hand_size: int = 7
    max_rounds: int = 5
    match_points: int = 30  # First score to reach this ends the game
    seed: Optional[int] = None
    agent: str = "first"  # Strategy for automated players

    def validate(self) -> None:
        """Raise ValueError if the settings cannot make a game."""
        if not MIN_PLAYERS <= self.num_players <= MAX_PLAYERS:
            raise ValueError(
                f"num_players must be {MIN_PLAYERS}-{MAX_PLAYERS}, got {self.num_players}"
            )
        if not 0 <= self.automated_players <= self.num_players:
            raise ValueError(
                f"automated_players must be 0-{self.num_players}, "
                f"got {self.automated_players}"
            )
        if self.hand_size < 1 or self.hand_size * self.num_players > SET_SIZE:
            raise ValueError(
                f"Cannot deal {self.hand_size} tiles to {self.num_players} players"
            )
        if self.max_rounds < 1:
            raise ValueError(f"max_rounds must be positive, got {self.max_rounds}")
        if self.match_points < 1:
            raise ValueError(f"match_points must be positive, got {self.match_points}")
        if self.player_names is not None and len(self.player_names) != self.num_players:
            raise ValueError(
                f"Expected {self.num_players} player names, got {len(self.player_names)}"
            )
        if self.agent not in AGENT_NAMES:
            raise ValueError(f"Unknown agent '{self.agent}', expected one of {AGENT_NAMES}")

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> GameConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.validate()
        return config


def load_config(path: str) -> GameConfig:
    """Read the ``game`` section of a YAML config file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return GameConfig.from_dict(raw.get("game", {}))


def make_players(config: GameConfig) -> list[Player]:
    """Seat human players first, then automated ones."""
    humans = config.num_players - config.automated_players
    players = []
    for i in range(config.num_players):
        automated = i >= humans
        if config.player_names is not None:
            name = config.player_names[i]
        elif automated:
            name = f"Computer {i - humans + 1}" if config.automated_players > 1 else "Computer"
        elif humans == 1:
            name = "You"
        else:
            name = f"Player {i + 1}"
        players.append(Player(name, automated=automated))
    return players
