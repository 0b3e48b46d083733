"""Automated players and whole-game simulation."""

from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from blockdomino.game.config import GameConfig, make_players
from blockdomino.game.controller import GameController
from blockdomino.game.events import EventType
from blockdomino.game.notation import play_to_str
from blockdomino.game.state import Play, Player

logger = logging.getLogger("blockdomino.generator")


class Agent:
    """Base agent interface."""

    def choose_play(self, game: GameController, player: Player) -> Optional[Play]:
        raise NotImplementedError


class FirstPlayableAgent(Agent):
    """Plays the first tile that fits, left end before right end."""

    def choose_play(self, game: GameController, player: Player) -> Optional[Play]:
        return game.next_playable_tile(player)


class RandomAgent(Agent):
    """Plays a uniformly random legal play."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def choose_play(self, game: GameController, player: Player) -> Optional[Play]:
        plays = game.legal_plays(player)
        if not plays:
            return None
        return plays[int(self.rng.integers(len(plays)))]


def create_agent(name: str, rng: Optional[np.random.Generator] = None) -> Agent:
    """Create an agent by strategy name: first, random, or heuristic."""
    if name == "first":
        return FirstPlayableAgent()
    if name == "random":
        return RandomAgent(rng)
    if name == "heuristic":
        from blockdomino.engine.heuristic_player import HeuristicPlayer
        return HeuristicPlayer(rng=rng)
    raise ValueError(f"Unknown agent: {name}")


@dataclass
class GameRecord:
    """Outcome of one simulated game."""
    winner: str
    scores: dict[str, int]
    rounds: int
    round_winners: list[Optional[str]] = field(default_factory=list)
    plays: list[str] = field(default_factory=list)


def play_game(game: GameController, agents: Sequence[Agent],
              max_rounds: Optional[int] = None, max_plays: int = 2000) -> GameRecord:
    """Play a complete game where every seat is driven by an agent.

    Args:
        game: Controller with its players already seated.
        agents: One agent per seat, in seat order.
        max_rounds: Optional round limit passed to start_game().
        max_plays: Safety cap on the number of plays.

    Raises:
        ValueError: If an agent picks a play the controller rejects.
    """
    if len(agents) != len(game.players):
        raise ValueError(f"Need {len(game.players)} agents, got {len(agents)}")

    game.start_game(max_rounds=max_rounds)
    plays_made = 0

    while not game.is_game_over() and plays_made < max_plays:
        player = game.current_player
        if game.has_playable_tile(player):
            play = agents[game.current_player_index].choose_play(game, player)
            if play is None or not game.play_tile(player, play.tile, play.side):
                raise ValueError(f"{player.name} chose an illegal play: {play}")
            plays_made += 1
            game.next_turn()
        else:
            game.skip_current_player()

        if game.is_round_over():
            game.end_round()
            game.start_next_round()

    if plays_made >= max_plays:
        logger.warning(f"Stopped after {max_plays} plays without finishing")

    record = GameRecord(
        winner=game.winner().name,
        scores={p.name: p.score for p in game.players},
        rounds=game.current_round,
    )
    for event in game.events.get_events():
        if event.event_type == EventType.TILE_PLAYED:
            d = event.details
            record.plays.append(f"{d['player'].name} {play_to_str(d['tile'], d['side'])}")
        elif event.event_type == EventType.ROUND_OVER:
            winner = event.details["winner"]
            record.round_winners.append(winner.name if winner is not None else None)
    return record


def generate_games(config: GameConfig, num_games: int,
                   agent_names: Optional[Sequence[str]] = None) -> list[GameRecord]:
    """Simulate ``num_games`` games between automated players.

    Args:
        config: Table settings. Every seat is automated regardless of
            ``config.automated_players``.
        num_games: Number of games to play.
        agent_names: Strategy per seat; defaults to ``config.agent`` for all.
    """
    config = dataclasses.replace(config, automated_players=config.num_players)
    config.validate()
    names = list(agent_names) if agent_names is not None else [config.agent] * config.num_players
    if len(names) != config.num_players:
        raise ValueError(f"Need {config.num_players} agent names, got {len(names)}")

    rng = np.random.default_rng(config.seed)
    records = []
    for i in range(num_games):
        players = make_players(config)
        if config.player_names is None:
            for player, name in zip(players, names):
                player.name = f"{player.name} ({name})"
        game = GameController(players, config=config, rng=rng)
        agents = [create_agent(name, rng) for name in names]
        records.append(play_game(game, agents))

        if (i + 1) % 100 == 0:
            logger.info(f"Generated {i + 1}/{num_games} games")

    return records


def summarize(records: Sequence[GameRecord]) -> dict[str, float]:
    """Win rate per player name."""
    if not records:
        return {}
    wins = Counter(r.winner for r in records)
    names = sorted({name for r in records for name in r.scores})
    return {name: wins[name] / len(records) for name in names}
