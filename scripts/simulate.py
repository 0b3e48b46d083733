#!/usr/bin/env python3
"""Simulate Block Domino games between automated players.

Usage:
    python scripts/simulate.py --config configs/default.yaml
    python scripts/simulate.py --num-games 500 --agents first heuristic
"""

import argparse
import logging
import os
import sys

import yaml

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blockdomino.game.config import GameConfig
from blockdomino.data.generator import generate_games, summarize

logger = logging.getLogger("blockdomino.simulate")


def main():
    parser = argparse.ArgumentParser(description="Simulate Block Domino games")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--num-games", type=int, default=None,
                        help="Override number of games")
    parser.add_argument("--agents", nargs="+", default=None,
                        help="Strategy per seat: first, random, heuristic")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s [%(name)s] %(message)s")

    with open(args.config) as f:
        raw = yaml.safe_load(f) or {}

    game_cfg = dict(raw.get("game", {}))
    sim_cfg = raw.get("simulation", {})
    agents = args.agents or sim_cfg.get("agents")
    if agents is not None:
        game_cfg["num_players"] = len(agents)
    if args.seed is not None:
        game_cfg["seed"] = args.seed
    game_cfg["automated_players"] = game_cfg.get("num_players", 2)

    config = GameConfig.from_dict(game_cfg)
    num_games = args.num_games or sim_cfg.get("num_games", 100)

    logger.info(f"Simulating {num_games} games, agents: {agents or [config.agent] * config.num_players}")
    records = generate_games(config, num_games, agent_names=agents)

    rounds = sum(r.rounds for r in records) / max(len(records), 1)
    logger.info(f"Average rounds per game: {rounds:.2f}")
    for name, rate in summarize(records).items():
        logger.info(f"  {name}: {rate:.1%} wins")


if __name__ == "__main__":
    main()
