#!/usr/bin/env python3
"""Interactive terminal Block Domino.

Usage:
    python scripts/play.py                          # You vs one computer
    python scripts/play.py --players 4 --computers 3
    python scripts/play.py --rounds 3 --points 50 --agent heuristic
"""

import argparse
import dataclasses
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blockdomino.data.generator import create_agent
from blockdomino.game.board import render_board
from blockdomino.game.config import GameConfig, load_config, make_players
from blockdomino.game.controller import GameController
from blockdomino.game.events import EventType
from blockdomino.game.notation import event_to_str, parse_play, tile_to_str
from blockdomino.game.state import Side
from blockdomino.game.tile import Tile
from blockdomino.table.session import MatchSession, PendingDecision


def display_table(game: GameController, decision: PendingDecision):
    """Print the board, the scores, and the human's hand."""
    print()
    print(f"Round {game.current_round}/{game.max_rounds}   "
          + "   ".join(f"{p.name}: {p.score}" for p in game.players))
    for p in game.players:
        if p is not decision.player:
            print(f"  {p.name} holds {len(p.hand)} tiles")
    print(render_board(game.board))
    print()


def ask_side() -> Side | None:
    while True:
        inp = input("Both ends fit. Left or right? [l/r] ").strip().lower()
        if inp in ("l", "left"):
            return Side.LEFT
        if inp in ("r", "right"):
            return Side.RIGHT
        if inp == "q":
            return None


def human_turn(session: MatchSession, decision: PendingDecision) -> bool:
    """Prompt until the pending player makes a legal play. False to quit."""
    game = session.game
    display_table(game, decision)
    hand = list(decision.player.hand)
    print(f"{decision.player.name}'s hand:")
    for i, tile in enumerate(hand):
        mark = "*" if decision.sides_for(tile) else " "
        print(f"  {i + 1:2d}.{mark}{tile_to_str(tile)}")
    if game.board.is_empty():
        print("Opening: play your highest double, or your heaviest tile.")
    print(f"Enter a tile number (1-{len(hand)}), a play like L:3-5, or 'q' to quit:")

    while True:
        inp = input("> ").strip()
        if inp.lower() == "q":
            return False

        side = None
        try:
            tile = hand[int(inp) - 1]
        except (ValueError, IndexError):
            try:
                pips, side = parse_play(inp)
            except ValueError:
                print("Invalid input. Enter a tile number or play notation.")
                continue
            tile = Tile(*pips)

        sides = decision.sides_for(tile)
        if not sides:
            print("That tile cannot be played now.")
            continue
        if side is None and len(sides) > 1:
            side = ask_side()
            if side is None:
                return False
        if session.submit_play(tile, side):
            return True
        print("That play is not legal.")


def announce(event):
    line = event_to_str(event)
    if line is not None:
        print(line)


def main():
    parser = argparse.ArgumentParser(description="Play Block Domino")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config (default: configs/default.yaml if present)")
    parser.add_argument("--players", type=int, default=None, help="Players at the table (2-4)")
    parser.add_argument("--computers", type=int, default=None, help="How many are computers")
    parser.add_argument("--rounds", type=int, default=None, help="Maximum rounds")
    parser.add_argument("--points", type=int, default=None, help="Match points")
    parser.add_argument("--agent", choices=["first", "random", "heuristic"], default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s [%(name)s] %(message)s")

    config_path = args.config or "configs/default.yaml"
    config = load_config(config_path) if os.path.exists(config_path) else GameConfig()
    overrides = {
        "num_players": args.players,
        "automated_players": args.computers,
        "max_rounds": args.rounds,
        "match_points": args.points,
        "agent": args.agent,
        "seed": args.seed,
    }
    config = dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})
    if args.players is not None and args.computers is None:
        config.automated_players = config.num_players - 1
    try:
        config.validate()
    except ValueError as e:
        parser.error(str(e))
    if config.automated_players >= config.num_players:
        parser.error("At least one human player is required")

    game = GameController(make_players(config), config=config)
    agents = [create_agent(config.agent, game.rng) if p.automated else None
              for p in game.players]
    session = MatchSession(game, agents)

    game.subscribe(announce, EventType.TILE_PLAYED)
    game.subscribe(announce, EventType.PLAYER_SKIPPED)
    game.subscribe(announce, EventType.ROUND_STARTED)
    game.subscribe(announce, EventType.ROUND_OVER)

    print("=" * 60)
    print("  Block Domino")
    print("=" * 60)

    decision = session.start()
    while decision is not None:
        if not human_turn(session, decision):
            print("Game aborted.")
            return
        decision = session.advance()

    winner = session.winner()
    print()
    print("=" * 60)
    print(f"  {winner.name} wins the match!")
    for p in game.players:
        print(f"  {p.name}: {p.score}")
    print("=" * 60)


if __name__ == "__main__":
    main()
