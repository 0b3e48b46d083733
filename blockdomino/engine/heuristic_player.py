"""Heuristic automated player.

Instead of taking the first tile that fits, scores every legal play with a
bit of Block Domino sense: shed heavy tiles early (they count against you
in a blocked round), get doubles out while they can still be placed, and
keep an end open that you can follow up on.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from blockdomino.data.generator import Agent
from blockdomino.game.controller import GameController
from blockdomino.game.state import Play, Player, Side


class HeuristicPlayer(Agent):
    """Plays using hand-crafted heuristics."""

    def __init__(self, exploration: float = 0.0, pip_weight: float = 1.0,
                 double_bonus: float = 3.0, follow_up_weight: float = 2.0,
                 rng: Optional[np.random.Generator] = None):
        """
        Args:
            exploration: Chance of making a random legal play (0-1)
            pip_weight: Value per pip shed
            double_bonus: Extra value for playing a double
            follow_up_weight: Value per remaining tile matching the new end
        """
        self.exploration = exploration
        self.pip_weight = pip_weight
        self.double_bonus = double_bonus
        self.follow_up_weight = follow_up_weight
        self.rng = rng if rng is not None else np.random.default_rng()

    def choose_play(self, game: GameController, player: Player) -> Optional[Play]:
        plays = game.legal_plays(player)
        if not plays:
            return None

        if self.exploration > 0 and self.rng.random() < self.exploration:
            return plays[int(self.rng.integers(len(plays)))]

        best_play = plays[0]
        best_score = -float("inf")
        for play in plays:
            score = self.evaluate_play(game, player, play)
            if score > best_score:
                best_score = score
                best_play = play
        return best_play

    def evaluate_play(self, game: GameController, player: Player, play: Play) -> float:
        tile = play.tile
        score = self.pip_weight * tile.total_pips
        if tile.is_double:
            score += self.double_bonus

        board = game.board
        if board.is_empty():
            new_ends = {tile.left, tile.right}
        else:
            exposed = tile.other_end(board.end_at(play.side))
            other = board.right_end if play.side == Side.LEFT else board.left_end
            new_ends = {exposed, other}

        rest = [t for t in player.hand if t != tile]
        follow_ups = sum(1 for t in rest if any(t.matches(v) for v in new_ends))
        score += self.follow_up_weight * follow_ups
        return score
