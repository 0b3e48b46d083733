"""Table session: drives a game where humans and agents share the table.

The controller itself never waits for anyone. MatchSession runs automated
turns, skips blocked players, and closes rounds until a human has to
decide; it then parks in a pending decision until submit_play() delivers
one. A front end loops on ``advance()`` / ``submit_play()`` and renders
``game.snapshot()`` in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from blockdomino.data.generator import Agent
from blockdomino.game.controller import GameController
from blockdomino.game.state import Play, Player, Side
from blockdomino.game.tile import Tile

logger = logging.getLogger("blockdomino.table")


class DecisionError(Exception):
    """Raised when a play is submitted with no matching pending decision."""


@dataclass
class PendingDecision:
    """A human player's turn, waiting for a play."""
    player_index: int
    player: Player
    legal_plays: list[Play] = field(default_factory=list)

    def sides_for(self, tile: Tile) -> list[Side]:
        return [p.side for p in self.legal_plays if p.tile == tile]


class MatchSession:
    """Runs a game, stopping whenever a human seat has to play.

    Args:
        game: Controller with its players seated.
        agents: One entry per seat: an Agent for automated seats, None for
            humans.
    """

    def __init__(self, game: GameController, agents: Sequence[Optional[Agent]]):
        if len(agents) != len(game.players):
            raise ValueError(f"Need {len(game.players)} agent slots, got {len(agents)}")
        for player, agent in zip(game.players, agents):
            if player.automated and agent is None:
                raise ValueError(f"Automated player {player.name} has no agent")
        self.game = game
        self.agents = list(agents)
        self.pending: Optional[PendingDecision] = None

    @property
    def is_finished(self) -> bool:
        return self.game.is_game_over()

    def winner(self) -> Optional[Player]:
        return self.game.winner() if self.is_finished else None

    def start(self, max_rounds: Optional[int] = None) -> Optional[PendingDecision]:
        """Start a new game and run it up to the first human decision."""
        self.pending = None
        self.game.start_game(max_rounds=max_rounds)
        return self.advance()

    def advance(self) -> Optional[PendingDecision]:
        """Play automated turns until a human must decide or the game ends.

        Returns the pending decision, or None once the game is over.
        """
        if self.pending is not None:
            return self.pending

        game = self.game
        while not game.is_game_over():
            if game.is_round_over():
                game.end_round()
                game.start_next_round()
                continue

            player = game.current_player
            index = game.current_player_index
            if not game.has_playable_tile(player):
                game.skip_current_player()
                continue

            agent = self.agents[index]
            if agent is None:
                self.pending = PendingDecision(index, player, game.legal_plays(player))
                logger.debug(f"Waiting for {player.name}")
                return self.pending

            play = agent.choose_play(game, player)
            if play is None or not game.play_tile(player, play.tile, play.side):
                raise ValueError(f"{player.name} chose an illegal play: {play}")
            game.next_turn()

        return None

    def submit_play(self, tile: Tile, side: Optional[Side] = None,
                    player: Optional[Player] = None) -> bool:
        """Deliver the pending human's play.

        With no ``side`` the side is inferred when exactly one fits. Returns
        False, leaving the decision pending, when the play is illegal or the
        side is ambiguous. On success the session advances to the next
        decision.

        Raises:
            DecisionError: If no decision is pending, or ``player`` is not
                the one being waited for.
        """
        pending = self.pending
        if pending is None:
            raise DecisionError("No decision is pending")
        if player is not None and player is not pending.player:
            raise DecisionError(f"Waiting for {pending.player.name}, not {player.name}")
        if tile not in pending.player.hand:
            return False

        if side is None:
            sides = pending.sides_for(tile)
            if len(sides) != 1:
                return False
            side = sides[0]

        if not self.game.play_tile(pending.player, tile, side):
            return False

        self.pending = None
        self.game.next_turn()
        self.advance()
        return True
