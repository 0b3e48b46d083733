"""Turn and round controller for Block Domino.

The controller is a synchronous state machine. Every command finishes its
state change, and fires its notifications, before returning. Illegal plays
come back as False; calls that break the calling contract (a tile the
player does not hold, a bad player count) raise ValueError.

Typical driving loop::

    game.start_game(max_rounds=5)
    while not game.is_game_over():
        player = game.current_player
        play = choose(player)                # UI or agent
        if play is None or not game.play_tile(player, *play):
            ...                              # ask again / skip
        game.next_turn()
        if game.is_round_over():
            game.end_round()
            game.start_next_round()
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from blockdomino.game import rules
from blockdomino.game.board import Board
from blockdomino.game.config import MAX_PLAYERS, MIN_PLAYERS, GameConfig, make_players
from blockdomino.game.events import EventLog, EventType, Listener
from blockdomino.game.state import Phase, Play, Player, Side
from blockdomino.game.tile import Deck, Tile, deal

logger = logging.getLogger("blockdomino.controller")


class GameController:
    """Owns the board, the players, and whose turn it is."""

    def __init__(self, players: Optional[Sequence[Player]] = None,
                 config: Optional[GameConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.players: list[Player] = list(players) if players is not None else make_players(self.config)
        self.board = Board()
        self.deck = Deck(self.rng)
        self.events = EventLog()
        self.phase = Phase.NOT_STARTED
        self.current_player_index = 0
        self.current_round = 0
        self.max_rounds = self.config.max_rounds
        self.match_points = self.config.match_points

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener,
                  event_type: Optional[EventType] = None) -> None:
        self.events.subscribe(listener, event_type)

    def unsubscribe(self, listener: Listener) -> None:
        self.events.unsubscribe(listener)

    # ------------------------------------------------------------------
    # Game setup
    # ------------------------------------------------------------------

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def start_game(self, max_rounds: Optional[int] = None,
                   players: Optional[Sequence[Player]] = None) -> None:
        """Reset scores and round count, then deal the first round."""
        if players is not None:
            self.players = list(players)
        if not MIN_PLAYERS <= len(self.players) <= MAX_PLAYERS:
            raise ValueError(
                f"Block Domino needs {MIN_PLAYERS}-{MAX_PLAYERS} players, "
                f"got {len(self.players)}"
            )
        if max_rounds is not None:
            if max_rounds < 1:
                raise ValueError(f"max_rounds must be positive, got {max_rounds}")
            self.max_rounds = max_rounds

        for player in self.players:
            player.reset_score()
        self.current_round = 0
        self.events.clear()
        self.events.log(EventType.GAME_STARTED,
                        players=[p.name for p in self.players],
                        max_rounds=self.max_rounds,
                        match_points=self.match_points)
        logger.info(f"Game started: {', '.join(p.name for p in self.players)} "
                    f"({self.max_rounds} rounds, {self.match_points} points)")
        self.start_new_round()

    def start_new_round(self) -> None:
        """Clear the table, deal fresh hands, and pick who opens."""
        self.current_round += 1
        self.board.clear()
        for player in self.players:
            player.hand.clear()

        self.deck.reset()
        self.deck.shuffle()
        hands = deal(self.deck, len(self.players), self.config.hand_size)
        for player, tiles in zip(self.players, hands):
            player.hand.extend(tiles)

        self.current_player_index = int(self.rng.integers(len(self.players)))
        if not self.has_playable_tile(self.current_player):
            for i, player in enumerate(self.players):
                if self.has_playable_tile(player):
                    self.current_player_index = i
                    break

        self.phase = Phase.AWAITING_PLAY
        self.events.log(EventType.ROUND_STARTED, self.current_player_index,
                        round=self.current_round,
                        player=self.current_player,
                        boneyard=len(self.deck))
        logger.debug(f"Round {self.current_round} dealt, "
                     f"{self.current_player.name} opens")

    def start_next_round(self) -> bool:
        """Deal another round unless the game is over."""
        if self.is_game_over():
            return False
        self.start_new_round()
        return True

    # ------------------------------------------------------------------
    # Plays and turns
    # ------------------------------------------------------------------

    def play_tile(self, player: Player, tile: Tile, side: Side) -> bool:
        """Place ``tile`` from ``player``'s hand at ``side``.

        Returns False, with nothing changed, if it is not ``player``'s turn
        or the tile cannot go there. The turn does not advance; call
        next_turn() once the caller is done with the play.

        Raises:
            ValueError: If ``player`` does not hold ``tile``.
        """
        if self.phase != Phase.AWAITING_PLAY or player is not self.current_player:
            return False
        if tile not in player.hand:
            raise ValueError(f"{player.name} does not hold {tile!r}")

        held = player.hand[player.hand.tiles.index(tile)]
        if self.board.is_empty() and not rules.is_legal_opening(held, player.hand):
            return False
        if not self.board.place(held, side):
            return False

        player.hand.remove(held)
        self.events.log(EventType.TILE_PLAYED, self.current_player_index,
                        player=player, tile=held, side=side)
        logger.debug(f"{player.name} played {held.left}-{held.right} on the {side.value}")
        return True

    def next_turn(self) -> None:
        """Pass the turn to the next player able to play.

        Blocked players met on the way are skipped with a notification.
        After a full lap with nobody able to play the index stays where the
        scan ended, back at the starting player.
        """
        if not self.players:
            raise ValueError("No players")
        start = self.current_player_index
        index = start
        while True:
            index = (index + 1) % len(self.players)
            self.current_player_index = index
            player = self.players[index]
            if self.has_playable_tile(player):
                return
            self.events.log(EventType.PLAYER_SKIPPED, index, player=player)
            logger.debug(f"{player.name} cannot play, skipped")
            if index == start:
                return

    def skip_current_player(self) -> None:
        """Skip the current player and move on."""
        player = self.current_player
        self.events.log(EventType.PLAYER_SKIPPED, self.current_player_index, player=player)
        self.next_turn()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_playable_tile(self, player: Player) -> bool:
        return rules.has_playable_tile(player.hand, self.board)

    def next_playable_tile(self, player: Player) -> Optional[Play]:
        return rules.next_playable_tile(player.hand, self.board)

    def legal_plays(self, player: Player) -> list[Play]:
        return rules.legal_plays(player.hand, self.board)

    def is_blocked(self) -> bool:
        """True when no player can place any tile."""
        return all(not self.has_playable_tile(p) for p in self.players)

    def is_round_over(self) -> bool:
        return any(p.hand.is_empty() for p in self.players) or self.is_blocked()

    def round_winner(self) -> Optional[Player]:
        index = rules.round_winner(self.players)
        return self.players[index] if index is not None else None

    def is_game_over(self) -> bool:
        """True once a score reaches match points or the last round is scored."""
        if self.phase == Phase.GAME_OVER:
            return True
        if any(p.score >= self.match_points for p in self.players):
            return True
        if self.current_round > self.max_rounds:
            return True
        return self.phase == Phase.ROUND_OVER and self.current_round >= self.max_rounds

    def winner(self) -> Player:
        return self.players[rules.game_winner(self.players)]

    # ------------------------------------------------------------------
    # Round end
    # ------------------------------------------------------------------

    def end_round(self) -> Optional[Player]:
        """Score the round and report it; returns the round winner, if any.

        The winner gains the opponents' remaining pips minus their own,
        never a negative amount. A tied blocked round scores nothing.
        """
        if self.phase != Phase.AWAITING_PLAY:
            raise ValueError(f"No round in progress (phase: {self.phase.value})")

        index = rules.round_winner(self.players)
        winner = self.players[index] if index is not None else None
        points = 0
        if winner is not None:
            points = rules.round_points(self.players, index)
            winner.score += points

        self.phase = Phase.ROUND_OVER
        self.events.log(EventType.ROUND_OVER, index,
                        round=self.current_round,
                        winner=winner,
                        points=points,
                        pips={p.name: p.hand.pip_count() for p in self.players})
        if winner is not None:
            logger.info(f"Round {self.current_round}: {winner.name} wins {points} points")
        else:
            logger.info(f"Round {self.current_round}: blocked with a tie, no points")

        if self.is_game_over():
            self.phase = Phase.GAME_OVER
            game_winner = self.winner()
            self.events.log(EventType.GAME_OVER, self.players.index(game_winner),
                            winner=game_winner,
                            scores={p.name: p.score for p in self.players})
            logger.info(f"Game over after {self.current_round} rounds: "
                        f"{game_winner.name} wins with {game_winner.score}")
        return winner

    def snapshot(self) -> dict:
        """Plain-data view of the table for front ends."""
        return {
            "phase": self.phase.value,
            "round": self.current_round,
            "max_rounds": self.max_rounds,
            "match_points": self.match_points,
            "board": {
                "tiles": [[t.left, t.right] for t in self.board],
                "left_end": self.board.left_end,
                "right_end": self.board.right_end,
            },
            "current_player": self.current_player_index,
            "players": [
                {
                    "name": p.name,
                    "automated": p.automated,
                    "score": p.score,
                    "hand": [[t.left, t.right] for t in p.hand],
                }
                for p in self.players
            ],
            "round_over": self.phase != Phase.NOT_STARTED and self.is_round_over(),
            "game_over": self.is_game_over(),
        }
