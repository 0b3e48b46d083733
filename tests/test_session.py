"""Tests for agents, simulation, and the table session."""

import numpy as np
import pytest

from blockdomino.data.generator import (
    FirstPlayableAgent, RandomAgent, create_agent, generate_games, play_game, summarize,
)
from blockdomino.engine.heuristic_player import HeuristicPlayer
from blockdomino.game.config import GameConfig
from blockdomino.game.controller import GameController
from blockdomino.game.events import EventType
from blockdomino.game.notation import events_to_text
from blockdomino.game.state import Play, Player, Side
from blockdomino.game.tile import Tile
from blockdomino.table.session import DecisionError, MatchSession


def _human_vs_computer(rng, max_rounds=1):
    human = Player("You")
    computer = Player("Computer", automated=True)
    game = GameController([human, computer], rng=rng)
    session = MatchSession(game, [None, FirstPlayableAgent()])
    game.start_game(max_rounds=max_rounds)
    return game, session


class TestAgents:
    def test_first_playable_agent(self, game, arrange):
        arrange(game, [[(3, 2), (6, 1)], [(0, 0)]], board=[(6, 3)], current=0)
        play = FirstPlayableAgent().choose_play(game, game.players[0])
        assert play == Play(Tile(6, 1), Side.LEFT)

    def test_random_agent_plays_legal(self, game, arrange, rng):
        arrange(game, [[(3, 2), (6, 1), (0, 4)], [(0, 0)]], board=[(6, 3)], current=0)
        agent = RandomAgent(rng)
        legal = game.legal_plays(game.players[0])
        for _ in range(20):
            assert agent.choose_play(game, game.players[0]) in legal

    def test_agents_pass_when_blocked(self, game, arrange, rng):
        arrange(game, [[(1, 2)], [(0, 0)]], board=[(6, 3)], current=0)
        for agent in (FirstPlayableAgent(), RandomAgent(rng), HeuristicPlayer(rng=rng)):
            assert agent.choose_play(game, game.players[0]) is None

    def test_heuristic_sheds_heavy_tiles(self, game, arrange):
        arrange(game, [[(3, 0), (6, 5)], [(0, 0)]], board=[(6, 3)], current=0)
        play = HeuristicPlayer().choose_play(game, game.players[0])
        assert play == Play(Tile(6, 5), Side.LEFT)

    def test_heuristic_keeps_follow_up(self, game, arrange):
        # 3-4 and 3-5 differ by one pip; 3-4 leaves a 4 that 4-1 can follow
        arrange(game, [[(3, 5), (3, 4), (4, 1)], [(0, 0)]], board=[(2, 3)], current=0)
        play = HeuristicPlayer().choose_play(game, game.players[0])
        assert play == Play(Tile(3, 4), Side.RIGHT)

    def test_heuristic_respects_opening_rule(self, game, arrange):
        arrange(game, [[(6, 5), (1, 1), (2, 2)], [(0, 0)]], current=0)
        play = HeuristicPlayer().choose_play(game, game.players[0])
        assert play == Play(Tile(2, 2), Side.LEFT)

    def test_create_agent(self, rng):
        assert isinstance(create_agent("first"), FirstPlayableAgent)
        assert isinstance(create_agent("random", rng), RandomAgent)
        assert isinstance(create_agent("heuristic", rng), HeuristicPlayer)
        with pytest.raises(ValueError):
            create_agent("oracle")


class TestSimulation:
    @pytest.mark.parametrize("num_players", [2, 3, 4])
    def test_play_game_finishes(self, num_players):
        rng = np.random.default_rng(num_players)
        players = [Player(f"P{i}", automated=True) for i in range(num_players)]
        game = GameController(players, rng=rng)
        agents = [FirstPlayableAgent()] + [RandomAgent(rng) for _ in range(num_players - 1)]
        record = play_game(game, agents, max_rounds=3)
        assert game.is_game_over()
        assert 1 <= record.rounds <= 3
        assert record.scores[record.winner] == max(record.scores.values())
        assert len(record.round_winners) == record.rounds
        assert record.plays

    def test_play_game_needs_agent_per_seat(self, game):
        with pytest.raises(ValueError):
            play_game(game, [FirstPlayableAgent()])

    def test_generate_games_reproducible(self):
        config = GameConfig(seed=42, max_rounds=2)
        a = generate_games(config, 5, agent_names=["first", "heuristic"])
        b = generate_games(config, 5, agent_names=["first", "heuristic"])
        assert len(a) == 5
        assert [(r.winner, r.scores) for r in a] == [(r.winner, r.scores) for r in b]

    def test_summarize(self):
        records = generate_games(GameConfig(seed=3, max_rounds=1), 10)
        rates = summarize(records)
        assert len(rates) == 2
        assert sum(rates.values()) == pytest.approx(1.0)
        assert summarize([]) == {}

    def test_transcript(self, rng):
        players = [Player("A", automated=True), Player("B", automated=True)]
        game = GameController(players, rng=rng)
        play_game(game, [FirstPlayableAgent(), FirstPlayableAgent()], max_rounds=1)
        text = events_to_text(game.events.get_events())
        assert text.startswith("Game: A, B")
        assert "Round 1 - " in text
        assert "Game over - " in text


class TestMatchSession:
    def test_waits_for_human(self, rng, arrange):
        game, session = _human_vs_computer(rng)
        arrange(game, [[(3, 5), (2, 2)], [(5, 1), (4, 4)]], board=[(6, 3)], current=0)
        decision = session.advance()
        assert decision is not None
        assert decision.player is game.players[0]
        assert decision.legal_plays == [Play(Tile(3, 5), Side.RIGHT)]
        assert session.advance() is decision

    def test_submit_runs_to_round_end(self, rng, arrange):
        game, session = _human_vs_computer(rng, max_rounds=1)
        human, computer = game.players
        arrange(game, [[(3, 5), (2, 2)], [(5, 1), (4, 4)]], board=[(6, 3)], current=0)
        session.advance()
        # Human plays 3-5, computer answers 5-1, then both are blocked
        assert session.submit_play(Tile(3, 5))
        assert session.pending is None
        assert session.is_finished
        assert game.board.right_end == 1
        assert human.score == 4
        assert session.winner() is human
        assert len(game.events.get_events(EventType.PLAYER_SKIPPED)) == 2

    def test_illegal_submission_keeps_decision(self, rng, arrange):
        game, session = _human_vs_computer(rng)
        arrange(game, [[(3, 5), (2, 2)], [(5, 1)]], board=[(6, 3)], current=0)
        decision = session.advance()
        assert not session.submit_play(Tile(2, 2))
        assert not session.submit_play(Tile(0, 6))  # not held
        assert session.pending is decision
        assert len(game.board) == 1

    def test_ambiguous_side_needs_choice(self, rng, arrange):
        game, session = _human_vs_computer(rng)
        arrange(game, [[(3, 5), (0, 0)], [(6, 6), (1, 1)]], board=[(3, 3)], current=0)
        session.advance()
        assert not session.submit_play(Tile(3, 5))
        assert session.submit_play(Tile(3, 5), Side.LEFT)
        assert game.board.left_end == 5

    def test_submit_without_decision(self, rng):
        players = [Player("A", automated=True), Player("B", automated=True)]
        game = GameController(players, rng=rng)
        session = MatchSession(game, [FirstPlayableAgent(), FirstPlayableAgent()])
        assert session.start(max_rounds=2) is None
        assert session.is_finished
        with pytest.raises(DecisionError):
            session.submit_play(Tile(0, 0))

    def test_wrong_player(self, rng, arrange):
        game, session = _human_vs_computer(rng)
        arrange(game, [[(3, 5)], [(5, 1)]], board=[(6, 3)], current=0)
        session.advance()
        with pytest.raises(DecisionError):
            session.submit_play(Tile(5, 1), player=game.players[1])

    def test_automated_seat_needs_agent(self, rng):
        game = GameController([Player("You"), Player("Computer", automated=True)], rng=rng)
        with pytest.raises(ValueError):
            MatchSession(game, [None, None])

    def test_full_game_with_human_first_choice(self, rng):
        human = Player("You")
        game = GameController([human, Player("Computer", automated=True)], rng=rng)
        session = MatchSession(game, [None, RandomAgent(rng)])
        decision = session.start(max_rounds=3)
        turns = 0
        while decision is not None and turns < 500:
            play = decision.legal_plays[0]
            assert session.submit_play(play.tile, play.side)
            decision = session.advance()
            turns += 1
        assert session.is_finished
        assert session.winner() in game.players
