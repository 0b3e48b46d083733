"""Block Domino game engine: tiles, board, rules, controller, notation."""

from blockdomino.game.tile import Tile, Deck, full_set, deal, ALL_TILE_KEYS
from blockdomino.game.state import Hand, Player, Play, Side, Phase
from blockdomino.game.board import Board, render_board
from blockdomino.game.events import EventLog, EventType, GameEvent
from blockdomino.game.config import GameConfig, load_config, make_players
from blockdomino.game.controller import GameController
from blockdomino.game.notation import tile_to_str, parse_tile, play_to_str, parse_play, events_to_text

__all__ = [
    "Tile", "Deck", "full_set", "deal", "ALL_TILE_KEYS",
    "Hand", "Player", "Play", "Side", "Phase",
    "Board", "render_board",
    "EventLog", "EventType", "GameEvent",
    "GameConfig", "load_config", "make_players",
    "GameController",
    "tile_to_str", "parse_tile", "play_to_str", "parse_play", "events_to_text",
]
