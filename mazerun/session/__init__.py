"""
Session Module - Sets up and runs one game.

A session is one play-through:
- Created from level data and a seed
- Runs rounds until a player reaches the flag
- Renders the event log as text

Sessions are EPHEMERAL: nothing is persisted between games.
"""

from .setup import new_game, create_players, draw_flag
from .game_loop import GameLoop, LoopState, RoundResult, GameResult
from .report import format_event, format_player_status, format_game_state

__all__ = [
    "new_game",
    "create_players",
    "draw_flag",
    "GameLoop",
    "LoopState",
    "RoundResult",
    "GameResult",
    "format_event",
    "format_player_status",
    "format_game_state",
]
