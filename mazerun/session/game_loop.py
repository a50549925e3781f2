"""
Game Loop - The round scheduler.

The loop:
1. Start a new round
2. Every few rounds, flip all stair directions
3. Play each seat's turn in order
4. Stop the moment a turn ends the game
5. Repeat

The game has no round limit of its own; max_rounds is a safety stop for
callers that need one.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from ..engine_core.events import EventType
from ..engine_core.state import GameState
from ..engine_core.turn import TurnController, TurnResult

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    READY = "ready"
    RUNNING = "running"
    GAME_OVER = "game_over"
    ROUND_LIMIT = "round_limit"  # Stopped by max_rounds, no winner


@dataclass
class RoundResult:
    """Turns played in one round."""
    round_number: int
    stairs_changed: bool = False
    turns: list[TurnResult] = field(default_factory=list)
    game_over: bool = False


@dataclass
class GameResult:
    """Outcome of a run."""
    loop_state: LoopState
    rounds: int
    winner: str | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        game = new_game(level, random_seed=42)
        loop = GameLoop(game)

        result = loop.run()
        print(result.winner)
    """

    def __init__(self, game: GameState):
        self.game = game
        self.turns = TurnController(game=game)
        self.state = LoopState.READY

    def play_round(self) -> RoundResult:
        """Play one full round, stopping early on game over."""
        game = self.game
        rules = game.rules

        game.round_number += 1
        result = RoundResult(round_number=game.round_number)
        game.emit(EventType.ROUND_STARTED, round=game.round_number)

        if game.round_number % rules.stair_flip_interval == 0 and game.obstacles.stairs:
            directions = game.obstacles.flip_stair_directions(game.rng)
            result.stairs_changed = True
            game.emit(EventType.STAIRS_CHANGED, directions=directions)
            logger.info("Round %d: stair directions changed", game.round_number)

        for player in game.players:
            result.turns.append(self.turns.play_turn(player))
            if game.game_over:
                result.game_over = True
                break

        return result

    def run(
        self,
        max_rounds: int | None = None,
        on_round_end: Callable[[GameState, RoundResult], None] | None = None,
    ) -> GameResult:
        """
        Play rounds until someone reaches the flag.

        on_round_end is called after every round (including the last).
        """
        self.state = LoopState.RUNNING

        while not self.game.game_over:
            if max_rounds is not None and self.game.round_number >= max_rounds:
                self.state = LoopState.ROUND_LIMIT
                logger.info("Stopped after %d rounds without a winner", self.game.round_number)
                return GameResult(loop_state=self.state, rounds=self.game.round_number)

            round_result = self.play_round()
            if on_round_end:
                on_round_end(self.game, round_result)

        self.state = LoopState.GAME_OVER
        logger.info("Player %s won in round %d", self.game.winner, self.game.round_number)
        return GameResult(
            loop_state=self.state,
            rounds=self.game.round_number,
            winner=self.game.winner,
        )
