"""
Pytest fixtures for Mazerun tests.
"""

import pytest

from ..engine_core.cells import CellEffectTable
from ..engine_core.obstacles import ObstacleRegistry
from ..engine_core.rules import DEFAULT_RULES
from ..engine_core.state import Direction, GameState, Position
from ..session.setup import create_players


class ScriptedRandom:
    """
    Random source that replays a fixed list of randrange results.

    Fails loudly if the engine asks for more numbers than scripted or a
    value outside the requested range.
    """

    def __init__(self, values=()):
        self.values = list(values)
        self.requests: list[int] = []

    def randrange(self, n: int) -> int:
        self.requests.append(n)
        if not self.values:
            raise AssertionError(f"random source exhausted (randrange({n}))")
        value = self.values.pop(0)
        if not 0 <= value < n:
            raise AssertionError(f"scripted value {value} outside randrange({n})")
        return value

    @property
    def exhausted(self) -> bool:
        return not self.values


# A flag nobody reaches by accident
FAR_FLAG = Position(2, 9, 16)


def build_game(
    stairs=(),
    poles=(),
    walls=(),
    flag=FAR_FLAG,
    effects=None,
    recovery=None,
    rng_values=(),
    rules=DEFAULT_RULES,
) -> GameState:
    """
    Build a game with neutral cells, no obstacles unless given, and a
    scripted random source.
    """
    return GameState(
        players=create_players(rules),
        obstacles=ObstacleRegistry(
            stairs=list(stairs),
            poles=list(poles),
            walls=list(walls),
            rules=rules,
        ),
        cells=CellEffectTable(
            effects=dict(effects or {}),
            recovery_effects=dict(recovery or {}),
        ),
        flag=flag,
        rules=rules,
        rng=ScriptedRandom(rng_values),
    )


def place(player, position, direction=None, points=None):
    """Put a player in the maze at position."""
    player.in_maze = True
    player.position = position
    if direction is not None:
        player.direction = direction
    if points is not None:
        player.movement_points = points
    return player


@pytest.fixture
def game_factory():
    """Factory for custom games (see build_game)."""
    return build_game


@pytest.fixture
def game() -> GameState:
    """A neutral game: no obstacles, no cell effects, far-away flag."""
    return build_game()


@pytest.fixture
def player_a(game):
    return game.get_player("A")


@pytest.fixture
def player_b(game):
    return game.get_player("B")


@pytest.fixture
def player_c(game):
    return game.get_player("C")


@pytest.fixture
def walker(game):
    """Player A in the maze at [0, 0, 0] facing South with 100 points."""
    return place(game.get_player("A"), Position(0, 0, 0), Direction.SOUTH, 100)
