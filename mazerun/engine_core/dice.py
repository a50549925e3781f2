"""
Dice - Seedable random source and the game's dice.

The engine only ever calls randrange(n) on its random source, so a
random.Random works directly and tests can replay a fixed sequence.
"""

from __future__ import annotations
from typing import Protocol

from .state import CARDINALS, Direction


class RandomSource(Protocol):
    """Anything that can produce a uniform integer in [0, n)."""

    def randrange(self, n: int) -> int:
        ...


# Direction die faces 0..5
DIRECTION_FACES = (
    Direction.EMPTY,
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
    Direction.EMPTY,
)


def roll_movement_die(rng: RandomSource) -> int:
    """Roll a six-sided die: 1..6."""
    return rng.randrange(6) + 1


def roll_direction_die(rng: RandomSource) -> Direction:
    """Roll the direction die. EMPTY means keep the current facing."""
    return DIRECTION_FACES[rng.randrange(len(DIRECTION_FACES))]


def random_cardinal(rng: RandomSource) -> Direction:
    return CARDINALS[rng.randrange(len(CARDINALS))]


def random_between(rng: RandomSource, low: int, high: int) -> int:
    """Uniform integer in the inclusive range [low, high]."""
    return low + rng.randrange(high - low + 1)
