"""
Obstacle Registry - Stairs, poles and walls.

The registry answers three questions for the movement resolver:
1. Is a single step blocked by a wall?
2. Can the player step onto the target cell at all?
3. Does the player's current cell send them up/down a stair or pole?

Obstacles are kept in registration order; the first match wins.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum

from .dice import RandomSource
from .grid import is_floor_accessible
from .rules import DEFAULT_RULES, MazeRules
from .state import Player, Position

logger = logging.getLogger(__name__)


@dataclass
class Stair:
    """
    A stair between two fixed cells.

    up=True: usable start -> end only. up=False: usable end -> start only.
    """
    start: Position
    end: Position
    up: bool = True

    def exit_from(self, pos: Position) -> Position | None:
        """Where the stair takes a player standing on pos, if anywhere."""
        if self.up and pos == self.start:
            return self.end
        if not self.up and pos == self.end:
            return self.start
        return None


@dataclass(frozen=True)
class Pole:
    """A one-way slide down a (width, length) column."""
    width: int
    length: int
    start_floor: int
    end_floor: int

    def slide_from(self, pos: Position) -> Position | None:
        if pos.width != self.width or pos.length != self.length:
            return None
        if self.end_floor < pos.floor <= self.start_floor:
            return pos.with_floor(self.end_floor)
        return None


@dataclass(frozen=True)
class Wall:
    """An axis-aligned wall segment on one floor (inclusive ends)."""
    floor: int
    start_width: int
    start_length: int
    end_width: int
    end_length: int

    @property
    def width_span(self) -> tuple[int, int]:
        return min(self.start_width, self.end_width), max(self.start_width, self.end_width)

    @property
    def length_span(self) -> tuple[int, int]:
        return min(self.start_length, self.end_length), max(self.start_length, self.end_length)

    def blocks(self, origin: Position, target: Position) -> bool:
        """
        Whether the single step origin -> target touches this wall.

        The step and the wall are both axis-aligned segments; they collide
        when their closed intervals overlap on both axes.
        """
        min_w, max_w = min(origin.width, target.width), max(origin.width, target.width)
        min_l, max_l = min(origin.length, target.length), max(origin.length, target.length)
        wall_min_w, wall_max_w = self.width_span
        wall_min_l, wall_max_l = self.length_span

        return not (
            max_w < wall_min_w
            or min_w > wall_max_w
            or max_l < wall_min_l
            or min_l > wall_max_l
        )


class TransitionKind(Enum):
    STAIR = "stair"
    POLE = "pole"


@dataclass(frozen=True)
class Transition:
    """A stair climb or pole slide that happened during movement."""
    kind: TransitionKind
    index: int  # Registration index of the stair/pole used
    origin: Position
    destination: Position


@dataclass
class ObstacleRegistry:
    """
    Registered obstacles for one game.

    Only the stair direction flags ever change after setup.
    """
    stairs: list[Stair] = field(default_factory=list)
    poles: list[Pole] = field(default_factory=list)
    walls: list[Wall] = field(default_factory=list)
    rules: MazeRules = DEFAULT_RULES

    def is_blocked_by_wall(self, origin: Position, target: Position) -> bool:
        """Check the step origin -> target against every wall on its floor."""
        for wall in self.walls:
            if wall.floor != origin.floor:
                continue
            if wall.blocks(origin, target):
                return True
        return False

    def can_step_to(self, origin: Position, target: Position) -> bool:
        if not is_floor_accessible(target, self.rules):
            return False
        return not self.is_blocked_by_wall(origin, target)

    def try_use_stair_or_pole(self, player: Player) -> Transition | None:
        """
        Apply at most one stair or pole transition from the player's cell.

        Stairs are scanned before poles. Returns the transition, or None
        when nothing fired.
        """
        origin = player.position

        for index, stair in enumerate(self.stairs):
            destination = stair.exit_from(origin)
            if destination is not None:
                player.position = destination
                logger.debug("%s took stair %d: %s -> %s", player.player_id, index, origin, destination)
                return Transition(TransitionKind.STAIR, index, origin, destination)

        for index, pole in enumerate(self.poles):
            destination = pole.slide_from(origin)
            if destination is not None:
                player.position = destination
                logger.debug("%s slid down pole %d: %s -> %s", player.player_id, index, origin, destination)
                return Transition(TransitionKind.POLE, index, origin, destination)

        return None

    def flip_stair_directions(self, rng: RandomSource) -> list[bool]:
        """Re-draw every stair's direction with an independent coin flip."""
        for stair in self.stairs:
            stair.up = rng.randrange(2) == 0
        return [stair.up for stair in self.stairs]
