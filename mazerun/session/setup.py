"""
Game Setup - Creates the initial game state.

This module handles:
- Seeding the random source for determinism
- Creating the three seats at their start pads
- Generating the cell effect table and recovery-area tags
- Registering the level's obstacles
- Placing the flag (drawn at random when the level has none)

Random draws happen in a fixed order (cells, recovery tags, flag) so a
seed always reproduces the same game.
"""

from __future__ import annotations
import logging
import random
import time

from ..engine_core.cells import CellEffectTable
from ..engine_core.dice import RandomSource
from ..engine_core.grid import accessible_positions, is_in_recovery_area
from ..engine_core.obstacles import ObstacleRegistry
from ..engine_core.rules import DEFAULT_RULES, SEATS, MazeRules
from ..engine_core.state import GamePhase, GameState, Player, Position
from ..level.loader import default_level
from ..level.schema import LevelData
from ..level.validation import reserved_cells, validate_level

logger = logging.getLogger(__name__)


def new_game(
    level: LevelData | None = None,
    rules: MazeRules = DEFAULT_RULES,
    random_seed: int | None = None,
    rng: RandomSource | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        level: Level data (built-in sample level if not provided)
        rules: Rule constants
        random_seed: Seed for the random source (overrides the level's seed)
        rng: Random source to use as-is (tests); the seed is ignored

    Returns:
        Initial GameState ready for round one

    Raises:
        LevelValidationError: the level does not fit the grid
    """
    level = level or default_level()
    validate_level(level, rules, raise_on_error=True)

    seed = random_seed if random_seed is not None else level.seed
    if rng is None:
        if seed is None:
            seed = int(time.time())
            logger.info("No seed given, using time-based seed %d", seed)
        rng = random.Random(seed)

    players = create_players(rules)
    cells = CellEffectTable.generate(rng, rules)
    obstacles = ObstacleRegistry(
        stairs=[record.to_stair() for record in level.stairs],
        poles=[record.to_pole() for record in level.poles],
        walls=[record.to_wall() for record in level.walls],
        rules=rules,
    )
    flag = level.flag.to_position() if level.flag else draw_flag(rng, rules, obstacles)

    logger.info(
        "New game: %d stairs, %d poles, %d walls, flag at %s",
        len(obstacles.stairs), len(obstacles.poles), len(obstacles.walls), flag,
    )

    return GameState(
        players=players,
        obstacles=obstacles,
        cells=cells,
        flag=flag,
        rules=rules,
        rng=rng,
        phase=GamePhase.PLAYING,
        random_seed=seed,
    )


def create_players(rules: MazeRules = DEFAULT_RULES) -> list[Player]:
    """Create one player per seat, waiting on their start pad."""
    return [
        Player(
            player_id=seat.player_id,
            position=seat.start_pad,
            direction=seat.direction,
            start_pad=seat.start_pad,
            entry_cell=seat.entry_cell,
            start_direction=seat.direction,
            movement_points=rules.initial_movement_points,
        )
        for seat in SEATS
    ]


def draw_flag(
    rng: RandomSource,
    rules: MazeRules = DEFAULT_RULES,
    obstacles: ObstacleRegistry | None = None,
) -> Position:
    """Pick a walkable flag cell away from the recovery area, the seats and any wall."""
    reserved = reserved_cells(rules)
    walls = obstacles.walls if obstacles else []

    candidates = [
        pos for pos in accessible_positions(rules)
        if pos not in reserved
        and not is_in_recovery_area(pos, rules)
        and not any(wall.floor == pos.floor and wall.blocks(pos, pos) for wall in walls)
    ]
    return candidates[rng.randrange(len(candidates))]
