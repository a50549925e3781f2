"""
Maze Rules - Constants of the canonical rule set.

Every number the engine consults lives here so that tests can build a
MazeRules with one value changed. This is not a rule-variant system:
DEFAULT_RULES is the only rule set the game ships.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import Direction, Position


@dataclass(frozen=True)
class SeatDefinition:
    """Fixed per-identity layout: where a player waits and where they enter."""
    player_id: str
    start_pad: Position
    entry_cell: Position
    direction: Direction


SEATS = (
    SeatDefinition("A", Position(0, 6, 12), Position(0, 5, 12), Direction.NORTH),
    SeatDefinition("B", Position(0, 9, 8), Position(0, 9, 7), Direction.WEST),
    SeatDefinition("C", Position(0, 9, 16), Position(0, 9, 17), Direction.EAST),
)


@dataclass(frozen=True)
class MazeRules:
    """Numeric constants of the game."""
    # Grid
    floors: int = 3
    width: int = 10
    length: int = 25

    # Movement points
    initial_movement_points: int = 100
    max_movement_points: int = 1000
    multiply_threshold: int = 100
    multiply_fallback_factor: int = 20  # above threshold: +value * factor
    blocked_move_penalty: int = 2
    failed_entry_penalty: int = 2

    # Dice
    entry_roll: int = 6
    direction_roll_interval: int = 4  # throws between direction die rolls
    stair_flip_interval: int = 5  # rounds between stair direction flips

    # Recovery area (inclusive bounds, floor 0)
    recovery_width: tuple[int, int] = (6, 9)
    recovery_length: tuple[int, int] = (20, 24)
    recovery_entrance: Position = Position(0, 9, 19)
    transport_points: int = 10
    special_effect_copies: int = 2

    # Recovery effects
    poisoning_turns: int = 3
    disoriented_turns: int = 4
    disoriented_bonus: int = 50
    triggered_bonus: int = 50
    happy_bonus: int = 200
    random_bonus_range: tuple[int, int] = (10, 100)

    # Presentation
    status_report_interval: int = 10


DEFAULT_RULES = MazeRules()
