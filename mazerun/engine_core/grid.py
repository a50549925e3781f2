"""
Grid Model - Static geometry of the three floors.

Pure predicates over positions:
- bounds checking
- per-floor accessibility (floor 1 has a narrow shaft section,
  floor 2 only covers the middle length band)
- the recovery-area rectangle on the ground floor
"""

from __future__ import annotations

from .rules import DEFAULT_RULES, MazeRules
from .state import Position

# Floor 1: across this length band only the shaft widths are walkable
FLOOR_ONE_SHAFT_LENGTH = (8, 16)
FLOOR_ONE_SHAFT_WIDTH = (3, 6)

# Floor 2: only this length band exists
TOP_FLOOR_LENGTH = (8, 16)


def _within(value: int, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return low <= value <= high


def is_valid_position(pos: Position, rules: MazeRules = DEFAULT_RULES) -> bool:
    """Bounds check only."""
    return (
        0 <= pos.floor < rules.floors
        and 0 <= pos.width < rules.width
        and 0 <= pos.length < rules.length
    )


def is_floor_accessible(pos: Position, rules: MazeRules = DEFAULT_RULES) -> bool:
    """Whether a player may stand on pos."""
    if not is_valid_position(pos, rules):
        return False

    if pos.floor == 0:
        return True
    if pos.floor == 1:
        if _within(pos.length, FLOOR_ONE_SHAFT_LENGTH):
            return _within(pos.width, FLOOR_ONE_SHAFT_WIDTH)
        return True
    if pos.floor == 2:
        return _within(pos.length, TOP_FLOOR_LENGTH)
    return False


def is_in_recovery_area(pos: Position, rules: MazeRules = DEFAULT_RULES) -> bool:
    return (
        pos.floor == 0
        and _within(pos.width, rules.recovery_width)
        and _within(pos.length, rules.recovery_length)
    )


def recovery_cells(rules: MazeRules = DEFAULT_RULES) -> list[Position]:
    """Assignable recovery cells in width-major order, entrance excluded."""
    cells = []
    for width in range(rules.recovery_width[0], rules.recovery_width[1] + 1):
        for length in range(rules.recovery_length[0], rules.recovery_length[1] + 1):
            pos = Position(0, width, length)
            if pos != rules.recovery_entrance:
                cells.append(pos)
    return cells


def all_positions(rules: MazeRules = DEFAULT_RULES) -> list[Position]:
    """Every in-bounds position in floor/width/length order."""
    return [
        Position(floor, width, length)
        for floor in range(rules.floors)
        for width in range(rules.width)
        for length in range(rules.length)
    ]


def accessible_positions(rules: MazeRules = DEFAULT_RULES) -> list[Position]:
    return [pos for pos in all_positions(rules) if is_floor_accessible(pos, rules)]
