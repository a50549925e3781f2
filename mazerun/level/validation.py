"""
Level Validation - Checks level data against the grid before a game starts.

Validates that:
1. Every obstacle and the flag lie inside the grid
2. Poles slide downwards
3. The flag is walkable, off every wall, off the reserved seat cells and
   outside the recovery area
4. Stair ends are walkable (warning only: an unreachable stair is inert)
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.grid import is_floor_accessible, is_in_recovery_area, is_valid_position
from ..engine_core.rules import DEFAULT_RULES, SEATS, MazeRules
from ..engine_core.state import Position
from .schema import LevelData


class LevelValidationError(Exception):
    """Raised when level data fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Level validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def reserved_cells(rules: MazeRules = DEFAULT_RULES) -> set[Position]:
    """Cells the flag may never occupy: seat pads, entry cells and the recovery entrance."""
    reserved = {rules.recovery_entrance}
    for seat in SEATS:
        reserved.add(seat.start_pad)
        reserved.add(seat.entry_cell)
    return reserved


def validate_level(
    level: LevelData,
    rules: MazeRules = DEFAULT_RULES,
    raise_on_error: bool = False,
) -> ValidationResult:
    """
    Validate a complete level.

    Returns ValidationResult with errors and warnings.
    Raises LevelValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for i, record in enumerate(level.stairs, start=1):
        for label, pos in (("start", record.start), ("end", record.end)):
            if not is_valid_position(pos, rules):
                errors.append(f"stair {i}: {label} {pos} is outside the maze")
            elif not is_floor_accessible(pos, rules):
                warnings.append(f"stair {i}: {label} {pos} is not walkable")
        if record.start == record.end:
            errors.append(f"stair {i}: start and end are the same cell")

    for i, record in enumerate(level.poles, start=1):
        column = Position(0, record.width, record.length)
        if not is_valid_position(column, rules):
            errors.append(f"pole {i}: column [{record.width}, {record.length}] is outside the maze")
        if record.start_floor >= rules.floors:
            errors.append(f"pole {i}: start floor {record.start_floor} does not exist")
        if record.end_floor >= record.start_floor:
            errors.append(f"pole {i}: must slide down (start floor {record.start_floor}, end floor {record.end_floor})")

    for i, record in enumerate(level.walls, start=1):
        if record.floor >= rules.floors:
            errors.append(f"wall {i}: floor {record.floor} does not exist")
            continue
        for pos in (
            Position(record.floor, record.start_width, record.start_length),
            Position(record.floor, record.end_width, record.end_length),
        ):
            if not is_valid_position(pos, rules):
                errors.append(f"wall {i}: end {pos} is outside the maze")

    if level.flag is None:
        warnings.append("no flag given, one will be drawn at random")
    else:
        flag = level.flag.to_position()
        if not is_floor_accessible(flag, rules):
            errors.append(f"flag {flag} is not on a walkable cell")
        elif is_in_recovery_area(flag, rules):
            errors.append(f"flag {flag} is inside the recovery area")
        elif flag in reserved_cells(rules):
            errors.append(f"flag {flag} is on a start pad, entry cell or the recovery entrance")
        else:
            for i, record in enumerate(level.walls, start=1):
                if record.floor == flag.floor and record.to_wall().blocks(flag, flag):
                    errors.append(f"flag {flag} lies on wall {i}")

    result = ValidationResult(valid=not errors, errors=errors, warnings=warnings)
    if raise_on_error and errors:
        raise LevelValidationError(errors)
    return result
