"""Level data - schemas, file loading and validation."""

from .schema import LevelData, StairRecord, PoleRecord, WallRecord, FlagRecord
from .validation import validate_level, reserved_cells, LevelValidationError, ValidationResult
from .loader import load_level, default_level, parse_stairs, parse_poles, parse_walls, parse_flag, parse_seed

__all__ = [
    "LevelData",
    "StairRecord",
    "PoleRecord",
    "WallRecord",
    "FlagRecord",
    "validate_level",
    "reserved_cells",
    "LevelValidationError",
    "ValidationResult",
    "load_level",
    "default_level",
    "parse_stairs",
    "parse_poles",
    "parse_walls",
    "parse_flag",
    "parse_seed",
]
