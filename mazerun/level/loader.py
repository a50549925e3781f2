"""
Level Loader - Reads level files into LevelData.

A level directory holds up to five text files (see schema.py for the
formats). Missing obstacle files mean "no obstacles of that kind"; a
missing flag means one is drawn at random; a missing or unreadable seed
means a time-based seed. Malformed lines are collected and raised together
as a LevelValidationError.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from .schema import FlagRecord, LevelData, PoleRecord, StairRecord, WallRecord
from .validation import LevelValidationError

logger = logging.getLogger(__name__)

STAIRS_FILE = "stairs.txt"
POLES_FILE = "poles.txt"
WALLS_FILE = "walls.txt"
FLAG_FILE = "flag.txt"
SEED_FILE = "seed.txt"

STAIR_FIELDS = ("start_floor", "start_width", "start_length", "end_floor", "end_width", "end_length")
POLE_FIELDS = ("start_floor", "end_floor", "width", "length")
WALL_FIELDS = ("floor", "start_width", "start_length", "end_width", "end_length")
FLAG_FIELDS = ("floor", "width", "length")

RecordT = TypeVar("RecordT", bound=BaseModel)


def _parse_records(
    text: str,
    model: Type[RecordT],
    fields: tuple[str, ...],
    source: str,
) -> tuple[list[RecordT], list[str]]:
    """Parse comma-separated integer records, one per line."""
    records: list[RecordT] = []
    errors: list[str] = []

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue

        parts = [part.strip() for part in line.split(",")]
        if len(parts) != len(fields):
            errors.append(f"{source}:{line_no}: expected {len(fields)} values, got {len(parts)}")
            continue

        try:
            values = [int(part) for part in parts]
        except ValueError:
            errors.append(f"{source}:{line_no}: not an integer record: {line!r}")
            continue

        try:
            records.append(model(**dict(zip(fields, values))))
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            errors.append(f"{source}:{line_no}: {messages}")

    return records, errors


def _parse_or_raise(text: str, model: Type[RecordT], fields: tuple[str, ...], source: str) -> list[RecordT]:
    records, errors = _parse_records(text, model, fields, source)
    if errors:
        raise LevelValidationError(errors)
    return records


def parse_stairs(text: str, source: str = STAIRS_FILE) -> list[StairRecord]:
    return _parse_or_raise(text, StairRecord, STAIR_FIELDS, source)


def parse_poles(text: str, source: str = POLES_FILE) -> list[PoleRecord]:
    return _parse_or_raise(text, PoleRecord, POLE_FIELDS, source)


def parse_walls(text: str, source: str = WALLS_FILE) -> list[WallRecord]:
    return _parse_or_raise(text, WallRecord, WALL_FIELDS, source)


def parse_flag(text: str, source: str = FLAG_FILE) -> FlagRecord | None:
    """The first record is the flag; an empty file means no flag."""
    records = _parse_or_raise(text, FlagRecord, FLAG_FIELDS, source)
    return records[0] if records else None


def parse_seed(text: str) -> int | None:
    tokens = text.split()
    if not tokens:
        return None
    try:
        return int(tokens[0])
    except ValueError:
        logger.warning("Invalid seed %r, using a time-based seed", tokens[0])
        return None


def load_level(directory: str | Path) -> LevelData:
    """
    Load a level directory.

    Raises FileNotFoundError if the directory does not exist and
    LevelValidationError if any record is malformed.
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Level directory not found: {root}")

    errors: list[str] = []

    def read(name: str) -> str | None:
        path = root / name
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def records(name: str, model: Type[RecordT], fields: tuple[str, ...]) -> list[RecordT]:
        text = read(name)
        if text is None:
            logger.warning("Cannot open %s, no records loaded", root / name)
            return []
        parsed, file_errors = _parse_records(text, model, fields, name)
        errors.extend(file_errors)
        logger.info("Loaded %d records from %s", len(parsed), name)
        return parsed

    stairs = records(STAIRS_FILE, StairRecord, STAIR_FIELDS)
    poles = records(POLES_FILE, PoleRecord, POLE_FIELDS)
    walls = records(WALLS_FILE, WallRecord, WALL_FIELDS)

    flag = None
    flag_text = read(FLAG_FILE)
    if flag_text is None:
        logger.warning("Cannot open %s, the flag will be drawn at random", root / FLAG_FILE)
    else:
        flags, flag_errors = _parse_records(flag_text, FlagRecord, FLAG_FIELDS, FLAG_FILE)
        errors.extend(flag_errors)
        flag = flags[0] if flags else None

    seed = None
    seed_text = read(SEED_FILE)
    if seed_text is None:
        logger.warning("Cannot open %s, using a time-based seed", root / SEED_FILE)
    else:
        seed = parse_seed(seed_text)

    if errors:
        raise LevelValidationError(errors)

    return LevelData(stairs=stairs, poles=poles, walls=walls, flag=flag, seed=seed)


def default_level() -> LevelData:
    """The built-in sample level: three stairs, two poles, five walls."""
    return LevelData(
        stairs=[
            StairRecord(start_floor=0, start_width=2, start_length=5, end_floor=1, end_width=2, end_length=5),
            StairRecord(start_floor=1, start_width=5, start_length=10, end_floor=2, end_width=5, end_length=10),
            StairRecord(start_floor=0, start_width=7, start_length=15, end_floor=2, end_width=7, end_length=15),
        ],
        poles=[
            PoleRecord(start_floor=2, end_floor=0, width=7, length=12),
            PoleRecord(start_floor=1, end_floor=0, width=3, length=18),
        ],
        walls=[
            # Widths 7..9 stay open
            WallRecord(floor=0, start_width=0, start_length=10, end_width=6, end_length=10),
            WallRecord(floor=0, start_width=5, start_length=0, end_width=5, end_length=5),
            WallRecord(floor=1, start_width=2, start_length=6, end_width=7, end_length=6),
            # Recovery area fence, outside the area; the entrance [0, 9, 19] stays open
            WallRecord(floor=0, start_width=6, start_length=19, end_width=8, end_length=19),
            WallRecord(floor=0, start_width=5, start_length=20, end_width=5, end_length=24),
        ],
    )
