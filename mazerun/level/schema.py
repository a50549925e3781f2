"""
Pydantic Schemas for level data - Records read from the level files.

These models define the contract between the level files and the engine.
Each record converts to its engine-side obstacle with to_*().

File formats (one record per line, comma separated):
- stairs.txt: start_floor, start_width, start_length, end_floor, end_width, end_length
- poles.txt:  start_floor, end_floor, width, length
- walls.txt:  floor, start_width, start_length, end_width, end_length
- flag.txt:   floor, width, length
- seed.txt:   a single integer
"""

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from ..engine_core.obstacles import Pole, Stair, Wall
from ..engine_core.state import Position


# =============================================================================
# Obstacle Records
# =============================================================================

class StairRecord(BaseModel):
    """A stair between two cells. Stairs start out usable start -> end."""
    start_floor: int = Field(ge=0)
    start_width: int = Field(ge=0)
    start_length: int = Field(ge=0)
    end_floor: int = Field(ge=0)
    end_width: int = Field(ge=0)
    end_length: int = Field(ge=0)

    @property
    def start(self) -> Position:
        return Position(self.start_floor, self.start_width, self.start_length)

    @property
    def end(self) -> Position:
        return Position(self.end_floor, self.end_width, self.end_length)

    def to_stair(self) -> Stair:
        return Stair(start=self.start, end=self.end, up=True)


class PoleRecord(BaseModel):
    """A pole sliding from start_floor down to end_floor."""
    start_floor: int = Field(ge=0)
    end_floor: int = Field(ge=0)
    width: int = Field(ge=0)
    length: int = Field(ge=0)

    def to_pole(self) -> Pole:
        return Pole(
            width=self.width,
            length=self.length,
            start_floor=self.start_floor,
            end_floor=self.end_floor,
        )


class WallRecord(BaseModel):
    """A straight wall segment on one floor."""
    floor: int = Field(ge=0)
    start_width: int = Field(ge=0)
    start_length: int = Field(ge=0)
    end_width: int = Field(ge=0)
    end_length: int = Field(ge=0)

    @model_validator(mode="after")
    def check_axis_aligned(self) -> "WallRecord":
        if self.start_width != self.end_width and self.start_length != self.end_length:
            raise ValueError("wall must keep either its width or its length fixed")
        return self

    def to_wall(self) -> Wall:
        return Wall(
            floor=self.floor,
            start_width=self.start_width,
            start_length=self.start_length,
            end_width=self.end_width,
            end_length=self.end_length,
        )


class FlagRecord(BaseModel):
    """The winning cell."""
    floor: int = Field(ge=0)
    width: int = Field(ge=0)
    length: int = Field(ge=0)

    def to_position(self) -> Position:
        return Position(self.floor, self.width, self.length)


# =============================================================================
# Level
# =============================================================================

class LevelData(BaseModel):
    """Everything a game needs besides the rules."""
    stairs: list[StairRecord] = Field(default_factory=list)
    poles: list[PoleRecord] = Field(default_factory=list)
    walls: list[WallRecord] = Field(default_factory=list)
    flag: Optional[FlagRecord] = Field(None, description="drawn at random when missing")
    seed: Optional[int] = Field(None, description="time-based seed when missing")
