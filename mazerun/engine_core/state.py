"""
Game State - Players, positions and the game aggregate.

Design principles:
- One owned aggregate: the GameState holds players, obstacles, the cell table,
  the flag and the random source
- Mutable in place: the turn controller and movement resolver update
  players directly, one call at a time
- Observable: every rule outcome is appended to the event log
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

from .events import EventType, GameEvent

if TYPE_CHECKING:
    from .cells import CellEffectTable
    from .dice import RandomSource
    from .obstacles import ObstacleRegistry
    from .rules import MazeRules


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Direction(Enum):
    """Facing directions. EMPTY only ever appears as a direction die face."""
    EMPTY = "empty"
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def label(self) -> str:
        return self.value.capitalize()


CARDINALS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)

# (width delta, length delta)
_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
    Direction.EMPTY: (0, 0),
}


@dataclass(frozen=True)
class Position:
    """A cell of the maze: (floor, width, length)."""
    floor: int
    width: int
    length: int

    def step(self, direction: Direction) -> Position:
        """Return the neighbouring cell one unit along direction."""
        dw, dl = _OFFSETS[direction]
        return Position(self.floor, self.width + dw, self.length + dl)

    def with_floor(self, floor: int) -> Position:
        return Position(floor, self.width, self.length)

    def __str__(self) -> str:
        return f"[{self.floor}, {self.width}, {self.length}]"


class CellEffectKind(Enum):
    """Economic effect of stepping on a cell."""
    NONE = "none"
    CONSUME = "consume"
    ADD = "add"
    MULTIPLY = "multiply"


@dataclass(frozen=True)
class CellEffect:
    kind: CellEffectKind = CellEffectKind.NONE
    value: int = 0


NO_EFFECT = CellEffect()


class RecoveryEffect(Enum):
    """Status effect attached to a recovery-area cell."""
    POISONING = "poisoning"
    DISORIENTED = "disoriented"
    TRIGGERED = "triggered"
    HAPPY = "happy"
    RANDOM_POINTS = "random_points"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


SPECIAL_RECOVERY_EFFECTS = (
    RecoveryEffect.POISONING,
    RecoveryEffect.DISORIENTED,
    RecoveryEffect.TRIGGERED,
    RecoveryEffect.HAPPY,
)


@dataclass
class Player:
    """
    State for a single seat.

    The seat data (start pad, entry cell, start direction) never changes;
    everything else is rewritten turn by turn.
    """
    player_id: str
    position: Position
    direction: Direction
    start_pad: Position
    entry_cell: Position
    start_direction: Direction

    in_maze: bool = False
    movement_points: int = 0
    dice_throw_count: int = 0

    # Status conditions, freely combinable
    poisoned_turns: int = 0
    disoriented_turns: int = 0
    triggered: bool = False
    in_recovery: bool = False

    @property
    def is_poisoned(self) -> bool:
        return self.poisoned_turns > 0

    @property
    def is_disoriented(self) -> bool:
        return self.disoriented_turns > 0

    def send_to_start(self) -> None:
        """Return to the start pad with every condition cleared."""
        self.position = self.start_pad
        self.direction = self.start_direction
        self.in_maze = False
        self.dice_throw_count = 0
        self.poisoned_turns = 0
        self.disoriented_turns = 0
        self.triggered = False
        self.in_recovery = False


@dataclass
class GameState:
    """
    Complete game at a point in time.

    Owned by the round scheduler; components borrow it for one call.
    """
    players: list[Player]
    obstacles: ObstacleRegistry
    cells: CellEffectTable
    flag: Position
    rules: MazeRules
    rng: RandomSource

    phase: GamePhase = GamePhase.PLAYING
    round_number: int = 0
    winner: str | None = None

    events: list[GameEvent] = field(default_factory=list)

    # Seed the random source was built from, if known (for replays)
    random_seed: int | None = None

    @property
    def game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def emit(self, event_type: EventType, player_id: str | None = None, **details: Any) -> GameEvent:
        """Append an event to the log and return it."""
        event = GameEvent(
            event_type=event_type,
            round_number=self.round_number,
            player_id=player_id,
            details=details,
        )
        self.events.append(event)
        return event

    def declare_winner(self, player: Player) -> None:
        self.phase = GamePhase.GAME_OVER
        self.winner = player.player_id
        self.emit(EventType.GAME_OVER, player.player_id, position=player.position)
