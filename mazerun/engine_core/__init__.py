"""
Engine Core - Deterministic turn resolution and movement.

The engine is the runtime that:
1. Holds the GameState aggregate (players, obstacles, cells, flag)
2. Answers geometry questions (grid, walls, stairs, poles)
3. Applies cell and recovery-area effects
4. Moves players step by step
5. Plays turns, emitting events for presentation
"""

from .state import (
    CARDINALS,
    CellEffect,
    CellEffectKind,
    Direction,
    GamePhase,
    GameState,
    Player,
    Position,
    RecoveryEffect,
)
from .events import EventType, GameEvent
from .rules import DEFAULT_RULES, SEATS, MazeRules, SeatDefinition
from .obstacles import ObstacleRegistry, Pole, Stair, Transition, TransitionKind, Wall
from .cells import CellEffectTable, RecoveryLayoutError, apply_cell_effect
from .recovery import check_and_cap, enter_recovery_area, transport_to_recovery_area
from .movement import MoveOutcome, MovementResolver, move_player
from .turn import TurnController, TurnResult, TurnState

__all__ = [
    "CARDINALS",
    "CellEffect",
    "CellEffectKind",
    "Direction",
    "GamePhase",
    "GameState",
    "Player",
    "Position",
    "RecoveryEffect",
    "EventType",
    "GameEvent",
    "DEFAULT_RULES",
    "SEATS",
    "MazeRules",
    "SeatDefinition",
    "ObstacleRegistry",
    "Pole",
    "Stair",
    "Transition",
    "TransitionKind",
    "Wall",
    "CellEffectTable",
    "RecoveryLayoutError",
    "apply_cell_effect",
    "check_and_cap",
    "enter_recovery_area",
    "transport_to_recovery_area",
    "MoveOutcome",
    "MovementResolver",
    "move_player",
    "TurnController",
    "TurnResult",
    "TurnState",
]
