"""
Game Events - The record of everything the engine decides.

Events represent:
1. Round bookkeeping (round start, stair flips, game over)
2. Turn outcomes (entry rolls, direction rolls, skipped turns)
3. Movement outcomes (moves, blocks, cell effects, stairs, poles, captures)
4. Recovery-area outcomes (transport, status effects)

The engine only appends events; formatting lives in session.report.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(Enum):
    """Types of events emitted by the engine."""
    # Round events
    ROUND_STARTED = "round_started"
    STAIRS_CHANGED = "stairs_changed"
    GAME_OVER = "game_over"

    # Turn events
    ENTRY_ROLLED = "entry_rolled"
    ENTERED_MAZE = "entered_maze"
    TURN_SKIPPED = "turn_skipped"
    DIRECTION_ROLLED = "direction_rolled"
    STATUS_CLEARED = "status_cleared"

    # Movement events
    MOVED = "moved"
    BLOCKED = "blocked"
    CELL_EFFECT = "cell_effect"
    STAIR_USED = "stair_used"
    POLE_USED = "pole_used"
    CAPTURED = "captured"

    # Recovery area events
    TRANSPORTED = "transported"
    RECOVERY_EFFECT = "recovery_effect"


@dataclass
class GameEvent:
    """
    A single fact emitted once per occurrence.

    The details dict carries event-specific values (positions, costs,
    balances, directions) for presentation and tests.
    """
    event_type: EventType
    round_number: int
    player_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.details.get(key, default)
