"""
Cell Effect Table - Per-cell economic effects and recovery-area tags.

Generated once per game from the random source:
- every cell gets a consume / add / multiply effect by weighted draw
- every assignable recovery-area cell gets one recovery effect from a
  fixed multiset, shuffled once

The cumulative thresholds in draw_cell_effect() must stay exactly as they
are: a fixed seed has to reproduce the same table.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .dice import RandomSource, random_between
from .events import EventType
from .grid import all_positions, recovery_cells
from .recovery import check_and_cap
from .rules import DEFAULT_RULES, MazeRules
from .state import (
    CellEffect,
    CellEffectKind,
    NO_EFFECT,
    Position,
    RecoveryEffect,
    SPECIAL_RECOVERY_EFFECTS,
)

if TYPE_CHECKING:
    from .state import GameState, Player

logger = logging.getLogger(__name__)


class RecoveryLayoutError(ValueError):
    """Raised when the recovery-effect multiset does not fit the area."""


def draw_cell_effect(rng: RandomSource) -> CellEffect:
    """
    Draw one cell effect.

    25% consume 0, 35% consume 1-4, 25% add 1-2, 10% add 3-5, 5% multiply x2-3.
    """
    roll = rng.randrange(100)
    if roll < 25:
        return CellEffect(CellEffectKind.CONSUME, 0)
    if roll < 60:
        return CellEffect(CellEffectKind.CONSUME, random_between(rng, 1, 4))
    if roll < 85:
        return CellEffect(CellEffectKind.ADD, random_between(rng, 1, 2))
    if roll < 95:
        return CellEffect(CellEffectKind.ADD, random_between(rng, 3, 5))
    return CellEffect(CellEffectKind.MULTIPLY, random_between(rng, 2, 3))


def build_recovery_effects(cell_count: int, rules: MazeRules = DEFAULT_RULES) -> list[RecoveryEffect]:
    """
    Build the unshuffled multiset: N of each special effect, the rest random points.

    Raises RecoveryLayoutError if the special effects alone do not fit.
    """
    special = [
        effect
        for _ in range(rules.special_effect_copies)
        for effect in SPECIAL_RECOVERY_EFFECTS
    ]
    if len(special) > cell_count:
        raise RecoveryLayoutError(
            f"{len(special)} special recovery effects do not fit in {cell_count} cells"
        )
    return special + [RecoveryEffect.RANDOM_POINTS] * (cell_count - len(special))


def shuffle_effects(effects: list[RecoveryEffect], rng: RandomSource) -> None:
    """Shuffle in place: swap each slot with a uniformly drawn slot."""
    n = len(effects)
    for i in range(n):
        j = rng.randrange(n)
        effects[i], effects[j] = effects[j], effects[i]


def assign_recovery_effects(
    cells: list[Position],
    effects: list[RecoveryEffect],
) -> dict[Position, RecoveryEffect]:
    """Pair cells and effects one-to-one."""
    if len(effects) != len(cells):
        raise RecoveryLayoutError(
            f"recovery multiset has {len(effects)} effects for {len(cells)} assignable cells"
        )
    return dict(zip(cells, effects))


@dataclass
class CellEffectTable:
    """
    Effects for every cell of the maze.

    Positions missing from the table have no effect; recovery cells missing
    a tag fall back to random points.
    """
    effects: dict[Position, CellEffect] = field(default_factory=dict)
    recovery_effects: dict[Position, RecoveryEffect] = field(default_factory=dict)

    @classmethod
    def generate(cls, rng: RandomSource, rules: MazeRules = DEFAULT_RULES) -> CellEffectTable:
        """Draw the cell effects, then shuffle and place the recovery tags."""
        effects = {pos: draw_cell_effect(rng) for pos in all_positions(rules)}

        cells = recovery_cells(rules)
        tags = build_recovery_effects(len(cells), rules)
        shuffle_effects(tags, rng)

        return cls(effects=effects, recovery_effects=assign_recovery_effects(cells, tags))

    def effect_at(self, pos: Position) -> CellEffect:
        return self.effects.get(pos, NO_EFFECT)

    def recovery_effect_at(self, pos: Position) -> RecoveryEffect:
        return self.recovery_effects.get(pos, RecoveryEffect.RANDOM_POINTS)

    def recovery_counts(self) -> dict[RecoveryEffect, int]:
        counts = {effect: 0 for effect in RecoveryEffect}
        for effect in self.recovery_effects.values():
            counts[effect] += 1
        return counts


def apply_cell_effect(game: GameState, player: Player) -> tuple[int, bool]:
    """
    Apply the effect of the player's current cell.

    Returns (cost, depleted). cost is what a consume effect took; depleted
    is True when the balance hit zero and the player was sent to the
    recovery area.
    """
    rules = game.rules
    effect = game.cells.effect_at(player.position)
    cost = 0

    if effect.kind == CellEffectKind.CONSUME:
        cost = effect.value
        player.movement_points -= effect.value
    elif effect.kind == CellEffectKind.ADD:
        player.movement_points += effect.value
    elif effect.kind == CellEffectKind.MULTIPLY:
        # Capped growth: large balances only get an additive bonus
        if player.movement_points <= rules.multiply_threshold:
            player.movement_points *= effect.value
        else:
            player.movement_points += effect.value * rules.multiply_fallback_factor

    if effect.kind != CellEffectKind.NONE and effect.value:
        game.emit(
            EventType.CELL_EFFECT,
            player.player_id,
            kind=effect.kind,
            value=effect.value,
            points=player.movement_points,
        )

    depleted = check_and_cap(game, player)
    return cost, depleted
