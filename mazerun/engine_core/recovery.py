"""
Recovery Area Resolver - Where depleted players are sent and re-rolled.

A player lands in the recovery area either by walking in or by running out
of movement points anywhere else. Each assignable cell holds one effect:

- poisoning: skip the next turns, stay put
- disoriented: bonus, back to the entrance, random directions for a while
- triggered: bonus, back to the entrance, double movement for one cycle
- happy: large bonus, back to the entrance
- random points: random bonus, stay put
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .dice import random_between
from .events import EventType
from .grid import is_in_recovery_area, recovery_cells
from .state import Direction, RecoveryEffect

if TYPE_CHECKING:
    from .state import GameState, Player

logger = logging.getLogger(__name__)


def check_and_cap(game: GameState, player: Player) -> bool:
    """
    Clamp the balance to the cap; transport the player if it fell to zero.

    Must run after every point-changing event. Returns True if the player
    was transported.
    """
    cap = game.rules.max_movement_points
    if player.movement_points > cap:
        player.movement_points = cap

    if player.movement_points <= 0:
        transport_to_recovery_area(game, player)
        return True
    return False


def transport_to_recovery_area(game: GameState, player: Player) -> None:
    """Drop the player on a random recovery cell and resolve its effect."""
    rules = game.rules
    cells = recovery_cells(rules)
    target = cells[game.rng.randrange(len(cells))]

    logger.debug("%s depleted (%d points), transported to %s", player.player_id, player.movement_points, target)

    player.position = target
    player.in_maze = True
    player.in_recovery = True
    # Reset balance; the effect is applied on top of it
    player.movement_points = rules.transport_points

    game.emit(EventType.TRANSPORTED, player.player_id, position=target)
    enter_recovery_area(game, player)


def _relocate_to_entrance(game: GameState, player: Player) -> None:
    player.position = game.rules.recovery_entrance
    player.direction = Direction.NORTH


def enter_recovery_area(game: GameState, player: Player) -> RecoveryEffect | None:
    """
    Apply the recovery effect of the player's current cell.

    Returns the effect applied, or None if the player is not inside the
    area. The in-recovery flag is always cleared.
    """
    rules = game.rules
    if not is_in_recovery_area(player.position, rules):
        player.in_recovery = False
        return None

    cell = player.position
    effect = game.cells.recovery_effect_at(cell)
    bonus = 0

    if effect == RecoveryEffect.POISONING:
        player.poisoned_turns = rules.poisoning_turns
    elif effect == RecoveryEffect.DISORIENTED:
        bonus = rules.disoriented_bonus
        player.disoriented_turns = rules.disoriented_turns
        _relocate_to_entrance(game, player)
    elif effect == RecoveryEffect.TRIGGERED:
        bonus = rules.triggered_bonus
        player.triggered = True
        _relocate_to_entrance(game, player)
    elif effect == RecoveryEffect.HAPPY:
        bonus = rules.happy_bonus
        _relocate_to_entrance(game, player)
    else:
        bonus = random_between(game.rng, *rules.random_bonus_range)

    player.movement_points += bonus

    logger.debug("%s got %s at %s (+%d)", player.player_id, effect.label, cell, bonus)
    game.emit(
        EventType.RECOVERY_EFFECT,
        player.player_id,
        effect=effect,
        cell=cell,
        bonus=bonus,
        position=player.position,
        points=player.movement_points,
    )

    check_and_cap(game, player)
    player.in_recovery = False
    return effect
