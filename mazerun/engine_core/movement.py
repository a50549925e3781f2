"""
Movement Resolver - Step-by-step movement engine.

This module handles everything that happens while a player walks:
- wall and floor blocking
- cell effects on every committed step
- flag detection (ends the game immediately)
- stair and pole transitions mid-move
- stopping on entry to the recovery area
- capturing another player on the final cell

The resolver walks one unit step at a time against an explicit step
budget. A stair or pole transition does not restart the roll: movement
resumes from the new cell with whatever budget is left.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .cells import apply_cell_effect
from .events import EventType
from .grid import is_in_recovery_area
from .obstacles import Transition, TransitionKind
from .recovery import check_and_cap, enter_recovery_area
from .state import Direction

if TYPE_CHECKING:
    from .state import GameState, Player

logger = logging.getLogger(__name__)


@dataclass
class MoveOutcome:
    """
    Result of one movement.

    All game effects are already applied to the players; this is a summary
    for the turn controller and tests.
    """
    direction: Direction
    requested_steps: int
    effective_steps: int
    cells_moved: int = 0
    total_cost: int = 0
    blocked: bool = False
    depleted: bool = False
    entered_recovery: bool = False
    transitions: list[Transition] = field(default_factory=list)
    captured: str | None = None
    won: bool = False


@dataclass
class MovementResolver:
    """
    Moves players inside one game.

    Stateless between calls - all state is in GameState.
    """
    game: GameState

    def move(self, player: Player, direction: Direction, steps: int) -> MoveOutcome:
        """
        Move player up to steps cells along direction.

        Triggered players move twice the distance.
        """
        game = self.game
        effective_steps = steps * 2 if player.triggered else steps
        outcome = MoveOutcome(
            direction=direction,
            requested_steps=steps,
            effective_steps=effective_steps,
        )
        if direction == Direction.EMPTY:
            return outcome

        remaining = effective_steps
        while remaining > 0:
            remaining -= 1
            target = player.position.step(direction)

            if not game.obstacles.can_step_to(player.position, target):
                if outcome.cells_moved == 0:
                    self._charge_blocked_penalty(player, direction, outcome)
                break

            player.position = target
            outcome.cells_moved += 1

            cost, depleted = apply_cell_effect(game, player)
            outcome.total_cost += cost

            if self._reached_flag(player):
                outcome.won = True
                return outcome

            if depleted:
                outcome.depleted = True
                break

            transition = game.obstacles.try_use_stair_or_pole(player)
            if transition is not None:
                outcome.transitions.append(transition)
                self._emit_transition(player, transition, remaining)
                if self._reached_flag(player):
                    outcome.won = True
                    return outcome

            if is_in_recovery_area(player.position, game.rules):
                outcome.entered_recovery = True
                player.in_recovery = True
                enter_recovery_area(game, player)
                break

        outcome.captured = self._capture_on_cell(player)

        if outcome.cells_moved > 0 or outcome.total_cost > 0:
            game.emit(
                EventType.MOVED,
                player.player_id,
                cells=outcome.cells_moved,
                cost=outcome.total_cost,
                points=player.movement_points,
                direction=player.direction,
                position=player.position,
            )
        return outcome

    def _charge_blocked_penalty(self, player: Player, direction: Direction, outcome: MoveOutcome) -> None:
        """First step denied: pay the penalty and stay put."""
        game = self.game
        penalty = game.rules.blocked_move_penalty
        outcome.blocked = True
        outcome.total_cost += penalty
        player.movement_points -= penalty

        logger.debug("%s blocked moving %s from %s", player.player_id, direction.label, player.position)
        game.emit(
            EventType.BLOCKED,
            player.player_id,
            direction=direction,
            position=player.position,
            penalty=penalty,
        )
        outcome.depleted = check_and_cap(game, player)

    def _emit_transition(self, player: Player, transition: Transition, remaining: int) -> None:
        event_type = EventType.STAIR_USED if transition.kind == TransitionKind.STAIR else EventType.POLE_USED
        self.game.emit(
            event_type,
            player.player_id,
            origin=transition.origin,
            destination=transition.destination,
            remaining=remaining,
        )

    def _reached_flag(self, player: Player) -> bool:
        if player.position != self.game.flag:
            return False
        logger.info("%s reached the flag at %s", player.player_id, player.position)
        self.game.declare_winner(player)
        return True

    def _capture_on_cell(self, mover: Player) -> str | None:
        """Send the first other in-maze player on the mover's cell back to start."""
        for other in self.game.players:
            if other is mover or not other.in_maze:
                continue
            if other.position == mover.position:
                cell = other.position
                other.send_to_start()
                logger.debug("%s captured %s at %s", mover.player_id, other.player_id, cell)
                self.game.emit(
                    EventType.CAPTURED,
                    mover.player_id,
                    captured=other.player_id,
                    position=cell,
                    start_pad=other.start_pad,
                )
                return other.player_id
        return None


def move_player(game: GameState, player: Player, direction: Direction, steps: int) -> MoveOutcome:
    """
    Convenience function to move a player.

    Creates a MovementResolver and runs one move.
    """
    return MovementResolver(game=game).move(player, direction, steps)
