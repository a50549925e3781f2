"""
Turn Controller - Plays one player's turn.

The controller is the single entry point for a turn. It decides which
state the player is in and dispatches to a handler:

- POISONED: skip the turn; on the last skipped turn, go back through the
  recovery area
- IN_RECOVERY: resolve the recovery effect, end the turn
- NOT_IN_MAZE: roll to enter (a 6 gets in)
- IN_MAZE: roll to move, handle disorientation and direction re-rolls,
  delegate to the movement resolver

Design principles:
- Stateless: all state is in GameState
- Every dice roll goes through the game's random source
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum

from .cells import apply_cell_effect
from .dice import random_cardinal, roll_direction_die, roll_movement_die
from .events import EventType
from .movement import MoveOutcome, MovementResolver
from .recovery import check_and_cap, enter_recovery_area, transport_to_recovery_area
from .state import Direction, GameState, Player

logger = logging.getLogger(__name__)


class TurnState(Enum):
    """Which handler a turn goes through."""
    POISONED = "poisoned"
    IN_RECOVERY = "in_recovery"
    NOT_IN_MAZE = "not_in_maze"
    IN_MAZE = "in_maze"


@dataclass
class TurnResult:
    """Summary of one turn."""
    player_id: str
    state: TurnState
    roll: int | None = None
    direction: Direction | None = None
    direction_roll: Direction | None = None
    entered_maze: bool = False
    movement: MoveOutcome | None = None
    cleared: list[str] = field(default_factory=list)  # Status conditions that ended
    game_over: bool = False


@dataclass
class TurnController:
    """
    Plays turns for one game.

    Delegates walking to the MovementResolver.
    """
    game: GameState
    movement: MovementResolver = field(init=False)

    def __post_init__(self):
        self.movement = MovementResolver(game=self.game)

    def classify(self, player: Player) -> TurnState:
        if player.is_poisoned:
            return TurnState.POISONED
        if player.in_recovery:
            return TurnState.IN_RECOVERY
        if not player.in_maze:
            return TurnState.NOT_IN_MAZE
        return TurnState.IN_MAZE

    def play_turn(self, player: Player) -> TurnResult:
        """Play one turn for player."""
        state = self.classify(player)
        handler = self._get_handler(state)
        result = handler(player, TurnResult(player_id=player.player_id, state=state))
        result.game_over = self.game.game_over
        return result

    def _get_handler(self, state: TurnState):
        """Get the handler function for a turn state."""
        handlers = {
            TurnState.POISONED: self._handle_poisoned,
            TurnState.IN_RECOVERY: self._handle_in_recovery,
            TurnState.NOT_IN_MAZE: self._handle_not_in_maze,
            TurnState.IN_MAZE: self._handle_in_maze,
        }
        return handlers[state]

    def _handle_poisoned(self, player: Player, result: TurnResult) -> TurnResult:
        """Skip the turn. Recovering from poisoning consumes the turn too."""
        player.poisoned_turns -= 1
        self.game.emit(
            EventType.TURN_SKIPPED,
            player.player_id,
            reason="poisoning",
            remaining=player.poisoned_turns,
        )

        if player.poisoned_turns == 0:
            result.cleared.append("poisoning")
            self.game.emit(EventType.STATUS_CLEARED, player.player_id, status="poisoning")
            transport_to_recovery_area(self.game, player)
        return result

    def _handle_in_recovery(self, player: Player, result: TurnResult) -> TurnResult:
        enter_recovery_area(self.game, player)
        return result

    def _handle_not_in_maze(self, player: Player, result: TurnResult) -> TurnResult:
        """Roll the entry die: only the entry roll gets a player in."""
        game = self.game
        roll = roll_movement_die(game.rng)
        result.roll = roll
        entered = roll == game.rules.entry_roll
        game.emit(EventType.ENTRY_ROLLED, player.player_id, roll=roll, entered=entered)

        if not entered:
            player.movement_points -= game.rules.failed_entry_penalty
            check_and_cap(game, player)
            return result

        player.in_maze = True
        player.dice_throw_count = 1
        player.position = player.entry_cell
        result.entered_maze = True
        logger.debug("%s entered the maze at %s", player.player_id, player.position)

        cost, _ = apply_cell_effect(game, player)
        game.emit(
            EventType.ENTERED_MAZE,
            player.player_id,
            position=player.entry_cell,
            cost=cost,
            points=player.movement_points,
            direction=player.direction,
        )
        return result

    def _handle_in_maze(self, player: Player, result: TurnResult) -> TurnResult:
        """Roll and move; status conditions decide the direction."""
        game = self.game
        rules = game.rules

        roll = roll_movement_die(game.rng)
        player.dice_throw_count += 1
        direction = player.direction
        cycle_boundary = player.dice_throw_count % rules.direction_roll_interval == 0

        was_disoriented = player.is_disoriented
        if was_disoriented:
            direction = random_cardinal(game.rng)
            player.disoriented_turns -= 1
            logger.debug(
                "%s is disoriented, moving %s (%d turns left)",
                player.player_id, direction.label, player.disoriented_turns,
            )
        elif cycle_boundary:
            face = roll_direction_die(game.rng)
            result.direction_roll = face
            if face != Direction.EMPTY:
                player.direction = face
                direction = face
            game.emit(
                EventType.DIRECTION_ROLLED,
                player.player_id,
                face=face,
                direction=player.direction,
            )

        result.roll = roll
        result.direction = direction
        result.movement = self.movement.move(player, direction, roll)

        if game.game_over:
            return result

        if was_disoriented and not player.is_disoriented:
            result.cleared.append("disorientation")
            game.emit(EventType.STATUS_CLEARED, player.player_id, status="disorientation")

        if player.triggered and cycle_boundary:
            player.triggered = False
            result.cleared.append("triggered")
            game.emit(EventType.STATUS_CLEARED, player.player_id, status="triggered")

        return result
