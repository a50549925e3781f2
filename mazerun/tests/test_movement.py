"""
Tests for the movement resolver.

Tests:
- Blocked moves and partial moves
- Cell effects along the path
- Flag detection mid-move
- Stair and pole transitions
- Recovery area entry
- Captures on the final cell
"""

from ..engine_core.events import EventType
from ..engine_core.movement import MovementResolver, move_player
from ..engine_core.obstacles import Pole, Stair, Wall
from ..engine_core.state import CellEffect, CellEffectKind, Direction, Position, RecoveryEffect
from .conftest import place


def event_types(game):
    return [e.event_type for e in game.events]


class TestBlocking:
    """Tests for blocked and partial moves."""

    def test_blocked_first_step_pays_penalty(self, game, walker):
        """A denied first step costs the penalty and leaves the player in place."""
        outcome = move_player(game, walker, Direction.NORTH, 3)

        assert outcome.blocked
        assert outcome.cells_moved == 0
        assert outcome.total_cost == 2
        assert walker.position == Position(0, 0, 0)
        assert walker.movement_points == 98
        assert EventType.BLOCKED in event_types(game)

    def test_partial_move_stops_at_edge(self, game, player_a):
        """A later denied step just ends the move."""
        place(player_a, Position(0, 7, 5), Direction.EAST, 100)

        outcome = move_player(game, player_a, Direction.EAST, 5)

        assert not outcome.blocked
        assert outcome.cells_moved == 2
        assert player_a.position == Position(0, 9, 5)
        assert player_a.movement_points == 100

    def test_wall_stops_mid_move(self, game_factory):
        """A wall stops the move on the cell before it."""
        wall = Wall(floor=0, start_width=0, start_length=10, end_width=9, end_length=10)
        game = game_factory(walls=[wall])
        player = place(game.get_player("A"), Position(0, 0, 6), Direction.SOUTH, 100)

        outcome = move_player(game, player, Direction.SOUTH, 6)

        assert outcome.cells_moved == 3
        assert player.position == Position(0, 0, 9)
        assert player.movement_points == 100

    def test_floor_shape_blocks(self, game, player_a):
        """Unwalkable cells of the floor shape are denied."""
        place(player_a, Position(1, 3, 12), Direction.WEST, 50)

        outcome = move_player(game, player_a, Direction.WEST, 2)

        assert outcome.blocked
        assert player_a.movement_points == 48

    def test_blocked_penalty_can_deplete(self, game_factory):
        """The penalty can send the player to the recovery area."""
        game = game_factory(rng_values=[0, 0])
        player = place(game.get_player("A"), Position(0, 0, 0), Direction.NORTH, 2)

        outcome = move_player(game, player, Direction.NORTH, 1)

        assert outcome.depleted
        assert player.position == Position(0, 6, 20)

    def test_empty_direction_does_nothing(self, game, walker):
        """An EMPTY direction moves nothing and emits nothing."""
        outcome = move_player(game, walker, Direction.EMPTY, 4)

        assert outcome.cells_moved == 0
        assert walker.position == Position(0, 0, 0)
        assert game.events == []


class TestCellEffectsOnPath:
    """Tests for effects applied on every committed step."""

    def test_costs_accumulate(self, game_factory):
        """Every committed step applies its cell effect."""
        game = game_factory(effects={
            Position(0, 0, 1): CellEffect(CellEffectKind.CONSUME, 2),
            Position(0, 0, 2): CellEffect(CellEffectKind.CONSUME, 3),
            Position(0, 0, 3): CellEffect(CellEffectKind.ADD, 1),
        })
        player = place(game.get_player("A"), Position(0, 0, 0), Direction.SOUTH, 100)

        outcome = move_player(game, player, Direction.SOUTH, 3)

        assert outcome.total_cost == 5
        assert player.movement_points == 96

        moved = game.events[-1]
        assert moved.event_type == EventType.MOVED
        assert moved.get("cells") == 3
        assert moved.get("cost") == 5
        assert moved.get("points") == 96

    def test_depletion_ends_move(self, game_factory):
        """Running out of points mid-move ends it in the recovery area."""
        game = game_factory(
            effects={Position(0, 0, 1): CellEffect(CellEffectKind.CONSUME, 3)},
            rng_values=[0, 0],
        )
        player = place(game.get_player("A"), Position(0, 0, 0), Direction.SOUTH, 2)

        outcome = move_player(game, player, Direction.SOUTH, 5)

        assert outcome.depleted
        assert outcome.cells_moved == 1
        assert player.position == Position(0, 6, 20)


class TestFlag:
    """Tests for reaching the flag."""

    def test_flag_ends_move_immediately(self, game_factory):
        """Reaching the flag wins with steps left over."""
        game = game_factory(flag=Position(0, 0, 3))
        player = place(game.get_player("A"), Position(0, 0, 0), Direction.SOUTH, 100)

        outcome = move_player(game, player, Direction.SOUTH, 5)

        assert outcome.won
        assert outcome.cells_moved == 3
        assert player.position == Position(0, 0, 3)
        assert game.game_over
        assert game.winner == "A"
        assert game.events[-1].event_type == EventType.GAME_OVER
        assert EventType.MOVED not in event_types(game)

    def test_flag_at_stair_exit(self, game_factory):
        """A stair that lands on the flag wins."""
        game = game_factory(
            stairs=[Stair(start=Position(0, 2, 5), end=Position(1, 2, 5))],
            flag=Position(1, 2, 5),
        )
        player = place(game.get_player("A"), Position(0, 2, 4), Direction.SOUTH, 100)

        outcome = move_player(game, player, Direction.SOUTH, 3)

        assert outcome.won
        assert game.winner == "A"
        assert player.position == Position(1, 2, 5)


class TestTransitions:
    """Tests for stairs and poles during a move."""

    def test_stair_continues_with_remaining_steps(self, game_factory):
        """Movement resumes from the stair exit with the steps left."""
        game = game_factory(stairs=[Stair(start=Position(0, 2, 5), end=Position(1, 2, 5))])
        player = place(game.get_player("A"), Position(0, 2, 3), Direction.SOUTH, 100)

        outcome = move_player(game, player, Direction.SOUTH, 4)

        assert player.position == Position(1, 2, 7)
        assert outcome.cells_moved == 4
        assert len(outcome.transitions) == 1

        stair_event = next(e for e in game.events if e.event_type == EventType.STAIR_USED)
        assert stair_event.get("origin") == Position(0, 2, 5)
        assert stair_event.get("destination") == Position(1, 2, 5)
        assert stair_event.get("remaining") == 2

    def test_down_stair_ignored_from_start(self, game_factory):
        """A down stair is not usable from its start."""
        game = game_factory(stairs=[Stair(start=Position(0, 2, 5), end=Position(1, 2, 5), up=False)])
        player = place(game.get_player("A"), Position(0, 2, 3), Direction.SOUTH, 100)

        outcome = move_player(game, player, Direction.SOUTH, 4)

        assert outcome.transitions == []
        assert player.position == Position(0, 2, 7)

    def test_pole_slide(self, game_factory):
        """Landing on a pole slides down to its end floor."""
        game = game_factory(poles=[Pole(width=7, length=12, start_floor=2, end_floor=0)])
        player = place(game.get_player("A"), Position(2, 7, 10), Direction.SOUTH, 100)

        move_player(game, player, Direction.SOUTH, 2)

        assert player.position == Position(0, 7, 12)
        assert EventType.POLE_USED in event_types(game)

    def test_triggered_doubles_steps(self, game, walker):
        """Triggered players move twice the roll."""
        walker.triggered = True

        outcome = move_player(game, walker, Direction.SOUTH, 3)

        assert outcome.requested_steps == 3
        assert outcome.effective_steps == 6
        assert walker.position == Position(0, 0, 6)

    def test_triggered_not_doubled_again_after_stair(self, game_factory):
        """The doubled budget is not doubled again after a stair."""
        game = game_factory(stairs=[Stair(start=Position(0, 4, 5), end=Position(1, 4, 5))])
        player = place(game.get_player("A"), Position(0, 4, 4), Direction.SOUTH, 100)
        player.triggered = True

        move_player(game, player, Direction.SOUTH, 2)

        # 4 steps: one to the stair, three on floor 1
        assert player.position == Position(1, 4, 8)


class TestRecoveryEntry:
    """Tests for walking into the recovery area."""

    def test_stops_on_first_recovery_cell(self, game_factory):
        """Walking into the recovery area resolves it and stops."""
        game = game_factory(recovery={Position(0, 9, 20): RecoveryEffect.POISONING})
        player = place(game.get_player("A"), Position(0, 9, 18), Direction.SOUTH, 100)

        outcome = move_player(game, player, Direction.SOUTH, 4)

        assert outcome.entered_recovery
        assert outcome.cells_moved == 2
        assert player.position == Position(0, 9, 20)
        assert player.poisoned_turns == 3
        assert not player.in_recovery

    def test_entrance_is_not_inside(self, game, player_a):
        """Standing on the entrance does not trigger the area."""
        place(player_a, Position(0, 9, 17), Direction.SOUTH, 100)

        outcome = move_player(game, player_a, Direction.SOUTH, 2)

        assert not outcome.entered_recovery
        assert player_a.position == Position(0, 9, 19)


class TestCapture:
    """Tests for captures on the final cell."""

    def test_capture_sends_back_to_start(self, game, walker, player_b):
        """Ending on another player sends them back with conditions cleared."""
        place(player_b, Position(0, 0, 4), Direction.EAST, 80)
        player_b.triggered = True

        outcome = move_player(game, walker, Direction.SOUTH, 4)

        assert outcome.captured == "B"
        assert player_b.position == Position(0, 9, 8)
        assert player_b.direction == Direction.WEST
        assert not player_b.in_maze
        assert not player_b.triggered
        assert player_b.movement_points == 80
        assert walker.position == Position(0, 0, 4)

    def test_only_first_match_captured(self, game, walker, player_b, player_c):
        """Only the first player on the cell is captured."""
        place(player_b, Position(0, 0, 4))
        place(player_c, Position(0, 0, 4))

        outcome = move_player(game, walker, Direction.SOUTH, 4)

        assert outcome.captured == "B"
        assert not player_b.in_maze
        assert player_c.in_maze
        assert player_c.position == Position(0, 0, 4)

    def test_passing_over_does_not_capture(self, game, walker, player_b):
        """Only the final cell captures."""
        place(player_b, Position(0, 0, 2))

        outcome = move_player(game, walker, Direction.SOUTH, 4)

        assert outcome.captured is None
        assert player_b.in_maze

    def test_players_outside_maze_ignored(self, game, player_a):
        """Players waiting on their pad cannot be captured."""
        # B waits on its start pad; A walks onto it
        place(player_a, Position(0, 9, 6), Direction.SOUTH, 100)

        outcome = MovementResolver(game=game).move(player_a, Direction.SOUTH, 2)

        assert outcome.captured is None
        assert player_a.position == Position(0, 9, 8)
