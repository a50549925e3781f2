"""
Tests for the recovery area resolver.

Tests:
- Balance cap and depletion check
- Transport to a random recovery cell
- Each recovery effect
"""

from ..engine_core.events import EventType
from ..engine_core.recovery import check_and_cap, enter_recovery_area, transport_to_recovery_area
from ..engine_core.state import Direction, Position, RecoveryEffect
from .conftest import place


ENTRANCE = Position(0, 9, 19)
CELL = Position(0, 6, 20)


class TestCheckAndCap:
    """Tests for check_and_cap."""

    def test_caps_balance(self, game, player_a):
        """A balance above the cap is clamped."""
        place(player_a, Position(0, 0, 0), points=1500)

        assert not check_and_cap(game, player_a)
        assert player_a.movement_points == 1000

    def test_positive_balance_untouched(self, game, player_a):
        """A positive balance below the cap is left alone."""
        place(player_a, Position(0, 0, 0), points=1)

        assert not check_and_cap(game, player_a)
        assert player_a.position == Position(0, 0, 0)
        assert game.events == []

    def test_depleted_transports(self, game_factory):
        """A zero balance triggers transport."""
        game = game_factory(rng_values=[0, 0])
        player = place(game.get_player("A"), Position(0, 0, 0), points=0)

        assert check_and_cap(game, player)
        assert player.position == CELL


class TestTransport:
    """Tests for transport_to_recovery_area."""

    def test_happy_cell(self, game_factory):
        """Transport resets the balance, then the happy effect applies."""
        game = game_factory(recovery={CELL: RecoveryEffect.HAPPY}, rng_values=[0])
        player = place(game.get_player("A"), Position(0, 3, 3), Direction.SOUTH, points=-3)

        transport_to_recovery_area(game, player)

        assert player.position == ENTRANCE
        assert player.direction == Direction.NORTH
        assert player.movement_points == 210
        assert player.in_maze
        assert not player.in_recovery

        transported, effect = game.events
        assert transported.event_type == EventType.TRANSPORTED
        assert transported.get("position") == CELL
        assert effect.event_type == EventType.RECOVERY_EFFECT
        assert effect.get("effect") == RecoveryEffect.HAPPY
        assert effect.get("bonus") == 200

    def test_picks_cell_by_index(self, game_factory):
        """Index 19 is the last assignable cell."""
        game = game_factory(recovery={Position(0, 9, 24): RecoveryEffect.POISONING}, rng_values=[19])
        player = place(game.get_player("B"), Position(0, 1, 1), points=0)

        transport_to_recovery_area(game, player)

        assert player.position == Position(0, 9, 24)
        assert player.poisoned_turns == 3
        assert player.movement_points == 10

    def test_from_start_pad(self, game_factory):
        """Players outside the maze are put in it by the transport."""
        game = game_factory(recovery={CELL: RecoveryEffect.POISONING}, rng_values=[0])
        player = game.get_player("C")
        player.movement_points = 0

        transport_to_recovery_area(game, player)

        assert player.in_maze
        assert player.position == CELL


class TestRecoveryEffects:
    """Tests for enter_recovery_area."""

    def test_poisoning_stays(self, game_factory):
        """Poisoning keeps the player on the cell."""
        game = game_factory(recovery={CELL: RecoveryEffect.POISONING})
        player = place(game.get_player("A"), CELL, Direction.SOUTH, points=40)

        assert enter_recovery_area(game, player) == RecoveryEffect.POISONING

        assert player.position == CELL
        assert player.poisoned_turns == 3
        assert player.movement_points == 40
        assert player.direction == Direction.SOUTH

    def test_disoriented(self, game_factory):
        """Disoriented gives a bonus and sends the player to the entrance."""
        game = game_factory(recovery={CELL: RecoveryEffect.DISORIENTED})
        player = place(game.get_player("A"), CELL, Direction.SOUTH, points=40)

        enter_recovery_area(game, player)

        assert player.disoriented_turns == 4
        assert player.movement_points == 90
        assert player.position == ENTRANCE
        assert player.direction == Direction.NORTH

    def test_triggered(self, game_factory):
        """Triggered gives a bonus and sends the player to the entrance."""
        game = game_factory(recovery={CELL: RecoveryEffect.TRIGGERED})
        player = place(game.get_player("A"), CELL, points=40)

        enter_recovery_area(game, player)

        assert player.triggered
        assert player.movement_points == 90
        assert player.position == ENTRANCE

    def test_happy_capped(self, game_factory):
        """The happy bonus respects the cap."""
        game = game_factory(recovery={CELL: RecoveryEffect.HAPPY})
        player = place(game.get_player("A"), CELL, points=900)

        enter_recovery_area(game, player)

        assert player.movement_points == 1000

    def test_random_points(self, game_factory):
        """Random points draws from 10..100 and stays put."""
        game = game_factory(recovery={CELL: RecoveryEffect.RANDOM_POINTS}, rng_values=[90])
        player = place(game.get_player("A"), CELL, points=5)

        enter_recovery_area(game, player)

        assert player.movement_points == 105
        assert player.position == CELL
        assert game.rng.requests == [91]

    def test_clears_in_recovery_flag(self, game_factory):
        """The in-recovery flag is cleared after the effect."""
        game = game_factory(recovery={CELL: RecoveryEffect.HAPPY})
        player = place(game.get_player("A"), CELL, points=5)
        player.in_recovery = True

        enter_recovery_area(game, player)

        assert not player.in_recovery

    def test_outside_area(self, game, player_a):
        """Outside the area nothing happens except clearing the flag."""
        place(player_a, ENTRANCE, points=5)
        player_a.in_recovery = True

        assert enter_recovery_area(game, player_a) is None
        assert not player_a.in_recovery
        assert player_a.movement_points == 5
        assert game.events == []
