"""
Report - Human-readable text for events and game state.

The engine never prints; the CLI renders the event log through
format_event() and prints a status table every few rounds.
"""

from __future__ import annotations

from ..engine_core.events import EventType, GameEvent
from ..engine_core.state import GameState, Player


def _moved(e: GameEvent) -> str:
    return (
        f"{e.player_id} moved {e.get('cells')} cells that cost {e.get('cost')} movement points "
        f"and is left with {e.get('points')} and is moving in the {e.get('direction').label}."
    )


def _entry_rolled(e: GameEvent) -> str:
    if e.get("entered"):
        return f"{e.player_id} is at the starting area and rolls {e.get('roll')} on the movement dice."
    return (
        f"{e.player_id} is at the starting area and rolls {e.get('roll')} on the movement dice "
        f"and cannot enter the maze."
    )


def _recovery_effect(e: GameEvent) -> str:
    effect = e.get("effect")
    return (
        f"{e.player_id} eats from the recovery area cell {e.get('cell')} ({effect.label}), "
        f"gains {e.get('bonus')} movement points and is placed at {e.get('position')}."
    )


_FORMATTERS = {
    EventType.ROUND_STARTED: lambda e: f"--- Round {e.get('round')} ---",
    EventType.STAIRS_CHANGED: lambda e: "Stair directions changed: " + ", ".join(
        "up" if up else "down" for up in e.get("directions", [])
    ),
    EventType.GAME_OVER: lambda e: f"GAME OVER! Player {e.player_id} captured the flag at {e.get('position')}!",
    EventType.ENTRY_ROLLED: _entry_rolled,
    EventType.ENTERED_MAZE: lambda e: (
        f"{e.player_id} is placed on {e.get('position')} of the maze, which cost {e.get('cost')} "
        f"movement points, and is left with {e.get('points')}."
    ),
    EventType.TURN_SKIPPED: lambda e: (
        f"{e.player_id} is still food poisoned and misses the turn ({e.get('remaining')} left)."
    ),
    EventType.DIRECTION_ROLLED: lambda e: (
        f"{e.player_id} rolls {e.get('face').label} on the direction dice and is facing {e.get('direction').label}."
    ),
    EventType.STATUS_CLEARED: lambda e: f"{e.player_id} has recovered from {e.get('status')}.",
    EventType.MOVED: _moved,
    EventType.BLOCKED: lambda e: (
        f"{e.player_id} cannot move {e.get('direction').label} and remains at {e.get('position')}, "
        f"paying {e.get('penalty')} movement points."
    ),
    EventType.CELL_EFFECT: lambda e: (
        f"{e.player_id} hits a {e.get('kind').value} cell ({e.get('value')}), now at {e.get('points')} points."
    ),
    EventType.STAIR_USED: lambda e: (
        f"{e.player_id} lands on {e.get('origin')} which is a stair cell and takes the stairs to {e.get('destination')}."
    ),
    EventType.POLE_USED: lambda e: (
        f"{e.player_id} lands on {e.get('origin')} which is a pole cell and slides down to {e.get('destination')}."
    ),
    EventType.CAPTURED: lambda e: (
        f"{e.player_id} captured {e.get('captured')} at {e.get('position')}, "
        f"sending them back to {e.get('start_pad')}."
    ),
    EventType.TRANSPORTED: lambda e: (
        f"{e.player_id} movement points are depleted. Transporting to the recovery area at {e.get('position')}."
    ),
    EventType.RECOVERY_EFFECT: _recovery_effect,
}


def format_event(event: GameEvent) -> str:
    """Render one event as a line of text."""
    formatter = _FORMATTERS.get(event.event_type)
    if formatter is None:
        return f"{event.event_type.value}: {event.details}"
    return formatter(event)


def format_player_status(player: Player) -> str:
    if player.in_maze:
        text = f"Player {player.player_id}: {player.position} facing {player.direction.label}"
    else:
        text = f"Player {player.player_id}: Starting area {player.position}"

    text += f" - MP: {player.movement_points}"
    if player.is_poisoned:
        text += f" [POISONED: {player.poisoned_turns} turns]"
    if player.is_disoriented:
        text += f" [DISORIENTED: {player.disoriented_turns} turns]"
    if player.triggered:
        text += " [TRIGGERED: 2x speed]"
    if player.in_recovery:
        text += " [IN RECOVERY AREA]"
    return text + f" (throws: {player.dice_throw_count})"


def format_game_state(game: GameState) -> str:
    lines = [f"=== ROUND {game.round_number} GAME STATE ==="]
    lines.extend(format_player_status(p) for p in game.players)
    lines.append(f"Flag: {game.flag}")
    return "\n".join(lines)
