"""
Mazerun CLI - Command-line interface for the engine.

Usage:
    mazerun play [--level DIR] [--seed N]    Play a full game and print it
    mazerun validate DIR                      Validate a level directory
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Mazerun - three-floor maze board game simulator",
        prog="mazerun",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a full game")
    play_parser.add_argument("--level", help="Level directory (built-in level if omitted)")
    play_parser.add_argument("--seed", type=int, help="Random seed (overrides seed.txt)")
    play_parser.add_argument("--max-rounds", type=int, default=None, help="Stop after this many rounds")
    play_parser.add_argument("--quiet", "-q", action="store_true", help="Only print the result")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a level directory")
    validate_parser.add_argument("level_dir", help="Path to level directory")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "validate":
        return cmd_validate(args)
    else:
        parser.print_help()
        return 1


def cmd_play(args):
    """Play a game and print its event log."""
    from .level import LevelValidationError, default_level, load_level
    from .session import GameLoop, format_event, format_game_state, new_game

    try:
        level = load_level(args.level) if args.level else default_level()
        game = new_game(level, random_seed=args.seed)
    except (FileNotFoundError, LevelValidationError) as e:
        print(f"Error: {e}")
        for error in getattr(e, "errors", []):
            print(f"  - {error}")
        return 1

    print("=== MAZE RUNNER ===")
    print(f"Seed: {game.random_seed}")
    print(f"Flag location: {game.flag}\n")

    printed = 0

    def on_round_end(state, round_result):
        nonlocal printed
        if not args.quiet:
            for event in state.events[printed:]:
                print(format_event(event))
        printed = len(state.events)
        if not state.game_over and state.round_number % state.rules.status_report_interval == 0:
            print("\n" + format_game_state(state) + "\n")

    result = GameLoop(game).run(max_rounds=args.max_rounds, on_round_end=on_round_end)

    print()
    if result.winner:
        print(f"CONGRATULATIONS PLAYER {result.winner}! YOU WON THE GAME IN ROUND {result.rounds}!")
    else:
        print(f"No winner after {result.rounds} rounds.")
    print(format_game_state(game))
    return 0


def cmd_validate(args):
    """Validate a level directory."""
    from .level import LevelValidationError, load_level, validate_level

    print(f"Validating: {args.level_dir}")
    try:
        level = load_level(args.level_dir)
    except (FileNotFoundError, LevelValidationError) as e:
        print(f"Error: {e}")
        for error in getattr(e, "errors", []):
            print(f"  - {error}")
        return 1

    result = validate_level(level)
    print(f"Stairs: {len(level.stairs)}, poles: {len(level.poles)}, walls: {len(level.walls)}")

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors:
            print(f"  - {e}")
        return 1

    print("Level is valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
