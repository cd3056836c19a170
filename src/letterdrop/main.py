"""
Main entry point for playing Letter Drop in a terminal.

Usage:
    python -m letterdrop.main config.yaml
    python -m letterdrop.main config.yaml --output results/game.json --verbose
    python -m letterdrop.main --script moves.txt --seed 7 --verbose
    python -m letterdrop.main --interactive
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .engine import GameConfig, GameSession, parse_script


PROMPT = "> "


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def load_script(script_path: str) -> list[str]:
    """Read a command script, failing on lines that do not parse."""
    path = Path(script_path)

    if not path.exists():
        raise FileNotFoundError(f"Script not found: {script_path}")

    text = path.read_text()
    commands, errors = parse_script(text)
    if errors:
        details = "; ".join(f"line {e.line}: {e.message}" for e in errors)
        raise ValueError(f"Invalid script: {details}")

    return [command.raw for command in commands]


def play_interactive(session: GameSession) -> None:
    """Read commands from stdin until EOF or 'quit'."""
    print("Commands: drop [COL], left, right, select COL ROW, extend COL ROW, end,")
    print("          trace C,R C,R ..., submit, delete, clear, reset, quit")
    print()
    game = session.game
    print(f"Active: {game.active_letter}  Next: {game.next_letter}  Cursor: {game.cursor}")
    print(game.render())

    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            break

        if line.strip().lower() in ("quit", "exit", "q"):
            break
        if not line.strip():
            continue

        record = session.execute(line)
        session.print_move(record)


def main():
    parser = argparse.ArgumentParser(
        description="Play Letter Drop",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  seed: 42
  word_list: words.txt
  commands:
    - drop 3
    - drop 3
    - drop 4
    - trace 3,7 3,6 4,7
    - submit
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--script", "-s",
        help="Read commands from a file (one per line) instead of the config"
    )
    parser.add_argument(
        "--word-list", "-w",
        help="Word list to validate against (overrides config)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for letters (overrides config)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Read commands from stdin after any scripted commands"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print each move and the grid to stdout"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config) if args.config else GameConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.word_list:
        config.word_list = args.word_list
    if args.seed is not None:
        config.seed = args.seed
    if args.output:
        config.output = args.output

    try:
        if args.script:
            config.commands = load_script(args.script)
    except Exception as e:
        print(f"Error loading script: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.commands and not args.interactive:
        print("Error: no commands to run (use a config, --script or --interactive)", file=sys.stderr)
        sys.exit(1)

    # Determine output path
    if config.output:
        output_path = Path(config.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("results") / f"game_{timestamp}.json"

    try:
        session = GameSession.create(config=config)
        # Scripted moves must see a loaded dictionary to be reproducible
        if config.commands:
            session.wait_for_lexicon()
    except Exception as e:
        print(f"Error loading word list: {e}", file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        print(f"Word list: {config.word_list or '(bundled)'}")
        print(f"Output: {output_path}")
        print()

    try:
        result = session.run(verbose=args.verbose)
        if args.interactive:
            play_interactive(session)
            session.end_reason = "Interactive session ended"
            result = session.run(lines=[])
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        session.end_reason = "Interrupted by user"
        result = session.get_result()

    session.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    # Print summary
    print()
    print("=== Game Summary ===")
    print(f"Moves: {result.total_moves}")
    print(f"Words: {', '.join(result.words_found) or '(none)'}")
    print(f"Score: {result.final_state.score}")
    print(f"Delete credits: {result.final_state.delete_credits}")
    print(f"End reason: {result.end_reason}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
