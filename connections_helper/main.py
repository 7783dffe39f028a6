"""
Main entry point for Connections Helper.

Usage:
    python -m connections_helper.main
    python -m connections_helper.main config.yaml --verbose
    python -m connections_helper.main --seed 7 --timeout 45
"""

import argparse
import functools
import sys
from pathlib import Path
from typing import Callable, Optional

import yaml

from .errors import ConnectionsHelperError
from .fetcher import FetchConfig
from .puzzle import AppConfig, HELP_TEXT, PuzzleEvent, Session, default_fetcher, parse_command
from .utils.grid_visualizer import render_board, render_status


def load_config(config_path: str) -> AppConfig:
    """Load app configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(**data)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return a copy of config with command-line overrides applied."""
    fetch_updates = {}
    if args.url:
        fetch_updates["url"] = args.url
    if args.timeout is not None:
        fetch_updates["load_timeout"] = args.timeout
    if args.retries is not None:
        fetch_updates["retries"] = args.retries
    if args.show_browser:
        fetch_updates["headless"] = False

    fetch = FetchConfig.model_validate({**config.fetch.model_dump(), **fetch_updates})
    updates = {"fetch": fetch}
    if args.seed is not None:
        updates["seed"] = args.seed
    return config.model_copy(update=updates)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch today's NYT Connections words and arrange them in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  seed: 42
  fetch:
    load_timeout: 45
    retries: 2
    backoff_seconds: 2
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (optional)"
    )
    parser.add_argument("--url", help="Puzzle page URL")
    parser.add_argument("--seed", type=int, help="Random seed for shuffles")
    parser.add_argument("--timeout", type=float, help="Page load timeout in seconds")
    parser.add_argument("--retries", type=int, help="Extra fetch attempts after a failure")
    parser.add_argument(
        "--show-browser",
        action="store_true",
        help="Run the browser with a visible window"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )
    return parser


def run(
    session: Session,
    read_line: Optional[Callable[[str], str]] = None,
    verbose: bool = False,
) -> int:
    """
    Drive a session from line-based user input until the user quits.

    Returns:
        Process exit code: 0 after a quit from a loaded puzzle, 1 when the
        user gives up after a failed fetch
    """
    read_line = read_line or input

    if verbose:
        print(f"Loading {session.config.fetch.url}")

    session.load()

    while True:
        if session.status == "failed":
            print(render_status(session), file=sys.stderr)
        elif session.status == "ready":
            print(render_status(session))
            puzzle = session.start()
            puzzle.subscribe(_show)
            print(render_status(session))
            print()
            print(render_board(puzzle.snapshot()))

        try:
            line = read_line("> ")
        except EOFError:
            print()
            break

        command = None
        try:
            command = parse_command(line)
            if command is None:
                continue
            if command.name == "quit":
                break
            if command.name == "help":
                print(HELP_TEXT)
                continue
            session.execute(command)
        except ConnectionsHelperError as e:
            print(f"Error: {e}", file=sys.stderr)

        if command is not None and command.name == "lock" and session.puzzle is not None and session.puzzle.is_solved:
            print("All four groups locked.")

    return 1 if session.status == "failed" else 0


def _show(event: PuzzleEvent) -> None:
    print()
    print(render_board(event.snapshot))


def main(argv: Optional[list] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else AppConfig()
        config = apply_overrides(config, args)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        if args.config:
            print(f"Config: {args.config}")
        print(f"Timeout: {config.fetch.load_timeout:g}s, retries: {config.fetch.retries}")

    session = Session(
        config=config,
        fetcher=functools.partial(default_fetcher, verbose=args.verbose),
    )

    try:
        return run(session, verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"Error during session: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
