"""Parsing of terminal commands into puzzle operations."""

import re
import shlex
from typing import Literal, Optional, Tuple
from pydantic import BaseModel

from ..errors import CommandError
from .models import ROW_COUNT, TILE_COUNT


CommandName = Literal["swap", "move", "lock", "shuffle", "retry", "help", "quit"]

HELP_TEXT = f"""Commands:
  swap I J     swap tiles I and J (1-{TILE_COUNT})
  move A B     swap the tiles holding words A and B
  lock R       lock or unlock row R (1-{ROW_COUNT})
  shuffle      shuffle the tiles in unlocked rows
  retry        fetch the puzzle again after a failure
  help         show this message
  quit         exit"""

_ALIASES = {
    "s": "swap",
    "m": "move",
    "l": "lock",
    "unlock": "lock",
    "sh": "shuffle",
    "h": "help",
    "?": "help",
    "q": "quit",
    "exit": "quit",
}


class Command(BaseModel):
    """A parsed user command. Indices are zero-based."""
    name: CommandName
    indices: Tuple[int, ...] = ()
    words: Tuple[str, ...] = ()


def _parse_number(token: str, upper: int, label: str) -> int:
    if not re.fullmatch(r"\d+", token):
        raise CommandError(f"{label} must be a number, got '{token}'")
    value = int(token)
    if not 1 <= value <= upper:
        raise CommandError(f"{label} must be 1-{upper}, got {value}")
    return value - 1


def parse_command(line: str) -> Optional[Command]:
    """
    Parse one line of user input.

    Tile and row numbers are typed 1-based and returned 0-based.

    Returns:
        The parsed Command, or None for a blank line

    Raises:
        CommandError: If the line is not a valid command
    """
    try:
        tokens = shlex.split(line)
    except ValueError as exc:
        raise CommandError(f"Could not read command: {exc}") from exc
    if not tokens:
        return None

    name = tokens[0].lower()
    name = _ALIASES.get(name, name)
    args = tokens[1:]

    if name == "swap":
        if len(args) != 2:
            raise CommandError("Usage: swap I J")
        i = _parse_number(args[0], TILE_COUNT, "Tile")
        j = _parse_number(args[1], TILE_COUNT, "Tile")
        return Command(name="swap", indices=(i, j))

    if name == "move":
        if len(args) != 2:
            raise CommandError("Usage: move WORD WORD (quote words with spaces)")
        return Command(name="move", words=(args[0], args[1]))

    if name == "lock":
        if len(args) != 1:
            raise CommandError("Usage: lock R")
        return Command(name="lock", indices=(_parse_number(args[0], ROW_COUNT, "Row"),))

    if name in ("shuffle", "retry", "help", "quit"):
        if args:
            raise CommandError(f"'{name}' takes no arguments")
        return Command(name=name)

    raise CommandError(f"Unknown command: '{tokens[0]}' (type 'help')")
