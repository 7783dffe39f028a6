from typing import List

from ..puzzle.models import PuzzleSnapshot, ROW_SIZE
from ..puzzle.session import Session


def tile_width(snapshot: PuzzleSnapshot, minimum: int = 8) -> int:
    """Width of one tile cell, wide enough for the longest word."""
    longest = max((len(w) for w in snapshot.grid), default=0)
    return max(minimum, longest)


def render_row(snapshot: PuzzleSnapshot, row: int, width: int) -> str:
    """Render one row: lock marker, color, then numbered tiles."""
    marker = "#" if snapshot.locked[row] else " "
    color = snapshot.colors[row]
    cells = []
    for col in range(ROW_SIZE):
        index = row * ROW_SIZE + col
        word = snapshot.grid[index]
        if snapshot.locked[row]:
            cells.append(f"   {word.upper():<{width}}")
        else:
            cells.append(f"{index + 1:>2} {word:<{width}}")
    return f"{marker} {row + 1} {color:<6} | " + " | ".join(cells)


def render_board(snapshot: PuzzleSnapshot) -> str:
    """
    Render the whole board to a string.

    Locked rows are marked with '#' and shown in upper case without tile
    numbers, since their tiles cannot be moved.
    """
    width = tile_width(snapshot)
    lines: List[str] = [render_row(snapshot, row, width) for row in range(len(snapshot.locked))]

    footer = f"{snapshot.locked_rows}/{len(snapshot.locked)} rows locked"
    if snapshot.is_solved:
        footer += " - all groups locked"
    lines.append("")
    lines.append(footer)
    return "\n".join(lines)


def render_status(session: Session) -> str:
    """Render a one-line description of the session state."""
    if session.status == "loading":
        return "Getting today's Connections..."
    if session.status == "failed":
        kind = f"{session.error_type}: " if session.error_type else ""
        return f"Could not load today's puzzle ({kind}{session.error}). Type 'retry' or 'quit'."
    if session.status == "ready":
        return f"Today's puzzle is ready ({len(session.words)} words)."
    return "Swap words to make connections, then lock each group."
