"""
Pydantic models for the puzzle layer.

This module contains the data models (configuration, snapshots, events)
used by the board and the session. The state machine itself lives in
board.py.
"""

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from ..fetcher.models import FetchConfig


# Type aliases
Color = Literal["blue", "red", "green", "orange"]
Action = Literal["initialize", "swap", "lock", "unlock", "shuffle"]
Status = Literal["loading", "ready", "failed", "playing"]

ROW_COLORS: Tuple[Color, ...] = ("blue", "red", "green", "orange")
ROW_SIZE = 4
ROW_COUNT = 4
TILE_COUNT = ROW_SIZE * ROW_COUNT


class PuzzleSnapshot(BaseModel):
    """Read-only copy of the board at one point in time."""
    model_config = ConfigDict(frozen=True)

    grid: Tuple[str, ...]
    locked: Tuple[bool, ...]
    colors: Tuple[Color, ...]

    @property
    def locked_rows(self) -> int:
        """Number of locked rows (the locked prefix length)."""
        return sum(self.locked)

    @property
    def is_solved(self) -> bool:
        """Whether every row has been locked."""
        return all(self.locked)

    @property
    def rows(self) -> List[Tuple[str, ...]]:
        """The grid split into rows of four."""
        return [self.grid[i:i + ROW_SIZE] for i in range(0, len(self.grid), ROW_SIZE)]


class PuzzleEvent(BaseModel):
    """Notification sent to puzzle subscribers after each operation."""
    action: Action
    snapshot: PuzzleSnapshot
    rows: Tuple[int, ...] = ()


class AppConfig(BaseModel):
    """Configuration for an app session."""
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    seed: Optional[int] = None
