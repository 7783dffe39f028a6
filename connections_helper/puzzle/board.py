import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..errors import InvalidOperation
from .models import (
    Action,
    Color,
    PuzzleEvent,
    PuzzleSnapshot,
    ROW_COLORS,
    ROW_COUNT,
    ROW_SIZE,
    TILE_COUNT,
)


Listener = Callable[[PuzzleEvent], None]


class Puzzle(BaseModel):
    """
    Manages the tile arrangement for one puzzle.

    The 16 words sit in a flat grid read as four rows of four. Rows can be
    locked, which moves them into a locked block at the top of the grid,
    and the tiles of unlocked rows can be shuffled.

    Invariant: locked rows are always the contiguous prefix rows[0..k).
    Each row carries its color with it when rows trade places.

    Attributes:
        seed: Optional random seed for reproducible shuffles
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    seed: Optional[int] = None
    _grid: List[str] = PrivateAttr(default_factory=list)
    _locked: List[bool] = PrivateAttr(default_factory=lambda: [False] * ROW_COUNT)
    _colors: List[Color] = PrivateAttr(default_factory=lambda: list(ROW_COLORS))
    _listeners: List[Listener] = PrivateAttr(default_factory=list)
    _rng: random.Random = PrivateAttr(default=None)

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @classmethod
    def create(cls, words: Sequence[str], seed: Optional[int] = None) -> "Puzzle":
        """
        Factory method to create a puzzle from a list of 16 words.

        Args:
            words: The 16 puzzle words in starting order
            seed: Optional random seed for reproducible shuffles

        Returns:
            An initialized Puzzle

        Raises:
            InvalidOperation: If words does not hold exactly 16 entries
        """
        puzzle = cls(seed=seed)
        puzzle.initialize(words)
        return puzzle

    # Observers

    @property
    def grid(self) -> Tuple[str, ...]:
        return tuple(self._grid)

    @property
    def locked(self) -> Tuple[bool, ...]:
        return tuple(self._locked)

    @property
    def colors(self) -> Tuple[Color, ...]:
        return tuple(self._colors)

    @property
    def is_initialized(self) -> bool:
        return len(self._grid) == TILE_COUNT

    @property
    def locked_rows(self) -> int:
        """Number of locked rows; they occupy rows 0..locked_rows-1."""
        return sum(self._locked)

    @property
    def is_solved(self) -> bool:
        return all(self._locked)

    @property
    def rows(self) -> List[Tuple[str, ...]]:
        return self.snapshot().rows

    @staticmethod
    def row_of(index: int) -> int:
        """Row that a tile index belongs to."""
        return index // ROW_SIZE

    def is_row_locked(self, row: int) -> bool:
        self._check_row(row)
        return self._locked[row]

    def index_of(self, word: str) -> Optional[int]:
        """Index of the first tile holding `word` (case-insensitive), or None."""
        target = word.strip().casefold()
        for i, tile in enumerate(self._grid):
            if tile.casefold() == target:
                return i
        return None

    def snapshot(self) -> PuzzleSnapshot:
        """Immutable copy of the current grid, lock flags and colors."""
        return PuzzleSnapshot(grid=self.grid, locked=self.locked, colors=self.colors)

    def get_state(self) -> Dict:
        """
        Get the current puzzle state as a dictionary.

        Returns:
            Dictionary containing puzzle state
        """
        return {
            "grid": list(self._grid),
            "locked": list(self._locked),
            "colors": list(self._colors),
            "locked_rows": self.locked_rows,
            "is_solved": self.is_solved,
        }

    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a PuzzleEvent after every operation.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, action: Action, rows: Tuple[int, ...] = ()) -> None:
        event = PuzzleEvent(action=action, snapshot=self.snapshot(), rows=rows)
        for listener in list(self._listeners):
            listener(event)

    # Operations

    def initialize(self, words: Sequence[str]) -> None:
        """
        Reset the puzzle with a new set of 16 words.

        All rows start unlocked and colors return to their fixed order.

        Raises:
            InvalidOperation: If words does not hold exactly 16 entries
        """
        words = list(words)
        if len(words) != TILE_COUNT:
            raise InvalidOperation(
                f"A puzzle needs exactly {TILE_COUNT} words, got {len(words)}"
            )

        self._grid = words
        self._locked = [False] * ROW_COUNT
        self._colors = list(ROW_COLORS)
        self._notify("initialize")

    def swap(self, i: int, j: int) -> None:
        """
        Exchange the tiles at indices i and j.

        Lock state is not consulted; callers decide which tiles may move.

        Raises:
            InvalidOperation: If either index is outside 0..15
        """
        self._check_ready()
        self._check_index(i)
        self._check_index(j)

        self._grid[i], self._grid[j] = self._grid[j], self._grid[i]
        self._notify("swap", (self.row_of(i), self.row_of(j)))

    def swap_words(self, first: str, second: str) -> None:
        """
        Exchange two tiles identified by their words (drag and drop).

        Raises:
            InvalidOperation: If either word is not on the board
        """
        self._check_ready()
        i = self.index_of(first)
        j = self.index_of(second)
        if i is None or j is None:
            missing = first if i is None else second
            raise InvalidOperation(f"'{missing}' is not on the board")
        self.swap(i, j)

    def toggle_lock(self, row: int) -> None:
        """
        Lock an unlocked row or unlock a locked one.

        Locking swaps the row with the first unlocked row and locks that
        slot; unlocking swaps it with the last locked row and unlocks that
        slot. The four tiles move column by column and the colors move with
        them, so the locked block always stays at the top of the grid.

        Raises:
            InvalidOperation: If row is outside 0..3
        """
        self._check_ready()
        self._check_row(row)

        if not self._locked[row]:
            target = self._first_row(locked=False)
            action = "lock"
        else:
            target = self._last_row(locked=True)
            action = "unlock"

        if target is None:
            raise InvalidOperation(f"No row available to {action} row {row}")

        self._colors[target], self._colors[row] = self._colors[row], self._colors[target]
        self._locked[target] = action == "lock"
        self._swap_rows(target, row)
        self._notify(action, (target, row))

    def shuffle(self) -> None:
        """
        Randomly reorder every tile outside the locked block.

        The unlocked tiles are shuffled as one flat sequence, so words can
        move between unlocked rows. Locked tiles never move.
        """
        self._check_ready()
        start = self.locked_rows * ROW_SIZE
        tail = self._grid[start:]
        self._rng.shuffle(tail)
        self._grid = self._grid[:start] + tail
        self._notify("shuffle", tuple(range(self.locked_rows, ROW_COUNT)))

    # Helpers

    def _first_row(self, locked: bool) -> Optional[int]:
        for row in range(ROW_COUNT):
            if self._locked[row] == locked:
                return row
        return None

    def _last_row(self, locked: bool) -> Optional[int]:
        for row in reversed(range(ROW_COUNT)):
            if self._locked[row] == locked:
                return row
        return None

    def _swap_rows(self, a: int, b: int) -> None:
        for col in range(ROW_SIZE):
            i = a * ROW_SIZE + col
            j = b * ROW_SIZE + col
            self._grid[i], self._grid[j] = self._grid[j], self._grid[i]

    def _check_ready(self) -> None:
        if not self.is_initialized:
            raise InvalidOperation("Puzzle has not been initialized")

    @staticmethod
    def _check_index(index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < TILE_COUNT:
            raise InvalidOperation(f"Tile index must be 0-{TILE_COUNT - 1}, got {index!r}")

    @staticmethod
    def _check_row(row: int) -> None:
        if isinstance(row, bool) or not isinstance(row, int) or not 0 <= row < ROW_COUNT:
            raise InvalidOperation(f"Row index must be 0-{ROW_COUNT - 1}, got {row!r}")
