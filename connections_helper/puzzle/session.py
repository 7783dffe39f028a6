from typing import Callable, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..errors import InvalidOperation
from ..fetcher.browser import fetch_sync
from ..fetcher.models import FetchConfig, FetchResult, WordSet
from .board import Puzzle
from .commands import Command
from .models import AppConfig, Status


Fetcher = Callable[[FetchConfig], FetchResult]
StatusListener = Callable[["Session"], None]


def default_fetcher(config: FetchConfig, verbose: bool = False) -> FetchResult:
    """Fetch the configured puzzle page with a headless browser."""
    return fetch_sync(config.url, config, verbose=verbose)


class Session(BaseModel):
    """
    Top-level orchestrator for one app session.

    Runs the fetch once, holds the resulting words, and only builds the
    Puzzle after a successful fetch. A failed fetch leaves the session in
    the "failed" state until retry() is called.

    Attributes:
        config: Session configuration
        status: loading, ready, failed or playing
        words: The fetched word set, once available
        error: Message of the last fetch failure
        error_type: Exception class name of the last fetch failure
        puzzle: The puzzle, once started
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: AppConfig = Field(default_factory=AppConfig)
    status: Status = "loading"
    words: Optional[WordSet] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    fetch_attempts: int = 0
    puzzle: Optional[Puzzle] = None
    fetcher: Fetcher = default_fetcher
    _listeners: List[StatusListener] = PrivateAttr(default_factory=list)

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener called whenever the status changes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_status(self, status: Status) -> None:
        self.status = status
        for listener in list(self._listeners):
            listener(self)

    def load(self) -> FetchResult:
        """
        Run the fetcher once and record its outcome.

        An exception escaping the fetcher is recorded as a failed fetch, so
        the session never stays in "loading" after this returns.

        Returns:
            The FetchResult from the fetcher

        Raises:
            InvalidOperation: If a puzzle is already being played
        """
        if self.status == "playing":
            raise InvalidOperation("Cannot reload while a puzzle is in progress")

        self._set_status("loading")
        try:
            result = self.fetcher(self.config.fetch)
        except Exception as e:
            result = FetchResult(ok=False, error=str(e), error_type=type(e).__name__, attempts=1)
        self.fetch_attempts += result.attempts

        if result.ok and result.words is not None:
            self.words = result.words
            self.error = None
            self.error_type = None
            self._set_status("ready")
        else:
            self.words = None
            self.error = result.error or "Unknown fetch failure"
            self.error_type = result.error_type
            self._set_status("failed")

        return result

    def retry(self) -> FetchResult:
        """Fetch again after a failure."""
        if self.status != "failed":
            raise InvalidOperation(f"Nothing to retry (status is {self.status})")
        return self.load()

    def start(self) -> Puzzle:
        """
        Build the puzzle from the fetched words.

        Raises:
            InvalidOperation: If the words have not been fetched
        """
        if self.status != "ready" or self.words is None:
            raise InvalidOperation(f"Cannot start puzzle (status is {self.status})")

        self.puzzle = Puzzle.create(self.words.words, seed=self.config.seed)
        self._set_status("playing")
        return self.puzzle

    def execute(self, command: Command) -> None:
        """
        Apply a parsed command to the puzzle.

        Swaps are only allowed between tiles in unlocked rows; locked
        tiles are not draggable.

        Raises:
            InvalidOperation: If the command is not valid in the current state
        """
        if command.name == "retry":
            self.retry()
            return

        if command.name in ("help", "quit"):
            return

        if self.puzzle is None:
            raise InvalidOperation("No puzzle in progress")

        puzzle = self.puzzle
        if command.name == "swap":
            i, j = command.indices
            self._check_movable(i)
            self._check_movable(j)
            puzzle.swap(i, j)
        elif command.name == "move":
            first, second = command.words
            for word in (first, second):
                index = puzzle.index_of(word)
                if index is None:
                    raise InvalidOperation(f"'{word}' is not on the board")
                self._check_movable(index)
            puzzle.swap_words(first, second)
        elif command.name == "lock":
            puzzle.toggle_lock(command.indices[0])
        elif command.name == "shuffle":
            puzzle.shuffle()

    def _check_movable(self, index: int) -> None:
        row = Puzzle.row_of(index)
        if self.puzzle.is_row_locked(row):
            raise InvalidOperation(f"Tile {index + 1} is in locked row {row + 1}")

    def get_state(self) -> Dict:
        """
        Get the current session state.

        Returns:
            Dictionary containing session state
        """
        return {
            "status": self.status,
            "words": list(self.words.words) if self.words else None,
            "error": self.error,
            "error_type": self.error_type,
            "fetch_attempts": self.fetch_attempts,
            "puzzle": self.puzzle.get_state() if self.puzzle else None,
        }
