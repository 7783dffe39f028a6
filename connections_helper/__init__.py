"""
Connections Helper - fetch the daily NYT Connections words and arrange them.
"""

from .errors import (
    ConnectionsHelperError,
    FetchError,
    PageLoadError,
    LoadTimeout,
    ScriptExecutionError,
    ParseError,
    IncompleteExtraction,
    PuzzleError,
    InvalidOperation,
    CommandError,
)
from .fetcher import FetchConfig, WordSet, FetchResult, fetch, fetch_words, fetch_sync
from .puzzle import Puzzle, PuzzleSnapshot, PuzzleEvent, Session, AppConfig

__all__ = [
    "ConnectionsHelperError",
    "FetchError",
    "PageLoadError",
    "LoadTimeout",
    "ScriptExecutionError",
    "ParseError",
    "IncompleteExtraction",
    "PuzzleError",
    "InvalidOperation",
    "CommandError",
    "FetchConfig",
    "WordSet",
    "FetchResult",
    "fetch",
    "fetch_words",
    "fetch_sync",
    "Puzzle",
    "PuzzleSnapshot",
    "PuzzleEvent",
    "Session",
    "AppConfig",
]
