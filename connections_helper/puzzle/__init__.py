"""Puzzle state and session handling for Connections Helper."""

from .models import (
    Color,
    Action,
    Status,
    PuzzleSnapshot,
    PuzzleEvent,
    AppConfig,
    ROW_COLORS,
    ROW_SIZE,
    ROW_COUNT,
    TILE_COUNT,
)
from .board import Puzzle
from .commands import Command, parse_command, HELP_TEXT
from .session import Session, default_fetcher

__all__ = [
    "Color",
    "Action",
    "Status",
    "PuzzleSnapshot",
    "PuzzleEvent",
    "AppConfig",
    "ROW_COLORS",
    "ROW_SIZE",
    "ROW_COUNT",
    "TILE_COUNT",
    "Puzzle",
    "Command",
    "parse_command",
    "HELP_TEXT",
    "Session",
    "default_fetcher",
]
