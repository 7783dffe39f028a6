"""Exception hierarchy for Connections Helper."""


class ConnectionsHelperError(Exception):
    """Base exception for all application failures."""


class FetchError(ConnectionsHelperError):
    """Raised when today's words could not be retrieved."""

    attempts: int = 0


class PageLoadError(FetchError):
    """Raised when the puzzle page fails to navigate or render."""


class LoadTimeout(PageLoadError):
    """Raised when the page never signals that loading completed."""


class ScriptExecutionError(FetchError):
    """Raised when the injected extraction script throws or returns nothing usable."""


class ParseError(FetchError):
    """Raised when the serialized markup cannot be parsed."""


class IncompleteExtraction(FetchError):
    """Raised when the page did not yield exactly 16 words."""


class PuzzleError(ConnectionsHelperError):
    """Base exception for puzzle state failures."""


class InvalidOperation(PuzzleError):
    """Raised when a puzzle operation is called with invalid arguments or state."""


class CommandError(PuzzleError):
    """Raised when a user command cannot be parsed."""
