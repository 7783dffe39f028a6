"""Retrieval of the daily puzzle words from the rendered puzzle page."""

from .models import FetchConfig, WordSet, FetchResult, PUZZLE_URL, WORD_COUNT
from .extraction import EXTRACTION_SCRIPT, parse_words, extract_words
from .browser import read_page, load_markup, fetch_words, fetch, fetch_sync

__all__ = [
    # Models
    "FetchConfig",
    "WordSet",
    "FetchResult",
    "PUZZLE_URL",
    "WORD_COUNT",
    # Extraction
    "EXTRACTION_SCRIPT",
    "parse_words",
    "extract_words",
    # Browser
    "read_page",
    "load_markup",
    "fetch_words",
    "fetch",
    "fetch_sync",
]
