"""Extraction script and HTML parsing for the puzzle page."""

import re
from typing import Any, List

from bs4 import BeautifulSoup

from ..errors import IncompleteExtraction, ParseError, ScriptExecutionError
from .models import FetchConfig, WordSet, WORD_COUNT


# Runs inside the page. Missing ids contribute nothing, so a short result
# shows up as a word count mismatch after parsing.
EXTRACTION_SCRIPT = """
({ prefix, count }) => {
    const serializer = new XMLSerializer();
    let html = "";
    for (let i = 0; i < count; i++) {
        const el = document.getElementById(prefix + i);
        if (el) {
            html += serializer.serializeToString(el);
        }
    }
    return html;
}
"""


def script_arguments(config: FetchConfig) -> dict:
    """Arguments passed to EXTRACTION_SCRIPT."""
    return {"prefix": config.id_prefix, "count": WORD_COUNT}


def normalize_word(text: str) -> str:
    """Collapse internal whitespace and strip the ends."""
    return re.sub(r"\s+", " ", text or "").strip()


def check_markup(result: Any) -> str:
    """
    Validate the raw value returned by the extraction script.

    Raises:
        ScriptExecutionError: If the value is not a non-empty string
    """
    if not isinstance(result, str):
        raise ScriptExecutionError(
            f"Extraction script returned {type(result).__name__}, expected markup string"
        )
    if not result.strip():
        raise ScriptExecutionError("Extraction script returned no markup")
    return result


def parse_words(markup: str, selector: str = "div.item") -> List[str]:
    """
    Parse serialized markup and return the text of every `selector` match.

    Words come back in document order with whitespace normalised. Elements
    whose text is empty are kept as empty strings so the caller can count them.

    Raises:
        ParseError: If the markup cannot be parsed or the selector is invalid
    """
    try:
        soup = BeautifulSoup(markup, "html.parser")
        elements = soup.select(selector)
    except Exception as exc:
        raise ParseError(f"Could not parse puzzle markup: {exc}") from exc

    return [normalize_word(el.get_text(" ", strip=True)) for el in elements]


def extract_words(result: Any, config: FetchConfig) -> WordSet:
    """
    Turn the extraction script's return value into a WordSet.

    Raises:
        ScriptExecutionError: If the script returned nothing usable
        ParseError: If the markup could not be parsed
        IncompleteExtraction: If the page did not yield exactly 16 words
    """
    markup = check_markup(result)
    words = parse_words(markup, config.word_selector)

    found = [w for w in words if w]
    if len(found) != WORD_COUNT or len(words) != WORD_COUNT:
        raise IncompleteExtraction(
            f"Expected {WORD_COUNT} words matching '{config.word_selector}', "
            f"found {len(found)} non-empty of {len(words)}"
        )

    return WordSet(words=words, source_url=config.url)
