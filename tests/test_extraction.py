"""
Test suite for word extraction from serialized page markup.

Covers the extraction script's return value checks, HTML parsing and the
16-word requirement.
"""

import pytest
from pydantic import ValidationError

from connections_helper.errors import IncompleteExtraction, ParseError, ScriptExecutionError
from connections_helper.fetcher import FetchConfig, WordSet, extract_words, parse_words
from connections_helper.fetcher.extraction import (
    EXTRACTION_SCRIPT,
    check_markup,
    normalize_word,
    script_arguments,
)


WORDS = [
    "BASS", "FLOUNDER", "SOLE", "PIKE",
    "DRUM", "HORN", "HARP", "ORGAN",
    "KEY", "LOCK", "BOLT", "LATCH",
    "ICE CREAM", "PIE", "CAKE", "TART",
]


def tile(index: int, word: str, cls: str = "item") -> str:
    """Markup for one tile as XMLSerializer returns it."""
    return (
        f'<div xmlns="http://www.w3.org/1999/xhtml" id="item-{index}" class="{cls}" '
        f'data-flip-id="{word}">{word}</div>'
    )


def markup_for(words) -> str:
    return "".join(tile(i, w) for i, w in enumerate(words))


class TestExtractionScript:
    """Test the script shipped to the page."""

    def test_script_uses_id_prefix_argument(self):
        assert "getElementById(prefix + i)" in EXTRACTION_SCRIPT
        assert "XMLSerializer" in EXTRACTION_SCRIPT

    def test_script_arguments(self):
        config = FetchConfig(id_prefix="card-")
        assert script_arguments(config) == {"prefix": "card-", "count": 16}


class TestCheckMarkup:
    """Test validation of the raw script result."""

    @pytest.mark.parametrize("result", [None, 42, ["<div/>"], {"html": ""}])
    def test_non_string_result(self, result):
        with pytest.raises(ScriptExecutionError):
            check_markup(result)

    @pytest.mark.parametrize("result", ["", "   \n"])
    def test_empty_result(self, result):
        with pytest.raises(ScriptExecutionError, match="no markup"):
            check_markup(result)

    def test_markup_passes_through(self):
        assert check_markup("<div></div>") == "<div></div>"


class TestParseWords:
    """Test HTML parsing of the serialized tiles."""

    def test_words_in_document_order(self):
        assert parse_words(markup_for(WORDS)) == WORDS

    def test_text_is_trimmed_and_collapsed(self):
        markup = '<div class="item">\n  ICE\n   CREAM  </div>'
        assert parse_words(markup) == ["ICE CREAM"]

    def test_nested_text_is_joined(self):
        markup = '<div class="item"><span>HOT</span><span>DOG</span></div>'
        assert parse_words(markup) == ["HOT DOG"]

    def test_only_selector_matches_count(self):
        markup = tile(0, "KEEP") + '<span class="item">SKIP</span>' + tile(1, "ALSO", cls="other")
        assert parse_words(markup, "div.item") == ["KEEP"]

    def test_custom_selector(self):
        markup = '<button class="card">ONE</button><button class="card">TWO</button>'
        assert parse_words(markup, "button.card") == ["ONE", "TWO"]

    def test_invalid_selector_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_words(markup_for(WORDS), "div[")

    def test_normalize_word(self):
        assert normalize_word("  a \t b\n") == "a b"
        assert normalize_word("") == ""
        assert normalize_word(None) == ""


class TestExtractWords:
    """Test the full markup to WordSet step."""

    def test_sixteen_words(self):
        config = FetchConfig()
        words = extract_words(markup_for(WORDS), config)
        assert isinstance(words, WordSet)
        assert words.words == tuple(WORDS)
        assert len(words) == 16
        assert words.source_url == config.url

    def test_fifteen_words_is_incomplete(self):
        with pytest.raises(IncompleteExtraction, match="found 15"):
            extract_words(markup_for(WORDS[:15]), FetchConfig())

    def test_seventeen_words_is_incomplete(self):
        """More tiles than expected means the page changed shape."""
        with pytest.raises(IncompleteExtraction):
            extract_words(markup_for(WORDS + ["EXTRA"]), FetchConfig())

    def test_empty_tile_is_incomplete(self):
        words = list(WORDS)
        words[5] = "   "
        with pytest.raises(IncompleteExtraction):
            extract_words(markup_for(words), FetchConfig())

    def test_no_matching_elements(self):
        markup = "".join(tile(i, w, cls="card") for i, w in enumerate(WORDS))
        with pytest.raises(IncompleteExtraction, match="found 0"):
            extract_words(markup, FetchConfig())

    def test_script_failure_value(self):
        with pytest.raises(ScriptExecutionError):
            extract_words(None, FetchConfig())


class TestWordSet:
    """Test the WordSet model's invariants."""

    def test_requires_sixteen_words(self):
        with pytest.raises(ValidationError):
            WordSet(words=WORDS[:15])

    def test_rejects_blank_words(self):
        with pytest.raises(ValidationError):
            WordSet(words=WORDS[:15] + [""])

    def test_is_frozen(self):
        words = WordSet(words=WORDS)
        with pytest.raises(ValidationError):
            words.source_url = "https://example.com"

    def test_word_list_is_immutable(self):
        source = list(WORDS)
        words = WordSet(words=source)
        assert isinstance(words.words, tuple)
        with pytest.raises(AttributeError):
            words.words.append("EXTRA")
        source.append("EXTRA")
        assert len(words) == 16

    def test_defaults(self):
        words = WordSet(words=WORDS)
        assert words.attempts == 1
        assert words.fetched_at
