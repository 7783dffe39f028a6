"""
Pydantic models for the fetcher layer.

Holds the fetch configuration, the extracted word set and the
success/failure result handed to the session.
"""

from datetime import datetime
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


PUZZLE_URL = "https://www.nytimes.com/games/connections"
WORD_COUNT = 16

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class FetchConfig(BaseModel):
    """Configuration for loading the puzzle page and extracting its words."""
    url: str = PUZZLE_URL
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    load_timeout: float = Field(default=30.0, gt=0)
    id_prefix: str = Field(default="item-", min_length=1)
    word_selector: str = Field(default="div.item", min_length=1)
    retries: int = Field(default=1, ge=0, le=5)
    backoff_seconds: float = Field(default=1.0, ge=0)

    @property
    def load_timeout_ms(self) -> float:
        """Load timeout in milliseconds, the unit Playwright expects."""
        return self.load_timeout * 1000


class WordSet(BaseModel):
    """The 16 words of one puzzle, in page order."""
    model_config = ConfigDict(frozen=True)

    words: Tuple[str, ...]
    source_url: str = PUZZLE_URL
    fetched_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    attempts: int = Field(default=1, ge=1)

    @field_validator("words")
    @classmethod
    def check_word_count(cls, words: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(words) != WORD_COUNT:
            raise ValueError(f"expected {WORD_COUNT} words, got {len(words)}")
        if any(not w.strip() for w in words):
            raise ValueError("words must be non-empty")
        return words

    def __len__(self) -> int:
        return len(self.words)


class FetchResult(BaseModel):
    """Outcome of a fetch: either a word set or the error that stopped it."""
    ok: bool
    words: Optional[WordSet] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    attempts: int = 0
