"""
Browser-backed fetching of the daily puzzle words.

The puzzle page fills in its tiles with client-side JavaScript, so a plain
HTTP GET only returns an empty shell. The page is loaded in headless
Chromium through Playwright, the extraction script is evaluated once the
page has loaded, and the returned markup is parsed into a WordSet.
"""

import asyncio
from typing import Any, Optional

from playwright.async_api import (
    async_playwright,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from ..errors import FetchError, LoadTimeout, PageLoadError, ScriptExecutionError
from .extraction import EXTRACTION_SCRIPT, extract_words, script_arguments
from .models import FetchConfig, FetchResult, WordSet


async def read_page(page: Page, url: str, config: FetchConfig) -> Any:
    """
    Navigate `page` to `url`, wait for the puzzle to render and run the
    extraction script.

    Args:
        page: An open Playwright page
        url: Puzzle page URL
        config: Fetch configuration (timeouts, element ids)

    Returns:
        The raw value returned by the extraction script

    Raises:
        LoadTimeout: If the page or its first tile never finishes loading
        PageLoadError: If navigation fails for any other reason
        ScriptExecutionError: If the extraction script throws
    """
    timeout = config.load_timeout_ms

    try:
        await page.goto(url, wait_until="load", timeout=timeout)
        await page.wait_for_selector(
            f"#{config.id_prefix}0", state="attached", timeout=timeout
        )
    except PlaywrightTimeoutError as exc:
        raise LoadTimeout(
            f"Page did not finish loading within {config.load_timeout:g}s: {url}"
        ) from exc
    except PlaywrightError as exc:
        raise PageLoadError(f"Failed to load {url}: {exc}") from exc

    try:
        return await page.evaluate(EXTRACTION_SCRIPT, script_arguments(config))
    except PlaywrightError as exc:
        raise ScriptExecutionError(f"Extraction script failed: {exc}") from exc


async def load_markup(url: str, config: FetchConfig) -> Any:
    """
    Launch a browser, read the puzzle page and close the browser again.

    Cancelling the awaiting task closes the browser before the
    cancellation propagates.
    """
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=config.headless)
        except PlaywrightError as exc:
            raise PageLoadError(f"Could not launch browser: {exc}") from exc

        try:
            try:
                context = await browser.new_context(user_agent=config.user_agent)
                page = await context.new_page()
            except PlaywrightError as exc:
                raise PageLoadError(f"Could not open a browser page: {exc}") from exc
            return await read_page(page, url, config)
        finally:
            await browser.close()


async def fetch_words(
    url: Optional[str] = None,
    config: Optional[FetchConfig] = None,
    verbose: bool = False,
) -> WordSet:
    """
    Fetch today's 16 words, retrying failed attempts with exponential backoff.

    Args:
        url: Page to load (defaults to config.url)
        config: Fetch configuration (defaults to FetchConfig())
        verbose: Print progress to stdout

    Returns:
        The extracted WordSet, stamped with the URL and attempt count

    Raises:
        FetchError: The error from the final attempt, with `attempts` set
    """
    config = config or FetchConfig()
    url = url or config.url
    attempts = config.retries + 1

    for attempt in range(1, attempts + 1):
        if verbose:
            print(f"Fetching {url} (attempt {attempt}/{attempts})...")
        try:
            result = await load_markup(url, config)
            words = extract_words(result, config)
        except FetchError as exc:
            exc.attempts = attempt
            if attempt == attempts:
                raise
            delay = config.backoff_seconds * 2 ** (attempt - 1)
            if verbose:
                print(f"Attempt {attempt} failed ({type(exc).__name__}: {exc}), retrying in {delay:g}s")
            await asyncio.sleep(delay)
            continue

        if verbose:
            print(f"Extracted {len(words)} words")
        return words.model_copy(update={"source_url": url, "attempts": attempt})


async def fetch(
    url: Optional[str] = None,
    config: Optional[FetchConfig] = None,
    verbose: bool = False,
) -> FetchResult:
    """
    Fetch today's words and report the outcome as a FetchResult.

    Fetch errors are captured in the result instead of being raised.
    """
    try:
        words = await fetch_words(url, config, verbose)
    except FetchError as exc:
        return FetchResult(
            ok=False,
            error=str(exc),
            error_type=type(exc).__name__,
            attempts=exc.attempts,
        )

    return FetchResult(ok=True, words=words, attempts=words.attempts)


def fetch_sync(
    url: Optional[str] = None,
    config: Optional[FetchConfig] = None,
    verbose: bool = False,
) -> FetchResult:
    """Run fetch() to completion on a fresh event loop."""
    return asyncio.run(fetch(url, config, verbose))
