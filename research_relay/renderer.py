"""Headless browser rendering of the infinite-scroll listing page."""

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from playwright.sync_api import sync_playwright

from .config import ROW_SELECTOR, ScraperConfig
from .models import DocumentHandle

logger = logging.getLogger(__name__)

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--no-zygote",
]


def scroll_until_stable(page, config: ScraperConfig) -> int:
    """
    Scroll to the bottom until the row count stops growing.

    Returns:
        The final number of rows matching ROW_SELECTOR.
    """
    previous = 0
    stable = 0
    while stable < config.stable_rounds:
        page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        time.sleep(config.scroll_wait_seconds)
        current = page.locator(ROW_SELECTOR).count()
        if current == previous:
            stable += 1
        else:
            previous = current
            stable = 0
    return previous


@contextmanager
def render_page(config: ScraperConfig) -> Iterator[DocumentHandle]:
    """
    Load config.url in headless Chromium and scroll it to the end.

    The navigation timeout is unbounded, so a hung page blocks the caller.
    The browser is closed when the block exits, even if extraction raises.

    Yields:
        DocumentHandle with the rendered HTML.
    """
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True, args=BROWSER_ARGS)
        try:
            page = browser.new_page(user_agent=config.user_agent)
            logger.info(f"Loading {config.url}")
            page.goto(config.url, wait_until="networkidle", timeout=0)
            rows = scroll_until_stable(page, config)
            logger.info(f"Scrolling settled with {rows} rows")
            yield DocumentHandle(url=config.url, html=page.content())
        finally:
            browser.close()
