"""Tests for scrolling and browser cleanup, with Playwright faked out."""

import pytest

from research_relay import renderer
from research_relay.config import ScraperConfig


class FakeLocator:
    def __init__(self, page):
        self.page = page

    def count(self):
        return self.page.counts.pop(0) if len(self.page.counts) > 1 else self.page.counts[0]


class FakePage:
    def __init__(self, counts, fail_on_goto=False):
        self.counts = list(counts)
        self.fail_on_goto = fail_on_goto
        self.scrolls = 0
        self.goto_args = None

    def goto(self, url, wait_until=None, timeout=None):
        self.goto_args = (url, wait_until, timeout)
        if self.fail_on_goto:
            raise RuntimeError("net::ERR_NAME_NOT_RESOLVED")

    def evaluate(self, script):
        self.scrolls += 1

    def locator(self, selector):
        return FakeLocator(self)

    def content(self):
        return "<html><body><li class='MuiTimelineItem-root'></li></body></html>"


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False
        self.user_agent = None

    def new_page(self, user_agent=None):
        self.user_agent = user_agent
        return self.page

    def close(self):
        self.closed = True


class FakePlaywright:
    def __init__(self, browser):
        self.chromium = self
        self.browser = browser

    def launch(self, headless=True, args=None):
        return self.browser

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _config():
    return ScraperConfig(scroll_wait_seconds=0)


def test_scroll_stops_after_three_unchanged_counts():
    page = FakePage([10, 20, 20, 20, 20])

    assert renderer.scroll_until_stable(page, _config()) == 20
    assert page.scrolls == 5


def test_render_page_yields_html_and_closes_browser(monkeypatch):
    browser = FakeBrowser(FakePage([1, 1, 1, 1]))
    monkeypatch.setattr(renderer, "sync_playwright", lambda: FakePlaywright(browser))

    with renderer.render_page(_config()) as handle:
        assert "MuiTimelineItem-root" in handle.html

    assert browser.closed
    assert browser.user_agent == _config().user_agent
    assert browser.page.goto_args == (_config().url, "networkidle", 0)


def test_render_page_closes_browser_on_failure(monkeypatch):
    browser = FakeBrowser(FakePage([1], fail_on_goto=True))
    monkeypatch.setattr(renderer, "sync_playwright", lambda: FakePlaywright(browser))

    with pytest.raises(RuntimeError):
        with renderer.render_page(_config()):
            pass

    assert browser.closed


def test_render_page_closes_browser_when_extraction_raises(monkeypatch):
    browser = FakeBrowser(FakePage([1]))
    monkeypatch.setattr(renderer, "sync_playwright", lambda: FakePlaywright(browser))

    with pytest.raises(ValueError):
        with renderer.render_page(_config()):
            raise ValueError("layout changed")

    assert browser.closed
