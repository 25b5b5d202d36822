"""Startup digest and fixed-interval polling for new research articles."""

import logging
import threading
import time
from datetime import datetime
from typing import Callable, List, Optional

import schedule

from .config import AppConfig, ScraperConfig, SchedulerConfig
from .extractor import extract_articles, today_label
from .models import ArticleRecord
from .novelty import select_new
from .renderer import render_page
from .state import CursorStore
from .telegram_notifier import TelegramNotifier, send_batch, send_each

logger = logging.getLogger(__name__)

POLL_SLEEP_SECONDS = 5


def scrape_articles(config: ScraperConfig) -> List[ArticleRecord]:
    """Render the listing page and extract today's articles, newest-first."""
    today = today_label()
    with render_page(config) as handle:
        return extract_articles(handle, today)


class ArticleWatcher:
    """
    Runs the startup digest and the incremental checks against one cursor.

    Only one cycle runs at a time; a trigger that arrives while a cycle is
    in progress is skipped.
    """

    def __init__(
        self,
        store: CursorStore,
        notifier: TelegramNotifier,
        config: SchedulerConfig,
        scrape: Callable[[], List[ArticleRecord]],
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.notifier = notifier
        self.config = config
        self.scrape = scrape
        self.sleep = sleep
        self._lock = threading.Lock()

    def _scrape(self) -> List[ArticleRecord]:
        try:
            return self.scrape()
        except Exception as e:
            logger.error(f"Scrape failed: {e}", exc_info=True)
            return []

    def run_startup(self) -> int:
        """
        Send everything published today as numbered digest messages.

        Returns:
            Number of messages delivered.
        """
        articles = self._scrape()
        if not articles:
            logger.warning("No articles published today; skipping startup digest")
            return 0

        delivered = send_batch(
            self.notifier,
            articles,
            self.config.batch_size,
            self.config.send_delay_seconds,
            self.sleep,
        )
        logger.info(f"Startup digest: {len(articles)} articles, {delivered} messages delivered")
        self.store.save(articles[0].id)
        return delivered

    def run_poll(self) -> List[ArticleRecord]:
        """
        Send each article published since the stored cursor, oldest first.

        The cursor advances to the newest dispatched article even when some
        sends failed.

        Returns:
            The articles that were dispatched.
        """
        articles = self._scrape()
        if not articles:
            logger.warning("No articles scraped")
            return []

        cursor = self.store.load()
        fresh = select_new(self.config.novelty_policy, articles, cursor)
        if not fresh:
            logger.info("No new articles since last check")
            return []

        delivered = send_each(self.notifier, fresh, self.config.send_delay_seconds, self.sleep)
        if delivered < len(fresh):
            logger.warning(f"Only {delivered}/{len(fresh)} new articles were delivered")
        for article in fresh:
            logger.info(f"Dispatched: {article.title}")

        self.store.save(fresh[-1].id)
        return fresh

    def run_guarded(self, job: Callable[[], object], name: str) -> Optional[object]:
        """
        Run one cycle under the watcher lock, logging anything it raises.

        Returns:
            The job's result, or None if it was skipped or failed.
        """
        if not self._lock.acquire(blocking=False):
            logger.warning(f"{name} skipped: previous cycle still running")
            return None
        try:
            logger.info(f"{name} started at {datetime.now().isoformat(timespec='seconds')}")
            return job()
        except Exception as e:
            logger.error(f"{name} failed: {e}", exc_info=True)
            return None
        finally:
            self._lock.release()


def build_scheduler(watcher: ArticleWatcher, interval_minutes: int) -> schedule.Scheduler:
    """Create a scheduler that runs the incremental check every interval."""
    scheduler = schedule.Scheduler()
    scheduler.every(interval_minutes).minutes.do(
        watcher.run_guarded, watcher.run_poll, "Scheduled check"
    )
    return scheduler


def create_watcher(config: AppConfig) -> ArticleWatcher:
    """Wire the production collaborators together."""
    return ArticleWatcher(
        store=CursorStore(config.state_path),
        notifier=TelegramNotifier(config.telegram),
        config=config.scheduler,
        scrape=lambda: scrape_articles(config.scraper),
    )


def run_forever(config: AppConfig) -> None:
    """Send the startup digest, then check on the fixed interval until stopped."""
    watcher = create_watcher(config)

    logger.info("Sending startup digest of today's articles...")
    watcher.run_guarded(watcher.run_startup, "Startup digest")

    scheduler = build_scheduler(watcher, config.scheduler.interval_minutes)
    logger.info(f"Scheduler started: checking every {config.scheduler.interval_minutes} minutes")
    while True:
        scheduler.run_pending()
        time.sleep(POLL_SLEEP_SECONDS)
