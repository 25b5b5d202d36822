"""Configuration management."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .novelty import POLICIES

load_dotenv()


# Source site constants
LISTING_URL = "https://sosovalue.com/tc/research"
ARTICLE_LINK_PREFIX = "/tc/news/"
ARTICLE_BASE_URL = "https://sosovalue.com/tc/research/"
ROW_SELECTOR = "li.MuiTimelineItem-root"
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


@dataclass
class TelegramConfig:
    """Telegram Bot API configuration."""
    token: str
    chat_id: str
    api_base: str = "https://api.telegram.org"
    timeout_seconds: float = 30.0


@dataclass
class ScraperConfig:
    """Headless browser settings for the listing page."""
    url: str = LISTING_URL
    user_agent: str = MOBILE_USER_AGENT
    scroll_wait_seconds: float = 1.5
    stable_rounds: int = 3  # unchanged row counts before scrolling stops


@dataclass
class SchedulerConfig:
    """Scheduler and delivery pacing configuration."""
    interval_minutes: int = 15
    novelty_policy: str = "prefix"  # "prefix" or "latest"
    send_delay_seconds: float = 1.0
    batch_size: int = 20


@dataclass
class AppConfig:
    """Complete application configuration."""
    state_path: str
    telegram: TelegramConfig
    scraper: ScraperConfig
    scheduler: SchedulerConfig


def load_config() -> AppConfig:
    """
    Load configuration from environment variables.

    Raises:
        ValueError: If required configuration values are missing or invalid.
    """
    token = os.getenv("TELEGRAM_TOKEN")
    chat_id = os.getenv("TELEGRAM_CHAT_ID")

    missing = []
    if not token:
        missing.append("TELEGRAM_TOKEN")
    if not chat_id:
        missing.append("TELEGRAM_CHAT_ID")
    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    novelty_policy = os.getenv("NOVELTY_POLICY", "prefix").strip().lower()
    if novelty_policy not in POLICIES:
        raise ValueError(
            f"NOVELTY_POLICY must be one of {', '.join(POLICIES)}, got '{novelty_policy}'"
        )

    interval_minutes = int(os.getenv("CHECK_INTERVAL_MINUTES", "15"))
    batch_size = int(os.getenv("BATCH_SIZE", "20"))
    if interval_minutes < 1 or batch_size < 1:
        raise ValueError("CHECK_INTERVAL_MINUTES and BATCH_SIZE must be positive")

    return AppConfig(
        state_path=os.getenv("STATE_PATH", "last_article_id.txt"),
        telegram=TelegramConfig(
            token=token,
            chat_id=chat_id,
            api_base=os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org").rstrip("/"),
            timeout_seconds=float(os.getenv("TELEGRAM_TIMEOUT_SECONDS", "30")),
        ),
        scraper=ScraperConfig(),
        scheduler=SchedulerConfig(
            interval_minutes=interval_minutes,
            novelty_policy=novelty_policy,
            send_delay_seconds=float(os.getenv("SEND_DELAY_SECONDS", "1.0")),
            batch_size=batch_size,
        ),
    )
