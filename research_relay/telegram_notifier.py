"""Telegram message delivery module."""

import logging
import time
from typing import Callable, List, Sequence

import requests

from .config import TelegramConfig
from .models import ArticleRecord

logger = logging.getLogger(__name__)

BATCH_HEADER = "📢 *今天 24 小時內研究文章（{start}–{end}）*"
SINGLE_HEADER = "📢 *SoSoValue 新文章*"


class TelegramNotifier:
    """Sends Markdown messages to one chat through the Bot API."""

    def __init__(self, config: TelegramConfig, session: requests.Session = None):
        self.config = config
        self.session = session or requests.Session()
        self.endpoint = f"{config.api_base}/bot{config.token}/sendMessage"

    def deliver(self, text: str) -> bool:
        """
        Send one message.

        Failures are logged and reported through the return value; nothing is
        raised and nothing is retried.

        Returns:
            True if Telegram accepted the message.
        """
        payload = {
            "chat_id": self.config.chat_id,
            "text": text,
            "parse_mode": "Markdown",
        }
        try:
            response = self.session.post(
                self.endpoint, json=payload, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as e:
            logger.error(f"Failed to send Telegram message: {e}")
            return False

        if response.status_code != 200:
            logger.error(
                f"Telegram error: {response.status_code} - {response.text}"
            )
            return False
        try:
            ok = response.json().get("ok", False)
        except ValueError:
            ok = False
        if not ok:
            logger.error(f"Telegram rejected message: {response.text}")
            return False

        logger.debug(f"Message preview: {text[:50]}...")
        return True


def _entry(article: ArticleRecord) -> str:
    tags = f"\n{article.hashtag_line()}" if article.tags else ""
    return f"{tags}\n🔗 {article.url}"


def format_batch(articles: Sequence[ArticleRecord], batch_size: int = 20) -> List[str]:
    """
    Render articles as numbered list messages of at most batch_size entries.

    Numbering continues across messages.
    """
    messages = []
    for start in range(0, len(articles), batch_size):
        chunk = articles[start:start + batch_size]
        header = BATCH_HEADER.format(start=start + 1, end=start + len(chunk))
        body = "\n\n".join(
            f"*{start + i + 1}. {article.title}*{_entry(article)}"
            for i, article in enumerate(chunk)
        )
        messages.append(f"{header}\n\n{body}")
    return messages


def format_single(article: ArticleRecord) -> str:
    """Render one newly published article."""
    return f"{SINGLE_HEADER}\n\n*{article.title}*{_entry(article)}"


def send_sequentially(
    notifier: TelegramNotifier,
    messages: Sequence[str],
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Send messages one at a time, pausing after each send.

    Returns:
        Number of messages Telegram accepted.
    """
    delivered = 0
    for index, message in enumerate(messages, start=1):
        if notifier.deliver(message):
            delivered += 1
            logger.info(f"Sent message {index}/{len(messages)}")
        else:
            logger.warning(f"Message {index}/{len(messages)} was not delivered")
        sleep(delay_seconds)
    return delivered


def send_batch(
    notifier: TelegramNotifier,
    articles: Sequence[ArticleRecord],
    batch_size: int,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Send the startup digest of today's articles."""
    return send_sequentially(notifier, format_batch(articles, batch_size), delay_seconds, sleep)


def send_each(
    notifier: TelegramNotifier,
    articles: Sequence[ArticleRecord],
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Send one message per article, in the given order."""
    return send_sequentially(notifier, [format_single(a) for a in articles], delay_seconds, sleep)
