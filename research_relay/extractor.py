"""Article extraction from the rendered research listing."""

import logging
import re
from datetime import datetime
from typing import List, Optional

from .config import ARTICLE_BASE_URL, ARTICLE_LINK_PREFIX, ROW_SELECTOR
from .models import ArticleRecord, DocumentHandle, RawRow

logger = logging.getLogger(__name__)

RECENCY_PATTERN = re.compile(r"^\s*\d+\s*(秒|分鐘|小時)前|[0-9]+月[0-9]+日")
ARTICLE_ID_PATTERN = re.compile(r"(\d{18,})")
RELATIVE_PAST_MARKER = "前"


def today_label(now: Optional[datetime] = None) -> str:
    """Format a date the way the listing labels same-day posts, e.g. "10月16日"."""
    now = now or datetime.now()
    return f"{now.month}月{now.day}日"


def normalize_hashtag(raw: str) -> Optional[str]:
    """
    Turn an inline tag or ticker label into a hashtag.

    "$btc.x" -> "#BTCX", "# Bitcoin News" -> "#BitcoinNews".
    Labels with neither prefix are not tags and give None.
    """
    raw = raw.strip()
    if raw.startswith("$"):
        symbol = re.sub(r"[\W_]", "", raw[1:]).upper()
        return f"#{symbol}" if symbol else None
    if raw.startswith("#"):
        tag = re.sub(r"\s+", "", raw[1:])
        return f"#{tag}" if tag else None
    return None


def extract_rows(handle: DocumentHandle) -> List[RawRow]:
    """Pull the raw fields out of every article row, in page order."""
    soup = handle.soup()
    rows = []
    for li in soup.select(ROW_SELECTOR):
        text = li.get_text("\n")
        match = RECENCY_PATTERN.search(text)

        title_node = li.select_one("div.font-bold")
        link = li.select_one(f'a[href^="{ARTICLE_LINK_PREFIX}"]')
        author_node = li.select_one("span.text-neutral-fg-3-rest")

        rows.append(RawRow(
            when=match.group(0) if match else "",
            title=title_node.get_text().strip() if title_node else "",
            href=link.get("href", "") if link else "",
            author=author_node.get_text().strip() if author_node else None,
            tag_texts=[a.get_text().strip() for a in li.select("div.flex a")],
        ))
    return rows


def _collect_tags(row: RawRow) -> List[str]:
    tags = []
    if row.author:
        tags.append("#" + re.sub(r"\s+", "", row.author))
    for text in row.tag_texts:
        tag = normalize_hashtag(text)
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def is_recent(when: str, today: str) -> bool:
    """True for relative labels ("5 分鐘前") and for today's date label."""
    return bool(when) and (RELATIVE_PAST_MARKER in when or when == today)


def extract_articles(handle: DocumentHandle, today: str) -> List[ArticleRecord]:
    """
    Build article records for the rows published today.

    Args:
        handle: Rendered listing page.
        today: Label for the current local date, see today_label().

    Returns:
        Records newest-first, in page order. Rows without a title, without an
        article id, or with an older date label are dropped.
    """
    raw_rows = extract_rows(handle)
    articles = []
    for row in raw_rows:
        id_match = ARTICLE_ID_PATTERN.search(row.href)
        article_id = id_match.group(1) if id_match else ""
        if not row.title or not article_id or not is_recent(row.when, today):
            continue
        articles.append(ArticleRecord(
            id=article_id,
            title=row.title,
            url=f"{ARTICLE_BASE_URL}{article_id}",
            recency_label=row.when,
            tags=_collect_tags(row),
        ))

    if not raw_rows:
        logger.warning("No article rows found on the page")
    logger.info(f"Extracted {len(articles)} recent articles from {len(raw_rows)} rows")
    return articles
