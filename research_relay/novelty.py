"""Decide which scraped articles have not been delivered yet."""

from typing import List, Sequence

from .models import ArticleRecord


def latest_only(articles: Sequence[ArticleRecord], cursor: str) -> List[ArticleRecord]:
    """Only the newest article counts, and only when it differs from the cursor."""
    if not articles or articles[0].id == cursor:
        return []
    return [articles[0]]


def new_since_cursor(articles: Sequence[ArticleRecord], cursor: str) -> List[ArticleRecord]:
    """
    Every article above the cursor in a newest-first listing.

    When the cursor is not in the listing at all, the whole listing is new.

    Returns:
        New articles oldest-first, ready for chronological delivery.
    """
    fresh = []
    for article in articles:
        if article.id == cursor:
            break
        fresh.append(article)
    fresh.reverse()
    return fresh


POLICIES = {
    "prefix": new_since_cursor,
    "latest": latest_only,
}


def select_new(policy: str, articles: Sequence[ArticleRecord], cursor: str) -> List[ArticleRecord]:
    """
    Apply the named novelty policy.

    Raises:
        ValueError: If the policy name is unknown.
    """
    try:
        return POLICIES[policy](articles, cursor)
    except KeyError:
        raise ValueError(f"Unknown novelty policy: {policy}") from None
