import pytest

from research_relay.models import ArticleRecord


def make_article(article_id: str, title: str = None, tags=None) -> ArticleRecord:
    return ArticleRecord(
        id=article_id,
        title=title or f"Article {article_id}",
        url=f"https://sosovalue.com/tc/research/{article_id}",
        recency_label="5 分鐘前",
        tags=list(tags or []),
    )


@pytest.fixture
def article_factory():
    return make_article
