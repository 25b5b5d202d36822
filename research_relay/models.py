"""Data models for scraped articles."""

from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup


@dataclass
class DocumentHandle:
    """Fully rendered page, ready for extraction."""
    url: str
    html: str

    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")


@dataclass
class RawRow:
    """Fields pulled from one listing row before any filtering."""
    when: str                   # recency token, "" when none matched
    title: str
    href: str                   # first article-detail link, "" when absent
    author: Optional[str] = None
    tag_texts: List[str] = field(default_factory=list)


@dataclass
class ArticleRecord:
    """Represents a research article on the listing page."""
    id: str             # 18+ digit identifier taken from the article link
    title: str
    url: str
    recency_label: str  # "3 小時前" or "10月16日"
    tags: List[str] = field(default_factory=list)  # hashtags, first appearance order

    def hashtag_line(self) -> str:
        return " ".join(self.tags)
