"""
Article collection.

Runs the fixed list of topical queries through the search provider, one at a
time, and keeps every response that decodes into a usable article.
"""

import logging
import time
from typing import Callable, List, Optional, Protocol, Sequence

from israel_tech_news.errors import MissingFieldsError
from israel_tech_news.models import Article
from israel_tech_news.parsers.base import ResponseParser

logger = logging.getLogger(__name__)


class Searcher(Protocol):
    """Anything that turns a query into raw model text."""

    def search(self, query: str) -> str:
        """Runs one search."""


class ArticleCollector:
    """Collects one article per query, skipping queries that fail."""

    def __init__(
        self,
        searcher: Searcher,
        parser: ResponseParser,
        queries: Sequence[str],
        delay: float = 2.0,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.searcher = searcher
        self.parser = parser
        self.queries = list(queries)
        self.delay = delay
        self.sleep = sleep or time.sleep

    def _search_one(self, query: str) -> List[Article]:
        """Returns zero or one article for a query. Never raises."""
        try:
            text = self.searcher.search(query)
            article = self.parser.parse(text)
        except MissingFieldsError:
            logger.info("   No article found for %r", query)
            return []
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("   Error searching %r: %s", query, e)
            return []

        logger.info("   Found: %s", article["title"])
        return [article]

    def collect(self) -> List[Article]:
        """Searches every query in order and returns the found articles."""
        logger.info("Starting search for Israel tech news...")
        articles: List[Article] = []

        for i, query in enumerate(self.queries):
            # Rate limit between provider calls
            if i > 0:
                self.sleep(self.delay)
            logger.info("   Searching: %s...", query)
            articles.extend(self._search_one(query))

        logger.info("Found %d articles total", len(articles))
        return articles
