"""
Notion service for publishing collected articles.

This module provides the NotionPublisher class which creates one page per
article in a Notion database.
"""

import logging
from typing import Any, Dict, List, Optional

from notion_client import Client

from israel_tech_news.models import Article, PublishResult

logger = logging.getLogger(__name__)


def _rich_text(content: str) -> List[Dict[str, Any]]:
    return [{"text": {"content": content}}]


class NotionPublisher:
    """Pushes articles to a Notion database, one page each."""

    def __init__(
        self, token: Optional[str], database_id: str, client: Optional[Any] = None
    ):
        self.database_id = database_id
        self.client = client if client is not None else Client(auth=token)

    def build_properties(self, article: Article) -> Dict[str, Any]:
        """Maps an article onto the database's property schema."""
        return {
            "Title": {"title": _rich_text(article["title"])},
            "Description": {"rich_text": _rich_text(article["description"])},
            "URL": {"url": article["url"]},
            "Source": {"rich_text": _rich_text(article["source"])},
            "Date": {"date": {"start": article["date"]}},
        }

    def publish_one(self, article: Article) -> PublishResult:
        """Creates one page. Failures are reported, not raised."""
        try:
            self.client.pages.create(
                parent={"database_id": self.database_id},
                properties=self.build_properties(article),
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("   Failed to push %r: %s", article["title"], e)
            return {"success": False, "article": article["title"], "error": str(e)}

        logger.info("   Pushed to Notion: %s", article["title"])
        return {"success": True, "article": article["title"], "error": None}

    def publish(self, articles: List[Article]) -> List[PublishResult]:
        """Publishes every article in order, continuing past failures."""
        logger.info("Pushing to Notion...")
        return [self.publish_one(article) for article in articles]


def count_successes(results: List[PublishResult]) -> int:
    """Number of articles that made it into Notion."""
    return sum(1 for result in results if result["success"])
