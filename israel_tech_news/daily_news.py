"""
Israel Tech News Agent
This script searches for recent Israel-related tech news with Google Gemini,
archives the articles as dated Markdown, indexes them in the README,
and pushes each one to a Notion database.
"""

import datetime
import json
import logging
import sys
from typing import Optional

from israel_tech_news.collector import ArticleCollector
from israel_tech_news.config import Settings, load_settings
from israel_tech_news.errors import ConfigError
from israel_tech_news.models import RunSummary
from israel_tech_news.parsers.article import ArticleJSONParser
from israel_tech_news.services.archive import ArchiveService
from israel_tech_news.services.db import NotionPublisher, count_successes
from israel_tech_news.services.llm import SearchService

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configures process-wide logging."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def write_summary(path: str, summary: RunSummary) -> None:
    """Persists the run summary as JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)


def run(
    settings: Settings,
    now: Optional[datetime.datetime] = None,
) -> Optional[RunSummary]:
    """
    Runs collection, archiving and publishing once.

    Returns the run summary, or None when no articles were found.
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)

    search_service = SearchService(
        settings.gemini_api_key,
        model=settings.model,
        max_output_tokens=settings.max_output_tokens,
        thinking_budget=settings.thinking_budget,
        api_version=settings.api_version,
    )
    collector = ArticleCollector(
        search_service,
        ArticleJSONParser(),
        settings.queries,
        delay=settings.query_delay,
    )
    articles = collector.collect()

    if not articles:
        logger.warning("No articles found. Exiting.")
        return None

    archive = ArchiveService(
        archive_dir=settings.archive_dir,
        index_path=settings.index_path,
        title=settings.archive_title,
        tagline=settings.archive_tagline,
        index_header=settings.index_header,
    )
    archive.save(articles, now.date())

    publisher = NotionPublisher(settings.notion_token, settings.notion_database_id)
    results = publisher.publish(articles)
    success_count = count_successes(results)
    logger.info(
        "Complete! %d/%d articles pushed to Notion", success_count, len(articles)
    )

    summary: RunSummary = {
        "date": now.isoformat(),
        "articlesFound": len(articles),
        "articlesPublished": success_count,
    }
    write_summary(settings.summary_path, summary)
    return summary


def main() -> None:
    """Main execution entry point."""
    configure_logging()
    logger.info("Israel Tech News Agent Starting...")

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("Error: %s", e)
        sys.exit(1)

    try:
        run(settings)
    except Exception:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
