"""
Archive service module for writing the daily Markdown archive.

This module provides the ArchiveService class which handles:
- Rendering the day's articles as a Markdown document
- Writing it under a year/month directory hierarchy
- Keeping the README index of archive documents up to date
"""

import datetime
import logging
import os
from typing import List

from israel_tech_news.config import DEFAULT_INDEX_HEADER
from israel_tech_news.models import Article

logger = logging.getLogger(__name__)

_ENTRY_PREFIX = "- ["


class ArchiveService:
    """Service for rendering and storing archive documents."""

    def __init__(
        self,
        archive_dir: str = "articles",
        index_path: str = "README.md",
        title: str = "Israel Tech News",
        tagline: str = "",
        index_header: str = DEFAULT_INDEX_HEADER,
    ):
        self.archive_dir = archive_dir
        self.index_path = index_path
        self.title = title
        self.tagline = tagline
        self.index_header = index_header

    def archive_path(self, run_date: datetime.date) -> str:
        """Returns <archive_dir>/<YYYY>/<MM>/<YYYY-MM-DD>.md for a date."""
        return os.path.join(
            self.archive_dir,
            f"{run_date.year:04d}",
            f"{run_date.month:02d}",
            f"{run_date.isoformat()}.md",
        )

    def _render_article(self, number: int, article: Article) -> str:
        return (
            f"## {number}. {article['title']}\n\n"
            f"**Source:** {article['source']}  \n"
            f"**Date:** {article['date']}  \n"
            f"**Link:** [Read Full Article]({article['url']})\n\n"
            f"{article['description']}\n\n"
            "---\n\n"
        )

    def render_markdown(self, articles: List[Article], run_date: datetime.date) -> str:
        """Generates the Markdown document for a run."""
        markdown = f"# {self.title} - {run_date.isoformat()}\n\n"
        if self.tagline:
            markdown += f"> {self.tagline}\n\n"

        for number, article in enumerate(articles, start=1):
            markdown += self._render_article(number, article)
        return markdown

    def save(self, articles: List[Article], run_date: datetime.date) -> str:
        """Writes the archive document, updates the index and returns the path."""
        logger.info("Saving to Markdown...")
        path = self.archive_path(run_date)
        os.makedirs(os.path.dirname(path), exist_ok=True)

        # Same-day reruns overwrite the earlier document
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.render_markdown(articles, run_date))
        logger.info("   Saved to %s", path)

        self.update_index(run_date, len(articles))
        return path

    def index_entry(self, run_date: datetime.date, count: int) -> str:
        """Returns the index line pointing at a run's document."""
        index_dir = os.path.dirname(os.path.abspath(self.index_path))
        target = os.path.relpath(os.path.abspath(self.archive_path(run_date)), index_dir)
        link = "./" + target.replace(os.sep, "/")
        return f"{_ENTRY_PREFIX}{run_date.isoformat()}]({link}) - {count} articles"

    def _read_index(self) -> str:
        try:
            with open(self.index_path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return self.index_header

    def update_index(self, run_date: datetime.date, count: int) -> bool:
        """
        Inserts the run's entry above the existing entries.

        Returns False when an identical line is already present.
        """
        entry = self.index_entry(run_date, count)
        lines = self._read_index().splitlines()

        if entry in lines:
            logger.info("   %s already lists %s", self.index_path, entry)
            return False

        insert_at = next(
            (i for i, line in enumerate(lines) if line.startswith(_ENTRY_PREFIX)),
            None,
        )
        if insert_at is None:
            lines.append(entry)
        else:
            lines.insert(insert_at, entry)

        index_dir = os.path.dirname(self.index_path)
        if index_dir:
            os.makedirs(index_dir, exist_ok=True)
        with open(self.index_path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        logger.info("   Updated %s", self.index_path)
        return True
