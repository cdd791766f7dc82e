"""
Data models for the Israel Tech News agent.
"""

from typing import TypedDict, Optional


class Article(TypedDict):
    """Type definition for an article."""

    title: str
    description: str
    url: str
    source: str
    date: str  # Publish date as reported, YYYY-MM-DD


class PublishResult(TypedDict):
    """Outcome of publishing one article to Notion."""

    success: bool
    article: str
    error: Optional[str]


class RunSummary(TypedDict):
    """Summary persisted after a completed run."""

    date: str
    articlesFound: int
    articlesPublished: int
