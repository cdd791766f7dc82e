"""
Base classes and interfaces for response parsers.

This module defines the contract that all search response parsers must follow.
"""

from typing import Protocol
from israel_tech_news.models import Article


class ResponseParser(Protocol):
    """
    Protocol for response parsers.

    Classes implementing this protocol turn the raw text returned by the
    search provider into a single Article, or raise ArticleDecodeError.
    """

    def parse(self, text: str) -> Article:
        """Decodes one article from provider output."""
