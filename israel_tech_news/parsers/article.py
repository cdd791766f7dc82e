"""
JSON article parser.

This module provides the ArticleJSONParser class for decoding the JSON object
the model is asked to return.
"""

import json
import re
from typing import Any, Dict

from israel_tech_news.errors import ArticleDecodeError, MissingFieldsError
from israel_tech_news.models import Article
from israel_tech_news.parsers.base import ResponseParser

_FENCE_RE = re.compile(r"```(?:json)?\n?")


class ArticleJSONParser(ResponseParser):
    """Parses a single article JSON object out of model output."""

    def _strip_fences(self, text: str) -> str:
        """Removes Markdown code fences the model adds despite instructions."""
        return _FENCE_RE.sub("", text).strip()

    def _field(self, data: Dict[str, Any], key: str) -> str:
        value = data.get(key)
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    def _required(self, data: Dict[str, Any], key: str) -> str:
        """Returns a required string field, stripped."""
        value = data.get(key)
        if value is None:
            raise MissingFieldsError(f"Response has no {key}")
        if not isinstance(value, str):
            raise ArticleDecodeError(
                f"Expected {key} to be a string, got {type(value).__name__}"
            )
        value = value.strip()
        if not value:
            raise MissingFieldsError(f"Response has an empty {key}")
        return value

    def parse(self, text: str) -> Article:
        """Decodes an Article, raising ArticleDecodeError on bad output."""
        cleaned = self._strip_fences(text or "")
        if not cleaned:
            raise ArticleDecodeError("Empty response")

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ArticleDecodeError(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ArticleDecodeError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        title = self._required(data, "title")
        url = self._required(data, "url")

        # Other fields are passed through unvalidated
        return {
            "title": title,
            "description": self._field(data, "description"),
            "url": url,
            "source": self._field(data, "source"),
            "date": self._field(data, "date"),
        }
