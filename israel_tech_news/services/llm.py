"""
LLM Service Module.

This module provides the SearchService class, which asks the Google Gemini API,
grounded with Google Search, for the most recent news article on a topic.
"""

import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from israel_tech_news.errors import SearchError

logger = logging.getLogger(__name__)


class SearchService:
    """
    Service for web-search grounded queries against the Google Gemini API.

    The client is created once with the API key and API version; every query
    is a single generate_content call with the Google Search tool enabled.
    """

    _PROMPT = """Search for the most recent tech news article about: {query}.

Return ONLY a JSON object (no markdown, no backticks):
{{
  "title": "exact article title",
  "description": "2-3 sentence summary focusing on key facts",
  "url": "full article URL",
  "source": "publication name",
  "date": "YYYY-MM-DD format"
}}"""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        max_output_tokens: int = 1000,
        api_version: str = "v1beta",
        thinking_budget: int = 0,
    ):
        self.model = model
        self.max_output_tokens = max_output_tokens
        self.thinking_budget = thinking_budget
        self.client: Optional[genai.Client] = None
        try:
            self.client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(api_version=api_version),
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Failed to initialize Gemini client: %s", e)
            self.client = None

    def build_prompt(self, query: str) -> str:
        """Returns the search prompt for a query."""
        return self._PROMPT.format(query=query)

    def _collect_text(self, response: Any) -> str:
        """Joins the text parts of the first candidate."""
        candidates = getattr(response, "candidates", None)
        if not candidates:
            return ""
        if candidates[0].finish_reason == types.FinishReason.MAX_TOKENS:
            raise SearchError(
                f"Response truncated at max_output_tokens={self.max_output_tokens}"
            )
        content = candidates[0].content
        if content is None or not content.parts:
            return ""

        texts: List[str] = []
        for part in content.parts:
            if getattr(part, "thought", False):
                continue
            if part.text:
                texts.append(part.text)
        return "\n".join(texts)

    def search(self, query: str) -> str:
        """Runs one grounded search and returns the raw model text."""
        if not self.client:
            raise SearchError("Gemini client not initialized.")

        response = self.client.models.generate_content(
            model=self.model,
            contents=self.build_prompt(query),
            config=types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
                max_output_tokens=self.max_output_tokens,
                # Thinking tokens count against max_output_tokens
                thinking_config=types.ThinkingConfig(
                    thinking_budget=self.thinking_budget
                ),
            ),
        )
        return self._collect_text(response)
