"""Unit tests for the article collector and the search service."""

import json
import unittest
from unittest.mock import MagicMock, patch

from google.genai import types

from israel_tech_news.collector import ArticleCollector
from israel_tech_news.errors import SearchError
from israel_tech_news.parsers.article import ArticleJSONParser
from israel_tech_news.services.llm import SearchService


def article_json(n):
    return json.dumps(
        {
            "title": f"Article {n}",
            "description": f"Summary {n}",
            "url": f"https://news.example.com/{n}",
            "source": "Globes",
            "date": "2026-10-15",
        }
    )


class TestArticleCollector(unittest.TestCase):
    def setUp(self):
        self.searcher = MagicMock()
        self.sleep = MagicMock()

    def make_collector(self, queries, delay=2.0):
        return ArticleCollector(
            self.searcher, ArticleJSONParser(), queries, delay=delay, sleep=self.sleep
        )

    def test_collects_in_query_order(self):
        self.searcher.search.side_effect = [
            article_json(1),
            f"```json\n{article_json(2)}\n```",
        ]
        articles = self.make_collector(["q1", "q2"]).collect()

        self.assertEqual([a["title"] for a in articles], ["Article 1", "Article 2"])
        self.assertEqual(
            [c.args[0] for c in self.searcher.search.call_args_list], ["q1", "q2"]
        )

    def test_failures_are_skipped_without_raising(self):
        self.searcher.search.side_effect = [
            RuntimeError("connection reset"),
            "Sorry, nothing recent.",
            "",
            '{"title": "No link"}',
            article_json(5),
        ]
        queries = ["q1", "q2", "q3", "q4", "q5"]
        articles = self.make_collector(queries).collect()

        self.assertEqual(len(articles), 1)
        self.assertEqual(articles[0]["url"], "https://news.example.com/5")
        self.assertEqual(self.searcher.search.call_count, len(queries))

    def test_all_failures_return_empty_list(self):
        self.searcher.search.side_effect = SearchError("Gemini client not initialized.")
        articles = self.make_collector(["q1", "q2", "q3"]).collect()
        self.assertEqual(articles, [])
        self.assertEqual(self.searcher.search.call_count, 3)

    def test_delay_between_every_query(self):
        self.searcher.search.side_effect = [
            "not json",
            article_json(2),
            RuntimeError("boom"),
            article_json(4),
        ]
        self.make_collector(["a", "b", "c", "d"], delay=2.0).collect()

        self.assertEqual(self.sleep.call_count, 3)
        for c in self.sleep.call_args_list:
            self.assertEqual(c.args[0], 2.0)

    def test_missing_fields_not_logged_as_error(self):
        self.searcher.search.return_value = '{"description": "no title"}'
        with self.assertLogs("israel_tech_news.collector", level="INFO") as logs:
            self.make_collector(["q"]).collect()
        self.assertFalse(any(r.levelname == "ERROR" for r in logs.records))


class TestSearchService(unittest.TestCase):
    @patch("israel_tech_news.services.llm.genai.Client")
    def test_search_joins_text_parts(self, mock_client_cls):
        parts = [
            MagicMock(text="```json", thought=False),
            MagicMock(text=None, thought=False),
            MagicMock(text="thinking...", thought=True),
            MagicMock(text='{"title": "T", "url": "https://x.io"}', thought=False),
            MagicMock(text="```", thought=False),
        ]
        response = MagicMock()
        response.candidates = [MagicMock(content=MagicMock(parts=parts))]
        mock_client_cls.return_value.models.generate_content.return_value = response

        service = SearchService("key", model="gemini-test", max_output_tokens=500)
        text = service.search("Israel AI technology news")

        self.assertEqual(text, '```json\n{"title": "T", "url": "https://x.io"}\n```')
        kwargs = mock_client_cls.return_value.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-test")
        self.assertIn("Israel AI technology news", kwargs["contents"])
        self.assertEqual(kwargs["config"].max_output_tokens, 500)
        self.assertIsNotNone(kwargs["config"].tools[0].google_search)

    @patch("israel_tech_news.services.llm.genai.Client")
    def test_search_sets_thinking_budget(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.return_value = MagicMock(
            candidates=[]
        )
        SearchService("key").search("q")
        SearchService("key", thinking_budget=256).search("q")

        calls = mock_client_cls.return_value.models.generate_content.call_args_list
        budgets = [c.kwargs["config"].thinking_config.thinking_budget for c in calls]
        self.assertEqual(budgets, [0, 256])

    @patch("israel_tech_news.services.llm.genai.Client")
    def test_truncated_response_raises(self, mock_client_cls):
        candidate = MagicMock(
            finish_reason=types.FinishReason.MAX_TOKENS,
            content=MagicMock(
                parts=[MagicMock(text='{"title": "T", "u', thought=False)]
            ),
        )
        mock_client_cls.return_value.models.generate_content.return_value = MagicMock(
            candidates=[candidate]
        )
        with self.assertRaises(SearchError) as ctx:
            SearchService("key", max_output_tokens=1000).search("q")
        self.assertIn("max_output_tokens=1000", str(ctx.exception))

    @patch("israel_tech_news.services.llm.genai.Client")
    def test_truncated_response_logged_as_search_error(self, mock_client_cls):
        candidate = MagicMock(
            finish_reason=types.FinishReason.MAX_TOKENS,
            content=MagicMock(parts=[]),
        )
        mock_client_cls.return_value.models.generate_content.return_value = MagicMock(
            candidates=[candidate]
        )
        collector = ArticleCollector(
            SearchService("key"), ArticleJSONParser(), ["q"], sleep=MagicMock()
        )
        with self.assertLogs("israel_tech_news.collector", level="ERROR") as logs:
            self.assertEqual(collector.collect(), [])
        self.assertIn("truncated", logs.output[0])

    @patch("israel_tech_news.services.llm.genai.Client")
    def test_search_without_candidates(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.return_value = MagicMock(
            candidates=[]
        )
        self.assertEqual(SearchService("key").search("q"), "")

    @patch("israel_tech_news.services.llm.genai.Client")
    def test_client_init_failure(self, mock_client_cls):
        mock_client_cls.side_effect = ValueError("bad key")
        service = SearchService("key")
        self.assertIsNone(service.client)
        with self.assertRaises(SearchError):
            service.search("q")

    def test_prompt_requests_json_only(self):
        with patch("israel_tech_news.services.llm.genai.Client"):
            prompt = SearchService("key").build_prompt("Israel tech startups")
        self.assertIn("Israel tech startups", prompt)
        self.assertIn("Return ONLY a JSON object", prompt)
        self.assertIn('"url"', prompt)


if __name__ == "__main__":
    unittest.main()
