"""
Exception types for the Israel Tech News agent.
"""


class NewsAgentError(Exception):
    """Base exception for all agent errors."""


class ConfigError(NewsAgentError):
    """A required setting is missing or invalid."""


class SearchError(NewsAgentError):
    """The search provider could not be queried."""


class ArticleDecodeError(NewsAgentError):
    """Model output could not be decoded into an article."""


class MissingFieldsError(ArticleDecodeError):
    """Decoded output lacks a title or URL, i.e. no article was found."""
