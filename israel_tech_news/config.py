"""
Configuration loading.

Non-secret settings are read from config.json next to this module, secrets
from the environment. Both are combined once at startup into a Settings value
that is passed to every component.
"""

from dataclasses import dataclass
import json
import logging
import os
from typing import Any, Dict, Mapping, Optional, Tuple

from israel_tech_news.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_QUERIES: Tuple[str, ...] = (
    "Israel tech startups news today",
    "Israeli founders technology latest",
    "Israel venture capital investments recent",
    "Israeli companies technology announcements",
    "Israel AI technology news",
)

DEFAULT_INDEX_HEADER = (
    "# Israel Tech News Archive\n\n"
    "Automated daily collection of Israel-related tech news.\n\n"
    "## Recent Updates\n\n"
)


@dataclass(frozen=True)
class Settings:
    """Everything a run needs, resolved once at process entry."""

    notion_token: Optional[str]
    notion_database_id: str
    gemini_api_key: str
    queries: Tuple[str, ...] = DEFAULT_QUERIES
    query_delay: float = 2.0
    model: str = "gemini-2.5-flash"
    max_output_tokens: int = 1000
    thinking_budget: int = 0
    api_version: str = "v1beta"
    archive_dir: str = "articles"
    index_path: str = "README.md"
    summary_path: str = "last-run.json"
    archive_title: str = "Israel Tech News"
    archive_tagline: str = (
        "Daily curated tech news related to Israel, Israeli founders, "
        "startups, and companies."
    )
    index_header: str = DEFAULT_INDEX_HEADER


def load_config(config_filename: str = "config.json") -> Dict[str, Any]:
    """Loads configuration from a JSON file."""
    # Build absolute path relative to this module
    base_dir = os.path.dirname(os.path.abspath(__file__))
    config_path = os.path.join(base_dir, config_filename)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("Config file not found at %s. Using defaults.", config_path)
        return {}
    except json.JSONDecodeError as e:
        raise ConfigError(f"{config_path} is not valid JSON: {e}") from e


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise ConfigError(f"{name} is required!")
    return value


def _number(config: Dict[str, Any], key: str, default: Any, kind: type) -> Any:
    """Reads a numeric config value, raising ConfigError on bad input."""
    value = config.get(key, default)
    # bool is an int subclass and is never a meaningful number here
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number, got {value!r}") from e


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Settings:
    """
    Builds the run settings from the environment and the JSON config.

    Raises ConfigError when NOTION_DATABASE_ID or GEMINI_KEY is missing,
    or when config.json holds malformed values.
    """
    if environ is None:
        environ = os.environ
    if config is None:
        config = load_config()

    database_id = _require(environ, "NOTION_DATABASE_ID")
    api_key = _require(environ, "GEMINI_KEY")

    token = environ.get("NOTION_TOKEN")
    if not token:
        logger.warning("NOTION_TOKEN not set. Notion requests will be rejected.")

    defaults = Settings(
        notion_token=token, notion_database_id=database_id, gemini_api_key=api_key
    )
    queries = config.get("queries")
    if queries and (
        not isinstance(queries, list) or not all(isinstance(q, str) for q in queries)
    ):
        raise ConfigError(f"queries must be a list of strings, got {queries!r}")

    return Settings(
        notion_token=token,
        notion_database_id=database_id,
        gemini_api_key=api_key,
        queries=tuple(queries) if queries else defaults.queries,
        query_delay=_number(config, "query_delay", defaults.query_delay, float),
        model=config.get("model", defaults.model),
        max_output_tokens=_number(
            config, "max_output_tokens", defaults.max_output_tokens, int
        ),
        thinking_budget=_number(
            config, "thinking_budget", defaults.thinking_budget, int
        ),
        api_version=config.get("api_version", defaults.api_version),
        archive_dir=config.get("archive_dir", defaults.archive_dir),
        index_path=config.get("index_path", defaults.index_path),
        summary_path=config.get("summary_path", defaults.summary_path),
        archive_title=config.get("archive_title", defaults.archive_title),
        archive_tagline=config.get("archive_tagline", defaults.archive_tagline),
        index_header=config.get("index_header", defaults.index_header),
    )
