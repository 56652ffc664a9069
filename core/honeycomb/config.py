"""Shared Honeycomb configuration utilities.

Centralises reading of ~/.honeycomb/configuration.json so that the CLI, the
MCP server and the demos share one implementation. Environment variables
override the file:

    HONEYCOMB_HOME          storage root (hexes/ and journeys.jsonl live here)
    HONEYCOMB_QUERY_LIMIT   default number of query results
    LOG_LEVEL / LOG_FORMAT  logging setup (see honeycomb.observability)

Example configuration.json::

    {
      "storage_path": "~/hive",
      "query_limit": 8,
      "synonyms": {"invoice": ["billing", "payment"]}
    }
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from honeycomb.graph.lexicon import SynonymTable
from honeycomb.graph.query import DEFAULT_QUERY_LIMIT
from honeycomb.runtime.journey_store import DEFAULT_JOURNEY_LIMIT

# ---------------------------------------------------------------------------
# Low-level config file access
# ---------------------------------------------------------------------------

HONEYCOMB_CONFIG_FILE = Path.home() / ".honeycomb" / "configuration.json"


def get_honeycomb_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from ~/.honeycomb/configuration.json ({} if missing or corrupt)."""
    config_file = path or HONEYCOMB_CONFIG_FILE
    if not config_file.exists():
        return {}
    try:
        with open(config_file, encoding="utf-8-sig") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# Derived helpers
# ---------------------------------------------------------------------------


def get_storage_path() -> Path:
    """Return the storage root: $HONEYCOMB_HOME, then the config file, then the CWD."""
    env_path = os.environ.get("HONEYCOMB_HOME")
    if env_path:
        return Path(env_path).expanduser()
    configured = get_honeycomb_config().get("storage_path")
    if configured:
        return Path(configured).expanduser()
    return Path(".")


def get_query_limit() -> int:
    env_limit = os.environ.get("HONEYCOMB_QUERY_LIMIT")
    if env_limit:
        try:
            return int(env_limit)
        except ValueError:
            pass
    try:
        return int(get_honeycomb_config().get("query_limit", DEFAULT_QUERY_LIMIT))
    except (TypeError, ValueError):
        return DEFAULT_QUERY_LIMIT


def get_extra_synonyms() -> dict[str, list[str]]:
    """Concepts to merge into the built-in synonym table. Non-list values are skipped."""
    synonyms = get_honeycomb_config().get("synonyms", {})
    if not isinstance(synonyms, dict):
        return {}
    return {
        str(key): [str(s) for s in values]
        for key, values in synonyms.items()
        if isinstance(values, list)
    }


# ---------------------------------------------------------------------------
# HoneycombConfig
# ---------------------------------------------------------------------------


@dataclass
class HoneycombConfig:
    """Engine configuration loaded from ~/.honeycomb/configuration.json and the environment."""

    storage_path: Path = field(default_factory=get_storage_path)
    journey_log: str = "journeys.jsonl"
    query_limit: int = field(default_factory=get_query_limit)
    journey_limit: int = DEFAULT_JOURNEY_LIMIT
    synonyms: dict[str, list[str]] = field(default_factory=get_extra_synonyms)
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "auto"))

    @property
    def journey_log_path(self) -> Path:
        return Path(self.storage_path) / self.journey_log

    def synonym_table(self) -> SynonymTable:
        base = SynonymTable.default()
        return base.extended(self.synonyms) if self.synonyms else base
