"""Tests for configuration loading and the logging setup."""

import json
import logging
from pathlib import Path

import pytest

from honeycomb import config as config_module
from honeycomb.config import HoneycombConfig, get_honeycomb_config
from honeycomb.graph.navigator import Hive
from honeycomb.observability import clear_trace_context, get_trace_context, set_trace_context
from honeycomb.observability.logging import HumanReadableFormatter, StructuredFormatter


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "configuration.json"
    monkeypatch.setattr(config_module, "HONEYCOMB_CONFIG_FILE", path)
    monkeypatch.delenv("HONEYCOMB_HOME", raising=False)
    monkeypatch.delenv("HONEYCOMB_QUERY_LIMIT", raising=False)
    return path


class TestConfigFile:
    def test_missing_file(self, config_file):
        assert get_honeycomb_config() == {}

    def test_corrupt_file(self, config_file):
        config_file.write_text("{oops")
        assert get_honeycomb_config() == {}

    def test_non_object_file(self, config_file):
        config_file.write_text("[1, 2]")
        assert get_honeycomb_config() == {}

    def test_values_from_file(self, config_file, tmp_path):
        config_file.write_text(
            json.dumps(
                {
                    "storage_path": str(tmp_path / "hive"),
                    "query_limit": 8,
                    "synonyms": {"invoice": ["billing"]},
                }
            )
        )
        config = HoneycombConfig()
        assert config.storage_path == tmp_path / "hive"
        assert config.query_limit == 8
        assert config.journey_log_path == tmp_path / "hive" / "journeys.jsonl"
        assert "invoice" in config.synonym_table().expand(["billing"])

    @pytest.mark.parametrize("value", ["lots", None, [3]])
    def test_bad_query_limit_falls_back(self, config_file, value):
        config_file.write_text(json.dumps({"query_limit": value}))
        assert HoneycombConfig().query_limit == 5

    def test_synonym_values_must_be_lists(self, config_file):
        config_file.write_text(
            json.dumps({"synonyms": {"invoice": "billing", "refund": ["return", "chargeback"]}})
        )
        config = HoneycombConfig()
        assert config.synonyms == {"refund": ["return", "chargeback"]}
        table = config.synonym_table()
        assert "refund" in table.expand(["chargeback"])
        # A string value is not split into single-character synonyms
        assert "invoice" not in table.expand(["b"])


class TestEnvironment:
    def test_defaults(self, config_file):
        config = HoneycombConfig()
        assert config.storage_path == Path(".")
        assert config.query_limit == 5
        assert config.synonyms == {}

    def test_env_overrides_file(self, config_file, tmp_path, monkeypatch):
        config_file.write_text(json.dumps({"storage_path": "/from/file", "query_limit": 8}))
        monkeypatch.setenv("HONEYCOMB_HOME", str(tmp_path))
        monkeypatch.setenv("HONEYCOMB_QUERY_LIMIT", "2")

        config = HoneycombConfig()
        assert config.storage_path == tmp_path
        assert config.query_limit == 2

    def test_bad_query_limit_env_falls_back(self, config_file, monkeypatch):
        monkeypatch.setenv("HONEYCOMB_QUERY_LIMIT", "many")
        assert HoneycombConfig().query_limit == 5

    def test_default_synonym_table_is_shared(self, config_file):
        assert HoneycombConfig().synonym_table() is HoneycombConfig().synonym_table()

    @pytest.mark.asyncio
    async def test_hive_from_config(self, config_file, tmp_path):
        config = HoneycombConfig(storage_path=tmp_path, query_limit=1, journey_limit=7)
        hive = Hive.from_config(config)
        assert hive.query_limit == 1
        assert hive.journey_limit == 7
        assert hive.recorder.store.path == tmp_path / "journeys.jsonl"
        assert await hive.list_hexes() == []


class TestLogging:
    def _record(self, msg="hello", **extra):
        record = logging.LogRecord("honeycomb.test", logging.INFO, __file__, 1, msg, (), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def setup_method(self):
        clear_trace_context()

    def test_trace_context_merges(self):
        set_trace_context(journey_id="agent-1")
        set_trace_context(tool="hive_traverse")
        assert get_trace_context() == {"journey_id": "agent-1", "tool": "hive_traverse"}
        clear_trace_context()
        assert get_trace_context() == {}

    def test_structured_formatter_includes_context_and_extras(self):
        set_trace_context(journey_id="agent-1")
        line = StructuredFormatter().format(self._record(hex_id="finance", other="skip"))
        entry = json.loads(line)

        assert entry["message"] == "hello"
        assert entry["level"] == "info"
        assert entry["journey_id"] == "agent-1"
        assert entry["hex_id"] == "finance"
        assert "other" not in entry

    def test_human_formatter_prefix(self):
        set_trace_context(journey_id="agent-1", tool="hive_query")
        line = HumanReadableFormatter().format(self._record())
        assert "[journey:agent-1 | tool:hive_query] hello" in line
