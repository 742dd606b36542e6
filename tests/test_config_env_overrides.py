"""Tests for environment variable overrides in config."""
from __future__ import annotations


class TestTryParseEnvValue:
    """_try_parse_env_value correctly parses typed values."""

    def test_json_list_parsed(self):
        from cxgraph.config import _try_parse_env_value

        assert _try_parse_env_value("[1, 2]") == [1, 2]

    def test_boolean_parsed(self):
        from cxgraph.config import _try_parse_env_value

        assert _try_parse_env_value("true") is True
        assert _try_parse_env_value("FALSE") is False

    def test_integer_parsed(self):
        from cxgraph.config import _try_parse_env_value

        assert _try_parse_env_value("42") == 42

    def test_plain_string_passthrough(self):
        from cxgraph.config import _try_parse_env_value

        assert _try_parse_env_value("error") == "error"

    def test_malformed_json_returns_string(self):
        from cxgraph.config import _try_parse_env_value

        assert _try_parse_env_value("[not valid json") == "[not valid json"


class TestApplyEnvOverrides:
    """CXGRAPH_<SECTION>_<KEY> variables override config keys."""

    def test_env_var_sets_duplicate_policy(self, monkeypatch):
        from cxgraph.config import _apply_env_overrides

        monkeypatch.setenv("CXGRAPH_GRAPH_ON_DUPLICATE", "error")
        result = _apply_env_overrides({"graph": {"on_duplicate": "overwrite"}})
        assert result["graph"]["on_duplicate"] == "error"

    def test_env_var_creates_section(self, monkeypatch):
        from cxgraph.config import _apply_env_overrides

        monkeypatch.setenv("CXGRAPH_LOGGING_LEVEL", "DEBUG")
        result = _apply_env_overrides({})
        assert result["logging"]["level"] == "DEBUG"

    def test_env_var_without_key_ignored(self, monkeypatch):
        from cxgraph.config import _apply_env_overrides

        monkeypatch.setenv("CXGRAPH_GRAPH", "x")
        result = _apply_env_overrides({"graph": {}})
        assert result == {"graph": {}}

    def test_env_override_applies_on_load(self, tmp_path, monkeypatch):
        from cxgraph.config import load_config

        config_file = tmp_path / ".cxgraph.toml"
        config_file.write_text('[graph]\non_duplicate = "overwrite"\n')
        monkeypatch.setenv("CXGRAPH_GRAPH_ON_DUPLICATE", "error")

        assert load_config(config_file)["graph"]["on_duplicate"] == "error"
