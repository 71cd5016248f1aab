"""Tests for tabstats.config."""

import pytest

from tabstats.config import TabstatsConfig


def test_defaults():
    cfg = TabstatsConfig()
    assert cfg.delimiter == ","
    assert cfg.forbidden_phrases == ("Sonny Hayes",)
    assert cfg.profile_max_workers == 1
    assert cfg.duckdb_path == "tabstats.db"


def test_immutable():
    cfg = TabstatsConfig()
    with pytest.raises(AttributeError):
        cfg.delimiter = ";"  # type: ignore[misc]


def test_custom_values():
    cfg = TabstatsConfig(duckdb_path=":memory:", profile_max_workers=4)
    assert cfg.duckdb_path == ":memory:"
    assert cfg.profile_max_workers == 4
    # Ensure other defaults are unchanged
    assert cfg.forbidden_phrases == ("Sonny Hayes",)


class TestFromEnv:
    def test_empty_environment_gives_defaults(self):
        assert TabstatsConfig.from_env({}) == TabstatsConfig()

    def test_reads_variables(self):
        cfg = TabstatsConfig.from_env({
            "TABSTATS_DB_PATH": "/tmp/stats.db",
            "TABSTATS_FORBIDDEN_PHRASES": "foo|bar baz",
            "TABSTATS_PROFILE_WORKERS": "3",
        })
        assert cfg.duckdb_path == "/tmp/stats.db"
        assert cfg.forbidden_phrases == ("foo", "bar baz")
        assert cfg.profile_max_workers == 3

    def test_empty_phrases_disable_rule(self):
        cfg = TabstatsConfig.from_env({"TABSTATS_FORBIDDEN_PHRASES": ""})
        assert cfg.forbidden_phrases == ()

    def test_rejects_non_positive_workers(self):
        with pytest.raises(ValueError):
            TabstatsConfig.from_env({"TABSTATS_PROFILE_WORKERS": "0"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("TABSTATS_DB_PATH", "env.db")
        assert TabstatsConfig.from_env().duckdb_path == "env.db"
