"""
Tests for configuration persistence and environment overrides.
"""

import json
import logging
import os
from pathlib import Path

from akashic.config import (
    DEFAULT_CONFIG,
    ENV_LORE_PATH,
    ENV_LORE_LIMIT,
    get_config_path,
    load_config,
    save_config,
    set_lore_path,
    corpus_candidates,
)
from akashic.lore.corpus import DEFAULT_CORPUS_PATHS
from akashic.lore.retriever import get_context


class TestLoadConfig:
    """Tests for reading config."""

    def test_defaults_when_missing(self, tmp_path):
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_defaults_not_shared(self, tmp_path):
        """Mutating a loaded config doesn't leak into the defaults."""
        config = load_config(tmp_path)
        config["lore_paths"].append("elsewhere.json")
        assert DEFAULT_CONFIG["lore_paths"] == []

    def test_merges_saved_values(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({"limit": 5}), encoding="utf-8")
        config = load_config(tmp_path)
        assert config["limit"] == 5
        assert config["log_level"] == "INFO"

    def test_corrupt_file_falls_back(self, tmp_path):
        get_config_path(tmp_path).write_text("{oops", encoding="utf-8")
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_env_paths_come_first(self, tmp_path, monkeypatch):
        get_config_path(tmp_path).write_text(
            json.dumps({"lore_paths": ["saved.json"]}),
            encoding="utf-8",
        )
        monkeypatch.setenv(ENV_LORE_PATH, os.pathsep.join(["a.json", "b.yaml"]))
        assert load_config(tmp_path)["lore_paths"] == ["a.json", "b.yaml", "saved.json"]

    def test_env_limit(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_LORE_LIMIT, "7")
        assert load_config(tmp_path)["limit"] == 7

    def test_invalid_env_limit_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_LORE_LIMIT, "many")
        assert load_config(tmp_path)["limit"] == 3


class TestSaveConfig:
    """Tests for writing config."""

    def test_round_trip(self, tmp_path):
        config = load_config(tmp_path)
        config["limit"] = 2
        assert save_config(config, tmp_path)
        assert load_config(tmp_path)["limit"] == 2

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "dir"
        assert save_config(load_config(target), target)
        assert get_config_path(target).exists()

    def test_set_lore_path_moves_to_front(self, tmp_path):
        set_lore_path("first.json", tmp_path)
        set_lore_path("second.json", tmp_path)
        set_lore_path("first.json", tmp_path)
        assert load_config(tmp_path)["lore_paths"] == ["first.json", "second.json"]

    def test_set_lore_path_ignores_env(self, tmp_path, monkeypatch):
        """Env overrides are never written back to disk."""
        monkeypatch.setenv(ENV_LORE_PATH, "from-env.json")
        set_lore_path("saved.json", tmp_path)
        saved = json.loads(get_config_path(tmp_path).read_text(encoding="utf-8"))
        assert saved["lore_paths"] == ["saved.json"]


class TestCorpusCandidates:
    """Tests for building the candidate list."""

    def test_defaults_only(self):
        assert corpus_candidates(DEFAULT_CONFIG) == DEFAULT_CORPUS_PATHS

    def test_configured_paths_first(self):
        candidates = corpus_candidates({"lore_paths": ["mine.json"]})
        assert candidates[0] == Path("mine.json")
        assert candidates[1:] == DEFAULT_CORPUS_PATHS

    def test_duplicates_removed(self):
        candidates = corpus_candidates({"lore_paths": ["config/lore.json", "mine.json"]})
        assert candidates.count(Path("config/lore.json")) == 1
        assert candidates[:2] == [Path("config/lore.json"), Path("mine.json")]


class TestInvalidConfig:
    """Hand-edited config mistakes fall back to defaults instead of failing."""

    def test_string_limit_replaced(self, tmp_path, caplog):
        get_config_path(tmp_path).write_text(json.dumps({"limit": "3"}), encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            config = load_config(tmp_path)
        assert config["limit"] == 3
        assert isinstance(config["limit"], int)
        assert "'limit' must be an integer" in caplog.text

    def test_bool_limit_replaced(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({"limit": True}), encoding="utf-8")
        assert load_config(tmp_path)["limit"] == 3

    def test_string_lore_paths_ignored(self, tmp_path, caplog):
        """A bare string isn't split into one path per character."""
        get_config_path(tmp_path).write_text(
            json.dumps({"lore_paths": "/tmp/lore.json"}),
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            config = load_config(tmp_path)
        assert config["lore_paths"] == []
        assert corpus_candidates(config) == DEFAULT_CORPUS_PATHS
        assert "'lore_paths' must be a list" in caplog.text

    def test_non_string_lore_path_ignored(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({"lore_paths": [1, 2]}), encoding="utf-8")
        assert load_config(tmp_path)["lore_paths"] == []

    def test_invalid_utf8_falls_back(self, tmp_path):
        get_config_path(tmp_path).write_bytes(b"\xff{}")
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_set_lore_path_repairs_bad_paths(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({"lore_paths": "x.json"}), encoding="utf-8")
        assert set_lore_path("good.json", tmp_path)
        assert load_config(tmp_path)["lore_paths"] == ["good.json"]

    def test_get_context_survives_bad_config(self, tmp_path, monkeypatch, corpus_file):
        """Bad config values never break lore lookup."""
        monkeypatch.chdir(tmp_path)
        get_config_path(tmp_path).write_text(
            json.dumps({"limit": "3", "lore_paths": str(corpus_file)}),
            encoding="utf-8",
        )
        context = get_context("Tell me about Origins")
        assert isinstance(context, str)

    def test_get_context_survives_undecodable_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        get_config_path(tmp_path).write_bytes(b"\xff{}")
        assert isinstance(get_context("Tell me about Origins"), str)
