# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Configuration precedence: env > config.yaml > defaults."""

from __future__ import annotations

import pytest

from roadmap_priority.core.config import get_artifacts_dir, get_backlog_path, get_lock_timeout_ms, load_config
from roadmap_priority.core.errors import ConfigurationError


def test_defaults_without_yaml():
    config = load_config(reload=True)
    assert config.backlog.path == "roadmap/implementation-order.json"
    assert config.backlog.lock_timeout_ms == 2000
    assert config.artifacts.dir == "artifacts/ordering"
    assert config.artifacts.keep == 200
    assert config.log_level == "INFO"


def test_yaml_values(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "backlog:\n  path: data/backlog.json\n  lock_timeout_ms: 500\n"
        "artifacts:\n  keep: 5\n"
        "app:\n  log_level: debug\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ROADMAP_CONFIG", str(cfg))
    config = load_config(reload=True)
    assert config.backlog.path == "data/backlog.json"
    assert config.backlog.lock_timeout_ms == 500
    assert config.artifacts.keep == 5
    assert config.artifacts.dir == "artifacts/ordering"
    assert config.log_level == "DEBUG"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("backlog:\n  path: data/backlog.json\n", encoding="utf-8")
    monkeypatch.setenv("ROADMAP_CONFIG", str(cfg))
    monkeypatch.setenv("ROADMAP_BACKLOG_PATH", "env/backlog.json")
    monkeypatch.setenv("ROADMAP_LOCK_TIMEOUT_MS", "75")
    config = load_config(reload=True)
    assert config.backlog.path == "env/backlog.json"
    assert config.backlog.lock_timeout_ms == 75
    assert get_backlog_path() == "env/backlog.json"


def test_unreadable_yaml_falls_back_to_defaults(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("backlog: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv("ROADMAP_CONFIG", str(cfg))
    assert load_config(reload=True).backlog.path == "roadmap/implementation-order.json"


def test_cached_until_reload(monkeypatch):
    first = load_config(reload=True)
    monkeypatch.setenv("ROADMAP_BACKLOG_PATH", "changed.json")
    assert load_config() is first
    assert load_config(reload=True).backlog.path == "changed.json"


def test_getters_follow_env(monkeypatch):
    monkeypatch.setenv("ROADMAP_ARTIFACTS_DIR", "out/artifacts")
    monkeypatch.setenv("ROADMAP_LOCK_TIMEOUT_MS", "125")
    load_config(reload=True)
    assert get_artifacts_dir() == "out/artifacts"
    assert get_lock_timeout_ms() == 125


def test_non_integer_env_value(monkeypatch):
    monkeypatch.setenv("ROADMAP_ARTIFACTS_KEEP", "many")
    with pytest.raises(ConfigurationError, match="ROADMAP_ARTIFACTS_KEEP"):
        load_config(reload=True)


def test_non_integer_yaml_value(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("backlog:\n  lock_timeout_ms: fast\n", encoding="utf-8")
    monkeypatch.setenv("ROADMAP_CONFIG", str(cfg))
    with pytest.raises(ConfigurationError):
        load_config(reload=True)
