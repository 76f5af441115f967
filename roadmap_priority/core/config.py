# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Centralized configuration loader for the roadmap priority engine.

Loads config.yaml from the repository root and provides typed access to settings.
Falls back to sensible defaults if config.yaml is missing or incomplete.
Environment variables override config.yaml values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from roadmap_priority.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

_CONFIG_CACHE: Optional["EngineConfig"] = None

CONFIG_PATH_ENV = "ROADMAP_CONFIG"


def _repo_root() -> Path:
    """Return the repository root."""
    # roadmap_priority/core/config.py -> repo root
    return Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class BacklogConfig:
    """Backlog document location and lock settings."""
    path: str
    lock_timeout_ms: int


@dataclass(frozen=True)
class ArtifactsConfig:
    """Decision artifact directory and retention."""
    dir: str
    keep: int


@dataclass(frozen=True)
class EngineConfig:
    """Root configuration object."""
    backlog: BacklogConfig
    artifacts: ArtifactsConfig
    log_level: str


def _config_path() -> Path:
    override = os.getenv(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return _repo_root() / "config.yaml"


def _load_yaml_config() -> dict:
    """Load config.yaml. Returns empty dict if not found."""
    config_path = _config_path()
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("[CONFIG] Ignoring unreadable %s: %s", config_path, e)
        return {}
    if not isinstance(loaded, dict):
        logger.warning("[CONFIG] Ignoring %s: top level is not a mapping", config_path)
        return {}
    return loaded


def _int_setting(env_name: str, fallback: Any) -> int:
    """Integer from the environment, else from config.yaml, else the default."""
    value = os.getenv(env_name, str(fallback))
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{env_name} must be an integer, got {value!r}") from None


def load_config(*, reload: bool = False) -> EngineConfig:
    """Load and return the engine configuration.

    Priority order (highest to lowest):
    1. Environment variables (ROADMAP_BACKLOG_PATH, ROADMAP_LOCK_TIMEOUT_MS, ...)
    2. config.yaml values
    3. Built-in defaults

    Parameters
    ----------
    reload : bool
        If True, force reload from disk. Otherwise use cached config.

    Returns
    -------
    EngineConfig
        The loaded configuration.

    Raises
    ------
    ConfigurationError
        An integer setting (lock timeout, artifact retention) is not an integer.
    """
    global _CONFIG_CACHE

    if _CONFIG_CACHE is not None and not reload:
        return _CONFIG_CACHE

    raw = _load_yaml_config()

    backlog_raw = raw.get("backlog", {}) or {}
    backlog_config = BacklogConfig(
        path=os.getenv(
            "ROADMAP_BACKLOG_PATH",
            backlog_raw.get("path", "roadmap/implementation-order.json"),
        ),
        lock_timeout_ms=_int_setting("ROADMAP_LOCK_TIMEOUT_MS", backlog_raw.get("lock_timeout_ms", 2000)),
    )

    artifacts_raw = raw.get("artifacts", {}) or {}
    artifacts_config = ArtifactsConfig(
        dir=os.getenv(
            "ROADMAP_ARTIFACTS_DIR",
            artifacts_raw.get("dir", "artifacts/ordering"),
        ),
        keep=_int_setting("ROADMAP_ARTIFACTS_KEEP", artifacts_raw.get("keep", 200)),
    )

    app_raw = raw.get("app", {}) or {}
    log_level = os.getenv("ROADMAP_LOG_LEVEL", str(app_raw.get("log_level", "INFO"))).upper()

    config = EngineConfig(
        backlog=backlog_config,
        artifacts=artifacts_config,
        log_level=log_level,
    )

    _CONFIG_CACHE = config
    return config


def get_backlog_path() -> str:
    """Convenience: return the backlog document path from config."""
    return load_config().backlog.path


def get_lock_timeout_ms() -> int:
    """Convenience: return the backlog lock timeout from config."""
    return load_config().backlog.lock_timeout_ms


def get_artifacts_dir() -> str:
    """Convenience: return the decision artifact directory from config."""
    return load_config().artifacts.dir


__all__ = [
    "ArtifactsConfig",
    "BacklogConfig",
    "EngineConfig",
    "load_config",
    "get_backlog_path",
    "get_lock_timeout_ms",
    "get_artifacts_dir",
]
