# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Shared fixtures: isolated configuration and backlog documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Tuple

import pytest

from roadmap_priority.core.backlog.models import Backlog, BacklogItem

_ENV_VARS = (
    "ROADMAP_BACKLOG_PATH",
    "ROADMAP_LOCK_TIMEOUT_MS",
    "ROADMAP_ARTIFACTS_DIR",
    "ROADMAP_ARTIFACTS_KEEP",
    "ROADMAP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """No repo config.yaml and no ROADMAP_* overrides leak into tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ROADMAP_CONFIG", str(tmp_path / "absent-config.yaml"))
    monkeypatch.chdir(tmp_path)
    yield


def make_backlog(pairs: Iterable[Tuple[int, int]]) -> Backlog:
    """Backlog from (issue, order) pairs with generated titles."""
    return Backlog(
        project=3,
        field_id="PVTF_test",
        generated="2026-01-01T00:00:00Z",
        items=tuple(BacklogItem(issue, order, f"Issue {issue}") for issue, order in pairs),
    )


@pytest.fixture
def three_items() -> Backlog:
    return make_backlog([(1, 1), (2, 2), (3, 3)])


@pytest.fixture
def backlog_file(tmp_path, three_items) -> Path:
    path = tmp_path / "roadmap" / "implementation-order.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(three_items.to_dict(), indent=2) + "\n", encoding="utf-8")
    return path
