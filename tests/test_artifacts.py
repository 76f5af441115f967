# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Decision artifacts and manual override detection."""

from __future__ import annotations

import json
import os
from datetime import datetime, timedelta, timezone

from roadmap_priority.core.artifacts import (
    detect_overrides,
    integrity_snapshot,
    load_artifacts,
    mark_applied,
    prune_artifacts,
    save_artifact,
    summarize_artifacts,
)

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _artifact(issue, order, ts, applied=False):
    return {
        "issueNumber": issue,
        "recommendedOrder": order,
        "applied": applied,
        "metadata": {"timestamp": ts.isoformat()},
    }


def test_save_and_load(tmp_path):
    path = save_artifact({"issueNumber": 5, "recommendedOrder": 2}, tmp_path, now=T0)
    assert path.name.startswith("issue-5-")
    loaded = load_artifacts(tmp_path, now=T0)
    assert len(loaded) == 1
    assert loaded[0]["recommendedOrder"] == 2
    assert loaded[0]["applied"] is False
    assert loaded[0]["metadata"]["timestamp"] == T0.isoformat()


def test_mark_applied(tmp_path):
    path = save_artifact({"issueNumber": 5, "recommendedOrder": 2}, tmp_path, now=T0)
    mark_applied(path)
    assert json.loads(path.read_text(encoding="utf-8"))["applied"] is True


def test_invalid_files_skipped(tmp_path):
    (tmp_path / "broken.json").write_text("{oops", encoding="utf-8")
    (tmp_path / "list.json").write_text("[1, 2]", encoding="utf-8")
    save_artifact({"issueNumber": 1, "recommendedOrder": 1}, tmp_path, now=T0)
    assert len(load_artifacts(tmp_path, now=T0)) == 1


def test_missing_directory(tmp_path):
    assert load_artifacts(tmp_path / "absent") == []


def test_days_back_filter(tmp_path):
    save_artifact({"issueNumber": 1, "recommendedOrder": 1}, tmp_path, now=T0 - timedelta(days=10))
    save_artifact({"issueNumber": 2, "recommendedOrder": 1}, tmp_path, now=T0 - timedelta(days=1))
    recent = load_artifacts(tmp_path, days_back=7, now=T0)
    assert [a["issueNumber"] for a in recent] == [2]


class TestOverrides:
    def test_change_within_window_after_applied(self):
        artifacts = [
            _artifact(7, 3, T0, applied=True),
            _artifact(7, 1, T0 + timedelta(hours=5)),
        ]
        overrides = detect_overrides(artifacts)
        assert len(overrides) == 1
        event = overrides[0]
        assert event.issue_number == 7
        assert event.previous_order == 3
        assert event.manual_order == 1
        assert event.hours_since_automation == 5.0
        assert event.to_dict()["automationTimestamp"] == T0.isoformat()

    def test_previous_not_applied(self):
        artifacts = [_artifact(7, 3, T0), _artifact(7, 1, T0 + timedelta(hours=1))]
        assert detect_overrides(artifacts) == []

    def test_same_order_is_not_override(self):
        artifacts = [_artifact(7, 3, T0, applied=True), _artifact(7, 3, T0 + timedelta(hours=1))]
        assert detect_overrides(artifacts) == []

    def test_outside_window(self):
        artifacts = [_artifact(7, 3, T0, applied=True), _artifact(7, 1, T0 + timedelta(hours=30))]
        assert detect_overrides(artifacts) == []

    def test_grouped_per_issue(self):
        artifacts = [
            _artifact(7, 3, T0, applied=True),
            _artifact(8, 1, T0 + timedelta(hours=1)),
        ]
        assert detect_overrides(artifacts) == []


def test_prune_keeps_most_recent(tmp_path):
    paths = []
    for i in range(5):
        path = save_artifact({"issueNumber": i + 1, "recommendedOrder": 1}, tmp_path, now=T0 + timedelta(minutes=i))
        os.utime(path, (1_700_000_000 + i, 1_700_000_000 + i))
        paths.append(path)
    removed = prune_artifacts(tmp_path, keep=2)
    assert removed == 3
    remaining = sorted(p.name for p in tmp_path.glob("*.json"))
    assert remaining == sorted(p.name for p in paths[-2:])


class TestSummary:
    def test_integrity_snapshot_gaps_and_duplicates(self):
        snapshot = integrity_snapshot(
            [{"recommendedOrder": o} for o in (1, 3, 3, 6)] + [{"recommendedOrder": True}, {}]
        )
        assert snapshot["gaps"] == [2, 4, 5]
        assert snapshot["gapsSample"] == [2, 4, 5]
        assert snapshot["duplicates"] == [3]
        assert snapshot["failureCount"] == 4
        assert snapshot["last"] == 6
        assert snapshot["contiguous"] is False

    def test_integrity_snapshot_empty(self):
        assert integrity_snapshot([]) == {
            "contiguous": True,
            "gaps": [],
            "duplicates": [],
            "failureCount": 0,
            "gapsSample": [],
            "last": None,
        }

    def test_rates_and_overrides(self):
        artifacts = [
            {**_artifact(7, 3, T0, applied=True), "confidence": "high"},
            {**_artifact(7, 1, T0 + timedelta(hours=2)), "confidence": "high"},
            {**_artifact(8, 2, T0, applied=True), "confidence": "medium"},
            {**_artifact(9, 4, T0), "confidence": "low"},
        ]
        metrics = summarize_artifacts(artifacts, days=7)
        assert (metrics.total, metrics.high, metrics.medium, metrics.low) == (4, 2, 1, 1)
        assert metrics.applied == 2
        assert metrics.overrides == 1
        assert metrics.high_confidence_pct == 50
        assert metrics.applied_pct == 50
        assert metrics.override_rate == 50
        assert metrics.low_confidence_pct == 25
        payload = metrics.to_dict()
        assert payload["schemaVersion"] == 2
        assert payload["validation"] == {"runs": 4, "success": 2, "fail": 2}
        assert len(payload["recommendations"]) == 2

    def test_percentages_round_half_up(self):
        artifacts = [{"confidence": "high"}] + [{"confidence": "low"}] * 7
        assert summarize_artifacts(artifacts, days=7).high_confidence_pct == 13

    def test_empty_period(self):
        metrics = summarize_artifacts([], days=7)
        assert metrics.override_rate == 0
        assert metrics.recommendations() == []
