# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""
Decision artifacts: one JSON file per analysis under the artifacts dir.

  - issue-<n>-<timestamp>.json  analysis result + metadata.timestamp + applied flag

Used to audit automated placements and to detect manual overrides: a
recommended order that changed within 24h after an applied artifact for the
same issue.
It also summarises a period of artifacts into confidence counts, applied and
override rates and an ordering snapshot (`summarize_artifacts`).
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from roadmap_priority.core.io.atomic import atomic_write_json

logger = logging.getLogger(__name__)

OVERRIDE_WINDOW_HOURS = 24.0

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class OverrideEvent:
    issue_number: int
    previous_order: int
    manual_order: int
    hours_since_automation: float
    automation_timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issueNumber": self.issue_number,
            "previousOrder": self.previous_order,
            "manualOrder": self.manual_order,
            "hoursSinceAutomation": self.hours_since_automation,
            "automationTimestamp": self.automation_timestamp,
        }


def _parse_ts(value: Any) -> datetime:
    if not isinstance(value, str) or not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _timestamp(artifact: Dict[str, Any]) -> datetime:
    return _parse_ts((artifact.get("metadata") or {}).get("timestamp"))


def save_artifact(
    result: Dict[str, Any],
    directory: Path,
    applied: bool = False,
    now: Optional[datetime] = None,
) -> Path:
    """Persist one analysis result. Returns the artifact path."""
    now = now or datetime.now(timezone.utc)
    issue = result.get("issueNumber")
    payload = dict(result)
    payload["applied"] = applied
    payload["metadata"] = {"timestamp": now.isoformat()}
    path = Path(directory) / f"issue-{issue}-{now.strftime('%Y%m%dT%H%M%S%fZ')}.json"
    atomic_write_json(path, payload)
    logger.info("[ARTIFACTS] saved %s", path)
    return path


def mark_applied(path: Path) -> None:
    """Flag an existing artifact as applied."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    payload["applied"] = True
    atomic_write_json(path, payload)


def list_artifact_files(directory: Path) -> List[Path]:
    """JSON files in `directory`, newest modification first."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix == ".json"]
    return sorted(files, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)


def load_artifacts(
    directory: Path,
    days_back: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """Parse artifacts, skipping invalid files. Optionally keep only recent ones."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=days_back) if days_back and days_back > 0 else None

    artifacts: List[Dict[str, Any]] = []
    for path in list_artifact_files(directory):
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("[ARTIFACTS] Skipping invalid artifact %s: %s", path.name, e)
            continue
        if not isinstance(content, dict):
            logger.warning("[ARTIFACTS] Skipping non-object artifact %s", path.name)
            continue
        if cutoff is not None and _timestamp(content) < cutoff:
            continue
        content["_filename"] = path.name
        artifacts.append(content)
    return artifacts


def detect_overrides(artifacts: List[Dict[str, Any]]) -> List[OverrideEvent]:
    """Find recommended-order changes within 24h after an applied artifact."""
    by_issue: Dict[int, List[Dict[str, Any]]] = {}
    for art in artifacts:
        issue = art.get("issueNumber")
        if isinstance(issue, int):
            by_issue.setdefault(issue, []).append(art)

    overrides: List[OverrideEvent] = []
    for issue in sorted(by_issue):
        history = sorted(by_issue[issue], key=_timestamp, reverse=True)
        for current, previous in zip(history, history[1:]):
            if not previous.get("applied"):
                continue
            if current.get("recommendedOrder") == previous.get("recommendedOrder"):
                continue
            hours = (_timestamp(current) - _timestamp(previous)).total_seconds() / 3600.0
            if 0 <= hours <= OVERRIDE_WINDOW_HOURS:
                overrides.append(
                    OverrideEvent(
                        issue_number=issue,
                        previous_order=previous.get("recommendedOrder"),
                        manual_order=current.get("recommendedOrder"),
                        hours_since_automation=round(hours, 1),
                        automation_timestamp=(previous.get("metadata") or {}).get("timestamp", "unknown"),
                    )
                )
    return overrides


HIGH_CONFIDENCE_TARGET_PCT = 70
OVERRIDE_RATE_ALERT_PCT = 20


def _pct(part: int, whole: int) -> int:
    """Percentage rounded half up; 0 when `whole` is 0."""
    if whole <= 0:
        return 0
    return int(part * 100 / whole + 0.5)


def integrity_snapshot(artifacts: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Gaps and duplicates among the recommended orders of `artifacts`.

    Approximates the backlog shape from decisions alone; `check_integrity`
    on the real document is authoritative.
    """
    orders = sorted(
        a["recommendedOrder"]
        for a in artifacts
        if isinstance(a.get("recommendedOrder"), int) and not isinstance(a.get("recommendedOrder"), bool)
    )
    counts = Counter(orders)
    duplicates = sorted(o for o, c in counts.items() if c > 1)
    last = orders[-1] if orders else None
    gaps = [o for o in range(1, (last or 0) + 1) if o not in counts]
    return {
        "contiguous": not gaps and not duplicates,
        "gaps": gaps,
        "duplicates": duplicates,
        "failureCount": len(gaps) + len(duplicates),
        "gapsSample": gaps[:3],
        "last": last,
    }


@dataclass(frozen=True)
class ArtifactMetrics:
    """Summary of one period of decision artifacts."""

    period_days: int
    total: int
    high: int
    medium: int
    low: int
    applied: int
    overrides: int
    integrity: Dict[str, Any] = field(default_factory=dict)

    @property
    def high_confidence_pct(self) -> int:
        return _pct(self.high, self.total)

    @property
    def applied_pct(self) -> int:
        return _pct(self.applied, self.total)

    @property
    def low_confidence_pct(self) -> int:
        return _pct(self.low, self.total)

    @property
    def override_rate(self) -> int:
        """Overrides per applied decision, in percent."""
        return _pct(self.overrides, self.applied)

    def recommendations(self) -> List[str]:
        if self.total == 0:
            return []
        notes: List[str] = []
        if self.high_confidence_pct < HIGH_CONFIDENCE_TARGET_PCT:
            notes.append(
                f"High confidence rate {self.high_confidence_pct}% is below {HIGH_CONFIDENCE_TARGET_PCT}%; "
                "add scope, type and milestone to issues"
            )
        if self.override_rate > OVERRIDE_RATE_ALERT_PCT:
            notes.append(
                f"Override rate {self.override_rate}% is above {OVERRIDE_RATE_ALERT_PCT}%; review the scoring weights"
            )
        return notes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaVersion": 2,
            "periodDays": self.period_days,
            "totalProcessed": self.total,
            "counts": {
                "high": self.high,
                "medium": self.medium,
                "low": self.low,
                "applied": self.applied,
                "overrides": self.overrides,
            },
            "highConfidencePct": self.high_confidence_pct,
            "appliedPct": self.applied_pct,
            "overrideRate": self.override_rate,
            "lowConfidencePct": self.low_confidence_pct,
            "validation": {
                "runs": self.total,
                "success": self.applied,
                "fail": self.total - self.applied,
            },
            "integrity": dict(self.integrity),
            "recommendations": self.recommendations(),
        }


def summarize_artifacts(artifacts: List[Dict[str, Any]], days: int) -> ArtifactMetrics:
    """Confidence counts, applied and override rates for `artifacts`."""
    confidences = Counter(a.get("confidence") for a in artifacts)
    return ArtifactMetrics(
        period_days=days,
        total=len(artifacts),
        high=confidences.get("high", 0),
        medium=confidences.get("medium", 0),
        low=confidences.get("low", 0),
        applied=sum(1 for a in artifacts if a.get("applied") is True),
        overrides=len(detect_overrides(artifacts)),
        integrity=integrity_snapshot(artifacts),
    )


def prune_artifacts(directory: Path, keep: int = 200) -> int:
    """Delete all but the `keep` most recent artifacts. Returns the number removed."""
    files = list_artifact_files(directory)
    stale = files[keep:]
    for path in stale:
        path.unlink(missing_ok=True)
    if stale:
        logger.info("[ARTIFACTS] pruned %d old artifact(s) (keep=%d)", len(stale), keep)
    return len(stale)


__all__ = [
    "ArtifactMetrics",
    "HIGH_CONFIDENCE_TARGET_PCT",
    "OVERRIDE_RATE_ALERT_PCT",
    "OVERRIDE_WINDOW_HOURS",
    "OverrideEvent",
    "detect_overrides",
    "integrity_snapshot",
    "list_artifact_files",
    "load_artifacts",
    "mark_applied",
    "prune_artifacts",
    "save_artifact",
    "summarize_artifacts",
]
