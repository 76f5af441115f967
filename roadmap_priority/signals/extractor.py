# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Signal extraction from issue metadata.

Turns labels, milestone, title and description into a list of weighted
`Signal` objects. Deterministic: no randomness, no clock. Signals are emitted
in a fixed category order (labels, milestone, keywords, dependencies) and, inside a
category, in weight-table order, so `factors` downstream are reproducible.

Roadmap path signals come from `roadmap.match_roadmap_paths` and are appended
by the engine, not here.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Optional, Sequence, Tuple

from roadmap_priority.signals import weights as W
from roadmap_priority.signals.models import IssueMetadata, Signal, SignalCategory

_MILESTONE_RE = re.compile(W.MILESTONE_PATTERN, re.IGNORECASE)
_DEPENDENCY_RES = tuple(re.compile(p, re.IGNORECASE) for p in W.DEPENDENCY_PATTERNS)
_BLOCKING_RES = tuple(re.compile(p, re.IGNORECASE) for p in W.BLOCKING_PATTERNS)


def label_signals(labels: FrozenSet[str]) -> List[Signal]:
    """Scope and type label signals. Unrecognized labels are ignored."""
    signals: List[Signal] = []
    for label, weight in W.SCOPE_LABEL_WEIGHTS.items():
        if label in labels:
            scope = label.split(":", 1)[1]
            signals.append(Signal(f"Scope {scope}: {weight:+d}", weight, SignalCategory.LABEL))
    for type_name, weight in W.TYPE_LABEL_WEIGHTS.items():
        if type_name in labels or f"{W.TYPE_LABEL_PREFIX}{type_name}" in labels:
            signals.append(Signal(f"Type {type_name}: {weight:+d}", weight, SignalCategory.LABEL))
    return signals


def milestone_weight(milestone: str) -> Optional[int]:
    """Weight for an ``M<n>`` milestone title, None when unrecognized or empty."""
    if not milestone or not milestone.strip():
        return None
    match = _MILESTONE_RE.match(milestone)
    if match is None:
        return None
    distance = int(match.group(1))
    return max(0, W.MILESTONE_BASE_WEIGHT - W.MILESTONE_STEP * distance)


def milestone_signals(milestone: str) -> List[Signal]:
    weight = milestone_weight(milestone)
    if not weight:
        return []
    return [Signal(f"Milestone {milestone.strip()}: {weight:+d}", weight, SignalCategory.MILESTONE)]


def _matched_keywords(content: str, keywords: Sequence[str]) -> Tuple[str, ...]:
    return tuple(k for k in keywords if k in content)


def _capped(count: int, per_match: int, cap: int) -> int:
    total = count * per_match
    if cap >= 0:
        return min(total, cap)
    return max(total, cap)


def keyword_signals(title: str, description: str) -> List[Signal]:
    """One aggregated signal per keyword set that matched."""
    content = f"{title} {description}".lower()
    signals: List[Signal] = []

    core_hits = _matched_keywords(content, W.FOUNDATIONAL_KEYWORDS)
    if core_hits:
        weight = _capped(len(core_hits), W.FOUNDATIONAL_KEYWORD_WEIGHT, W.FOUNDATIONAL_KEYWORD_CAP)
        signals.append(
            Signal(f"Foundational keywords ({', '.join(core_hits)}): {weight:+d}", weight, SignalCategory.KEYWORD)
        )

    polish_hits = _matched_keywords(content, W.POLISH_KEYWORDS)
    if polish_hits:
        weight = _capped(len(polish_hits), W.POLISH_KEYWORD_WEIGHT, W.POLISH_KEYWORD_CAP)
        signals.append(
            Signal(f"Polish keywords ({', '.join(polish_hits)}): {weight:+d}", weight, SignalCategory.KEYWORD)
        )
    return signals


def dependency_signals(title: str, description: str) -> List[Signal]:
    """Blocker or blocked signal when the text references another issue."""
    content = f"{title} {description}"
    if not any(r.search(content) for r in _DEPENDENCY_RES):
        return []
    if any(r.search(content) for r in _BLOCKING_RES):
        weight = W.DEPENDENCY_BLOCKER_WEIGHT
        return [Signal(f"Blocks other issues: {weight:+d}", weight, SignalCategory.DEPENDENCY)]
    weight = W.DEPENDENCY_BLOCKED_WEIGHT
    return [Signal(f"Blocked by other issues: {weight:+d}", weight, SignalCategory.DEPENDENCY)]


def extract_signals(metadata: IssueMetadata) -> List[Signal]:
    """Return label, milestone, keyword and dependency signals for one issue."""
    return [
        *label_signals(metadata.labels),
        *milestone_signals(metadata.milestone),
        *keyword_signals(metadata.title, metadata.description),
        *dependency_signals(metadata.title, metadata.description),
    ]


__all__ = [
    "dependency_signals",
    "extract_signals",
    "keyword_signals",
    "label_signals",
    "milestone_signals",
    "milestone_weight",
]
