# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Rationale text for placement decisions.

Builds the human-readable summary attached to a `ScoreResult`. It does NOT
influence scoring or placement; it only reads their outputs.

The rationale:
- states whether the issue is new or already ordered, and the outcome
- names the signal categories that dominated the score
- lists roadmap path phrases by name whenever any matched
- states whether existing items must be resequenced
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from roadmap_priority.signals.models import Action, Signal, SignalCategory
from roadmap_priority.signals.scoring import PriorityScore
from roadmap_priority.signals.weights import ROADMAP_PATH_LABEL_PREFIX

MAX_LISTED_FACTORS = 7

_CATEGORY_NAMES = {
    SignalCategory.LABEL: "labels",
    SignalCategory.MILESTONE: "milestone",
    SignalCategory.KEYWORD: "keywords",
    SignalCategory.DEPENDENCY: "dependencies",
    SignalCategory.ROADMAP_PATH: "roadmap paths",
}


def dominant_categories(priority: PriorityScore) -> List[SignalCategory]:
    """Categories ordered by absolute contribution, ties in declaration order."""
    totals = priority.by_category()
    ordered = list(totals.keys())
    return sorted(ordered, key=lambda c: -abs(totals[c]))


def roadmap_phrases(signals: Sequence[Signal]) -> List[str]:
    phrases: List[str] = []
    for s in signals:
        if s.category != SignalCategory.ROADMAP_PATH:
            continue
        phrase = s.label[len(ROADMAP_PATH_LABEL_PREFIX):]
        phrases.append(phrase.split(" (", 1)[0])
    return phrases


def build_rationale(
    issue_number: int,
    priority: PriorityScore,
    action: Action,
    recommended_order: int,
    requires_resequence: bool,
    existing_order: Optional[int] = None,
) -> str:
    lines: List[str] = []

    if existing_order is not None:
        lines.append(f"Issue #{issue_number} already has implementation order {existing_order}.")
        if action == Action.SKIP:
            lines.append("Current position is within one place of the recommendation; no change needed.")
        else:
            lines.append(f"Recommending move to position {recommended_order}.")
    else:
        lines.append(f"Issue #{issue_number} does not have an implementation order assigned.")
        lines.append(f"Recommending insertion at position {recommended_order}.")

    lines.append(f"Priority score {priority.total} ({priority.confidence.value} confidence).")

    totals = priority.by_category()
    dominant = dominant_categories(priority)
    if dominant:
        parts = [f"{_CATEGORY_NAMES[c]} {totals[c]:+d}" for c in dominant]
        lines.append(f"Dominant signals: {', '.join(parts)}.")
    else:
        lines.append("No recognized signals; scored as baseline.")

    phrases = roadmap_phrases(priority.signals)
    if phrases:
        lines.append(f"Roadmap path match: {', '.join(phrases)}.")

    if priority.signals:
        lines.append("Factors:")
        lines.extend(f"- {label}" for label in priority.factors[:MAX_LISTED_FACTORS])

    if action == Action.ASSIGN:
        if requires_resequence:
            lines.append("Impact: existing items at or after this position shift down by one.")
        else:
            lines.append("Impact: appended without affecting existing order.")

    return "\n".join(lines)


__all__ = ["build_rationale", "dominant_categories", "roadmap_phrases", "MAX_LISTED_FACTORS"]
