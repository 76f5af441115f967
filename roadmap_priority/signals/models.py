# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Signal models: immutable dataclasses for issue metadata and scoring output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple


class SignalCategory(str, Enum):
    """Signal source. Declaration order is the emission order."""

    LABEL = "label"
    MILESTONE = "milestone"
    KEYWORD = "keyword"
    DEPENDENCY = "dependency"
    ROADMAP_PATH = "roadmap_path"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Action(str, Enum):
    ASSIGN = "assign"
    SKIP = "skip"


@dataclass(frozen=True)
class Signal:
    """Named, weighted contribution to the priority score.

    Signals are annotations only; nothing downstream mutates them.
    """

    label: str
    weight: int
    category: SignalCategory


def normalize_labels(labels: Iterable[str]) -> FrozenSet[str]:
    """Lowercase, strip and drop empty entries."""
    return frozenset(l.strip().lower() for l in labels if l and l.strip())


def parse_label_list(raw: str) -> FrozenSet[str]:
    """Parse a comma-separated label list (``"scope:core, feature"``)."""
    return normalize_labels((raw or "").split(","))


@dataclass(frozen=True)
class IssueMetadata:
    """Metadata for one work item as supplied by the orchestrator."""

    number: int
    title: str = ""
    description: str = ""
    labels: FrozenSet[str] = field(default_factory=frozenset)
    milestone: str = ""
    existing_order: Optional[int] = None
    force_resequence: bool = False

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"issue number must be positive, got {self.number}")
        if self.existing_order is not None and self.existing_order < 1:
            raise ValueError(f"existing_order must be positive, got {self.existing_order}")
        object.__setattr__(self, "labels", normalize_labels(self.labels))


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of one analysis. Produced once per invocation."""

    issue_number: int
    priority_score: int
    confidence: Confidence
    action: Action
    recommended_order: int
    requires_resequence: bool
    factors: Tuple[str, ...] = ()
    rationale: str = ""
    existing_order: Optional[int] = None
    backlog_length: int = 0
    force_resequence: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase record printed by the analyze command."""
        return {
            "issueNumber": self.issue_number,
            "priorityScore": self.priority_score,
            "confidence": self.confidence.value,
            "action": self.action.value,
            "requiresResequence": self.requires_resequence,
            "recommendedOrder": self.recommended_order,
            "factors": list(self.factors),
            "rationale": self.rationale,
            "analysis": {
                "existingPosition": self.existing_order,
                "recommendedPosition": self.recommended_order,
                "totalIssues": self.backlog_length,
                "forceResequence": self.force_resequence,
                "reposition": self.existing_order is not None and self.action == Action.ASSIGN,
            },
        }


__all__ = [
    "Action",
    "Confidence",
    "IssueMetadata",
    "ScoreResult",
    "Signal",
    "SignalCategory",
    "normalize_labels",
    "parse_label_list",
]
