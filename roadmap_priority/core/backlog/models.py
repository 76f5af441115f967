# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Backlog models and the ordering invariant.

Persisted document shape:

    {
      "project": 3,
      "fieldId": "PVTF_...",
      "generated": "2026-01-01T00:00:00Z",
      "items": [{"issue": 12, "order": 1, "title": "..."}, ...]
    }

Invariant: orders are exactly {1..N} and issue numbers are unique.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from roadmap_priority.core.errors import BacklogDocumentError, BacklogInvariantError


@dataclass(frozen=True)
class BacklogItem:
    issue: int
    order: int
    title: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"issue": self.issue, "order": self.order, "title": self.title}


@dataclass(frozen=True)
class Backlog:
    """Ordered backlog snapshot. Items are kept sorted by order."""

    project: Union[int, str, None] = None
    field_id: str = ""
    generated: str = ""
    items: Tuple[BacklogItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(sorted(self.items, key=lambda i: (i.order, i.issue))))

    def __len__(self) -> int:
        return len(self.items)

    def issues(self) -> List[int]:
        return [i.issue for i in self.items]

    def find(self, issue: int) -> Optional[BacklogItem]:
        for item in self.items:
            if item.issue == issue:
                return item
        return None

    def with_items(self, items: Iterable[BacklogItem]) -> "Backlog":
        return replace(self, items=tuple(items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project": self.project,
            "fieldId": self.field_id,
            "generated": self.generated,
            "items": [i.to_dict() for i in self.items],
        }

    @classmethod
    def from_dict(cls, payload: Any, path: Optional[Path] = None) -> "Backlog":
        """Parse a persisted document. Raises BacklogDocumentError on bad shape."""
        if not isinstance(payload, dict):
            raise BacklogDocumentError(path, "document must be a JSON object")
        raw_items = payload.get("items")
        if not isinstance(raw_items, list):
            raise BacklogDocumentError(path, "'items' must be a list")

        items: List[BacklogItem] = []
        for idx, raw in enumerate(raw_items):
            if not isinstance(raw, dict):
                raise BacklogDocumentError(path, f"item {idx} must be an object")
            issue, order = raw.get("issue"), raw.get("order")
            if not _is_positive_int(issue) or not _is_positive_int(order):
                raise BacklogDocumentError(path, f"item {idx} needs positive integer 'issue' and 'order'")
            items.append(BacklogItem(issue=issue, order=order, title=str(raw.get("title") or "")))

        return cls(
            project=payload.get("project"),
            field_id=str(payload.get("fieldId") or ""),
            generated=str(payload.get("generated") or ""),
            items=tuple(items),
        )


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


@dataclass(frozen=True)
class IntegrityReport:
    """Result of checking a backlog against the ordering invariant."""

    total: int
    gaps: List[int] = field(default_factory=list)
    duplicate_orders: List[int] = field(default_factory=list)
    duplicate_issues: List[int] = field(default_factory=list)

    @property
    def is_contiguous(self) -> bool:
        return not self.gaps and not self.duplicate_orders

    @property
    def ok(self) -> bool:
        return self.is_contiguous and not self.duplicate_issues

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalIssues": self.total,
            "gaps": list(self.gaps),
            "duplicateOrders": list(self.duplicate_orders),
            "duplicateIssues": list(self.duplicate_issues),
            "isContiguous": self.is_contiguous,
            "ok": self.ok,
        }


def check_integrity(backlog: Backlog) -> IntegrityReport:
    """Report gaps in 1..N, duplicate orders and duplicate issues."""
    orders = Counter(i.order for i in backlog.items)
    issues = Counter(i.issue for i in backlog.items)
    n = len(backlog.items)
    max_order = max(orders) if orders else 0
    gaps = [o for o in range(1, max(n, max_order) + 1) if o not in orders]
    return IntegrityReport(
        total=n,
        gaps=gaps,
        duplicate_orders=sorted(o for o, c in orders.items() if c > 1),
        duplicate_issues=sorted(i for i, c in issues.items() if c > 1),
    )


def validate_backlog(backlog: Backlog) -> None:
    """Raise BacklogInvariantError unless orders are {1..N} and issues unique."""
    report = check_integrity(backlog)
    if report.ok:
        return
    problems = []
    if report.gaps:
        problems.append(f"gaps={report.gaps}")
    if report.duplicate_orders:
        problems.append(f"duplicate orders={report.duplicate_orders}")
    if report.duplicate_issues:
        problems.append(f"duplicate issues={report.duplicate_issues}")
    raise BacklogInvariantError("Backlog ordering invariant violated: " + "; ".join(problems))


__all__ = [
    "Backlog",
    "BacklogItem",
    "IntegrityReport",
    "check_integrity",
    "validate_backlog",
]
