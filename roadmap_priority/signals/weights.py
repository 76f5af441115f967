# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Static weight tables for issue prioritisation.

Single source of truth for every number the extractor and the roadmap path
matcher use. Tables are ordered; iteration order is the signal emission order.
"""

from __future__ import annotations

from typing import Dict, Tuple

# Scope labels, most foundational first.
SCOPE_LABEL_WEIGHTS: Dict[str, int] = {
    "scope:core": 100,
    "scope:world": 80,
    "scope:traversal": 70,
    "scope:security": 60,
    "scope:ai": 50,
    "scope:mcp": 40,
    "scope:systems": 40,
    "scope:observability": 20,
    "scope:devx": 10,
}

# Type labels. Also accepted with a "type:" prefix.
TYPE_LABEL_WEIGHTS: Dict[str, int] = {
    "feature": 50,
    "security": 45,
    "infra": 40,
    "enhancement": 30,
    "spike": 25,
    "refactor": 20,
    "test": 10,
    "docs": 5,
    "documentation": 5,
}

TYPE_LABEL_PREFIX = "type:"

# Milestone titles look like "M0", "M2 Traversal". M0 is the most urgent.
MILESTONE_PATTERN = r"^\s*m(\d+)"
MILESTONE_BASE_WEIGHT = 120
MILESTONE_STEP = 10

# Keyword sets are disjoint. Each keyword counts once; totals are capped so
# repeating keywords cannot inflate a score.
FOUNDATIONAL_KEYWORDS: Tuple[str, ...] = (
    "foundation",
    "persistence",
    "core",
    "bootstrap",
    "prerequisite",
    "essential",
    "blocker",
)
FOUNDATIONAL_KEYWORD_WEIGHT = 15
FOUNDATIONAL_KEYWORD_CAP = 45

POLISH_KEYWORDS: Tuple[str, ...] = (
    "typo",
    "polish",
    "documentation",
    "cosmetic",
    "cleanup",
    "nice to have",
    "wording",
)
POLISH_KEYWORD_WEIGHT = -10
POLISH_KEYWORD_CAP = -30

# Cross-issue references. A reference only counts when one of the
# DEPENDENCY_PATTERNS matches; BLOCKING_PATTERNS then decide whether this
# issue unblocks others (blocker) or waits on them (blocked). One signal at most.
DEPENDENCY_PATTERNS: Tuple[str, ...] = (
    r"depends\s+on\s+#\d+",
    r"blocked\s+by\s+#\d+",
    r"blocks\s+#\d+",
    r"prerequisite.*#\d+",
)
BLOCKING_PATTERNS: Tuple[str, ...] = (
    r"blocks\s+#\d+",
    r"prerequisite\s+for",
    r"foundation\s+for",
    r"required\s+for",
)
DEPENDENCY_BLOCKER_WEIGHT = 25
DEPENDENCY_BLOCKED_WEIGHT = 10

# Domain phrases that correlate with foundational subsystems of the world graph.
ROADMAP_PATH_WEIGHTS: Dict[str, int] = {
    "gremlin": 40,
    "graph traversal": 35,
    "vertex": 30,
    "exit edge": 30,
    "cosmos": 25,
    "world event": 25,
    "player identity": 25,
    "location": 15,
}

ROADMAP_PATH_LABEL_PREFIX = "Roadmap path: "


def _assert_disjoint() -> None:
    overlap = set(FOUNDATIONAL_KEYWORDS) & set(POLISH_KEYWORDS)
    if overlap:
        raise ValueError(f"keyword sets overlap: {sorted(overlap)}")


_assert_disjoint()


__all__ = [
    "SCOPE_LABEL_WEIGHTS",
    "TYPE_LABEL_WEIGHTS",
    "TYPE_LABEL_PREFIX",
    "MILESTONE_PATTERN",
    "MILESTONE_BASE_WEIGHT",
    "MILESTONE_STEP",
    "FOUNDATIONAL_KEYWORDS",
    "FOUNDATIONAL_KEYWORD_WEIGHT",
    "FOUNDATIONAL_KEYWORD_CAP",
    "POLISH_KEYWORDS",
    "POLISH_KEYWORD_WEIGHT",
    "POLISH_KEYWORD_CAP",
    "DEPENDENCY_PATTERNS",
    "BLOCKING_PATTERNS",
    "DEPENDENCY_BLOCKER_WEIGHT",
    "DEPENDENCY_BLOCKED_WEIGHT",
    "ROADMAP_PATH_WEIGHTS",
    "ROADMAP_PATH_LABEL_PREFIX",
]
