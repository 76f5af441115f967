# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Roadmap path matching: bonus signals for known foundational subsystems."""

from __future__ import annotations

from typing import List

from roadmap_priority.signals.models import Signal, SignalCategory
from roadmap_priority.signals.weights import ROADMAP_PATH_LABEL_PREFIX, ROADMAP_PATH_WEIGHTS


def match_roadmap_paths(description: str) -> List[Signal]:
    """Scan the description (not the title) for roadmap path phrases.

    Case-insensitive substring match. A phrase that occurs several times
    still contributes once. Output follows table order.
    """
    content = (description or "").lower()
    if not content:
        return []
    return [
        Signal(f"{ROADMAP_PATH_LABEL_PREFIX}{phrase} ({weight:+d})", weight, SignalCategory.ROADMAP_PATH)
        for phrase, weight in ROADMAP_PATH_WEIGHTS.items()
        if phrase in content
    ]


def is_roadmap_factor(label: str) -> bool:
    return label.startswith(ROADMAP_PATH_LABEL_PREFIX)


__all__ = ["match_roadmap_paths", "is_roadmap_factor"]
