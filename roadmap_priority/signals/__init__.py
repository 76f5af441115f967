# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Signal extraction and scoring for issue prioritisation."""

from roadmap_priority.signals.models import (
    Action,
    Confidence,
    IssueMetadata,
    ScoreResult,
    Signal,
    SignalCategory,
    parse_label_list,
)
from roadmap_priority.signals.extractor import extract_signals
from roadmap_priority.signals.roadmap import match_roadmap_paths
from roadmap_priority.signals.scoring import PriorityScore, confidence_band, score, score_signals

__all__ = [
    "Action",
    "Confidence",
    "IssueMetadata",
    "ScoreResult",
    "Signal",
    "SignalCategory",
    "parse_label_list",
    "extract_signals",
    "match_roadmap_paths",
    "PriorityScore",
    "confidence_band",
    "score",
    "score_signals",
]
