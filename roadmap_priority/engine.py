# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Analysis pipeline: metadata -> signals -> score -> placement decision.

No I/O. The only persisted state (the backlog) is handled by the caller
through `BacklogStore`; this module needs just the backlog length.
"""

from __future__ import annotations

import logging
from typing import List

from roadmap_priority.core.placement import decide
from roadmap_priority.signals.extractor import extract_signals
from roadmap_priority.signals.models import IssueMetadata, ScoreResult, Signal
from roadmap_priority.signals.roadmap import match_roadmap_paths
from roadmap_priority.signals.scoring import score

logger = logging.getLogger(__name__)


def collect_signals(metadata: IssueMetadata) -> List[Signal]:
    """Extractor signals followed by roadmap path signals."""
    return [*extract_signals(metadata), *match_roadmap_paths(metadata.description)]


def analyze_issue(metadata: IssueMetadata, backlog_length: int) -> ScoreResult:
    signals = collect_signals(metadata)
    priority_score, confidence = score(signals)
    logger.debug("[ENGINE] #%d signals=%d score=%d", metadata.number, len(signals), priority_score)
    return decide(
        metadata.number,
        priority_score,
        confidence,
        existing_order=metadata.existing_order,
        force_resequence=metadata.force_resequence,
        backlog_length=backlog_length,
        signals=signals,
    )


__all__ = ["analyze_issue", "collect_signals"]
