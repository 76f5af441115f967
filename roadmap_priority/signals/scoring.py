# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Priority scoring.

Aggregates extractor and roadmap path signals into a single integer score
and maps it to a confidence band:

    score >= 200        -> high
    100 <= score < 200  -> medium
    score < 100         -> low

Thresholds are module constants. Callers cannot override them per call.
No side effects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from roadmap_priority.signals.models import Confidence, Signal, SignalCategory

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE_MIN = 200
MEDIUM_CONFIDENCE_MIN = 100


@dataclass(frozen=True)
class PriorityScore:
    """Composite score with its contributing signals."""

    total: int
    confidence: Confidence
    signals: List[Signal] = field(default_factory=list)

    @property
    def factors(self) -> Tuple[str, ...]:
        return tuple(s.label for s in self.signals)

    def by_category(self) -> Dict[SignalCategory, int]:
        """Summed weight per category, in category declaration order."""
        totals: Dict[SignalCategory, int] = {}
        for category in SignalCategory:
            members = [s.weight for s in self.signals if s.category == category]
            if members:
                totals[category] = sum(members)
        return totals


def confidence_band(priority_score: int) -> Confidence:
    if priority_score >= HIGH_CONFIDENCE_MIN:
        return Confidence.HIGH
    if priority_score >= MEDIUM_CONFIDENCE_MIN:
        return Confidence.MEDIUM
    return Confidence.LOW


def score(signals: Sequence[Signal]) -> Tuple[int, Confidence]:
    """Return ``(priority_score, confidence)`` for the given signals."""
    total = sum(s.weight for s in signals)
    return total, confidence_band(total)


def score_signals(signals: Sequence[Signal]) -> PriorityScore:
    total, confidence = score(signals)
    logger.debug("[SCORING] total=%d confidence=%s signals=%d", total, confidence.value, len(signals))
    return PriorityScore(total=total, confidence=confidence, signals=list(signals))


__all__ = [
    "HIGH_CONFIDENCE_MIN",
    "MEDIUM_CONFIDENCE_MIN",
    "PriorityScore",
    "confidence_band",
    "score",
    "score_signals",
]
