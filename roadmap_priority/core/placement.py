# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Placement decision: score + current position -> assign or skip.

Stateless and deterministic. Terminal actions only:

- ASSIGN: place the item at `recommended_order`
- SKIP: leave an already-ordered item where it is

Theoretical order by confidence:

    high   -> 1 (front of the backlog)
    medium -> max(1, backlog_length // 2)
    low    -> backlog_length + 1 (append)

New items are always assigned; resequencing is needed whenever the target
position displaces existing items. Existing items are skipped when they sit
within one position of the theoretical order, unless resequencing is forced.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from roadmap_priority.signals.explain import build_rationale
from roadmap_priority.signals.models import Action, Confidence, ScoreResult, Signal
from roadmap_priority.signals.scoring import PriorityScore

logger = logging.getLogger(__name__)

SKIP_TOLERANCE = 1


def theoretical_order(confidence: Confidence, backlog_length: int) -> int:
    if confidence == Confidence.HIGH:
        return 1
    if confidence == Confidence.MEDIUM:
        return max(1, backlog_length // 2)
    return backlog_length + 1


def decide(
    issue_number: int,
    priority_score: int,
    confidence: Confidence,
    existing_order: Optional[int] = None,
    force_resequence: bool = False,
    backlog_length: int = 0,
    signals: Sequence[Signal] = (),
) -> ScoreResult:
    """Decide where (and whether) an issue goes in the backlog.

    Parameters
    ----------
    issue_number:
        Issue being placed.
    priority_score, confidence:
        Output of the scoring engine.
    existing_order:
        Current position when the issue is already in the backlog, else None.
    force_resequence:
        Reposition even when the current position is close enough.
    backlog_length:
        Number of items currently in the backlog.
    signals:
        Signals behind the score; used for `factors` and the rationale only.

    Returns
    -------
    ScoreResult
    """
    if backlog_length < 0:
        raise ValueError(f"backlog_length must be >= 0, got {backlog_length}")

    target = theoretical_order(confidence, backlog_length)

    if existing_order is None:
        action = Action.ASSIGN
        recommended = target
        requires_resequence = recommended <= backlog_length
    else:
        delta = abs(existing_order - target)
        if delta <= SKIP_TOLERANCE and not force_resequence:
            action = Action.SKIP
            recommended = existing_order
            requires_resequence = False
        else:
            action = Action.ASSIGN
            recommended = target
            requires_resequence = True

    priority = PriorityScore(total=priority_score, confidence=confidence, signals=list(signals))
    rationale = build_rationale(
        issue_number,
        priority,
        action,
        recommended,
        requires_resequence,
        existing_order=existing_order,
    )

    logger.info(
        "[PLACEMENT] #%d score=%d confidence=%s action=%s order=%d resequence=%s existing=%s",
        issue_number,
        priority_score,
        confidence.value,
        action.value,
        recommended,
        requires_resequence,
        existing_order if existing_order is not None else "none",
    )

    return ScoreResult(
        issue_number=issue_number,
        priority_score=priority_score,
        confidence=confidence,
        action=action,
        recommended_order=recommended,
        requires_resequence=requires_resequence,
        factors=priority.factors,
        rationale=rationale,
        existing_order=existing_order,
        backlog_length=backlog_length,
        force_resequence=force_resequence,
    )


__all__ = ["SKIP_TOLERANCE", "decide", "theoretical_order"]
