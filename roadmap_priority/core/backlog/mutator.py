# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Backlog mutation: apply an assign/skip decision to a backlog snapshot.

Pure with respect to its input: the given `Backlog` is never modified, a new
one is returned. Preconditions are checked before any item is moved and the
ordering invariant is re-checked before returning, so a caller that persists
the result never persists a broken backlog.
"""

from __future__ import annotations

import logging
from typing import List, Union

from roadmap_priority.core.backlog.models import Backlog, BacklogItem, validate_backlog
from roadmap_priority.core.errors import DuplicateIssueError, IssueNotFoundError, OrderOutOfRangeError
from roadmap_priority.signals.models import Action

logger = logging.getLogger(__name__)


def _insert(items: List[BacklogItem], issue: int, title: str, position: int) -> List[BacklogItem]:
    """Shift every item at `position` or later down by one and insert."""
    shifted = [
        BacklogItem(i.issue, i.order + 1, i.title) if i.order >= position else i
        for i in items
    ]
    shifted.append(BacklogItem(issue, position, title))
    return shifted


def _remove(items: List[BacklogItem], issue: int) -> List[BacklogItem]:
    """Drop one item and close the gap it leaves."""
    removed = next(i for i in items if i.issue == issue)
    return [
        BacklogItem(i.issue, i.order - 1, i.title) if i.order > removed.order else i
        for i in items
        if i.issue != issue
    ]


def apply(
    backlog: Backlog,
    issue_number: int,
    title: str,
    action: Union[Action, str],
    recommended_order: int,
    requires_resequence: bool,
    reposition: bool = False,
) -> Backlog:
    """Apply a placement decision and return the resulting backlog.

    Parameters
    ----------
    backlog:
        Current snapshot; must already satisfy the ordering invariant.
    action:
        ``skip`` returns `backlog` unchanged. ``assign`` inserts (or, with
        `reposition`, moves) the issue.
    recommended_order:
        Target position in ``[1, N + 1]``. For a repositioned issue ``N + 1``
        means the end of the backlog.
    requires_resequence:
        True inserts at `recommended_order` and shifts later items; False
        appends at ``N + 1``.
    reposition:
        The issue is expected to already be in the backlog and is moved.

    Raises
    ------
    DuplicateIssueError
        New item whose issue number is already present.
    IssueNotFoundError
        Reposition of an issue that is not present.
    OrderOutOfRangeError
        `recommended_order` outside the valid range.
    BacklogInvariantError
        Input or result violates the ordering invariant.
    """
    action = Action(action)
    if action == Action.SKIP:
        logger.info("[BACKLOG] skip #%d: backlog unchanged (%d items)", issue_number, len(backlog))
        return backlog

    validate_backlog(backlog)
    items = list(backlog.items)
    existing = backlog.find(issue_number)

    if reposition:
        if existing is None:
            raise IssueNotFoundError(issue_number)
        if not 1 <= recommended_order <= len(backlog) + 1:
            raise OrderOutOfRangeError(recommended_order, 1, len(backlog) + 1)
        title = title or existing.title
        items = _remove(items, issue_number)
        # N + 1 counted the moved item itself; after removal the end is N.
        recommended_order = min(recommended_order, len(items) + 1)
    elif existing is not None:
        raise DuplicateIssueError(issue_number)

    n = len(items)
    if not 1 <= recommended_order <= n + 1:
        raise OrderOutOfRangeError(recommended_order, 1, n + 1)

    if requires_resequence:
        position = recommended_order
    else:
        position = n + 1
        if recommended_order != position:
            logger.warning(
                "[BACKLOG] #%d: recommended order %d ignored without resequence; appending at %d",
                issue_number,
                recommended_order,
                position,
            )

    updated = backlog.with_items(_insert(items, issue_number, title, position))
    validate_backlog(updated)

    if reposition:
        logger.info("[BACKLOG] moved #%d from %d to %d", issue_number, existing.order, position)
    elif requires_resequence:
        logger.info("[BACKLOG] inserted #%d at %d, shifted %d items", issue_number, position, n - position + 1)
    else:
        logger.info("[BACKLOG] appended #%d at %d", issue_number, position)
    return updated


__all__ = ["apply"]
