# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""
Apply an analyze decision to the persisted backlog.

Reads the backlog under the store lock, inserts/moves the issue, verifies
the ordering invariant and rewrites the document atomically. `skip` only
validates the document and never writes.

An issue that is already in the backlog is moved rather than inserted when
`--has-existing-order true` (or `--reposition`) is given; pass it whenever
analyze reported `analysis.reposition`.

Exit: 0 success, 1 invariant violation, 2 absent/malformed backlog or bad
input, 3 lock timeout or backlog changed since --expected-version.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import List, Optional

from roadmap_priority.commands._common import (
    EXIT_CONTENTION,
    EXIT_INPUT,
    EXIT_INVARIANT,
    EXIT_OK,
    configure_logging,
    fail,
    load_environment,
    parse_bool,
    positive_int,
)
from roadmap_priority.core.artifacts import mark_applied
from roadmap_priority.core.backlog.models import Backlog
from roadmap_priority.core.backlog.mutator import apply
from roadmap_priority.core.backlog.store import BacklogStore
from roadmap_priority.core.config import get_backlog_path, get_lock_timeout_ms, load_config
from roadmap_priority.core.errors import (
    BacklogDocumentError,
    BacklogInvariantError,
    ConfigurationError,
    InputValidationError,
    StaleBacklogError,
)
from roadmap_priority.signals.models import Action

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyRequest:
    """Every input the apply command understands, with its default."""

    issue_number: int
    title: str = ""
    recommended_order: Optional[int] = None
    requires_resequence: bool = False
    action: Action = Action.ASSIGN
    backlog_path: str = "roadmap/implementation-order.json"
    reposition: bool = False
    expected_version: Optional[str] = None
    stamp_generated: bool = False
    artifact: Optional[str] = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ApplyRequest":
        return cls(
            issue_number=args.issue_number,
            title=args.title,
            recommended_order=args.recommended_order,
            requires_resequence=args.requires_resequence,
            action=Action(args.action),
            backlog_path=args.backlog or get_backlog_path(),
            reposition=args.reposition or args.has_existing_order,
            expected_version=args.expected_version,
            stamp_generated=args.stamp_generated,
            artifact=args.artifact,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-priority-apply",
        description="Apply an implementation order decision to the backlog document.",
    )
    parser.add_argument("-n", "--issue-number", type=positive_int, required=True, help="issue number")
    parser.add_argument("-t", "--title", default="", help="issue title")
    parser.add_argument("-o", "--recommended-order", type=positive_int, default=None, help="target order")
    parser.add_argument("-r", "--requires-resequence", type=parse_bool, default=False, help="shift later items")
    parser.add_argument(
        "-a",
        "--action",
        choices=[a.value for a in Action],
        default=Action.ASSIGN.value,
        help="decision from analyze",
    )
    parser.add_argument("--backlog", default=None, help="backlog JSON path (default from config)")
    parser.add_argument("--reposition", action="store_true", help="move an issue already in the backlog")
    parser.add_argument(
        "--has-existing-order",
        type=parse_bool,
        default=False,
        help="true if the issue is already ordered (same as --reposition)",
    )
    parser.add_argument("--expected-version", default=None, help="fail if the backlog changed since this version")
    parser.add_argument("--stamp-generated", action="store_true", help="set 'generated' to the current UTC time")
    parser.add_argument("--artifact", default=None, help="decision artifact to mark as applied")
    return parser


def run(request: ApplyRequest, store: BacklogStore, now: Optional[datetime] = None) -> Backlog:
    """Apply the request through the store. Raises on any failure."""
    if request.action == Action.SKIP:
        backlog, _ = store.read()
        logger.info("[APPLY] skip #%d; backlog unchanged", request.issue_number)
        return backlog

    if request.recommended_order is None:
        raise InputValidationError("--recommended-order is required for assign")

    # Repositioned items keep their stored title unless a new one is given.
    title = request.title or ("" if request.reposition else f"Issue #{request.issue_number}")

    generated = None
    if request.stamp_generated:
        generated = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H:%M:%SZ")

    mutation = partial(
        apply,
        issue_number=request.issue_number,
        title=title,
        action=request.action,
        recommended_order=request.recommended_order,
        requires_resequence=request.requires_resequence,
        reposition=request.reposition,
    )
    return store.update(mutation, expected_version=request.expected_version, generated=generated)


def main(argv: Optional[List[str]] = None) -> int:
    load_environment()
    args = build_parser().parse_args(argv)
    try:
        config = load_config(reload=True)
    except ConfigurationError as e:
        configure_logging("INFO")
        return fail(logger, EXIT_INPUT, str(e))
    configure_logging(config.log_level)

    request = ApplyRequest.from_args(args)
    store = BacklogStore(Path(request.backlog_path), lock_timeout_ms=get_lock_timeout_ms())

    try:
        backlog = run(request, store)
    except BacklogInvariantError as e:
        return fail(logger, EXIT_INVARIANT, str(e))
    except (BacklogDocumentError, InputValidationError) as e:
        return fail(logger, EXIT_INPUT, str(e))
    except (StaleBacklogError, TimeoutError) as e:
        return fail(logger, EXIT_CONTENTION, str(e))

    if request.artifact and request.action == Action.ASSIGN:
        try:
            mark_applied(Path(request.artifact))
        except (OSError, ValueError) as e:
            logger.warning("[APPLY] could not mark artifact %s applied: %s", request.artifact, e)

    entry = backlog.find(request.issue_number)
    print(
        json.dumps(
            {
                "issueNumber": request.issue_number,
                "action": request.action.value,
                "order": entry.order if entry is not None else None,
                "totalIssues": len(backlog),
                "version": store.version(),
            },
            indent=2,
        )
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
