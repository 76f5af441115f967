# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""
Analyze an issue and recommend a backlog position.

Prints one JSON record to stdout:
  {issueNumber, priorityScore, confidence, action, requiresResequence,
   recommendedOrder, factors[], rationale, analysis{...}}

Exit: 0 analysis produced (including skip), 2 malformed input.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from roadmap_priority.commands._common import (
    EXIT_INPUT,
    EXIT_OK,
    configure_logging,
    fail,
    load_environment,
    parse_bool,
    positive_int,
)
from roadmap_priority.core.artifacts import prune_artifacts, save_artifact
from roadmap_priority.core.backlog.store import BacklogStore
from roadmap_priority.core.config import get_backlog_path, get_lock_timeout_ms, load_config
from roadmap_priority.core.errors import (
    BacklogDocumentError,
    BacklogInvariantError,
    ConfigurationError,
    InputValidationError,
)
from roadmap_priority.engine import analyze_issue
from roadmap_priority.signals.models import IssueMetadata, ScoreResult, parse_label_list

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyzeRequest:
    """Every input the analyze command understands, with its default."""

    issue_number: int
    title: str = ""
    description_file: Optional[str] = None
    labels: str = ""
    milestone: str = ""
    has_existing_order: bool = False
    existing_order: Optional[int] = None
    force_resequence: bool = False
    backlog_path: Optional[str] = None
    backlog_length: Optional[int] = None
    artifact_dir: Optional[str] = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AnalyzeRequest":
        return cls(
            issue_number=args.issue_number,
            title=args.title,
            description_file=args.description_file,
            labels=args.labels,
            milestone=args.milestone,
            has_existing_order=args.has_existing_order,
            existing_order=args.existing_order,
            force_resequence=args.force_resequence,
            backlog_path=args.backlog or get_backlog_path(),
            backlog_length=args.backlog_length,
            artifact_dir=args.artifact_dir,
        )

    def read_description(self) -> str:
        if not self.description_file:
            return ""
        path = Path(self.description_file)
        try:
            return path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise InputValidationError(f"cannot read description file {path}: {e}") from e

    def to_metadata(self) -> IssueMetadata:
        existing: Optional[int] = None
        if self.has_existing_order:
            if self.existing_order is None:
                raise InputValidationError("--existing-order is required when --has-existing-order is true")
            existing = self.existing_order
        return IssueMetadata(
            number=self.issue_number,
            title=self.title,
            description=self.read_description(),
            labels=parse_label_list(self.labels),
            milestone=self.milestone,
            existing_order=existing,
            force_resequence=self.force_resequence,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-priority-analyze",
        description="Score an issue and recommend its implementation order.",
    )
    parser.add_argument("-n", "--issue-number", type=positive_int, required=True, help="issue number")
    parser.add_argument("-t", "--title", default="", help="issue title")
    parser.add_argument("-d", "--description-file", default=None, help="file containing the issue body")
    parser.add_argument("-l", "--labels", default="", help="comma-separated labels")
    parser.add_argument("-m", "--milestone", default="", help="milestone title (may be empty)")
    parser.add_argument("--has-existing-order", type=parse_bool, default=False, help="true if already ordered")
    parser.add_argument("--existing-order", type=positive_int, default=None, help="current order")
    parser.add_argument("--force-resequence", type=parse_bool, default=False, help="reposition even if close")
    parser.add_argument("--backlog", default=None, help="backlog JSON path (default from config)")
    parser.add_argument(
        "--backlog-length",
        type=int,
        default=None,
        help="use this backlog length instead of reading the backlog",
    )
    parser.add_argument("--artifact-dir", default=None, help="also save the result as a decision artifact")
    return parser


def run(request: AnalyzeRequest, lock_timeout_ms: int = 2000) -> ScoreResult:
    """Run the analysis for a parsed request. Raises on malformed input."""
    metadata = request.to_metadata()
    if request.backlog_length is not None:
        if request.backlog_length < 0:
            raise InputValidationError(f"--backlog-length must be >= 0, got {request.backlog_length}")
        length = request.backlog_length
    else:
        store = BacklogStore(Path(request.backlog_path), lock_timeout_ms=lock_timeout_ms)
        length = len(store.read_or_empty())
    return analyze_issue(metadata, length)


def main(argv: Optional[List[str]] = None) -> int:
    load_environment()
    args = build_parser().parse_args(argv)
    try:
        config = load_config(reload=True)
    except ConfigurationError as e:
        configure_logging("INFO")
        return fail(logger, EXIT_INPUT, str(e))
    configure_logging(config.log_level)

    try:
        request = AnalyzeRequest.from_args(args)
        result = run(request, lock_timeout_ms=get_lock_timeout_ms())
    except (InputValidationError, BacklogDocumentError, BacklogInvariantError, ValueError) as e:
        return fail(logger, EXIT_INPUT, str(e))

    payload = result.to_dict()
    if request.artifact_dir:
        save_artifact(payload, Path(request.artifact_dir))
        prune_artifacts(Path(request.artifact_dir), keep=config.artifacts.keep)

    print(json.dumps(payload, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
