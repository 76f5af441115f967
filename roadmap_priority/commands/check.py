# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""
Validate that the backlog has no gaps, duplicate orders or duplicate issues.

Exit: 0 contiguous and unique, 1 violations found, 2 absent/malformed document.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from roadmap_priority.commands._common import (
    EXIT_INPUT,
    EXIT_INVARIANT,
    EXIT_OK,
    configure_logging,
    fail,
    load_environment,
)
from roadmap_priority.core.backlog.models import check_integrity
from roadmap_priority.core.backlog.store import BacklogStore
from roadmap_priority.core.config import get_backlog_path, load_config
from roadmap_priority.core.errors import BacklogDocumentError, ConfigurationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-priority-check",
        description="Check backlog ordering integrity.",
    )
    parser.add_argument("--backlog", default=None, help="backlog JSON path (default from config)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_environment()
    args = build_parser().parse_args(argv)
    try:
        config = load_config(reload=True)
    except ConfigurationError as e:
        configure_logging("INFO")
        return fail(logger, EXIT_INPUT, str(e))
    configure_logging(config.log_level)

    store = BacklogStore(Path(args.backlog or get_backlog_path()))
    try:
        backlog, _ = store.read(validate=False)
    except BacklogDocumentError as e:
        return fail(logger, EXIT_INPUT, str(e))

    report = check_integrity(backlog)
    print(json.dumps(report.to_dict(), indent=2))

    if report.ok:
        logger.info("[CHECK] %s: %d items, contiguous", store.path, report.total)
        return EXIT_OK
    if report.gaps:
        logger.error("[CHECK] gaps in ordering: %s", report.gaps)
    if report.duplicate_orders:
        logger.error("[CHECK] duplicate order values: %s", report.duplicate_orders)
    if report.duplicate_issues:
        logger.error("[CHECK] duplicate issues: %s", report.duplicate_issues)
    return EXIT_INVARIANT


if __name__ == "__main__":
    raise SystemExit(main())
