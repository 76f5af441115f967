# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""
Summarise recent decision artifacts.

Prints one JSON record: confidence counts, applied and override rates and an
ordering snapshot built from the artifacts' recommended orders.

Exit: 0 summary produced (also for an empty window), 2 bad configuration.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from roadmap_priority.commands._common import (
    EXIT_INPUT,
    EXIT_OK,
    configure_logging,
    fail,
    load_environment,
    positive_int,
)
from roadmap_priority.core.artifacts import load_artifacts, summarize_artifacts
from roadmap_priority.core.config import get_artifacts_dir, load_config
from roadmap_priority.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_DAYS = 7


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-priority-metrics",
        description="Summarise implementation order decisions over a recent period.",
    )
    parser.add_argument("--artifact-dir", default=None, help="artifact directory (default from config)")
    parser.add_argument("--days", type=positive_int, default=DEFAULT_PERIOD_DAYS, help="period length in days")
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

    directory = Path(args.artifact_dir or get_artifacts_dir())
    artifacts = load_artifacts(directory, days_back=args.days)
    metrics = summarize_artifacts(artifacts, args.days)

    if metrics.total == 0:
        logger.info("[METRICS] no artifacts in %s for the last %d day(s)", directory, args.days)
    else:
        logger.info(
            "[METRICS] %d processed, high=%d%% applied=%d%% overrides=%d%%",
            metrics.total,
            metrics.high_confidence_pct,
            metrics.applied_pct,
            metrics.override_rate,
        )
    for note in metrics.recommendations():
        logger.warning("[METRICS] %s", note)

    print(json.dumps(metrics.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
