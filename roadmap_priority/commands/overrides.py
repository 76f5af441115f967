# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""List manual overrides of automated placements found in decision artifacts."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from roadmap_priority.commands._common import EXIT_INPUT, EXIT_OK, configure_logging, fail, load_environment
from roadmap_priority.core.artifacts import detect_overrides, load_artifacts
from roadmap_priority.core.config import get_artifacts_dir, load_config
from roadmap_priority.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-priority-overrides",
        description="Detect manual order changes made within 24h of an applied decision.",
    )
    parser.add_argument("--artifact-dir", default=None, help="artifact directory (default from config)")
    parser.add_argument("--days-back", type=int, default=None, help="only consider recent artifacts")
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
    artifacts = load_artifacts(directory, days_back=args.days_back)
    overrides = detect_overrides(artifacts)
    logger.info("[OVERRIDES] %d artifact(s), %d override(s) in %s", len(artifacts), len(overrides), directory)

    print(
        json.dumps(
            {
                "artifacts": len(artifacts),
                "overrides": [o.to_dict() for o in overrides],
            },
            indent=2,
        )
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
