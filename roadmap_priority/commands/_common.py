# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Shared plumbing for the command-line entry points."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import find_dotenv, load_dotenv

# Exit codes shared by all commands.
EXIT_OK = 0
EXIT_INVARIANT = 1
EXIT_INPUT = 2
EXIT_CONTENTION = 3

_TRUE = ("true", "1", "yes", "y", "on")
_FALSE = ("false", "0", "no", "n", "off", "")


def parse_bool(value: str) -> bool:
    """argparse type for ``true``/``false`` style flags."""
    lowered = (value or "").strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"expected true/false, got {value!r}")


def positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {parsed}")
    return parsed


def load_environment() -> None:
    """Load .env from the working directory (or a parent) if present."""
    load_dotenv(find_dotenv(usecwd=True))


def configure_logging(level: str) -> None:
    """Log to stderr; stdout carries the JSON record only."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def fail(logger: logging.Logger, code: int, message: str) -> int:
    logger.error(message)
    print(f"error: {message}", file=sys.stderr)
    return code
