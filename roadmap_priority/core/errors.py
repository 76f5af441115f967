# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Exception types raised by the backlog engine.

Input problems and invariant violations are fatal for a single invocation.
Commands map them to exit codes; nothing here is retried.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class RoadmapPriorityError(Exception):
    """Base class for all engine errors."""


class InputValidationError(RoadmapPriorityError):
    """Malformed command input (bad integer, unreadable description file)."""


class ConfigurationError(InputValidationError):
    """A config.yaml or ROADMAP_* value has the wrong type."""


class BacklogDocumentError(RoadmapPriorityError):
    """Raised when the persisted backlog is absent or cannot be parsed."""

    def __init__(self, path: Optional[Path], message: str):
        self.path = path
        self.message = message
        where = str(path) if path is not None else "<memory>"
        super().__init__(f"Backlog document {where}: {message}")


class BacklogInvariantError(RoadmapPriorityError):
    """Order set not contiguous from 1, or duplicate issue numbers."""


class DuplicateIssueError(BacklogInvariantError):
    def __init__(self, issue: int):
        self.issue = issue
        super().__init__(f"Issue #{issue} already exists in the backlog")


class IssueNotFoundError(BacklogInvariantError):
    def __init__(self, issue: int):
        self.issue = issue
        super().__init__(f"Issue #{issue} not found in the backlog")


class OrderOutOfRangeError(BacklogInvariantError):
    def __init__(self, order: int, low: int, high: int):
        self.order = order
        self.low = low
        self.high = high
        super().__init__(f"Order {order} outside valid range [{low}, {high}]")


class StaleBacklogError(RoadmapPriorityError):
    """The backlog changed on disk since the caller read it."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Backlog version mismatch: expected {expected[:12]}, found {actual[:12]}")


__all__ = [
    "RoadmapPriorityError",
    "InputValidationError",
    "ConfigurationError",
    "BacklogDocumentError",
    "BacklogInvariantError",
    "DuplicateIssueError",
    "IssueNotFoundError",
    "OrderOutOfRangeError",
    "StaleBacklogError",
]
