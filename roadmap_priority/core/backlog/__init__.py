# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Ordered backlog: models, mutation and persistence."""

from roadmap_priority.core.backlog.models import (
    Backlog,
    BacklogItem,
    IntegrityReport,
    check_integrity,
    validate_backlog,
)
from roadmap_priority.core.backlog.mutator import apply
from roadmap_priority.core.backlog.store import BacklogStore

__all__ = [
    "Backlog",
    "BacklogItem",
    "BacklogStore",
    "IntegrityReport",
    "apply",
    "check_integrity",
    "validate_backlog",
]
