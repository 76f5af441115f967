# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Deterministic issue-priority scoring and backlog resequencing."""

__version__ = "0.1.0"
