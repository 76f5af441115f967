# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Command-line operations: analyze, apply, check, overrides, metrics."""
