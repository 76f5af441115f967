#!/usr/bin/env python3
# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Analyze an issue and print its recommended implementation order."""

import sys
from pathlib import Path

_REPO = Path(__file__).resolve().parents[1]
if str(_REPO) not in sys.path:
    sys.path.insert(0, str(_REPO))

from roadmap_priority.commands.analyze import main

if __name__ == "__main__":
    sys.exit(main())
