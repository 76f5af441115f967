# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""Atomic writes for JSON state files: temp file in the same dir, fsync, rename."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def compute_checksum(obj: Dict[str, Any]) -> str:
    """SHA256 of canonical JSON. Deterministic for the same content."""
    canonical = json.dumps(obj, sort_keys=True, indent=2, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def atomic_write_json(path: Path, obj: Dict[str, Any], indent: int | None = 2) -> None:
    """
    Write JSON to path atomically. Readers see either the old file or the new
    one, never a partial write. The temp file is removed on failure.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f"{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=indent, default=str)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except Exception as e:
        logger.warning("[ATOMIC] Failed to write %s: %s", path, e)
        if os.path.exists(tmp):
            try:
                os.unlink(tmp)
            except OSError:
                pass
        raise


__all__ = ["atomic_write_json", "compute_checksum"]
