# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""
Backlog persistence store.

The backlog lives in a single JSON document (default
roadmap/implementation-order.json). This store is its only writer.

Contract for `update`:
  1. acquire the injected guard (lock file by default)
  2. read and parse the document, compute its version stamp
  3. reject if the caller's expected version is stale
  4. validate the ordering invariant, mutate, validate again
  5. write atomically (temp file + rename) only if content changed

Any failure before step 5 leaves the document untouched.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Tuple

from roadmap_priority.core.backlog.models import Backlog, validate_backlog
from roadmap_priority.core.errors import BacklogDocumentError, StaleBacklogError
from roadmap_priority.core.io.atomic import atomic_write_json, compute_checksum
from roadmap_priority.core.io.locks import GuardFactory, file_lock_guard

logger = logging.getLogger(__name__)

Mutation = Callable[[Backlog], Backlog]


class BacklogStore:
    """File-backed backlog with an atomic read-validate-write cycle."""

    def __init__(self, path: Path, guard: Optional[GuardFactory] = None, lock_timeout_ms: int = 2000):
        self.path = Path(path)
        self._guard = guard or file_lock_guard(lock_timeout_ms)

    def exists(self) -> bool:
        return self.path.exists()

    def _load_raw(self) -> dict:
        if not self.exists():
            raise BacklogDocumentError(self.path, "file not found")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise BacklogDocumentError(self.path, f"invalid JSON: {e}") from e
        except OSError as e:
            raise BacklogDocumentError(self.path, f"unreadable: {e}") from e

    def read(self, validate: bool = True) -> Tuple[Backlog, str]:
        """Return (backlog, version). Raises BacklogDocumentError if absent or malformed."""
        raw = self._load_raw()
        backlog = Backlog.from_dict(raw, path=self.path)
        if validate:
            validate_backlog(backlog)
        version = compute_checksum(raw)
        logger.debug("[STORE] read %s items=%d version=%s", self.path, len(backlog), version[:12])
        return backlog, version

    def read_or_empty(self) -> Backlog:
        """Like `read`, but an absent document is an empty backlog."""
        if not self.exists():
            logger.info("[STORE] %s not found; treating backlog as empty", self.path)
            return Backlog()
        backlog, _ = self.read()
        return backlog

    def version(self) -> str:
        return compute_checksum(self._load_raw())

    def update(
        self,
        mutate: Mutation,
        expected_version: Optional[str] = None,
        generated: Optional[str] = None,
    ) -> Backlog:
        """Apply `mutate` under the guard and persist the result.

        Parameters
        ----------
        mutate:
            Pure function from the current backlog to the new one.
        expected_version:
            Version stamp the caller based its decision on. A different
            on-disk version raises StaleBacklogError.
        generated:
            New value for the document's `generated` field. When None the
            existing value is kept so identical inputs give identical files.
        """
        with self._guard(self.path):
            current, version = self.read()
            if expected_version is not None and expected_version != version:
                raise StaleBacklogError(expected_version, version)

            updated = mutate(current)
            validate_backlog(updated)
            if generated is not None:
                updated = replace(updated, generated=generated)

            if updated == current:
                logger.info("[STORE] no changes for %s", self.path)
                return current

            atomic_write_json(self.path, updated.to_dict())
            logger.info("[STORE] wrote %s items=%d", self.path, len(updated))
            return updated

    def write(self, backlog: Backlog) -> None:
        """Replace the whole document (used to create a backlog)."""
        validate_backlog(backlog)
        with self._guard(self.path):
            atomic_write_json(self.path, backlog.to_dict())


__all__ = ["BacklogStore", "Mutation"]
