# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
"""File locking for the backlog document: lock file under <dir>/.locks/.

The backlog store takes a guard factory so callers can swap the lock file
for another mutual-exclusion mechanism (or none, for in-process tests).
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Callable, ContextManager, Generator

logger = logging.getLogger(__name__)

_INITIAL_BACKOFF_MS = 10
_MAX_BACKOFF_MS = 200

# Given the guarded path, returns a context manager held for the whole
# read-validate-write cycle.
GuardFactory = Callable[[Path], ContextManager[None]]


def lock_path_for(store_path: Path) -> Path:
    """Derive lock file path: <parent>/.locks/<name>.lock"""
    return store_path.parent / ".locks" / f"{store_path.name}.lock"


@contextmanager
def with_file_lock(store_path: Path, timeout_ms: int = 2000) -> Generator[None, None, None]:
    """
    Acquire an exclusive lock for the given store path.
    Uses O_CREAT|O_EXCL (create exclusive) with retry/backoff up to timeout_ms.
    At least one attempt is made even with a zero timeout.
    """
    lock_path = lock_path_for(Path(store_path))
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    deadline = time.perf_counter() + (timeout_ms / 1000.0)
    backoff_ms = _INITIAL_BACKOFF_MS
    fd = None
    try:
        while True:
            try:
                fd = os.open(str(lock_path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o600)
                os.write(fd, str(os.getpid()).encode("utf-8"))
                os.fsync(fd)
                break
            except FileExistsError:
                if time.perf_counter() >= deadline:
                    raise TimeoutError(f"Could not acquire lock for {store_path} within {timeout_ms}ms")
                time.sleep(backoff_ms / 1000.0)
                backoff_ms = min(backoff_ms * 2, _MAX_BACKOFF_MS)
        logger.debug("[LOCKS] acquired %s", lock_path)
        yield
    finally:
        if fd is not None:
            try:
                os.close(fd)
            except OSError:
                pass
            try:
                lock_path.unlink(missing_ok=True)
            except OSError as e:
                logger.debug("[LOCKS] Failed to release lock %s: %s", lock_path, e)


def file_lock_guard(timeout_ms: int = 2000) -> GuardFactory:
    """Guard factory backed by `with_file_lock`."""

    def _guard(path: Path) -> ContextManager[None]:
        return with_file_lock(path, timeout_ms=timeout_ms)

    return _guard


def no_guard(path: Path) -> ContextManager[None]:
    """Guard for callers that already serialize access themselves."""
    return nullcontext()


__all__ = ["GuardFactory", "file_lock_guard", "lock_path_for", "no_guard", "with_file_lock"]
