"""Capture modification times for a list of paths."""
from __future__ import annotations

import os
from typing import Iterable

from .types import Snapshot

# Recorded for paths that cannot be stat'ed; lower than any real mtime.
MISSING_MTIME = float("-inf")


def take_snapshot(paths: Iterable[str]) -> Snapshot:
    """Return a mapping of each path in *paths* to its modification time.

    A path that disappeared between listing and stat, or that cannot be read,
    is recorded with :data:`MISSING_MTIME` so the diff can still account for it.
    """

    snapshot: Snapshot = {}
    for path in paths:
        try:
            snapshot[path] = os.stat(path).st_mtime
        except OSError:
            snapshot[path] = MISSING_MTIME
    return snapshot


__all__ = ["MISSING_MTIME", "take_snapshot"]
