"""Compute the change set between two snapshots."""
from __future__ import annotations

from typing import Mapping

from .types import ChangeKind, ChangeSet

_ABSENT = object()


def diff_snapshots(
    previous: Mapping[str, float],
    current: Mapping[str, float],
    *,
    legacy_overwrite: bool = False,
) -> ChangeSet:
    """Return the paths whose presence or timestamp differs.

    Both snapshots are treated as sets of ``(path, mtime)`` pairs. Pairs only
    found in *current* are ``created`` when the path is new and ``updated``
    when it was already known. Paths missing from *current* are ``deleted``.

    With *legacy_overwrite* every path whose pair is missing from *current*
    is marked ``deleted``, including paths that still exist with a newer
    timestamp. Older consumers relied on that classification for updates.
    """

    changes: ChangeSet = {}

    for path, mtime in current.items():
        if previous.get(path, _ABSENT) != mtime:
            changes[path] = ChangeKind.UPDATED if path in previous else ChangeKind.CREATED

    for path, mtime in previous.items():
        if path not in current:
            changes[path] = ChangeKind.DELETED
        elif legacy_overwrite and current[path] != mtime:
            changes[path] = ChangeKind.DELETED

    return changes


__all__ = ["diff_snapshots"]
