"""Snapshot, diff and watch-loop components."""
from .controller import PollingWatcher, WatchStateError
from .diff import diff_snapshots
from .snapshot import MISSING_MTIME, take_snapshot
from .types import ChangeKind, ChangeSet, Snapshot, WatchState

__all__ = [
    "ChangeKind",
    "ChangeSet",
    "MISSING_MTIME",
    "PollingWatcher",
    "Snapshot",
    "WatchState",
    "WatchStateError",
    "diff_snapshots",
    "take_snapshot",
]
