"""Shared type definitions for the polling watcher."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ChangeKind(str, Enum):
    """Kinds of change reported for a watched path."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


# Absolute path -> modification time at capture.
Snapshot = Dict[str, float]

# Absolute path -> kind of change between two snapshots.
ChangeSet = Dict[str, ChangeKind]


@dataclass(slots=True)
class WatchState:
    """Mutable state of one watch, guarded by the controller's condition."""

    interval: float
    last_snapshot: Snapshot | None = None
    end_snapshot: Snapshot | None = None
    keep_watching: bool = False
    pausing: bool = False
    paused: bool = False


__all__ = ["ChangeKind", "ChangeSet", "Snapshot", "WatchState"]
