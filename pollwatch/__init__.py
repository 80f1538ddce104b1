"""pollwatch package exports."""

from .cli import main as cli_main
from .config import WatchOptions, load_options
from .paths import expand_patterns, resolve_paths
from .watcher import ChangeKind, PollingWatcher, WatchStateError, diff_snapshots, take_snapshot

__all__ = [
    "cli_main",
    "ChangeKind",
    "PollingWatcher",
    "WatchOptions",
    "WatchStateError",
    "diff_snapshots",
    "expand_patterns",
    "load_options",
    "resolve_paths",
    "take_snapshot",
]
