"""Polling watch loop with pause, resume, stop and finalize controls."""
from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Sequence

from ..config import WatchOptions, validate_interval
from ..logger import configure_logging, log_event
from ..paths import resolve_paths
from .diff import diff_snapshots
from .snapshot import take_snapshot
from .types import ChangeSet, Snapshot, WatchState

LOGGER_NAME = "pollwatch.watcher"

Callback = Callable[[ChangeSet], None]


class WatchStateError(RuntimeError):
    """Raised when a control call does not fit the current watch state."""


class PollingWatcher:
    """Detect file changes by diffing successive modification-time snapshots.

    :meth:`watch` runs the poll loop on the calling thread and blocks until
    :meth:`stop` is called from elsewhere (another thread or the callback).
    :meth:`pause`, :meth:`resume` and :meth:`stop` are safe to call from any
    thread; all watch state is guarded by a single condition variable.

    Example::

        watcher = PollingWatcher(["src/**/*.py"], WatchOptions(interval=1.0))
        thread = threading.Thread(target=watcher.watch, args=(print,))
        thread.start()
        ...
        watcher.stop()
        thread.join()
    """

    def __init__(
        self,
        patterns: str | Path | Sequence[str | Path],
        options: WatchOptions | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        if isinstance(patterns, (str, Path)):
            patterns = [patterns]
        self.patterns = [str(pattern) for pattern in patterns]
        self.options = options or WatchOptions()
        self._state = WatchState(interval=self.options.interval)
        self._condition = threading.Condition()
        self._callback: Callback | None = None
        self._loop_thread: int | None = None
        self._pause_count = 0

        self.logger = logger or logging.getLogger(LOGGER_NAME)
        if not self.logger.hasHandlers():
            configure_logging()

    @property
    def interval(self) -> float:
        with self._condition:
            return self._state.interval

    @interval.setter
    def interval(self, value: float) -> None:
        interval = validate_interval(value)
        with self._condition:
            self._state.interval = interval
            self._condition.notify_all()

    @property
    def watching(self) -> bool:
        with self._condition:
            return self._state.keep_watching

    @property
    def paused(self) -> bool:
        """True while the loop sits in its pause sub-loop."""

        with self._condition:
            return self._state.paused

    @property
    def last_found_paths(self) -> list[str]:
        """Paths seen by the most recent snapshot."""

        with self._condition:
            snapshot = self._state.last_snapshot
        if snapshot is None:
            snapshot = self._take_snapshot()
            with self._condition:
                if self._state.last_snapshot is None:
                    self._state.last_snapshot = snapshot
                snapshot = self._state.last_snapshot
        return list(snapshot)

    def watch(self, callback: Callback) -> None:
        """Poll until stopped, calling *callback* with every non-empty change set."""

        with self._condition:
            if self._state.keep_watching:
                raise WatchStateError("watch() is already running")
            self._callback = callback
            self._state.keep_watching = True
            self._loop_thread = threading.get_ident()
            needs_baseline = self._state.last_snapshot is None

        log_event(
            self.logger,
            level=logging.INFO,
            action="watch.start",
            message="Watching for changes",
            extra={"patterns": self.patterns, "interval": self.interval},
        )

        try:
            if needs_baseline:
                baseline = self._take_snapshot()
                with self._condition:
                    if self._state.last_snapshot is None:
                        self._state.last_snapshot = baseline

            if self.options.immediate:
                callback({})

            while self._should_continue():
                if self._is_pausing():
                    self._pause_loop()
                    continue
                changes = self._poll()
                if changes:
                    self._deliver(callback, changes)

            end_snapshot = self._take_snapshot()
            with self._condition:
                self._state.end_snapshot = end_snapshot
            self.finalize(callback)
        finally:
            with self._condition:
                self._state.keep_watching = False
                self._state.pausing = False
                self._state.paused = False
                self._loop_thread = None
                self._condition.notify_all()

        log_event(
            self.logger,
            level=logging.INFO,
            action="watch.stop",
            message="Stopped watching",
        )

    def pause(self) -> None:
        """Suspend change detection.

        Returns once the poll loop has entered its pause sub-loop, or right
        away when called from the loop thread. Does nothing when no watch is
        running.
        """

        with self._condition:
            if not self._state.keep_watching:
                return
            self._state.pausing = True
            start = self._pause_count
            self._condition.notify_all()
            if self._is_loop_thread():
                return
            self._condition.wait_for(
                lambda: self._state.paused
                or self._pause_count != start
                or not self._state.keep_watching
            )

        log_event(
            self.logger,
            level=logging.DEBUG,
            action="watch.pause",
            message="Watching paused",
        )

    def resume(self) -> None:
        """Resume change detection from a fresh baseline.

        Changes made while paused are absorbed into the new baseline and never
        reported. Returns once the poll loop has left its pause sub-loop.
        """

        self._require_paused()
        baseline = self._take_snapshot()

        with self._condition:
            self._require_paused()
            self._state.last_snapshot = baseline
            self._state.end_snapshot = None
            self._state.pausing = False
            self._condition.notify_all()
            if not self._is_loop_thread():
                self._condition.wait_for(
                    lambda: not self._state.paused or not self._state.keep_watching
                )

        log_event(
            self.logger,
            level=logging.DEBUG,
            action="watch.resume",
            message="Watching resumed",
        )

    def stop(self) -> None:
        """Ask the poll loop to exit; pending changes are delivered by finalize."""

        with self._condition:
            self._state.keep_watching = False
            self._condition.notify_all()

        log_event(
            self.logger,
            level=logging.DEBUG,
            action="watch.stop_requested",
            message="Stop requested",
        )

    def finalize(self, callback: Callback | None = None) -> None:
        """Deliver every change up to the end-of-watch snapshot.

        Uses the snapshot captured when the loop stopped (or paused), or a
        fresh one when there is none, and diffs until nothing is left.
        """

        if callback is None:
            callback = self._callback
        if callback is None:
            raise WatchStateError("finalize() needs a callback when watch() was never called")

        with self._condition:
            snapshot = self._state.end_snapshot
        if snapshot is None:
            snapshot = self._take_snapshot()

        while True:
            changes = self._advance(snapshot)
            if not changes:
                break
            log_event(
                self.logger,
                level=logging.DEBUG,
                action="watch.finalize",
                message=f"Delivering {len(changes)} remaining change(s)",
                extra={"paths": list(changes)},
            )
            callback(changes)

        with self._condition:
            self._state.end_snapshot = None

    def _take_snapshot(self) -> Snapshot:
        return take_snapshot(resolve_paths(self.patterns, self.options.exclude))

    def _advance(self, snapshot: Snapshot) -> ChangeSet:
        """Make *snapshot* the new baseline and return what changed since the old one."""

        with self._condition:
            previous = self._state.last_snapshot
            self._state.last_snapshot = snapshot
        if previous is None:
            return {}
        return diff_snapshots(
            previous,
            snapshot,
            legacy_overwrite=self.options.legacy_diff,
        )

    def _poll(self) -> ChangeSet:
        with self._condition:
            self._condition.wait_for(
                lambda: not self._state.keep_watching or self._state.pausing,
                timeout=self._state.interval,
            )
            if not self._state.keep_watching or self._state.pausing:
                return {}
        return self._advance(self._take_snapshot())

    def _pause_loop(self) -> None:
        snapshot = self._take_snapshot()
        with self._condition:
            self._state.end_snapshot = snapshot
            self._state.paused = True
            self._pause_count += 1
            self._condition.notify_all()
            while self._state.keep_watching and self._state.pausing:
                self._condition.wait(self._state.interval)
            self._state.paused = False
            self._condition.notify_all()

    def _deliver(self, callback: Callback, changes: ChangeSet) -> None:
        started = time.monotonic()
        callback(changes)
        log_event(
            self.logger,
            level=logging.DEBUG,
            action="watch.changes",
            message=f"Delivered {len(changes)} change(s)",
            duration_ms=(time.monotonic() - started) * 1000,
            extra={"changes": {path: kind.value for path, kind in changes.items()}},
        )

    def _should_continue(self) -> bool:
        with self._condition:
            return self._state.keep_watching

    def _is_pausing(self) -> bool:
        with self._condition:
            return self._state.pausing

    def _is_loop_thread(self) -> bool:
        return self._loop_thread == threading.get_ident()

    def _require_paused(self) -> None:
        with self._condition:
            if not self._state.keep_watching or not self._state.pausing:
                raise WatchStateError(
                    "Can't resume unless watch() and pause() were called first"
                )


__all__ = ["PollingWatcher", "WatchStateError"]
