"""Command line interface for pollwatch."""
from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path

from .config import WatchOptions, load_options
from .logger import configure_logging, log_event
from .watcher import ChangeKind, ChangeSet, PollingWatcher

LOGGER_NAME = "pollwatch.cli"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_file, level=logging.DEBUG if args.verbose else logging.WARNING)
    logger = logging.getLogger(LOGGER_NAME)

    try:
        options = _resolve_options(args)
    except FileNotFoundError:
        print(f"Options file not found: {args.config}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Invalid options: {exc}", file=sys.stderr)
        return 1

    watcher = PollingWatcher(args.patterns, options)
    try:
        watcher.watch(_build_notifier(args.exec_command, logger))
    except KeyboardInterrupt:
        watcher.stop()
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pollwatch",
        description="Watch files for changes by polling their modification times",
    )
    parser.add_argument("patterns", nargs="+", help="Files, directories or glob patterns to watch")
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=None,
        help="Glob pattern to exclude (repeatable)",
    )
    parser.add_argument("-i", "--interval", type=float, help="Seconds between polls")
    parser.add_argument(
        "--immediate",
        action="store_true",
        help="Notify once before any change is detected",
    )
    parser.add_argument(
        "--legacy-diff",
        action="store_true",
        help="Report modified files as deleted, like earlier releases",
    )
    parser.add_argument(
        "-e",
        "--exec",
        dest="exec_command",
        help="Shell command to run for every change instead of printing it",
    )
    parser.add_argument("--config", type=Path, help="JSON file with watch options")
    parser.add_argument("--log-file", type=Path, help="Write JSON logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every poll event")
    return parser


def _resolve_options(args: argparse.Namespace) -> WatchOptions:
    base = load_options(args.config) if args.config else WatchOptions()
    return base.merged(
        exclude=args.exclude,
        interval=args.interval,
        immediate=True if args.immediate else None,
        legacy_diff=True if args.legacy_diff else None,
    )


def build_environment(path: str, kind: ChangeKind, cwd: str | Path | None = None) -> dict[str, str]:
    """Describe one change as environment variables for ``--exec`` commands."""

    absolute = os.path.abspath(path)
    return {
        "FILENAME": path,
        "BASENAME": os.path.basename(absolute),
        "EVENT": kind.value,
        "DIRNAME": os.path.dirname(absolute),
        "ABSOLUTE_FILENAME": absolute,
        "RELATIVE_FILENAME": os.path.relpath(absolute, cwd or os.getcwd()),
    }


def _build_notifier(command: str | None, logger: logging.Logger):
    def notify(changes: ChangeSet) -> None:
        if not changes:
            if command:
                _run_command(command, {}, logger)
            return
        for path, kind in changes.items():
            if command:
                _run_command(command, build_environment(path, kind), logger)
            else:
                print(f"{kind.value}: {path}", flush=True)

    return notify


def _run_command(command: str, variables: dict[str, str], logger: logging.Logger) -> None:
    completed = subprocess.run(command, shell=True, env={**os.environ, **variables}, check=False)
    if completed.returncode != 0:
        log_event(
            logger,
            level=logging.WARNING,
            action="exec.failed",
            message=f"Command exited with status {completed.returncode}",
            extra={"command": command, "path": variables.get("FILENAME", "")},
        )


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
