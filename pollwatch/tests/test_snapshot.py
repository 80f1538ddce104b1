from __future__ import annotations

import os
from pathlib import Path

from pollwatch.watcher.snapshot import MISSING_MTIME, take_snapshot


def test_snapshot_records_modification_times(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("data", encoding="utf-8")
    os.utime(target, (1_000_000, 1_000_000))

    snapshot = take_snapshot([str(target)])

    assert snapshot == {str(target): 1_000_000.0}


def test_missing_paths_get_sentinel_instead_of_error(tmp_path: Path) -> None:
    missing = str(tmp_path / "gone.txt")

    snapshot = take_snapshot([missing])

    assert snapshot[missing] == MISSING_MTIME


def test_sentinel_is_earlier_than_any_real_timestamp(tmp_path: Path) -> None:
    target = tmp_path / "old.txt"
    target.write_text("data", encoding="utf-8")
    os.utime(target, (1, 1))

    snapshot = take_snapshot([str(target)])

    assert MISSING_MTIME < snapshot[str(target)]
    assert MISSING_MTIME == MISSING_MTIME


def test_snapshot_keeps_input_order(tmp_path: Path) -> None:
    names = ["c.txt", "a.txt", "b.txt"]
    for name in names:
        (tmp_path / name).write_text(name, encoding="utf-8")

    snapshot = take_snapshot([str(tmp_path / name) for name in names])

    assert [Path(path).name for path in snapshot] == names
