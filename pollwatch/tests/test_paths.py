from __future__ import annotations

from pathlib import Path

import pytest

from pollwatch.paths import expand_patterns, resolve_paths


@pytest.fixture()
def tree(tmp_path: Path) -> Path:
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    (tmp_path / "b.log").write_text("b", encoding="utf-8")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "c.txt").write_text("c", encoding="utf-8")
    (nested / "empty").mkdir()
    return tmp_path


def test_directory_expands_to_contained_files(tree: Path) -> None:
    paths = expand_patterns(tree)

    assert set(paths) == {
        str(tree / "a.txt"),
        str(tree / "b.log"),
        str(tree / "nested" / "c.txt"),
    }


def test_recursive_glob_matches_top_level_and_nested(tree: Path) -> None:
    paths = expand_patterns(str(tree / "**" / "*.txt"))

    assert set(paths) == {str(tree / "a.txt"), str(tree / "nested" / "c.txt")}


def test_relative_patterns_are_made_absolute(tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tree)

    assert expand_patterns("./*.log") == [str(Path.cwd() / "b.log")]


def test_tilde_is_expanded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    target = tmp_path / "watched.txt"
    target.write_text("x", encoding="utf-8")

    assert expand_patterns("~/watched.txt") == [str(target)]


def test_overlapping_patterns_are_deduplicated(tree: Path) -> None:
    paths = expand_patterns([str(tree / "*.txt"), str(tree / "a.*"), tree])

    assert len(paths) == len(set(paths))
    assert paths[0] == str(tree / "a.txt")


def test_none_and_missing_patterns_yield_nothing(tmp_path: Path) -> None:
    assert expand_patterns(None) == []
    assert expand_patterns(str(tmp_path / "missing" / "*")) == []


def test_resolve_paths_removes_excluded(tree: Path) -> None:
    paths = resolve_paths(str(tree / "**" / "*"), str(tree / "**" / "*.txt"))

    assert paths == [str(tree / "b.log")]
