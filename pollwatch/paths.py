"""Turn watch and exclude patterns into concrete file paths."""
from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import Iterable, Union

PatternInput = Union[str, Path, Iterable[Union[str, Path]], None]


def _normalize(patterns: PatternInput) -> list[str]:
    if patterns is None:
        return []
    if isinstance(patterns, (str, Path)):
        return [str(patterns)]
    return [str(pattern) for pattern in patterns]


def expand_patterns(patterns: PatternInput) -> list[str]:
    """Expand *patterns* into a deduplicated, ordered list of absolute file paths.

    ``~`` is expanded and relative patterns are resolved against the current
    directory. A pattern naming a directory stands for every file below it.
    Directories themselves are never returned.
    """

    found: dict[str, None] = {}
    for pattern in _normalize(patterns):
        absolute = os.path.abspath(os.path.expanduser(pattern))
        if os.path.isdir(absolute):
            absolute = os.path.join(absolute, "**", "*")
        for match in sorted(glob.glob(absolute, recursive=True)):
            if os.path.isdir(match):
                continue
            found.setdefault(match, None)
    return list(found)


def resolve_paths(patterns: PatternInput, exclude: PatternInput = None) -> list[str]:
    """Return the files matched by *patterns* minus those matched by *exclude*."""

    excluded = set(expand_patterns(exclude))
    return [path for path in expand_patterns(patterns) if path not in excluded]


__all__ = ["expand_patterns", "resolve_paths"]
