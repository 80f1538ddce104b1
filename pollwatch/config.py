"""Configuration for pollwatch watchers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Sequence

DEFAULT_INTERVAL = 0.5


@dataclass
class WatchOptions:
    """Options that control how a :class:`PollingWatcher` behaves."""

    exclude: Sequence[str] = field(default_factory=tuple)
    interval: float = DEFAULT_INTERVAL
    immediate: bool = False
    legacy_diff: bool = False

    def __post_init__(self) -> None:
        self.exclude = _validate_patterns(self.exclude)
        self.interval = validate_interval(self.interval)
        for name in ("immediate", "legacy_diff"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"Option {name!r} must be true or false, got {value!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WatchOptions":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown watch option(s): {', '.join(unknown)}")
        return cls(**dict(data))

    def merged(self, **overrides: Any) -> "WatchOptions":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _validate_patterns(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, Path)):
        return (str(value),)
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError(f"Exclude patterns must be a string or a list of strings, got {value!r}")
    patterns: list[str] = []
    for pattern in value:
        if not isinstance(pattern, (str, Path)):
            raise ValueError(f"Exclude pattern must be a string, got {pattern!r}")
        patterns.append(str(pattern))
    return tuple(patterns)


def validate_interval(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Poll interval must be a number, got {value!r}")
    try:
        interval = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Poll interval must be a number, got {value!r}") from exc
    if interval <= 0:
        raise ValueError(f"Poll interval must be positive, got {interval}")
    return interval


def load_options(path: str | Path) -> WatchOptions:
    """Read :class:`WatchOptions` from a JSON object stored at *path*."""

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Options file must contain a JSON object: {path}")
    return WatchOptions.from_mapping(data)


__all__ = ["DEFAULT_INTERVAL", "WatchOptions", "load_options", "validate_interval"]
