"""Structured logging utilities for pollwatch."""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOGGER_NAME = "pollwatch"

_HOME = str(Path.home())
_LOG_FORMAT = "%(message)s"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3


def _sanitize(value: str) -> str:
    """Replace every occurrence of the home directory with ``~``."""

    if value == _HOME:
        return "~"
    for separator in {os.sep, "/"}:
        value = value.replace(_HOME + separator, "~/")
    return value


def _build_handler(log_path: Path | None, max_bytes: int, backup_count: int) -> logging.Handler:
    if log_path is None:
        return logging.StreamHandler()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


def configure_logging(
    log_path: Path | None = None,
    *,
    level: int = logging.INFO,
    max_bytes: int = _MAX_BYTES,
    backup_count: int = _BACKUP_COUNT,
) -> logging.Logger:
    """Configure and return the package logger.

    Without *log_path* an already configured logger keeps its handlers and only
    changes level. A *log_path* always replaces the handlers with a rotating
    file handler.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers and log_path is None:
        for existing in logger.handlers:
            existing.setLevel(level)
        return logger

    while logger.handlers:
        stale = logger.handlers[0]
        logger.removeHandler(stale)
        stale.close()

    handler = _build_handler(log_path, max_bytes, backup_count)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def _scrub(value: Any) -> Any:
    if isinstance(value, str):
        return _sanitize(value)
    if isinstance(value, dict):
        return {key: _scrub(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(item) for item in value]
    return value


def log_event(
    logger: logging.Logger,
    *,
    level: int,
    action: str,
    message: str,
    duration_ms: float | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Emit one JSON log line describing *action*."""

    if not logger.isEnabledFor(level):
        return

    payload: dict[str, Any] = {
        "ts": _utcnow_iso(),
        "level": logging.getLevelName(level),
        "action": action,
        "message": _sanitize(message),
    }
    if duration_ms is not None:
        payload["ms"] = round(duration_ms, 3)
    if extra:
        payload.update(_scrub(extra))

    logger.log(level, json.dumps(payload, ensure_ascii=False))


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


__all__ = ["LOGGER_NAME", "configure_logging", "log_event"]
