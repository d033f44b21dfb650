"""Structured event logging for the game server.

Every record is one line: ``level=... ts=... logger=... event=...`` followed
by the caller's fields, or one JSON object per line when JSON mode is on.

Usage:
    from amaze.logging_utils import get_logger
    log = get_logger("amaze.services.game")
    log.info(event="game_started", game_id=3, seed=1234)

    game_log = log.bind(game_id=3)
    game_log.info(event="door_opened", door="(4,7)")

Environment (read on every call so tests and the CLI can flip them):
    AMAZE_LOG_LEVEL   debug | info | warn | error (default info)
    AMAZE_LOG_JSON    1/true/yes/on switches to JSON lines

Reserved keys: level, ts, logger. Fields whose value is None are dropped.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict, Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")


def _threshold() -> int:
    return LEVELS.get(os.getenv("AMAZE_LOG_LEVEL", "info").lower(), LEVELS["info"])


def _json_mode() -> bool:
    return os.getenv("AMAZE_LOG_JSON", "0").lower() in _TRUTHY


def _kv(key: str, value: Any) -> str:
    if isinstance(value, (bool, int, float)):
        return f"{key}={value}"
    text = str(value)
    # Quote values that would otherwise split into several tokens
    if not text or any(c.isspace() or c in '="' for c in text):
        text = json.dumps(text)
    return f"{key}={text}"


def format_record(level: str, **fields) -> str:
    ts = int(time.time())
    kept = {k: v for k, v in fields.items() if v is not None}
    if _json_mode():
        return json.dumps({"level": level, "ts": ts, **kept}, separators=(",", ":"), default=str)
    head = [f"level={level}", f"ts={ts}"]
    return " ".join(head + [_kv(k, v) for k, v in kept.items()])


class _Logger:
    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context: Dict[str, Any] = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Child logger that adds ``fields`` to every record it emits."""
        return _Logger(self.name, {**self.context, **fields})

    def enabled(self, level: str) -> bool:
        return LEVELS[level] >= _threshold()

    def _emit(self, level: str, fields: Dict[str, Any]):
        if not self.enabled(level):
            return
        record = format_record(level, logger=self.name, **{**self.context, **fields})
        stream = sys.stderr if level == "error" else sys.stdout
        print(record, file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)

    def __repr__(self) -> str:
        return f"<Logger {self.name} context={self.context}>"


_registry: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    """Shared (unbound) logger for ``name``."""
    logger = _registry.get(name)
    if logger is None:
        logger = _registry[name] = _Logger(name)
    return logger


log = get_logger("amaze")
