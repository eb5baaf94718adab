from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict

DEFAULT_LEVEL = 30

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "WARNING": 30, "ERROR": 40}

_override: int | None = None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _level_name(level: int) -> str:
    return {10: "DEBUG", 20: "INFO", 30: "WARN", 40: "ERROR"}.get(level, str(level))


def parse_level(value: str | int) -> int:
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.upper() in _LEVELS:
        return _LEVELS[text.upper()]
    return int(text)


def set_level(level: int | None) -> None:
    global _override
    _override = level


def _min_level() -> int:
    if _override is not None:
        return _override
    try:
        return parse_level(os.getenv("SYSRESOLVE_LOG_LEVEL", str(DEFAULT_LEVEL)))
    except ValueError:
        return DEFAULT_LEVEL


def _parse_context(**ctx: Any) -> Dict[str, Any]:
    safe: Dict[str, Any] = {}
    for k, v in ctx.items():
        try:
            json.dumps(v)
            safe[k] = v
        except (TypeError, ValueError):
            safe[k] = str(v)
    return safe


def logger(module: str) -> Any:
    # stdout is reserved for console results, records go to stderr
    def _log(level: int, message: str, **ctx: Any) -> None:
        if level < _min_level():
            return
        record = {
            "ts": _now_ms(),
            "level": _level_name(level),
            "module": module,
            "message": message,
            **_parse_context(**ctx),
        }
        sys.stderr.write(json.dumps(record) + "\n")
        sys.stderr.flush()

    return {
        "debug": lambda msg, **c: _log(10, msg, **c),
        "info": lambda msg, **c: _log(20, msg, **c),
        "warn": lambda msg, **c: _log(30, msg, **c),
        "error": lambda msg, **c: _log(40, msg, **c),
    }
