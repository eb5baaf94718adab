from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from sysresolve.types.models import Settings
from sysresolve.utils.logging import parse_level


def load_env() -> None:
    # Look for .env in CWD and project root
    candidates = [
        Path(os.getcwd()) / ".env",
        Path(__file__).resolve().parents[2] / ".env",
    ]
    for p in candidates:
        if p.is_file():
            load_dotenv(p, override=False)
            break


def load_settings() -> Settings:
    """Build settings from the environment, after ``.env`` has been loaded.

    Raises ``pydantic.ValidationError`` for out-of-range values and
    ``ValueError`` for an unparseable log level.
    """
    values: dict[str, object] = {}
    level = os.getenv("SYSRESOLVE_LOG_LEVEL")
    if level:
        values["log_level"] = parse_level(level)
    max_batch = os.getenv("SYSRESOLVE_MAX_BATCH")
    if max_batch:
        values["max_batch_size"] = max_batch
    return Settings(**values)
