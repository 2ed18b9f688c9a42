"""
hospital/config.py

Environment-driven settings for the console store.

Variables
---------
HMS_STORAGE_BACKEND  json | sqlite | memory   (default: json)
HMS_DATA_DIR         directory for persisted collections (default: ./data)
APP_DATA_KEY         Fernet key; when present, persisted values are encrypted
HMS_HISTORY_LIMIT    login history cap (default: 50)
HMS_LOG_LEVEL        logging level for the console entry point (default: INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from hospital.errors import ConfigError

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DATA_DIR = _PROJECT_ROOT / "data"
DEFAULT_HISTORY_LIMIT = 50

BACKENDS = ("json", "sqlite", "memory")


@dataclass(frozen=True)
class Settings:
    backend: str = "json"
    data_dir: Path = DEFAULT_DATA_DIR
    data_key: Optional[str] = None
    history_limit: int = DEFAULT_HISTORY_LIMIT
    log_level: str = "INFO"

    @property
    def sqlite_path(self) -> Path:
        return self.data_dir / "hospital.db"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ

    backend = env.get("HMS_STORAGE_BACKEND", "json").strip().lower()
    if backend not in BACKENDS:
        raise ConfigError(f"HMS_STORAGE_BACKEND must be one of {BACKENDS}, got '{backend}'.")

    raw_limit = env.get("HMS_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT))
    try:
        history_limit = int(raw_limit)
    except ValueError:
        raise ConfigError(f"HMS_HISTORY_LIMIT must be an integer, got '{raw_limit}'.") from None
    if history_limit < 1:
        raise ConfigError("HMS_HISTORY_LIMIT must be at least 1.")

    data_dir = env.get("HMS_DATA_DIR")
    return Settings(
        backend=backend,
        data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
        data_key=env.get("APP_DATA_KEY") or None,
        history_limit=history_limit,
        log_level=env.get("HMS_LOG_LEVEL", "INFO").upper(),
    )
