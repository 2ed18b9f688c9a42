"""
storage/kv.py

Key-value backends for the durable mirror.

Every backend stores opaque text values under short string keys.  The
mirror owns (de)serialisation; backends only move strings around.

- MemoryKeyValueStore  dict-backed, nothing survives the process
- JsonFileStore        one <key>.json file per key, atomic writes
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def check_key(key: str) -> str:
    if not _KEY_RE.match(key or ""):
        raise ValueError(f"Invalid storage key '{key}'.")
    return key


class KeyValueStore(ABC):
    """Minimal text key-value interface shared by all backends."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or ``None`` if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def keys(self) -> Iterator[str]:
        ...

    def close(self) -> None:
        pass


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[check_key(key)] = value

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)


class JsonFileStore(KeyValueStore):
    """
    Directory of JSON documents, one per key.

    Writes go to a temporary sibling file which then replaces the target,
    so a crash mid-write leaves the previous value intact.
    """

    suffix = ".json"

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{check_key(key)}{self.suffix}"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        _atomic_write_text(self._path(key), value)
        logger.debug("Wrote %s (%d bytes)", self._path(key), len(value))

    def keys(self) -> Iterator[str]:
        if not self.directory.exists():
            return iter(())
        return iter(sorted(p.stem for p in self.directory.glob(f"*{self.suffix}")))
