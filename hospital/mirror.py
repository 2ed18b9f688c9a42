"""
hospital/mirror.py

Durable mirror: keeps one serialised copy of each collection in a
key-value backend.

- Each collection lives under its own key, so one unreadable value never
  blocks hydration of the others.
- Every save rewrites the whole collection (no diffs).
- Read and write failures never propagate: hydration falls back to seed
  data, and a failed write leaves the in-memory state authoritative.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Callable, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from hospital.errors import MalformedPersistedData
from storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Well-known keys
PATIENTS = "patients"
DOCTORS = "doctors"
APPOINTMENTS = "appointments"
ROOMS = "rooms"
LOGIN_HISTORY = "loginHistory"
THEME = "theme"

TRACKED_KEYS = (PATIENTS, DOCTORS, APPOINTMENTS, ROOMS, LOGIN_HISTORY, THEME)


class DurableMirror:
    def __init__(self, kv: KeyValueStore):
        self.kv = kv
        self.last_error: Optional[Exception] = None
        # key -> reason, for every key that was reset to seed on hydration
        self.recovered: dict[str, str] = {}

    # -------------------------
    # Hydration
    # -------------------------
    def hydrate(
        self,
        key: str,
        adapter: TypeAdapter,
        seed: Callable[[], T],
        accept_bare: bool = False,
    ) -> T:
        """
        Return the stored value for *key*, or ``seed()`` if it is absent or
        unusable.

        With *accept_bare*, a raw value that is not JSON (``dark`` rather
        than ``"dark"``) is validated as a plain string before giving up.
        """
        try:
            return self._read(key, adapter, accept_bare)
        except LookupError:
            logger.info("No stored value for '%s'; using seed data.", key)
        except MalformedPersistedData as exc:
            logger.warning("%s Falling back to seed data.", exc)
            self.recovered[key] = exc.reason
        except (OSError, sqlite3.Error) as exc:
            logger.error("Could not read '%s' from storage (%s); using seed data.", key, exc)
            self.recovered[key] = str(exc)
        return seed()

    def _read(self, key: str, adapter: TypeAdapter, accept_bare: bool = False) -> Any:
        try:
            raw = self.kv.get(key)
        except ValueError as exc:
            # undecodable bytes or a token encrypted with another key
            raise MalformedPersistedData(key, str(exc)) from exc
        if raw is None:
            raise LookupError(key)
        try:
            value = adapter.validate_json(raw)
        except ValidationError as exc:
            if accept_bare:
                try:
                    value = adapter.validate_python(raw.strip())
                except ValidationError:
                    raise MalformedPersistedData(key, "not a recognised value") from exc
                logger.info("Hydrated '%s' from a bare stored value.", key)
                return value
            raise MalformedPersistedData(key, f"{exc.error_count()} validation error(s)") from exc
        except ValueError as exc:
            raise MalformedPersistedData(key, str(exc)) from exc
        logger.info("Hydrated '%s' from durable storage.", key)
        return value

    # -------------------------
    # Writes
    # -------------------------
    def save(self, key: str, adapter: TypeAdapter, value: Any) -> bool:
        """
        Serialise *value* and write it under *key*.

        Returns ``False`` if the backend rejected the write; the error is
        kept in :attr:`last_error`.
        """
        raw = adapter.dump_json(value, by_alias=True, exclude_none=True).decode("utf-8")
        try:
            self.kv.set(key, raw)
        except (OSError, sqlite3.Error) as exc:
            self.last_error = exc
            logger.error("Failed to persist '%s': %s", key, exc)
            return False
        self.last_error = None
        return True
