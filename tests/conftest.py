from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from hospital.ids import IdGenerator
from hospital.store import HospitalStore
from hospital.theme import ColorSchemeSignal
from storage.kv import JsonFileStore, MemoryKeyValueStore


class TickingClock:
    """datetime source that advances one minute per call."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 8, 30)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def os_scheme():
    return ColorSchemeSignal("light")


@pytest.fixture
def frozen_ids():
    # every call sees the same millisecond
    return IdGenerator(clock=lambda: 1_700_000_000_000)


@pytest.fixture
def store(kv, os_scheme, frozen_ids):
    s = HospitalStore(kv, os_scheme=os_scheme, ids=frozen_ids, clock=TickingClock())
    yield s
    s.close()


@pytest.fixture
def json_kv(tmp_path):
    return JsonFileStore(tmp_path / "data")


@pytest.fixture
def zara():
    return {
        "name": "Zara",
        "age": 40,
        "gender": "Female",
        "contact": "555-9999",
        "history": "",
        "last_visit": "2024-03-01",
    }
