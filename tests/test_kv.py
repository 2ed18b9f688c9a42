import pytest

from storage.db import SqliteKeyValueStore
from storage.kv import JsonFileStore, MemoryKeyValueStore


@pytest.fixture(params=["memory", "json", "sqlite"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryKeyValueStore()
    if request.param == "json":
        return JsonFileStore(tmp_path / "kv")
    return SqliteKeyValueStore(tmp_path / "kv.db")


def test_set_get_overwrite(backend):
    assert backend.get("patients") is None
    backend.set("patients", "[]")
    backend.set("patients", '[{"id": "1"}]')
    assert backend.get("patients") == '[{"id": "1"}]'
    assert list(backend.keys()) == ["patients"]


def test_rejects_path_like_keys(backend):
    with pytest.raises(ValueError):
        backend.set("../escape", "x")


def test_json_store_leaves_no_temp_files(tmp_path):
    store = JsonFileStore(tmp_path)
    store.set("rooms", "[]")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["rooms.json"]
