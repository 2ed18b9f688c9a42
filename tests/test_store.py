import pytest

from hospital.config import Settings
from hospital.errors import ConfigError
from hospital.store import HospitalStore, build_store
from storage.crypto import EncryptedKeyValueStore
from storage.db import SqliteKeyValueStore
from storage.kv import JsonFileStore, MemoryKeyValueStore
from storage.seed import seed_appointments, seed_patients


def test_add_patient_end_to_end(store, zara):
    doctors, appointments, rooms = store.doctors, store.appointments, store.rooms
    history, theme = store.login_history, store.theme
    before = store.patients

    created = store.add_patient(zara)

    after = store.patients
    assert len(after) == len(before) + 1
    assert after[:-1] == before
    assert after[-1] == created
    assert created.name == "Zara" and created.id not in {p.id for p in before}
    assert store.doctors == doctors
    assert store.appointments == appointments
    assert store.rooms == rooms
    assert store.login_history == history
    assert store.theme == theme


def test_subscribers_hear_each_mutation(store, zara):
    topics = []
    sub = store.subscribe(topics.append)

    created = store.add_patient(zara)
    store.update_doctor("1", {"availability": "Busy"})
    store.cancel_appointment("1")
    store.assign_patient_to_room("r2", "Alice")
    store.login({"id": "u", "name": "A", "email": "a@x", "role": "Admin"})
    store.logout()
    store.set_theme("dark")
    store.delete_patient(created.id)

    assert topics == [
        "patients",
        "doctors",
        "appointments",
        "rooms",
        "loginHistory", "session",
        "loginHistory", "session",
        "theme",
        "patients",
    ]

    sub.unsubscribe()
    store.add_patient(zara)
    assert topics[-1] == "patients" and len(topics) == 10


def test_noop_mutations_do_not_notify(store):
    topics = []
    store.subscribe(topics.append)
    store.update_patient("missing", {"name": "x"})
    store.delete_doctor("missing")
    store.cancel_appointment("missing")
    store.assign_patient_to_room("missing", "x")
    store.assign_doctor_to_room("r2", None)  # already unassigned
    assert topics == []


def test_os_scheme_change_notifies_theme_topic_in_system_mode(store):
    topics = []
    store.subscribe(topics.append)
    store.set_system_theme("dark")
    assert topics == ["theme"]


def test_reset_to_seed_restores_collections(store, zara):
    store.add_patient(zara)
    store.cancel_appointment("1")
    store.login({"id": "u", "name": "A", "email": "a@x", "role": "Admin"})

    store.reset_to_seed()

    assert store.patients == seed_patients()
    assert store.appointments == seed_appointments()
    assert [h.id for h in store.login_history] == ["h1"]


def test_build_store_memory_backend():
    store = build_store(Settings(backend="memory"))
    assert isinstance(store.mirror.kv, MemoryKeyValueStore)
    assert len(store.patients) == 5


def test_build_store_json_backend(tmp_path):
    store = build_store(Settings(backend="json", data_dir=tmp_path))
    assert isinstance(store.mirror.kv, JsonFileStore)
    store.update_patient("1", {"age": 46})
    assert (tmp_path / "patients.json").exists()


def test_build_store_sqlite_with_encryption(tmp_path):
    from cryptography.fernet import Fernet

    settings = Settings(backend="sqlite", data_dir=tmp_path, data_key=Fernet.generate_key().decode())
    store = build_store(settings)
    assert isinstance(store.mirror.kv, EncryptedKeyValueStore)
    assert isinstance(store.mirror.kv.inner, SqliteKeyValueStore)
    assert settings.sqlite_path.exists()


def test_build_store_rejects_bad_key(tmp_path):
    with pytest.raises(ConfigError):
        build_store(Settings(backend="memory", data_key="not-a-fernet-key"))


def test_history_limit_is_configurable():
    store = HospitalStore(MemoryKeyValueStore(), history_limit=3)
    for i in range(5):
        store.login({"id": str(i), "name": f"U{i}", "email": "u@x", "role": "Doctor"})
    assert [h.user for h in store.login_history] == ["U4", "U3", "U2"]
