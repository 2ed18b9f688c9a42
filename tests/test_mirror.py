import json

from cryptography.fernet import Fernet

from hospital.store import HospitalStore
from storage.crypto import EncryptedKeyValueStore
from storage.db import SqliteKeyValueStore
from storage.kv import JsonFileStore, MemoryKeyValueStore
from storage.seed import seed_doctors, seed_patients, seed_rooms


class QuotaExceededStore(MemoryKeyValueStore):
    def set(self, key, value):
        raise OSError("quota exceeded")


def _stored(item):
    return item.model_dump(mode="json", by_alias=True, exclude_none=True)


def _entity_set(items):
    return {json.dumps(_stored(i), sort_keys=True) for i in items}


def test_empty_storage_hydrates_seed_without_writing(kv):
    store = HospitalStore(kv)
    assert store.patients == seed_patients()
    assert store.rooms == seed_rooms()
    assert store.login_history[0].user == "Dr. Sarah Smith"
    assert store.theme == "system"
    assert list(kv.keys()) == []


def test_corrupt_key_falls_back_independently():
    doctor = {"id": "77", "name": "Dr. Who", "specialization": "Time", "contact": "0", "availability": "Busy"}
    kv = MemoryKeyValueStore({
        "patients": "{not json",
        "doctors": json.dumps([doctor]),
        "rooms": json.dumps([{"id": "x"}]),
        "theme": json.dumps("purple"),
    })
    store = HospitalStore(kv)

    assert store.patients == seed_patients()
    assert [d.id for d in store.doctors] == ["77"]
    assert store.rooms == seed_rooms()
    assert store.theme == "system"
    assert set(store.mirror.recovered) == {"patients", "rooms", "theme"}


def test_hydration_does_not_reissue_persisted_ids(zara):
    persisted = {
        "id": "99999999999999", "name": "Old Record", "age": 70, "gender": "Male",
        "contact": "555-0000", "history": "", "lastVisit": "2020-01-01",
    }
    kv = MemoryKeyValueStore({"patients": json.dumps([persisted])})
    store = HospitalStore(kv)
    created = store.add_patient(zara)
    assert int(created.id) > 99999999999999


def test_write_failure_keeps_memory_state(zara):
    store = HospitalStore(QuotaExceededStore())
    created = store.add_patient(zara)

    assert store.get_patient(created.id) is not None
    assert isinstance(store.mirror.last_error, OSError)


def test_json_files_round_trip(json_kv, zara):
    first = HospitalStore(json_kv)
    first.add_patient(zara)
    first.update_doctor("2", {"availability": "Available"})
    first.cancel_appointment("1")
    first.assign_patient_to_room("r2", "Alice")
    first.set_theme("dark")
    first.close()

    second = HospitalStore(JsonFileStore(json_kv.directory))
    assert _entity_set(second.patients) == _entity_set(first.patients)
    assert second.doctors == first.doctors
    assert second.appointments == first.appointments
    assert second.rooms == first.rooms
    assert second.theme == "dark"
    assert (json_kv.directory / "patients.json").exists()


def test_json_file_store_layout_is_per_key(json_kv):
    store = HospitalStore(json_kv)
    store.update_room_status("r2", "Reserved")
    store.update_patient("1", {"age": 46})
    assert sorted(json_kv.keys()) == ["patients", "rooms"]


def test_sqlite_round_trip(tmp_path, zara):
    path = tmp_path / "hospital.db"
    first = HospitalStore(SqliteKeyValueStore(path))
    created = first.add_patient(zara)
    first.login({"id": "u1", "name": "Nurse Joy", "email": "joy@x", "role": "Nurse"})

    second = HospitalStore(SqliteKeyValueStore(path))
    assert second.get_patient(created.id) == created
    assert second.login_history == first.login_history
    assert second.current_user is None


def test_encrypted_values_are_opaque_and_readable_with_same_key():
    key = Fernet.generate_key()
    inner = MemoryKeyValueStore()
    first = HospitalStore(EncryptedKeyValueStore(inner, Fernet(key)))
    first.update_patient("1", {"history": "Hypertension, stage 2"})

    assert "Hypertension" not in inner.get("patients")

    second = HospitalStore(EncryptedKeyValueStore(inner, Fernet(key)))
    assert second.get_patient("1").history == "Hypertension, stage 2"


def test_wrong_key_falls_back_to_seed():
    inner = MemoryKeyValueStore()
    first = HospitalStore(EncryptedKeyValueStore(inner, Fernet(Fernet.generate_key())))
    first.delete_patient("1")

    second = HospitalStore(EncryptedKeyValueStore(inner, Fernet(Fernet.generate_key())))
    assert second.patients == seed_patients()
    assert "patients" in second.mirror.recovered


def test_flush_all_writes_every_key(kv):
    store = HospitalStore(kv)
    assert store.flush_all() is True
    assert sorted(kv.keys()) == sorted(
        ["patients", "doctors", "appointments", "rooms", "loginHistory", "theme"]
    )
    assert json.loads(kv.get("doctors")) == [_stored(d) for d in seed_doctors()]
