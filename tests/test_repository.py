import json

import pytest
from pydantic import ValidationError

from hospital.errors import UnknownFieldError


def _persisted(kv, key):
    return json.loads(kv.get(key))


# -------------------------
# add
# -------------------------
def test_add_returns_entity_with_fresh_id(store, zara):
    existing = {p.id for p in store.patients}
    created = store.add_patient(zara)

    assert created.id not in existing
    assert created.model_dump(exclude={"id", "email", "phone"}) == zara
    assert store.get_patient(created.id) == created


def test_rapid_adds_never_collide(store, zara):
    ids = {store.add_patient(zara).id for _ in range(25)}
    assert len(ids) == 25


def test_add_is_mirrored(store, kv, zara):
    created = store.add_patient(zara)
    stored = _persisted(kv, "patients")
    assert stored[-1]["id"] == created.id
    assert stored[-1]["lastVisit"] == "2024-03-01"


def test_add_rejects_invalid_payload_without_mutating(store, kv):
    before = store.patients
    with pytest.raises(ValidationError):
        store.add_patient({"name": "No Age", "gender": "Male", "contact": "1", "last_visit": "x"})
    assert store.patients == before
    assert kv.get("patients") is None


def test_add_appointment_defaults_to_scheduled(store):
    appt = store.add_appointment(
        {"patient_id": "1", "doctor_id": "2", "date": "2024-03-02", "time": "08:00"}
    )
    assert appt.status == "Scheduled"


# -------------------------
# update
# -------------------------
def test_update_overwrites_only_supplied_fields(store):
    before = store.get_patient("2")
    store.update_patient("2", {"contact": "555-7777", "age": 33})
    after = store.get_patient("2")

    assert after.contact == "555-7777"
    assert after.age == 33
    assert after.model_dump(exclude={"contact", "age"}) == before.model_dump(exclude={"contact", "age"})


def test_update_accepts_camel_case_names(store):
    store.update_patient("1", {"lastVisit": "2024-05-05"})
    assert store.get_patient("1").last_visit == "2024-05-05"


def test_update_missing_id_is_silent_noop(store, kv):
    before = store.patients
    store.update_patient("does-not-exist", {"name": "Ghost"})
    assert store.patients == before
    assert kv.get("patients") is None


def test_update_unknown_field_raises(store):
    with pytest.raises(UnknownFieldError):
        store.update_doctor("1", {"salary": 10})


def test_update_invalid_value_leaves_entity_unchanged(store):
    before = store.get_doctor("1")
    with pytest.raises(ValidationError):
        store.update_doctor("1", {"availability": "On Holiday"})
    assert store.get_doctor("1") == before


def test_update_ignores_id_key(store):
    store.update_patient("3", {"id": "999", "name": "Rob Johnson"})
    assert store.get_patient("999") is None
    assert store.get_patient("3").name == "Rob Johnson"


# -------------------------
# delete
# -------------------------
def test_delete_removes_exactly_one(store):
    before = {p.id: p for p in store.patients}
    store.delete_patient("4")
    after = {p.id: p for p in store.patients}

    assert "4" not in after
    del before["4"]
    assert after == before


def test_delete_missing_id_is_noop(store, kv):
    before = store.doctors
    store.delete_doctor("nope")
    assert store.doctors == before
    assert kv.get("doctors") is None


def test_delete_does_not_cascade_to_appointments(store):
    store.delete_patient("1")
    assert store.get_appointment("1").patient_id == "1"


# -------------------------
# appointment status
# -------------------------
def test_cancel_scheduled_appointment_is_idempotent(store):
    store.cancel_appointment("1")
    assert store.get_appointment("1").status == "Cancelled"
    store.cancel_appointment("1")
    assert store.get_appointment("1").status == "Cancelled"


def test_complete_scheduled_appointment(store):
    store.update_appointment_status("2", "Completed")
    assert store.get_appointment("2").status == "Completed"


def test_no_transition_out_of_completed(store, kv):
    # seed appointment 3 is Completed
    topics = []
    store.subscribe(topics.append)
    store.cancel_appointment("3")
    store.update_appointment_status("3", "Scheduled")
    assert store.get_appointment("3").status == "Completed"
    assert kv.get("appointments") is None
    assert topics == []


def test_no_transition_out_of_cancelled_via_generic_update(store, kv):
    store.cancel_appointment("4")
    written = kv.get("appointments")
    store.update_appointment("4", {"status": "Scheduled", "notes": "rebook"})
    appt = store.get_appointment("4")
    assert appt.status == "Cancelled"
    assert appt.notes != "rebook"
    assert kv.get("appointments") == written


def test_cancel_after_completing_new_appointment_is_ignored(store):
    appt = store.add_appointment(
        {"patient_id": "1", "doctor_id": "1", "date": "2024-03-02", "time": "10:00"}
    )
    store.update_appointment_status(appt.id, "Completed")
    store.cancel_appointment(appt.id)
    assert store.get_appointment(appt.id).status == "Completed"


def test_status_change_on_missing_appointment_is_noop(store):
    before = store.appointments
    store.cancel_appointment("missing")
    assert store.appointments == before


# -------------------------
# rooms
# -------------------------
def test_assign_patient_sets_occupied(store):
    store.assign_patient_to_room("r2", "Alice")
    room = store.get_room("r2")
    assert room.status == "Occupied"
    assert room.occupied_beds >= 1
    assert room.current_patient == "Alice"


def test_assign_patient_keeps_existing_bed_count(store):
    store.assign_patient_to_room("r4", "Bob")
    assert store.get_room("r4").occupied_beds == 3


def test_clearing_patient_sets_available(store):
    store.assign_patient_to_room("r1", None)
    room = store.get_room("r1")
    assert room.status == "Available"
    assert room.occupied_beds == 0
    assert room.current_patient is None


def test_empty_patient_name_clears_room(store):
    store.assign_patient_to_room("r10", "")
    assert store.get_room("r10").status == "Available"


def test_doctor_assignment_does_not_touch_status(store):
    before = store.get_room("r3")
    store.assign_doctor_to_room("r3", "Dr. Emily White")
    after = store.get_room("r3")
    assert after.assigned_doctor == "Dr. Emily White"
    assert after.status == before.status
    assert after.occupied_beds == before.occupied_beds

    store.assign_doctor_to_room("r3", None)
    assert store.get_room("r3").assigned_doctor is None


def test_room_names_are_not_resolved_to_ids(store):
    store.assign_patient_to_room("r6", "Somebody Not Registered")
    assert store.get_room("r6").current_patient == "Somebody Not Registered"


def test_set_room_status(store, kv):
    store.update_room_status("r9", "Cleaning")
    assert store.get_room("r9").status == "Cleaning"
    stored = {r["id"]: r for r in _persisted(kv, "rooms")}
    assert stored["r9"]["status"] == "Cleaning"


def test_set_room_status_rejects_unknown_status(store):
    with pytest.raises(ValueError):
        store.update_room_status("r9", "Flooded")


def test_snapshots_are_copies(store):
    patients = store.patients
    patients[0].name = "Mutated Outside"
    patients.clear()
    assert store.get_patient("1").name == "John Doe"
    assert len(store.patients) == 5
