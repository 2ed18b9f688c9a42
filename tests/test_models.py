import pytest
from pydantic import ValidationError

from storage.models import Appointment, Patient, PatientCreate, Room


def test_storage_form_uses_camel_case_and_omits_unset_optionals():
    patient = Patient(
        id="9", name="Ann", age=50, gender="Female", contact="555", history="", last_visit="2024-01-01"
    )
    data = patient.model_dump(mode="json", by_alias=True, exclude_none=True)
    assert data["lastVisit"] == "2024-01-01"
    assert "email" not in data
    assert "last_visit" not in data


def test_models_accept_camel_case_input():
    appt = Appointment.model_validate(
        {"id": "1", "patientId": "2", "doctorId": "3", "date": "2024-02-15", "time": "09:00", "status": "Scheduled"}
    )
    assert appt.patient_id == "2"
    assert appt.notes is None


def test_enum_fields_hold_plain_values():
    room = Room(
        id="r", room_number="X-1", ward_type="ICU", accommodation_type="Private",
        status="Available", capacity=1, floor=1, last_cleaned="today",
    )
    assert room.status == "Available"
    assert room.occupied_beds == 0


def test_create_payload_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        PatientCreate(name="A", age=1, gender="Other", contact="1", last_visit="x", ward="ICU")


def test_invalid_gender_rejected():
    with pytest.raises(ValidationError):
        PatientCreate(name="A", age=1, gender="Unknown", contact="1", last_visit="x")
