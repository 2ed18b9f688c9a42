"""
storage/models.py

Pydantic v2 data models for the hospital administration console.

These models describe every entity the store owns and the exact shape that
is written to durable storage.  Python attributes are snake_case; the
serialised form uses camelCase aliases so persisted collections keep the
same layout as the browser build of the console.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Gender(str, Enum):
    male = "Male"
    female = "Female"
    other = "Other"


class Availability(str, Enum):
    """Whether a doctor can currently take appointments."""
    available = "Available"
    busy = "Busy"
    off_duty = "Off-Duty"


class AppointmentStatus(str, Enum):
    """Lifecycle states of an appointment."""
    scheduled = "Scheduled"
    completed = "Completed"
    cancelled = "Cancelled"


class RoomStatus(str, Enum):
    available = "Available"
    occupied = "Occupied"
    cleaning = "Cleaning"
    reserved = "Reserved"
    unavailable = "Unavailable"


class WardType(str, Enum):
    icu = "ICU"
    ccu = "CCU"
    nicu = "NICU"
    medical = "Medical Ward"
    surgical = "Surgical Ward"
    emergency = "Emergency"
    maternity = "Maternity"
    pediatric = "Pediatric"
    geriatric = "Geriatric"
    oncology = "Oncology"
    rehabilitation = "Rehabilitation"
    psychiatric = "Psychiatric"


class AccommodationType(str, Enum):
    general = "General"
    private = "Private"
    semi_private = "Semi-Private"
    day_unit = "Day Unit"


class UserRole(str, Enum):
    """Roles a console user can sign in with."""
    admin = "Admin"
    doctor = "Doctor"
    nurse = "Nurse"
    patient = "Patient"


class SessionStatus(str, Enum):
    active = "Active"
    logged_out = "Logged Out"


class ThemePreference(str, Enum):
    """Explicit theme choice; ``system`` follows the OS color scheme."""
    light = "light"
    dark = "dark"
    system = "system"


class ColorScheme(str, Enum):
    """A concrete light/dark value, as resolved or as reported by the OS."""
    light = "light"
    dark = "dark"


# ---------------------------------------------------------------------------
# Base model
# ---------------------------------------------------------------------------


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class _Payload(_Record):
    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Domain models
# ---------------------------------------------------------------------------


class PatientCreate(_Payload):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    age: int = Field(ge=0)
    gender: Gender
    contact: str
    history: str = ""
    last_visit: str = Field(description="Date string, e.g. '2024-03-01'.")


class Patient(PatientCreate):
    model_config = ConfigDict(extra="ignore")

    id: str


class DoctorCreate(_Payload):
    name: str
    specialization: str
    contact: str
    availability: Availability = Availability.available


class Doctor(DoctorCreate):
    model_config = ConfigDict(extra="ignore")

    id: str


class AppointmentCreate(_Payload):
    patient_id: str
    doctor_id: str
    date: str
    time: str
    status: AppointmentStatus = AppointmentStatus.scheduled
    notes: Optional[str] = None


class Appointment(AppointmentCreate):
    model_config = ConfigDict(extra="ignore")

    id: str


class Room(_Record):
    """
    A ward room.

    ``current_patient`` and ``assigned_doctor`` hold display names, not
    entity ids; they are never resolved back to Patient/Doctor records.
    """
    id: str
    room_number: str
    ward_type: WardType
    accommodation_type: AccommodationType
    status: RoomStatus
    capacity: int = Field(ge=0)
    occupied_beds: int = Field(default=0, ge=0)
    floor: int
    last_cleaned: str
    assigned_doctor: Optional[str] = None
    current_patient: Optional[str] = None


class User(_Record):
    """The signed-in user.  Lives in memory only and is never persisted."""
    id: str
    name: str
    email: str
    role: UserRole
    avatar: Optional[str] = None


class HistoryEntry(_Record):
    """One login audit record."""
    id: str
    user: str
    role: str
    date: str
    time: str
    status: SessionStatus = SessionStatus.active
