"""
hospital/queries.py

Read-only views derived from store snapshots: search, filtering and the
counters shown on the dashboard and ward screens.  Nothing here mutates.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from storage.models import (
    Appointment,
    AppointmentStatus,
    Availability,
    Doctor,
    Patient,
    Room,
    RoomStatus,
)

UNKNOWN = "Unknown"
ALL = "All"


def search_patients(patients: Iterable[Patient], term: str) -> list[Patient]:
    """Case-insensitive name match, or plain substring match on contact."""
    needle = (term or "").lower()
    return [p for p in patients if needle in p.name.lower() or (term or "") in p.contact]


@dataclass(frozen=True)
class AppointmentView:
    appointment: Appointment
    patient_name: str
    doctor_name: str
    specialization: str


def enrich_appointments(
    appointments: Iterable[Appointment],
    patients: Iterable[Patient],
    doctors: Iterable[Doctor],
) -> list[AppointmentView]:
    """Attach display names; dangling ids resolve to ``Unknown``."""
    patients_by_id = {p.id: p for p in patients}
    doctors_by_id = {d.id: d for d in doctors}
    views = []
    for appt in appointments:
        patient = patients_by_id.get(appt.patient_id)
        doctor = doctors_by_id.get(appt.doctor_id)
        views.append(
            AppointmentView(
                appointment=appt,
                patient_name=patient.name if patient else UNKNOWN,
                doctor_name=doctor.name if doctor else UNKNOWN,
                specialization=doctor.specialization if doctor else UNKNOWN,
            )
        )
    return views


def filter_appointments(views: Iterable[AppointmentView], term: str = "", status: str = ALL) -> list[AppointmentView]:
    needle = (term or "").lower()
    out = []
    for view in views:
        matches_search = needle in view.patient_name.lower() or needle in view.doctor_name.lower()
        matches_status = status == ALL or view.appointment.status == status
        if matches_search and matches_status:
            out.append(view)
    return out


def filter_rooms(
    rooms: Iterable[Room],
    ward_types: Optional[Sequence[str]] = None,
    accommodations: Optional[Sequence[str]] = None,
) -> list[Room]:
    """An empty or missing selection means no filtering on that axis."""
    return [
        r for r in rooms
        if (not ward_types or r.ward_type in ward_types)
        and (not accommodations or r.accommodation_type in accommodations)
    ]


@dataclass(frozen=True)
class DashboardStats:
    total_patients: int
    total_doctors: int
    total_appointments: int
    available_doctors: int
    appointments_by_status: dict[str, int]
    appointments_on_date: int


def dashboard_stats(
    patients: Sequence[Patient],
    doctors: Sequence[Doctor],
    appointments: Sequence[Appointment],
    on_date: Optional[str] = None,
) -> DashboardStats:
    by_status = Counter(a.status for a in appointments)
    return DashboardStats(
        total_patients=len(patients),
        total_doctors=len(doctors),
        total_appointments=len(appointments),
        available_doctors=sum(1 for d in doctors if d.availability == Availability.available.value),
        appointments_by_status={s.value: by_status.get(s.value, 0) for s in AppointmentStatus},
        appointments_on_date=sum(1 for a in appointments if on_date and a.date == on_date),
    )


@dataclass(frozen=True)
class WardSummary:
    total_rooms: int
    by_status: dict[str, int]
    total_capacity: int
    occupied_beds: int

    @property
    def occupancy_rate(self) -> float:
        if self.total_capacity == 0:
            return 0.0
        return self.occupied_beds / self.total_capacity


def ward_summary(rooms: Sequence[Room]) -> WardSummary:
    counts = Counter(r.status for r in rooms)
    return WardSummary(
        total_rooms=len(rooms),
        by_status={s.value: counts.get(s.value, 0) for s in RoomStatus},
        total_capacity=sum(r.capacity for r in rooms),
        occupied_beds=sum(r.occupied_beds for r in rooms),
    )
