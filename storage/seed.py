"""
storage/seed.py

Built-in demo data used whenever a collection has nothing usable in
durable storage.  Each function returns fresh model instances so callers
can mutate them freely.

NOT real patient data.
"""

from __future__ import annotations

from storage.models import (
    AccommodationType,
    Appointment,
    Doctor,
    HistoryEntry,
    Patient,
    Room,
    RoomStatus,
    ThemePreference,
    WardType,
)

DEFAULT_THEME = ThemePreference.system.value


def seed_patients() -> list[Patient]:
    rows = [
        ("1", "John Doe", 45, "Male", "555-0101", "Hypertension", "2023-10-15"),
        ("2", "Jane Smith", 32, "Female", "555-0102", "Asthma", "2023-11-20"),
        ("3", "Robert Johnson", 58, "Male", "555-0103", "Diabetes", "2023-12-05"),
        ("4", "Emily Davis", 28, "Female", "555-0104", "None", "2024-01-10"),
        ("5", "Michael Wilson", 35, "Male", "555-0105", "Back Pain", "2024-02-01"),
    ]
    return [
        Patient(id=pid, name=name, age=age, gender=gender, contact=contact,
                history=history, last_visit=last_visit)
        for pid, name, age, gender, contact, history, last_visit in rows
    ]


def seed_doctors() -> list[Doctor]:
    rows = [
        ("1", "Dr. Sarah Smith", "Cardiology", "555-0201", "Available"),
        ("2", "Dr. James Brown", "Pediatrics", "555-0202", "Busy"),
        ("3", "Dr. Emily White", "Dermatology", "555-0203", "Off-Duty"),
        ("4", "Dr. Michael Green", "Neurology", "555-0204", "Available"),
    ]
    return [
        Doctor(id=did, name=name, specialization=spec, contact=contact, availability=avail)
        for did, name, spec, contact, avail in rows
    ]


def seed_appointments() -> list[Appointment]:
    rows = [
        ("1", "1", "1", "2024-02-15", "09:00", "Scheduled", "Regular checkup"),
        ("2", "2", "2", "2024-02-15", "10:30", "Scheduled", "Child vaccination"),
        ("3", "3", "1", "2024-02-14", "14:00", "Completed", "Follow-up"),
        ("4", "5", "4", "2024-02-16", "11:00", "Scheduled", "Headache consultation"),
    ]
    return [
        Appointment(id=aid, patient_id=pid, doctor_id=did, date=date, time=time,
                    status=status, notes=notes)
        for aid, pid, did, date, time, status, notes in rows
    ]


_NAMED_ROOMS = [
    # id, number, ward, accommodation, status, capacity, occupied, floor, cleaned, doctor, patient
    ("r1", "ICU-101", "ICU", "Private", "Occupied", 1, 1, 1, "2024-02-21 10:00 AM", "Dr. Sarah Smith", "Balraj"),
    ("r2", "ICU-102", "ICU", "Private", "Available", 1, 0, 1, "2024-02-21 11:30 AM", None, None),
    ("r3", "ICU-103", "ICU", "Private", "Cleaning", 1, 0, 1, "2024-02-21 09:15 AM", None, None),
    ("r4", "MED-201", "Medical Ward", "General", "Occupied", 4, 3, 2, "2024-02-21 08:00 AM", None, None),
    ("r5", "MED-202", "Medical Ward", "Semi-Private", "Reserved", 2, 0, 2, "2024-02-21 12:00 PM", None, None),
    ("r6", "MED-203", "Medical Ward", "Private", "Available", 1, 0, 2, "2024-02-21 01:20 PM", None, None),
    ("r7", "MED-204", "Medical Ward", "General", "Occupied", 4, 4, 2, "2024-02-21 07:30 AM", None, None),
    ("r8", "ER-G01", "Emergency", "Day Unit", "Occupied", 1, 1, 0, "2024-02-21 11:00 AM", "Dr. Michael Green", None),
    ("r9", "ER-G02", "Emergency", "Day Unit", "Available", 1, 0, 0, "2024-02-21 02:45 PM", None, None),
    ("r10", "MAT-301", "Maternity", "Private", "Occupied", 1, 1, 3, "2024-02-21 09:00 AM", None, "Jane Smith"),
    ("r11", "MAT-302", "Maternity", "Semi-Private", "Cleaning", 2, 0, 3, "2024-02-21 10:45 AM", None, None),
    ("r12", "PED-105", "Pediatric", "General", "Occupied", 6, 2, 1, "2024-02-21 08:30 AM", None, None),
]

_GENERATED_WARDS = [WardType.medical, WardType.surgical, WardType.oncology, WardType.geriatric]
_GENERATED_ACCOMMODATIONS = [
    AccommodationType.general,
    AccommodationType.semi_private,
    AccommodationType.private,
]
_GENERATED_STATUSES = [
    RoomStatus.available,
    RoomStatus.occupied,
    RoomStatus.cleaning,
    RoomStatus.reserved,
]
_GENERATED_CAPACITIES = [1, 2, 4, 6]


def seed_rooms() -> list[Room]:
    rooms = [
        Room(
            id=rid, room_number=number, ward_type=ward, accommodation_type=acc,
            status=status, capacity=capacity, occupied_beds=occupied, floor=floor,
            last_cleaned=cleaned, assigned_doctor=doctor, current_patient=patient,
        )
        for rid, number, ward, acc, status, capacity, occupied, floor, cleaned, doctor, patient in _NAMED_ROOMS
    ]

    # Filler rooms for the ward map.  Status cycles with a stride of 3 so
    # neighbouring rooms differ.
    for i in range(20):
        status = _GENERATED_STATUSES[(i * 3) % len(_GENERATED_STATUSES)]
        rooms.append(
            Room(
                id=f"r-auto-{i}",
                room_number=f"W-{100 + i}",
                ward_type=_GENERATED_WARDS[i % 4],
                accommodation_type=_GENERATED_ACCOMMODATIONS[i % 3],
                status=status,
                capacity=_GENERATED_CAPACITIES[i % 4],
                occupied_beds=1 if status == RoomStatus.occupied else 0,
                floor=i // 10 + 1,
                last_cleaned="2024-02-21 10:00 AM",
            )
        )
    return rooms


def seed_login_history() -> list[HistoryEntry]:
    return [
        HistoryEntry(
            id="h1",
            user="Dr. Sarah Smith",
            role="Admin",
            date="Oct 24, 2023",
            time="08:30 AM",
            status="Active",
        )
    ]
