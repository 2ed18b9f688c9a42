"""
app/pages/ward.py

Ward management:
- Occupancy summary
- Ward / accommodation filters (empty selection shows everything)
- Per-room status, patient and doctor assignment
"""

from __future__ import annotations

import streamlit as st

from app.ui import card_close, card_open, metric_card, status_badge
from hospital.queries import filter_rooms, ward_summary
from hospital.store import HospitalStore
from storage.models import AccommodationType, Room, RoomStatus, WardType

_STATUSES = [s.value for s in RoomStatus]
_UNASSIGNED = "— none —"


def _room_actions(store: HospitalStore, room: Room, patient_names: list[str], doctor_names: list[str]) -> None:
    status = st.selectbox(
        "Status", options=_STATUSES, index=_STATUSES.index(room.status), key=f"room_status_{room.id}"
    )
    if status != room.status:
        store.update_room_status(room.id, status)
        st.rerun()

    patient_options = [_UNASSIGNED] + sorted(set(patient_names) | ({room.current_patient} if room.current_patient else set()))
    patient = st.selectbox(
        "Patient",
        options=patient_options,
        index=patient_options.index(room.current_patient or _UNASSIGNED),
        key=f"room_patient_{room.id}",
    )
    if (patient if patient != _UNASSIGNED else None) != room.current_patient:
        store.assign_patient_to_room(room.id, None if patient == _UNASSIGNED else patient)
        st.rerun()

    doctor_options = [_UNASSIGNED] + sorted(set(doctor_names) | ({room.assigned_doctor} if room.assigned_doctor else set()))
    doctor = st.selectbox(
        "Doctor",
        options=doctor_options,
        index=doctor_options.index(room.assigned_doctor or _UNASSIGNED),
        key=f"room_doctor_{room.id}",
    )
    if (doctor if doctor != _UNASSIGNED else None) != room.assigned_doctor:
        store.assign_doctor_to_room(room.id, None if doctor == _UNASSIGNED else doctor)
        st.rerun()


def render(store: HospitalStore) -> None:
    st.title("Ward Management")
    st.caption("Room status and bed occupancy across wards.")

    rooms = store.rooms
    summary = ward_summary(rooms)

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        metric_card("Rooms", str(summary.total_rooms))
    with c2:
        metric_card("Available", str(summary.by_status["Available"]))
    with c3:
        metric_card("Occupied beds", f"{summary.occupied_beds}/{summary.total_capacity}")
    with c4:
        metric_card("Occupancy", f"{summary.occupancy_rate:.0%}")

    left, right = st.columns([1, 3], gap="large")
    with left:
        card_open("Filters")
        wards = st.multiselect("Ward", options=[w.value for w in WardType], key="ward_filter")
        accommodations = st.multiselect(
            "Accommodation", options=[a.value for a in AccommodationType], key="acc_filter"
        )
        card_close()

    with right:
        shown = filter_rooms(rooms, wards, accommodations)
        patient_names = [p.name for p in store.patients]
        doctor_names = [d.name for d in store.doctors]
        grid = st.columns(3)
        for i, room in enumerate(shown):
            with grid[i % 3]:
                card_open(room.room_number, f"{room.ward_type} · {room.accommodation_type} · Floor {room.floor}")
                st.markdown(
                    f"{status_badge(room.status)} &nbsp; Beds {room.occupied_beds}/{room.capacity}",
                    unsafe_allow_html=True,
                )
                with st.expander("Details"):
                    st.caption(f"Last cleaned {room.last_cleaned}")
                    _room_actions(store, room, patient_names, doctor_names)
                card_close()
