"""
app/pages/appointments.py

Appointment book: schedule, filter by status, complete or cancel.
Only Scheduled appointments offer actions; Completed and Cancelled are final.
"""

from __future__ import annotations

from datetime import date, time

import streamlit as st
from pydantic import ValidationError

from app.ui import card_close, card_open, metric_card, status_badge
from hospital.queries import ALL, dashboard_stats, enrich_appointments, filter_appointments
from hospital.store import HospitalStore
from storage.models import AppointmentStatus


def render(store: HospitalStore) -> None:
    st.title("Appointments")
    st.caption("Schedule consultations and track their outcome.")

    patients, doctors, appointments = store.patients, store.doctors, store.appointments
    counts = dashboard_stats(patients, doctors, appointments).appointments_by_status

    cols = st.columns(3)
    for col, status in zip(cols, AppointmentStatus):
        with col:
            metric_card(status.value, str(counts[status.value]))

    with st.expander("➕ Schedule appointment"):
        if not patients or not doctors:
            st.caption("Add at least one patient and one doctor first.")
        else:
            with st.form("add_appointment", clear_on_submit=True):
                patient_names = {p.id: p.name for p in patients}
                doctor_names = {d.id: f"{d.name} ({d.specialization})" for d in doctors}
                patient_id = st.selectbox("Patient", options=list(patient_names), format_func=patient_names.get)
                doctor_id = st.selectbox("Doctor", options=list(doctor_names), format_func=doctor_names.get)
                c1, c2 = st.columns(2)
                day = c1.date_input("Date", value=date.today())
                at = c2.time_input("Time", value=time(9, 0))
                notes = st.text_input("Notes (optional)")
                submitted = st.form_submit_button("Schedule", type="primary")
            if submitted:
                try:
                    store.add_appointment({
                        "patient_id": patient_id,
                        "doctor_id": doctor_id,
                        "date": day.isoformat(),
                        "time": at.strftime("%H:%M"),
                        "notes": notes.strip() or None,
                    })
                except ValidationError as exc:
                    st.error(f"Could not schedule: {exc.error_count()} invalid field(s).")
                else:
                    st.rerun()

    f1, f2 = st.columns([2, 1])
    term = f1.text_input("Search patient or doctor", key="appt_search")
    status = f2.selectbox("Status", options=[ALL] + [s.value for s in AppointmentStatus], key="appt_status")
    views = filter_appointments(enrich_appointments(appointments, patients, doctors), term, status)

    card_open("Appointment book", f"{len(views)} shown")
    if not views:
        st.caption("No appointments match.")
    for view in views:
        appt = view.appointment
        row = st.columns([2.2, 2.2, 1.4, 1.0, 0.9, 0.9])
        row[0].markdown(f"**{view.patient_name}**  \n{appt.notes or ''}")
        row[1].markdown(f"{view.doctor_name}  \n{view.specialization}")
        row[2].markdown(f"{appt.date}  \n{appt.time}")
        row[3].markdown(status_badge(appt.status), unsafe_allow_html=True)
        if appt.status == AppointmentStatus.scheduled.value:
            if row[4].button("Complete", key=f"done_{appt.id}"):
                store.update_appointment_status(appt.id, AppointmentStatus.completed)
                st.rerun()
            if row[5].button("Cancel", key=f"cancel_{appt.id}"):
                store.cancel_appointment(appt.id)
                st.rerun()
    card_close()
