"""
app/pages/dashboard.py

Overview: greeting, headline counters and the next scheduled appointments.
"""

from __future__ import annotations

from datetime import date, datetime

import streamlit as st

from app.ui import card_close, card_open, metric_card, status_badge
from hospital.queries import dashboard_stats, enrich_appointments
from hospital.session import greeting
from hospital.store import HospitalStore


def render(store: HospitalStore) -> None:
    user = store.current_user
    name = user.name if user else "there"
    st.title(f"{greeting(datetime.now())}, {name}")
    st.caption(datetime.now().strftime("%A, %d %B %Y"))

    patients, doctors, appointments = store.patients, store.doctors, store.appointments
    stats = dashboard_stats(patients, doctors, appointments, on_date=date.today().isoformat())

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        metric_card("Patients", str(stats.total_patients))
    with c2:
        metric_card("Doctors", str(stats.total_doctors), foot=f"{stats.available_doctors} available")
    with c3:
        metric_card("Appointments", str(stats.total_appointments), foot=f"{stats.appointments_on_date} today")
    with c4:
        metric_card("Scheduled", str(stats.appointments_by_status["Scheduled"]))

    left, right = st.columns([1.6, 1], gap="large")
    with left:
        card_open("Recent appointments")
        views = enrich_appointments(appointments, patients, doctors)
        if not views:
            st.caption("No appointments yet.")
        for view in views[-6:][::-1]:
            appt = view.appointment
            st.markdown(
                f"**{view.patient_name}** with {view.doctor_name} · {appt.date} {appt.time} "
                f"{status_badge(appt.status)}",
                unsafe_allow_html=True,
            )
        card_close()

    with right:
        card_open("Doctors on staff")
        for doctor in doctors:
            st.markdown(
                f"**{doctor.name}** · {doctor.specialization} {status_badge(doctor.availability)}",
                unsafe_allow_html=True,
            )
        card_close()

        card_open("Appointments by status")
        st.bar_chart({"appointments": stats.appointments_by_status})
        card_close()
