"""
app/pages/doctors.py

Doctor roster with availability.
"""

from __future__ import annotations

import streamlit as st
from pydantic import ValidationError

from app.ui import card_close, card_open, status_badge
from hospital.store import HospitalStore
from storage.models import Availability

_AVAILABILITY = [a.value for a in Availability]


def render(store: HospitalStore) -> None:
    st.title("Doctors")
    st.caption("Manage the medical staff roster.")

    with st.expander("➕ Add doctor"):
        with st.form("add_doctor", clear_on_submit=True):
            name = st.text_input("Name")
            specialization = st.text_input("Specialization")
            contact = st.text_input("Contact")
            availability = st.selectbox("Availability", options=_AVAILABILITY)
            submitted = st.form_submit_button("Save", type="primary")
        if submitted:
            try:
                store.add_doctor({
                    "name": name.strip(),
                    "specialization": specialization.strip(),
                    "contact": contact.strip(),
                    "availability": availability,
                })
            except ValidationError as exc:
                st.error(f"Could not add doctor: {exc.error_count()} invalid field(s).")
            else:
                st.rerun()

    card_open("Roster")
    for doctor in store.doctors:
        cols = st.columns([2.2, 1.6, 1.2, 1.4, 0.8])
        cols[0].markdown(f"**{doctor.name}**  \n{doctor.contact}")
        cols[1].markdown(doctor.specialization)
        cols[2].markdown(status_badge(doctor.availability), unsafe_allow_html=True)
        new_availability = cols[3].selectbox(
            "Availability",
            options=_AVAILABILITY,
            index=_AVAILABILITY.index(doctor.availability),
            key=f"avail_{doctor.id}",
            label_visibility="collapsed",
        )
        if new_availability != doctor.availability:
            store.update_doctor(doctor.id, {"availability": new_availability})
            st.rerun()
        if cols[4].button("Delete", key=f"del_doctor_{doctor.id}"):
            store.delete_doctor(doctor.id)
            st.rerun()
    card_close()
