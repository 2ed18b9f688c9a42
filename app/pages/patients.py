"""
app/pages/patients.py

Patient records: search, add, edit and delete.
- Search matches name (any case) or contact number
- Edit sends only the changed fields to the store
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

import streamlit as st
from pydantic import ValidationError

from app.ui import card_close, card_open, metric_card
from hospital.queries import search_patients
from hospital.store import HospitalStore
from storage.models import Gender, Patient

_GENDERS = [g.value for g in Gender]


def _patient_form(key: str, patient: Optional[Patient] = None) -> Optional[dict[str, Any]]:
    """Render the add/edit form; returns the submitted values or None."""
    with st.form(key, clear_on_submit=patient is None):
        name = st.text_input("Name", value=patient.name if patient else "")
        c1, c2 = st.columns(2)
        age = c1.number_input("Age", min_value=0, max_value=130, value=patient.age if patient else 30)
        gender = c2.selectbox(
            "Gender",
            options=_GENDERS,
            index=_GENDERS.index(patient.gender) if patient else 0,
        )
        contact = st.text_input("Contact", value=patient.contact if patient else "")
        email = st.text_input("Email (optional)", value=(patient.email or "") if patient else "")
        history = st.text_area("Medical history", value=patient.history if patient else "")
        last_visit = st.date_input(
            "Last visit",
            value=date.fromisoformat(patient.last_visit) if patient and _is_iso(patient.last_visit) else date.today(),
        )
        submitted = st.form_submit_button("Save", type="primary")

    if not submitted:
        return None
    return {
        "name": name.strip(),
        "age": int(age),
        "gender": gender,
        "contact": contact.strip(),
        "email": email.strip() or None,
        "history": history,
        "last_visit": last_visit.isoformat(),
    }


def _is_iso(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def render(store: HospitalStore) -> None:
    st.title("Patients")
    st.caption("Register patients and keep their records current.")

    patients = store.patients
    c1, c2 = st.columns(2)
    with c1:
        metric_card("Total patients", str(len(patients)))
    with c2:
        metric_card("Visited this year", str(sum(1 for p in patients if p.last_visit.startswith(str(date.today().year)))))

    with st.expander("➕ Add patient"):
        values = _patient_form("add_patient")
        if values is not None:
            try:
                created = store.add_patient(values)
            except ValidationError as exc:
                st.error(f"Could not add patient: {exc.error_count()} invalid field(s).")
            else:
                st.success(f"Added {created.name}.")
                st.rerun()

    term = st.text_input("Search by name or contact", key="patient_search")
    matches = search_patients(patients, term)

    card_open("Records", f"{len(matches)} of {len(patients)} shown")
    if not matches:
        st.caption("No patients match.")
    for patient in matches:
        with st.expander(f"{patient.name} · {patient.age} · {patient.gender} · {patient.contact}"):
            st.markdown(f"**History:** {patient.history or '—'}  \n**Last visit:** {patient.last_visit}")
            values = _patient_form(f"edit_patient_{patient.id}", patient)
            if values is not None:
                current = patient.model_dump()
                changes = {k: v for k, v in values.items() if current.get(k) != v}
                try:
                    store.update_patient(patient.id, changes)
                except ValidationError as exc:
                    st.error(f"Could not update: {exc.error_count()} invalid field(s).")
                else:
                    st.rerun()
            if st.button("Delete patient", key=f"del_patient_{patient.id}"):
                store.delete_patient(patient.id)
                st.rerun()
    card_close()
