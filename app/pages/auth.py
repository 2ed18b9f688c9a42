"""
app/pages/auth.py

Sign-in screen.  There is no credential check: the chosen identity simply
becomes the store's current user and a login history entry is recorded.
"""

from __future__ import annotations

import streamlit as st

from app.ui import card_close, card_open
from hospital.store import HospitalStore
from storage.models import User, UserRole


def render(store: HospitalStore) -> None:
    colL, colR = st.columns([1.15, 1], gap="large")

    with colL:
        st.markdown(
            """
<div style="padding: 10px 4px;">
  <div style="font-weight:1000; font-size:44px; line-height:1.05;">Hospital<br>administration.</div>
  <div style="margin-top:12px; font-size:15px; opacity:0.75;">
    Patients, doctors, appointments and ward occupancy in one workspace.
  </div>
</div>
            """,
            unsafe_allow_html=True,
        )

    with colR:
        card_open("Sign in", "Choose who you are signing in as")
        with st.form("login"):
            name = st.text_input("Full name", value="Dr. Sarah Smith")
            email = st.text_input("Email", value="sarah.smith@hospital.demo")
            role = st.selectbox("Role", options=[r.value for r in UserRole])
            submitted = st.form_submit_button("Continue", type="primary", use_container_width=True)
        card_close()

        if submitted:
            if not name.strip() or not email.strip():
                st.warning("Name and email are required.")
                return
            user = User(id=store.ids.next_id(), name=name.strip(), email=email.strip(), role=role)
            store.login(user)
            st.session_state["current_page"] = "dashboard"
            st.rerun()
