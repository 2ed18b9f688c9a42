"""
app/pages/settings.py

Appearance (theme preference) and the login history audit trail.
"""

from __future__ import annotations

import streamlit as st

from app.ui import card_close, card_open, status_badge
from hospital.store import HospitalStore
from storage.models import ThemePreference

_THEMES = [t.value for t in ThemePreference]


def render(store: HospitalStore) -> None:
    st.title("Settings")

    card_open("Appearance", f"Currently rendering in {store.resolved_theme} mode")
    theme = st.radio(
        "Theme",
        options=_THEMES,
        index=_THEMES.index(store.theme),
        horizontal=True,
        format_func=str.capitalize,
    )
    if theme != store.theme:
        store.set_theme(theme)
        st.rerun()
    if store.theme == ThemePreference.system.value:
        st.caption(f"Following your system setting ({store.os_scheme.current}).")
    card_close()

    history = store.login_history
    card_open("Login history", f"Showing {len(history)} entries")
    for entry in history:
        row = st.columns([2.2, 1.2, 1.6, 1.2, 1.2])
        row[0].markdown(f"**{entry.user}**")
        row[1].markdown(entry.role)
        row[2].markdown(entry.date)
        row[3].markdown(entry.time)
        row[4].markdown(status_badge(entry.status), unsafe_allow_html=True)
    card_close()

    card_open("Data", "Restore the demo patients, doctors, appointments and rooms")
    confirm = st.checkbox("I understand current records will be replaced", key="confirm_reset")
    if st.button("Reset to demo data", disabled=not confirm):
        store.reset_to_seed()
        st.rerun()
    card_close()
