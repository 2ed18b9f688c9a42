"""
app/main.py

Hospital administration console - Streamlit entry point.
- Per-session HospitalStore
- Login gate (current user in the store)
- Sidebar navigation + sign out with confirmation
- Global theme injection from the store's resolved palette

Run with:  streamlit run app/main.py
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

logging.basicConfig(
    level=os.environ.get("HMS_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

from app.state import get_store, sync_system_theme  # noqa: E402
from app.ui import inject_theme  # noqa: E402

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Hospital Console",
    page_icon="🏥",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ---------------------------------------------------------------------------
# Session defaults
# ---------------------------------------------------------------------------
if "current_page" not in st.session_state:
    st.session_state["current_page"] = "auth"

store = get_store()
sync_system_theme(store)
inject_theme(store.colors, dark="dark" in store.root_classes)


def _import_render(module_name: str):
    mod = __import__(f"app.pages.{module_name}", fromlist=["render"])
    return mod.render


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("🏥 Hospital Console")
st.sidebar.markdown("Patients, doctors, appointments and wards in one place.")
st.sidebar.divider()

user = store.current_user
if user is not None:
    st.sidebar.success(f"**{user.name}**\n\nRole: **{user.role}**")
    st.sidebar.checkbox("Yes, sign me out", key="confirm_logout")
    if st.sidebar.button("↩️ Sign out"):
        if store.logout(confirm=lambda: st.session_state.get("confirm_logout", False)):
            st.session_state["current_page"] = "auth"
            st.rerun()
        else:
            st.sidebar.warning("Tick the confirmation box to sign out.")
else:
    st.sidebar.info("Not logged in")

st.sidebar.divider()

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
nav_options = [("Sign in", "auth")]
if user is not None:
    nav_options = [
        ("Dashboard", "dashboard"),
        ("Patients", "patients"),
        ("Doctors", "doctors"),
        ("Appointments", "appointments"),
        ("Ward Management", "ward"),
        ("Settings", "settings"),
    ]
else:
    # unauthenticated: everything redirects to sign-in
    st.session_state["current_page"] = "auth"

labels = [x[0] for x in nav_options]
keys = [x[1] for x in nav_options]

try:
    current_idx = keys.index(st.session_state["current_page"])
except ValueError:
    current_idx = 0
    st.session_state["current_page"] = keys[0]

page_label = st.sidebar.radio("Navigate", options=labels, index=current_idx)
page_key = dict(nav_options)[page_label]
st.session_state["current_page"] = page_key

if store.mirror.last_error is not None:
    st.sidebar.error(f"Last save failed: {store.mirror.last_error}")

# ---------------------------------------------------------------------------
# Page routing
# ---------------------------------------------------------------------------
_import_render(page_key)(store)
