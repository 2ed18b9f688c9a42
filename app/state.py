"""
app/state.py

Per-session handle on the HospitalStore.

Each browser session gets its own store object (single logical user); the
store is passed explicitly to every page's ``render(store)``.
"""

from __future__ import annotations

import logging

import streamlit as st

from hospital.store import HospitalStore, build_store

logger = logging.getLogger(__name__)


def get_store() -> HospitalStore:
    if "store" not in st.session_state:
        st.session_state["store"] = build_store()
        logger.info("Created store for new session")
    return st.session_state["store"]


def sync_system_theme(store: HospitalStore) -> None:
    """
    Feed the browser-reported color scheme into the store.

    ``st.context.theme`` exists on recent Streamlit releases only; older ones
    leave the OS scheme at its last published value.
    """
    context_theme = getattr(getattr(st, "context", None), "theme", None)
    scheme = getattr(context_theme, "type", None)
    if scheme in ("light", "dark"):
        store.set_system_theme(scheme)
