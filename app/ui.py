# =========================
# app/ui.py
# =========================
from __future__ import annotations

import html

import streamlit as st


def inject_theme(colors: dict[str, str], dark: bool = False) -> None:
    """
    Inject the console stylesheet for the resolved palette.

    *dark* mirrors the store's root-level ``dark`` marker and sets the
    browser color-scheme so native widgets follow it.
    """
    mode = "dark" if dark else "light"
    st.markdown(
        f"""
<style>
/* Hide Streamlit built-in multipage nav (we route ourselves) */
[data-testid="stSidebarNav"] {{ display: none !important; }}

:root{{
  --canvas: {colors["background"]};
  --card: {colors["surface"]};
  --card-hover: {colors["surfaceHover"]};
  --border: {colors["border"]};
  --text: {colors["textPrimary"]};
  --text-2: {colors["textSecondary"]};
  --muted: {colors["textMuted"]};
  --input: {colors["inputBg"]};
  --shadow: {colors["shadow"]};
  --accent: 217 91% 53%;
}}

.stApp {{ background: var(--canvas); color-scheme: {mode}; }}

.stApp, .stMarkdown, .stMarkdown p, .stCaption, label,
h1, h2, h3, h4, h5, h6, div[data-testid="stMarkdownContainer"] {{
  color: var(--text) !important;
}}

div.block-container {{ padding-top: 2.2rem; padding-bottom: 2.2rem; }}

div[data-testid="stTextInput"] input,
div[data-testid="stTextArea"] textarea,
div[data-testid="stNumberInput"] input {{
  background: var(--input) !important;
  color: var(--text) !important;
  border: 1px solid var(--border) !important;
  border-radius: 12px !important;
}}

section[data-testid="stSidebar"] {{
  background: var(--card) !important;
  border-right: 1px solid var(--border);
}}

.stButton>button {{ border-radius: 12px; border: 1px solid var(--border); }}
.stButton>button[kind="primary"] {{
  background: hsl(var(--accent)) !important;
  border: 1px solid hsl(var(--accent)) !important;
  color: white !important;
}}

.mc-card {{
  background: var(--card);
  border: 1px solid var(--border);
  border-radius: 16px;
  padding: 16px;
  box-shadow: var(--shadow);
  margin-bottom: 12px;
}}
.mc-title {{ font-weight: 800; font-size: 16px; margin-bottom: 2px; color: var(--text); }}
.mc-sub {{ color: var(--muted); font-size: 13px; }}
.mc-metric-label {{ color: var(--text-2); font-size: 13px; margin-bottom: 6px; }}
.mc-metric-value {{ font-size: 30px; font-weight: 900; color: var(--text); line-height: 1.0; }}
.mc-metric-foot {{ margin-top: 6px; color: var(--muted); font-size: 12px; }}

.status-badge {{
  display:inline-block;
  padding: 4px 10px;
  border-radius: 999px;
  font-size: 12px;
  font-weight: 800;
}}
.status-good {{ background: rgba(21,128,61,0.12); color: #15803d; }}
.status-info {{ background: rgba(37,99,235,0.12); color: #2563eb; }}
.status-warn {{ background: rgba(217,119,6,0.14); color: #d97706; }}
.status-bad  {{ background: rgba(220,38,38,0.12); color: #dc2626; }}
.status-idle {{ background: rgba(107,114,128,0.14); color: var(--text-2); }}
</style>
        """,
        unsafe_allow_html=True,
    )


def _esc(x: str) -> str:
    """Escape any user/store-provided strings before injecting into HTML."""
    return html.escape(str(x or ""), quote=True)


def card_open(title: str, subtitle: str = "") -> None:
    sub = f'<div class="mc-sub">{_esc(subtitle)}</div>' if subtitle else ""
    st.markdown(
        f'<div class="mc-card"><div class="mc-title">{_esc(title)}</div>{sub}',
        unsafe_allow_html=True,
    )


def card_close() -> None:
    st.markdown("</div>", unsafe_allow_html=True)


_STATUS_CLASSES = {
    "Available": "status-good",
    "Completed": "status-good",
    "Active": "status-good",
    "Scheduled": "status-info",
    "Reserved": "status-info",
    "Busy": "status-warn",
    "Cleaning": "status-warn",
    "Occupied": "status-bad",
    "Cancelled": "status-bad",
}


def status_badge(status: str) -> str:
    cls = _STATUS_CLASSES.get(status, "status-idle")
    return f'<span class="status-badge {cls}">{_esc(status)}</span>'


def metric_card(label: str, value: str, foot: str | None = None) -> None:
    """Plain-text metric tile (escaped)."""
    foot_html = f'<div class="mc-metric-foot">{_esc(foot)}</div>' if foot else ""
    st.markdown(
        f"""
<div class="mc-card">
  <div class="mc-metric-label">{_esc(label)}</div>
  <div class="mc-metric-value">{_esc(value)}</div>
  {foot_html}
</div>
        """,
        unsafe_allow_html=True,
    )
