# FILE: medmemic/ui/components.py

import streamlit as st

from medmemic.core.models import Theme
from medmemic.services.common import (
    SEVERITY_HIGH, SEVERITY_LOW, SEVERITY_MEDIUM, difficulty_severity,
)

SEVERITY_STYLES = {
    SEVERITY_HIGH: ("#fee2e2", "#b91c1c"),
    SEVERITY_MEDIUM: ("#fef3c7", "#b45309"),
    SEVERITY_LOW: ("#dcfce7", "#15803d"),
}
NEUTRAL_STYLE = ("#f1f5f9", "#334155")

DARK_CSS = """
    <style>
        [data-testid="stAppViewContainer"], [data-testid="stHeader"] {
            background-color: #020617;
            color: #e2e8f0;
        }
        [data-testid="stSidebar"] {
            background-color: #0f172a;
        }
        [data-testid="stAppViewContainer"] h1,
        [data-testid="stAppViewContainer"] h2,
        [data-testid="stAppViewContainer"] h3,
        [data-testid="stAppViewContainer"] p,
        [data-testid="stAppViewContainer"] label,
        [data-testid="stMetricValue"] {
            color: #f8fafc;
        }
    </style>
"""


def hide_streamlit_nav():
    """Hide default Streamlit navigation elements."""
    st.markdown("""
        <style>
            [data-testid="stSidebarNav"] {
                display: none;
            }
        </style>
    """, unsafe_allow_html=True)


def apply_theme(theme):
    """Render the dark palette; light is Streamlit's own default."""
    if Theme(theme) is Theme.DARK:
        st.markdown(DARK_CSS, unsafe_allow_html=True)


def badge(text, background, color):
    st.markdown(
        f"<span style='background:{background};color:{color};padding:2px 10px;"
        f"border-radius:999px;font-size:0.75rem;font-weight:700'>{text}</span>",
        unsafe_allow_html=True,
    )


def difficulty_badge(difficulty):
    background, color = SEVERITY_STYLES.get(difficulty_severity(difficulty), NEUTRAL_STYLE)
    badge(difficulty or "—", background, color)


def request_confirmation(key):
    st.session_state[f"confirm_{key}"] = True


def confirmation(key, prompt) -> bool:
    """
    Second step of a destructive action.

    Renders the prompt with confirm/cancel buttons once ``request_confirmation``
    was called for ``key``; returns True only on the run where the user confirms.
    """
    flag = f"confirm_{key}"
    if not st.session_state.get(flag):
        return False
    st.warning(prompt)
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Confirmer", key=f"confirm_yes_{key}", type="primary", use_container_width=True):
            del st.session_state[flag]
            return True
    with col2:
        if st.button("Annuler", key=f"confirm_no_{key}", use_container_width=True):
            del st.session_state[flag]
            st.rerun()
    return False


def flash(message, kind="success"):
    """Queue a message shown once after the next rerun."""
    st.session_state["flash"] = (kind, message)


def render_flash():
    kind, message = st.session_state.pop("flash", (None, None))
    if message:
        getattr(st, kind)(message)
