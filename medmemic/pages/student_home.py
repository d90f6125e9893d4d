# FILE: medmemic/pages/student_home.py

import streamlit as st

from medmemic.core.context import AppContext
from medmemic.services.student import StudentDashboard
from medmemic.ui.components import difficulty_badge
from medmemic.ui.navigation import render_sidebar

FALLBACK_CASE = {
    "title": "Cas #42 : Détresse respiratoire",
    "description": "Nourrisson de 8 mois. Fièvre depuis 48h. Tirage intercostal marqué. Les parents sont paniqués.",
}


def render(context: AppContext):
    """Student home page."""
    render_sidebar(context)

    dashboard = context.mount("student_dashboard", lambda: StudentDashboard(context.gateway))
    if not dashboard.loaded:
        with st.spinner("Chargement de votre espace..."):
            dashboard.load()

    st.title("Bonjour, Docteur (en devenir) 👋")
    st.write("Prêt pour votre prochaine simulation ?")

    col1, col2 = st.columns([2, 1])
    with col1:
        _render_recommended(dashboard)
    with col2:
        _render_stats(dashboard)

    st.divider()
    _render_library(dashboard)


def _render_recommended(dashboard: StudentDashboard):
    case = dashboard.recommended
    title = case.title if case else FALLBACK_CASE["title"]
    description = (case.description if case else None) or FALLBACK_CASE["description"]
    with st.container(border=True):
        st.caption("🟢 Recommandé")
        st.subheader(title)
        st.write(description)
        st.button("▶️ Lancer la simulation", type="primary", key="student_play_recommended", disabled=case is None)


def _render_stats(dashboard: StudentDashboard):
    stats = dashboard.stats
    with st.container(border=True):
        st.caption("🏆 Niveau actuel")
        st.subheader(stats.level)
        st.metric("XP", stats.xp)
        c1, c2 = st.columns(2)
        c1.metric("Cas résolus", stats.cases_solved)
        c2.metric("Précision", f"{stats.accuracy}%")


def _render_library(dashboard: StudentDashboard):
    st.header("📚 Bibliothèque de cas")
    if not dashboard.scenarios:
        st.info("Aucun scénario disponible pour le moment.")
        return

    cols = st.columns(3)
    for i, scenario in enumerate(dashboard.scenarios):
        with cols[i % 3]:
            with st.container(border=True):
                difficulty_badge(scenario.difficulty)
                st.markdown(f"**{scenario.title}**")
                st.caption(f"{scenario.specialty or ''} · {scenario.duration_minutes or '?'} min")
                if scenario.description:
                    st.write(scenario.description)
