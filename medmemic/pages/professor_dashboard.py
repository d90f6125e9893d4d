# FILE: medmemic/pages/professor_dashboard.py

import pandas as pd
import plotly.express as px
import streamlit as st

from medmemic.core.context import AppContext
from medmemic.core.models import ContentType, CourseForm
from medmemic.errors import MutationError
from medmemic.services.professor import ProfessorDashboard
from medmemic.ui.components import difficulty_badge, flash, render_flash
from medmemic.ui.navigation import render_sidebar

CONTENT_TYPE_LABELS = {
    ContentType.TEXT: "📝 Texte",
    ContentType.PDF: "📄 PDF",
    ContentType.VIDEO: "🎬 Vidéo",
}


def render(context: AppContext):
    """Professor dashboard page."""
    render_sidebar(context)

    dashboard = context.mount("professor_dashboard", lambda: ProfessorDashboard(context.gateway))
    if not dashboard.loaded:
        with st.spinner("Chargement des données de la cohorte..."):
            dashboard.load()

    st.title("👩‍⚕️ Espace Professeur")
    st.caption("Données en temps réel de votre cohorte.")
    render_flash()

    stats = dashboard.stats
    col1, col2, col3 = st.columns(3)
    col1.metric("Étudiants actifs", stats.active_students)
    col2.metric("Scénarios publiés", stats.published_scenarios)
    col3.metric("Taux de réussite global", f"{stats.global_success_rate}%")

    _render_difficulty_chart(dashboard)
    st.divider()
    _render_scenarios(dashboard)


def _render_difficulty_chart(dashboard: ProfessorDashboard):
    breakdown = dashboard.difficulty_breakdown()
    if not breakdown:
        return
    df = pd.DataFrame({"Difficulté": list(breakdown.keys()), "Scénarios": list(breakdown.values())})
    fig = px.bar(df, x="Difficulté", y="Scénarios", title="Répartition des scénarios par difficulté")
    fig.update_layout(height=300, margin=dict(l=10, r=10, t=40, b=10))
    st.plotly_chart(fig, use_container_width=True)


def _render_scenarios(dashboard: ProfessorDashboard):
    st.header("📚 Scénarios")
    search = st.text_input("🔍 Rechercher un scénario", key="professor_search")
    scenarios = [
        s for s in dashboard.scenarios
        if not search or search.lower() in (s.title or "").lower()
    ]
    if not scenarios:
        st.info("Aucun scénario trouvé.")
        return

    for scenario in scenarios:
        with st.container(border=True):
            col1, col2 = st.columns([4, 1])
            with col1:
                st.markdown(f"**{scenario.title}**")
                difficulty_badge(scenario.difficulty)
                st.caption(scenario.specialty or "")
            with col2:
                if st.button("➕ Ajouter un cours", key=f"add_course_{scenario.id}"):
                    st.session_state.course_scenario_id = scenario.id

            if st.session_state.get("course_scenario_id") == scenario.id:
                _render_course_form(dashboard, scenario)


def _render_course_form(dashboard: ProfessorDashboard, scenario):
    with st.form(f"course_form_{scenario.id}", clear_on_submit=True):
        st.write(f"**Nouveau cours pour : {scenario.title}**")
        title = st.text_input("Titre du cours")
        content_type = st.selectbox(
            "Type de contenu",
            list(ContentType),
            format_func=lambda c: CONTENT_TYPE_LABELS[c],
        )
        description = st.text_area("Description / Contenu")
        col1, col2 = st.columns(2)
        submitted = col1.form_submit_button("💾 Enregistrer", type="primary", use_container_width=True)
        cancelled = col2.form_submit_button("Annuler", use_container_width=True)

    if cancelled:
        del st.session_state.course_scenario_id
        st.rerun()
    if submitted:
        try:
            with st.spinner("Enregistrement..."):
                dashboard.add_course(
                    scenario.id,
                    CourseForm(title=title, description=description, content_type=content_type),
                )
        except MutationError as e:
            st.error(f"❌ {e}")
            return
        del st.session_state.course_scenario_id
        flash("✅ Cours ajouté avec succès au scénario ! Il sera visible après approbation.")
        st.rerun()
