# FILE: medmemic/pages/admin_dashboard.py

import pandas as pd
import streamlit as st

from medmemic.core.context import AppContext
from medmemic.core.models import Difficulty, Role, ScenarioForm
from medmemic.core.views import ViewKind, view_for
from medmemic.errors import MutationError
from medmemic.services.admin import AdminDashboard, AdminTab, UserFilter
from medmemic.ui.components import (
    confirmation, difficulty_badge, flash, render_flash, request_confirmation,
)
from medmemic.ui.navigation import render_sidebar

TAB_LABELS = {
    AdminTab.OVERVIEW: "📊 Vue d'ensemble",
    AdminTab.USERS: "👥 Utilisateurs",
    AdminTab.SCENARIOS: "📄 Scénarios",
    AdminTab.APPROVALS: "✅ Approbations",
}
TAB_VIEWS = {
    AdminTab.OVERVIEW: ViewKind.DASHBOARD,
    AdminTab.USERS: ViewKind.USERS,
    AdminTab.SCENARIOS: ViewKind.SCENARIOS,
    AdminTab.APPROVALS: ViewKind.APPROVALS,
}
USER_FILTER_LABELS = {
    UserFilter.ALL: "Tous",
    UserFilter.STUDENT: "Étudiants",
    UserFilter.PROFESSOR: "Professeurs",
}


def render(context: AppContext):
    """Admin dashboard page; the current view decides which tab opens."""
    render_sidebar(context)

    default_tab = AdminTab.for_view_kind(context.view.kind)
    dashboard = context.mount("admin_dashboard", lambda: AdminDashboard(context.gateway, default_tab).fetch())

    st.title("🛡️ Administration")
    selected = st.radio(
        "Section",
        list(AdminTab),
        index=list(AdminTab).index(dashboard.current_tab),
        format_func=lambda t: TAB_LABELS[t],
        horizontal=True,
        label_visibility="collapsed",
        key=f"admin_tab_{context.view.name}",
    )
    if selected is not dashboard.current_tab:
        # Each tab is its own view; switching remounts and refetches
        context.router.navigate(view_for(Role.ADMIN, TAB_VIEWS[selected]), Role.ADMIN)
        st.rerun()

    render_flash()

    renderers = {
        AdminTab.OVERVIEW: _render_overview,
        AdminTab.USERS: _render_users,
        AdminTab.SCENARIOS: _render_scenarios,
        AdminTab.APPROVALS: _render_approvals,
    }
    renderers[dashboard.current_tab](dashboard)


# --- overview ---

def _render_overview(dashboard: AdminDashboard):
    stats = dashboard.stats
    col1, col2, col3 = st.columns(3)
    col1.metric("Utilisateurs", stats.total_users)
    col2.metric("Scénarios", stats.total_scenarios)
    col3.metric("En attente d'approbation", stats.pending_approvals)


# --- users ---

def _render_users(dashboard: AdminDashboard):
    col1, col2 = st.columns([1, 2])
    with col1:
        role_filter = st.radio(
            "Rôle",
            list(UserFilter),
            format_func=lambda f: USER_FILTER_LABELS[f],
            horizontal=True,
            key="admin_user_filter",
        )
    with col2:
        search = st.text_input("🔍 Rechercher (nom ou email)", key="admin_user_search")

    users = dashboard.filtered_users(role_filter, search)
    if not users:
        st.info("Aucun utilisateur trouvé.")
        return

    df = pd.DataFrame([
        {"Nom": u.full_name or "—", "Email": u.email or "—", "Rôle": u.role or "—", "Créé le": u.created_at}
        for u in users
    ])
    df["Créé le"] = pd.to_datetime(df["Créé le"], errors="coerce").dt.strftime("%Y-%m-%d")
    st.dataframe(df, hide_index=True, use_container_width=True)

    for user in users:
        with st.container(border=True):
            col1, col2, col3 = st.columns([4, 1, 1])
            with col1:
                st.markdown(f"**{user.full_name or '—'}** · {user.email or ''}")
                st.caption(user.role or "")
            with col2:
                if st.button("✏️ Modifier", key=f"edit_user_{user.user_id}"):
                    st.session_state.editing_user_id = user.user_id
            with col3:
                if st.button("🗑️ Supprimer", key=f"delete_user_{user.user_id}"):
                    request_confirmation(f"delete_user_{user.user_id}")

            if confirmation(
                f"delete_user_{user.user_id}",
                "Êtes-vous sûr de vouloir supprimer cet utilisateur ? Cette action est irréversible.",
            ):
                _run(lambda: dashboard.delete_user(user.user_id), "Utilisateur supprimé.")

            if st.session_state.get("editing_user_id") == user.user_id:
                _render_user_form(dashboard, user)


def _render_user_form(dashboard: AdminDashboard, user):
    roles = list(Role)
    current = Role.parse(user.role, Role.STUDENT)
    with st.form(f"user_form_{user.user_id}"):
        full_name = st.text_input("Nom complet", value=user.full_name or "")
        role = st.selectbox("Rôle", roles, index=roles.index(current), format_func=lambda r: r.value)
        col1, col2 = st.columns(2)
        submitted = col1.form_submit_button("💾 Enregistrer", type="primary", use_container_width=True)
        cancelled = col2.form_submit_button("Annuler", use_container_width=True)
    if cancelled:
        del st.session_state.editing_user_id
        st.rerun()
    if submitted:
        st.session_state.pop("editing_user_id", None)
        _run(lambda: dashboard.update_user(user.user_id, full_name.strip(), role), "Profil mis à jour.")


# --- scenarios ---

def _render_scenarios(dashboard: AdminDashboard):
    if st.button("➕ Nouveau scénario", type="primary", key="new_scenario"):
        st.session_state.scenario_form_target = "new"

    if st.session_state.get("scenario_form_target") == "new":
        _render_scenario_form(dashboard, None)

    if not dashboard.scenarios:
        st.info("Aucun scénario.")
        return

    for scenario in dashboard.scenarios:
        with st.container(border=True):
            col1, col2, col3 = st.columns([4, 1, 1])
            with col1:
                st.markdown(f"**{scenario.title}**")
                difficulty_badge(scenario.difficulty)
                st.caption(f"{scenario.specialty or ''} · {scenario.duration_minutes or '?'} min")
            with col2:
                if st.button("✏️ Modifier", key=f"edit_scenario_{scenario.id}"):
                    st.session_state.scenario_form_target = scenario.id
            with col3:
                if st.button("🗑️ Supprimer", key=f"delete_scenario_{scenario.id}"):
                    request_confirmation(f"delete_scenario_{scenario.id}")

            if confirmation(
                f"delete_scenario_{scenario.id}",
                "Supprimer ce scénario et toutes les données associées ?",
            ):
                _run(lambda: dashboard.delete_scenario(scenario.id), "Scénario supprimé.")

            if st.session_state.get("scenario_form_target") == scenario.id:
                _render_scenario_form(dashboard, scenario)


def _render_scenario_form(dashboard: AdminDashboard, scenario):
    initial = ScenarioForm.from_scenario(scenario) if scenario else ScenarioForm()
    difficulties = [d.value for d in Difficulty]
    key = scenario.id if scenario else "new"

    with st.form(f"scenario_form_{key}"):
        st.write("**Modifier le scénario**" if scenario else "**Nouveau scénario**")
        title = st.text_input("Titre", value=initial.title)
        description = st.text_area("Description", value=initial.description)
        col1, col2, col3 = st.columns(3)
        difficulty = col1.selectbox(
            "Difficulté",
            difficulties,
            index=difficulties.index(initial.difficulty) if initial.difficulty in difficulties else 0,
        )
        specialty = col2.text_input("Spécialité", value=initial.specialty)
        duration = col3.number_input("Durée (min)", min_value=1, max_value=240, value=int(initial.duration_minutes))
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("💾 Enregistrer", type="primary", use_container_width=True)
        cancelled = c2.form_submit_button("Annuler", use_container_width=True)

    if cancelled:
        del st.session_state.scenario_form_target
        st.rerun()
    if submitted:
        form = ScenarioForm(
            title=title.strip(),
            description=description,
            difficulty=difficulty,
            specialty=specialty.strip(),
            duration_minutes=int(duration),
        )
        st.session_state.pop("scenario_form_target", None)
        _run(
            lambda: dashboard.save_scenario(form, scenario.id if scenario else None),
            "Scénario enregistré.",
        )


# --- approvals ---

def _render_approvals(dashboard: AdminDashboard):
    if not dashboard.pending_courses:
        st.success("🎉 Aucun cours en attente d'approbation.")
        return

    for course in dashboard.pending_courses:
        with st.container(border=True):
            col1, col2, col3 = st.columns([4, 1, 1])
            with col1:
                st.markdown(f"**{course.title}** · {course.content_type}")
                st.caption(f"Scénario : {course.scenario_title or 'Inconnu'}")
                if course.description:
                    st.write(course.description)
            with col2:
                if st.button("✅ Approuver", key=f"approve_{course.id}", type="primary"):
                    _run(lambda: dashboard.approve_course(course.id), "Cours approuvé.")
            with col3:
                if st.button("❌ Rejeter", key=f"reject_{course.id}"):
                    request_confirmation(f"reject_{course.id}")

            if confirmation(f"reject_{course.id}", "Rejeter et supprimer ce cours ?"):
                _run(lambda: dashboard.reject_course(course.id), "Cours rejeté.")


def _run(action, success_message):
    """Run a mutation; failures are shown inline, successes after the rerun."""
    try:
        action()
    except MutationError as e:
        st.error(f"❌ {e}")
        return
    flash(f"✅ {success_message}")
    st.rerun()
