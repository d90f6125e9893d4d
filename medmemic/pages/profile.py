# FILE: medmemic/pages/profile.py

import streamlit as st

from medmemic.core.context import AppContext
from medmemic.core.models import YEAR_OF_STUDY_OPTIONS, Language, ProfileForm, Role, Theme
from medmemic.errors import MutationError, UploadError
from medmemic.services.common import round_half_up
from medmemic.services.profile import ProfileScreen
from medmemic.ui.components import flash, render_flash
from medmemic.ui.navigation import render_sidebar

LANGUAGE_LABELS = {Language.FR: "🇫🇷 Français", Language.ES: "🇪🇸 Español"}


def render(context: AppContext):
    """Profile page, shared by every role."""
    render_sidebar(context)
    capabilities = context.capabilities
    t = context.preferences.translate

    profile = context.mount("profile", lambda: ProfileScreen(context.gateway, capabilities.role))
    if not profile.loaded:
        with st.spinner(t("Chargement du profil...", "Cargando perfil...")):
            profile.load()

    render_flash()
    _render_identity(profile, t)
    st.divider()
    _render_academic(profile, t)
    st.divider()
    _render_preferences(context, t)

    if capabilities.shows_clinical_stats:
        st.divider()
        _render_stats(profile, t)


def _render_identity(profile: ProfileScreen, t):
    data = profile.user_data
    col1, col2 = st.columns([1, 3])
    with col1:
        if data.get("avatar_url"):
            st.image(data["avatar_url"], width=120)
        else:
            st.markdown("## 👤")
        uploaded = st.file_uploader(
            t("Changer la photo", "Cambiar la foto"),
            type=["png", "jpg", "jpeg", "gif", "webp"],
            key=f"avatar_{profile.auth_id}",
            label_visibility="collapsed",
        )
        if uploaded is not None and st.session_state.get("avatar_uploaded") != uploaded.file_id:
            st.session_state.avatar_uploaded = uploaded.file_id
            try:
                with st.spinner(t("Envoi...", "Subiendo...")):
                    profile.upload_avatar(uploaded.name, uploaded.getvalue(), uploaded.type)
            except UploadError as e:
                st.error(f"❌ {e}")
            else:
                flash(t("Photo de profil mise à jour !", "¡Foto de perfil actualizada!"))
                st.rerun()
    with col2:
        st.header(data.get("full_name") or t("Utilisateur", "Usuario"))
        role_labels = {
            Role.PROFESSOR: t("Professeur", "Profesor"),
            Role.ADMIN: t("Administrateur", "Administrador"),
        }
        st.caption(role_labels.get(profile.role, t("Étudiant", "Estudiante")))
        st.write(f"✉️ {data.get('email') or ''}")


def _render_academic(profile: ProfileScreen, t):
    col1, col2 = st.columns([3, 1])
    col1.subheader(t("Informations académiques", "Información académica"))
    if not profile.editing:
        if col2.button("✏️ " + t("Modifier", "Editar"), key="profile_edit"):
            profile.start_edit()
            st.rerun()
        st.write(f"**{t('Université / Faculté', 'Universidad')}** : "
                 f"{profile.user_data.get('medical_school') or t('Non renseigné', 'No especificado')}")
        st.write(f"**{t('Année d’étude', 'Año de estudio')}** : "
                 f"{profile.user_data.get('year_of_study') or t('Non renseigné', 'No especificado')}")
        return

    years = [""] + YEAR_OF_STUDY_OPTIONS
    form = profile.form
    with st.form("profile_form"):
        full_name = st.text_input(t("Nom complet", "Nombre completo"), value=form.full_name)
        medical_school = st.text_input(
            t("Université / Faculté", "Universidad"),
            value=form.medical_school,
            placeholder=t("Ex: Faculté de Médecine de Paris", "Ej: Facultad de Madrid"),
        )
        year_of_study = st.selectbox(
            t("Année d’étude", "Año de estudio"),
            years,
            index=years.index(form.year_of_study) if form.year_of_study in years else 0,
            format_func=lambda y: y or t("Choisir...", "Elegir..."),
        )
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("💾 " + t("Enregistrer", "Guardar"), type="primary", use_container_width=True)
        cancelled = c2.form_submit_button(t("Annuler", "Cancelar"), use_container_width=True)

    if cancelled:
        profile.cancel_edit()
        st.rerun()
    if submitted:
        try:
            with st.spinner(t("Enregistrement...", "Guardando...")):
                profile.save(ProfileForm(
                    full_name=full_name.strip(),
                    medical_school=medical_school.strip(),
                    year_of_study=year_of_study,
                ))
        except MutationError as e:
            st.error(f"❌ {e}")
            return
        st.rerun()


def _render_preferences(context: AppContext, t):
    st.subheader(t("Préférences", "Preferencias"))
    preferences = context.preferences

    if context.capabilities.can_choose_theme:
        dark = st.toggle(
            t("Mode Sombre", "Modo Oscuro"),
            value=preferences.theme is Theme.DARK,
            key="pref_theme",
        )
        chosen = Theme.DARK if dark else Theme.LIGHT
        if chosen is not preferences.theme:
            preferences.set_theme(chosen)
            st.rerun()

    languages = list(Language)
    language = st.radio(
        t("Langue", "Idioma"),
        languages,
        index=languages.index(preferences.language),
        format_func=lambda lang: LANGUAGE_LABELS[lang],
        horizontal=True,
        key="pref_language",
    )
    if language is not preferences.language:
        preferences.set_language(language)
        st.rerun()


def _render_stats(profile: ProfileScreen, t):
    st.subheader(t("Statistiques Cliniques", "Estadísticas Clínicas"))
    stats = profile.stats
    col1, col2, col3 = st.columns(3)
    col1.metric(t("Session Complétées", "Sesiones Completadas"), (stats.completed_sessions if stats else 0) or 0)
    col2.metric(t("Précision Moyenne", "Precisión Media"), f"{round_half_up(stats.avg_accuracy if stats else 0)}%")
    col3.metric(t("Série Actuelle", "Racha Actual"), f"{(stats.current_streak if stats else 0) or 0} {t('jours', 'días')}")
