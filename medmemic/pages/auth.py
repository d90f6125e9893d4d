# FILE: medmemic/pages/auth.py

import time

import streamlit as st

from medmemic.auth.auth_handlers import AuthHandlers
from medmemic.config import settings
from medmemic.core.context import AppContext
from medmemic.core.models import Role
from medmemic.errors import AuthenticationError

ROLE_LABELS = {Role.STUDENT: "🎓 Étudiant", Role.PROFESSOR: "🩺 Professeur", Role.ADMIN: "🛡️ Admin"}


def render_login(context: AppContext):
    """Login page."""
    auth_handler = AuthHandlers(context.gateway)

    if st.button("← Retour à l'accueil", type="tertiary", key="login_back"):
        context.router.go_landing()
        st.rerun()

    st.title("Bon retour !")
    st.caption("Connectez-vous à votre espace MedMemic")

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email", placeholder="nom@exemple.com", key="login_email")
        password = st.text_input("Mot de passe", type="password", key="login_password")
        submitted = st.form_submit_button("Se connecter", type="primary", use_container_width=True)

    if submitted:
        _handle_login(context, auth_handler, email, password)

    if settings.DEMO_MODE:
        _render_demo_access(context, auth_handler)

    st.markdown("---")
    if st.button("Pas encore de compte ? Créer un compte", type="tertiary", key="login_to_signup"):
        context.router.go_signup()
        st.rerun()


def _handle_login(context: AppContext, auth_handler: AuthHandlers, email: str, password: str):
    """Handle login form submission."""
    if not email.strip() or not password:
        st.error("❌ Veuillez saisir votre email et votre mot de passe.")
        return

    try:
        with st.spinner("🔄 Connexion..."):
            session = auth_handler.login_user(email.strip(), password)
    except AuthenticationError as e:
        st.error(f"❌ {e}")
        return

    st.success("✅ Connexion réussie ! Chargement du profil...")
    time.sleep(settings.LOGIN_REDIRECT_DELAY)
    context.sign_in(session)
    st.rerun()


def _render_demo_access(context: AppContext, auth_handler: AuthHandlers):
    """Quick access buttons signing in with the seeded demo accounts."""
    from medmemic.gateway.demo import DEMO_ACCOUNTS, DEMO_PASSWORD

    st.caption("Accès rapide (démo)")
    cols = st.columns(len(DEMO_ACCOUNTS))
    for col, (role, (email, _name)) in zip(cols, DEMO_ACCOUNTS.items()):
        with col:
            if st.button(ROLE_LABELS[role], use_container_width=True, key=f"login_demo_{role.value}"):
                try:
                    session = auth_handler.login_user(email, DEMO_PASSWORD)
                except AuthenticationError as e:
                    st.error(f"❌ {e}")
                    return
                time.sleep(settings.DEMO_LOGIN_DELAY)
                context.sign_in(session)
                st.rerun()


def render_signup(context: AppContext):
    """Signup page."""
    auth_handler = AuthHandlers(context.gateway)

    if st.button("← Retour à l'accueil", type="tertiary", key="signup_back"):
        context.router.go_landing()
        st.rerun()

    st.title("Créer un compte")
    st.caption("Rejoignez la communauté MedMemic")

    # Outside the form so the access code field follows the selection immediately
    role = st.radio(
        "Je suis :",
        [Role.STUDENT, Role.PROFESSOR],
        format_func=lambda r: ROLE_LABELS[r],
        horizontal=True,
        key="signup_role",
    )

    with st.form("signup_form", clear_on_submit=False):
        full_name = st.text_input("Nom complet", placeholder="Dr. Jean Dupont", key="signup_name")
        email = st.text_input("Email", placeholder="nom@exemple.com", key="signup_email")
        password = st.text_input("Mot de passe", type="password", key="signup_password")
        access_code = ""
        if role is Role.PROFESSOR:
            access_code = st.text_input(
                "Code établissement",
                type="password",
                help="Code fourni par votre faculté pour créer un compte Professeur.",
                key="signup_access_code",
            )
        submitted = st.form_submit_button("Créer mon compte", type="primary", use_container_width=True)

    if submitted:
        _handle_signup(context, auth_handler, full_name, email, password, role, access_code)

    st.markdown("---")
    if st.button("Déjà un compte ? Se connecter", type="tertiary", key="signup_to_login"):
        context.router.go_login()
        st.rerun()


def _handle_signup(context: AppContext, auth_handler: AuthHandlers, full_name, email, password, role, access_code):
    """Handle signup form submission."""
    if not full_name.strip() or not email.strip() or not password:
        st.error("❌ Tous les champs sont obligatoires.")
        return

    try:
        with st.spinner("🔄 Création du compte..."):
            session = auth_handler.register_user(full_name.strip(), email.strip(), password, role, access_code)
    except AuthenticationError as e:
        st.error(f"❌ {e}")
        return

    st.success("✅ Compte créé avec succès !")
    time.sleep(settings.SIGNUP_REDIRECT_DELAY)
    context.sign_in(session)
    st.rerun()
