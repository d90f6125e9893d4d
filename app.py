# FILE: app.py

import logging

import streamlit as st

from medmemic.auth.session import get_app_context
from medmemic.config import is_gateway_configured, settings
from medmemic.core.models import Role
from medmemic.core.views import ViewKind
from medmemic.logging_setup import configure_logging
from medmemic.pages import (
    admin_dashboard, auth, landing, professor_dashboard, profile, setup, student_home,
)
from medmemic.ui.components import apply_theme, hide_streamlit_nav

logger = logging.getLogger(__name__)

DASHBOARDS = {
    Role.STUDENT: student_home.render,
    Role.PROFESSOR: professor_dashboard.render,
    Role.ADMIN: admin_dashboard.render,
}


def main():
    """Main application entry point and router."""

    # Page configuration
    st.set_page_config(
        page_title=settings.APP_TITLE,
        page_icon=settings.APP_ICON,
        layout="wide",
    )
    configure_logging()

    # Hide default Streamlit navigation
    hide_streamlit_nav()

    if not is_gateway_configured():
        setup.render()
        return

    context = get_app_context()
    _guard(context)
    apply_theme(context.theme)
    _render_view(context)


def _guard(context):
    """Keep signed-in views for the signed-in role only."""
    view = context.view
    if not view.is_authenticated:
        return
    if context.session is None:
        logger.info("No session for %s, back to landing", view)
        context.router.go_landing()
    elif view.role is not context.session.role:
        context.router.auth_succeeded(context.session.role)


def _render_view(context):
    view = context.view
    if view.kind is ViewKind.LOGIN:
        auth.render_login(context)
    elif view.kind is ViewKind.SIGNUP:
        auth.render_signup(context)
    elif view.kind is ViewKind.PROFILE:
        profile.render(context)
    elif view.is_authenticated:
        # admin users/scenarios/approvals share the admin dashboard
        DASHBOARDS[view.role](context)
    else:
        landing.render(context)


if __name__ == "__main__":
    main()
