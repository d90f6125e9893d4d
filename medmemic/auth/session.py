# FILE: medmemic/auth/session.py

import logging

import streamlit as st

from medmemic.auth.auth_handlers import AuthHandlers
from medmemic.config import settings
from medmemic.core.context import AppContext

logger = logging.getLogger(__name__)


def build_gateway(config=settings):
    """Gateway selected by configuration: seeded in-memory backend in demo mode, Supabase otherwise."""
    if config.DEMO_MODE:
        from medmemic.gateway.demo import build_demo_gateway
        logger.info("Demo mode: using the in-memory gateway")
        return build_demo_gateway()
    from medmemic.gateway.supabase import SupabaseGateway
    return SupabaseGateway(config.SUPABASE_URL, config.SUPABASE_ANON_KEY, config.REQUEST_TIMEOUT)


def get_app_context() -> AppContext:
    """
    Returns the AppContext of the current browser tab, creating it on first run.
    """
    if "app_context" not in st.session_state:
        st.session_state.app_context = AppContext(build_gateway())
    return st.session_state.app_context


def logout(context: AppContext) -> None:
    """Sign out remotely and return to the landing view."""
    AuthHandlers(context.gateway).logout_user()
    context.sign_out()
    # Form widgets keep their values across reruns; drop the ones holding credentials
    for key in list(st.session_state.keys()):
        if key.startswith(("login_", "signup_", "confirm_")):
            del st.session_state[key]
