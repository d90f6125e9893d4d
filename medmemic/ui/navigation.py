# FILE: medmemic/ui/navigation.py

import streamlit as st

from medmemic.auth.session import logout
from medmemic.core.context import AppContext
from medmemic.core.views import parse_view, view_for
from medmemic.ui.components import badge


def _target_view(context: AppContext, target):
    if target in ("dashboard", "profile"):
        return view_for(context.capabilities.role, target)
    return parse_view(target)


def render_sidebar(context: AppContext):
    """
    Dashboard layout sidebar shared by every signed-in screen.

    Entries come from the role's capability descriptor; the entry for the
    current view is disabled to show it is active.
    """
    capabilities = context.capabilities
    session = context.session

    with st.sidebar:
        st.header("🩺 MedMemic")
        badge(capabilities.label, capabilities.badge_color, "#ffffff")
        if session and session.email:
            st.caption(session.email)

        st.divider()

        for entry in capabilities.nav:
            target = _target_view(context, entry.target)
            is_current = target == context.view
            if st.button(
                f"{entry.icon} {entry.label}",
                use_container_width=True,
                type="secondary" if is_current else "tertiary",
                key=f"nav_{target.name}",
                disabled=is_current,
            ):
                context.router.navigate(entry.target, capabilities.role)
                st.rerun()

        st.divider()

        if st.button("🚪 Déconnexion", type="secondary", use_container_width=True, key="nav_logout"):
            logout(context)
            st.rerun()
