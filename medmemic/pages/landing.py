# FILE: medmemic/pages/landing.py

import re

import streamlit as st

from medmemic.core.context import AppContext
from medmemic.ui.content import (
    AUDIENCE_SEGMENTS, FAQ_ITEMS, FEATURES, HERO, NAV_LINKS, PRICING, PROBLEM_ITEMS,
)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def render(context: AppContext):
    """Marketing site: static sections plus the login entry point."""
    _render_navigation(context)
    _render_hero()
    _render_problem()
    _render_solution()
    _render_audience()
    _render_pricing()
    _render_faq()
    _render_footer()


def _render_navigation(context: AppContext):
    col1, col2, col3 = st.columns([3, 1, 1])
    with col1:
        st.markdown("### 🩺 MedMemic")
        st.caption(" · ".join(f"[{link['label']}](#{link['anchor']})" for link in NAV_LINKS))
    with col2:
        if st.button("Connexion", use_container_width=True, key="landing_login"):
            context.router.go_login()
            st.rerun()
    with col3:
        if st.button("Créer un compte", type="primary", use_container_width=True, key="landing_signup"):
            context.router.go_signup()
            st.rerun()
    st.divider()


def _render_hero():
    st.caption(f"🟢 {HERO['badge']}")
    st.title(HERO["title"])
    st.write(HERO["subtitle"])

    case = HERO["case"]
    with st.container(border=True):
        st.markdown(f"**🚨 {case['tag']}** · Il y a 2 min")
        st.write(f"**{case['patient']}**")
        st.write(case["motive"])
        st.caption(case["vitals"])


def _render_problem():
    st.header("La peur de l'erreur fatale", anchor="problem")
    st.write(
        "Devant un enfant, le stress bloque le raisonnement. En stage, on a peur de toucher, "
        "peur de mal faire. Résultat : on reste en retrait."
    )
    cols = st.columns(2)
    for i, item in enumerate(PROBLEM_ITEMS):
        with cols[i % 2]:
            st.info(f"{item['icon']} {item['text']}")


def _render_solution():
    st.header("Une clinique virtuelle dans votre poche.", anchor="solution")
    st.subheader("Fonctionnalités", anchor="features")
    cols = st.columns(3)
    for i, feature in enumerate(FEATURES):
        with cols[i % 3]:
            with st.container(border=True):
                st.markdown(f"#### {feature['icon']} {feature['title']}")
                st.write(feature["description"])


def _render_audience():
    st.header("Pour qui ?", anchor="audience")
    cols = st.columns(len(AUDIENCE_SEGMENTS))
    for col, segment in zip(cols, AUDIENCE_SEGMENTS):
        with col:
            st.markdown(f"#### {segment['icon']} {segment['title']}")
            st.write(segment["description"])


def _render_pricing():
    st.header(PRICING["title"], anchor="pricing")
    st.caption(PRICING["badge"])
    st.write(PRICING["subtitle"])
    st.write("  ".join(f"✅ {benefit}" for benefit in PRICING["benefits"]))

    with st.form("waitlist_form", clear_on_submit=True):
        email = st.text_input("E-mail", placeholder=PRICING["placeholder"], label_visibility="collapsed")
        submitted = st.form_submit_button(PRICING["cta"], type="primary", use_container_width=True)
    if submitted:
        # Waitlist is not wired to any backend yet
        if EMAIL_PATTERN.match(email.strip()):
            st.success("Merci ! Votre place est réservée.")
        else:
            st.error("❌ Adresse e-mail invalide.")
    st.caption(PRICING["note"])


def _render_faq():
    st.header("Questions fréquentes", anchor="faq")
    open_index = st.session_state.get("faq_open")
    for idx, item in enumerate(FAQ_ITEMS):
        is_open = open_index == idx
        marker = "➖" if is_open else "➕"
        if st.button(f"{marker} {item['question']}", key=f"faq_{idx}", type="tertiary"):
            st.session_state.faq_open = None if is_open else idx
            st.rerun()
        if is_open:
            st.write(item["answer"])


def _render_footer():
    st.divider()
    st.caption("© MedMemic · Mentions légales")
