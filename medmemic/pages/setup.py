# FILE: medmemic/pages/setup.py

import streamlit as st

from medmemic.config import settings


def render():
    """Shown instead of the app when no backend is configured."""
    st.title("🗄️ Configuration Requise")
    st.write("Pour connecter MedMemic à votre base de données, nous avons besoin de votre clé API publique.")

    st.warning("**Instructions :**")
    st.markdown(
        "1. Allez sur votre dashboard Supabase.\n"
        "2. Settings → API → Project URL et Project API keys.\n"
        "3. Copiez l'URL et la clé **anon** / **public**.\n"
        "4. Renseignez-les dans le fichier `.env` à la racine du projet, puis relancez l'application."
    )
    st.code("SUPABASE_URL=https://<projet>.supabase.co\nSUPABASE_ANON_KEY=<clé anon>", language="bash")
    st.info("Pour essayer l'application sans backend, ajoutez `MEDMEMIC_DEMO_MODE=true`.")

    missing = [
        name for name, value in (
            ("SUPABASE_URL", settings.SUPABASE_URL),
            ("SUPABASE_ANON_KEY", settings.SUPABASE_ANON_KEY),
        ) if not value
    ]
    if missing:
        st.caption("Manquant : " + ", ".join(missing))
