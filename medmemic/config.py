# FILE: medmemic/config.py

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Supabase project
    SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

    # Local in-memory backend with seeded accounts (no Supabase needed)
    DEMO_MODE = _flag("MEDMEMIC_DEMO_MODE")

    # HTTP
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

    # Storage
    AVATAR_BUCKET = os.getenv("AVATAR_BUCKET", "avatars")

    # Signup gate for professor accounts (checked client-side only)
    PROFESSOR_ACCESS_CODE = os.getenv("PROFESSOR_ACCESS_CODE", "MED2024")

    # Feedback delays before switching screens (seconds)
    LOGIN_REDIRECT_DELAY = 0.8
    SIGNUP_REDIRECT_DELAY = 0.5
    DEMO_LOGIN_DELAY = 0.6

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Page
    APP_TITLE = "MedMemic"
    APP_ICON = "🩺"


settings = Settings()


def is_gateway_configured(config=settings):
    """True when the app can reach a backend (Supabase credentials or demo mode)."""
    return config.DEMO_MODE or bool(config.SUPABASE_URL and config.SUPABASE_ANON_KEY)
