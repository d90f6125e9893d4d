# FILE: medmemic/auth/auth_handlers.py

import logging

from medmemic.config import settings
from medmemic.core.models import (
    DEFAULT_PROGRESS_SPECIALTY, Role, Session, utc_now_iso,
)
from medmemic.errors import AuthenticationError
from medmemic.gateway.base import GatewayError

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Erreur config : Clé API manquante."
LOGIN_FALLBACK_MESSAGE = "Erreur de connexion."
SIGNUP_FALLBACK_MESSAGE = "Une erreur est survenue lors de l'inscription."
INVALID_ACCESS_CODE_MESSAGE = (
    "Code établissement invalide. Impossible de créer un compte Professeur sans autorisation."
)
SIGNUP_ROLES = (Role.STUDENT, Role.PROFESSOR)


def login_error_message(error):
    """Map a provider error to the message shown under the login form."""
    text = str(error or "")
    if "anon key" in text:
        return MISSING_KEY_MESSAGE
    return text or LOGIN_FALLBACK_MESSAGE


class AuthHandlers:
    """Login and signup workflows against the gateway."""

    def __init__(self, gateway, access_code=None):
        self.gateway = gateway
        self.access_code = access_code if access_code is not None else settings.PROFESSOR_ACCESS_CODE

    def resolve_role(self, user) -> Role:
        """
        Role for an authenticated user.

        The role embedded in the auth metadata at signup is the default
        (``student`` when absent); a non-empty role on the user's profile row
        overrides it.

        Args:
            user: AuthUser returned by the gateway

        Returns:
            Role: the authoritative role
        """
        role = Role.parse((user.user_metadata or {}).get("role"), Role.STUDENT)
        try:
            response = (
                self.gateway.table("user_profiles")
                .select("role")
                .eq("user_id", user.id)
                .single()
                .execute()
            )
        except GatewayError as e:
            if not e.is_not_found:
                logger.warning("Profile role lookup failed for %s: %s", user.id, e)
            return role

        profile_role = (response.data or {}).get("role")
        if profile_role:
            parsed = Role.parse(profile_role)
            if parsed is None:
                logger.warning("Ignoring unknown profile role %r for %s", profile_role, user.id)
            else:
                role = parsed
        return role

    def login_user(self, email: str, password: str) -> Session:
        """
        Authenticate with e-mail and password.

        Raises:
            AuthenticationError: If the provider rejects the credentials
        """
        try:
            user = self.gateway.auth.sign_in_with_password(email, password)
        except GatewayError as e:
            raise AuthenticationError(login_error_message(e.message)) from e
        if user is None:
            raise AuthenticationError("Erreur utilisateur non trouvé.")

        role = self.resolve_role(user)
        logger.info("User %s logged in as %s", user.id, role.value)
        return Session(user_id=user.id, email=user.email or email, role=role)

    def check_access_code(self, role, access_code):
        if Role.parse(role) is Role.PROFESSOR and access_code != self.access_code:
            raise AuthenticationError(INVALID_ACCESS_CODE_MESSAGE)

    def register_user(self, full_name: str, email: str, password: str, role, access_code: str = "") -> Session:
        """
        Create an account, then its profile and progress rows.

        The professor access code is compared locally before any network call.
        Profile and progress upserts are best effort: the auth account already
        exists when they run, so their failures are logged, not raised.

        Raises:
            AuthenticationError: If the code is wrong or the provider refuses the signup
        """
        role = Role.parse(role)
        if role not in SIGNUP_ROLES:
            raise AuthenticationError("Rôle invalide.")
        self.check_access_code(role, access_code)

        try:
            user = self.gateway.auth.sign_up(
                email, password, {"full_name": full_name, "role": role.value}
            )
        except GatewayError as e:
            raise AuthenticationError(e.message or SIGNUP_FALLBACK_MESSAGE) from e
        if user is None:
            raise AuthenticationError("Erreur lors de la création du compte.")

        try:
            self.gateway.table("user_profiles").upsert({
                "user_id": user.id,
                "full_name": full_name,
                "email": email,
                "role": role.value,
                "updated_at": utc_now_iso(),
            }, on_conflict="user_id").execute()
        except GatewayError as e:
            logger.warning("Profile creation failed for %s: %s", user.id, e)

        try:
            self.gateway.table("user_progress").upsert({
                "user_id": user.id,
                "specialty": DEFAULT_PROGRESS_SPECIALTY,
                "created_at": utc_now_iso(),
            }, on_conflict="user_id").execute()
        except GatewayError as e:
            logger.warning("Progress init failed for %s: %s", user.id, e)

        logger.info("Registered %s as %s", user.id, role.value)
        return Session(user_id=user.id, email=user.email or email, role=role)

    def logout_user(self):
        """Sign out remotely; the local session is cleared even if the call fails."""
        try:
            self.gateway.auth.sign_out()
        except GatewayError as e:
            logger.warning("Sign-out failed: %s", e)
