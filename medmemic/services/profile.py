# FILE: medmemic/services/profile.py

import logging
import os
import uuid
from typing import Optional

from medmemic.config import settings
from medmemic.core.models import ProfileForm, Role, UserProgress, utc_now_iso
from medmemic.errors import MutationError, UploadError
from medmemic.gateway.base import GatewayError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


def avatar_path(user_id, filename) -> str:
    """Storage path unique per upload: ``<user id>-<random>.<original extension>``."""
    extension = filename.rsplit(".", 1)[-1]
    return f"{user_id}-{uuid.uuid4().hex}.{extension}"


class ProfileScreen:
    """
    Profile of the signed-in user, shared by every role.

    ``user_data`` merges the auth user, the profile row and ``auth_id``; the
    latter is kept apart because profile columns must never overwrite the
    key every write is made with.
    """

    def __init__(self, gateway, role, bucket=None):
        self.gateway = gateway
        self.role = Role.parse(role, Role.STUDENT)
        self.bucket = bucket or settings.AVATAR_BUCKET
        self.user_data = {}
        self.stats: Optional[UserProgress] = None
        self.form = ProfileForm()
        self.editing = False
        self.loaded = False

    @property
    def auth_id(self):
        return self.user_data.get("auth_id")

    def _single(self, table, user_id):
        try:
            response = self.gateway.table(table).select("*").eq("user_id", user_id).single().execute()
        except GatewayError as e:
            if not e.is_not_found:
                logger.warning("Error fetching %s for %s: %s", table, user_id, e)
            return None
        return response.data

    def load(self):
        try:
            user = self.gateway.auth.get_user()
            if user:
                profile = self._single("user_profiles", user.id) or {}
                progress = self._single("user_progress", user.id)
                self.user_data = {**user.model_dump(), **profile, "auth_id": user.id}
                self.form = ProfileForm(
                    full_name=profile.get("full_name") or user.user_metadata.get("full_name") or "",
                    medical_school=profile.get("medical_school") or "",
                    year_of_study=profile.get("year_of_study") or "",
                )
                if progress:
                    self.stats = UserProgress.from_row(progress)
        except GatewayError as e:
            logger.exception("Error fetching profile: %s", e)
        finally:
            self.loaded = True
        return self

    def start_edit(self):
        self.editing = True

    def cancel_edit(self):
        self.editing = False

    def save(self, form: ProfileForm):
        """Upsert the edited fields, mirror the name into auth metadata, then update local state."""
        if not self.auth_id:
            raise MutationError("Profil introuvable.")
        try:
            self.gateway.table("user_profiles").upsert({
                "user_id": self.auth_id,
                "full_name": form.full_name,
                "medical_school": form.medical_school,
                "year_of_study": form.year_of_study,
                "updated_at": utc_now_iso(),
            }, on_conflict="user_id").execute()
        except GatewayError as e:
            logger.error("Error updating profile %s: %s", self.auth_id, e)
            raise MutationError("Erreur lors de la mise à jour") from e

        try:
            self.gateway.auth.update_user({"full_name": form.full_name})
        except GatewayError as e:
            logger.warning("Could not mirror full name into auth metadata: %s", e)

        self.form = form
        self.user_data = {**self.user_data, **form.model_dump()}
        self.editing = False

    def upload_avatar(self, filename, data, content_type=None) -> str:
        """
        Store a new profile photo and point the profile at its public URL.

        Nothing local changes unless upload, URL lookup and profile update all
        succeed.

        Raises:
            UploadError: If any of the three steps fails
        """
        if not self.auth_id:
            raise UploadError("Profil introuvable.")
        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        is_image = (content_type or "").startswith("image/") or extension in IMAGE_EXTENSIONS
        if not is_image:
            raise UploadError("Veuillez choisir une image.")

        path = avatar_path(self.auth_id, os.path.basename(filename))
        bucket = self.gateway.storage.bucket(self.bucket)
        try:
            bucket.upload(path, data, content_type)
        except GatewayError as e:
            logger.error("Avatar upload failed: %s", e)
            raise UploadError(
                f"Impossible d'uploader l'image (Vérifiez que le bucket '{self.bucket}' existe)."
            ) from e

        try:
            public_url = bucket.get_public_url(path)
            (
                self.gateway.table("user_profiles")
                .update({"avatar_url": public_url})
                .eq("user_id", self.auth_id)
                .execute()
            )
        except GatewayError as e:
            logger.error("Avatar update failed: %s", e)
            raise UploadError(e.message or "Erreur lors du changement de photo.") from e

        self.user_data = {**self.user_data, "avatar_url": public_url}
        return public_url
