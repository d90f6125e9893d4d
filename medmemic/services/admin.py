# FILE: medmemic/services/admin.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from medmemic.core.models import (
    CourseStatus, Role, Scenario, ScenarioCourse, ScenarioForm, UserProfile,
)
from medmemic.core.views import ViewKind
from medmemic.errors import MutationError
from medmemic.gateway.base import GatewayError

logger = logging.getLogger(__name__)

SCENARIO_IN_USE_MESSAGE = "Impossible de supprimer ce scénario (peut-être lié à des sessions)."


class AdminTab(str, Enum):
    OVERVIEW = "overview"
    USERS = "users"
    SCENARIOS = "scenarios"
    APPROVALS = "approvals"

    @classmethod
    def for_view_kind(cls, kind: ViewKind):
        return {
            ViewKind.USERS: cls.USERS,
            ViewKind.SCENARIOS: cls.SCENARIOS,
            ViewKind.APPROVALS: cls.APPROVALS,
        }.get(kind, cls.OVERVIEW)


class UserFilter(str, Enum):
    ALL = "all"
    STUDENT = "student"
    PROFESSOR = "professor"


@dataclass
class AdminStats:
    total_users: int = 0
    total_scenarios: int = 0
    pending_approvals: int = 0


def filter_users(users, role_filter=UserFilter.ALL, search=""):
    """Users matching the role filter whose name or e-mail contains ``search`` (case-insensitive)."""
    role_filter = UserFilter(role_filter)
    needle = (search or "").strip().lower()
    result = []
    for user in users:
        if role_filter is not UserFilter.ALL and user.role != role_filter.value:
            continue
        if needle and needle not in (user.full_name or "").lower() and needle not in (user.email or "").lower():
            continue
        result.append(user)
    return result


class AdminDashboard:
    """
    Administration screen with four independently fetched tabs.

    Each tab's list is a read cache: it is refetched whenever the tab is
    activated, and after a successful write the affected entry is replaced
    with the row the server returned (or the whole tab is refetched when
    the server returned nothing).
    """

    def __init__(self, gateway, default_tab=AdminTab.OVERVIEW):
        self.gateway = gateway
        self.current_tab = AdminTab(default_tab)
        self.loading = False
        self.stats = AdminStats()
        self.users: List[UserProfile] = []
        self.scenarios: List[Scenario] = []
        self.pending_courses: List[ScenarioCourse] = []

    def activate(self, tab):
        self.current_tab = AdminTab(tab)
        return self.fetch()

    def fetch(self):
        fetchers = {
            AdminTab.OVERVIEW: self._fetch_overview,
            AdminTab.USERS: self._fetch_users,
            AdminTab.SCENARIOS: self._fetch_scenarios,
            AdminTab.APPROVALS: self._fetch_approvals,
        }
        self.loading = True
        try:
            fetchers[self.current_tab]()
        except GatewayError as e:
            logger.exception("Admin fetch error on %s: %s", self.current_tab.value, e)
        finally:
            self.loading = False
        return self

    def _count(self, table, **filters):
        """Exact row count; a failed count is logged and shown as 0 without affecting the others."""
        query = self.gateway.table(table).select("*", count="exact", head=True)
        for column, value in filters.items():
            query = query.eq(column, value)
        try:
            return query.execute().count or 0
        except GatewayError as e:
            logger.warning("Error counting %s: %s", table, e)
            return 0

    def _fetch_overview(self):
        self.stats = AdminStats(
            total_users=self._count("user_profiles"),
            total_scenarios=self._count("scenarios"),
            pending_approvals=self._count("scenario_courses", status=CourseStatus.PENDING.value),
        )

    def _fetch_users(self):
        response = (
            self.gateway.table("user_profiles")
            .select("*")
            .order("created_at", ascending=False)
            .execute()
        )
        self.users = [UserProfile.from_row(row) for row in response.data or []]

    def _fetch_scenarios(self):
        response = (
            self.gateway.table("scenarios")
            .select("*")
            .order("created_at", ascending=False)
            .execute()
        )
        self.scenarios = [Scenario.from_row(row) for row in response.data or []]

    def _fetch_approvals(self):
        response = (
            self.gateway.table("scenario_courses")
            .select("*, scenarios(title)")
            .eq("status", CourseStatus.PENDING.value)
            .order("created_at", ascending=False)
            .execute()
        )
        self.pending_courses = [ScenarioCourse.from_row(row) for row in response.data or []]

    # --- users ---

    def filtered_users(self, role_filter=UserFilter.ALL, search=""):
        return filter_users(self.users, role_filter, search)

    def update_user(self, user_id, full_name, role) -> Optional[UserProfile]:
        role = Role.parse(role)
        if role is None:
            raise MutationError("Rôle invalide.")
        try:
            response = (
                self.gateway.table("user_profiles")
                .update({"full_name": full_name, "role": role.value})
                .eq("user_id", user_id)
                .select()
                .execute()
            )
        except GatewayError as e:
            logger.error("Error updating profile %s: %s", user_id, e)
            raise MutationError("Erreur maj profil") from e

        rows = response.data or []
        if not rows:
            self._refetch(self._fetch_users)
            return None
        updated = UserProfile.from_row(rows[0])
        self.users = [updated if u.user_id == user_id else u for u in self.users]
        return updated

    def delete_user(self, user_id):
        try:
            self.gateway.table("user_profiles").delete().eq("user_id", user_id).execute()
        except GatewayError as e:
            logger.error("Error deleting profile %s: %s", user_id, e)
            raise MutationError("Erreur lors de la suppression.") from e
        self.users = [u for u in self.users if u.user_id != user_id]

    # --- scenarios ---

    def save_scenario(self, form: ScenarioForm, scenario_id=None) -> Optional[Scenario]:
        """Create (``scenario_id`` None) or update a scenario, keeping the list in step with the server."""
        if not form.title.strip():
            raise MutationError("Le titre est obligatoire.")
        payload = form.model_dump()
        try:
            query = self.gateway.table("scenarios")
            if scenario_id is None:
                response = query.insert([payload]).select().execute()
            else:
                response = query.update(payload).eq("id", scenario_id).select().execute()
        except GatewayError as e:
            logger.error("Error saving scenario %s: %s", scenario_id, e)
            raise MutationError("Erreur lors de l'enregistrement du scénario.") from e

        rows = response.data or []
        if not rows:
            self._refetch(self._fetch_scenarios)
            return None
        saved = Scenario.from_row(rows[0])
        if scenario_id is None:
            self.scenarios = [saved] + self.scenarios
        else:
            self.scenarios = [saved if s.id == scenario_id else s for s in self.scenarios]
        return saved

    def delete_scenario(self, scenario_id):
        try:
            self.gateway.table("scenarios").delete().eq("id", scenario_id).execute()
        except GatewayError as e:
            logger.error("Error deleting scenario %s: %s", scenario_id, e)
            if e.is_foreign_key_violation or e.status_code == 409:
                raise MutationError(SCENARIO_IN_USE_MESSAGE) from e
            raise MutationError(f"Erreur lors de la suppression du scénario : {e.message}") from e
        self.scenarios = [s for s in self.scenarios if s.id != scenario_id]

    # --- approvals ---

    def approve_course(self, course_id):
        try:
            (
                self.gateway.table("scenario_courses")
                .update({"status": CourseStatus.APPROVED.value})
                .eq("id", course_id)
                .execute()
            )
        except GatewayError as e:
            logger.error("Error approving course %s: %s", course_id, e)
            raise MutationError("Erreur lors de l'action.") from e
        self._drop_pending(course_id)

    def reject_course(self, course_id):
        """Rejection deletes the course; there is no rejected status."""
        try:
            self.gateway.table("scenario_courses").delete().eq("id", course_id).execute()
        except GatewayError as e:
            logger.error("Error rejecting course %s: %s", course_id, e)
            raise MutationError("Erreur lors de l'action.") from e
        self._drop_pending(course_id)

    def _drop_pending(self, course_id):
        self.pending_courses = [c for c in self.pending_courses if c.id != course_id]

    def _refetch(self, fetcher):
        try:
            fetcher()
        except GatewayError as e:
            logger.warning("Refetch after write failed: %s", e)
