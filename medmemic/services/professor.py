# FILE: medmemic/services/professor.py

import logging
from collections import Counter
from dataclasses import dataclass
from typing import List

from medmemic.core.models import CourseForm, CourseStatus, Role, Scenario, ScenarioCourse
from medmemic.errors import MutationError
from medmemic.gateway.base import GatewayError
from medmemic.services.common import round_half_up

logger = logging.getLogger(__name__)


def average_accuracy(sessions) -> int:
    """Mean ``accuracy_score`` of the given session rows, rounded; 0 when there are none."""
    scores = [s.get("accuracy_score") or 0 for s in sessions or []]
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


@dataclass
class ProfessorStats:
    active_students: int = 0
    published_scenarios: int = 0
    global_success_rate: int = 0


class ProfessorDashboard:
    """Cohort statistics, scenario list and the add-course workflow."""

    def __init__(self, gateway):
        self.gateway = gateway
        self.stats = ProfessorStats()
        self.scenarios: List[Scenario] = []
        self.loaded = False

    def load(self):
        """Each query degrades on its own; a failed one leaves its figure at zero."""
        try:
            self.stats = ProfessorStats(
                active_students=self._count_students(),
                published_scenarios=self._load_scenarios(),
                global_success_rate=self._success_rate(),
            )
        finally:
            self.loaded = True
        return self

    def _count_students(self):
        try:
            response = (
                self.gateway.table("user_profiles")
                .select("*", count="exact", head=True)
                .eq("role", Role.STUDENT.value)
                .execute()
            )
        except GatewayError as e:
            logger.warning("Error counting students: %s", e)
            return 0
        return response.count or 0

    def _load_scenarios(self):
        try:
            response = (
                self.gateway.table("scenarios")
                .select("*", count="exact")
                .order("created_at", ascending=False)
                .execute()
            )
        except GatewayError as e:
            logger.warning("Error fetching scenarios: %s", e)
            return 0
        self.scenarios = [Scenario.from_row(row) for row in response.data or []]
        return response.count if response.count is not None else len(self.scenarios)

    def _success_rate(self):
        try:
            response = (
                self.gateway.table("scenario_sessions")
                .select("accuracy_score")
                .not_null("accuracy_score")
                .execute()
            )
        except GatewayError as e:
            logger.warning("Error fetching session scores: %s", e)
            return 0
        return average_accuracy(response.data)

    def difficulty_breakdown(self):
        """Number of scenarios per difficulty label, in first-seen order."""
        return Counter(s.difficulty or "—" for s in self.scenarios)

    def add_course(self, scenario_id, form: CourseForm) -> ScenarioCourse:
        """
        Attach a teaching resource to a scenario.

        New courses always start as pending until an administrator approves
        them; this dashboard never shows or changes the status.
        """
        if scenario_id is None:
            raise MutationError("Aucun scénario sélectionné.")
        if not form.title.strip():
            raise MutationError("Le titre du cours est obligatoire.")
        try:
            response = (
                self.gateway.table("scenario_courses")
                .insert({
                    "scenario_id": scenario_id,
                    "title": form.title.strip(),
                    "description": form.description,
                    "content_type": form.content_type.value,
                    "status": CourseStatus.PENDING.value,
                })
                .select()
                .execute()
            )
        except GatewayError as e:
            logger.error("Error adding course to scenario %s: %s", scenario_id, e)
            raise MutationError("Erreur lors de l'ajout du cours.") from e
        rows = response.data or []
        return ScenarioCourse.from_row(rows[0]) if rows else None
