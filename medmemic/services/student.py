# FILE: medmemic/services/student.py

import logging
from dataclasses import dataclass
from typing import List, Optional

from medmemic.core.models import Scenario, UserProgress
from medmemic.gateway.base import GatewayError
from medmemic.services.common import round_half_up

logger = logging.getLogger(__name__)

XP_PER_SESSION = 150
XP_PER_ACCURACY_POINT = 5

DEFAULT_LEVEL = "Externe Junior"
# (xp strictly above, level), ascending
LEVEL_THRESHOLDS = [
    (500, "Externe Confirmé"),
    (1500, "Interne"),
    (3000, "Chef de Clinique"),
]


def compute_xp(completed_sessions, avg_accuracy) -> int:
    return int(completed_sessions or 0) * XP_PER_SESSION + round_half_up(avg_accuracy) * XP_PER_ACCURACY_POINT


def level_for_xp(xp) -> str:
    level = DEFAULT_LEVEL
    for threshold, name in LEVEL_THRESHOLDS:
        if xp > threshold:
            level = name
    return level


@dataclass
class StudentStats:
    xp: int = 0
    level: str = DEFAULT_LEVEL
    cases_solved: int = 0
    accuracy: int = 0

    @classmethod
    def from_progress(cls, progress: UserProgress):
        xp = compute_xp(progress.completed_sessions, progress.avg_accuracy)
        return cls(
            xp=xp,
            level=level_for_xp(xp),
            cases_solved=progress.completed_sessions or 0,
            accuracy=round_half_up(progress.avg_accuracy),
        )


class StudentDashboard:
    """Progress stats and case library of the signed-in student."""

    def __init__(self, gateway):
        self.gateway = gateway
        self.stats = StudentStats()
        self.scenarios: List[Scenario] = []
        self.loaded = False

    @property
    def recommended(self) -> Optional[Scenario]:
        return self.scenarios[0] if self.scenarios else None

    def load(self):
        try:
            self._load_progress()
            self._load_scenarios()
        finally:
            self.loaded = True
        return self

    def _load_progress(self):
        try:
            user = self.gateway.auth.get_user()
        except GatewayError as e:
            logger.warning("Error fetching current user: %s", e)
            return
        if not user:
            return
        user_id = user.id
        try:
            response = (
                self.gateway.table("user_progress")
                .select("completed_sessions, avg_accuracy")
                .eq("user_id", user_id)
                .single()
                .execute()
            )
        except GatewayError as e:
            if not e.is_not_found:
                logger.warning("Error fetching progress for %s: %s", user_id, e)
            return
        if response.data:
            self.stats = StudentStats.from_progress(UserProgress.from_row({"user_id": user_id, **response.data}))

    def _load_scenarios(self):
        try:
            response = (
                self.gateway.table("scenarios")
                .select("*")
                .order("created_at", ascending=False)
                .execute()
            )
        except GatewayError as e:
            logger.warning("Error fetching scenarios: %s", e)
            return
        self.scenarios = [Scenario.from_row(row) for row in response.data or []]
