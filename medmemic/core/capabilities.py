# FILE: medmemic/core/capabilities.py

from dataclasses import dataclass

from medmemic.core.models import Role
from medmemic.core.views import ViewKind


@dataclass(frozen=True)
class NavEntry:
    label: str
    icon: str
    target: str


@dataclass(frozen=True)
class Capabilities:
    """What a resolved role may see and change, consulted once per render by the layout."""
    role: Role
    label: str
    dashboard_label: str
    badge_color: str
    nav: tuple
    forces_light_theme: bool = False
    can_choose_theme: bool = True
    shows_clinical_stats: bool = False


_PROFILE = NavEntry("Mon Profil", "👤", ViewKind.PROFILE.value)

CAPABILITIES = {
    Role.STUDENT: Capabilities(
        role=Role.STUDENT,
        label="Étudiant",
        dashboard_label="Espace Clinique",
        badge_color="#0ea5e9",
        nav=(NavEntry("Espace Clinique", "🩺", ViewKind.DASHBOARD.value), _PROFILE),
        shows_clinical_stats=True,
    ),
    Role.PROFESSOR: Capabilities(
        role=Role.PROFESSOR,
        label="Professeur",
        dashboard_label="Tableau de bord",
        badge_color="#f59e0b",
        nav=(NavEntry("Tableau de bord", "📊", ViewKind.DASHBOARD.value), _PROFILE),
    ),
    Role.ADMIN: Capabilities(
        role=Role.ADMIN,
        label="Administrateur",
        dashboard_label="Tableau de bord",
        badge_color="#a855f7",
        nav=(
            NavEntry("Tableau de bord", "📊", ViewKind.DASHBOARD.value),
            NavEntry("Utilisateurs", "👥", "admin-users"),
            NavEntry("Scénarios", "📄", "admin-scenarios"),
            NavEntry("Approbations", "✅", "admin-approvals"),
            _PROFILE,
        ),
        forces_light_theme=True,
        can_choose_theme=False,
    ),
}


def capabilities_for(role) -> Capabilities:
    return CAPABILITIES[Role.parse(role, Role.STUDENT)]
