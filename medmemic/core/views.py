# FILE: medmemic/core/views.py

"""
Finite set of screens the application can show.

A view is a (kind, role) pair. Only the twelve pairs listed in ``ALL_VIEWS``
exist; every constructor in this module returns one of them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from medmemic.core.models import Role


class ViewKind(str, Enum):
    LANDING = "landing"
    LOGIN = "login"
    SIGNUP = "signup"
    DASHBOARD = "dashboard"
    PROFILE = "profile"
    USERS = "users"
    SCENARIOS = "scenarios"
    APPROVALS = "approvals"


class ViewFamily(str, Enum):
    MARKETING = "marketing"
    AUTH = "auth"
    STUDENT = "student"
    PROFESSOR = "professor"
    ADMIN = "admin"


@dataclass(frozen=True)
class View:
    kind: ViewKind
    role: Optional[Role] = None

    @property
    def name(self) -> str:
        if self.role is None:
            return self.kind.value
        return f"{self.role.value}-{self.kind.value}"

    @property
    def family(self) -> ViewFamily:
        if self.role is not None:
            return ViewFamily(self.role.value)
        if self.kind is ViewKind.LANDING:
            return ViewFamily.MARKETING
        return ViewFamily.AUTH

    @property
    def is_authenticated(self) -> bool:
        return self.role is not None

    def __str__(self):
        return self.name


LANDING = View(ViewKind.LANDING)
LOGIN = View(ViewKind.LOGIN)
SIGNUP = View(ViewKind.SIGNUP)

ALL_VIEWS = (
    LANDING,
    LOGIN,
    SIGNUP,
    View(ViewKind.DASHBOARD, Role.STUDENT),
    View(ViewKind.PROFILE, Role.STUDENT),
    View(ViewKind.DASHBOARD, Role.PROFESSOR),
    View(ViewKind.PROFILE, Role.PROFESSOR),
    View(ViewKind.DASHBOARD, Role.ADMIN),
    View(ViewKind.USERS, Role.ADMIN),
    View(ViewKind.SCENARIOS, Role.ADMIN),
    View(ViewKind.APPROVALS, Role.ADMIN),
    View(ViewKind.PROFILE, Role.ADMIN),
)

_BY_NAME = {view.name: view for view in ALL_VIEWS}


def view_for(role, kind) -> View:
    """Total constructor: any (role, kind) pair outside ``ALL_VIEWS`` maps to the landing view."""
    role = Role.parse(role)
    try:
        kind = ViewKind(kind)
    except ValueError:
        return LANDING
    candidate = View(kind, role) if kind not in (ViewKind.LANDING, ViewKind.LOGIN, ViewKind.SIGNUP) else View(kind)
    return candidate if candidate in ALL_VIEWS else LANDING


def parse_view(name) -> View:
    """Resolve a fully-qualified view name such as ``admin-users``; unknown names give landing."""
    if isinstance(name, View):
        return name if name in ALL_VIEWS else LANDING
    return _BY_NAME.get(str(name or "").strip().lower(), LANDING)


def dashboard_for(role) -> View:
    """Dashboard reached after authentication; unknown roles land on the student dashboard."""
    return view_for(Role.parse(role, Role.STUDENT), ViewKind.DASHBOARD)
