import random

import pytest

from medmemic.core.context import AppContext
from medmemic.core.models import Role
from medmemic.core.router import Router
from medmemic.core.views import (
    ALL_VIEWS, LANDING, LOGIN, SIGNUP, View, ViewKind, parse_view, view_for,
)
from medmemic.services.admin import AdminTab

VIEW_NAMES = [
    "landing", "login", "signup",
    "student-dashboard", "student-profile",
    "professor-dashboard", "professor-profile",
    "admin-dashboard", "admin-users", "admin-scenarios", "admin-approvals", "admin-profile",
]


def test_all_views_have_the_historical_names():
    assert sorted(v.name for v in ALL_VIEWS) == sorted(VIEW_NAMES)


@pytest.mark.parametrize("name", VIEW_NAMES)
def test_parse_view_round_trips_known_names(name):
    assert parse_view(name).name == name


@pytest.mark.parametrize("name", ["", None, "student-users", "teacher-dashboard", "admin", "dashboard", "nope"])
def test_parse_view_falls_back_to_landing(name):
    assert parse_view(name) is LANDING


def test_view_for_is_total():
    for role in list(Role) + [None, "parent"]:
        for kind in list(ViewKind) + ["settings"]:
            assert view_for(role, kind) in ALL_VIEWS


def test_view_for_rejects_sections_outside_admin():
    assert view_for(Role.STUDENT, ViewKind.USERS) == LANDING
    assert view_for(Role.ADMIN, ViewKind.USERS).name == "admin-users"


def test_initial_view_is_landing():
    assert Router().current == LANDING


def test_landing_to_login_and_signup():
    router = Router()
    assert router.go_login() == LOGIN
    router.go_landing()
    assert router.go_signup() == SIGNUP


@pytest.mark.parametrize("role, expected", [
    ("student", "student-dashboard"),
    ("professor", "professor-dashboard"),
    ("admin", "admin-dashboard"),
    ("unknown", "student-dashboard"),
])
def test_auth_success_opens_role_dashboard(role, expected):
    router = Router(LOGIN)
    assert router.auth_succeeded(role).name == expected


def test_navigate_composes_profile_and_dashboard_with_role():
    router = Router(View(ViewKind.DASHBOARD, Role.PROFESSOR))
    assert router.navigate("profile", "professor").name == "professor-profile"
    assert router.navigate("dashboard", "professor").name == "professor-dashboard"


def test_navigate_accepts_fully_qualified_admin_sections():
    router = Router(View(ViewKind.DASHBOARD, Role.ADMIN))
    assert router.navigate("admin-approvals", "admin").name == "admin-approvals"
    assert AdminTab.for_view_kind(router.current.kind) is AdminTab.APPROVALS


def test_navigate_to_unknown_target_lands_on_landing():
    router = Router(View(ViewKind.DASHBOARD, Role.STUDENT))
    assert router.navigate("student-secret", "student") == LANDING


def test_logout_returns_to_landing():
    router = Router(View(ViewKind.USERS, Role.ADMIN))
    assert router.logout() == LANDING


def test_random_navigation_never_leaves_the_view_set():
    rng = random.Random(1234)
    router = Router()
    targets = VIEW_NAMES + ["profile", "dashboard", "bogus", "", "admin-nothing"]
    roles = ["student", "professor", "admin", "ghost", None]
    actions = [
        lambda: router.go_login(),
        lambda: router.go_signup(),
        lambda: router.logout(),
        lambda: router.auth_succeeded(rng.choice(roles)),
        lambda: router.navigate(rng.choice(targets), rng.choice(roles)),
    ]
    for _ in range(500):
        rng.choice(actions)()
        assert router.current in ALL_VIEWS


def test_transitions_drop_mounted_screens(gateway):
    context = AppContext(gateway)
    first = context.mount("screen", object)
    assert context.mount("screen", object) is first
    context.router.go_login()
    assert context.mount("screen", object) is not first
