import pytest

from medmemic.services.common import difficulty_severity, round_half_up
from medmemic.services.student import StudentDashboard, compute_xp, level_for_xp


@pytest.mark.parametrize("xp, level", [
    (0, "Externe Junior"),
    (500, "Externe Junior"),
    (600, "Externe Confirmé"),
    (1600, "Interne"),
    (3000, "Interne"),
    (3100, "Chef de Clinique"),
])
def test_level_for_xp(xp, level):
    assert level_for_xp(xp) == level


def test_compute_xp():
    assert compute_xp(3, 80) == 850
    assert compute_xp(None, None) == 0
    assert compute_xp(0, 72.5) == 365


@pytest.mark.parametrize("value, expected", [(2.5, 3), (2.4, 2), (79.5, 80), (None, 0), (0, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("difficulty, severity", [
    (None, "none"),
    ("", "none"),
    ("Advanced", "high"),
    ("Expert", "high"),
    ("Intermédiaire", "medium"),
    ("Moyen", "medium"),
    ("Débutant", "low"),
    ("Avancé", "low"),
])
def test_difficulty_severity(difficulty, severity):
    assert difficulty_severity(difficulty) == severity


def test_dashboard_stats(gateway, signed_in):
    dashboard = StudentDashboard(gateway).load()
    assert dashboard.loaded
    assert dashboard.stats.xp == 850
    assert dashboard.stats.level == "Externe Confirmé"
    assert dashboard.stats.cases_solved == 3
    assert dashboard.stats.accuracy == 80


def test_scenarios_newest_first_and_recommended(gateway, signed_in):
    gateway.seed("scenarios", {"title": "Old"}, {"title": "Middle"}, {"title": "New"})
    dashboard = StudentDashboard(gateway).load()
    assert [s.title for s in dashboard.scenarios] == ["New", "Middle", "Old"]
    assert dashboard.recommended.title == "New"


def test_no_progress_row_keeps_defaults(gateway, add_user):
    add_user("fresh@example.com")
    gateway.auth.sign_in_with_password("fresh@example.com", "secret123")
    dashboard = StudentDashboard(gateway).load()
    assert dashboard.stats.xp == 0
    assert dashboard.stats.level == "Externe Junior"
    assert dashboard.recommended is None


def test_progress_failure_still_lists_scenarios(gateway, signed_in):
    gateway.seed("scenarios", {"title": "Bronchiolite"})
    gateway.fail("user_progress", "select")
    dashboard = StudentDashboard(gateway).load()
    assert dashboard.stats.xp == 0
    assert [s.title for s in dashboard.scenarios] == ["Bronchiolite"]


def test_scenario_failure_degrades_to_empty(gateway, signed_in):
    gateway.fail("scenarios", "select")
    dashboard = StudentDashboard(gateway).load()
    assert dashboard.loaded
    assert dashboard.scenarios == []
    assert dashboard.stats.xp == 850


def test_current_user_failure_still_lists_scenarios(gateway, signed_in):
    gateway.seed("scenarios", {"title": "Bronchiolite"})
    gateway.fail("auth", "get_user")
    dashboard = StudentDashboard(gateway).load()
    assert dashboard.loaded
    assert dashboard.stats.xp == 0
    assert [s.title for s in dashboard.scenarios] == ["Bronchiolite"]
