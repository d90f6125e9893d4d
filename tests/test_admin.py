import pytest

from medmemic.core.models import ScenarioForm, UserProfile
from medmemic.core.views import ViewKind
from medmemic.errors import MutationError
from medmemic.services.admin import (
    SCENARIO_IN_USE_MESSAGE, AdminDashboard, AdminTab, UserFilter, filter_users,
)


@pytest.fixture
def seeded(gateway):
    gateway.seed(
        "user_profiles",
        {"user_id": "u1", "full_name": "Amina Diallo", "email": "amina@example.com", "role": "student"},
        {"user_id": "u2", "full_name": "Dr Martin", "email": "martin@fac.fr", "role": "professor"},
        {"user_id": "u3", "full_name": "Root", "email": "root@medmemic.io", "role": "admin"},
    )
    scenarios = gateway.seed(
        "scenarios",
        {"title": "Bronchiolite", "difficulty": "Débutant"},
        {"title": "Méningite", "difficulty": "Avancé"},
    )
    gateway.seed(
        "scenario_courses",
        {"scenario_id": scenarios[0]["id"], "title": "Fiche", "status": "pending"},
        {"scenario_id": scenarios[1]["id"], "title": "Vidéo", "status": "pending", "content_type": "video"},
        {"scenario_id": scenarios[1]["id"], "title": "Ancien", "status": "approved"},
    )
    return scenarios


def test_tab_for_view_kind():
    assert AdminTab.for_view_kind(ViewKind.USERS) is AdminTab.USERS
    assert AdminTab.for_view_kind(ViewKind.APPROVALS) is AdminTab.APPROVALS
    assert AdminTab.for_view_kind(ViewKind.DASHBOARD) is AdminTab.OVERVIEW


def test_overview_counts(gateway, seeded):
    stats = AdminDashboard(gateway).fetch().stats
    assert stats.total_users == 3
    assert stats.total_scenarios == 2
    assert stats.pending_approvals == 2


def test_failed_count_keeps_the_other_counts(gateway, seeded):
    gateway.fail("scenario_courses", "select")
    stats = AdminDashboard(gateway).fetch().stats
    assert stats.total_users == 3
    assert stats.total_scenarios == 2
    assert stats.pending_approvals == 0


def test_fetch_only_loads_current_tab(gateway, seeded):
    AdminDashboard(gateway, AdminTab.USERS).fetch()
    assert gateway.calls == [("table", "user_profiles", "select")]


def test_activate_refetches(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    gateway.seed("scenarios", {"title": "Gastro-entérite"})
    dashboard.activate(AdminTab.SCENARIOS)
    assert [s.title for s in dashboard.scenarios] == ["Gastro-entérite", "Méningite", "Bronchiolite"]


def test_fetch_failure_is_logged_not_raised(gateway, seeded):
    gateway.fail("user_profiles", "select")
    dashboard = AdminDashboard(gateway, AdminTab.USERS).fetch()
    assert dashboard.users == []
    assert not dashboard.loading


def test_filter_users():
    users = [
        UserProfile(user_id="1", full_name="Amina Diallo", email="amina@example.com", role="student"),
        UserProfile(user_id="2", full_name="Dr Martin", email="martin@fac.fr", role="professor"),
        UserProfile(user_id="3", full_name=None, email=None, role="admin"),
    ]
    assert [u.user_id for u in filter_users(users)] == ["1", "2", "3"]
    assert [u.user_id for u in filter_users(users, UserFilter.PROFESSOR)] == ["2"]
    assert [u.user_id for u in filter_users(users, "all", "AMINA")] == ["1"]
    assert [u.user_id for u in filter_users(users, UserFilter.ALL, "fac.fr")] == ["2"]
    assert filter_users(users, UserFilter.STUDENT, "martin") == []


def test_update_user_keeps_server_row(gateway, seeded):
    gateway.on_write("user_profiles", lambda row: {**row, "full_name": row["full_name"].upper()})
    dashboard = AdminDashboard(gateway, AdminTab.USERS).fetch()
    updated = dashboard.update_user("u1", "Amina Keita", "professor")
    assert updated.full_name == "AMINA KEITA"
    entry = next(u for u in dashboard.users if u.user_id == "u1")
    assert entry.full_name == "AMINA KEITA"
    assert entry.role == "professor"


def test_update_user_rejects_unknown_role(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.USERS).fetch()
    with pytest.raises(MutationError):
        dashboard.update_user("u1", "Amina", "dean")


def test_update_user_failure(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.USERS).fetch()
    gateway.fail("user_profiles", "update")
    with pytest.raises(MutationError, match="Erreur maj profil"):
        dashboard.update_user("u1", "Amina", "student")
    assert next(u for u in dashboard.users if u.user_id == "u1").full_name == "Amina Diallo"


def test_delete_user(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.USERS).fetch()
    dashboard.delete_user("u2")
    assert [u.user_id for u in dashboard.users if u.user_id == "u2"] == []
    assert all(r["user_id"] != "u2" for r in gateway.rows("user_profiles"))


def test_create_scenario_prepends_server_row(gateway, seeded):
    gateway.on_write("scenarios", lambda row: {**row, "title": row["title"].strip().title()})
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    saved = dashboard.save_scenario(ScenarioForm(title="  otite moyenne "))
    assert saved.title == "Otite Moyenne"
    assert saved.specialty == "Pédiatrie Générale"
    assert saved.duration_minutes == 15
    assert dashboard.scenarios[0].id == saved.id
    assert dashboard.scenarios[0].title == "Otite Moyenne"


def test_update_scenario_replaces_entry(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    target = seeded[1]["id"]
    form = ScenarioForm.from_scenario(next(s for s in dashboard.scenarios if s.id == target))
    form.difficulty = "Intermédiaire"
    dashboard.save_scenario(form, target)
    assert next(s for s in dashboard.scenarios if s.id == target).difficulty == "Intermédiaire"
    assert len(dashboard.scenarios) == 2


def test_save_scenario_requires_title(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    with pytest.raises(MutationError):
        dashboard.save_scenario(ScenarioForm(title=" "))


def test_delete_referenced_scenario(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    with pytest.raises(MutationError) as excinfo:
        dashboard.delete_scenario(seeded[0]["id"])
    assert str(excinfo.value) == SCENARIO_IN_USE_MESSAGE
    assert len(dashboard.scenarios) == 2


def test_delete_scenario_other_error(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    gateway.fail("scenarios", "delete", message="permission denied", status_code=403)
    with pytest.raises(MutationError, match="permission denied"):
        dashboard.delete_scenario(seeded[0]["id"])


def test_delete_scenario_connection_error(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    gateway.fail("scenarios", "delete", message="Connection error: Unable to reach server", status_code=None)
    with pytest.raises(MutationError) as excinfo:
        dashboard.delete_scenario(seeded[0]["id"])
    assert str(excinfo.value) != SCENARIO_IN_USE_MESSAGE
    assert "Unable to reach server" in str(excinfo.value)
    assert len(dashboard.scenarios) == 2


def test_delete_scenario_conflict_status(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    gateway.fail("scenarios", "delete", message="conflict", status_code=409)
    with pytest.raises(MutationError) as excinfo:
        dashboard.delete_scenario(seeded[0]["id"])
    assert str(excinfo.value) == SCENARIO_IN_USE_MESSAGE


def test_delete_unreferenced_scenario(gateway, seeded):
    [lonely] = gateway.seed("scenarios", {"title": "Sans cours"})
    dashboard = AdminDashboard(gateway, AdminTab.SCENARIOS).fetch()
    dashboard.delete_scenario(lonely["id"])
    assert lonely["id"] not in [s.id for s in dashboard.scenarios]


def test_approvals_embed_scenario_title(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.APPROVALS).fetch()
    assert [c.title for c in dashboard.pending_courses] == ["Vidéo", "Fiche"]
    assert [c.scenario_title for c in dashboard.pending_courses] == ["Méningite", "Bronchiolite"]


def test_approve_course_only_touches_the_course(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.APPROVALS).fetch()
    course = dashboard.pending_courses[0]
    gateway.calls.clear()
    dashboard.approve_course(course.id)
    assert gateway.calls == [("table", "scenario_courses", "update")]
    assert course.id not in [c.id for c in dashboard.pending_courses]
    row = next(r for r in gateway.rows("scenario_courses") if r["id"] == course.id)
    assert row["status"] == "approved"


def test_reject_course_deletes_it(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.APPROVALS).fetch()
    course = dashboard.pending_courses[0]
    dashboard.reject_course(course.id)
    assert course.id not in [r["id"] for r in gateway.rows("scenario_courses")]
    assert len(dashboard.pending_courses) == 1


def test_approve_failure_keeps_course_listed(gateway, seeded):
    dashboard = AdminDashboard(gateway, AdminTab.APPROVALS).fetch()
    gateway.fail("scenario_courses", "update")
    with pytest.raises(MutationError):
        dashboard.approve_course(dashboard.pending_courses[0].id)
    assert len(dashboard.pending_courses) == 2
