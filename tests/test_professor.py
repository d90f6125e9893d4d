import pytest

from medmemic.core.models import ContentType, CourseForm
from medmemic.errors import MutationError
from medmemic.services.professor import ProfessorDashboard, average_accuracy


@pytest.fixture
def cohort(gateway):
    gateway.seed(
        "user_profiles",
        {"user_id": "s1", "role": "student"},
        {"user_id": "s2", "role": "student"},
        {"user_id": "p1", "role": "professor"},
    )
    scenarios = gateway.seed(
        "scenarios",
        {"title": "Bronchiolite", "difficulty": "Débutant"},
        {"title": "Méningite", "difficulty": "Avancé"},
        {"title": "Déshydratation", "difficulty": "Débutant"},
    )
    gateway.seed(
        "scenario_sessions",
        {"scenario_id": scenarios[0]["id"], "accuracy_score": 70},
        {"scenario_id": scenarios[1]["id"], "accuracy_score": 85},
        {"scenario_id": scenarios[1]["id"], "accuracy_score": None},
    )
    return scenarios


def test_average_accuracy():
    assert average_accuracy([]) == 0
    assert average_accuracy(None) == 0
    assert average_accuracy([{"accuracy_score": 70}, {"accuracy_score": 85}]) == 78


def test_load_stats(gateway, cohort):
    dashboard = ProfessorDashboard(gateway).load()
    assert dashboard.loaded
    assert dashboard.stats.active_students == 2
    assert dashboard.stats.published_scenarios == 3
    assert dashboard.stats.global_success_rate == 78
    assert [s.title for s in dashboard.scenarios] == ["Déshydratation", "Méningite", "Bronchiolite"]


def test_difficulty_breakdown(gateway, cohort):
    dashboard = ProfessorDashboard(gateway).load()
    assert dashboard.difficulty_breakdown() == {"Débutant": 2, "Avancé": 1}


def test_failed_session_query_keeps_other_figures(gateway, cohort):
    gateway.fail("scenario_sessions", "select")
    dashboard = ProfessorDashboard(gateway).load()
    assert dashboard.loaded
    assert dashboard.stats.active_students == 2
    assert dashboard.stats.published_scenarios == 3
    assert dashboard.stats.global_success_rate == 0
    assert [s.title for s in dashboard.scenarios] == ["Déshydratation", "Méningite", "Bronchiolite"]


def test_failed_student_count_keeps_scenarios(gateway, cohort):
    gateway.fail("user_profiles", "select")
    dashboard = ProfessorDashboard(gateway).load()
    assert dashboard.stats.active_students == 0
    assert dashboard.stats.published_scenarios == 3
    assert dashboard.stats.global_success_rate == 78


def test_failed_scenario_query_keeps_counts(gateway, cohort):
    gateway.fail("scenarios", "select")
    dashboard = ProfessorDashboard(gateway).load()
    assert dashboard.scenarios == []
    assert dashboard.stats.published_scenarios == 0
    assert dashboard.stats.active_students == 2
    assert dashboard.difficulty_breakdown() == {}


def test_add_course_is_pending(gateway, cohort):
    dashboard = ProfessorDashboard(gateway).load()
    course = dashboard.add_course(
        cohort[0]["id"],
        CourseForm(title="  Fiche bronchiolite ", description="Résumé", content_type=ContentType.PDF),
    )
    assert course.status == "pending"
    assert course.title == "Fiche bronchiolite"
    [row] = gateway.rows("scenario_courses")
    assert row["scenario_id"] == cohort[0]["id"]
    assert row["content_type"] == "pdf"
    assert row["status"] == "pending"


def test_add_course_requires_title(gateway, cohort):
    with pytest.raises(MutationError):
        ProfessorDashboard(gateway).add_course(cohort[0]["id"], CourseForm(title="   "))
    assert gateway.rows("scenario_courses") == []


def test_add_course_failure(gateway, cohort):
    gateway.fail("scenario_courses", "insert")
    with pytest.raises(MutationError, match="Erreur lors de l'ajout du cours."):
        ProfessorDashboard(gateway).add_course(cohort[0]["id"], CourseForm(title="Fiche"))
