import pytest

from medmemic.auth.auth_handlers import AuthHandlers
from medmemic.core.models import Role
from medmemic.gateway.base import GatewayError, parse_embeds
from medmemic.gateway.demo import DEMO_ACCOUNTS, DEMO_PASSWORD, build_demo_gateway
from medmemic.services.professor import ProfessorDashboard


def test_parse_embeds():
    assert parse_embeds("*, scenarios(title)") == (["*"], {"scenarios": ["title"]})
    assert parse_embeds("role") == (["role"], {})


def test_ordering_puts_missing_values_last(gateway):
    gateway.seed("scenarios", {"title": "b", "rank": 2}, {"title": "none"}, {"title": "a", "rank": 1})
    rows = gateway.table("scenarios").select("title").order("rank").execute().data
    assert [r["title"] for r in rows] == ["a", "b", "none"]


def test_results_are_copies(gateway):
    gateway.seed("scenarios", {"title": "Original"})
    [row] = gateway.table("scenarios").select("*").execute().data
    row["title"] = "Mutated"
    assert gateway.rows("scenarios")[0]["title"] == "Original"


def test_fail_and_heal(gateway):
    gateway.fail("scenarios", "select", message="down", status_code=503)
    with pytest.raises(GatewayError, match="down"):
        gateway.table("scenarios").select("*").execute()
    gateway.heal("scenarios", "select")
    assert gateway.table("scenarios").select("*").execute().data == []


def test_single_without_rows(gateway):
    with pytest.raises(GatewayError) as excinfo:
        gateway.table("user_progress").select("*").eq("user_id", "x").single().execute()
    assert excinfo.value.is_not_found


def test_short_password_rejected(gateway):
    with pytest.raises(GatewayError, match="at least 6"):
        gateway.auth.sign_up("a@b.fr", "123")


@pytest.mark.parametrize("role", list(Role))
def test_demo_accounts_resolve_their_role(role):
    gateway = build_demo_gateway()
    email, _name = DEMO_ACCOUNTS[role]
    assert AuthHandlers(gateway).login_user(email, DEMO_PASSWORD).role is role


def test_demo_cohort():
    stats = ProfessorDashboard(build_demo_gateway()).load().stats
    assert stats.active_students == 1
    assert stats.published_scenarios == 3
    assert stats.global_success_rate == 74
