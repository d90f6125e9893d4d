import pytest

from medmemic.core.capabilities import capabilities_for
from medmemic.core.context import AppContext
from medmemic.core.models import Language, Role, Session, Theme
from medmemic.core.preferences import Preferences
from medmemic.core.views import ALL_VIEWS, LANDING, parse_view


@pytest.mark.parametrize("view", [v for v in ALL_VIEWS if v.name.startswith("admin") or v == LANDING])
def test_landing_and_admin_views_render_light(view):
    preferences = Preferences(theme=Theme.DARK)
    assert preferences.effective_theme(view) is Theme.LIGHT
    # the stored choice survives
    assert preferences.theme is Theme.DARK


@pytest.mark.parametrize("name", ["login", "signup", "student-dashboard", "professor-profile"])
def test_other_views_follow_the_stored_theme(name):
    preferences = Preferences(theme=Theme.DARK)
    assert preferences.effective_theme(parse_view(name)) is Theme.DARK


def test_dark_preference_comes_back_after_admin_view():
    preferences = Preferences()
    preferences.set_theme("dark")
    assert preferences.effective_theme(parse_view("admin-profile")) is Theme.LIGHT
    assert preferences.effective_theme(parse_view("professor-profile")) is Theme.DARK


def test_translate_follows_language():
    preferences = Preferences()
    assert preferences.translate("Langue", "Idioma") == "Langue"
    preferences.set_language(Language.ES)
    assert preferences.translate("Langue", "Idioma") == "Idioma"


def test_capabilities():
    assert not capabilities_for(Role.ADMIN).can_choose_theme
    assert capabilities_for(Role.ADMIN).forces_light_theme
    assert capabilities_for("professor").can_choose_theme
    assert capabilities_for(Role.STUDENT).shows_clinical_stats
    assert not capabilities_for(Role.PROFESSOR).shows_clinical_stats
    assert [e.target for e in capabilities_for(Role.ADMIN).nav] == [
        "dashboard", "admin-users", "admin-scenarios", "admin-approvals", "profile",
    ]


def test_context_theme_uses_current_view(gateway):
    context = AppContext(gateway)
    context.preferences.set_theme(Theme.DARK)
    assert context.theme is Theme.LIGHT

    context.sign_in(Session(user_id="u1", email="p@example.com", role=Role.PROFESSOR))
    assert context.view.name == "professor-dashboard"
    assert context.theme is Theme.DARK

    context.sign_out()
    assert context.view == LANDING
    assert context.session is None
    assert context.theme is Theme.LIGHT
