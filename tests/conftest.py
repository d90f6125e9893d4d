import pytest

from medmemic.auth.auth_handlers import AuthHandlers
from medmemic.gateway.memory import MemoryGateway

PASSWORD = "secret123"


@pytest.fixture
def gateway():
    return MemoryGateway()


@pytest.fixture
def auth(gateway):
    return AuthHandlers(gateway, access_code="MED2024")


@pytest.fixture
def add_user(gateway):
    """Create an account, optionally with a profile row carrying ``profile_role``."""
    def _add(email, metadata_role="student", profile_role=None, full_name="Test User", with_profile=True):
        metadata = {"full_name": full_name}
        if metadata_role:
            metadata["role"] = metadata_role
        user = gateway.auth.add_account(email, PASSWORD, metadata)
        if with_profile:
            gateway.seed("user_profiles", {
                "user_id": user.id,
                "full_name": full_name,
                "email": email,
                "role": profile_role,
            })
        return user
    return _add


@pytest.fixture
def signed_in(gateway, add_user):
    """A student signed in on the gateway, with a progress row."""
    user = add_user("student@example.com", "student", "student", full_name="Amina Student")
    gateway.seed("user_progress", {
        "user_id": user.id,
        "completed_sessions": 3,
        "avg_accuracy": 80,
        "current_streak": 4,
    })
    gateway.auth.sign_in_with_password("student@example.com", PASSWORD)
    gateway.calls.clear()
    return user
