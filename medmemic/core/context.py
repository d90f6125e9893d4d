# FILE: medmemic/core/context.py

from typing import Optional

from medmemic.core.capabilities import capabilities_for
from medmemic.core.models import Role, Session
from medmemic.core.preferences import Preferences
from medmemic.core.router import Router


class AppContext:
    """
    Per-tab application state handed to every screen.

    Each field has one update entry point: ``sign_in``/``sign_out`` for the
    session, ``preferences.set_*`` for the UI preferences and the router's
    transition methods for the current view. Screen workflow objects created
    through ``mount`` are dropped on every view change.
    """

    def __init__(self, gateway, router: Optional[Router] = None, preferences: Optional[Preferences] = None):
        self.gateway = gateway
        self.router = router or Router()
        self.preferences = preferences or Preferences()
        self.session: Optional[Session] = None
        self._mounted = {}
        self.router.on_change(self._invalidate)

    def _invalidate(self, previous, current):
        self._mounted.clear()

    @property
    def view(self):
        return self.router.current

    @property
    def theme(self):
        return self.preferences.effective_theme(self.view)

    @property
    def role(self) -> Optional[Role]:
        return self.session.role if self.session else None

    @property
    def capabilities(self):
        return capabilities_for(self.view.role or self.role)

    def sign_in(self, session: Session):
        self.session = session
        self.router.auth_succeeded(session.role)

    def sign_out(self):
        self.session = None
        self.router.logout()

    def mount(self, key, factory):
        """Return the cached object for ``key``, building it on first use since the last transition."""
        if key not in self._mounted:
            self._mounted[key] = factory()
        return self._mounted[key]
