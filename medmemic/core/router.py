# FILE: medmemic/core/router.py

import logging

from medmemic.core.models import Role
from medmemic.core.views import (
    LANDING, LOGIN, SIGNUP, View, ViewKind, dashboard_for, parse_view, view_for,
)

logger = logging.getLogger(__name__)


class Router:
    """Single source of truth for what is on screen."""

    def __init__(self, initial: View = LANDING):
        self.current = parse_view(initial)
        self._listeners = []

    def on_change(self, callback):
        """Register ``callback(previous, current)``, called after every transition."""
        self._listeners.append(callback)

    def _go(self, view: View) -> View:
        previous, self.current = self.current, parse_view(view)
        logger.info("view %s -> %s", previous, self.current)
        for callback in self._listeners:
            callback(previous, self.current)
        return self.current

    def go_landing(self):
        return self._go(LANDING)

    def go_login(self):
        return self._go(LOGIN)

    def go_signup(self):
        return self._go(SIGNUP)

    def auth_succeeded(self, role):
        return self._go(dashboard_for(role))

    def navigate(self, target, role):
        """
        Move to ``target`` for ``role``.

        ``"profile"`` and ``"dashboard"`` are composed with the role; anything
        else is read as a fully-qualified view name (``admin-users``...).
        Unknown targets resolve to the landing view.
        """
        if isinstance(target, View):
            return self._go(target)
        if target in (ViewKind.PROFILE.value, ViewKind.DASHBOARD.value):
            return self._go(view_for(Role.parse(role), target))
        return self._go(parse_view(target))

    def logout(self):
        return self._go(LANDING)
