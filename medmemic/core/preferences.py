# FILE: medmemic/core/preferences.py

from dataclasses import dataclass

from medmemic.core.capabilities import capabilities_for
from medmemic.core.models import Language, Theme
from medmemic.core.views import View, ViewFamily


@dataclass
class Preferences:
    """UI theme and language for the lifetime of one browser tab; never persisted."""
    theme: Theme = Theme.LIGHT
    language: Language = Language.FR

    def set_theme(self, theme):
        self.theme = Theme(theme)

    def set_language(self, language):
        self.language = Language(language)

    def effective_theme(self, view: View) -> Theme:
        """Theme actually rendered for ``view``; the stored choice is left untouched."""
        if view.family is ViewFamily.MARKETING:
            return Theme.LIGHT
        if view.role is not None and capabilities_for(view.role).forces_light_theme:
            return Theme.LIGHT
        return self.theme

    def translate(self, fr: str, es: str) -> str:
        return fr if self.language is Language.FR else es
