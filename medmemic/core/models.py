# FILE: medmemic/core/models.py

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    STUDENT = "student"
    PROFESSOR = "professor"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value, default=None):
        """Return the Role for ``value`` or ``default`` when it is empty or unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Language(str, Enum):
    FR = "fr"
    ES = "es"


class Difficulty(str, Enum):
    BEGINNER = "Débutant"
    INTERMEDIATE = "Intermédiaire"
    ADVANCED = "Avancé"


class ContentType(str, Enum):
    TEXT = "text"
    PDF = "pdf"
    VIDEO = "video"


class CourseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"


DEFAULT_SPECIALTY = "Pédiatrie Générale"
DEFAULT_PROGRESS_SPECIALTY = "pediatrics"
DEFAULT_DURATION_MINUTES = 15


def utc_now_iso():
    return datetime.now(timezone.utc).isoformat()


class Record(BaseModel):
    """Transient copy of a remote row; unknown columns are kept as-is."""
    model_config = ConfigDict(extra="allow", use_enum_values=True)

    @classmethod
    def from_row(cls, row):
        return cls.model_validate(row or {})

    def to_row(self):
        return self.model_dump(exclude_none=True)


class AuthUser(Record):
    id: str
    email: Optional[str] = None
    user_metadata: dict = Field(default_factory=dict)


class Session(BaseModel):
    user_id: str
    email: Optional[str] = None
    role: Role


class UserProfile(Record):
    user_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    medical_school: Optional[str] = None
    year_of_study: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UserProgress(Record):
    user_id: str
    specialty: Optional[str] = DEFAULT_PROGRESS_SPECIALTY
    completed_sessions: Optional[int] = 0
    avg_accuracy: Optional[float] = 0
    current_streak: Optional[int] = 0
    created_at: Optional[str] = None


class Scenario(Record):
    id: Any
    title: str = ""
    description: Optional[str] = None
    difficulty: Optional[str] = None
    specialty: Optional[str] = None
    duration_minutes: Optional[int] = None
    created_at: Optional[str] = None


class ScenarioCourse(Record):
    id: Any
    scenario_id: Any = None
    title: str = ""
    description: Optional[str] = None
    content_type: str = ContentType.TEXT.value
    status: str = CourseStatus.PENDING.value

    @property
    def scenario_title(self):
        parent = getattr(self, "scenarios", None) or {}
        return parent.get("title") if isinstance(parent, dict) else None


class ScenarioForm(BaseModel):
    """Fields the admin scenario form submits on create and update."""
    title: str = ""
    description: str = ""
    difficulty: str = Difficulty.BEGINNER.value
    specialty: str = DEFAULT_SPECIALTY
    duration_minutes: int = DEFAULT_DURATION_MINUTES

    @classmethod
    def from_scenario(cls, scenario):
        return cls(
            title=scenario.title or "",
            description=scenario.description or "",
            difficulty=scenario.difficulty or Difficulty.BEGINNER.value,
            specialty=scenario.specialty or DEFAULT_SPECIALTY,
            duration_minutes=scenario.duration_minutes or DEFAULT_DURATION_MINUTES,
        )


class CourseForm(BaseModel):
    title: str = ""
    description: str = ""
    content_type: ContentType = ContentType.TEXT


class ProfileForm(BaseModel):
    full_name: str = ""
    medical_school: str = ""
    year_of_study: str = ""


YEAR_OF_STUDY_OPTIONS = [
    "Externe - 4ème année",
    "Externe - 5ème année",
    "Externe - 6ème année",
    "Interne",
]
