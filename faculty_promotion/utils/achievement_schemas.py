# faculty_promotion/utils/achievement_schemas.py
from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator

from faculty_promotion.errors import InvalidCategory


# ====================================================================
# ENUMS
# ====================================================================

class Category(str, Enum):
    RESEARCH = "research"
    PATENTS = "patents"
    SUPERVISION = "supervision"
    CONFERENCES = "conferences"
    TRAINING = "training"
    TEACHING = "teaching"


class Position(str, Enum):
    TEACHING_ASSISTANT = "teaching_assistant"
    LECTURER = "lecturer"
    ASSISTANT_PROFESSOR = "assistant_professor"
    ASSOCIATE_PROFESSOR = "associate_professor"


class ApplicationStatus(str, Enum):
    NOT_APPLIED = "not_applied"
    PENDING = "pending"


def parse_category(name) -> Category:
    """Resolve a category name, rejecting anything outside the six categories."""
    try:
        return Category(name)
    except ValueError:
        raise InvalidCategory(name) from None


# ----------------------
# Achievement records
# ----------------------
# Discriminant fields (quartile, status, type, role) are required but kept as
# free strings: an unrecognized value is scored at the category fallback rate.

class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    points: Optional[int] = None


class ResearchRecord(_Record):
    category: Literal["research"] = "research"
    title: str
    journal: Optional[str] = None
    quartile: str


class PatentRecord(_Record):
    category: Literal["patents"] = "patents"
    title: str
    number: Optional[str] = None
    status: str


class SupervisionRecord(_Record):
    category: Literal["supervision"] = "supervision"
    student_name: str = Field(alias="studentName")
    project_title: Optional[str] = Field(default=None, alias="projectTitle")
    type: str


class ConferenceRecord(_Record):
    category: Literal["conferences"] = "conferences"
    title: str
    type: str
    role: str


class TrainingRecord(_Record):
    category: Literal["training"] = "training"
    title: str
    provider: Optional[str] = None
    certified: bool


class TeachingRecord(_Record):
    category: Literal["teaching"] = "teaching"
    title: str
    type: str


AchievementRecord = Annotated[
    Union[
        ResearchRecord,
        PatentRecord,
        SupervisionRecord,
        ConferenceRecord,
        TrainingRecord,
        TeachingRecord,
    ],
    Field(discriminator="category"),
]


class AchievementSet(BaseModel):
    model_config = ConfigDict(extra="forbid")

    research: List[ResearchRecord] = Field(default_factory=list)
    patents: List[PatentRecord] = Field(default_factory=list)
    supervision: List[SupervisionRecord] = Field(default_factory=list)
    conferences: List[ConferenceRecord] = Field(default_factory=list)
    training: List[TrainingRecord] = Field(default_factory=list)
    teaching: List[TeachingRecord] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, raw) -> "AchievementSet":
        """Validate a raw category -> records mapping. Unknown names raise InvalidCategory."""
        for name in raw or {}:
            parse_category(name)
        return cls.model_validate(raw or {})

    def records(self, category) -> list:
        return getattr(self, parse_category(category).value)

    def all_records(self):
        for category in Category:
            yield from self.records(category)


# ----------------------
# Scoring and promotion
# ----------------------

def empty_breakdown() -> Dict[str, int]:
    return {category.value: 0 for category in Category}


class PointsResult(BaseModel):
    total: int = 0
    breakdown: Dict[str, int] = Field(default_factory=empty_breakdown)


class Profile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    degree: str = ""
    current_position: Optional[Position] = Field(default=None, alias="currentPosition")
    years_of_service: int = Field(default=0, ge=0, alias="yearsOfService")

    @field_validator("current_position", mode="before")
    @classmethod
    def _blank_position(cls, v):
        # The onboarding form posts "" until a position is picked
        if v == "":
            return None
        return v


class PromotionRequirement(BaseModel):
    min_points: int
    max_points: int
    next_position: str = ""


class PromotionStatus(BaseModel):
    eligible: bool = False
    application_date: Optional[datetime] = None
    status: ApplicationStatus = ApplicationStatus.NOT_APPLIED

    # Accept ISO strings from stored snapshots as well as datetimes
    @field_validator("application_date", mode="before")
    @classmethod
    def _parse_application_date(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v
        return date_parser.parse(v)


class EligibilityResult(BaseModel):
    eligible: bool
    current_points: int
    points_needed: int
    requirement: PromotionRequirement
    configured: bool = True
    progress_percent: float = 0.0


class SimulationResult(BaseModel):
    current_points: int
    simulated_points: int
    points_gained: int
    would_be_eligible: bool
    breakdown: Dict[str, int]


class FacultyState(BaseModel):
    profile: Profile = Field(default_factory=Profile)
    achievements: AchievementSet = Field(default_factory=AchievementSet)
    points: PointsResult = Field(default_factory=PointsResult)
    wizard_completed: bool = False
    promotion_status: PromotionStatus = Field(default_factory=PromotionStatus)
