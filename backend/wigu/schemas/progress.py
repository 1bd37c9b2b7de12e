"""Career exploration progress records."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from wigu.schemas.base import RecordModel
from wigu.schemas.career import CareerDomain


class ProgressPhase(Enum):
    """Journey phases.

    Forward-only in the product flow, but treated as an externally-set
    label: no transition is enforced here.
    """

    SETUP = "setup"
    EXPLORATION = "exploration"
    DEEPENING = "deepening"
    SYNTHESIS = "synthesis"
    PLANNING = "planning"
    IMPLEMENTATION = "implementation"
    REVIEW = "review"


class ProgressQuality(Enum):
    """Quality assessment of responses so far (ordered poor → excellent)."""

    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class DomainEngagement(Enum):
    """Engagement level for a single domain."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EXCEPTIONAL = "exceptional"


class MilestoneType(Enum):
    """Kinds of journey milestone."""

    EXPLORATION = "exploration"
    INSIGHT = "insight"
    SYNTHESIS = "synthesis"
    EXPERIMENT = "experiment"
    PLANNING = "planning"
    REFLECTION = "reflection"


class MilestonePriority(Enum):
    """Milestone priority (ordered low → urgent)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Ordinal rank for ordered enums (Enum members carry no intrinsic order)
QUALITY_RANK: dict[ProgressQuality, int] = {
    quality: rank for rank, quality in enumerate(ProgressQuality)
}
PRIORITY_RANK: dict[MilestonePriority, int] = {
    priority: rank for rank, priority in enumerate(MilestonePriority)
}


class DomainProgress(RecordModel):
    """Progress within one career domain."""

    domain: CareerDomain
    completion: float = Field(ge=0.0, le=1.0)
    questions_completed: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    last_activity: datetime | None = None
    time_spent_minutes: int = Field(default=0, ge=0)
    engagement: DomainEngagement = DomainEngagement.MODERATE
    key_insights: list[str] = Field(default_factory=list)
    quality_score: float = Field(default=0.0, ge=0.0, le=1.0)


class ProgressMilestone(RecordModel):
    """A milestone in the exploration journey."""

    id: str
    title: str
    description: str
    type: MilestoneType
    priority: MilestonePriority
    is_completed: bool = False
    completed_at: datetime | None = None
    target_date: datetime | None = None
    success_criteria: list[str] = Field(default_factory=list)
    notes: str | None = None


class CareerProgress(RecordModel):
    """Session completion and engagement tracker.

    Attributes:
        overall_completion: Overall completion (0.0-1.0).
        domain_progress: Per-domain progress keyed by domain.
        engagement_metrics: Named engagement counters.
        total_time_spent_minutes: Accumulated time on questions.
        insights: Generated progress insight sentences.
    """

    id: str
    session_id: str
    started_at: datetime
    last_updated: datetime
    overall_completion: float = Field(default=0.0, ge=0.0, le=1.0)
    domain_progress: dict[CareerDomain, DomainProgress] = Field(default_factory=dict)
    milestones: list[ProgressMilestone] = Field(default_factory=list)
    current_phase: ProgressPhase = ProgressPhase.EXPLORATION
    engagement_metrics: dict[str, int] = Field(default_factory=dict)
    completed_question_ids: list[str] = Field(default_factory=list)
    skipped_question_ids: list[str] = Field(default_factory=list)
    total_time_spent_minutes: int = Field(default=0, ge=0)
    quality_assessment: ProgressQuality = ProgressQuality.FAIR
    insights: list[str] = Field(default_factory=list)
    # Any: free-form tracker metadata
    metadata: dict[str, Any] | None = None
