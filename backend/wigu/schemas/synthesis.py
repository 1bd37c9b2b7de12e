"""Self-vs-advisor synthesis records."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from wigu.schemas.base import RecordModel


class SynthesisCategory(Enum):
    """Kind of finding a synthesis insight represents."""

    STRENGTH = "strength"
    OPPORTUNITY = "opportunity"
    BLINDSPOT = "blindspot"
    OVERESTIMATION = "overestimation"
    POSITIONING = "positioning"
    DEVELOPMENT = "development"


class SynthesisConfidence(Enum):
    """Confidence in the synthesis as a whole."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SYNTHESIS_CONFIDENCE_DETAILS: dict[SynthesisConfidence, tuple[str, str]] = {
    SynthesisConfidence.HIGH: (
        "High",
        "Strong data from multiple advisors with consistent themes",
    ),
    SynthesisConfidence.MEDIUM: ("Medium", "Good data but some gaps or inconsistencies"),
    SynthesisConfidence.LOW: ("Low", "Limited data or significant inconsistencies"),
}


class SynthesisInsight(RecordModel):
    """One bucketed finding within a synthesis.

    Attributes:
        supporting_evidence: Quoted evidence lines.
        strategic_importance: 1-5 importance used for prioritisation.
        actionable_advice: Optional advice string.
        related_themes: Theme tags.
        confidence: 0.0-1.0 confidence in the finding.
    """

    id: str
    title: str
    description: str
    category: SynthesisCategory
    supporting_evidence: list[str] = Field(default_factory=list)
    strategic_importance: int = Field(ge=1, le=5)
    actionable_advice: str | None = None
    related_themes: list[str] = Field(default_factory=list)
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class CareerSynthesis(RecordModel):
    """Comparison of self-reported and advisor-reported perspectives.

    Immutable once generated.
    """

    id: str
    session_id: str
    generated_at: datetime
    self_response_ids: list[str]
    advisor_response_ids: list[str]
    alignment_areas: list[SynthesisInsight] = Field(default_factory=list)
    hidden_strengths: list[SynthesisInsight] = Field(default_factory=list)
    overestimated_areas: list[SynthesisInsight] = Field(default_factory=list)
    development_opportunities: list[SynthesisInsight] = Field(default_factory=list)
    repositioning_potential: list[SynthesisInsight] = Field(default_factory=list)
    executive_summary: str = ""
    strategic_recommendations: list[str] = Field(default_factory=list)
    alignment_score: float = Field(ge=0.0, le=1.0)
    confidence_level: SynthesisConfidence
    # Any: free-form generation metadata
    analysis_metadata: dict[str, Any] | None = None
    last_updated: datetime | None = None
