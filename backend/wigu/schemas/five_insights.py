"""Five Insights strengths framework records.

Organises strengths and drains into five strategic categories:
energising, hidden, overused, aspirational and misaligned.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import Field

from wigu.schemas.base import RecordModel


class InsightCategory(Enum):
    """Five Insights categories, in aggregation order."""

    ENERGISING = "energising"
    HIDDEN = "hidden"
    OVERUSED = "overused"
    ASPIRATIONAL = "aspirational"
    MISALIGNED = "misaligned"


CATEGORY_DETAILS: dict[InsightCategory, tuple[str, str]] = {
    InsightCategory.ENERGISING: (
        "Energising Strength",
        "High skill + high energy + recognised by others",
    ),
    InsightCategory.HIDDEN: (
        "Hidden Strength",
        "High competence but underrecognised or underutilised",
    ),
    InsightCategory.OVERUSED: (
        "Overused Talent",
        "Strong skill but potentially overused, leading to fatigue",
    ),
    InsightCategory.ASPIRATIONAL: (
        "Aspirational Strength",
        "Areas of high interest with development potential",
    ),
    InsightCategory.MISALIGNED: (
        "Misaligned Energy",
        "Activities that drain energy despite competence",
    ),
}

# 1-5 rating and 0-1 confidence field types
Rating = Annotated[int, Field(ge=1, le=5)]
Confidence = Annotated[float, Field(ge=0.0, le=1.0)]


class EnergisingStrength(RecordModel):
    """High skill + high energy + recognised by others."""

    id: str
    title: str
    description: str
    skill_level: Rating
    energy_level: Rating
    recognition_level: Rating
    leverageability: Rating
    evidence_from_self: list[str] = Field(default_factory=list)
    evidence_from_others: list[str] = Field(default_factory=list)
    actionable_advice: str | None = None
    application_areas: list[str] = Field(default_factory=list)
    confidence: Confidence


class HiddenStrength(RecordModel):
    """High competence but under-recognised or under-utilised."""

    id: str
    title: str
    description: str
    competence_level: Rating
    current_recognition: Rating
    potential_impact: Rating
    hidden_factors: list[str] = Field(default_factory=list)
    development_strategy: str | None = None
    visibility_opportunities: list[str] = Field(default_factory=list)
    confidence: Confidence


class OverusedTalent(RecordModel):
    """Strong skill that is used so much it risks fatigue."""

    id: str
    title: str
    description: str
    talent_level: Rating
    usage_frequency: Rating
    burnout_risk: Rating
    overuse_indicators: list[str] = Field(default_factory=list)
    rebalancing_strategy: str | None = None
    alternative_applications: list[str] = Field(default_factory=list)
    confidence: Confidence


class AspirationalStrength(RecordModel):
    """Area of high interest with development potential.

    Attributes:
        timeframe: Months expected to develop the strength.
    """

    id: str
    title: str
    description: str
    current_level: Rating
    interest_level: Rating
    development_potential: Rating
    development_plan: str | None = None
    required_resources: list[str] = Field(default_factory=list)
    timeframe: int = Field(ge=0)
    confidence: Confidence


class MisalignedEnergy(RecordModel):
    """Activity that drains energy despite competence."""

    id: str
    title: str
    description: str
    competence_level: Rating
    energy_drain_level: Rating
    frequency: Rating
    drain_factors: list[str] = Field(default_factory=list)
    mitigation_strategy: str | None = None
    alternative_approaches: list[str] = Field(default_factory=list)
    confidence: Confidence


class FiveInsightsModel(RecordModel):
    """Five-category strengths profile for a session.

    Generated once per synthesis pass; regeneration replaces the prior
    instance rather than mutating it.

    Attributes:
        balance_score: How evenly the categories are populated (0.0-1.0).
        key_recommendations: Strategic recommendation sentences.
    """

    id: str
    session_id: str
    generated_at: datetime
    energising_strengths: list[EnergisingStrength] = Field(default_factory=list)
    hidden_strengths: list[HiddenStrength] = Field(default_factory=list)
    overused_talents: list[OverusedTalent] = Field(default_factory=list)
    aspirational_strengths: list[AspirationalStrength] = Field(default_factory=list)
    misaligned_energies: list[MisalignedEnergy] = Field(default_factory=list)
    executive_summary: str | None = None
    balance_score: float = Field(ge=0.0, le=1.0)
    key_recommendations: list[str] = Field(default_factory=list)
    # Any: free-form generation metadata
    metadata: dict[str, Any] | None = None
    last_updated: datetime | None = None
