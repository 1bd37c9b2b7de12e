"""Immutable value records for the scoring and synthesis core."""

from wigu.schemas.career import (
    AdvisorConfidenceContext,
    AdvisorObservationPeriod,
    AdvisorResponse,
    CareerDomain,
    CareerInsight,
    CareerResponse,
    InsightType,
)
from wigu.schemas.five_insights import (
    AspirationalStrength,
    EnergisingStrength,
    FiveInsightsModel,
    HiddenStrength,
    InsightCategory,
    MisalignedEnergy,
    OverusedTalent,
)
from wigu.schemas.progress import (
    CareerProgress,
    DomainEngagement,
    DomainProgress,
    MilestonePriority,
    MilestoneType,
    ProgressMilestone,
    ProgressPhase,
    ProgressQuality,
)
from wigu.schemas.synthesis import (
    CareerSynthesis,
    SynthesisCategory,
    SynthesisConfidence,
    SynthesisInsight,
)

__all__ = [
    # Responses and insights
    "AdvisorConfidenceContext",
    "AdvisorObservationPeriod",
    "AdvisorResponse",
    "CareerDomain",
    "CareerInsight",
    "CareerResponse",
    "InsightType",
    # Five Insights
    "AspirationalStrength",
    "EnergisingStrength",
    "FiveInsightsModel",
    "HiddenStrength",
    "InsightCategory",
    "MisalignedEnergy",
    "OverusedTalent",
    # Progress
    "CareerProgress",
    "DomainEngagement",
    "DomainProgress",
    "MilestonePriority",
    "MilestoneType",
    "ProgressMilestone",
    "ProgressPhase",
    "ProgressQuality",
    # Synthesis
    "CareerSynthesis",
    "SynthesisCategory",
    "SynthesisConfidence",
    "SynthesisInsight",
]
