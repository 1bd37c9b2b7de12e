"""Self-vs-advisor synthesis aggregation.

Scores and summarises a synthesis whose insights are already bucketed into
alignment areas, hidden strengths, overestimated areas, development
opportunities and repositioning potential. Deciding which bucket an insight
belongs to happens in synthesis_classifier.

Synthesis quality (0.0-1.0, clamped):
- Insight volume:           total/20, capped at 0.3
- Alignment:                0.2 x alignment score
- Confidence level:         0.3 high / 0.2 medium / 0.1 low
- Executive summary:        +0.1 if longer than 100 characters
- Recommendations:          count/10, capped at 0.1
"""

import logging
from dataclasses import dataclass, field

from wigu.core.errors import ValidationError
from wigu.core.validation import validate_synthesis_insight
from wigu.schemas.career import AdvisorResponse, CareerDomain, CareerResponse
from wigu.schemas.synthesis import (
    CareerSynthesis,
    SynthesisConfidence,
    SynthesisInsight,
)
from wigu.services.response_quality import (
    advisor_response_quality_score,
    advisor_response_themes,
    credibility_weight,
    response_quality_score,
    response_themes,
)
from wigu.services.theme_extraction import ThemeMatchMode

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

HIGH_IMPORTANCE = 4
HIGH_PRIORITY_MIN_CONFIDENCE = 0.7
MAX_PERCEPTION_GAPS = 5

QUALITY_VOLUME_DIVISOR = 20
QUALITY_VOLUME_CAP = 0.3
QUALITY_ALIGNMENT_WEIGHT = 0.2
QUALITY_SUMMARY_MIN_LENGTH = 100
QUALITY_SUMMARY_BONUS = 0.1
QUALITY_RECOMMENDATION_DIVISOR = 10
QUALITY_RECOMMENDATION_CAP = 0.1

CONFIDENCE_QUALITY_BONUS: dict[SynthesisConfidence, float] = {
    SynthesisConfidence.HIGH: 0.3,
    SynthesisConfidence.MEDIUM: 0.2,
    SynthesisConfidence.LOW: 0.1,
}

# Confidence level blend
CONFIDENCE_WEIGHT_SELF_QUALITY = 0.2
CONFIDENCE_WEIGHT_ADVISOR_QUALITY = 0.3
CONFIDENCE_WEIGHT_ADVISOR_CREDIBILITY = 0.3
CONFIDENCE_WEIGHT_DATA_SUFFICIENCY = 0.1
CONFIDENCE_WEIGHT_DOMAIN_COVERAGE = 0.1

_CONFIDENCE_WEIGHT_SUM = (
    CONFIDENCE_WEIGHT_SELF_QUALITY
    + CONFIDENCE_WEIGHT_ADVISOR_QUALITY
    + CONFIDENCE_WEIGHT_ADVISOR_CREDIBILITY
    + CONFIDENCE_WEIGHT_DATA_SUFFICIENCY
    + CONFIDENCE_WEIGHT_DOMAIN_COVERAGE
)

# Sanity check at import time (RuntimeError survives python -O, unlike assert)
if abs(_CONFIDENCE_WEIGHT_SUM - 1.0) >= 0.001:
    raise RuntimeError(
        f"Synthesis confidence weights must sum to 1.0, got {_CONFIDENCE_WEIGHT_SUM}"
    )

SUFFICIENT_RESPONSE_COUNT = 20
HIGH_CONFIDENCE_THRESHOLD = 0.75
MEDIUM_CONFIDENCE_THRESHOLD = 0.55


# =============================================================================
# Buckets
# =============================================================================


@dataclass(frozen=True)
class SynthesisBuckets:
    """Insights sorted into the five synthesis buckets.

    Attributes:
        alignment_areas: Strengths both sides agree on.
        hidden_strengths: Strengths advisors see that the subject does not.
        overestimated_areas: Strengths the subject claims that advisors
            rarely mention.
        development_opportunities: Growth areas suggested by advisors.
        repositioning_potential: Strengths advisors describe in more
            strategic language.
        classified_by_llm: True when an LLM produced the buckets, False
            for the rule-based classifier.
    """

    alignment_areas: list[SynthesisInsight] = field(default_factory=list)
    hidden_strengths: list[SynthesisInsight] = field(default_factory=list)
    overestimated_areas: list[SynthesisInsight] = field(default_factory=list)
    development_opportunities: list[SynthesisInsight] = field(default_factory=list)
    repositioning_potential: list[SynthesisInsight] = field(default_factory=list)
    classified_by_llm: bool = False

    def all(self) -> list[SynthesisInsight]:
        """All insights in bucket order."""
        return [
            *self.alignment_areas,
            *self.hidden_strengths,
            *self.overestimated_areas,
            *self.development_opportunities,
            *self.repositioning_potential,
        ]


def buckets_of(synthesis: CareerSynthesis) -> SynthesisBuckets:
    """Return a synthesis's insights as SynthesisBuckets."""
    return SynthesisBuckets(
        alignment_areas=synthesis.alignment_areas,
        hidden_strengths=synthesis.hidden_strengths,
        overestimated_areas=synthesis.overestimated_areas,
        development_opportunities=synthesis.development_opportunities,
        repositioning_potential=synthesis.repositioning_potential,
    )


def validate_synthesis_buckets(buckets: SynthesisBuckets) -> None:
    """Validate every bucketed insight.

    Importance and confidence drive prioritisation, so nothing is clamped:
    the first invalid insight fails the whole batch.

    Raises:
        ValidationError: If any insight is out of range or incomplete.
    """
    for insight in buckets.all():
        try:
            validate_synthesis_insight(insight)
        except ValidationError:
            logger.warning("Rejected synthesis insight %r", insight.id)
            raise


# =============================================================================
# Aggregation
# =============================================================================


def all_insights(synthesis: CareerSynthesis) -> list[SynthesisInsight]:
    """All insights across the five buckets, in bucket order."""
    return buckets_of(synthesis).all()


def total_insights(synthesis: CareerSynthesis) -> int:
    """Sum of the five bucket sizes."""
    return len(all_insights(synthesis))


def high_impact_insights(synthesis: CareerSynthesis) -> list[SynthesisInsight]:
    """Insights with strategic importance of 4+, most important first.

    Ties keep bucket order.
    """
    return sorted(
        (i for i in all_insights(synthesis) if i.strategic_importance >= HIGH_IMPORTANCE),
        key=lambda i: i.strategic_importance,
        reverse=True,
    )


def actionable_insights(synthesis: CareerSynthesis) -> list[SynthesisInsight]:
    """Hidden, development and repositioning insights that carry advice."""
    candidates = [
        *synthesis.hidden_strengths,
        *synthesis.development_opportunities,
        *synthesis.repositioning_potential,
    ]
    return [i for i in candidates if i.actionable_advice]


def synthesis_quality(synthesis: CareerSynthesis) -> float:
    """Score the overall quality of a synthesis.

    Args:
        synthesis: Synthesis to score.

    Returns:
        Quality clamped to 0.0-1.0.
    """
    quality = min(total_insights(synthesis) / QUALITY_VOLUME_DIVISOR, QUALITY_VOLUME_CAP)
    quality += synthesis.alignment_score * QUALITY_ALIGNMENT_WEIGHT
    quality += CONFIDENCE_QUALITY_BONUS[synthesis.confidence_level]

    if len(synthesis.executive_summary) > QUALITY_SUMMARY_MIN_LENGTH:
        quality += QUALITY_SUMMARY_BONUS

    quality += min(
        len(synthesis.strategic_recommendations) / QUALITY_RECOMMENDATION_DIVISOR,
        QUALITY_RECOMMENDATION_CAP,
    )
    return max(0.0, min(1.0, quality))


def is_high_priority(insight: SynthesisInsight) -> bool:
    """Important (4+) and confident (0.7+)."""
    return (
        insight.strategic_importance >= HIGH_IMPORTANCE
        and insight.confidence >= HIGH_PRIORITY_MIN_CONFIDENCE
    )


def key_perception_gaps(synthesis: CareerSynthesis) -> list[str]:
    """Where self and advisor views differ most.

    Hidden strengths come first, then possible overestimations; at most 5.
    """
    gaps = [f"Hidden strength: {i.title}" for i in synthesis.hidden_strengths]
    gaps += [f"Possible overestimation: {i.title}" for i in synthesis.overestimated_areas]
    return gaps[:MAX_PERCEPTION_GAPS]


# =============================================================================
# Self-vs-Advisor Signals
# =============================================================================


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def collect_self_themes(
    responses: list[CareerResponse],
    mode: ThemeMatchMode | None = None,
) -> list[list[str]]:
    """Theme list for each self response."""
    return [response_themes(r, mode) for r in responses]


def collect_advisor_themes(
    responses: list[AdvisorResponse],
    mode: ThemeMatchMode | None = None,
) -> list[list[str]]:
    """Theme list for each advisor response."""
    return [advisor_response_themes(r, mode) for r in responses]


def calculate_alignment_score(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
    mode: ThemeMatchMode | None = None,
) -> float:
    """Share of all mentioned themes that both sides mention.

    Args:
        self_responses: Subject's own responses.
        advisor_responses: Advisor responses about the subject.
        mode: Theme matching mode (defaults to configured mode).

    Returns:
        Shared themes over the union of themes; 0.0 when either side
        mentions no themes.
    """
    self_themes = {t for ts in collect_self_themes(self_responses, mode) for t in ts}
    advisor_themes = {
        t for ts in collect_advisor_themes(advisor_responses, mode) for t in ts
    }
    if not self_themes or not advisor_themes:
        return 0.0
    return len(self_themes & advisor_themes) / len(self_themes | advisor_themes)


def calculate_confidence_level(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
) -> SynthesisConfidence:
    """Rate how much the synthesis can be trusted.

    Blends average self quality, average advisor quality and credibility,
    data sufficiency (responses out of 20) and domain coverage.

    Returns:
        HIGH at 0.75+, MEDIUM at 0.55+, otherwise LOW. LOW if either side
        is empty.
    """
    if not self_responses or not advisor_responses:
        return SynthesisConfidence.LOW

    response_count = len(self_responses) + len(advisor_responses)
    domains_covered = len({r.domain for r in self_responses}) + len(
        {r.domain for r in advisor_responses}
    )

    score = (
        _mean([response_quality_score(r) for r in self_responses])
        * CONFIDENCE_WEIGHT_SELF_QUALITY
        + _mean([advisor_response_quality_score(r) for r in advisor_responses])
        * CONFIDENCE_WEIGHT_ADVISOR_QUALITY
        + _mean([credibility_weight(r) for r in advisor_responses])
        * CONFIDENCE_WEIGHT_ADVISOR_CREDIBILITY
        + min(response_count / SUFFICIENT_RESPONSE_COUNT, 1.0)
        * CONFIDENCE_WEIGHT_DATA_SUFFICIENCY
        + min(domains_covered / len(CareerDomain), 1.0)
        * CONFIDENCE_WEIGHT_DOMAIN_COVERAGE
    )

    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return SynthesisConfidence.HIGH
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return SynthesisConfidence.MEDIUM
    return SynthesisConfidence.LOW
