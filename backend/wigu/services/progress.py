"""Progress and completion aggregation.

Engagement score (0.0-1.0):
- Completion: 30% of overall completion
- Quality: poor 0.05, fair 0.15, good 0.25, excellent 0.30
- Consistency: milestones per day since start x7, capped at 0.20
- Depth: 0.20 when average time per question is within 50% of the
  15-minute target, 0.10 otherwise

The score drives UI nudges only. It is monotonic in completion, quality and
cadence.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from wigu.core.errors import ValidationError
from wigu.core.validation import parse_record
from wigu.schemas.career import (
    CareerDomain,
    CareerInsight,
    CareerResponse,
    domain_display_name,
)
from wigu.schemas.progress import (
    PRIORITY_RANK,
    QUALITY_RANK,
    CareerProgress,
    DomainProgress,
    ProgressMilestone,
    ProgressPhase,
    ProgressQuality,
)
from wigu.services.insight_quality import is_high_quality
from wigu.services.response_quality import is_substantive, response_quality_score

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

QUALITY_BONUS: dict[ProgressQuality, float] = {
    ProgressQuality.POOR: 0.05,
    ProgressQuality.FAIR: 0.15,
    ProgressQuality.GOOD: 0.25,
    ProgressQuality.EXCELLENT: 0.30,
}

COMPLETION_WEIGHT = 0.3
MAX_CONSISTENCY_BONUS = 0.2
EXPECTED_MINUTES_PER_QUESTION = 15.0
MAX_TIME_RATIO = 2.0
DEPTH_TOLERANCE = 0.5
DEPTH_BONUS_ON_TARGET = 0.2
DEPTH_BONUS_OFF_TARGET = 0.1

NEEDS_ATTENTION_THRESHOLD = 0.3
ON_TRACK_ENGAGEMENT = 0.6
ON_TRACK_COMPLETION = 0.3

SLOW_PACE_MINUTES = 20
FAST_PACE_MINUTES = 5

# Sort placeholder for milestones without a target date
_UNDATED = datetime.min.replace(tzinfo=UTC)

_QUALITY_INSIGHTS: dict[ProgressQuality, str] = {
    ProgressQuality.EXCELLENT: (
        "The quality of your responses is excellent - rich, detailed, and thoughtful."
    ),
    ProgressQuality.GOOD: (
        "Good quality responses - you're providing helpful detail and context."
    ),
    ProgressQuality.FAIR: (
        "Fair quality responses - consider adding more examples and personal reflection."
    ),
    ProgressQuality.POOR: (
        "Your responses could benefit from more detail and personal examples."
    ),
}


# =============================================================================
# Completion and Engagement
# =============================================================================


def completion_percentage(
    completed_domains: list[CareerDomain],
    total_domains: int = len(CareerDomain),
) -> float:
    """Fraction of domains completed (0.0 when there are no domains)."""
    if total_domains <= 0:
        return 0.0
    return min(1.0, len(completed_domains) / total_domains)


def average_time_per_question(progress: CareerProgress) -> float:
    if not progress.completed_question_ids:
        return 0.0
    return progress.total_time_spent_minutes / len(progress.completed_question_ids)


def days_since_start(progress: CareerProgress) -> int:
    """Whole days between the first and latest activity."""
    return (progress.last_updated - progress.started_at).days


def engagement_score(progress: CareerProgress) -> float:
    """Calculate the engagement score for a progress record.

    Args:
        progress: Progress record.

    Returns:
        Engagement score clamped to 0.0-1.0.
    """
    score = progress.overall_completion * COMPLETION_WEIGHT
    score += QUALITY_BONUS[progress.quality_assessment]

    days = days_since_start(progress)
    if days > 0:
        updates_per_day = len(progress.milestones) / days
        score += min(updates_per_day * 7, MAX_CONSISTENCY_BONUS)

    time_ratio = min(
        average_time_per_question(progress) / EXPECTED_MINUTES_PER_QUESTION,
        MAX_TIME_RATIO,
    )
    if abs(time_ratio - 1.0) < DEPTH_TOLERANCE:
        score += DEPTH_BONUS_ON_TARGET
    else:
        score += DEPTH_BONUS_OFF_TARGET

    return max(0.0, min(1.0, score))


# =============================================================================
# Domains and Milestones
# =============================================================================


def most_advanced_domain(progress: CareerProgress) -> CareerDomain | None:
    """Domain with the highest completion (first wins on ties)."""
    if not progress.domain_progress:
        return None
    return max(
        progress.domain_progress.items(), key=lambda entry: entry[1].completion
    )[0]


def domains_needing_attention(progress: CareerProgress) -> list[CareerDomain]:
    return [
        domain
        for domain, domain_progress in progress.domain_progress.items()
        if domain_progress.completion < NEEDS_ATTENTION_THRESHOLD
    ]


def is_domain_completed(domain_progress: DomainProgress) -> bool:
    return domain_progress.completion >= 1.0


def is_domain_well_progressed(domain_progress: DomainProgress) -> bool:
    return domain_progress.completion >= 0.7 and domain_progress.quality_score >= 0.6


def completed_milestones(progress: CareerProgress) -> list[ProgressMilestone]:
    return [m for m in progress.milestones if m.is_completed]


def _milestone_order(milestone: ProgressMilestone) -> tuple[int, bool, datetime]:
    return (
        -PRIORITY_RANK[milestone.priority],
        milestone.target_date is None,
        milestone.target_date or _UNDATED,
    )


def next_milestone(progress: CareerProgress) -> ProgressMilestone | None:
    """Next incomplete milestone: highest priority, then earliest target date.

    Among equal priorities, dated milestones come before undated ones, and
    undated milestones keep their list order.
    """
    incomplete = [m for m in progress.milestones if not m.is_completed]
    if not incomplete:
        return None
    return min(incomplete, key=_milestone_order)


def is_milestone_overdue(milestone: ProgressMilestone, now: datetime | None = None) -> bool:
    if milestone.is_completed or milestone.target_date is None:
        return False
    return (now or datetime.now(UTC)) > milestone.target_date


def days_until_target(milestone: ProgressMilestone, now: datetime | None = None) -> int | None:
    if milestone.target_date is None:
        return None
    return (milestone.target_date - (now or datetime.now(UTC))).days


def is_on_track(progress: CareerProgress) -> bool:
    return (
        engagement_score(progress) >= ON_TRACK_ENGAGEMENT
        and progress.overall_completion >= ON_TRACK_COMPLETION
        and QUALITY_RANK[progress.quality_assessment]
        >= QUALITY_RANK[ProgressQuality.FAIR]
    )


# =============================================================================
# Insights
# =============================================================================


def generate_progress_insights(progress: CareerProgress) -> list[str]:
    """Describe completion, engagement, domain focus, pace and quality."""
    insights: list[str] = []

    completion = progress.overall_completion
    if completion >= 0.8:
        insights.append(
            "Excellent progress - you're nearing completion of your career exploration!"
        )
    elif completion >= 0.5:
        insights.append(
            "Good momentum - you're over halfway through your career journey."
        )
    elif completion >= 0.3:
        insights.append(
            "Solid start - keep building on your career exploration foundation."
        )
    else:
        insights.append(
            "Early stages - take your time to build a thorough understanding."
        )

    engagement = engagement_score(progress)
    if engagement >= 0.8:
        insights.append(
            "Outstanding engagement - you're deeply invested in this process."
        )
    elif engagement >= 0.6:
        insights.append(
            "Good engagement - you're actively participating in the process."
        )
    elif engagement >= 0.4:
        insights.append(
            "Moderate engagement - consider ways to deepen your involvement."
        )
    else:
        insights.append(
            "Low engagement - you might benefit from a different approach or timing."
        )

    strongest = most_advanced_domain(progress)
    if strongest is not None:
        insights.append(
            f"Strongest progress in {domain_display_name(strongest)} - this may "
            "indicate a natural affinity."
        )

    lagging = domains_needing_attention(progress)
    if lagging:
        names = " and ".join(domain_display_name(d) for d in lagging[:2])
        insights.append(f"Consider focusing more attention on {names}.")

    pace = average_time_per_question(progress)
    if pace > SLOW_PACE_MINUTES:
        insights.append(
            "You're taking thoughtful time with each question - this thorough "
            "approach is valuable."
        )
    elif pace < FAST_PACE_MINUTES:
        insights.append(
            "You're moving quickly through questions - consider taking more time "
            "for deeper reflection."
        )

    insights.append(_QUALITY_INSIGHTS[progress.quality_assessment])
    return insights


# =============================================================================
# Updates
# =============================================================================


def record_activity(
    progress: CareerProgress,
    overall_completion: float | None = None,
    domain_progress: dict[CareerDomain, DomainProgress] | None = None,
    milestones: list[ProgressMilestone] | None = None,
    phase: ProgressPhase | None = None,
    engagement_metrics: dict[str, int] | None = None,
    completed_question_ids: list[str] | None = None,
    skipped_question_ids: list[str] | None = None,
    additional_minutes: int = 0,
    quality_assessment: ProgressQuality | None = None,
    now: datetime | None = None,
) -> CareerProgress:
    """Return an updated copy of a progress record.

    Omitted arguments keep their current values. Time is accumulated, and
    progress insights are regenerated from the updated state. The phase is
    taken as given; no transition order is enforced.

    Args:
        progress: Current progress record.
        overall_completion: New overall completion (0.0-1.0).
        domain_progress: Replacement per-domain progress.
        milestones: Replacement milestone list.
        phase: New journey phase.
        engagement_metrics: Replacement engagement counters.
        completed_question_ids: Replacement completed question ids.
        skipped_question_ids: Replacement skipped question ids.
        additional_minutes: Minutes to add to the running total.
        quality_assessment: New quality assessment.
        now: Update timestamp (defaults to current UTC time).

    Returns:
        New CareerProgress; the input is unchanged.

    Raises:
        ValidationError: If additional_minutes is negative or an updated
            field is out of range.
    """
    if additional_minutes < 0:
        raise ValidationError(
            "Additional minutes cannot be negative",
            details=[{"field": "additional_minutes", "message": "cannot be negative"}],
        )

    update = {
        "last_updated": now or datetime.now(UTC),
        "total_time_spent_minutes": progress.total_time_spent_minutes + additional_minutes,
    }
    optional = {
        "overall_completion": overall_completion,
        "domain_progress": domain_progress,
        "milestones": milestones,
        "current_phase": phase,
        "engagement_metrics": engagement_metrics,
        "completed_question_ids": completed_question_ids,
        "skipped_question_ids": skipped_question_ids,
        "quality_assessment": quality_assessment,
    }
    update.update({k: v for k, v in optional.items() if v is not None})

    # model_copy skips validation, so rebuild to enforce field bounds
    updated = parse_record(CareerProgress, {**progress.model_dump(), **update})
    updated = updated.model_copy(update={"insights": generate_progress_insights(updated)})

    logger.debug(
        "Recorded activity for session %s: completion=%.2f phase=%s",
        updated.session_id,
        updated.overall_completion,
        updated.current_phase.value,
    )
    return updated


# =============================================================================
# Activity Summary
# =============================================================================


@dataclass(frozen=True)
class ActivitySummary:
    """Roll-up of a session's responses and insights."""

    total_responses: int
    substantive_responses: int
    reflection_complete_responses: int
    average_response_quality: float
    domains_covered: int
    total_insights: int
    high_quality_insights: int
    validated_insights: int


def summarize_activity(
    responses: list[CareerResponse],
    insights: list[CareerInsight],
) -> ActivitySummary:
    """Summarise responses and insights for progress reporting.

    Empty inputs give zero counts and a 0.0 average.
    """
    qualities = [response_quality_score(r) for r in responses]
    return ActivitySummary(
        total_responses=len(responses),
        substantive_responses=sum(1 for r in responses if is_substantive(r.response)),
        reflection_complete_responses=sum(
            1 for r in responses if r.is_reflection_complete
        ),
        average_response_quality=sum(qualities) / len(qualities) if qualities else 0.0,
        domains_covered=len({r.domain for r in responses}),
        total_insights=len(insights),
        high_quality_insights=sum(1 for i in insights if is_high_quality(i)),
        validated_insights=sum(1 for i in insights if i.is_user_validated),
    )
