"""JSON export projection for records.

Every record exports as its raw fields (camelCase, JSON-compatible) plus an
``analysis`` block of derived scores for report rendering. The analysis
block is output-only: parse_export() drops it and rebuilds the record from
the raw fields, so export followed by parse reproduces the record exactly.
"""

import dataclasses
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from wigu.core.validation import parse_record
from wigu.schemas.base import RecordModel
from wigu.schemas.career import (
    CONFIDENCE_CONTEXT_DETAILS,
    OBSERVATION_PERIOD_DETAILS,
    AdvisorResponse,
    CareerInsight,
    CareerResponse,
)
from wigu.schemas.five_insights import FiveInsightsModel
from wigu.schemas.progress import CareerProgress, DomainProgress, ProgressMilestone
from wigu.schemas.synthesis import CareerSynthesis, SynthesisInsight
from wigu.services import five_insights, insight_quality, progress, response_quality
from wigu.services import synthesis as synthesis_service

ModelT = TypeVar("ModelT", bound=RecordModel)

ANALYSIS_KEY = "analysis"

# Any: analysis values are heterogeneous JSON scalars and lists
_Analysis = dict[str, Any]


def _career_response_analysis(record: CareerResponse, now: datetime | None) -> _Analysis:
    return {
        "wordCount": response_quality.word_count(record.response),
        "isSubstantive": response_quality.is_substantive(record.response),
        "qualityScore": response_quality.response_quality_score(record),
        "showsHighEngagement": response_quality.shows_high_engagement(record),
        "engagementLevel": response_quality.engagement_level(record),
        "keyThemes": response_quality.response_themes(record),
    }


def _advisor_response_analysis(record: AdvisorResponse, now: datetime | None) -> _Analysis:
    return {
        "wordCount": response_quality.word_count(record.response),
        "isSubstantiveResponse": response_quality.is_substantive_advisor_response(record),
        "credibilityWeight": response_quality.credibility_weight(record),
        "responseQualityScore": response_quality.advisor_response_quality_score(record),
        "keyThemes": response_quality.advisor_response_themes(record),
        "observationPeriodDescription": OBSERVATION_PERIOD_DETAILS[
            record.observation_period
        ][1],
        "confidenceContextDescription": CONFIDENCE_CONTEXT_DETAILS[
            record.confidence_context
        ][1],
    }


def _career_insight_analysis(record: CareerInsight, now: datetime | None) -> _Analysis:
    return {
        "qualityScore": insight_quality.insight_quality_score(record),
        "isHighQuality": insight_quality.is_high_quality(record),
        "primaryTheme": insight_quality.primary_theme(record),
        "impactLevel": insight_quality.impact_level(record),
    }


def _five_insights_analysis(record: FiveInsightsModel, now: datetime | None) -> _Analysis:
    return {
        "totalInsights": five_insights.total_insights(record),
        "dominantCategory": five_insights.dominant_category(record).value,
        "categoryCounts": {
            category.value: count
            for category, count in five_insights.get_category_counts(record).items()
        },
        "isWellBalanced": five_insights.is_well_balanced(record),
        "priorityActions": five_insights.get_priority_actions(record),
        "careerReadiness": dataclasses.asdict(
            five_insights.calculate_career_readiness(record)
        ),
    }


def _synthesis_insight_analysis(record: SynthesisInsight, now: datetime | None) -> _Analysis:
    return {
        "isHighPriority": synthesis_service.is_high_priority(record),
        "isActionable": bool(record.actionable_advice),
    }


def _synthesis_analysis(record: CareerSynthesis, now: datetime | None) -> _Analysis:
    return {
        "totalInsights": synthesis_service.total_insights(record),
        "synthesisQuality": synthesis_service.synthesis_quality(record),
        "keyPerceptionGaps": synthesis_service.key_perception_gaps(record),
        "highImpactInsights": len(synthesis_service.high_impact_insights(record)),
        "actionableInsights": len(synthesis_service.actionable_insights(record)),
    }


def _progress_analysis(record: CareerProgress, now: datetime | None) -> _Analysis:
    strongest = progress.most_advanced_domain(record)
    upcoming = progress.next_milestone(record)
    return {
        "totalDuration": progress.days_since_start(record),
        "averageTimePerQuestion": progress.average_time_per_question(record),
        "engagementScore": progress.engagement_score(record),
        "mostAdvancedDomain": strongest.value if strongest else None,
        "domainsNeedingAttention": [
            d.value for d in progress.domains_needing_attention(record)
        ],
        "completedMilestones": len(progress.completed_milestones(record)),
        "nextMilestone": upcoming.title if upcoming else None,
        "isOnTrack": progress.is_on_track(record),
    }


def _domain_progress_analysis(record: DomainProgress, now: datetime | None) -> _Analysis:
    return {
        "isCompleted": progress.is_domain_completed(record),
        "isWellProgressed": progress.is_domain_well_progressed(record),
        "averageTimePerQuestion": (
            record.time_spent_minutes / record.questions_completed
            if record.questions_completed
            else 0.0
        ),
    }


def _milestone_analysis(record: ProgressMilestone, now: datetime | None) -> _Analysis:
    return {
        "isOverdue": progress.is_milestone_overdue(record, now),
        "daysUntilTarget": progress.days_until_target(record, now),
    }


_ANALYZERS: dict[type[RecordModel], Callable[[Any, datetime | None], _Analysis]] = {
    CareerResponse: _career_response_analysis,
    AdvisorResponse: _advisor_response_analysis,
    CareerInsight: _career_insight_analysis,
    FiveInsightsModel: _five_insights_analysis,
    SynthesisInsight: _synthesis_insight_analysis,
    CareerSynthesis: _synthesis_analysis,
    CareerProgress: _progress_analysis,
    DomainProgress: _domain_progress_analysis,
    ProgressMilestone: _milestone_analysis,
}


def export_record(record: RecordModel, now: datetime | None = None) -> dict[str, Any]:
    """Project a record to JSON-compatible raw fields plus analysis.

    Args:
        record: Record to export.
        now: Reference time for date-relative analysis (milestones only;
            defaults to current UTC time).

    Returns:
        Dict of camelCase fields with an ``analysis`` sub-object. Records
        without derived scores get an empty analysis block.
    """
    payload = record.model_dump(mode="json", by_alias=True)
    analyzer = _ANALYZERS.get(type(record))
    payload[ANALYSIS_KEY] = analyzer(record, now) if analyzer else {}
    return payload


def parse_export(model_cls: type[ModelT], payload: dict[str, Any]) -> ModelT:
    """Rebuild a record from its export projection.

    Raises:
        ValidationError: If the raw fields do not form a valid record.
    """
    raw = {key: value for key, value in payload.items() if key != ANALYSIS_KEY}
    return parse_record(model_cls, raw)
