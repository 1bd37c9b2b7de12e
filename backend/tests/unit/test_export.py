"""Tests for the JSON export projection."""

from datetime import datetime, timedelta

import pytest

from wigu.core.errors import ValidationError
from wigu.schemas.career import CareerDomain, CareerResponse
from wigu.schemas.five_insights import EnergisingStrength
from wigu.schemas.progress import (
    CareerProgress,
    DomainProgress,
    MilestonePriority,
    MilestoneType,
    ProgressMilestone,
)
from wigu.schemas.synthesis import CareerSynthesis, SynthesisConfidence
from wigu.services.export import ANALYSIS_KEY, export_record, parse_export
from wigu.services.five_insights import build_five_insights_model


@pytest.fixture
def milestone(now: datetime) -> ProgressMilestone:
    return ProgressMilestone(
        id="m1",
        title="Finish discovery",
        description="Answer every discovery question",
        type=MilestoneType.EXPLORATION,
        priority=MilestonePriority.HIGH,
        target_date=now + timedelta(days=3),
    )


@pytest.fixture
def progress(now: datetime, milestone: ProgressMilestone) -> CareerProgress:
    return CareerProgress(
        id="p1",
        session_id="s1",
        started_at=now - timedelta(days=4),
        last_updated=now,
        overall_completion=0.4,
        domain_progress={
            CareerDomain.LEADERSHIP: DomainProgress(
                domain=CareerDomain.LEADERSHIP,
                completion=0.2,
                questions_completed=1,
                total_questions=5,
                time_spent_minutes=12,
            )
        },
        milestones=[milestone],
        completed_question_ids=["q1"],
        total_time_spent_minutes=12,
    )


@pytest.fixture
def synthesis(now: datetime, make_synthesis_insight) -> CareerSynthesis:
    return CareerSynthesis(
        id="syn1",
        session_id="s1",
        generated_at=now,
        self_response_ids=["q1"],
        advisor_response_ids=["adv1"],
        alignment_areas=[make_synthesis_insight(strategic_importance=5)],
        development_opportunities=[
            make_synthesis_insight(actionable_advice="Take on a stretch project")
        ],
        executive_summary="Strong alignment.",
        strategic_recommendations=["Lead with collaboration."],
        alignment_score=0.7,
        confidence_level=SynthesisConfidence.MEDIUM,
        analysis_metadata={"classifiedByLlm": False},
    )


class TestRoundTrip:
    """Export followed by parse reproduces the record."""

    def test_career_response(self, make_response) -> None:
        record = make_response(confidence_level=4, tags=["growth"])
        assert parse_export(CareerResponse, export_record(record)) == record

    def test_advisor_response(self, make_advisor_response) -> None:
        record = make_advisor_response(specific_examples=["Ran the migration"])
        assert parse_export(type(record), export_record(record)) == record

    def test_career_insight(self, make_insight) -> None:
        record = make_insight(user_rating=4)
        assert parse_export(type(record), export_record(record)) == record

    def test_synthesis(self, synthesis: CareerSynthesis) -> None:
        assert parse_export(CareerSynthesis, export_record(synthesis)) == synthesis

    def test_progress(self, progress: CareerProgress) -> None:
        assert parse_export(CareerProgress, export_record(progress)) == progress

    def test_five_insights(self, now: datetime) -> None:
        record = build_five_insights_model(
            "s1",
            energising_strengths=[
                EnergisingStrength(
                    id="e1",
                    title="Mentoring",
                    description="d",
                    skill_level=4,
                    energy_level=5,
                    recognition_level=4,
                    leverageability=4,
                    confidence=0.8,
                )
            ],
            model_id="fi1",
            now=now,
        )
        assert parse_export(type(record), export_record(record)) == record


class TestProjection:
    """Tests for the exported shape."""

    def test_keys_are_camel_case(self, make_response) -> None:
        """Raw fields use their camelCase names."""
        payload = export_record(make_response())
        assert "questionId" in payload
        assert "question_id" not in payload

    def test_values_are_json_compatible(self, make_response, now: datetime) -> None:
        """Dates export as ISO strings and enums as their values."""
        payload = export_record(make_response())
        assert payload["answeredAt"] == now.isoformat().replace("+00:00", "Z")
        assert payload["domain"] == "technical"

    def test_response_analysis(self, make_response) -> None:
        """Self responses carry derived quality scores."""
        analysis = export_record(
            make_response("I love mentoring new engineers through tough problems")
        )[ANALYSIS_KEY]
        assert analysis["wordCount"] == 8
        assert analysis["isSubstantive"] is True
        assert set(analysis) >= {"qualityScore", "engagementLevel", "keyThemes"}

    def test_five_insights_analysis_includes_readiness(self, now: datetime) -> None:
        """Five Insights exports carry career readiness scores."""
        record = build_five_insights_model("s1", model_id="fi1", now=now)
        readiness = export_record(record)[ANALYSIS_KEY]["careerReadiness"]
        assert readiness == pytest.approx(
            {
                "leadership": 0.3,
                "specialist": 0.4,
                "change": 0.35,
                "entrepreneurial": 0.25,
            }
        )

    def test_synthesis_analysis(self, synthesis: CareerSynthesis) -> None:
        """Synthesis analysis counts insights rather than listing them."""
        analysis = export_record(synthesis)[ANALYSIS_KEY]
        assert analysis["totalInsights"] == 2
        assert analysis["highImpactInsights"] == 1
        assert analysis["actionableInsights"] == 1

    def test_progress_analysis(self, progress: CareerProgress) -> None:
        """Progress analysis summarises pace, domains and milestones."""
        analysis = export_record(progress)[ANALYSIS_KEY]
        assert analysis["totalDuration"] == 4
        assert analysis["averageTimePerQuestion"] == pytest.approx(12.0)
        assert analysis["mostAdvancedDomain"] == "leadership"
        assert analysis["domainsNeedingAttention"] == ["leadership"]
        assert analysis["nextMilestone"] == "Finish discovery"

    def test_milestone_analysis_uses_reference_time(
        self, milestone: ProgressMilestone, now: datetime
    ) -> None:
        """Milestone dates are judged against the given time."""
        analysis = export_record(milestone, now=now)[ANALYSIS_KEY]
        assert analysis == {"isOverdue": False, "daysUntilTarget": 3}

    def test_export_leaves_record_unchanged(self, progress: CareerProgress) -> None:
        """Exporting never mutates the record."""
        before = progress.model_dump()
        export_record(progress)
        assert progress.model_dump() == before


class TestParseExport:
    """Tests for parse_export()."""

    def test_analysis_block_is_ignored(self, make_response) -> None:
        """Edited analysis values never leak back into the record."""
        record = make_response()
        payload = export_record(record)
        payload[ANALYSIS_KEY] = {"qualityScore": 99}
        assert parse_export(CareerResponse, payload) == record

    def test_invalid_payload_raises(self, make_response) -> None:
        """Out-of-range raw fields are rejected."""
        payload = export_record(make_response())
        payload["confidenceLevel"] = 9
        with pytest.raises(ValidationError):
            parse_export(CareerResponse, payload)
