"""Tests for response quality and advisor credibility scoring."""

from datetime import UTC, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from wigu.schemas.career import (
    AdvisorConfidenceContext,
    AdvisorObservationPeriod,
    CareerDomain,
    CareerResponse,
)
from wigu.services.response_quality import (
    advisor_response_quality_score,
    credibility_weight,
    engagement_level,
    is_substantive,
    is_substantive_advisor_response,
    response_quality_score,
    shows_high_engagement,
    word_count,
)

_NOW = datetime(2025, 3, 1, tzinfo=UTC)

_EXAMPLE_TEXT = (
    "I really enjoy leading my team through complex technical problems "
    "and mentoring junior engineers"
)

# =============================================================================
# Self Responses
# =============================================================================


class TestSubstantive:
    """Tests for is_substantive()."""

    def test_short_text_is_not_substantive(self) -> None:
        """Twenty characters or fewer is not enough."""
        assert is_substantive("I do like it a lot") is False

    def test_few_words_is_not_substantive(self) -> None:
        """Long characters but few words is not enough."""
        assert is_substantive("Extraordinarily multidisciplinary") is False

    def test_example_text_is_substantive(self) -> None:
        """The 14-word example passes both thresholds."""
        assert word_count(_EXAMPLE_TEXT) == 14
        assert is_substantive(_EXAMPLE_TEXT) is True


class TestResponseQualityScore:
    """Tests for response_quality_score()."""

    def test_worked_example_scores_exactly_0_7(self, make_response) -> None:
        """Substantive, confidence 5 and reflection complete gives 0.7."""
        response = make_response(
            _EXAMPLE_TEXT, confidence_level=5, is_reflection_complete=True
        )
        assert response_quality_score(response) == pytest.approx(0.7)

    def test_long_responses_earn_length_bonuses(self, make_response) -> None:
        """Over 50 and over 100 words add 0.2 and 0.1."""
        medium = make_response(" ".join(["word"] * 60))
        long = make_response(" ".join(["word"] * 120))
        assert response_quality_score(medium) == pytest.approx(0.5)
        assert response_quality_score(long) == pytest.approx(0.6)

    def test_empty_response_scores_zero(self, make_response) -> None:
        """Nothing earns nothing."""
        assert response_quality_score(make_response(" ")) == 0.0

    @given(
        words=st.integers(min_value=0, max_value=200),
        confidence=st.integers(min_value=1, max_value=4),
    )
    def test_monotonic_in_words_and_confidence(self, words: int, confidence: int) -> None:
        """More words or more confidence never lowers the score."""

        def build(word_total: int, level: int) -> CareerResponse:
            return CareerResponse(
                question_id="q1",
                question_text="Why?",
                response=" ".join(["word"] * word_total),
                answered_at=_NOW,
                domain=CareerDomain.CREATIVE,
                confidence_level=level,
            )

        base = response_quality_score(build(words, confidence))
        assert 0.0 <= base <= 1.0
        assert response_quality_score(build(words + 1, confidence)) >= base
        assert response_quality_score(build(words, confidence + 1)) >= base


class TestEngagementLevel:
    """Tests for engagement labels."""

    def test_high_engagement(self, make_response) -> None:
        """Substantive, confident and reflected responses are highly engaged."""
        response = make_response(
            _EXAMPLE_TEXT, confidence_level=4, is_reflection_complete=True
        )
        assert shows_high_engagement(response) is True
        assert engagement_level(response) == "Highly engaged response"

    def test_thoughtful_response(self, make_response) -> None:
        """A substantive, confident answer without reflection is thoughtful."""
        response = make_response(_EXAMPLE_TEXT, confidence_level=5)
        assert engagement_level(response) == "Thoughtful response"

    def test_limited_response(self, make_response) -> None:
        """A short answer is limited."""
        assert engagement_level(make_response("Yes.")) == "Limited response"


# =============================================================================
# Advisor Responses
# =============================================================================


class TestCredibilityWeight:
    """Tests for credibility_weight()."""

    def test_minimum_credibility_respects_floor(self, make_advisor_response) -> None:
        """The least credible response still weighs at least 0.5."""
        response = make_advisor_response(
            "Fine.",
            observation_period=AdvisorObservationPeriod.LESS_THAN_MONTH,
            confidence_context=AdvisorConfidenceContext.UNCERTAIN,
        )
        weight = credibility_weight(response)
        assert weight >= 0.5
        assert weight == pytest.approx(0.6)

    def test_components_add_up(self, make_advisor_response) -> None:
        """Observation, confidence, context and examples combine."""
        response = make_advisor_response(
            "Fine.",
            observation_period=AdvisorObservationPeriod.LESS_THAN_MONTH,
            confidence_level=3,
            confidence_context=AdvisorConfidenceContext.SOMEWHAT_CONFIDENT,
            specific_examples=["Ran the offsite"],
        )
        # 0.5 + 0.1 + 0.18 + 0.1 + 0.1
        assert credibility_weight(response) == pytest.approx(0.98)

    def test_never_exceeds_one(self, make_advisor_response) -> None:
        """Credibility is clamped to 1.0."""
        response = make_advisor_response(
            "Consistently brilliant at bringing people together around a goal.",
            confidence_level=5,
            specific_examples=["a", "b", "c"],
        )
        assert credibility_weight(response) == 1.0


class TestAdvisorResponseQuality:
    """Tests for advisor substance and quality."""

    def test_substantive_requires_examples(self, make_advisor_response) -> None:
        """Long text without examples is not substantive."""
        text = "They always explain the reasoning behind each decision to the whole group."
        assert is_substantive_advisor_response(make_advisor_response(text)) is False
        assert (
            is_substantive_advisor_response(
                make_advisor_response(text, specific_examples=["Quarterly review"])
            )
            is True
        )

    def test_quality_combines_components(self, make_advisor_response) -> None:
        """Substance, credibility, examples and context add up."""
        response = make_advisor_response(
            "They always explain the reasoning behind each decision to the whole group.",
            specific_examples=["Quarterly review"],
            additional_context="We shared an office.",
        )
        # 0.3 + 1.0 * 0.3 + 0.2 + 0.1
        assert advisor_response_quality_score(response) == pytest.approx(0.9)

    def test_blank_context_earns_nothing(self, make_advisor_response) -> None:
        """Whitespace-only additional context is ignored."""
        response = make_advisor_response("Fine.", additional_context="   ")
        assert advisor_response_quality_score(response) == pytest.approx(0.3)
