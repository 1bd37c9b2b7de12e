"""Tests for record validation.

Validation rejects out-of-range values rather than correcting them, and
reports every failing field at once.
"""

import math

import pytest

from wigu.core.errors import ValidationError
from wigu.core.validation import (
    MAX_LIST_SIZE,
    combine_results,
    parse_record,
    validate_advisor_response,
    validate_career_insight,
    validate_career_response,
    validate_confidence,
    validate_five_insights_item,
    validate_list,
    validate_range,
    validate_rating,
    validate_required,
    validate_synthesis_insight,
)
from wigu.schemas.career import CareerInsight
from wigu.schemas.five_insights import EnergisingStrength
from wigu.schemas.synthesis import SynthesisInsight

# =============================================================================
# Field Validators
# =============================================================================


class TestFieldValidators:
    """Tests for single-field validators."""

    def test_required_rejects_blank(self) -> None:
        """Whitespace-only values count as missing."""
        assert validate_required("   ", "Title") != []

    def test_required_rejects_overlong(self) -> None:
        """Values over the maximum length are rejected."""
        assert validate_required("x" * 11, "Title", max_length=10) != []

    def test_required_accepts_value(self) -> None:
        """Present values within length pass."""
        assert validate_required("ok", "Title", max_length=10) == []

    @pytest.mark.parametrize("value", [0, 6, 2.5])
    def test_rating_rejects_invalid(self, value: float) -> None:
        """Ratings must be integers from 1 to 5."""
        assert validate_rating(value, "Rating") != []

    def test_rating_optional_allows_none(self) -> None:
        """Optional ratings may be omitted."""
        assert validate_rating(None, "Rating", required=False) == []

    def test_rating_required_rejects_none(self) -> None:
        """Required ratings may not be omitted."""
        assert validate_rating(None, "Rating") != []

    @pytest.mark.parametrize("value", [-0.1, 1.1, math.nan, True])
    def test_confidence_rejects_invalid(self, value: float) -> None:
        """Confidence must be a finite number in 0-1."""
        assert validate_confidence(value) != []

    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0])
    def test_confidence_accepts_bounds(self, value: float) -> None:
        """Both bounds are inclusive."""
        assert validate_confidence(value) == []

    def test_range_reports_field_name(self) -> None:
        """Error details name the failing field."""
        errors = validate_range(11, "Score", 0, 10)
        assert errors[0]["field"] == "Score"

    def test_list_enforces_minimum(self) -> None:
        """Lists shorter than the minimum are rejected."""
        assert validate_list([], "Themes", min_size=1) != []

    def test_list_enforces_maximum(self) -> None:
        """Lists longer than the maximum are rejected."""
        assert validate_list(["x"] * (MAX_LIST_SIZE + 1), "Themes") != []


class TestCombineResults:
    """Tests for combining validator results."""

    def test_no_errors_does_not_raise(self) -> None:
        """Empty results pass silently."""
        combine_results([], [])

    def test_collects_all_errors(self) -> None:
        """Every failing field is reported in one error."""
        with pytest.raises(ValidationError) as exc_info:
            combine_results(
                validate_required("", "Title"),
                validate_rating(9, "Rating"),
            )

        error = exc_info.value
        assert error.code == "VALIDATION_ERROR"
        assert len(error.details) == 2
        assert "; " in error.message


# =============================================================================
# Record Validators
# =============================================================================


class TestRecordValidators:
    """Tests for whole-record validators."""

    def test_career_response_requires_text(self, make_response) -> None:
        """An empty response is rejected."""
        with pytest.raises(ValidationError):
            validate_career_response(make_response(""))

    def test_valid_career_response_passes(self, make_response) -> None:
        """A complete response validates."""
        validate_career_response(make_response(confidence_level=4))

    def test_advisor_response_requires_invitation(self, make_advisor_response) -> None:
        """Advisor responses must reference an invitation."""
        with pytest.raises(ValidationError):
            validate_advisor_response(make_advisor_response(invitation_id=""))

    def test_career_insight_requires_sources(self, make_insight) -> None:
        """Insights without source questions are rejected."""
        valid = make_insight()
        insight = CareerInsight.model_construct(
            **{**valid.model_dump(), "source_question_ids": []}
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_career_insight(insight)

        assert exc_info.value.details[0]["field"] == "Source question IDs"

    def test_synthesis_insight_rejects_out_of_range_importance(
        self, make_synthesis_insight
    ) -> None:
        """Importance outside 1-5 is rejected, not clamped."""
        valid = make_synthesis_insight()
        insight = SynthesisInsight.model_construct(
            **{**valid.model_dump(), "strategic_importance": 7}
        )
        with pytest.raises(ValidationError):
            validate_synthesis_insight(insight)

    def test_five_insights_item_rejects_bad_rating(self) -> None:
        """Item ratings outside 1-5 are rejected."""
        item = EnergisingStrength.model_construct(
            id="e1",
            title="Teaching",
            description="Explaining ideas",
            confidence=0.8,
            skill_level=6,
            energy_level=5,
            recognition_level=4,
            leverageability=4,
            actionable_advice=None,
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_five_insights_item(item)

        assert exc_info.value.details[0]["field"] == "skill_level"

    def test_five_insights_item_subclass_uses_base_fields(self) -> None:
        """Subclassed items are checked against their base type's ratings."""

        class TaggedStrength(EnergisingStrength):
            tag: str = "mentoring"

        item = TaggedStrength.model_construct(
            id="e1",
            title="Teaching",
            description="Explaining ideas",
            confidence=0.8,
            skill_level=4,
            energy_level=0,
            recognition_level=4,
            leverageability=4,
            actionable_advice=None,
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_five_insights_item(item)

        assert exc_info.value.details[0]["field"] == "energy_level"

    def test_unsupported_item_raises_validation_error(self) -> None:
        """Records that are not Five Insights items are rejected cleanly."""
        with pytest.raises(ValidationError, match="Unsupported Five Insights item"):
            validate_five_insights_item(SynthesisInsight.model_construct(title="x"))


class TestParseRecord:
    """Tests for converting payloads into records."""

    def test_accepts_camel_case_payload(self) -> None:
        """Export-style camelCase keys are accepted."""
        insight = parse_record(
            SynthesisInsight,
            {
                "id": "s1",
                "title": "Hidden Strength: Communication",
                "description": "Advisors notice it.",
                "category": "blindspot",
                "strategicImportance": 4,
            },
        )
        assert insight.strategic_importance == 4

    def test_converts_schema_errors(self) -> None:
        """Schema failures surface as ValidationError with field details."""
        with pytest.raises(ValidationError) as exc_info:
            parse_record(
                SynthesisInsight,
                {
                    "id": "s1",
                    "title": "t",
                    "description": "d",
                    "category": "blindspot",
                    "strategic_importance": 0,
                },
            )

        assert exc_info.value.message.startswith("Invalid SynthesisInsight:")
        assert "strategic" in exc_info.value.details[0]["field"].lower()
