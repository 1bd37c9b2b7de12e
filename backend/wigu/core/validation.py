"""Validation routines for records and externally generated payloads.

Each ``validate_*`` helper returns a list of error details (empty when the
value is valid). ``combine_results`` raises a single ValidationError
carrying every failing field, so callers see all problems at once.

Values are never clamped or auto-corrected here: an out-of-range rating or
confidence blocks the record.
"""

import math
from collections.abc import Sequence
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from wigu.core.errors import ValidationError
from wigu.schemas.career import AdvisorResponse, CareerInsight, CareerResponse
from wigu.schemas.five_insights import (
    AspirationalStrength,
    EnergisingStrength,
    HiddenStrength,
    MisalignedEnergy,
    OverusedTalent,
)
from wigu.schemas.synthesis import SynthesisInsight

ModelT = TypeVar("ModelT", bound=BaseModel)

# =============================================================================
# Limits
# =============================================================================

MAX_TEXT_LENGTH = 10000
MAX_TITLE_LENGTH = 200
MAX_LIST_SIZE = 100

RATING_MIN = 1
RATING_MAX = 5

# =============================================================================
# Field Validators
# =============================================================================


def _error(field: str, message: str) -> list[dict]:
    return [{"field": field, "message": message}]


def validate_required(
    value: str | None,
    field: str,
    max_length: int | None = None,
) -> list[dict]:
    """Validate a required, non-blank string field.

    Args:
        value: String to check.
        field: Field name used in error details.
        max_length: Optional maximum length.

    Returns:
        Error details (empty if valid).
    """
    if value is None or not value.strip():
        return _error(field, f"{field} is required and cannot be empty")
    if max_length is not None and len(value) > max_length:
        return _error(field, f"{field} cannot exceed {max_length} characters")
    return []


def validate_range(
    value: float | None,
    field: str,
    min_value: float | None = None,
    max_value: float | None = None,
    required: bool = True,
) -> list[dict]:
    """Validate a numeric value against inclusive bounds.

    Args:
        value: Number to check (None allowed when not required).
        field: Field name used in error details.
        min_value: Inclusive lower bound.
        max_value: Inclusive upper bound.
        required: Whether None is an error.

    Returns:
        Error details (empty if valid).
    """
    if value is None:
        if required:
            return _error(field, f"{field} is required")
        return []
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _error(field, f"{field} must be a number")
    if not math.isfinite(value):
        return _error(field, f"{field} must be a finite number")
    if min_value is not None and value < min_value:
        return _error(field, f"{field} must be at least {min_value}")
    if max_value is not None and value > max_value:
        return _error(field, f"{field} cannot exceed {max_value}")
    return []


def validate_rating(value: int | None, field: str, required: bool = True) -> list[dict]:
    """Validate a 1-5 integer rating.

    Non-integers are rejected rather than rounded.
    """
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        return _error(field, f"{field} must be an integer between 1 and 5")
    return validate_range(value, field, RATING_MIN, RATING_MAX, required=required)


def validate_confidence(
    value: float | None,
    field: str = "Confidence score",
    required: bool = True,
) -> list[dict]:
    """Validate a 0.0-1.0 confidence score."""
    return validate_range(value, field, 0.0, 1.0, required=required)


def validate_list(
    items: Sequence[Any] | None,
    field: str,
    min_size: int | None = None,
    max_size: int | None = MAX_LIST_SIZE,
) -> list[dict]:
    """Validate list size constraints.

    Args:
        items: List to check (None is treated as empty).
        field: Field name used in error details.
        min_size: Minimum number of items.
        max_size: Maximum number of items.

    Returns:
        Error details (empty if valid).
    """
    size = len(items) if items is not None else 0
    if min_size is not None and size < min_size:
        return _error(field, f"{field} must have at least {min_size} items")
    if max_size is not None and size > max_size:
        return _error(field, f"{field} cannot have more than {max_size} items")
    return []


def combine_results(*results: list[dict]) -> None:
    """Raise ValidationError if any validator reported errors.

    Args:
        *results: Error detail lists from individual validators.

    Raises:
        ValidationError: With all error details and a "; "-joined message.
    """
    errors = [detail for result in results for detail in result]
    if errors:
        message = "; ".join(detail["message"] for detail in errors)
        raise ValidationError(message, details=errors)


# =============================================================================
# Payload Parsing
# =============================================================================


def parse_record(model_cls: type[ModelT], payload: dict[str, Any]) -> ModelT:
    """Build a record from a raw payload, converting schema failures.

    Args:
        model_cls: Record class to instantiate.
        payload: Raw field mapping (camelCase or snake_case keys).

    Returns:
        Validated record instance.

    Raises:
        ValidationError: If the payload violates the record schema.
    """
    try:
        return model_cls.model_validate(payload)
    except pydantic.ValidationError as e:
        details = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in e.errors()
        ]
        message = f"Invalid {model_cls.__name__}: " + "; ".join(
            f"{d['field']}: {d['message']}" for d in details
        )
        raise ValidationError(message, details=details) from e


# =============================================================================
# Record Validators
# =============================================================================


def validate_career_response(response: CareerResponse) -> None:
    """Validate a self response before it is persisted or scored."""
    combine_results(
        validate_required(response.question_id, "Question ID"),
        validate_required(response.question_text, "Question text"),
        validate_required(response.response, "Response", MAX_TEXT_LENGTH),
        validate_rating(response.confidence_level, "Confidence level", required=False),
    )


def validate_advisor_response(response: AdvisorResponse) -> None:
    """Validate an advisor response before it is persisted or scored."""
    combine_results(
        validate_required(response.id, "Advisor response ID"),
        validate_required(response.invitation_id, "Invitation ID"),
        validate_required(response.question_id, "Question ID"),
        validate_required(response.response, "Response", MAX_TEXT_LENGTH),
        validate_rating(response.confidence_level, "Confidence level", required=False),
        validate_list(response.specific_examples, "Specific examples"),
    )


def validate_career_insight(insight: CareerInsight) -> None:
    """Validate an insight; it must cite at least one source and theme."""
    combine_results(
        validate_required(insight.id, "Insight ID"),
        validate_required(insight.title, "Insight title", MAX_TITLE_LENGTH),
        validate_required(insight.content, "Insight content", MAX_TEXT_LENGTH),
        validate_confidence(insight.confidence),
        validate_list(insight.source_question_ids, "Source question IDs", min_size=1),
        validate_list(insight.key_themes, "Key themes", min_size=1),
        validate_rating(insight.user_rating, "User rating", required=False),
    )


def validate_synthesis_insight(insight: SynthesisInsight) -> None:
    """Validate a bucketed synthesis insight.

    Confidence and strategic importance drive prioritisation downstream,
    so out-of-range values are rejected.
    """
    combine_results(
        validate_required(insight.id, "Synthesis insight ID"),
        validate_required(insight.title, "Synthesis insight title", MAX_TITLE_LENGTH),
        validate_rating(insight.strategic_importance, "Strategic importance"),
        validate_confidence(insight.confidence),
        validate_list(insight.supporting_evidence, "Supporting evidence"),
    )


FiveInsightsItem = (
    EnergisingStrength
    | HiddenStrength
    | OverusedTalent
    | AspirationalStrength
    | MisalignedEnergy
)

# Rating fields checked per Five Insights item type
_ITEM_RATING_FIELDS: dict[type, tuple[str, ...]] = {
    EnergisingStrength: (
        "skill_level",
        "energy_level",
        "recognition_level",
        "leverageability",
    ),
    HiddenStrength: ("competence_level", "current_recognition", "potential_impact"),
    OverusedTalent: ("talent_level", "usage_frequency", "burnout_risk"),
    AspirationalStrength: ("current_level", "interest_level", "development_potential"),
    MisalignedEnergy: ("competence_level", "energy_drain_level", "frequency"),
}


def _rating_fields_for(item: FiveInsightsItem) -> tuple[str, ...]:
    for item_type, fields in _ITEM_RATING_FIELDS.items():
        if isinstance(item, item_type):
            return fields
    raise ValidationError(
        f"Unsupported Five Insights item: {type(item).__name__}",
        details=[{"field": "item", "message": "unsupported item type"}],
    )


def validate_five_insights_item(item: FiveInsightsItem) -> None:
    """Validate a Five Insights strength or drain record.

    Subclasses of the item records are validated like their base type.

    Raises:
        ValidationError: If a rating or the confidence is out of range, or
            the item is not a Five Insights record.
    """
    rating_fields = _rating_fields_for(item)
    combine_results(
        validate_required(item.title, f"{type(item).__name__} title", MAX_TITLE_LENGTH),
        validate_confidence(item.confidence),
        *(validate_rating(getattr(item, name), name) for name in rating_fields),
    )
