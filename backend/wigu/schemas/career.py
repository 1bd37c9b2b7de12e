"""Career response and insight records.

Self responses, advisor responses and generated insights are immutable
value records. Descriptive text for each enum lives in a separate lookup
table so scoring code never touches presentation strings.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from wigu.schemas.base import RecordModel

# =============================================================================
# Enums
# =============================================================================


class CareerDomain(Enum):
    """Career-aptitude categories used to tag responses and insights."""

    TECHNICAL = "technical"
    LEADERSHIP = "leadership"
    CREATIVE = "creative"
    ANALYTICAL = "analytical"
    SOCIAL = "social"
    ENTREPRENEURIAL = "entrepreneurial"
    TRADITIONAL = "traditional"
    INVESTIGATIVE = "investigative"


class AdvisorObservationPeriod(Enum):
    """How long the advisor has observed the subject."""

    LESS_THAN_MONTH = "lessThanMonth"
    ONE_TO_SIX_MONTHS = "oneToSixMonths"
    SIX_MONTHS_TO_YEAR = "sixMonthsToYear"
    ONE_TO_THREE_YEARS = "oneToThreeYears"
    MORE_THAN_THREE_YEARS = "moreThanThreeYears"


class AdvisorConfidenceContext(Enum):
    """Advisor's stated confidence in their own assessment."""

    VERY_CONFIDENT = "veryConfident"
    CONFIDENT = "confident"
    SOMEWHAT_CONFIDENT = "somewhatConfident"
    LIMITED_OBSERVATION = "limitedObservation"
    UNCERTAIN = "uncertain"


class InsightType(Enum):
    """Kinds of insight an external generation step can produce."""

    PATTERN = "pattern"
    STRENGTH = "strength"
    VALUE = "value"
    INTEREST = "interest"
    DEVELOPMENT = "development"
    COMPATIBILITY = "compatibility"
    BARRIER = "barrier"
    NEXT_STEP = "nextStep"


# =============================================================================
# Lookup Tables
# =============================================================================

# (display name, description)
DOMAIN_DETAILS: dict[CareerDomain, tuple[str, str]] = {
    CareerDomain.TECHNICAL: (
        "Technical & Engineering",
        "Skills in technology, engineering, and problem-solving",
    ),
    CareerDomain.LEADERSHIP: (
        "Leadership & Management",
        "Leading teams, managing projects, and strategic thinking",
    ),
    CareerDomain.CREATIVE: (
        "Creative & Design",
        "Artistic expression, design thinking, and innovation",
    ),
    CareerDomain.ANALYTICAL: (
        "Analytical & Research",
        "Data analysis, research, and critical thinking",
    ),
    CareerDomain.SOCIAL: (
        "Social & Communication",
        "Working with people, communication, and relationship building",
    ),
    CareerDomain.ENTREPRENEURIAL: (
        "Entrepreneurial & Business",
        "Starting ventures, business development, and risk-taking",
    ),
    CareerDomain.TRADITIONAL: (
        "Traditional & Service",
        "Established professions and service-oriented roles",
    ),
    CareerDomain.INVESTIGATIVE: (
        "Investigative & Academic",
        "Research, academia, and knowledge discovery",
    ),
}

OBSERVATION_PERIOD_DETAILS: dict[AdvisorObservationPeriod, tuple[str, str]] = {
    AdvisorObservationPeriod.LESS_THAN_MONTH: (
        "Less than a month",
        "Limited but recent observation",
    ),
    AdvisorObservationPeriod.ONE_TO_SIX_MONTHS: (
        "1-6 months",
        "Good short-term observation",
    ),
    AdvisorObservationPeriod.SIX_MONTHS_TO_YEAR: (
        "6 months to 1 year",
        "Solid medium-term observation",
    ),
    AdvisorObservationPeriod.ONE_TO_THREE_YEARS: (
        "1-3 years",
        "Strong long-term observation",
    ),
    AdvisorObservationPeriod.MORE_THAN_THREE_YEARS: (
        "More than 3 years",
        "Extensive long-term observation",
    ),
}

CONFIDENCE_CONTEXT_DETAILS: dict[AdvisorConfidenceContext, tuple[str, str]] = {
    AdvisorConfidenceContext.VERY_CONFIDENT: (
        "Very Confident",
        "Have worked closely and observed extensively",
    ),
    AdvisorConfidenceContext.CONFIDENT: (
        "Confident",
        "Have good observation and experience with person",
    ),
    AdvisorConfidenceContext.SOMEWHAT_CONFIDENT: (
        "Somewhat Confident",
        "Have some observation but limited context",
    ),
    AdvisorConfidenceContext.LIMITED_OBSERVATION: (
        "Limited Observation",
        "Haven't observed much but confident in what I've seen",
    ),
    AdvisorConfidenceContext.UNCERTAIN: (
        "Uncertain",
        "Don't feel I have enough information to be confident",
    ),
}

INSIGHT_TYPE_DETAILS: dict[InsightType, tuple[str, str]] = {
    InsightType.PATTERN: (
        "Pattern Recognition",
        "Identifies recurring themes and patterns",
    ),
    InsightType.STRENGTH: (
        "Strength Identification",
        "Highlights natural talents and strengths",
    ),
    InsightType.VALUE: ("Values Clarification", "Clarifies core values and motivations"),
    InsightType.INTEREST: ("Interest Discovery", "Reveals genuine interests and passions"),
    InsightType.DEVELOPMENT: (
        "Development Opportunity",
        "Suggests areas for growth and learning",
    ),
    InsightType.COMPATIBILITY: (
        "Role Compatibility",
        "Assesses fit with specific career paths",
    ),
    InsightType.BARRIER: (
        "Barrier Identification",
        "Identifies potential obstacles or concerns",
    ),
    InsightType.NEXT_STEP: (
        "Next Steps",
        "Provides actionable guidance for career exploration",
    ),
}


def domain_display_name(domain: CareerDomain) -> str:
    """Return the human-readable name for a career domain."""
    return DOMAIN_DETAILS[domain][0]


# =============================================================================
# Records
# =============================================================================


class CareerResponse(RecordModel):
    """A self-answer to one career exploration question.

    Attributes:
        question_id: Question identifier (also the record id).
        question_text: The prompt the user answered.
        response: Free-text answer.
        answered_at: Submission timestamp.
        domain: Career domain the question belongs to.
        confidence_level: Optional self-rated confidence (1-5).
        tags: Optional user tags.
        is_reflection_complete: Whether the user feels they fully reflected.
    """

    question_id: str
    question_text: str
    response: str
    answered_at: datetime
    domain: CareerDomain
    confidence_level: int | None = Field(default=None, ge=1, le=5)
    tags: list[str] | None = None
    is_reflection_complete: bool | None = None


class AdvisorResponse(RecordModel):
    """An external advisor's answer about the subject.

    Attributes:
        id: Response identifier.
        invitation_id: Advisor invitation this answer belongs to.
        question_id: Question identifier.
        question_text: The prompt the advisor answered.
        response: Free-text answer.
        answered_at: Submission timestamp.
        domain: Career domain the question belongs to.
        confidence_level: Optional advisor confidence (1-5).
        observation_period: How long the advisor has observed the subject.
        specific_examples: Concrete examples the advisor observed.
        confidence_context: Advisor's stated confidence context.
        additional_context: Optional extra free-text context.
        is_anonymous: Whether the response is anonymous.
        metadata: Additional structured data.
    """

    id: str
    invitation_id: str
    question_id: str
    question_text: str
    response: str
    answered_at: datetime
    domain: CareerDomain
    confidence_level: int | None = Field(default=None, ge=1, le=5)
    observation_period: AdvisorObservationPeriod
    specific_examples: list[str] | None = None
    confidence_context: AdvisorConfidenceContext
    additional_context: str | None = None
    is_anonymous: bool = False
    # Any: free-form JSON metadata supplied by the advisor form
    metadata: dict[str, Any] | None = None


class CareerInsight(RecordModel):
    """A finding derived from one or more responses.

    Attributes:
        id: Insight identifier.
        title: Short title.
        content: Full insight text.
        domain: Career domain.
        type: Insight type.
        generated_at: Generation timestamp.
        confidence: Generator confidence (0.0-1.0).
        source_question_ids: Responses that contributed (at least one).
        key_themes: Themes identified (at least one).
        action_suggestion: Optional actionable advice.
        is_user_validated: Whether the user confirmed it resonates.
        user_rating: Optional user relevance rating (1-5).
    """

    id: str
    title: str
    content: str
    domain: CareerDomain
    type: InsightType
    generated_at: datetime
    confidence: float = Field(ge=0.0, le=1.0)
    source_question_ids: list[str] = Field(min_length=1)
    key_themes: list[str] = Field(min_length=1)
    action_suggestion: str | None = None
    is_user_validated: bool = False
    user_rating: int | None = Field(default=None, ge=1, le=5)
