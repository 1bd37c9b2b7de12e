"""Response quality and advisor credibility scoring.

Heuristic proxies for "how much signal does this response carry". Scores
are used to rank and filter responses for synthesis, not as ground truth:
more detail, more confidence and more corroboration always score higher.

Self response quality (0.0-1.0):
- Substantive:              +0.3
- More than 50 words:       +0.2 (+0.1 more beyond 100)
- Confidence level:         +0.2 x confidence/5
- Reflection complete:      +0.2

Advisor credibility (0.5 floor, 0.0-1.0):
- Observation period:       +0.1 to +0.5
- Confidence level:         +0.3 x confidence/5
- Confidence context:       +0.0 to +0.2
- Examples given:           +0.1 (+0.1 more beyond 2)
- Substantive:              +0.1
"""

from wigu.schemas.career import (
    AdvisorConfidenceContext,
    AdvisorObservationPeriod,
    AdvisorResponse,
    CareerResponse,
)
from wigu.services.theme_extraction import (
    ADVISOR_THEME_KEYWORDS,
    SELF_THEME_KEYWORDS,
    ThemeMatchMode,
    extract_themes,
)

# =============================================================================
# Constants
# =============================================================================

CONFIDENCE_SCALE = 5

# Substantive thresholds (self responses)
SUBSTANTIVE_MIN_CHARS = 20
SUBSTANTIVE_MIN_WORDS = 5

# Substantive thresholds (advisor responses are held to a higher bar)
ADVISOR_SUBSTANTIVE_MIN_CHARS = 30
ADVISOR_SUBSTANTIVE_MIN_WORDS = 8

# Length bonuses
LONG_RESPONSE_WORDS = 50
VERY_LONG_RESPONSE_WORDS = 100

# Self quality weights
QUALITY_SUBSTANTIVE_BONUS = 0.3
QUALITY_LONG_BONUS = 0.2
QUALITY_VERY_LONG_BONUS = 0.1
QUALITY_CONFIDENCE_WEIGHT = 0.2
QUALITY_REFLECTION_BONUS = 0.2

# Advisor credibility
CREDIBILITY_BASE = 0.5
CREDIBILITY_CONFIDENCE_WEIGHT = 0.3
CREDIBILITY_EXAMPLES_BONUS = 0.1
CREDIBILITY_MANY_EXAMPLES_BONUS = 0.1
CREDIBILITY_MANY_EXAMPLES = 2
CREDIBILITY_SUBSTANTIVE_BONUS = 0.1

OBSERVATION_PERIOD_WEIGHTS: dict[AdvisorObservationPeriod, float] = {
    AdvisorObservationPeriod.LESS_THAN_MONTH: 0.1,
    AdvisorObservationPeriod.ONE_TO_SIX_MONTHS: 0.2,
    AdvisorObservationPeriod.SIX_MONTHS_TO_YEAR: 0.3,
    AdvisorObservationPeriod.ONE_TO_THREE_YEARS: 0.4,
    AdvisorObservationPeriod.MORE_THAN_THREE_YEARS: 0.5,
}

CONFIDENCE_CONTEXT_WEIGHTS: dict[AdvisorConfidenceContext, float] = {
    AdvisorConfidenceContext.VERY_CONFIDENT: 0.2,
    AdvisorConfidenceContext.CONFIDENT: 0.15,
    AdvisorConfidenceContext.SOMEWHAT_CONFIDENT: 0.1,
    AdvisorConfidenceContext.LIMITED_OBSERVATION: 0.05,
    AdvisorConfidenceContext.UNCERTAIN: 0.0,
}

# Advisor quality weights
ADVISOR_QUALITY_CREDIBILITY_WEIGHT = 0.3
ADVISOR_QUALITY_EXAMPLES_BONUS = 0.2
ADVISOR_QUALITY_CONTEXT_BONUS = 0.1

# Engagement labels, checked in descending order of threshold
ENGAGEMENT_LABELS: tuple[tuple[float, str], ...] = (
    (0.7, "Well-considered response"),
    (0.5, "Thoughtful response"),
    (0.3, "Basic response"),
)
HIGH_ENGAGEMENT_LABEL = "Highly engaged response"
LIMITED_ENGAGEMENT_LABEL = "Limited response"
HIGH_ENGAGEMENT_MIN_CONFIDENCE = 4


# =============================================================================
# Helpers
# =============================================================================


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def word_count(text: str) -> int:
    """Count whitespace-separated words in text."""
    return len(text.split())


def is_substantive(text: str) -> bool:
    """Check whether text says enough to carry signal.

    Args:
        text: Free-text response.

    Returns:
        True if the trimmed text is longer than 20 characters and has
        more than 5 words.
    """
    return (
        len(text.strip()) > SUBSTANTIVE_MIN_CHARS
        and word_count(text) > SUBSTANTIVE_MIN_WORDS
    )


def _length_bonus(words: int) -> float:
    bonus = 0.0
    if words > LONG_RESPONSE_WORDS:
        bonus += QUALITY_LONG_BONUS
    if words > VERY_LONG_RESPONSE_WORDS:
        bonus += QUALITY_VERY_LONG_BONUS
    return bonus


# =============================================================================
# Self Responses
# =============================================================================


def response_quality_score(response: CareerResponse) -> float:
    """Score a self response's quality.

    Args:
        response: Self response to score.

    Returns:
        Quality score clamped to 0.0-1.0.

    Example:
        A 14-word substantive answer with confidence 5 and reflection
        complete scores 0.3 + 0.2 + 0.2 = 0.7.
    """
    score = 0.0

    if is_substantive(response.response):
        score += QUALITY_SUBSTANTIVE_BONUS

    score += _length_bonus(word_count(response.response))

    if response.confidence_level is not None:
        score += (response.confidence_level / CONFIDENCE_SCALE) * QUALITY_CONFIDENCE_WEIGHT

    if response.is_reflection_complete:
        score += QUALITY_REFLECTION_BONUS

    return _clamp01(score)


def shows_high_engagement(response: CareerResponse) -> bool:
    """Substantive, confident (4+) and fully reflected."""
    return (
        is_substantive(response.response)
        and (response.confidence_level or 0) >= HIGH_ENGAGEMENT_MIN_CONFIDENCE
        and response.is_reflection_complete is True
    )


def engagement_level(response: CareerResponse) -> str:
    """Describe how engaged a self response looks.

    Args:
        response: Self response to describe.

    Returns:
        Human-readable engagement label.
    """
    if shows_high_engagement(response):
        return HIGH_ENGAGEMENT_LABEL

    score = response_quality_score(response)
    for threshold, label in ENGAGEMENT_LABELS:
        if score >= threshold:
            return label
    return LIMITED_ENGAGEMENT_LABEL


def response_themes(
    response: CareerResponse,
    mode: ThemeMatchMode | None = None,
) -> list[str]:
    """Extract self-perception themes from a self response."""
    return extract_themes(response.response, SELF_THEME_KEYWORDS, mode)


# =============================================================================
# Advisor Responses
# =============================================================================


def is_substantive_advisor_response(response: AdvisorResponse) -> bool:
    """Check whether an advisor response is detailed and evidenced.

    Advisor feedback needs more text than a self response and at least
    one concrete example to count as substantive.
    """
    text = response.response
    return (
        len(text.strip()) > ADVISOR_SUBSTANTIVE_MIN_CHARS
        and word_count(text) > ADVISOR_SUBSTANTIVE_MIN_WORDS
        and bool(response.specific_examples)
    )


def credibility_weight(response: AdvisorResponse) -> float:
    """Weight an advisor response by how credible its source is.

    Args:
        response: Advisor response to weigh.

    Returns:
        Credibility between 0.5 (floor) and 1.0.
    """
    weight = CREDIBILITY_BASE

    weight += OBSERVATION_PERIOD_WEIGHTS[response.observation_period]

    if response.confidence_level is not None:
        weight += (
            response.confidence_level / CONFIDENCE_SCALE
        ) * CREDIBILITY_CONFIDENCE_WEIGHT

    weight += CONFIDENCE_CONTEXT_WEIGHTS[response.confidence_context]

    examples = response.specific_examples or []
    if examples:
        weight += CREDIBILITY_EXAMPLES_BONUS
        if len(examples) > CREDIBILITY_MANY_EXAMPLES:
            weight += CREDIBILITY_MANY_EXAMPLES_BONUS

    if is_substantive_advisor_response(response):
        weight += CREDIBILITY_SUBSTANTIVE_BONUS

    return _clamp01(weight)


def advisor_response_quality_score(response: AdvisorResponse) -> float:
    """Score an advisor response's quality.

    Combines substance, length, credibility, examples and extra context.

    Args:
        response: Advisor response to score.

    Returns:
        Quality score clamped to 0.0-1.0.
    """
    score = 0.0

    if is_substantive_advisor_response(response):
        score += QUALITY_SUBSTANTIVE_BONUS

    score += _length_bonus(word_count(response.response))
    score += credibility_weight(response) * ADVISOR_QUALITY_CREDIBILITY_WEIGHT

    if response.specific_examples:
        score += ADVISOR_QUALITY_EXAMPLES_BONUS

    if response.additional_context and response.additional_context.strip():
        score += ADVISOR_QUALITY_CONTEXT_BONUS

    return _clamp01(score)


def advisor_response_themes(
    response: AdvisorResponse,
    mode: ThemeMatchMode | None = None,
) -> list[str]:
    """Extract observed themes from an advisor response."""
    return extract_themes(response.response, ADVISOR_THEME_KEYWORDS, mode)
