"""Insight quality scoring.

Quality components (0.0-1.0, clamped):
- Generator confidence:     0.4 x confidence
- Source diversity:         +0.2 if >2 sources (+0.1 more if >4)
- Theme richness:           +0.1 if >2 themes (+0.1 more if >4)
- Actionable:               +0.1 if an action suggestion is given
- User validated:           +0.2
- Rated 4+ by the user:     +0.1
"""

from wigu.schemas.career import CareerInsight

# =============================================================================
# Constants
# =============================================================================

HIGH_QUALITY_THRESHOLD = 0.7

CONFIDENCE_WEIGHT = 0.4

SOURCES_MANY = 2
SOURCES_MANY_BONUS = 0.2
SOURCES_DIVERSE = 4
SOURCES_DIVERSE_BONUS = 0.1

THEMES_MANY = 2
THEMES_MANY_BONUS = 0.1
THEMES_RICH = 4
THEMES_RICH_BONUS = 0.1

ACTION_BONUS = 0.1
VALIDATED_BONUS = 0.2
HIGH_RATING = 4
HIGH_RATING_BONUS = 0.1

# (minimum score, label), checked top-down
IMPACT_LEVELS: tuple[tuple[float, str], ...] = (
    (0.9, "Transformational insight"),
    (0.8, "High-impact insight"),
    (0.7, "Valuable insight"),
    (0.6, "Useful insight"),
    (0.5, "Moderate insight"),
)
BASIC_IMPACT_LEVEL = "Basic insight"


def insight_quality_score(insight: CareerInsight) -> float:
    """Score an insight's quality.

    Args:
        insight: Insight to score.

    Returns:
        Quality score clamped to 0.0-1.0.

    Example:
        An insight with confidence 0.5, one source, one theme, no action
        and no validation scores 0.4 x 0.5 = 0.2.
    """
    score = insight.confidence * CONFIDENCE_WEIGHT

    sources = len(insight.source_question_ids)
    if sources > SOURCES_MANY:
        score += SOURCES_MANY_BONUS
    if sources > SOURCES_DIVERSE:
        score += SOURCES_DIVERSE_BONUS

    themes = len(insight.key_themes)
    if themes > THEMES_MANY:
        score += THEMES_MANY_BONUS
    if themes > THEMES_RICH:
        score += THEMES_RICH_BONUS

    if insight.action_suggestion:
        score += ACTION_BONUS

    if insight.is_user_validated:
        score += VALIDATED_BONUS
    if insight.user_rating is not None and insight.user_rating >= HIGH_RATING:
        score += HIGH_RATING_BONUS

    return max(0.0, min(1.0, score))


def is_high_quality(insight: CareerInsight) -> bool:
    """True when the quality score reaches 0.7 (inclusive)."""
    return insight_quality_score(insight) >= HIGH_QUALITY_THRESHOLD


def primary_theme(insight: CareerInsight) -> str | None:
    """Return the insight's first (primary) theme, if any."""
    return insight.key_themes[0] if insight.key_themes else None


def impact_level(insight: CareerInsight) -> str:
    """Describe the insight's likely impact from its quality score."""
    score = insight_quality_score(insight)
    for threshold, label in IMPACT_LEVELS:
        if score >= threshold:
            return label
    return BASIC_IMPACT_LEVEL
