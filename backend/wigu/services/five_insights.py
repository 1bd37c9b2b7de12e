"""Five Insights aggregation.

Aggregates pre-classified strength and drain records into the five
strategic categories (energising, hidden, overused, aspirational,
misaligned) and derives counts, balance and priority actions.

Category order is fixed and used everywhere a tie must be broken:
energising, hidden, overused, aspirational, misaligned.
"""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from wigu.core.validation import validate_five_insights_item
from wigu.schemas.five_insights import (
    AspirationalStrength,
    EnergisingStrength,
    FiveInsightsModel,
    HiddenStrength,
    InsightCategory,
    MisalignedEnergy,
    OverusedTalent,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

WELL_BALANCED_MIN_SCORE = 0.6
WELL_BALANCED_MAX_SPREAD = 2

MAX_PRIORITY_ACTIONS = 8

HIGH_RATING = 4
INVESTING_MIN_POTENTIAL = 3

# Career readiness: base score plus per-signal adjustments, clamped to 0.0-1.0
LEADERSHIP_READINESS_BASE = 0.3
LEADERSHIP_KEYWORDS = ("leadership", "management", "team")
LEADERSHIP_STRENGTH_BONUS = 0.2
LEADERSHIP_OVERUSE_PENALTY = 0.1

SPECIALIST_READINESS_BASE = 0.4
SPECIALIST_STRENGTH_BONUS = 0.15
SPECIALIST_INTEREST_BONUS = 0.1

CHANGE_READINESS_BASE = 0.35
CHANGE_ASPIRATION_BONUS = 0.1
CHANGE_BURNOUT_PENALTY = 0.1

ENTREPRENEURIAL_READINESS_BASE = 0.25
ENTREPRENEURIAL_KEYWORDS = ("innovation", "initiative", "independent")
ENTREPRENEURIAL_STRENGTH_BONUS = 0.2
HIGH_PRIORITY_RECOGNITION_GAP = 2


@dataclass(frozen=True)
class _ActionRule:
    """How one category contributes priority actions."""

    prefix: str
    limit: int


# Per-category rules, in output order
_ACTION_RULES: dict[InsightCategory, _ActionRule] = {
    InsightCategory.ENERGISING: _ActionRule(prefix="Leverage", limit=2),
    InsightCategory.HIDDEN: _ActionRule(prefix="Develop", limit=2),
    InsightCategory.OVERUSED: _ActionRule(prefix="Rebalance", limit=1),
    InsightCategory.ASPIRATIONAL: _ActionRule(prefix="Build", limit=2),
    InsightCategory.MISALIGNED: _ActionRule(prefix="Address", limit=1),
}

KEY_RECOMMENDATIONS: dict[InsightCategory, str] = {
    InsightCategory.ENERGISING: (
        "Leverage your top energising strengths in strategic career moves"
    ),
    InsightCategory.HIDDEN: (
        "Increase visibility of your hidden strengths through targeted showcasing"
    ),
    InsightCategory.OVERUSED: "Create balance to prevent burnout from overused talents",
    InsightCategory.ASPIRATIONAL: (
        "Invest in developing your most promising aspirational areas"
    ),
    InsightCategory.MISALIGNED: (
        "Address energy-draining activities through delegation or process improvement"
    ),
}


# =============================================================================
# Per-Item Derived Values
# =============================================================================


def overall_score(strength: EnergisingStrength) -> float:
    """Mean of skill, energy, recognition and leverageability (1.0-5.0)."""
    return (
        strength.skill_level
        + strength.energy_level
        + strength.recognition_level
        + strength.leverageability
    ) / 4


def is_signature_strength(strength: EnergisingStrength) -> bool:
    """Skill, energy and recognition all rated 4 or higher."""
    return (
        strength.skill_level >= HIGH_RATING
        and strength.energy_level >= HIGH_RATING
        and strength.recognition_level >= HIGH_RATING
    )


def recognition_gap(strength: HiddenStrength) -> int:
    """Competence minus current recognition (negative if over-recognised)."""
    return strength.competence_level - strength.current_recognition


def is_high_priority_hidden_strength(strength: HiddenStrength) -> bool:
    """Highly competent, under-recognised by 2+ and high potential impact."""
    return (
        strength.competence_level >= HIGH_RATING
        and recognition_gap(strength) >= HIGH_PRIORITY_RECOGNITION_GAP
        and strength.potential_impact >= HIGH_RATING
    )


def requires_immediate_attention(talent: OverusedTalent) -> bool:
    """High burnout risk combined with high usage frequency."""
    return talent.burnout_risk >= HIGH_RATING and talent.usage_frequency >= HIGH_RATING


def development_priority(strength: AspirationalStrength) -> float:
    """Mean of interest and development potential."""
    return (strength.interest_level + strength.development_potential) / 2


def is_worth_investing(strength: AspirationalStrength) -> bool:
    """High interest with at least moderate development potential."""
    return (
        strength.interest_level >= HIGH_RATING
        and strength.development_potential >= INVESTING_MIN_POTENTIAL
    )


def impact_priority(energy: MisalignedEnergy) -> float:
    """Mean of energy drain and frequency."""
    return (energy.energy_drain_level + energy.frequency) / 2


def requires_urgent_attention(energy: MisalignedEnergy) -> bool:
    """Draining activity that happens often."""
    return energy.energy_drain_level >= HIGH_RATING and energy.frequency >= HIGH_RATING


# =============================================================================
# Model Aggregation
# =============================================================================


def _category_lists(model: FiveInsightsModel) -> dict[InsightCategory, list]:
    return {
        InsightCategory.ENERGISING: model.energising_strengths,
        InsightCategory.HIDDEN: model.hidden_strengths,
        InsightCategory.OVERUSED: model.overused_talents,
        InsightCategory.ASPIRATIONAL: model.aspirational_strengths,
        InsightCategory.MISALIGNED: model.misaligned_energies,
    }


def get_category_counts(model: FiveInsightsModel) -> dict[InsightCategory, int]:
    """Count items per category, in category order."""
    return {category: len(items) for category, items in _category_lists(model).items()}


def total_insights(model: FiveInsightsModel) -> int:
    """Total items across all five categories."""
    return sum(get_category_counts(model).values())


def dominant_category(model: FiveInsightsModel) -> InsightCategory:
    """Return the category with the most items.

    Ties go to the earliest category, so an empty model is dominated by
    energising strengths.
    """
    counts = get_category_counts(model)
    # max() keeps the first maximal element in iteration order
    return max(counts, key=lambda category: counts[category])


def is_well_balanced(model: FiveInsightsModel) -> bool:
    """Check whether the profile is evenly spread across categories.

    Requires a balance score of at least 0.6 and no more than 2 between
    the fullest and emptiest category. A low balance score fails
    regardless of the counts.
    """
    if model.balance_score < WELL_BALANCED_MIN_SCORE:
        return False
    counts = list(get_category_counts(model).values())
    return max(counts) - min(counts) <= WELL_BALANCED_MAX_SPREAD


def _candidate_actions(model: FiveInsightsModel) -> dict[InsightCategory, list]:
    """Shortlisted items per category and the advice each contributes."""
    return {
        InsightCategory.ENERGISING: [
            s.actionable_advice
            for s in model.energising_strengths
            if s.leverageability >= HIGH_RATING
        ],
        InsightCategory.HIDDEN: [
            s.development_strategy
            for s in model.hidden_strengths
            if s.potential_impact >= HIGH_RATING
        ],
        InsightCategory.OVERUSED: [
            t.rebalancing_strategy
            for t in model.overused_talents
            if t.burnout_risk >= HIGH_RATING
        ],
        InsightCategory.ASPIRATIONAL: [
            s.development_plan
            for s in model.aspirational_strengths
            if s.development_potential >= HIGH_RATING
        ],
        InsightCategory.MISALIGNED: [
            e.mitigation_strategy
            for e in model.misaligned_energies
            if e.energy_drain_level >= HIGH_RATING
        ],
    }


def get_priority_actions(model: FiveInsightsModel) -> list[str]:
    """Build the prioritised action list for a profile.

    Each category shortlists its first high-rated items (2 energising,
    2 hidden, 1 overused, 2 aspirational, 1 misaligned); shortlisted
    items without advice text contribute nothing.

    Args:
        model: Five Insights profile.

    Returns:
        Prefixed action strings ("Leverage: ...", "Develop: ...", etc.),
        in category order, at most 8.
    """
    actions: list[str] = []
    for category, advice_list in _candidate_actions(model).items():
        rule = _ACTION_RULES[category]
        for advice in advice_list[: rule.limit]:
            if advice is not None:
                actions.append(f"{rule.prefix}: {advice}")
    return actions[:MAX_PRIORITY_ACTIONS]


# =============================================================================
# Model Construction
# =============================================================================


def calculate_balance_score(counts: list[int]) -> float:
    """Score how evenly items are spread across categories.

    Computed as 1 minus the coefficient of variation (population standard
    deviation over mean), clamped to 0.0-1.0.

    Args:
        counts: Item count per category.

    Returns:
        0.0 for no categories, 1.0 when every category is empty,
        otherwise the clamped balance.
    """
    if not counts:
        return 0.0
    total = sum(counts)
    if total == 0:
        return 1.0

    mean = total / len(counts)
    variance = sum((count - mean) ** 2 for count in counts) / len(counts)
    return max(0.0, min(1.0, 1.0 - math.sqrt(variance) / mean))


def generate_key_recommendations(
    counts: dict[InsightCategory, int],
) -> list[str]:
    """One strategic recommendation per non-empty category."""
    return [
        KEY_RECOMMENDATIONS[category]
        for category in InsightCategory
        if counts.get(category, 0) > 0
    ]


def build_five_insights_model(
    session_id: str,
    energising_strengths: list[EnergisingStrength] | None = None,
    hidden_strengths: list[HiddenStrength] | None = None,
    overused_talents: list[OverusedTalent] | None = None,
    aspirational_strengths: list[AspirationalStrength] | None = None,
    misaligned_energies: list[MisalignedEnergy] | None = None,
    executive_summary: str | None = None,
    model_id: str | None = None,
    now: datetime | None = None,
) -> FiveInsightsModel:
    """Assemble a Five Insights profile from classified items.

    Every item is validated first. Balance score and key recommendations
    are computed from the category counts.

    Args:
        session_id: Session the profile belongs to.
        energising_strengths: Energising strength items.
        hidden_strengths: Hidden strength items.
        overused_talents: Overused talent items.
        aspirational_strengths: Aspirational strength items.
        misaligned_energies: Misaligned energy items.
        executive_summary: Optional narrative summary from the generator.
        model_id: Profile id (generated if omitted).
        now: Generation timestamp (defaults to current UTC time).

    Returns:
        New FiveInsightsModel.

    Raises:
        ValidationError: If any item has out-of-range ratings or confidence.
    """
    lists = {
        InsightCategory.ENERGISING: list(energising_strengths or []),
        InsightCategory.HIDDEN: list(hidden_strengths or []),
        InsightCategory.OVERUSED: list(overused_talents or []),
        InsightCategory.ASPIRATIONAL: list(aspirational_strengths or []),
        InsightCategory.MISALIGNED: list(misaligned_energies or []),
    }
    for items in lists.values():
        for item in items:
            validate_five_insights_item(item)

    counts = {category: len(items) for category, items in lists.items()}
    balance_score = calculate_balance_score(list(counts.values()))
    generated_at = now or datetime.now(UTC)

    logger.debug(
        "Built Five Insights profile for session %s: counts=%s balance=%.2f",
        session_id,
        [counts[c] for c in InsightCategory],
        balance_score,
    )

    return FiveInsightsModel(
        id=model_id or str(uuid.uuid4()),
        session_id=session_id,
        generated_at=generated_at,
        energising_strengths=lists[InsightCategory.ENERGISING],
        hidden_strengths=lists[InsightCategory.HIDDEN],
        overused_talents=lists[InsightCategory.OVERUSED],
        aspirational_strengths=lists[InsightCategory.ASPIRATIONAL],
        misaligned_energies=lists[InsightCategory.MISALIGNED],
        executive_summary=executive_summary,
        balance_score=balance_score,
        key_recommendations=generate_key_recommendations(counts),
        last_updated=generated_at,
    )


# =============================================================================
# Career Readiness
# =============================================================================


@dataclass(frozen=True)
class CareerReadiness:
    """Readiness (0.0-1.0) for four broad career directions."""

    leadership: float
    specialist: float
    change: float
    entrepreneurial: float


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def _title_mentions(strength: EnergisingStrength, keywords: tuple[str, ...]) -> bool:
    title = strength.title.lower()
    return any(keyword in title for keyword in keywords)


def leadership_readiness(model: FiveInsightsModel) -> float:
    """Leadership-titled energisers raise readiness; burnout-prone talents lower it."""
    score = LEADERSHIP_READINESS_BASE
    score += LEADERSHIP_STRENGTH_BONUS * sum(
        1 for s in model.energising_strengths if _title_mentions(s, LEADERSHIP_KEYWORDS)
    )
    score -= LEADERSHIP_OVERUSE_PENALTY * sum(
        1 for t in model.overused_talents if requires_immediate_attention(t)
    )
    return _clamp01(score)


def specialist_readiness(model: FiveInsightsModel) -> float:
    score = SPECIALIST_READINESS_BASE
    score += SPECIALIST_STRENGTH_BONUS * len(model.energising_strengths)
    score += SPECIALIST_INTEREST_BONUS * sum(
        1 for a in model.aspirational_strengths if a.interest_level >= HIGH_RATING
    )
    return _clamp01(score)


def change_readiness(model: FiveInsightsModel) -> float:
    score = CHANGE_READINESS_BASE
    score += CHANGE_ASPIRATION_BONUS * len(model.aspirational_strengths)
    score -= CHANGE_BURNOUT_PENALTY * sum(
        1 for t in model.overused_talents if t.burnout_risk >= HIGH_RATING
    )
    return _clamp01(score)


def entrepreneurial_readiness(model: FiveInsightsModel) -> float:
    score = ENTREPRENEURIAL_READINESS_BASE
    score += ENTREPRENEURIAL_STRENGTH_BONUS * sum(
        1
        for s in model.energising_strengths
        if _title_mentions(s, ENTREPRENEURIAL_KEYWORDS)
    )
    return _clamp01(score)


def calculate_career_readiness(model: FiveInsightsModel) -> CareerReadiness:
    """Score readiness for leadership, specialist, change and entrepreneurial paths.

    Args:
        model: Five Insights profile.

    Returns:
        CareerReadiness. An empty profile scores the base values
        (0.3, 0.4, 0.35, 0.25).
    """
    return CareerReadiness(
        leadership=leadership_readiness(model),
        specialist=specialist_readiness(model),
        change=change_readiness(model),
        entrepreneurial=entrepreneurial_readiness(model),
    )
