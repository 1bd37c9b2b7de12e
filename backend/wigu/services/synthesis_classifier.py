"""Synthesis bucket classification and orchestration.

Decides which bucket (alignment, hidden strength, overestimation,
development, repositioning) each self-vs-advisor finding belongs to, then
assembles a CareerSynthesis.

Classification is delegated to the LLM provider when
WIGU_SYNTHESIS_USE_LLM is set; provider failures fall back to the
keyword rules below. Malformed or out-of-range LLM output is rejected with
ValidationError rather than repaired.
"""

import json
import re
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import structlog

from wigu.core.config import settings
from wigu.core.errors import ValidationError
from wigu.core.prompt_sanitization import sanitize_prompt_text
from wigu.core.validation import (
    parse_record,
    validate_advisor_response,
    validate_career_response,
)
from wigu.providers import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
    factory,
)
from wigu.providers.llm.base import LLMMessage, LLMProvider, TaskType
from wigu.schemas.career import AdvisorResponse, CareerResponse
from wigu.schemas.five_insights import FiveInsightsModel
from wigu.schemas.synthesis import CareerSynthesis, SynthesisCategory, SynthesisInsight
from wigu.services.five_insights import is_worth_investing, requires_immediate_attention
from wigu.services.johari_window import build_johari_window, johari_summary
from wigu.services.response_quality import (
    advisor_response_quality_score,
    credibility_weight,
)
from wigu.services.synthesis import (
    SynthesisBuckets,
    calculate_alignment_score,
    calculate_confidence_level,
    collect_advisor_themes,
    collect_self_themes,
    validate_synthesis_buckets,
)
from wigu.services.theme_extraction import (
    ThemeMatchMode,
    count_theme_frequency,
    format_theme_title,
)

logger = structlog.get_logger()

# =============================================================================
# Rule Constants
# =============================================================================

EVIDENCE_TEXT_LIMIT = 100
SELF_EVIDENCE_LIMIT = 2
ADVISOR_EVIDENCE_LIMIT = 4

MAX_ALIGNMENT_THEMES = 5
ALIGNMENT_MIN_EVIDENCE = 2
HIGH_VALUE_THEMES = ("leadership", "strategic", "innovation", "communication", "technical")

HIDDEN_MIN_ADVISOR_FREQUENCY = 3
HIDDEN_MAX_SELF_FREQUENCY = 1
HIDDEN_MIN_CREDIBILITY = 0.6
MAX_HIDDEN_STRENGTHS = 4

OVERESTIMATED_MIN_SELF_FREQUENCY = 3
OVERESTIMATED_MAX_ADVISOR_FREQUENCY = 1
OVERESTIMATED_MIN_SELF_CONFIDENCE = 0.7
OVERESTIMATED_IMPORTANCE = 3
OVERESTIMATED_CONFIDENCE = 0.6
MAX_OVERESTIMATED_AREAS = 3
DEFAULT_SELF_CONFIDENCE_LEVEL = 3

DEVELOPMENT_KEYWORDS = ("develop", "improve", "grow", "learn", "build", "strengthen", "expand")
DEVELOPMENT_URGENCY_KEYWORDS = ("critical", "essential", "important", "priority", "focus")
DEVELOPMENT_MIN_QUALITY = 0.6
MAX_DEVELOPMENT_OPPORTUNITIES = 5

STRATEGIC_WORDS = (
    "strategic",
    "leadership",
    "expert",
    "exceptional",
    "drive",
    "transform",
    "vision",
    "innovative",
)
MAX_REPOSITIONING_THEMES = 3
REPOSITIONING_IMPORTANCE = 4
REPOSITIONING_CONFIDENCE = 0.7

MAX_STRATEGIC_RECOMMENDATIONS = 8
MIN_DOMAINS_FOR_SYNTHESIS = 2

# Responses quoted in an LLM prompt are truncated to this length
PROMPT_RESPONSE_LIMIT = 2000


# =============================================================================
# Evidence
# =============================================================================


@dataclass(frozen=True)
class _Evidence:
    """Quoted evidence lines and the responses they came from."""

    lines: list[str]
    sources: list[Any]


def _truncate(text: str, limit: int = EVIDENCE_TEXT_LIMIT) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def _find_evidence(
    theme: str,
    responses: list[Any],
    themes: list[list[str]],
    label: str,
    limit: int,
) -> _Evidence:
    """Quote up to ``limit`` responses that mention a theme."""
    lines: list[str] = []
    sources: list[Any] = []
    for response, response_themes in zip(responses, themes):
        if theme in response_themes:
            lines.append(f'{label}: "{_truncate(response.response)}"')
            sources.append(response)
            if len(lines) >= limit:
                break
    return _Evidence(lines=lines, sources=sources)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# =============================================================================
# Importance and Confidence
# =============================================================================


def _alignment_importance(theme: str, evidence_count: int) -> int:
    importance = 3
    if evidence_count >= 5:
        importance = 5
    elif evidence_count >= 3:
        importance = 4

    if any(high_value in theme.lower() for high_value in HIGH_VALUE_THEMES):
        importance = min(5, importance + 1)
    return importance


def _alignment_confidence(self_count: int, advisor_count: int) -> float:
    evidence_bonus = min(0.3, (self_count + advisor_count) * 0.05)
    balance_bonus = 0.2 if self_count and advisor_count else 0.0
    return min(1.0, 0.5 + evidence_bonus + balance_bonus)


def _hidden_strength_importance(frequency: int, credibility: float) -> int:
    if frequency >= 5 and credibility >= 0.8:
        return 5
    if frequency >= 4 and credibility >= 0.7:
        return 4
    if frequency >= 3 and credibility >= 0.6:
        return 3
    return 2


def _development_importance(response: AdvisorResponse) -> int:
    quality = advisor_response_quality_score(response)
    credibility = credibility_weight(response)

    importance = 3
    if quality >= 0.8 and credibility >= 0.8:
        importance = 5
    elif quality >= 0.6 and credibility >= 0.6:
        importance = 4

    lowered = response.response.lower()
    if any(keyword in lowered for keyword in DEVELOPMENT_URGENCY_KEYWORDS):
        importance = min(5, importance + 1)
    return importance


def _strategic_words(texts: list[str]) -> list[str]:
    return [
        word
        for text in texts
        for word in re.findall(r"[a-z]+", text.lower())
        if word in STRATEGIC_WORDS
    ]


# =============================================================================
# Rule-Based Classification
# =============================================================================


def classify_with_rules(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
    mode: ThemeMatchMode | None = None,
) -> SynthesisBuckets:
    """Classify self-vs-advisor findings with keyword rules.

    - Alignment: themes both sides mention, with 2+ quotes on each side.
    - Hidden strength: 3+ advisor mentions, at most 1 self mention, and
      credible advisors (0.6+).
    - Overestimation: 3+ self mentions, at most 1 advisor mention, and
      confident self responses (0.7+).
    - Development: good advisor responses (0.6+) using growth language.
    - Repositioning: shared themes advisors describe more strategically.

    Args:
        self_responses: Subject's own responses.
        advisor_responses: Advisor responses about the subject.
        mode: Theme matching mode (defaults to configured mode).

    Returns:
        Classified buckets.
    """
    self_themes = collect_self_themes(self_responses, mode)
    advisor_themes = collect_advisor_themes(advisor_responses, mode)
    self_counts = count_theme_frequency(self_themes)
    advisor_counts = count_theme_frequency(advisor_themes)
    common_themes = [theme for theme in self_counts if theme in advisor_counts]

    def self_evidence(theme: str) -> _Evidence:
        return _find_evidence(
            theme, self_responses, self_themes, "Self", SELF_EVIDENCE_LIMIT
        )

    def advisor_evidence(theme: str) -> _Evidence:
        return _find_evidence(
            theme, advisor_responses, advisor_themes, "Advisor", ADVISOR_EVIDENCE_LIMIT
        )

    # Alignment areas
    alignment_areas: list[SynthesisInsight] = []
    for theme in common_themes[:MAX_ALIGNMENT_THEMES]:
        own = self_evidence(theme)
        others = advisor_evidence(theme)
        if len(own.lines) < ALIGNMENT_MIN_EVIDENCE or len(others.lines) < ALIGNMENT_MIN_EVIDENCE:
            continue
        alignment_areas.append(
            SynthesisInsight(
                id=f"alignment_{theme}",
                title=f"Confirmed Strength: {format_theme_title(theme)}",
                description=(
                    "Both your self-assessment and advisor feedback consistently "
                    f"highlight your capability in {theme}. This represents a "
                    "reliable strength for career positioning."
                ),
                category=SynthesisCategory.STRENGTH,
                supporting_evidence=own.lines[:2] + others.lines[:2],
                strategic_importance=_alignment_importance(
                    theme, len(own.lines) + len(others.lines)
                ),
                actionable_advice=(
                    "Leverage this confirmed strength by seeking opportunities that "
                    f"require {theme} capabilities and highlighting it in "
                    "professional communications."
                ),
                related_themes=[theme],
                confidence=_alignment_confidence(len(own.lines), len(others.lines)),
            )
        )

    # Hidden strengths
    hidden_strengths: list[SynthesisInsight] = []
    for theme, frequency in advisor_counts.items():
        if (
            frequency < HIDDEN_MIN_ADVISOR_FREQUENCY
            or self_counts[theme] > HIDDEN_MAX_SELF_FREQUENCY
        ):
            continue
        others = advisor_evidence(theme)
        credibility = _mean([credibility_weight(r) for r in others.sources])
        if credibility < HIDDEN_MIN_CREDIBILITY:
            continue
        hidden_strengths.append(
            SynthesisInsight(
                id=f"hidden_{theme}",
                title=f"Hidden Strength: {format_theme_title(theme)}",
                description=(
                    "Your advisors consistently recognise your capability in "
                    f"{theme}, though you may not fully appreciate this strength "
                    "yourself. This represents significant untapped potential."
                ),
                category=SynthesisCategory.BLINDSPOT,
                supporting_evidence=others.lines[:3],
                strategic_importance=_hidden_strength_importance(frequency, credibility),
                actionable_advice=(
                    "Explore this strength through feedback conversations and look "
                    f"for opportunities to develop and showcase {theme} capabilities."
                ),
                related_themes=[theme],
                confidence=credibility,
            )
        )

    # Overestimated areas
    overestimated_areas: list[SynthesisInsight] = []
    for theme, frequency in self_counts.items():
        if (
            frequency < OVERESTIMATED_MIN_SELF_FREQUENCY
            or advisor_counts[theme] > OVERESTIMATED_MAX_ADVISOR_FREQUENCY
        ):
            continue
        own = self_evidence(theme)
        self_confidence = _mean(
            [
                (r.confidence_level or DEFAULT_SELF_CONFIDENCE_LEVEL) / 5
                for r in own.sources
            ]
        )
        if self_confidence < OVERESTIMATED_MIN_SELF_CONFIDENCE:
            continue
        overestimated_areas.append(
            SynthesisInsight(
                id=f"overestimated_{theme}",
                title=f"Validation Opportunity: {format_theme_title(theme)}",
                description=(
                    f"You frequently mention {theme} as a strength, but it appears "
                    "less prominently in advisor feedback. This may indicate an "
                    "opportunity to gather more external validation or better "
                    "demonstrate this capability."
                ),
                category=SynthesisCategory.OVERESTIMATION,
                supporting_evidence=own.lines[:2],
                strategic_importance=OVERESTIMATED_IMPORTANCE,
                actionable_advice=(
                    f"Seek specific feedback about your {theme} capabilities and look "
                    "for opportunities to demonstrate this strength more visibly."
                ),
                related_themes=[theme],
                confidence=OVERESTIMATED_CONFIDENCE,
            )
        )

    # Development opportunities
    development: list[SynthesisInsight] = []
    seen_titles: set[str] = set()
    for response, themes in zip(advisor_responses, advisor_themes):
        lowered = response.response.lower()
        if not any(keyword in lowered for keyword in DEVELOPMENT_KEYWORDS):
            continue
        if advisor_response_quality_score(response) < DEVELOPMENT_MIN_QUALITY:
            continue
        for theme in themes:
            title = f"Development Opportunity: {format_theme_title(theme)}"
            normalized = re.sub(r"[^a-z0-9]", "", title.lower())
            if normalized in seen_titles:
                continue
            seen_titles.add(normalized)
            development.append(
                SynthesisInsight(
                    id=f"development_{theme}",
                    title=title,
                    description=(
                        f"Advisor feedback suggests growth potential in {theme}. "
                        "This represents a strategic development opportunity aligned "
                        "with external perceptions of your potential."
                    ),
                    category=SynthesisCategory.DEVELOPMENT,
                    supporting_evidence=[response.response],
                    strategic_importance=_development_importance(response),
                    actionable_advice=(
                        f"Create a specific development plan for {theme}, including "
                        "learning resources, practice opportunities, and progress "
                        "measures."
                    ),
                    related_themes=[theme],
                    confidence=credibility_weight(response),
                )
            )
    # sorted() is stable, so equal importance keeps discovery order
    development = sorted(development, key=lambda i: i.strategic_importance, reverse=True)

    # Repositioning potential
    repositioning: list[SynthesisInsight] = []
    for theme in common_themes[:MAX_REPOSITIONING_THEMES]:
        own_words = _strategic_words(
            [r.response for r, ts in zip(self_responses, self_themes) if theme in ts]
        )
        advisor_words = _strategic_words(
            [r.response for r, ts in zip(advisor_responses, advisor_themes) if theme in ts]
        )
        if not advisor_words or len(advisor_words) <= len(own_words):
            continue
        repositioning.append(
            SynthesisInsight(
                id=f"positioning_{theme}",
                title=f"Positioning Enhancement: {format_theme_title(theme)}",
                description=(
                    f"Advisors describe your {theme} capabilities using more "
                    "strategic language than you do. This suggests an opportunity "
                    "to reframe how you communicate this strength."
                ),
                category=SynthesisCategory.POSITIONING,
                supporting_evidence=advisor_evidence(theme).lines[:2],
                strategic_importance=REPOSITIONING_IMPORTANCE,
                actionable_advice=(
                    "Adopt more strategic language when describing your "
                    f'{theme} capabilities. Use terms like "{advisor_words[0]}" to '
                    "better position your impact."
                ),
                related_themes=[theme],
                confidence=REPOSITIONING_CONFIDENCE,
            )
        )

    return SynthesisBuckets(
        alignment_areas=alignment_areas,
        hidden_strengths=hidden_strengths[:MAX_HIDDEN_STRENGTHS],
        overestimated_areas=overestimated_areas[:MAX_OVERESTIMATED_AREAS],
        development_opportunities=development[:MAX_DEVELOPMENT_OPPORTUNITIES],
        repositioning_potential=repositioning,
    )


# =============================================================================
# LLM Classification
# =============================================================================

_BUCKET_CATEGORIES: dict[str, SynthesisCategory] = {
    "alignment_areas": SynthesisCategory.STRENGTH,
    "hidden_strengths": SynthesisCategory.BLINDSPOT,
    "overestimated_areas": SynthesisCategory.OVERESTIMATION,
    "development_opportunities": SynthesisCategory.DEVELOPMENT,
    "repositioning_potential": SynthesisCategory.POSITIONING,
}

_SYSTEM_PROMPT = (
    "You are a career coach comparing how a person sees themselves with how "
    "their advisors see them. Respond only with a JSON object."
)


def _build_classification_prompt(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
) -> str:
    """Build the bucket classification prompt.

    Response text is sanitised and wrapped in tags so it is treated as data.
    """
    self_blocks = "\n".join(
        f'<self_response id="{r.question_id}" domain="{r.domain.value}">'
        f"{sanitize_prompt_text(r.response[:PROMPT_RESPONSE_LIMIT])}</self_response>"
        for r in self_responses
    )
    advisor_blocks = "\n".join(
        f'<advisor_response id="{r.id}" domain="{r.domain.value}" '
        f'credibility="{credibility_weight(r):.2f}">'
        f"{sanitize_prompt_text(r.response[:PROMPT_RESPONSE_LIMIT])}</advisor_response>"
        for r in advisor_responses
    )
    return f"""Compare the self-assessment with the advisor feedback below.

Return a JSON object with exactly these keys, each an array of insights:
alignment_areas, hidden_strengths, overestimated_areas,
development_opportunities, repositioning_potential.

Each insight is an object with:
- id: string
- title: string
- description: string
- supporting_evidence: array of quoted strings
- strategic_importance: integer 1-5
- actionable_advice: string or null
- related_themes: array of strings
- confidence: number 0.0-1.0

Self-assessment:
{self_blocks}

Advisor feedback:
{advisor_blocks}

Return ONLY the JSON object, no explanation."""


def _strip_code_fences(content: str) -> str:
    if "```json" in content:
        return content.split("```json")[1].split("```")[0]
    if "```" in content:
        return content.split("```")[1].split("```")[0]
    return content


def parse_classification_response(content: str) -> SynthesisBuckets:
    """Parse and validate an LLM bucket classification reply.

    Args:
        content: Raw reply, optionally wrapped in a markdown code block.

    Returns:
        Validated buckets. Missing buckets are empty.

    Raises:
        ValidationError: If the reply is not a JSON object, a bucket is not
            a list, or any insight is incomplete or out of range.
    """
    try:
        data = json.loads(_strip_code_fences(content).strip())
    except (json.JSONDecodeError, IndexError) as e:
        raise ValidationError("Synthesis classification returned malformed JSON") from e

    if not isinstance(data, dict):
        raise ValidationError("Synthesis classification must be a JSON object")

    buckets: dict[str, list[SynthesisInsight]] = {}
    for bucket, category in _BUCKET_CATEGORIES.items():
        items = data.get(bucket) or []
        if not isinstance(items, list):
            raise ValidationError(
                f"Synthesis bucket '{bucket}' must be a list",
                details=[{"field": bucket, "message": "must be a list"}],
            )
        insights = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValidationError(
                    f"Synthesis bucket '{bucket}' item {index} must be an object"
                )
            payload = {"id": f"{bucket}_{index}", "category": category.value, **item}
            insights.append(parse_record(SynthesisInsight, payload))
        buckets[bucket] = insights

    result = SynthesisBuckets(**buckets, classified_by_llm=True)
    validate_synthesis_buckets(result)
    return result


async def classify_with_llm(
    provider: LLMProvider,
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
) -> SynthesisBuckets:
    """Delegate bucket classification to an LLM provider.

    Raises:
        ProviderError: If the provider call fails.
        ValidationError: If the reply is malformed or out of range.
    """
    response = await provider.complete(
        messages=[
            LLMMessage(role="system", content=_SYSTEM_PROMPT),
            LLMMessage(
                role="user",
                content=_build_classification_prompt(self_responses, advisor_responses),
            ),
        ],
        task=TaskType.SYNTHESIS_CLASSIFICATION,
        json_mode=True,
    )
    logger.info(
        "synthesis_llm_classification_complete",
        provider=provider.provider_name,
        model=response.model,
        input_tokens=response.input_tokens,
        output_tokens=response.output_tokens,
        finish_reason=response.finish_reason,
        latency_ms=response.latency_ms,
    )
    return parse_classification_response(response.content or "")


async def classify(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
    provider: LLMProvider | None = None,
    use_llm: bool | None = None,
) -> SynthesisBuckets:
    """Classify findings, preferring the LLM when enabled.

    Args:
        self_responses: Subject's own responses.
        advisor_responses: Advisor responses about the subject.
        provider: LLM provider (defaults to the configured singleton).
        use_llm: Override for WIGU_SYNTHESIS_USE_LLM.

    Returns:
        Classified buckets. ``classified_by_llm`` is False when the rules
        produced them, including after a provider failure.

    Raises:
        ValidationError: If the LLM reply is malformed or out of range.
    """
    if use_llm is None:
        use_llm = settings.synthesis_use_llm

    if use_llm:
        llm = provider or factory.get_llm_provider()
        try:
            return await classify_with_llm(llm, self_responses, advisor_responses)
        except AuthenticationError as e:
            logger.error(
                "synthesis_llm_classification_failed",
                provider=llm.provider_name,
                error=str(e),
                retryable=False,
            )
        except RateLimitError as e:
            logger.warning(
                "synthesis_llm_classification_failed",
                provider=llm.provider_name,
                error=str(e),
                retryable=True,
                retry_after_seconds=e.retry_after_seconds,
            )
        except ProviderError as e:
            logger.warning(
                "synthesis_llm_classification_failed",
                provider=llm.provider_name,
                error=str(e),
                retryable=True,
            )

    return classify_with_rules(self_responses, advisor_responses)


# =============================================================================
# Narrative
# =============================================================================


def build_executive_summary(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
    alignment_score: float,
    five_insights: FiveInsightsModel | None = None,
) -> str:
    """Write the synthesis executive summary."""
    if alignment_score >= 0.8:
        opening = (
            "Your self-perception strongly aligns with external feedback, indicating "
            "excellent self-awareness and a solid foundation for strategic career "
            "decisions."
        )
    elif alignment_score >= 0.6:
        opening = (
            "Your self-perception shows good alignment with external feedback, with "
            "some valuable differences that represent growth opportunities."
        )
    else:
        opening = (
            "Your self-perception and external feedback reveal significant "
            "differences, highlighting substantial opportunities for development "
            "and better positioning."
        )

    highlights: list[str] = []
    if five_insights is not None:
        if five_insights.energising_strengths:
            top = five_insights.energising_strengths[0]
            highlights.append(
                f"Your strongest energising capability is {top.title.lower()}, where "
                "high skill meets high energy and strong external recognition."
            )
        if five_insights.hidden_strengths:
            top = five_insights.hidden_strengths[0]
            highlights.append(
                f"A key opportunity lies in better leveraging your {top.title.lower()}, "
                "which others recognise more than you might appreciate."
            )
        if five_insights.overused_talents and requires_immediate_attention(
            five_insights.overused_talents[0]
        ):
            top_overused = five_insights.overused_talents[0]
            highlights.append(
                f"Attention is needed to rebalance your {top_overused.title.lower()} to "
                "prevent burnout while maintaining effectiveness."
            )

    total = len(self_responses) + len(advisor_responses)
    closing = (
        f"This analysis synthesises {total} total responses "
        f"({len(self_responses)} self-assessment, {len(advisor_responses)} advisor "
        "feedback) to create a comprehensive view of your career profile suited for "
        "the Australian professional context."
    )

    sections = [opening]
    if highlights:
        sections.append("\n".join(highlights))
    sections.append(closing)
    return "\n\n".join(sections)


def build_strategic_recommendations(
    buckets: SynthesisBuckets,
    five_insights: FiveInsightsModel | None = None,
) -> list[str]:
    """Derive up to 8 strategic recommendations."""
    recommendations: list[str] = []

    if five_insights is not None:
        if five_insights.energising_strengths:
            top = five_insights.energising_strengths[0]
            recommendations.append(
                f"Prioritise roles and projects that leverage your {top.title.lower()} "
                "- this is where you'll achieve peak performance with sustained energy."
            )
        if five_insights.hidden_strengths:
            top_hidden = five_insights.hidden_strengths[0]
            recommendations.append(
                f"Increase visibility of your {top_hidden.title.lower()} through "
                "strategic projects, presentations, or mentoring opportunities."
            )
        urgent = [t for t in five_insights.overused_talents if requires_immediate_attention(t)]
        if urgent:
            recommendations.append(
                f"Implement boundaries around {urgent[0].title.lower()} to prevent "
                "burnout - delegate, automate, or redesign how you apply this strength."
            )
        worthwhile = [s for s in five_insights.aspirational_strengths if is_worth_investing(s)]
        if worthwhile:
            recommendations.append(
                f"Invest in developing {worthwhile[0].title.lower()} through structured "
                "learning and practice opportunities over the next "
                f"{worthwhile[0].timeframe} months."
            )

    if buckets.hidden_strengths:
        recommendations.append(
            "Schedule regular feedback conversations to explore blind spot areas and "
            "increase self-awareness."
        )
    if buckets.overestimated_areas:
        recommendations.append(
            "Create more opportunities to showcase your capabilities that others "
            "aren't yet aware of."
        )

    recommendations.append(
        "Leverage Australia's collaborative workplace culture by seeking mentoring "
        "relationships and cross-functional project opportunities."
    )
    if len(recommendations) < 3:
        recommendations.append(
            "Focus on building a strong professional network within the Australian "
            "market to amplify your career opportunities."
        )
        recommendations.append(
            "Consider how your unique combination of strengths can contribute to "
            "Australia's evolving workplace needs."
        )

    return recommendations[:MAX_STRATEGIC_RECOMMENDATIONS]


# =============================================================================
# Orchestration
# =============================================================================


def _validate_inputs(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
) -> None:
    details = []
    if not self_responses:
        details.append(
            {"field": "self_responses", "message": "Self responses cannot be empty"}
        )
    if not advisor_responses:
        details.append(
            {"field": "advisor_responses", "message": "Advisor responses cannot be empty"}
        )
    if details:
        raise ValidationError(
            "; ".join(d["message"] for d in details), details=details
        )

    for response in self_responses:
        validate_career_response(response)
    for advisor_response in advisor_responses:
        validate_advisor_response(advisor_response)


async def generate_synthesis(
    session_id: str,
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
    five_insights: FiveInsightsModel | None = None,
    provider: LLMProvider | None = None,
    use_llm: bool | None = None,
    synthesis_id: str | None = None,
    now: datetime | None = None,
) -> CareerSynthesis:
    """Compare self and advisor perspectives into a CareerSynthesis.

    Args:
        session_id: Session the synthesis belongs to.
        self_responses: Subject's own responses (at least one).
        advisor_responses: Advisor responses (at least one).
        five_insights: Optional Five Insights profile used for narrative.
        provider: LLM provider for classification.
        use_llm: Override for WIGU_SYNTHESIS_USE_LLM.
        synthesis_id: Synthesis id (generated if omitted).
        now: Generation timestamp (defaults to current UTC time).

    Returns:
        New CareerSynthesis.

    Raises:
        ValidationError: If either side is empty, a response is invalid, or
            the classification output is invalid.
    """
    _validate_inputs(self_responses, advisor_responses)

    domains = {r.domain for r in self_responses}
    if len(domains) < MIN_DOMAINS_FOR_SYNTHESIS:
        logger.warning(
            "synthesis_limited_domains",
            session_id=session_id,
            domain_count=len(domains),
        )

    buckets = await classify(self_responses, advisor_responses, provider, use_llm)
    alignment_score = calculate_alignment_score(self_responses, advisor_responses)
    confidence_level = calculate_confidence_level(self_responses, advisor_responses)
    generated_at = now or datetime.now(UTC)

    synthesis = CareerSynthesis(
        id=synthesis_id or str(uuid.uuid4()),
        session_id=session_id,
        generated_at=generated_at,
        self_response_ids=[r.question_id for r in self_responses],
        advisor_response_ids=[r.id for r in advisor_responses],
        alignment_areas=buckets.alignment_areas,
        hidden_strengths=buckets.hidden_strengths,
        overestimated_areas=buckets.overestimated_areas,
        development_opportunities=buckets.development_opportunities,
        repositioning_potential=buckets.repositioning_potential,
        executive_summary=build_executive_summary(
            self_responses, advisor_responses, alignment_score, five_insights
        ),
        strategic_recommendations=build_strategic_recommendations(
            buckets, five_insights
        ),
        alignment_score=alignment_score,
        confidence_level=confidence_level,
        analysis_metadata={
            "self_response_count": len(self_responses),
            "advisor_response_count": len(advisor_responses),
            "theme_match_mode": settings.theme_match_mode,
            "classified_by_llm": buckets.classified_by_llm,
            "johari_window": johari_summary(
                build_johari_window(self_responses, advisor_responses)
            ),
        },
        last_updated=generated_at,
    )

    logger.info(
        "synthesis_generated",
        session_id=session_id,
        total_insights=len(buckets.all()),
        alignment_score=round(alignment_score, 3),
        confidence_level=confidence_level.value,
        classified_by_llm=buckets.classified_by_llm,
    )
    return synthesis
