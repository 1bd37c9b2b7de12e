"""Johari window mapping of self and advisor themes.

Places each theme in the quadrant that matches who mentions it:

- Open arena:    both the subject and advisors
- Blind spot:    advisors only
- Hidden arena:  the subject only
- Unknown arena: neither; drawn from a fixed list of exploration areas

Scores (0.0-1.0, clamped):
- Development priority: (0.7 x blind spots + 0.5 x hidden themes) / 10
- Self-awareness:       (open - 0.5 x blind spots) / (open + blind + hidden),
  0.5 when no themes were found
"""

from dataclasses import dataclass
from enum import Enum

from wigu.schemas.career import AdvisorResponse, CareerResponse
from wigu.services.synthesis import collect_advisor_themes, collect_self_themes
from wigu.services.theme_extraction import ThemeMatchMode

# =============================================================================
# Constants
# =============================================================================


class JohariQuadrant(Enum):
    """Johari window quadrants, in tie-break order."""

    OPEN_ARENA = "open_arena"
    BLIND_SPOT = "blind_spot"
    HIDDEN_ARENA = "hidden_arena"
    UNKNOWN_ARENA = "unknown_arena"


# (description, action template) per quadrant
JOHARI_QUADRANT_DETAILS: dict[JohariQuadrant, tuple[str, str]] = {
    JohariQuadrant.OPEN_ARENA: (
        "Strengths and qualities both you and others recognise",
        "Continue building on your recognised strength in {theme}",
    ),
    JohariQuadrant.BLIND_SPOT: (
        "Strengths others see that you may not fully recognise",
        "Explore feedback opportunities to understand your impact in {theme}",
    ),
    JohariQuadrant.HIDDEN_ARENA: (
        "Strengths you recognise but others may not see",
        "Create visibility around your capabilities in {theme}",
    ),
    JohariQuadrant.UNKNOWN_ARENA: (
        "Potential areas for exploration and development",
        "Consider developing or testing capabilities in {theme}",
    ),
}

EXPLORATION_AREAS = (
    "strategic_thinking",
    "innovation",
    "change_management",
    "cross_cultural_communication",
    "digital_transformation",
    "sustainability_leadership",
    "data_analysis",
    "project_management",
    "stakeholder_management",
    "conflict_resolution",
    "coaching",
    "public_speaking",
)
MAX_UNKNOWN_AREAS = 4
MAX_QUADRANT_INSIGHTS = 3

BLIND_SPOT_PRIORITY_WEIGHT = 0.7
HIDDEN_ARENA_PRIORITY_WEIGHT = 0.5
PRIORITY_DIVISOR = 10.0
BLIND_SPOT_AWARENESS_PENALTY = 0.5
NEUTRAL_SELF_AWARENESS = 0.5


# =============================================================================
# Window
# =============================================================================


@dataclass(frozen=True)
class JohariWindow:
    """Themes per quadrant plus the derived scores.

    Attributes:
        quadrants: Theme names per quadrant, in order of first mention.
        dominant_quadrant: Quadrant holding the most themes.
        development_priority: Urgency of closing perception gaps.
        self_awareness_score: How much of the picture the subject shares
            with advisors.
    """

    quadrants: dict[JohariQuadrant, list[str]]
    dominant_quadrant: JohariQuadrant
    development_priority: float
    self_awareness_score: float

    def themes(self, quadrant: JohariQuadrant) -> list[str]:
        return self.quadrants[quadrant]


def _unique_in_order(theme_lists: list[list[str]]) -> list[str]:
    return list(dict.fromkeys(t for themes in theme_lists for t in themes))


def _unknown_areas(mentioned: set[str]) -> list[str]:
    # An area counts as mentioned when any theme contains its first word
    unexplored = [
        area
        for area in EXPLORATION_AREAS
        if not any(area.split("_")[0] in theme.lower() for theme in mentioned)
    ]
    return unexplored[:MAX_UNKNOWN_AREAS]


def johari_development_priority(blind_spots: int, hidden_themes: int) -> float:
    """Weighted blind-spot and hidden-theme counts, scaled to 0.0-1.0."""
    weighted = (
        blind_spots * BLIND_SPOT_PRIORITY_WEIGHT
        + hidden_themes * HIDDEN_ARENA_PRIORITY_WEIGHT
    )
    return max(0.0, min(1.0, weighted / PRIORITY_DIVISOR))


def self_awareness_score(open_themes: int, blind_spots: int, hidden_themes: int) -> float:
    """Share of themes in the open arena, less half a point per blind spot."""
    total = open_themes + blind_spots + hidden_themes
    if total == 0:
        return NEUTRAL_SELF_AWARENESS
    awareness = (open_themes - blind_spots * BLIND_SPOT_AWARENESS_PENALTY) / total
    return max(0.0, min(1.0, awareness))


def _dominant(quadrants: dict[JohariQuadrant, list[str]]) -> JohariQuadrant:
    # Ties go to the later quadrant in JohariQuadrant order
    dominant = JohariQuadrant.OPEN_ARENA
    for quadrant in JohariQuadrant:
        if len(quadrants[quadrant]) >= len(quadrants[dominant]):
            dominant = quadrant
    return dominant


def build_johari_window(
    self_responses: list[CareerResponse],
    advisor_responses: list[AdvisorResponse],
    mode: ThemeMatchMode | None = None,
) -> JohariWindow:
    """Map self and advisor themes onto the Johari window.

    Args:
        self_responses: Subject's own responses.
        advisor_responses: Advisor responses about the subject.
        mode: Theme matching mode (defaults to configured mode).

    Returns:
        JohariWindow. Empty inputs give empty known quadrants, the first
        four exploration areas as unknown, and a neutral 0.5 self-awareness.
    """
    self_themes = _unique_in_order(collect_self_themes(self_responses, mode))
    advisor_themes = _unique_in_order(collect_advisor_themes(advisor_responses, mode))
    advisor_set = set(advisor_themes)
    self_set = set(self_themes)

    quadrants = {
        JohariQuadrant.OPEN_ARENA: [t for t in self_themes if t in advisor_set],
        JohariQuadrant.BLIND_SPOT: [t for t in advisor_themes if t not in self_set],
        JohariQuadrant.HIDDEN_ARENA: [t for t in self_themes if t not in advisor_set],
        JohariQuadrant.UNKNOWN_ARENA: _unknown_areas(self_set | advisor_set),
    }
    open_count = len(quadrants[JohariQuadrant.OPEN_ARENA])
    blind_count = len(quadrants[JohariQuadrant.BLIND_SPOT])
    hidden_count = len(quadrants[JohariQuadrant.HIDDEN_ARENA])

    return JohariWindow(
        quadrants=quadrants,
        dominant_quadrant=_dominant(quadrants),
        development_priority=johari_development_priority(blind_count, hidden_count),
        self_awareness_score=self_awareness_score(open_count, blind_count, hidden_count),
    )


def quadrant_actions(window: JohariWindow, quadrant: JohariQuadrant) -> list[str]:
    """Up to three suggested actions for a quadrant's themes."""
    template = JOHARI_QUADRANT_DETAILS[quadrant][1]
    return [template.format(theme=t) for t in window.themes(quadrant)][
        :MAX_QUADRANT_INSIGHTS
    ]


def johari_summary(window: JohariWindow) -> dict[str, object]:
    """JSON-compatible view of a window, keyed by quadrant value."""
    summary: dict[str, object] = {
        quadrant.value: {
            "themes": list(window.themes(quadrant)),
            "description": JOHARI_QUADRANT_DETAILS[quadrant][0],
            "actions": quadrant_actions(window, quadrant),
        }
        for quadrant in JohariQuadrant
    }
    summary["dominant_quadrant"] = window.dominant_quadrant.value
    summary["development_priority"] = window.development_priority
    summary["self_awareness_score"] = window.self_awareness_score
    return summary
