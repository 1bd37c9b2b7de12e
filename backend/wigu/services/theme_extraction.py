"""Keyword-based theme extraction for free-text responses.

A theme matches when any of its trigger keywords occurs in the text,
case-insensitively. Two matching modes are supported:

- SUBSTRING: trigger may appear anywhere, including inside a longer word
  ("art" matches "cartography"). This is the product's historical
  behaviour and the default.
- WORD_PREFIX: trigger must start at a word boundary ("lead" still
  matches "leadership", but "art" no longer matches "cart").

Extraction is pure and deterministic: themes come back in dictionary
order, each at most once.
"""

import re
from collections import Counter
from collections.abc import Iterable, Mapping
from enum import Enum
from functools import lru_cache

from wigu.core.config import settings


class ThemeMatchMode(Enum):
    """How trigger keywords are matched against text."""

    SUBSTRING = "substring"
    WORD_PREFIX = "word_prefix"


# =============================================================================
# Keyword Dictionaries
# =============================================================================

# Themes a person tends to express about themselves.
SELF_THEME_KEYWORDS: dict[str, tuple[str, ...]] = {
    "passion": ("passion", "love", "enjoy", "excited", "enthusiastic", "keen", "motivated"),
    "growth": ("learn", "grow", "develop", "improve", "progress", "upskill", "advance"),
    "challenge": ("challenge", "difficult", "complex", "problem", "solve", "tackle"),
    "collaboration": (
        "team",
        "collaborate",
        "together",
        "group",
        "partnership",
        "teamwork",
    ),
    "leadership": ("lead", "manage", "direct", "guide", "mentor", "coordinate"),
    "creativity": (
        "creative",
        "innovative",
        "design",
        "artistic",
        "imagination",
        "original",
    ),
    "impact": ("impact", "difference", "change", "influence", "contribute", "meaningful"),
    "stability": ("stable", "secure", "consistent", "reliable", "steady", "dependable"),
    "flexibility": ("flexible", "adaptable", "varied", "diverse", "change", "versatile"),
    "recognition": (
        "recognition",
        "achievement",
        "success",
        "accomplishment",
        "reward",
        "acknowledgement",
    ),
    "autonomy": ("independent", "autonomy", "freedom", "self-directed", "control"),
    "helping": ("help", "support", "assist", "service", "care", "contribute"),
    "australian_context": (
        "aussie",
        "australia",
        "local",
        "community",
        "multicultural",
        "fair dinkum",
    ),
}

# Themes advisors tend to observe in the person.
ADVISOR_THEME_KEYWORDS: dict[str, tuple[str, ...]] = {
    "leadership": ("lead", "leadership", "manage", "guide", "direct", "mentor"),
    "technical": ("technical", "expert", "skilled", "proficient", "competent"),
    "communication": ("communicate", "explain", "present", "articulate", "discuss"),
    "collaboration": (
        "team",
        "collaborate",
        "work together",
        "partnership",
        "cooperative",
    ),
    "problem_solving": ("solve", "problem", "analyse", "think", "solution", "resolve"),
    "reliability": ("reliable", "dependable", "consistent", "trustworthy", "punctual"),
    "creativity": ("creative", "innovative", "original", "inventive", "imaginative"),
    "initiative": ("proactive", "initiative", "self-starter", "motivated", "driven"),
    "adaptability": ("adaptable", "flexible", "adjust", "change", "versatile"),
    "attention_to_detail": ("detail", "thorough", "meticulous", "careful", "precise"),
}


# =============================================================================
# Extraction
# =============================================================================


@lru_cache(maxsize=512)
def _word_prefix_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(r"\b" + re.escape(keyword))


def _keyword_matches(keyword: str, lowered: str, mode: ThemeMatchMode) -> bool:
    if mode is ThemeMatchMode.WORD_PREFIX:
        return _word_prefix_pattern(keyword).search(lowered) is not None
    return keyword in lowered


def default_match_mode() -> ThemeMatchMode:
    """Return the match mode configured via WIGU_THEME_MATCH_MODE."""
    return ThemeMatchMode(settings.theme_match_mode)


def extract_themes(
    text: str,
    keywords: Mapping[str, Iterable[str]],
    mode: ThemeMatchMode | None = None,
) -> list[str]:
    """Return the themes whose trigger keywords occur in the text.

    Args:
        text: Free text to scan (may be empty).
        keywords: Mapping of theme name to trigger keywords.
        mode: Matching mode. Defaults to the configured mode.

    Returns:
        Matched theme names in dictionary order, without duplicates.

    Example:
        >>> extract_themes("I love leading teams", SELF_THEME_KEYWORDS)
        ['passion', 'collaboration', 'leadership']
    """
    if not text:
        return []

    if mode is None:
        mode = default_match_mode()

    lowered = text.lower()
    return [
        theme
        for theme, triggers in keywords.items()
        if any(_keyword_matches(trigger.lower(), lowered, mode) for trigger in triggers)
    ]


def count_theme_frequency(theme_lists: Iterable[Iterable[str]]) -> Counter[str]:
    """Count in how many responses each theme appears.

    Args:
        theme_lists: One theme list per response.

    Returns:
        Counter of theme name to number of responses mentioning it, in
        first-seen order.
    """
    counts: Counter[str] = Counter()
    for themes in theme_lists:
        counts.update(dict.fromkeys(themes, 1))
    return counts


def format_theme_title(theme: str) -> str:
    """Turn a theme key into a display title.

    Example:
        >>> format_theme_title("problem_solving")
        'Problem Solving'
    """
    return " ".join(word.capitalize() for word in theme.split("_") if word)
