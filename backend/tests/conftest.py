"""Pytest configuration and shared fixtures.

Record factories build valid records with sensible defaults; tests pass
only the fields they care about.
"""

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any

import pytest

from wigu.schemas.career import (
    AdvisorConfidenceContext,
    AdvisorObservationPeriod,
    AdvisorResponse,
    CareerDomain,
    CareerInsight,
    CareerResponse,
    InsightType,
)
from wigu.schemas.synthesis import SynthesisCategory, SynthesisInsight

FIXED_NOW = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_singletons() -> Iterator[None]:
    """Reset provider and record store singletons around each test.

    Yields:
        None (autouse fixture).
    """
    from wigu.providers.factory import reset_providers
    from wigu.services.record_store import reset_record_store

    reset_providers()
    reset_record_store()
    yield
    reset_providers()
    reset_record_store()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for time-dependent calculations."""
    return FIXED_NOW


@pytest.fixture
def make_response() -> Callable[..., CareerResponse]:
    """Factory for self responses."""
    counter = iter(range(1, 10_000))

    def _make(response: str = "I enjoy solving problems.", **overrides: Any) -> CareerResponse:
        fields: dict[str, Any] = {
            "question_id": f"q{next(counter)}",
            "question_text": "What work energises you?",
            "response": response,
            "answered_at": FIXED_NOW,
            "domain": CareerDomain.TECHNICAL,
        }
        fields.update(overrides)
        return CareerResponse(**fields)

    return _make


@pytest.fixture
def make_advisor_response() -> Callable[..., AdvisorResponse]:
    """Factory for advisor responses.

    Defaults to an advisor who has observed the subject for over three
    years, which puts credibility at the 1.0 ceiling.
    """
    counter = iter(range(1, 10_000))

    def _make(response: str = "Reliable under pressure.", **overrides: Any) -> AdvisorResponse:
        index = next(counter)
        fields: dict[str, Any] = {
            "id": f"adv{index}",
            "invitation_id": "inv1",
            "question_id": f"aq{index}",
            "question_text": "What are their strengths?",
            "response": response,
            "answered_at": FIXED_NOW,
            "domain": CareerDomain.SOCIAL,
            "observation_period": AdvisorObservationPeriod.MORE_THAN_THREE_YEARS,
            "confidence_context": AdvisorConfidenceContext.VERY_CONFIDENT,
        }
        fields.update(overrides)
        return AdvisorResponse(**fields)

    return _make


@pytest.fixture
def make_insight() -> Callable[..., CareerInsight]:
    """Factory for career insights."""

    def _make(**overrides: Any) -> CareerInsight:
        fields: dict[str, Any] = {
            "id": "ins1",
            "title": "Enjoys complex problems",
            "content": "You light up when problems are hard.",
            "domain": CareerDomain.ANALYTICAL,
            "type": InsightType.PATTERN,
            "generated_at": FIXED_NOW,
            "confidence": 0.5,
            "source_question_ids": ["q1"],
            "key_themes": ["challenge"],
        }
        fields.update(overrides)
        return CareerInsight(**fields)

    return _make


@pytest.fixture
def make_synthesis_insight() -> Callable[..., SynthesisInsight]:
    """Factory for synthesis insights."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> SynthesisInsight:
        fields: dict[str, Any] = {
            "id": f"si{next(counter)}",
            "title": "Confirmed Strength: Collaboration",
            "description": "Both sides mention collaboration.",
            "category": SynthesisCategory.STRENGTH,
            "strategic_importance": 3,
            "confidence": 0.5,
        }
        fields.update(overrides)
        return SynthesisInsight(**fields)

    return _make
