"""Shared test configuration, pytest markers and fixtures."""

import pytest

from models.schemas.contextual_factors import ContextualFactors
from models.schemas.visual_assessment import VisualAssessment
from services.scoring import registry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the live Gemini API (needs GEMINI_API_KEY)"
    )


def make_visual(**overrides) -> VisualAssessment:
    """A pristine, complete book unless overridden."""
    defaults = dict(
        cover_condition=9,
        spine_condition=9,
        pages_condition=8,
        binding_integrity=9,
        cleanliness=9,
        has_annotations=False,
        annotation_severity="none",
        is_complete=True,
        should_reject=False,
        justification="Clean copy with a tight binding.",
    )
    defaults.update(overrides)
    return VisualAssessment(**defaults)


@pytest.fixture
def visual_factory():
    return make_visual


@pytest.fixture
def no_context():
    return ContextualFactors()


@pytest.fixture(autouse=True)
def _reset_sources():
    """Clear the source registry before each test."""
    registry.clear()
    yield
    registry.clear()
