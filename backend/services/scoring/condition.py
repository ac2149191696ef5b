"""Condition score: five visual features collapsed into a 0-5 score.

Piecewise thresholds per feature, added around a base of 3:

    cover   >=9: +1   7-8: 0   <7: -1
    spine   >=9: +1   7-8: 0   <7: -1
    pages   >=8: +1            <8: -1
    annotations  none: 0  minor: -0.5  heavy: -1
    completeness +1 (always; incomplete books never reach this step)

binding_integrity and cleanliness are collected by the provider but are
not part of the formula.
"""

from models.schemas.visual_assessment import VisualAssessment
from services.scoring.base import clamp

BASE_SCORE = 3.0
COMPLETENESS_CREDIT = 1.0
MAX_CONDITION_SCORE = 5.0

ANNOTATION_PENALTIES = {
    "none": 0.0,
    "minor": -0.5,
    "heavy": -1.0,
}


def _cover_spine_adjustment(score: int) -> float:
    if score >= 9:
        return 1.0
    if score >= 7:
        return 0.0
    return -1.0


def _pages_adjustment(score: int) -> float:
    return 1.0 if score >= 8 else -1.0


def calculate_condition_score(assessment: VisualAssessment) -> float:
    """Return the condition score in [0, 5]."""
    raw = (
        BASE_SCORE
        + _cover_spine_adjustment(assessment.cover_condition)
        + _cover_spine_adjustment(assessment.spine_condition)
        + _pages_adjustment(assessment.pages_condition)
        + ANNOTATION_PENALTIES.get(assessment.annotation_severity, 0.0)
        + COMPLETENESS_CREDIT
    )
    return clamp(raw, 0.0, MAX_CONDITION_SCORE)
