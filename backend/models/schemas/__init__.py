"""Pydantic contracts between the assessment provider and the credit engine."""

from models.schemas.book_metadata import BookMetadata, CaptureReadiness
from models.schemas.contextual_factors import ContextualFactors
from models.schemas.credit_assessment import CreditAssessment, CreditBreakdown
from models.schemas.visual_assessment import AnnotationSeverity, VisualAssessment

__all__ = [
    "AnnotationSeverity",
    "BookMetadata",
    "CaptureReadiness",
    "ContextualFactors",
    "CreditAssessment",
    "CreditBreakdown",
    "VisualAssessment",
]
