"""Provider output: structured visual assessment of a donated book."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

AnnotationSeverity = Literal["none", "minor", "heavy"]

FALLBACK_FEATURE_SCORE = 5


class VisualAssessment(BaseModel):
    """Structured output of the condition-grading step.

    Feature scores are documented as 0-10 but are not range-checked here:
    the credit engine applies its thresholds literally and the intake
    service clamps provider output at the boundary.
    """
    model_config = ConfigDict(frozen=True)

    cover_condition: int
    spine_condition: int
    pages_condition: int
    binding_integrity: int
    cleanliness: int

    has_annotations: bool = False
    annotation_severity: AnnotationSeverity = "none"  # authoritative over has_annotations
    is_complete: bool = True
    should_reject: bool = False
    justification: str = ""

    @property
    def annotations_consistent(self) -> bool:
        """True when the annotation flag and severity agree."""
        return self.has_annotations == (self.annotation_severity != "none")

    @classmethod
    def neutral_fallback(cls, reason: str = "") -> "VisualAssessment":
        """Mid-range record used when the provider cannot produce one."""
        justification = "Automated condition assessment unavailable; neutral scores applied."
        if reason:
            justification = f"{justification} ({reason})"
        return cls(
            cover_condition=FALLBACK_FEATURE_SCORE,
            spine_condition=FALLBACK_FEATURE_SCORE,
            pages_condition=FALLBACK_FEATURE_SCORE,
            binding_integrity=FALLBACK_FEATURE_SCORE,
            cleanliness=FALLBACK_FEATURE_SCORE,
            has_annotations=False,
            annotation_severity="none",
            is_complete=True,
            should_reject=False,
            justification=justification,
        )
