from pydantic import BaseModel, Field

from models.schemas.contextual_factors import ContextualFactors
from models.schemas.visual_assessment import AnnotationSeverity


class PhotoRequest(BaseModel):
    photo_data_uri: str = Field(..., description="Photo as data:<mimetype>;base64,<data>")


class LabeledPhoto(BaseModel):
    label: str = Field(..., max_length=50, description="Which side of the book, e.g. 'front cover'")
    data_uri: str = Field(..., description="Photo as data:<mimetype>;base64,<data>")


class AssessRequest(BaseModel):
    photos: list[LabeledPhoto] = Field(..., min_length=1)
    description: str = Field("", max_length=2000, description="Donor's description of the book's condition")
    context: ContextualFactors = ContextualFactors()


class VisualAssessmentInput(BaseModel):
    """Visual assessment submitted directly to the engine, range-checked."""
    cover_condition: int = Field(..., ge=0, le=10)
    spine_condition: int = Field(..., ge=0, le=10)
    pages_condition: int = Field(..., ge=0, le=10)
    binding_integrity: int = Field(..., ge=0, le=10)
    cleanliness: int = Field(..., ge=0, le=10)
    has_annotations: bool = False
    annotation_severity: AnnotationSeverity = "none"
    is_complete: bool = True
    should_reject: bool = False
    justification: str = Field("", max_length=5000)


class ComputeCreditsRequest(BaseModel):
    visual_assessment: VisualAssessmentInput
    context: ContextualFactors = ContextualFactors()
