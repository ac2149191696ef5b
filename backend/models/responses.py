from pydantic import BaseModel

from models.schemas.credit_assessment import CreditAssessment
from models.schemas.visual_assessment import VisualAssessment


class IntakeResponse(BaseModel):
    visual_assessment: VisualAssessment
    credit_assessment: CreditAssessment
    # True when the provider was unavailable and the neutral fallback was scored
    degraded: bool = False


class HealthResponse(BaseModel):
    status: str = "ok"
    gemini_configured: bool = False
    models: list[str] = []
