"""Credit engine output: final award with an auditable breakdown."""

from pydantic import BaseModel, ConfigDict


class CreditBreakdown(BaseModel):
    """Weighted contribution of each component, rounded to 2 dp."""
    model_config = ConfigDict(frozen=True)

    condition_credits: float = 0.0  # 0-2.5
    demand_credits: float = 0.0  # 0-0.9
    rarity_credits: float = 0.0  # 0-0.1
    bonus_credits: float = 0.0  # 0-5


class CreditAssessment(BaseModel):
    """Structured output of the credit scoring engine.

    final_credits is rounded from the unrounded sum, so it may differ
    from the sum of the rounded breakdown by up to 0.01.
    """
    model_config = ConfigDict(frozen=True)

    condition_score: float = 0.0  # 0-5
    demand_score: float = 0.0  # 0-3
    rarity_score: float = 0.0  # 0-1
    bonus_factors: float = 0.0  # 0-5
    final_credits: float = 0.0
    credit_breakdown: CreditBreakdown = CreditBreakdown()
    justification: str = ""
