"""Credit scoring engine: visual assessment + context -> credit award.

Flow:
    VisualAssessment
      ├─ rejected or incomplete?  → zero award, rejection note appended
      └─ otherwise
           ├─ calculate_condition_score(visual)            → 0-5
           ├─ calculate_demand_score(title, author)        → 0-3
           ├─ calculate_rarity_score(title, author)        → 0-1
           ├─ calculate_bonus_factors(context)             → 0-5
           └─ weighted sum → CreditAssessment + breakdown text

Pure and synchronous: no I/O, no shared mutable state.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from models.schemas.contextual_factors import ContextualFactors
from models.schemas.credit_assessment import CreditAssessment, CreditBreakdown
from models.schemas.visual_assessment import VisualAssessment
from services.scoring.base import DemandSource, RaritySource
from services.scoring.bonus import MAX_BONUS, calculate_bonus_factors
from services.scoring.condition import MAX_CONDITION_SCORE, calculate_condition_score
from services.scoring.demand import MAX_DEMAND_SCORE, calculate_demand_score
from services.scoring.rarity import MAX_RARITY_SCORE, calculate_rarity_score

logger = logging.getLogger(__name__)

# Component weights (bonus passes through unweighted)
W_CONDITION = 0.5
W_DEMAND = 0.3
W_RARITY = 0.1

REJECTION_NOTE = " - Book rejected due to severe damage or missing pages."

_CENT = Decimal("0.01")


def round_credits(value: float) -> float:
    """Round to 2 dp, halves away from zero."""
    return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def is_rejected(visual: VisualAssessment) -> bool:
    return visual.should_reject or not visual.is_complete


def _rejected_assessment(visual: VisualAssessment) -> CreditAssessment:
    return CreditAssessment(
        condition_score=0.0,
        demand_score=0.0,
        rarity_score=0.0,
        bonus_factors=0.0,
        final_credits=0.0,
        credit_breakdown=CreditBreakdown(),
        justification=visual.justification + REJECTION_NOTE,
    )


def format_breakdown(
    condition_score: float,
    demand_score: float,
    rarity_score: float,
    bonus_factors: float,
    breakdown: CreditBreakdown,
    final_credits: float,
) -> str:
    """Render the human-readable breakdown appended to the justification."""
    lines = [
        "Credit breakdown:",
        f"- Condition: {condition_score:g}/{MAX_CONDITION_SCORE:g} x {W_CONDITION:g} "
        f"= {breakdown.condition_credits:.2f} credits",
        f"- Demand: {demand_score:g}/{MAX_DEMAND_SCORE:g} x {W_DEMAND:g} "
        f"= {breakdown.demand_credits:.2f} credits",
        f"- Rarity: {rarity_score:g}/{MAX_RARITY_SCORE:g} x {W_RARITY:g} "
        f"= {breakdown.rarity_credits:.2f} credits",
        f"- Bonus: {bonus_factors:g}/{MAX_BONUS:g} "
        f"= {breakdown.bonus_credits:.2f} credits",
        f"Total: {final_credits:.2f} credits",
    ]
    return "\n".join(lines)


def compute_credit_assessment(
    visual: VisualAssessment,
    context: ContextualFactors,
    *,
    demand_source: DemandSource | None = None,
    rarity_source: RaritySource | None = None,
) -> CreditAssessment:
    """Score a visual assessment and return the credit award."""
    if is_rejected(visual):
        logger.debug("Rejection gate hit (should_reject=%s, is_complete=%s)",
                     visual.should_reject, visual.is_complete)
        return _rejected_assessment(visual)

    condition_score = calculate_condition_score(visual)
    demand_score = calculate_demand_score(context.book_title, context.book_author, demand_source)
    rarity_score = calculate_rarity_score(context.book_title, context.book_author, rarity_source)
    bonus_factors = calculate_bonus_factors(context)

    condition_credits = condition_score * W_CONDITION
    demand_credits = demand_score * W_DEMAND
    rarity_credits = rarity_score * W_RARITY
    bonus_credits = bonus_factors
    total = condition_credits + demand_credits + rarity_credits + bonus_credits

    breakdown = CreditBreakdown(
        condition_credits=round_credits(condition_credits),
        demand_credits=round_credits(demand_credits),
        rarity_credits=round_credits(rarity_credits),
        bonus_credits=round_credits(bonus_credits),
    )
    final_credits = round_credits(total)

    summary = format_breakdown(
        condition_score, demand_score, rarity_score, bonus_factors, breakdown, final_credits
    )
    justification = f"{visual.justification}\n\n{summary}" if visual.justification else summary

    return CreditAssessment(
        condition_score=condition_score,
        demand_score=demand_score,
        rarity_score=rarity_score,
        bonus_factors=bonus_factors,
        final_credits=final_credits,
        credit_breakdown=breakdown,
        justification=justification,
    )
