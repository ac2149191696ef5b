"""Bonus factors: independent promotional bonuses, summed and capped at 5."""

from dataclasses import dataclass

from models.schemas.contextual_factors import ContextualFactors
from services.scoring.base import clamp

MAX_BONUS = 5.0


@dataclass(frozen=True)
class BonusWeights:
    first_time_donor: float = 1.0
    theme_event: float = 0.5
    new_book: float = 2.0
    craft_match: float = 1.0


DEFAULT_BONUS_WEIGHTS = BonusWeights()


def calculate_bonus_factors(
    factors: ContextualFactors,
    weights: BonusWeights = DEFAULT_BONUS_WEIGHTS,
) -> float:
    """Return the capped bonus total in [0, 5].

    Once the cap is hit the individual contributions can no longer be
    recovered from the total.
    """
    total = 0.0
    if factors.is_first_time_donor:
        total += weights.first_time_donor
    if factors.is_theme_event:
        total += weights.theme_event
    if factors.is_new_book:
        total += weights.new_book
    if factors.has_craft_match:
        total += weights.craft_match
    return clamp(total, 0.0, MAX_BONUS)
