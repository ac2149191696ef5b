"""Deterministic credit scoring engine."""

from services.scoring.base import DemandSource, RaritySource
from services.scoring.bonus import BonusWeights, calculate_bonus_factors
from services.scoring.condition import calculate_condition_score
from services.scoring.demand import KeywordDemandSource, calculate_demand_score
from services.scoring.engine import compute_credit_assessment, round_credits
from services.scoring.rarity import NullRaritySource, calculate_rarity_score

__all__ = [
    "BonusWeights",
    "DemandSource",
    "KeywordDemandSource",
    "NullRaritySource",
    "RaritySource",
    "calculate_bonus_factors",
    "calculate_condition_score",
    "calculate_demand_score",
    "calculate_rarity_score",
    "compute_credit_assessment",
    "round_credits",
]
