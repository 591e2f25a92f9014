"""Combine factors and weights into a bounded score and tier."""

import math

from models.schemas.risk import FactorSet, ScoreResult, Tier
from models.schemas.weights import WeightVector

# (factor field, weight field)
FACTOR_WEIGHT_PAIRS = [
    ("skills_risk", "skills"),
    ("performance_risk", "performance"),
    ("network_risk", "network"),
    ("mobility_risk", "mobility"),
    ("notice_risk", "notice"),
    ("plateau_risk", "plateau"),
]

# (inclusive upper bound, tier), checked top to bottom
TIER_RULES: list[tuple[int, Tier]] = [
    (30, Tier.LOW),
    (60, Tier.MEDIUM),
]


def weighted_sum(factors: FactorSet, weights: WeightVector) -> float:
    """Exact dot product of the six factor/weight pairs."""
    return sum(
        getattr(factors, factor) * getattr(weights, weight)
        for factor, weight in FACTOR_WEIGHT_PAIRS
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def assign_tier(score: int) -> Tier:
    for upper, tier in TIER_RULES:
        if score <= upper:
            return tier
    return Tier.HIGH


def aggregate(factors: FactorSet, weights: WeightVector) -> ScoreResult:
    raw = weighted_sum(factors, weights)
    score = clamp_score(round_half_up(raw))
    return ScoreResult(score=score, tier=assign_tier(score), raw=raw)
