"""Tests for score aggregation and tiering."""

import pytest

from models.schemas.risk import FactorSet, Tier
from models.schemas.weights import DEFAULT_WEIGHTS, WeightVector
from services.score_aggregator import aggregate, assign_tier, round_half_up, weighted_sum

FACTORS = FactorSet(
    skills_risk=40,
    performance_risk=20,
    network_risk=50,
    mobility_risk=40,
    notice_risk=70,
    plateau_risk=20,
)


class TestWeightedSum:
    def test_equals_dot_product(self):
        expected = 40 * 0.28 + 20 * 0.22 + 50 * 0.18 + 40 * 0.12 + 70 * 0.12 + 20 * 0.08
        assert weighted_sum(FACTORS, DEFAULT_WEIGHTS) == pytest.approx(expected)
        assert aggregate(FACTORS, DEFAULT_WEIGHTS).raw == pytest.approx(expected)

    def test_unnormalised_weights_are_not_rescaled(self):
        doubled = WeightVector(
            skills=0.56, performance=0.44, network=0.36,
            mobility=0.24, notice=0.24, plateau=0.16,
        )
        assert weighted_sum(FACTORS, doubled) == pytest.approx(2 * weighted_sum(FACTORS, DEFAULT_WEIGHTS))


class TestAggregate:
    def test_score_clamped_high(self):
        heavy = WeightVector(skills=5, performance=5, network=5, mobility=5, notice=5, plateau=5)
        result = aggregate(FACTORS, heavy)
        assert result.score == 100
        assert result.tier == Tier.HIGH

    def test_zero_weights(self):
        zero = WeightVector(skills=0, performance=0, network=0, mobility=0, notice=0, plateau=0)
        result = aggregate(FACTORS, zero)
        assert result.score == 0
        assert result.tier == Tier.LOW

    def test_rounds_to_nearest(self):
        result = aggregate(FACTORS, DEFAULT_WEIGHTS)
        # 11.2 + 4.4 + 9 + 4.8 + 8.4 + 1.6 = 39.4
        assert result.score == 39
        assert result.tier == Tier.MEDIUM


class TestTier:
    @pytest.mark.parametrize(
        "score,tier",
        [
            (0, Tier.LOW),
            (30, Tier.LOW),
            (31, Tier.MEDIUM),
            (60, Tier.MEDIUM),
            (61, Tier.HIGH),
            (100, Tier.HIGH),
        ],
    )
    def test_boundaries(self, score, tier):
        assert assign_tier(score) == tier


def test_round_half_up():
    assert round_half_up(30.5) == 31
    assert round_half_up(60.49) == 60
    assert round_half_up(0.5) == 1
