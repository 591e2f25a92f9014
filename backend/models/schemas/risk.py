"""Computed factor and score contracts."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FactorSet(BaseModel):
    """Six independent 0-100 risk sub-scores derived from a Profile."""
    model_config = ConfigDict(frozen=True)

    skills_risk: float = 0.0
    performance_risk: float = 0.0
    network_risk: float = 0.0
    mobility_risk: float = 0.0
    notice_risk: float = 0.0
    plateau_risk: float = 0.0


class Tier(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = 0  # 0-100, rounded and clamped
    tier: Tier = Tier.LOW
    raw: float = 0.0  # unrounded weighted sum, for transparency
