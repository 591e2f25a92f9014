"""Pydantic contracts passed between the scoring engine components."""

from models.schemas.profile import Profile
from models.schemas.weights import DEFAULT_WEIGHTS, WeightVector
from models.schemas.risk import FactorSet, ScoreResult, Tier
from models.schemas.narrative import NarrativeResult
from models.schemas.audit import AuditRecord, LLMCallRecord

__all__ = [
    "Profile",
    "WeightVector",
    "DEFAULT_WEIGHTS",
    "FactorSet",
    "ScoreResult",
    "Tier",
    "NarrativeResult",
    "AuditRecord",
    "LLMCallRecord",
]
