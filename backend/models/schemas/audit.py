"""Immutable audit artifacts written once per scoring request."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from models.schemas.profile import Profile
from models.schemas.risk import FactorSet, ScoreResult


class AuditRecord(BaseModel):
    """Profile record: inputs, computed factors, score and LLM output."""
    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    profile: Profile
    factors: FactorSet
    score: ScoreResult
    narrative: str | None = None
    recommendations: list[str] = []
    created_at: datetime


class LLMCallRecord(BaseModel):
    """One narrative-generation call, linked to its profile record."""
    model_config = ConfigDict(frozen=True)

    id: str
    profile_id: str
    provider: str
    model: str
    prompt: str
    response: dict
    created_at: datetime
