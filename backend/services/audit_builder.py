"""Assemble the persisted audit artifacts for one scoring request."""

import uuid
from datetime import datetime, timezone

from models.schemas.audit import AuditRecord, LLMCallRecord
from models.schemas.narrative import NarrativeResult
from models.schemas.profile import Profile
from models.schemas.risk import FactorSet, ScoreResult


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_profile_record(
    profile: Profile,
    factors: FactorSet,
    score: ScoreResult,
    narrative: NarrativeResult,
    user_id: str,
) -> AuditRecord:
    return AuditRecord(
        id=str(uuid.uuid4()),
        user_id=user_id,
        profile=profile,
        factors=factors,
        score=score,
        narrative=narrative.narrative,
        recommendations=list(narrative.recommendations),
        created_at=_now(),
    )


def build_llm_call_record(
    profile_id: str,
    provider: str,
    model: str,
    prompt: str,
    narrative: NarrativeResult,
) -> LLMCallRecord | None:
    """LLM audit entry, or None when the call produced nothing worth keeping."""
    if narrative.is_empty:
        return None
    return LLMCallRecord(
        id=str(uuid.uuid4()),
        profile_id=profile_id,
        provider=provider,
        model=model,
        prompt=prompt,
        response={
            "narrative": narrative.narrative,
            "recommendations": list(narrative.recommendations),
            "raw_text": narrative.raw_text,
        },
        created_at=_now(),
    )
