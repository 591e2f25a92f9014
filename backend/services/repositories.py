"""SQLAlchemy implementations of the storage ports."""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.orm import AppUserRow, LLMOutputRow, ProfileRow, WeightsRow
from models.schemas.audit import AuditRecord, LLMCallRecord
from models.schemas.caller import CallerIdentity
from models.schemas.weights import WeightVector
from services.exceptions import PersistenceError, UpstreamDependencyError
from services.ports import ProfileStore, WeightStore

logger = logging.getLogger(__name__)


class SqlWeightStore(WeightStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_active_weights(self) -> dict | None:
        try:
            result = await self.session.execute(
                select(WeightsRow)
                .order_by(WeightsRow.updated_at.desc(), WeightsRow.id.desc())
                .limit(1)
            )
        except SQLAlchemyError as e:
            raise UpstreamDependencyError(f"Weight storage query failed: {e}") from e
        row = result.scalar_one_or_none()
        return row.weights if row is not None else None

    async def save_weights(self, weights: WeightVector, updated_by: str) -> WeightVector:
        row = WeightsRow(
            weights=weights.model_dump(),
            updated_by=updated_by,
            updated_at=datetime.now(timezone.utc),
        )
        self.session.add(row)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to save weights: {e}") from e
        logger.info("Weights updated by %s", updated_by)
        return weights


class SqlProfileStore(ProfileStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _commit(self, row, what: str) -> None:
        self.session.add(row)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to insert {what}: {e}") from e

    async def insert_profile_record(self, record: AuditRecord) -> str:
        p = record.profile
        row = ProfileRow(
            id=record.id,
            user_id=record.user_id,
            full_name=p.full_name,
            email=p.email,
            date_of_birth=p.date_of_birth,
            gender=p.gender,
            employment_status=p.employment_status,
            total_experience=p.total_experience,
            skill_proficiency_avg=p.skill_proficiency_avg,
            training_hours_12mo=p.training_hours_12mo,
            performance_rating=p.performance_rating,
            linkedin_network_size=p.linkedin_network_size,
            willing_to_relocate=p.willing_to_relocate,
            preferred_work_model=p.preferred_work_model,
            notice_period_days=p.notice_period_days,
            risk_score=record.score.score,
            risk_tier=record.score.tier.value,
            risk_details=record.factors.model_dump(),
            llm_explain=record.narrative,
            llm_recommendations=list(record.recommendations),
            created_at=record.created_at,
        )
        await self._commit(row, "profile record")
        return record.id

    async def insert_llm_call_record(self, record: LLMCallRecord) -> str:
        row = LLMOutputRow(
            id=record.id,
            profile_id=record.profile_id,
            provider=record.provider,
            model=record.model,
            prompt=record.prompt,
            response=record.response,
            created_at=record.created_at,
        )
        await self._commit(row, "LLM output")
        return record.id


class SqlAdminDirectory:
    """Admin lookup for the weight editor: allow-listed e-mail or app_users flag."""

    def __init__(self, session: AsyncSession, admin_emails: list[str]) -> None:
        self.session = session
        self.admin_emails = admin_emails

    async def is_admin(self, caller: CallerIdentity) -> bool:
        if caller.email and caller.email in self.admin_emails:
            return True
        try:
            user = await self.session.get(AppUserRow, caller.user_id)
        except SQLAlchemyError as e:
            logger.warning("Admin lookup failed for %s: %s", caller.user_id, e)
            return False
        return bool(user is not None and user.is_admin)
