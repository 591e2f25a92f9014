"""Tests for the SQLAlchemy storage adapters."""

from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from database import Base
from models.orm import AppUserRow, LLMOutputRow, ProfileRow, WeightsRow
from models.schemas.caller import CallerIdentity
from models.schemas.narrative import NarrativeResult
from models.schemas.risk import FactorSet, ScoreResult, Tier
from models.schemas.weights import DEFAULT_WEIGHTS, WeightVector
from services.audit_builder import build_llm_call_record, build_profile_record
from services.exceptions import PersistenceError, UpstreamDependencyError
from services.repositories import SqlAdminDirectory, SqlProfileStore, SqlWeightStore


@asynccontextmanager
async def _session():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with maker() as session:
            yield session
    finally:
        await engine.dispose()


def _record(profile):
    factors = FactorSet(skills_risk=0, performance_risk=0, network_risk=10,
                        mobility_risk=10, notice_risk=10, plateau_risk=20)
    score = ScoreResult(score=6, tier=Tier.LOW, raw=5.8)
    narrative = NarrativeResult(narrative="n", recommendations=["a"], raw_text="n")
    return build_profile_record(profile, factors, score, narrative, "user-1"), narrative


@pytest.mark.integration
class TestSqlWeightStore:
    @pytest.mark.asyncio
    async def test_empty_table_returns_none(self):
        async with _session() as session:
            assert await SqlWeightStore(session).get_active_weights() is None

    @pytest.mark.asyncio
    async def test_most_recently_updated_is_active(self):
        async with _session() as session:
            now = datetime.now(timezone.utc)
            session.add(WeightsRow(weights={"skills": 1.0}, updated_at=now - timedelta(days=1)))
            session.add(WeightsRow(weights=DEFAULT_WEIGHTS.model_dump(), updated_at=now))
            await session.commit()

            assert await SqlWeightStore(session).get_active_weights() == DEFAULT_WEIGHTS.model_dump()

    @pytest.mark.asyncio
    async def test_save_makes_vector_active(self):
        async with _session() as session:
            store = SqlWeightStore(session)
            await store.save_weights(DEFAULT_WEIGHTS, updated_by="admin-1")
            newer = WeightVector(skills=0.5, performance=0.1, network=0.1,
                                 mobility=0.1, notice=0.1, plateau=0.1)
            await store.save_weights(newer, updated_by="admin-2")

            assert await store.get_active_weights() == newer.model_dump()
            rows = (await session.execute(select(WeightsRow))).scalars().all()
            assert {r.updated_by for r in rows} == {"admin-1", "admin-2"}

    @pytest.mark.asyncio
    async def test_query_failure_raises_upstream_error(self):
        session = MagicMock()
        session.execute = AsyncMock(side_effect=SQLAlchemyError("no such table"))
        with pytest.raises(UpstreamDependencyError):
            await SqlWeightStore(session).get_active_weights()


@pytest.mark.integration
class TestSqlProfileStore:
    @pytest.mark.asyncio
    async def test_insert_profile_and_llm_records(self, low_risk_profile):
        record, narrative = _record(low_risk_profile)
        async with _session() as session:
            store = SqlProfileStore(session)
            profile_id = await store.insert_profile_record(record)
            llm = build_llm_call_record(profile_id, "gemini", "gemini-2.5-flash", "prompt", narrative)
            await store.insert_llm_call_record(llm)

            row = await session.get(ProfileRow, profile_id)
            assert row.user_id == "user-1"
            assert row.full_name == "Ada Lovelace"
            assert row.linkedin_network_size == ">5,000"
            assert row.risk_score == 6
            assert row.risk_tier == "Low"
            assert row.risk_details["plateau_risk"] == 20
            assert row.llm_recommendations == ["a"]

            llm_row = await session.get(LLMOutputRow, llm.id)
            assert llm_row.profile_id == profile_id
            assert llm_row.response["narrative"] == "n"

    @pytest.mark.asyncio
    async def test_commit_failure_raises_persistence_error(self, low_risk_profile):
        record, _ = _record(low_risk_profile)
        session = MagicMock()
        session.commit = AsyncMock(side_effect=SQLAlchemyError("disk I/O error"))
        session.rollback = AsyncMock()

        with pytest.raises(PersistenceError):
            await SqlProfileStore(session).insert_profile_record(record)
        session.rollback.assert_awaited_once()


@pytest.mark.integration
class TestSqlAdminDirectory:
    @pytest.mark.asyncio
    async def test_allow_listed_email(self):
        async with _session() as session:
            admins = SqlAdminDirectory(session, ["boss@example.com"])
            assert await admins.is_admin(CallerIdentity(user_id="u1", email="boss@example.com"))

    @pytest.mark.asyncio
    async def test_app_users_flag(self):
        async with _session() as session:
            session.add(AppUserRow(id="u2", email="x@example.com", is_admin=True))
            session.add(AppUserRow(id="u3", email="y@example.com", is_admin=False))
            await session.commit()
            admins = SqlAdminDirectory(session, [])

            assert await admins.is_admin(CallerIdentity(user_id="u2"))
            assert not await admins.is_admin(CallerIdentity(user_id="u3"))
            assert not await admins.is_admin(CallerIdentity(user_id="unknown"))
