"""Shared dependencies for API routes."""

from fastapi import Depends, Header, HTTPException, status
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from models.schemas.caller import CallerIdentity
from services.gemini_client import GeminiNarrativeGenerator
from services.ports import NarrativeGenerator, ProfileStore, WeightStore
from services.repositories import SqlAdminDirectory, SqlProfileStore, SqlWeightStore
from services.risk_engine import RiskEngine


def decode_token(token: str) -> CallerIdentity | None:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    user_id = payload.get("sub")
    if not user_id:
        return None
    return CallerIdentity(user_id=str(user_id), email=payload.get("email"))


def _bearer_token(authorization: str | None) -> str:
    return (authorization or "").replace("Bearer ", "", 1).strip()


async def get_current_user(authorization: str | None = Header(default=None)) -> CallerIdentity:
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
    caller = decode_token(token)
    if caller is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return caller


async def get_optional_user(authorization: str | None = Header(default=None)) -> CallerIdentity | None:
    token = _bearer_token(authorization)
    return decode_token(token) if token else None


def get_weight_store(session: AsyncSession = Depends(get_db)) -> WeightStore:
    return SqlWeightStore(session)


def get_profile_store(session: AsyncSession = Depends(get_db)) -> ProfileStore:
    return SqlProfileStore(session)


def get_admin_directory(session: AsyncSession = Depends(get_db)) -> SqlAdminDirectory:
    return SqlAdminDirectory(session, settings.admin_email_list)


def get_narrative_generator() -> NarrativeGenerator:
    return GeminiNarrativeGenerator()


def get_risk_engine(
    weight_store: WeightStore = Depends(get_weight_store),
    profile_store: ProfileStore = Depends(get_profile_store),
    generator: NarrativeGenerator = Depends(get_narrative_generator),
) -> RiskEngine:
    return RiskEngine(weight_store=weight_store, profile_store=profile_store, generator=generator)
