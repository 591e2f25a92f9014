import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import (
    get_admin_directory,
    get_current_user,
    get_optional_user,
    get_risk_engine,
    get_weight_store,
)
from config import settings
from models.requests import WeightsUpdateRequest
from models.responses import AdminStatusResponse, ScoreResponse, WeightsResponse
from models.schemas.caller import CallerIdentity
from models.schemas.profile import Profile
from services.exceptions import AuthorizationError, PersistenceError
from services.ports import WeightStore
from services.repositories import SqlAdminDirectory
from services.risk_engine import RiskEngine
from services.weight_resolver import WeightResolver

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


@router.post("/score", response_model=ScoreResponse)
@limiter.limit(settings.score_rate_limit)
async def score(
    request: Request,
    profile: Profile,
    caller: CallerIdentity = Depends(get_current_user),
    engine: RiskEngine = Depends(get_risk_engine),
):
    try:
        return await engine.score(profile, caller)
    except AuthorizationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e) or "Server error")


@router.get("/weights", response_model=WeightsResponse)
async def get_weights(store: WeightStore = Depends(get_weight_store)):
    return WeightsResponse(weights=await WeightResolver(store).resolve())


@router.post("/weights", response_model=WeightsResponse)
async def update_weights(
    body: WeightsUpdateRequest,
    caller: CallerIdentity = Depends(get_current_user),
    store: WeightStore = Depends(get_weight_store),
    admins: SqlAdminDirectory = Depends(get_admin_directory),
):
    if not await admins.is_admin(caller):
        raise HTTPException(status_code=403, detail="Admin only")
    try:
        saved = await store.save_weights(body.weights, updated_by=caller.user_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return WeightsResponse(weights=saved)


@router.get("/check-admin", response_model=AdminStatusResponse)
async def check_admin(
    caller: CallerIdentity | None = Depends(get_optional_user),
    admins: SqlAdminDirectory = Depends(get_admin_directory),
):
    if caller is None:
        return AdminStatusResponse(is_admin=False)
    return AdminStatusResponse(is_admin=await admins.is_admin(caller))
