"""Rates router: current USD->INR rate and manual override endpoints.

Endpoints (all require a bearer token):
    - GET /api/rates/usd-inr        -> rate the next create/update would use
    - GET /api/rates/override       -> active override, if any
    - POST /api/rates/override      -> set override {rate, ttl_seconds}
    - DELETE /api/rates/override    -> clear override

Override endpoints are guarded by settings.enable_rate_override. Overrides
live in process memory only; a restart clears them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from hedge_tracker.core.config import Settings
from hedge_tracker.core.security import get_current_user
from hedge_tracker.models.rates import (
    OverrideSetPayload,
    OverrideStatus,
    RateOut,
)
from hedge_tracker.services.rates.cache_service import RateCacheService

router = APIRouter(prefix="/api/rates", tags=["rates"])


def get_rate_service(request: Request) -> RateCacheService:
    return request.app.state.rate_service


def require_override_enabled(request: Request):
    settings: Settings = request.app.state.settings
    if not settings.enable_rate_override:
        raise HTTPException(status_code=403, detail="rate override feature disabled")
    return True


@router.get("/usd-inr", response_model=RateOut, summary="Current USD->INR rate")
def current_rate(
    _: str = Depends(get_current_user),
    svc: RateCacheService = Depends(get_rate_service),
):
    quote = svc.quote()
    return RateOut(rate=quote.rate, source=quote.source)


@router.get("/override", response_model=OverrideStatus, summary="Show the active override")
def get_override(
    _: str = Depends(get_current_user),
    __: bool = Depends(require_override_enabled),
    svc: RateCacheService = Depends(get_rate_service),
):
    return OverrideStatus(override=svc.get_override())


@router.post("/override", response_model=OverrideStatus, summary="Set a manual rate override")
def set_override(
    payload: OverrideSetPayload,
    _: str = Depends(get_current_user),
    __: bool = Depends(require_override_enabled),
    svc: RateCacheService = Depends(get_rate_service),
):
    try:
        svc.set_override(payload.rate, payload.ttl_seconds)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return OverrideStatus(override=svc.get_override())


@router.delete("/override", summary="Clear the manual rate override")
def clear_override(
    _: str = Depends(get_current_user),
    __: bool = Depends(require_override_enabled),
    svc: RateCacheService = Depends(get_rate_service),
):
    if not svc.clear_override():
        raise HTTPException(status_code=404, detail="override not found")
    return {"status": "deleted"}
