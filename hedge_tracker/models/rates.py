from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RateOut(BaseModel):
    base_currency: str = "USD"
    quote_currency: str = "INR"
    rate: float
    source: str


class OverrideSetPayload(BaseModel):
    rate: float = Field(..., gt=0, description="INR per 1 USD")
    ttl_seconds: int = Field(
        900,
        gt=0,
        le=86400,
        description="Override TTL seconds (default 900 = 15m, max 24h)",
    )


class OverrideOut(BaseModel):
    rate: float
    expires_at: datetime


class OverrideStatus(BaseModel):
    override: Optional[OverrideOut] = None
