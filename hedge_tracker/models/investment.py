from __future__ import annotations

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import CURRENCIES

_UPPER_PARTS = {"usd", "inr"}


def to_api_name(field: str) -> str:
    """snake_case attribute -> camelCase wire name (six_team1 -> sixTeam1, *_usd -> *USD)."""
    head, *rest = field.split("_")
    return head + "".join(p.upper() if p in _UPPER_PARTS else p.capitalize() for p in rest)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_api_name, populate_by_name=True)


def _clean_label(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field} cannot be empty")
    return value.strip()


def _valid_currency(value: str) -> str:
    value = value.upper().strip()
    if value not in CURRENCIES:
        raise ValueError("unsupported currency")
    return value


class InvestmentIn(ApiModel):
    betting_id: str
    team1: str
    team2: str
    date: dt.date
    odds1: float = Field(..., gt=0, allow_inf_nan=False)
    odds2: float = Field(..., gt=0, allow_inf_nan=False)
    six_team1: bool = False
    six_team2: bool = False
    winner: Literal["team1", "team2", "none"]
    cash_out_team: Literal["team1", "team2", ""] = ""
    custom_cash_out: float = Field(0, ge=0, allow_inf_nan=False)
    # Absent or non-positive means the default 25 USD stake base.
    custom_base_amount: Optional[float] = Field(None, allow_inf_nan=False)
    currency: str

    @field_validator("betting_id", "team1", "team2")
    @classmethod
    def _labels_not_blank(cls, v: str, info) -> str:
        return _clean_label(v, info.field_name)

    @field_validator("currency")
    @classmethod
    def _currency(cls, v: str) -> str:
        return _valid_currency(v)


class InvestmentUpdateIn(ApiModel):
    """Partial update. Omitted fields keep their stored value; the merged
    record is revalidated as an InvestmentIn before metrics are recomputed."""

    betting_id: Optional[str] = None
    team1: Optional[str] = None
    team2: Optional[str] = None
    date: Optional[dt.date] = None
    odds1: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    odds2: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    six_team1: Optional[bool] = None
    six_team2: Optional[bool] = None
    winner: Optional[Literal["team1", "team2", "none"]] = None
    cash_out_team: Optional[Literal["team1", "team2", ""]] = None
    custom_cash_out: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    custom_base_amount: Optional[float] = Field(None, allow_inf_nan=False)
    currency: Optional[str] = None

    @field_validator("betting_id", "team1", "team2")
    @classmethod
    def _labels_not_blank(cls, v: Optional[str], info) -> Optional[str]:
        return _clean_label(v, info.field_name) if v is not None else None

    @field_validator("currency")
    @classmethod
    def _currency(cls, v: Optional[str]) -> Optional[str]:
        return _valid_currency(v) if v is not None else None

    @model_validator(mode="after")
    def _at_least_one(self) -> "InvestmentUpdateIn":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided for update")
        return self


class InvestmentOut(InvestmentIn):
    id: int
    exchange_rate: float
    investment_team1_usd: float
    investment_team2_usd: float
    investment_team1_inr: float
    investment_team2_inr: float
    total_invested_usd: float
    total_invested_inr: float
    total_winnings_usd: float
    total_winnings_inr: float
    profit_loss_usd: float
    profit_loss_inr: float
    created_at: dt.datetime
    updated_at: dt.datetime


class InvestmentSummary(ApiModel):
    count: int
    profitable: int
    losing: int
    total_invested_usd: float
    total_invested_inr: float
    total_winnings_usd: float
    total_winnings_inr: float
    profit_loss_usd: float
    profit_loss_inr: float


class MessageOut(BaseModel):
    message: str
