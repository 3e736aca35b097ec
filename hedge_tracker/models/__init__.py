"""Pydantic request/response models for the hedge tracker API."""

from .constants import (
    CURRENCIES,
    WINNERS,
    CASH_OUT_TEAMS,
)  # re-export
from .investment import (
    InvestmentIn,
    InvestmentOut,
    InvestmentUpdateIn,
    InvestmentSummary,
    MessageOut,
)
from .auth import LoginIn, RegisterIn, TokenOut
from .rates import RateOut, OverrideSetPayload, OverrideOut, OverrideStatus

__all__ = [
    "CURRENCIES",
    "WINNERS",
    "CASH_OUT_TEAMS",
    "InvestmentIn",
    "InvestmentOut",
    "InvestmentUpdateIn",
    "InvestmentSummary",
    "MessageOut",
    "LoginIn",
    "RegisterIn",
    "TokenOut",
    "RateOut",
    "OverrideSetPayload",
    "OverrideOut",
    "OverrideStatus",
]
