"""Investment record assembly.

Bridges the API models and the storage row:
  - `to_calculator_input` maps a validated InvestmentIn onto the calculator's
    InvestmentInput.
  - `build_record` computes fresh metrics and returns the merged column dict
    the DAL persists (input fields + rate + metrics).
  - `row_to_out` / `row_to_input` convert stored rows back for responses and
    for merging partial updates.
  - `summarize` rounds the owner-level totals.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Mapping

from hedge_tracker.models.investment import (
    InvestmentIn,
    InvestmentOut,
    InvestmentSummary,
    InvestmentUpdateIn,
)
from hedge_tracker.services.metrics import InvestmentInput, compute, resolve_rule
from hedge_tracker.services.money import round2

logger = logging.getLogger("hedge_tracker.investments")


def to_calculator_input(payload: InvestmentIn) -> InvestmentInput:
    return InvestmentInput(
        odds1=payload.odds1,
        odds2=payload.odds2,
        winner=payload.winner,
        six_team1=payload.six_team1,
        six_team2=payload.six_team2,
        cash_out_team=payload.cash_out_team,
        custom_cash_out=payload.custom_cash_out,
        custom_base_amount=payload.custom_base_amount,
        currency=payload.currency,
    )


def build_record(payload: InvestmentIn, exchange_rate: float) -> Dict[str, Any]:
    inv = to_calculator_input(payload)
    metrics = compute(inv, exchange_rate)
    logger.debug(
        "computed metrics",
        extra={"rule": resolve_rule(inv).name, "exchange_rate": exchange_rate},
    )
    return {
        "betting_id": payload.betting_id,
        "team1": payload.team1,
        "team2": payload.team2,
        "date": payload.date.isoformat(),
        "odds1": payload.odds1,
        "odds2": payload.odds2,
        "six_team1": int(payload.six_team1),
        "six_team2": int(payload.six_team2),
        "winner": payload.winner,
        "cash_out_team": payload.cash_out_team,
        "custom_cash_out": payload.custom_cash_out,
        "custom_base_amount": payload.custom_base_amount,
        "currency": payload.currency,
        "exchange_rate": exchange_rate,
        **metrics.as_dict(),
    }


def _parse_ts(value: str) -> dt.datetime:
    return dt.datetime.fromisoformat(value.replace("Z", ""))


def row_to_input(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Stored row -> InvestmentIn field dict (python names)."""
    return {
        "betting_id": row["betting_id"],
        "team1": row["team1"],
        "team2": row["team2"],
        "date": dt.date.fromisoformat(row["date"]),
        "odds1": row["odds1"],
        "odds2": row["odds2"],
        "six_team1": bool(row["six_team1"]),
        "six_team2": bool(row["six_team2"]),
        "winner": row["winner"],
        "cash_out_team": row["cash_out_team"] or "",
        "custom_cash_out": row["custom_cash_out"] or 0,
        "custom_base_amount": row["custom_base_amount"],
        "currency": row["currency"],
    }


def row_to_out(row: Mapping[str, Any]) -> InvestmentOut:
    return InvestmentOut(
        id=row["id"],
        exchange_rate=row["exchange_rate"],
        investment_team1_usd=row["investment_team1_usd"],
        investment_team2_usd=row["investment_team2_usd"],
        investment_team1_inr=row["investment_team1_inr"],
        investment_team2_inr=row["investment_team2_inr"],
        total_invested_usd=row["total_invested_usd"],
        total_invested_inr=row["total_invested_inr"],
        total_winnings_usd=row["total_winnings_usd"],
        total_winnings_inr=row["total_winnings_inr"],
        profit_loss_usd=row["profit_loss_usd"],
        profit_loss_inr=row["profit_loss_inr"],
        created_at=_parse_ts(row["created_at"]),
        updated_at=_parse_ts(row["updated_at"]),
        **row_to_input(row),
    )


def merge_update(row: Mapping[str, Any], changes: InvestmentUpdateIn) -> InvestmentIn:
    """Apply a partial update on top of a stored row and revalidate.

    Raises pydantic.ValidationError when the merged record is invalid (for
    example an explicit null for a required field).
    """
    merged = row_to_input(row)
    merged.update(changes.model_dump(exclude_unset=True))
    return InvestmentIn.model_validate(merged)


def summarize(totals: Mapping[str, Any]) -> InvestmentSummary:
    return InvestmentSummary(
        count=int(totals["count"]),
        profitable=int(totals["profitable"]),
        losing=int(totals["losing"]),
        total_invested_usd=round2(totals["total_invested_usd"]),
        total_invested_inr=round2(totals["total_invested_inr"]),
        total_winnings_usd=round2(totals["total_winnings_usd"]),
        total_winnings_inr=round2(totals["total_winnings_inr"]),
        profit_loss_usd=round2(totals["profit_loss_usd"]),
        profit_loss_inr=round2(totals["profit_loss_inr"]),
    )
