import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from hedge_tracker.core.config import Settings
from hedge_tracker.core.security import get_current_user
from hedge_tracker.db.dal import Database
from hedge_tracker.models.investment import (
    InvestmentIn,
    InvestmentOut,
    InvestmentSummary,
    InvestmentUpdateIn,
    MessageOut,
)
from hedge_tracker.services.investments import (
    build_record,
    merge_update,
    row_to_out,
    summarize,
)
from hedge_tracker.services.rates.cache_service import RateCacheService

router = APIRouter(prefix="/api/investments", tags=["investments"])
logger = logging.getLogger("hedge_tracker.investments")

# Dependencies -----------------------------------------------------


def get_db(request: Request) -> Database:
    settings: Settings = request.app.state.settings
    return Database(settings.db_path)


def get_rate_service(request: Request) -> RateCacheService:
    return request.app.state.rate_service


# Routes -----------------------------------------------------------
@router.get("", response_model=List[InvestmentOut], summary="List the caller's investments")
@router.get("/", response_model=List[InvestmentOut], include_in_schema=False)
def list_investments(
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    return [row_to_out(r) for r in db.list_investments(user_id)]


@router.get(
    "/summary", response_model=InvestmentSummary, summary="Totals across the caller's investments"
)
def investment_summary(
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    return summarize(db.investment_totals(user_id))


@router.get("/{investment_id}", response_model=InvestmentOut, summary="Fetch one investment")
def get_investment(
    investment_id: int,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    row = db.get_investment(investment_id, user_id)
    if not row:
        raise HTTPException(status_code=404, detail="Investment not found")
    return row_to_out(row)


@router.post(
    "", response_model=InvestmentOut, status_code=201, summary="Create an investment"
)
@router.post("/", response_model=InvestmentOut, status_code=201, include_in_schema=False)
def create_investment(
    payload: InvestmentIn,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
    rates: RateCacheService = Depends(get_rate_service),
):
    # 1. Resolve rate (never fails; falls back to configured rate)
    exchange_rate = rates.get_rate()

    # 2. Compute metrics & persist merged record
    record = build_record(payload, exchange_rate)
    investment_id = db.insert_investment(user_id, record)
    logger.info(
        "investment created",
        extra={"investment_id": investment_id, "user_id": user_id},
    )

    # 3. Fetch row to build response
    row = db.get_investment(investment_id, user_id)
    if not row:
        raise HTTPException(status_code=500, detail="investment not found after insert")
    return row_to_out(row)


@router.put(
    "/{investment_id}",
    response_model=InvestmentOut,
    summary="Edit an investment (partial) and recompute its metrics",
)
def update_investment(
    investment_id: int,
    payload: InvestmentUpdateIn,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
    rates: RateCacheService = Depends(get_rate_service),
):
    # 1. Fetch existing record (owner scoped)
    row = db.get_investment(investment_id, user_id)
    if not row:
        raise HTTPException(status_code=404, detail="Investment not found")

    # 2. Merge & revalidate as a full input
    try:
        merged = merge_update(row, payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e

    # 3. Recompute with a freshly resolved rate and persist
    record = build_record(merged, rates.get_rate())
    try:
        db.update_investment(investment_id, user_id, record)
    except ValueError:
        raise HTTPException(status_code=404, detail="Investment not found")
    logger.info(
        "investment updated",
        extra={"investment_id": investment_id, "user_id": user_id},
    )

    updated = db.get_investment(investment_id, user_id)
    if not updated:
        raise HTTPException(status_code=404, detail="Investment not found")
    return row_to_out(updated)


@router.delete(
    "/{investment_id}", response_model=MessageOut, summary="Delete an investment"
)
def delete_investment(
    investment_id: int,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    try:
        db.delete_investment(investment_id, user_id)
    except ValueError:
        logger.info(
            "investment not found for delete",
            extra={"investment_id": investment_id, "user_id": user_id},
        )
        raise HTTPException(status_code=404, detail="Investment not found")
    logger.info(
        "investment deleted",
        extra={"investment_id": investment_id, "user_id": user_id},
    )
    return MessageOut(message="Investment deleted")
