"""Cash register endpoints."""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.api.deps import get_operator
from courtdesk.core.database import get_db
from courtdesk.core.exceptions import CashboxStateError
from courtdesk.schemas.cashbox import CashboxDay, CashSessionInDB, ShiftAmount
from courtdesk.services.cashbox_service import cashbox_service

router = APIRouter(prefix="/cashbox", tags=["cashbox"])


@router.get("", response_model=CashboxDay)
async def get_cashbox_day(
    target_date: Optional[date] = Query(None, alias="date", description="UTC day, today by default"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the cashbox view of a day.

    Args:
        target_date: Day to show
        db: Database session

    Returns:
        Income per payment method, ledger revenue, operation count and the
        day's entries
    """
    return await cashbox_service.day_view(db, target_date)


@router.get("/session", response_model=Optional[CashSessionInDB])
async def get_current_session(db: AsyncSession = Depends(get_db)):
    return await cashbox_service.current_session(db)


@router.post("/open", response_model=CashSessionInDB, status_code=201)
async def open_shift(
    shift: ShiftAmount,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Open the register with the counted starting cash."""
    try:
        return await cashbox_service.open_shift(db, shift.amount, operator)
    except CashboxStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/close", response_model=CashSessionInDB)
async def close_shift(
    shift: ShiftAmount,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Close the register with the counted final cash."""
    try:
        return await cashbox_service.close_shift(db, shift.amount, operator)
    except CashboxStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
